"""Tests for scorer configuration."""

import yaml

from skills_gap_scorer.config import (
    GapAnalysisConfig,
    find_config_file,
    get_config,
    load_config,
    reset_config,
    save_default_config,
)


class TestConfig:
    """Tests for config loading and defaults."""

    def test_defaults(self):
        cfg = get_config()
        assert cfg.risk_weights.gap == 0.40
        assert cfg.risk_weights.impact == 0.35
        assert cfg.risk_weights.priority == 0.25
        assert cfg.priority_weights.other == 0.25
        assert cfg.classification.quick_win_min_impact == 0.3
        assert cfg.classification.compliance_keywords == ["risk", "compliance", "regulation", "climate"]

    def test_default_risk_weights_sum_to_one(self):
        w = GapAnalysisConfig().risk_weights
        assert abs(w.gap + w.impact + w.priority - 1.0) < 1e-9

    def test_save_and_load_roundtrip(self, tmp_path):
        path = tmp_path / "nested" / "gap-config.yaml"
        save_default_config(path)

        text = path.read_text(encoding="utf-8")
        assert text.startswith("# Skills-Gap Scorer Configuration")
        assert yaml.safe_load(text)["risk_weights"]["gap"] == 0.4

        assert load_config(path) == GapAnalysisConfig()

    def test_partial_override(self, tmp_path):
        path = tmp_path / "gap-config.yaml"
        path.write_text("risk_weights:\n  gap: 0.5\n  impact: 0.25\n")

        cfg = load_config(path)
        assert cfg.risk_weights.gap == 0.5
        assert cfg.risk_weights.priority == 0.25
        assert get_config() is cfg

        reset_config()
        assert get_config().risk_weights.gap == 0.40

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "gap-config.yaml"
        path.write_text("")
        assert load_config(path) == GapAnalysisConfig()

    def test_find_config_from_env(self, tmp_path, monkeypatch):
        path = tmp_path / "custom.yaml"
        path.write_text("{}")
        monkeypatch.setenv("SKILLS_GAP_SCORER_CONFIG", str(path))
        assert find_config_file() == path

    def test_find_config_in_cwd(self, tmp_path, monkeypatch):
        monkeypatch.delenv("SKILLS_GAP_SCORER_CONFIG", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path / "home"))
        monkeypatch.chdir(tmp_path)
        assert find_config_file() is None

        (tmp_path / "gap-config.yml").write_text("{}")
        assert find_config_file().name == "gap-config.yml"
