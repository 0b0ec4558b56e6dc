"""Tests for snapshot and knowledge-resource loading."""

import json

import pytest

from skills_gap_scorer.loader import (
    SnapshotLoadError,
    load_knowledge_resource,
    load_snapshot,
    load_snapshot_file,
)

from conftest import FIXTURES_DIR


class TestLoadSnapshot:
    """Tests for load_snapshot."""

    def test_loads_fixture_files(self):
        snapshot = load_snapshot(
            FIXTURES_DIR / "departments.json",
            FIXTURES_DIR / "skills.json",
            FIXTURES_DIR / "edges.json",
        )
        assert [d.id for d in snapshot.departments] == ["it", "fin"]
        assert len(snapshot.skills) == 3
        assert snapshot.edges[0].relationship == "shared_gap"

    def test_impact_factors_read_defensively(self):
        snapshot = load_snapshot(FIXTURES_DIR / "departments.json", FIXTURES_DIR / "skills.json")
        it = snapshot.get_department("it")
        assert it.opt_ai_compute == 0.8
        assert it.opt_hvac == 0.0
        assert it.opt_water_use == 0.0
        assert snapshot.skills[2].opt_supply_chain_emissions == 0.0

    def test_stored_gap_replaced_by_derived(self):
        snapshot = load_snapshot(FIXTURES_DIR / "departments.json", FIXTURES_DIR / "skills.json")
        assert snapshot.skills[0].gap == 3
        assert snapshot.skills[2].gap == 0
        assert snapshot.skills[2].severity.value == "No Gap"

    def test_wrapped_lists_accepted(self, tmp_path):
        departments = tmp_path / "departments.json"
        departments.write_text(json.dumps({"departments": [{"id": "it", "label": "IT"}]}))
        skills = tmp_path / "skills.yaml"
        skills.write_text(
            "skills:\n"
            "  - id: 1\n"
            "    department: it\n"
            "    green_skill: Green Coding\n"
            "    current_level: 2\n"
            "    required_level: 3\n"
        )
        snapshot = load_snapshot(departments, skills)
        assert snapshot.skills[0].gap == 1

    def test_missing_file(self, tmp_path):
        with pytest.raises(SnapshotLoadError, match="File not found"):
            load_snapshot(tmp_path / "nope.json", FIXTURES_DIR / "skills.json")

    def test_invalid_json(self, tmp_path):
        bad = tmp_path / "departments.json"
        bad.write_text("{not json")
        with pytest.raises(SnapshotLoadError, match="Could not parse"):
            load_snapshot(bad, FIXTURES_DIR / "skills.json")

    def test_invalid_level(self, tmp_path):
        skills = tmp_path / "skills.json"
        skills.write_text(json.dumps([
            {"id": 1, "department": "it", "green_skill": "x", "current_level": 0, "required_level": 3},
        ]))
        with pytest.raises(SnapshotLoadError, match="Invalid skills"):
            load_snapshot(FIXTURES_DIR / "departments.json", skills)

    def test_not_a_list(self, tmp_path):
        skills = tmp_path / "skills.json"
        skills.write_text(json.dumps({"skills": "nope"}))
        with pytest.raises(SnapshotLoadError, match="Expected a list"):
            load_snapshot(FIXTURES_DIR / "departments.json", skills)

    def test_single_file_snapshot(self):
        snapshot = load_snapshot_file(FIXTURES_DIR / "snapshot.json")
        assert snapshot.departments[0].display_label == "Ops & Logistics"
        assert snapshot.skills[0].severity.value == "Critical"

    def test_single_file_snapshot_requires_object(self, tmp_path):
        path = tmp_path / "snapshot.json"
        path.write_text("[]")
        with pytest.raises(SnapshotLoadError):
            load_snapshot_file(path)


class TestLoadKnowledgeResource:
    """Tests for load_knowledge_resource."""

    def test_loads_yaml(self):
        resource = load_knowledge_resource(FIXTURES_DIR / "knowledge.yaml")
        assert list(resource.overview) == ["IT Security", "Finance Department"]
        assert resource.scorecard["finance"].gap == 0.35
        assert resource.maturity_map["it_security"][0].attitude == "Open to change"
        assert resource.actions["it_security"][0].green_skill == "Carbon Accounting"

    def test_partial_resource(self, tmp_path):
        path = tmp_path / "knowledge.json"
        path.write_text(json.dumps({"scorecard": {"Legal": {"gap": 0.2}}}))
        resource = load_knowledge_resource(path)
        assert resource.overview == {}
        assert resource.scorecard["Legal"].priority_level == "Unknown"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "knowledge.yaml"
        path.write_text("")
        assert load_knowledge_resource(path).actions == {}

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "knowledge.json"
        path.write_text("[1, 2]")
        with pytest.raises(SnapshotLoadError):
            load_knowledge_resource(path)
