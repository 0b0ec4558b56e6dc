"""Centralized configuration management for the skills-gap scorer."""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field


class RiskWeightsConfig(BaseModel):
    """Weights of the three risk terms.

    These weights control how much each signal contributes to the final
    risk score. They should sum to 1.0 to keep scores in [0, 1].
    """
    gap: float = Field(0.40, description="Weight for gap severity")
    impact: float = Field(0.35, description="Weight for mean sustainability impact")
    priority: float = Field(0.25, description="Weight for organisational priority")


class GapWeightsConfig(BaseModel):
    """Gap weight per severity bucket (Critical: gap >= 2, Moderate: gap == 1)."""
    critical: float = Field(1.0, description="Gap weight for critical gaps")
    moderate: float = Field(0.5, description="Gap weight for a gap of exactly one level")
    none: float = Field(0.0, description="Gap weight when there is no gap")


class PriorityWeightsConfig(BaseModel):
    """Priority weight per priority level.

    Priority strings are matched case-insensitively; anything outside
    critical/high/medium falls into ``other``.
    """
    critical: float = Field(1.0, description="Weight for Critical priority")
    high: float = Field(0.75, description="Weight for High priority")
    medium: float = Field(0.5, description="Weight for Medium priority")
    other: float = Field(0.25, description="Weight for any other priority")


class ClassificationConfig(BaseModel):
    """Thresholds for quick-win, compliance-risk and top-priority lists."""
    quick_win_gap: int = Field(1, description="Gap that qualifies a skill as a quick win")
    quick_win_min_impact: float = Field(
        0.3,
        description="Minimum mean impact (0-1) for a quick win"
    )
    compliance_keywords: list[str] = Field(
        default_factory=lambda: ["risk", "compliance", "regulation", "climate"],
        description="Theme keywords that flag a critical gap as a compliance risk"
    )
    top_priority_limit: int = Field(10, description="Default size of the org-wide priority list")


class GapAnalysisConfig(BaseModel):
    """Complete configuration for the skills-gap scorer."""
    risk_weights: RiskWeightsConfig = Field(default_factory=RiskWeightsConfig)
    gap_weights: GapWeightsConfig = Field(default_factory=GapWeightsConfig)
    priority_weights: PriorityWeightsConfig = Field(default_factory=PriorityWeightsConfig)
    classification: ClassificationConfig = Field(default_factory=ClassificationConfig)


# Global config instance
_config: Optional[GapAnalysisConfig] = None


def get_config() -> GapAnalysisConfig:
    """Get the current configuration.

    Returns the global config, initializing with defaults if not yet loaded.
    """
    global _config
    if _config is None:
        _config = GapAnalysisConfig()
    return _config


def load_config(path: Path) -> GapAnalysisConfig:
    """Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        The loaded GapAnalysisConfig.
    """
    global _config

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    _config = GapAnalysisConfig.model_validate(data or {})
    return _config


def reset_config() -> None:
    """Reset configuration to defaults."""
    global _config
    _config = GapAnalysisConfig()


def find_config_file() -> Optional[Path]:
    """Find a scorer configuration file.

    Looks in (order of priority):
    1. SKILLS_GAP_SCORER_CONFIG environment variable
    2. ./gap-config.yaml
    3. ./gap-config.yml
    4. ~/.config/skills-gap-scorer/config.yaml
    """
    env_path = os.environ.get("SKILLS_GAP_SCORER_CONFIG")
    if env_path:
        path = Path(env_path)
        if path.exists():
            return path

    for name in ["gap-config.yaml", "gap-config.yml"]:
        path = Path(name)
        if path.exists():
            return path

    user_config = Path.home() / ".config" / "skills-gap-scorer" / "config.yaml"
    if user_config.exists():
        return user_config

    return None


def save_default_config(path: Path) -> None:
    """Save the default configuration to a YAML file.

    Args:
        path: Path where to save the configuration.
    """
    data = GapAnalysisConfig().model_dump()

    yaml_content = """# Skills-Gap Scorer Configuration
# ===============================
#
# This file configures the risk weights, gap and priority weight tiers,
# and the quick-win / compliance-risk classification thresholds.
#
# Copy this file to one of these locations:
#   - ./gap-config.yaml (current directory)
#   - ~/.config/skills-gap-scorer/config.yaml (user config)
#
# Or set the SKILLS_GAP_SCORER_CONFIG environment variable.

"""
    yaml_content += yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(yaml_content)
