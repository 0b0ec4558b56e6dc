"""Risk Scorer.

Scores skills by blending three independently bounded signals:

- gap severity (how far current proficiency is from required)
- sustainability materiality (mean of the sixteen impact factors)
- organisational urgency (priority level)

A skill with a small gap but high materiality and urgency can outrank a
skill with a larger gap and low materiality.
"""

from typing import Optional

from .config import GapAnalysisConfig, get_config
from .schema import (
    Department,
    GreenSkill,
    PriorityLevel,
    RiskBreakdown,
    Severity,
    SkillRisk,
)


class RiskScorer:
    """Computes [0, 1] risk scores for skills and departments.

    Configuration:
    - Risk, gap and priority weights can be customized via gap-config.yaml
    - Pass a GapAnalysisConfig to score against alternative weightings
    """

    def __init__(self, config: Optional[GapAnalysisConfig] = None):
        """Initialize scorer with optional custom configuration."""
        cfg = config or get_config()
        self.weights = cfg.risk_weights
        self.gap_weights = cfg.gap_weights
        self.priority_weights = cfg.priority_weights

    def gap_weight(self, skill: GreenSkill) -> float:
        """Gap weight for the skill's severity bucket."""
        severity = skill.severity
        if severity == Severity.CRITICAL:
            return self.gap_weights.critical
        if severity == Severity.MODERATE:
            return self.gap_weights.moderate
        return self.gap_weights.none

    def impact_weight(self, skill: GreenSkill) -> float:
        return skill.mean_impact()

    def priority_weight(self, skill: GreenSkill) -> float:
        """Priority weight; unrecognized priorities get the lowest tier."""
        priority = PriorityLevel.from_string(skill.priority_level)
        if priority == PriorityLevel.CRITICAL:
            return self.priority_weights.critical
        if priority == PriorityLevel.HIGH:
            return self.priority_weights.high
        if priority == PriorityLevel.MEDIUM:
            return self.priority_weights.medium
        return self.priority_weights.other

    def breakdown(self, skill: GreenSkill) -> RiskBreakdown:
        """Score a skill and return each contributing term."""
        gap_weight = self.gap_weight(skill)
        impact_weight = self.impact_weight(skill)
        priority_weight = self.priority_weight(skill)

        risk = (
            gap_weight * self.weights.gap
            + impact_weight * self.weights.impact
            + priority_weight * self.weights.priority
        )

        return RiskBreakdown(
            gap_weight=gap_weight,
            impact_weight=impact_weight,
            priority_weight=priority_weight,
            risk_score=min(1.0, max(0.0, risk)),
        )

    def score_skill(self, skill: GreenSkill) -> float:
        """Risk score for a single skill, in [0, 1]."""
        return self.breakdown(skill).risk_score

    def score_skills(self, skills: list[GreenSkill]) -> list[SkillRisk]:
        """Annotate skills with risk scores, keeping input order."""
        return [SkillRisk(skill=s, risk_score=self.score_skill(s)) for s in skills]

    def score_department(self, department: Department, skills: list[GreenSkill]) -> float:
        """Mean risk over the department's own skills (0 when it has none).

        Args:
            department: Department to score
            skills: Skill population; only skills owned by the department count
        """
        dept_skills = [s for s in skills if s.department == department.id]
        if not dept_skills:
            return 0.0
        return sum(self.score_skill(s) for s in dept_skills) / len(dept_skills)
