"""Classification Filters.

Derives labelled subsets from the scored skill population:
quick wins, compliance/regulatory risks and the org-wide priority list.
All sorts are stable, so ties keep input order.
"""

from typing import Optional

from .config import GapAnalysisConfig, get_config
from .schema import GreenSkill, Severity, SkillRisk
from .scorer import RiskScorer


class ClassificationFilter:
    """Filters skills into quick-win, compliance-risk and top-priority lists."""

    def __init__(
        self,
        scorer: Optional[RiskScorer] = None,
        config: Optional[GapAnalysisConfig] = None,
    ):
        cfg = config or get_config()
        self.scorer = scorer or RiskScorer(cfg)
        self.quick_win_gap = cfg.classification.quick_win_gap
        self.quick_win_min_impact = cfg.classification.quick_win_min_impact
        self.compliance_keywords = [k.lower() for k in cfg.classification.compliance_keywords]
        self.top_priority_limit = cfg.classification.top_priority_limit

    def is_quick_win(self, skill: GreenSkill) -> bool:
        """Moderate gap with high sustainability leverage."""
        return skill.gap == self.quick_win_gap and skill.mean_impact() >= self.quick_win_min_impact

    def is_compliance_risk(self, skill: GreenSkill) -> bool:
        """Critical gap on a regulatory, compliance or climate theme."""
        if skill.severity != Severity.CRITICAL:
            return False
        theme = (skill.theme or "").lower()
        return any(keyword in theme for keyword in self.compliance_keywords)

    def quick_wins(self, skills: list[GreenSkill]) -> list[GreenSkill]:
        """Quick-win skills, highest mean impact first."""
        wins = [s for s in skills if self.is_quick_win(s)]
        wins.sort(key=lambda s: s.mean_impact(), reverse=True)
        return wins

    def compliance_risks(self, skills: list[GreenSkill]) -> list[GreenSkill]:
        """Compliance-risk skills in input order."""
        return [s for s in skills if self.is_compliance_risk(s)]

    def top_priority_skills(
        self,
        skills: list[GreenSkill],
        limit: Optional[int] = None,
    ) -> list[SkillRisk]:
        """All skills ranked by risk descending, truncated to ``limit``.

        Args:
            skills: Skill population (any departments)
            limit: Maximum entries; defaults to the configured limit
        """
        if limit is None:
            limit = self.top_priority_limit
        ranked = self.scorer.score_skills(skills)
        ranked.sort(key=lambda r: r.risk_score, reverse=True)
        return ranked[:max(limit, 0)]
