"""Recommendation Builder.

Turns a department's skills into ranked priority actions. Each action
carries a narrative (curated override when available, otherwise the
skill's own example behaviours), a target maturity and a stepwise
learning pathway from current to required maturity.
"""

from typing import Optional

from .reconciler import DataReconciler
from .schema import (
    Department,
    GreenSkill,
    PriorityAction,
    SkillFamily,
    SkillFamilyGroup,
    get_maturity_label,
    get_maturity_level,
)
from .scorer import RiskScorer


MAINTAIN_STEP = "Maintain current proficiency through continuous practice"

# Step wording per (destination level, skill family)
PATHWAY_STEPS: dict[tuple[int, SkillFamily], str] = {
    (2, SkillFamily.TECHNICAL): "Complete foundational technical sustainability training",
    (2, SkillFamily.KNOWLEDGEABLE): "Study core ESG frameworks and climate regulations",
    (2, SkillFamily.VALUES): "Participate in sustainability values workshops",
    (2, SkillFamily.ATTITUDES): "Attend mindset-shift and awareness sessions",
    (3, SkillFamily.TECHNICAL): "Apply skills in live projects with mentorship",
    (3, SkillFamily.KNOWLEDGEABLE): "Lead cross-functional knowledge-sharing sessions",
    (3, SkillFamily.VALUES): "Champion sustainability values in team decisions",
    (3, SkillFamily.ATTITUDES): "Mentor peers and model sustainability behaviours",
    (4, SkillFamily.TECHNICAL): "Drive strategic sustainability initiatives and innovation",
    (4, SkillFamily.KNOWLEDGEABLE): "Design organisational sustainability learning programmes",
    (4, SkillFamily.VALUES): "Shape organisational sustainability culture and policy",
    (4, SkillFamily.ATTITUDES): "Lead transformational change across the organisation",
}


def build_learning_pathway(current_level: int, required_level: int, skill_family: str) -> list[str]:
    """Ordered development steps from current to required maturity.

    One step per level above ``current_level`` up to and including
    ``required_level``. When there is no gap, a single maintain step.
    """
    if current_level >= required_level:
        return [MAINTAIN_STEP]

    family = SkillFamily.from_string(skill_family)
    pathway = []
    for level in range(current_level + 1, required_level + 1):
        if get_maturity_level(level) is None:
            continue
        step = PATHWAY_STEPS.get((level, family))
        if step:
            pathway.append(step)
    return pathway


class RecommendationBuilder:
    """Builds ranked priority actions for a department."""

    def __init__(
        self,
        reconciler: Optional[DataReconciler] = None,
        scorer: Optional[RiskScorer] = None,
    ):
        self.reconciler = reconciler or DataReconciler()
        self.scorer = scorer or RiskScorer()

    def build_action(self, department: Department, skill: GreenSkill) -> PriorityAction:
        """Resolve the action, maturity labels and pathway for one skill."""
        override = self.reconciler.match_skill_action(department.display_label, skill.green_skill)
        required_maturity = get_maturity_label(skill.required_level)

        if override and override.action:
            action, source = override.action, "override"
        elif skill.example_behaviours:
            action, source = skill.example_behaviours, "skill"
        else:
            action, source = "", "none"

        return PriorityAction(
            skill=skill,
            risk_score=self.scorer.score_skill(skill),
            action=action,
            contribution=(override and override.contribution) or skill.why_it_matters or "",
            target_maturity=(override and override.target_maturity) or required_maturity,
            linked_theme=(override and override.linked_theme) or skill.theme or "",
            priority=(override and override.priority) or skill.priority_level or "",
            current_maturity=get_maturity_label(skill.current_level),
            required_maturity=required_maturity,
            learning_pathway=build_learning_pathway(
                skill.current_level, skill.required_level, skill.skill_family
            ),
            action_source=source,
        )

    def priority_actions(self, department: Department, skills: list[GreenSkill]) -> list[PriorityAction]:
        """Priority actions for the department's skills, highest risk first.

        Args:
            department: Department being analyzed
            skills: Skill population; only the department's own skills are used

        Returns:
            Actions sorted by risk descending (ties keep input order)
        """
        actions = [
            self.build_action(department, s)
            for s in skills
            if s.department == department.id
        ]
        actions.sort(key=lambda a: a.risk_score, reverse=True)
        return actions

    def family_groups(self, skills: list[GreenSkill]) -> list[SkillFamilyGroup]:
        """Group skills by family in fixed family order, skipping empty families."""
        groups = []
        for family in SkillFamily:
            members = [s for s in skills if s.family == family]
            if not members:
                continue
            groups.append(SkillFamilyGroup(
                family=family,
                skills=members,
                avg_impact=sum(s.mean_impact() for s in members) / len(members),
                avg_risk=sum(self.scorer.score_skill(s) for s in members) / len(members),
            ))
        return groups
