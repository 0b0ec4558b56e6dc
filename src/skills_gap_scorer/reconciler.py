"""Data Reconciler.

Pulls per-department records out of the knowledge resource and merges
them with primary records. Each sub-table is matched independently, so a
department can have a scorecard without an overview and vice versa.
Missing data resolves to defaults; nothing here raises.
"""

import logging
from typing import Optional

from .normalizer import KeyMatcher
from .schema import (
    KnowledgeResource,
    Scorecard,
    SkillAction,
    UnitProfile,
)

logger = logging.getLogger(__name__)


class DataReconciler:
    """Resolves knowledge-resource records for department labels."""

    def __init__(self, resource: Optional[KnowledgeResource] = None):
        self.resource = resource or KnowledgeResource()
        self._overview = KeyMatcher(self.resource.overview)
        self._maturity = KeyMatcher(self.resource.maturity_map)
        self._scorecard = KeyMatcher(self.resource.scorecard)
        self._actions = KeyMatcher(self.resource.actions)

    def get_unit_profile(self, label: str) -> UnitProfile:
        """Assemble the knowledge bundle for a department label.

        Args:
            label: Department display label (free text)

        Returns:
            UnitProfile with whichever sub-tables matched
        """
        overview_key = self._overview.match(label)
        maturity_key = self._maturity.match(label)
        scorecard_key = self._scorecard.match(label)

        profile = UnitProfile(
            overview_key=overview_key,
            maturity_key=maturity_key,
            scorecard_key=scorecard_key,
            overview=self.resource.overview.get(overview_key) if overview_key else None,
            maturity_levels=list(self.resource.maturity_map.get(maturity_key, [])) if maturity_key else [],
            scorecard=self.resource.scorecard.get(scorecard_key, Scorecard()) if scorecard_key else Scorecard(),
        )

        if not profile.found:
            logger.debug("No knowledge-resource entries for department %r", label)
        return profile

    def get_unit_actions(self, label: str) -> list[SkillAction]:
        """All override actions for a department label."""
        key = self._actions.match(label)
        if key is None:
            return []
        return list(self.resource.actions.get(key) or [])

    def match_skill_action(self, label: str, skill_name: str) -> Optional[SkillAction]:
        """Find the override action for a skill within a department.

        The department is matched fuzzily; the skill name must match
        exactly, ignoring case.
        """
        skill_lower = (skill_name or "").lower()
        for action in self.get_unit_actions(label):
            if action.green_skill.lower() == skill_lower:
                return action
        return None
