"""Gap Analysis Engine.

Runs the full pipeline over a snapshot:

    raw records -> reconcile -> score -> classify / recommend -> result

Every department is analyzed independently; there is no propagation of
risk across department edges.
"""

import logging
from typing import Optional

from .config import GapAnalysisConfig, get_config
from .export import round_percent
from .filters import ClassificationFilter
from .reconciler import DataReconciler
from .recommender import RecommendationBuilder
from .schema import (
    AnalysisResult,
    Department,
    GreenSkill,
    KnowledgeResource,
    OrganisationSummary,
    Severity,
    Snapshot,
    UnitAnalysis,
)
from .scorer import RiskScorer

logger = logging.getLogger(__name__)


class GapAnalysisEngine:
    """Scores, classifies and builds recommendations for a snapshot.

    Example:
        engine = GapAnalysisEngine(load_knowledge_resource("knowledge.json"))
        result = engine.analyze(load_snapshot("departments.json", "skills.json"))
    """

    def __init__(
        self,
        resource: Optional[KnowledgeResource] = None,
        config: Optional[GapAnalysisConfig] = None,
    ):
        self.config = config or get_config()
        self.scorer = RiskScorer(self.config)
        self.filters = ClassificationFilter(self.scorer, self.config)
        self.reconciler = DataReconciler(resource)
        self.builder = RecommendationBuilder(self.reconciler, self.scorer)

    def analyze_department(self, department: Department, skills: list[GreenSkill]) -> UnitAnalysis:
        """Analyze one department against the skill population."""
        dept_skills = [s for s in skills if s.department == department.id]

        severity_counts = {severity.value: 0 for severity in Severity}
        for skill in dept_skills:
            severity_counts[skill.severity.value] += 1

        analysis = UnitAnalysis(
            department=department,
            risk_score=self.scorer.score_department(department, dept_skills),
            profile=self.reconciler.get_unit_profile(department.display_label),
            priority_actions=self.builder.priority_actions(department, dept_skills),
            quick_wins=self.filters.quick_wins(dept_skills),
            compliance_risks=self.filters.compliance_risks(dept_skills),
            family_groups=self.builder.family_groups(dept_skills),
            severity_counts=severity_counts,
        )

        logger.debug(
            "Department %s: %d skills, risk %.4f, %d quick wins, %d compliance risks",
            department.id, len(dept_skills), analysis.risk_score,
            len(analysis.quick_wins), len(analysis.compliance_risks),
        )
        return analysis

    def summarize(self, departments: list[Department], skills: list[GreenSkill]) -> OrganisationSummary:
        """Organisation-wide readiness from the departments' aggregate counts."""
        total_critical = sum(d.critical_gap_count for d in departments)
        total_moderate = sum(d.moderate_gap_count for d in departments)
        total_no_gap = sum(d.no_gap_count for d in departments)
        total = total_critical + total_moderate + total_no_gap

        by_critical = sorted(departments, key=lambda d: d.critical_gap_count, reverse=True)

        return OrganisationSummary(
            department_count=len(departments),
            skill_count=len(skills),
            total_critical=total_critical,
            total_moderate=total_moderate,
            total_no_gap=total_no_gap,
            readiness_percent=round_percent(total_no_gap / total) if total > 0 else 0,
            priority_departments=[d.id for d in by_critical[:3]],
            avg_impact=(
                sum(d.mean_impact() for d in departments) / len(departments)
                if departments else 0.0
            ),
        )

    def analyze(self, snapshot: Snapshot, top_n: Optional[int] = None) -> AnalysisResult:
        """Analyze every department and the organisation as a whole.

        Args:
            snapshot: Departments, skills and edges
            top_n: Size of the org-wide priority list (default from config)

        Returns:
            AnalysisResult with departments ordered by risk descending
        """
        logger.info(
            "Analyzing %d departments and %d skills",
            len(snapshot.departments), len(snapshot.skills),
        )

        warnings = []
        known_ids = {d.id for d in snapshot.departments}
        orphans = [s for s in snapshot.skills if s.department not in known_ids]
        if orphans:
            unknown = sorted({s.department for s in orphans})
            warnings.append(
                f"{len(orphans)} skills reference unknown departments: {', '.join(unknown)}"
            )
            logger.warning("Skills reference unknown departments: %s", unknown)

        unit_analyses = [
            self.analyze_department(dept, snapshot.skills)
            for dept in snapshot.departments
        ]
        unit_analyses.sort(key=lambda a: a.risk_score, reverse=True)

        resource = self.reconciler.resource
        has_knowledge = bool(resource.overview or resource.maturity_map or resource.scorecard)
        for analysis in unit_analyses:
            if has_knowledge and not analysis.profile.found:
                warnings.append(
                    f"No knowledge-resource entry matched department "
                    f"'{analysis.department.display_label}'"
                )

        return AnalysisResult(
            summary=self.summarize(snapshot.departments, snapshot.skills),
            departments=unit_analyses,
            top_priority_skills=self.filters.top_priority_skills(snapshot.skills, top_n),
            quick_wins=self.filters.quick_wins(snapshot.skills),
            compliance_risks=self.filters.compliance_risks(snapshot.skills),
            processing_warnings=warnings,
        )
