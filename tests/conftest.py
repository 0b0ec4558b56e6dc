"""Shared fixtures for the skills-gap scorer tests."""

from pathlib import Path

import pytest

from skills_gap_scorer.config import reset_config
from skills_gap_scorer.schema import (
    IMPACT_FACTORS,
    Department,
    GreenSkill,
    KnowledgeResource,
    MaturityStage,
    Scorecard,
    SkillAction,
    Snapshot,
    UnitOverview,
)

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def make_skill(
    skill_id=1,
    department="it",
    name="Carbon Accounting",
    family="Technical",
    current=1,
    required=3,
    impact=0.0,
    priority="Medium",
    theme="",
    **overrides,
) -> GreenSkill:
    """Build a skill with every impact factor set to ``impact``."""
    data = {
        "id": skill_id,
        "department": department,
        "skill_family": family,
        "green_skill": name,
        "current_level": current,
        "required_level": required,
        "priority_level": priority,
        "theme": theme,
    }
    data.update({factor: impact for factor in IMPACT_FACTORS})
    data.update(overrides)
    return GreenSkill.model_validate(data)


def make_department(dept_id="it", label="IT & Security", **overrides) -> Department:
    data = {"id": dept_id, "label": label, "department": label}
    data.update(overrides)
    return Department.model_validate(data)


@pytest.fixture(autouse=True)
def default_config():
    """Every test starts from the default configuration."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def knowledge_resource() -> KnowledgeResource:
    return KnowledgeResource(
        overview={
            "IT Security": UnitOverview(
                definition="Protects and runs the organisation's digital estate.",
                green_skills_focus="Green IT",
                example_green_jobs="Sustainable IT Lead",
                risk_of_not_upskilling="Rising digital emissions",
            ),
            "Finance Department": UnitOverview(definition="Manages budgets and reporting."),
        },
        maturity_map={
            "it_security": [
                MaturityStage(level="Curious Explorer", description="Aware of e-waste",
                              technical_skill="Power settings", knowledge_skill="Basics",
                              value="Care", attitude="Open"),
                MaturityStage(level="Engaged Learner", description="Measures device energy"),
            ],
        },
        scorecard={
            "Finance": Scorecard(desired_knowledge=0.8, current_capability=0.45,
                                 gap=0.35, priority_level="High"),
        },
        actions={
            "IT & Security": [
                SkillAction(
                    skill_family="Technical",
                    green_skill="Carbon Accounting",
                    action="Run a quarterly carbon audit of the data centre",
                    contribution="Cuts scope 2 emissions",
                    target_maturity="Conscious Changemaker",
                    linked_theme="Climate Risk",
                    priority="Critical",
                ),
            ],
        },
    )


@pytest.fixture
def snapshot() -> Snapshot:
    departments = [
        make_department("it", "IT & Security", critical_gap_count=2, moderate_gap_count=1, no_gap_count=1),
        make_department("fin", "Finance", critical_gap_count=0, moderate_gap_count=1, no_gap_count=1),
        make_department("hr", "People", critical_gap_count=1, moderate_gap_count=0, no_gap_count=0),
    ]
    skills = [
        make_skill(1, "it", "Carbon Accounting", "Technical", 1, 4, 0.5, "Critical", "Climate Risk"),
        make_skill(2, "it", "E-waste Handling", "Values", 2, 3, 0.35, "Low", "Circularity"),
        make_skill(3, "it", "Green Coding", "Knowledgeable", 3, 3, 0.1, "High", "Software"),
        make_skill(4, "it", "Regulatory Reporting", "Attitudes", 1, 3, 0.0, "Low", "Compliance"),
        make_skill(5, "fin", "ESG Budgeting", "Knowledgeable", 2, 3, 0.2, "Medium", "Finance"),
        make_skill(6, "fin", "Green Procurement", "Values", 3, 3, 0.4, "Low", "Supply Chain"),
        make_skill(7, "hr", "Sustainable Hiring", "Attitudes", 1, 3, 0.6, "High", "Regulation"),
    ]
    return Snapshot(departments=departments, skills=skills)
