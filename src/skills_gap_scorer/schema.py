"""Pydantic models for the Skills-Gap Scoring Engine.

Input schemas for departments, skills, edges and the knowledge resource,
and output schemas for risk scores, priority actions and analysis results.
Input records are read-only snapshots; derived values are computed on access.
"""

import math
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, computed_field, field_validator


# =============================================================================
# Impact Factors
# =============================================================================


IMPACT_FACTORS: tuple[str, ...] = (
    "opt_carbon_footprint",
    "opt_renewable_energy",
    "opt_hvac",
    "opt_office_space",
    "opt_remote_work",
    "opt_work_schedule",
    "opt_water_use",
    "opt_digital_footprint",
    "opt_ai_compute",
    "opt_iot_telemetry",
    "opt_hardware_circularity",
    "opt_supply_chain_emissions",
    "opt_logistics_shipping",
    "opt_fleet_electrification",
    "opt_employee_commuting",
    "opt_material_waste",
)

IMPACT_FACTOR_LABELS: dict[str, str] = {
    "opt_carbon_footprint": "Carbon Footprint",
    "opt_renewable_energy": "Renewable Energy",
    "opt_hvac": "HVAC",
    "opt_office_space": "Office Space",
    "opt_remote_work": "Remote Work",
    "opt_work_schedule": "Work Schedule",
    "opt_water_use": "Water Use",
    "opt_digital_footprint": "Digital Footprint",
    "opt_ai_compute": "AI Compute",
    "opt_iot_telemetry": "IoT Telemetry",
    "opt_hardware_circularity": "Hardware Circularity",
    "opt_supply_chain_emissions": "Supply Chain Emissions",
    "opt_logistics_shipping": "Logistics & Shipping",
    "opt_fleet_electrification": "Fleet Electrification",
    "opt_employee_commuting": "Employee Commuting",
    "opt_material_waste": "Material Waste",
}


def format_impact_label(key: str) -> str:
    """Get the display label for an impact factor key."""
    return IMPACT_FACTOR_LABELS.get(key) or key.replace("opt_", "", 1).replace("_", " ")


def _coerce_factor(value: Any) -> float:
    """Read an impact factor defensively (missing or non-numeric -> 0)."""
    if value is None:
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


class ImpactProfile(BaseModel):
    """The sixteen impact factors shared by departments and skills."""
    opt_carbon_footprint: float = 0.0
    opt_renewable_energy: float = 0.0
    opt_hvac: float = 0.0
    opt_office_space: float = 0.0
    opt_remote_work: float = 0.0
    opt_work_schedule: float = 0.0
    opt_water_use: float = 0.0
    opt_digital_footprint: float = 0.0
    opt_ai_compute: float = 0.0
    opt_iot_telemetry: float = 0.0
    opt_hardware_circularity: float = 0.0
    opt_supply_chain_emissions: float = 0.0
    opt_logistics_shipping: float = 0.0
    opt_fleet_electrification: float = 0.0
    opt_employee_commuting: float = 0.0
    opt_material_waste: float = 0.0

    @field_validator(*IMPACT_FACTORS, mode="before")
    @classmethod
    def _read_factor(cls, value: Any) -> float:
        return _coerce_factor(value)

    def impact_values(self) -> list[float]:
        """Impact factor values in fixed IMPACT_FACTORS order."""
        return [getattr(self, name) for name in IMPACT_FACTORS]

    def impact_items(self) -> list[tuple[str, float]]:
        """(factor, value) pairs in fixed order."""
        return [(name, getattr(self, name)) for name in IMPACT_FACTORS]

    def mean_impact(self) -> float:
        """Arithmetic mean of the sixteen impact factors."""
        values = self.impact_values()
        return sum(values) / len(values)


# =============================================================================
# Enums
# =============================================================================


class SkillFamily(str, Enum):
    """Skill family tag."""
    TECHNICAL = "Technical"
    KNOWLEDGEABLE = "Knowledgeable"
    VALUES = "Values"
    ATTITUDES = "Attitudes"

    @classmethod
    def from_string(cls, value: Optional[str]) -> "SkillFamily":
        """Parse family from string. Unknown families fall into Attitudes."""
        mapping = {member.value.lower(): member for member in cls}
        return mapping.get((value or "").strip().lower(), cls.ATTITUDES)


class Severity(str, Enum):
    """Skill gap severity bucket."""
    CRITICAL = "Critical"
    MODERATE = "Moderate"
    NO_GAP = "No Gap"

    @classmethod
    def from_gap(cls, gap: int) -> "Severity":
        """Derive severity from a level gap."""
        if gap >= 2:
            return cls.CRITICAL
        if gap == 1:
            return cls.MODERATE
        return cls.NO_GAP


class PriorityLevel(str, Enum):
    """Organisational urgency classification."""
    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    UNKNOWN = "Unknown"

    @classmethod
    def from_string(cls, value: Optional[str]) -> "PriorityLevel":
        """Parse priority from string (case-insensitive, unknown -> UNKNOWN)."""
        mapping = {
            "critical": cls.CRITICAL,
            "high": cls.HIGH,
            "medium": cls.MEDIUM,
            "low": cls.LOW,
        }
        return mapping.get((value or "").strip().lower(), cls.UNKNOWN)


# =============================================================================
# Maturity Levels
# =============================================================================


class MaturityLevel(BaseModel):
    """One of the four ordered proficiency stages."""
    level: int
    label: str
    short: str
    description: str


MATURITY_LEVELS: tuple[MaturityLevel, ...] = (
    MaturityLevel(
        level=1,
        label="Curious Explorer",
        short="Explorer",
        description="Basic awareness of sustainability terms and environmental impact.",
    ),
    MaturityLevel(
        level=2,
        label="Engaged Learner",
        short="Learner",
        description="Applies basic sustainability principles and identifies impact areas.",
    ),
    MaturityLevel(
        level=3,
        label="Active Contributor",
        short="Contributor",
        description="Consistently integrates sustainability into daily decisions and processes.",
    ),
    MaturityLevel(
        level=4,
        label="Conscious Changemaker",
        short="Changemaker",
        description="Leads strategic sustainability initiatives and drives organisational transformation.",
    ),
)

_MATURITY_BY_LEVEL = {m.level: m for m in MATURITY_LEVELS}


def get_maturity_level(level: int) -> Optional[MaturityLevel]:
    return _MATURITY_BY_LEVEL.get(level)


def get_maturity_label(level: int) -> str:
    """Full maturity label for a level, or "Unknown"."""
    maturity = _MATURITY_BY_LEVEL.get(level)
    return maturity.label if maturity else "Unknown"


def get_maturity_short(level: int) -> str:
    """Short maturity label for a level, or an em dash placeholder."""
    maturity = _MATURITY_BY_LEVEL.get(level)
    return maturity.short if maturity else "—"


# =============================================================================
# Snapshot Input Models
# =============================================================================


class Department(ImpactProfile):
    """An organisational unit."""
    id: str
    label: str = ""
    department: str = ""  # Free-form unit description / name
    overall_score: float = 0.0
    gap_severity: str = ""
    critical_gap_count: int = 0
    moderate_gap_count: int = 0
    no_gap_count: int = 0
    top_gaps: str = ""
    desired_knowledge: str = ""
    priority_level: str = ""

    @field_validator("critical_gap_count", "moderate_gap_count", "no_gap_count", mode="before")
    @classmethod
    def _read_count(cls, value: Any) -> int:
        return int(_coerce_factor(value))

    @field_validator("overall_score", mode="before")
    @classmethod
    def _read_score(cls, value: Any) -> float:
        return _coerce_factor(value)

    @field_validator(
        "label", "department", "gap_severity", "top_gaps", "desired_knowledge", "priority_level",
        mode="before",
    )
    @classmethod
    def _read_text(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @property
    def display_label(self) -> str:
        """Label used for knowledge-resource lookups and reporting."""
        return self.label or self.department or self.id


class GreenSkill(ImpactProfile):
    """A skill assessment record for one department.

    ``gap`` and ``severity`` are always derived from the levels; values
    supplied in the raw record are ignored.
    """
    id: int | str
    department: str
    skill_family: str = ""
    green_skill: str
    description: str = ""
    why_it_matters: str = ""
    example_behaviours: str = ""
    theme: str = ""
    desired_knowledge: str = ""
    required_level: int = Field(..., ge=1, le=4)
    current_level: int = Field(..., ge=1, le=4)
    priority_level: str = ""

    @field_validator(
        "skill_family", "description", "why_it_matters", "example_behaviours",
        "theme", "desired_knowledge", "priority_level",
        mode="before",
    )
    @classmethod
    def _read_text(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @computed_field
    @property
    def gap(self) -> int:
        return self.required_level - self.current_level

    @computed_field
    @property
    def severity(self) -> Severity:
        return Severity.from_gap(self.gap)

    @property
    def family(self) -> SkillFamily:
        return SkillFamily.from_string(self.skill_family)


class DepartmentEdge(BaseModel):
    """Relationship between two departments (presentation only)."""
    id: str
    source: str
    target: str
    relationship: str = ""  # "shared_gap" or "dependency"
    weight: float = Field(0.0, ge=0, le=1)


class Snapshot(BaseModel):
    """A read-only snapshot of primary records for one analysis session."""
    departments: list[Department] = Field(default_factory=list)
    skills: list[GreenSkill] = Field(default_factory=list)
    edges: list[DepartmentEdge] = Field(default_factory=list)

    def skills_for(self, department_id: str) -> list[GreenSkill]:
        """Skills belonging to a department, in snapshot order."""
        return [s for s in self.skills if s.department == department_id]

    def get_department(self, department_id: str) -> Optional[Department]:
        for dept in self.departments:
            if dept.id == department_id:
                return dept
        return None


# =============================================================================
# Knowledge Resource Models
# =============================================================================


class UnitOverview(BaseModel):
    """Narrative overview for a department."""
    definition: str = ""
    green_skills_focus: str = ""
    example_green_jobs: str = ""
    risk_of_not_upskilling: str = ""


class MaturityStage(BaseModel):
    """One row of a department's maturity map."""
    level: str = ""
    description: str = ""
    technical_skill: str = ""
    knowledge_skill: str = ""
    value: str = ""
    attitude: str = ""


class Scorecard(BaseModel):
    """Target / current / gap fractions for a department."""
    desired_knowledge: float = 0.0
    current_capability: float = 0.0
    gap: float = 0.0
    priority_level: str = "Unknown"

    @field_validator("desired_knowledge", "current_capability", "gap", mode="before")
    @classmethod
    def _read_fraction(cls, value: Any) -> float:
        return _coerce_factor(value)


class SkillAction(BaseModel):
    """A curated per-skill override action."""
    skill_family: str = ""
    green_skill: str = ""
    action: str = ""
    contribution: str = ""
    target_maturity: str = ""
    linked_theme: str = ""
    priority: str = ""


class KnowledgeResource(BaseModel):
    """Secondary knowledge resource keyed by free-text department labels.

    Dictionaries keep source order; fuzzy matching depends on it.
    """
    overview: dict[str, UnitOverview] = Field(default_factory=dict)
    maturity_map: dict[str, list[MaturityStage]] = Field(default_factory=dict)
    scorecard: dict[str, Scorecard] = Field(default_factory=dict)
    actions: dict[str, list[SkillAction]] = Field(default_factory=dict)


# =============================================================================
# Output Models
# =============================================================================


class RiskBreakdown(BaseModel):
    """The three weighted terms behind a skill risk score."""
    gap_weight: float
    impact_weight: float
    priority_weight: float
    risk_score: float = Field(..., ge=0, le=1)


class SkillRisk(BaseModel):
    """A skill annotated with its risk score."""
    skill: GreenSkill
    risk_score: float = Field(..., ge=0, le=1)


class PriorityAction(BaseModel):
    """A ranked, explainable remediation action for one skill."""
    skill: GreenSkill
    risk_score: float = Field(..., ge=0, le=1)
    action: str = ""
    contribution: str = ""
    target_maturity: str = ""
    linked_theme: str = ""
    priority: str = ""
    current_maturity: str = ""
    required_maturity: str = ""
    learning_pathway: list[str] = Field(default_factory=list)
    action_source: str = "none"  # override, skill, none


class UnitProfile(BaseModel):
    """Knowledge-resource bundle reconciled for one department."""
    overview_key: Optional[str] = None
    maturity_key: Optional[str] = None
    scorecard_key: Optional[str] = None
    overview: Optional[UnitOverview] = None
    maturity_levels: list[MaturityStage] = Field(default_factory=list)
    scorecard: Scorecard = Field(default_factory=Scorecard)

    @property
    def found(self) -> bool:
        """True when any sub-table matched."""
        return any(k is not None for k in (self.overview_key, self.maturity_key, self.scorecard_key))


class SkillFamilyGroup(BaseModel):
    """Skills of one family within a department."""
    family: SkillFamily
    skills: list[GreenSkill] = Field(default_factory=list)
    avg_impact: float = 0.0
    avg_risk: float = 0.0


class UnitAnalysis(BaseModel):
    """Complete analysis of one department."""
    department: Department
    risk_score: float = Field(..., ge=0, le=1)
    profile: UnitProfile = Field(default_factory=UnitProfile)
    priority_actions: list[PriorityAction] = Field(default_factory=list)
    quick_wins: list[GreenSkill] = Field(default_factory=list)
    compliance_risks: list[GreenSkill] = Field(default_factory=list)
    family_groups: list[SkillFamilyGroup] = Field(default_factory=list)
    severity_counts: dict[str, int] = Field(default_factory=dict)


class OrganisationSummary(BaseModel):
    """Organisation-wide readiness figures."""
    department_count: int = 0
    skill_count: int = 0
    total_critical: int = 0
    total_moderate: int = 0
    total_no_gap: int = 0
    readiness_percent: int = 0
    priority_departments: list[str] = Field(default_factory=list)
    avg_impact: float = 0.0


class AnalysisResult(BaseModel):
    """Complete output from the analysis engine."""
    analysis_version: str = Field(default="1.0.0")
    analyzed_at: datetime = Field(default_factory=datetime.utcnow)

    summary: OrganisationSummary = Field(default_factory=OrganisationSummary)
    departments: list[UnitAnalysis] = Field(default_factory=list)

    top_priority_skills: list[SkillRisk] = Field(default_factory=list)
    quick_wins: list[GreenSkill] = Field(default_factory=list)
    compliance_risks: list[GreenSkill] = Field(default_factory=list)

    processing_warnings: list[str] = Field(default_factory=list)
