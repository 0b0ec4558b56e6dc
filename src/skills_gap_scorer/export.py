"""Tabular CSV report of a gap analysis.

Produces one row per skill with severity, risk, classification and the
sixteen impact factors. Cells containing a comma, double quote, line feed
or carriage return are quoted with internal quotes doubled; the output
starts with a UTF-8 byte-order mark so spreadsheet tools detect the encoding.
"""

import csv
import io
import logging
import math
from pathlib import Path
from typing import Optional, Union

from .filters import ClassificationFilter
from .schema import (
    IMPACT_FACTORS,
    AnalysisResult,
    GreenSkill,
    PriorityAction,
    Snapshot,
    format_impact_label,
    get_maturity_label,
)

logger = logging.getLogger(__name__)

BOM = "\ufeff"

# Both characters trigger quoting; rows are joined with a bare "\n".
QUOTE_TERMINATOR = "\r\n"

REPORT_COLUMNS = [
    "Department",
    "Skill Family",
    "Skill",
    "Theme",
    "Current Level",
    "Required Level",
    "Current Maturity",
    "Required Maturity",
    "Gap",
    "Severity",
    "Priority",
    "Risk Score",
    "Avg Impact",
    "Quick Win",
    "Compliance Risk",
    "Recommended Action",
] + [format_impact_label(f) for f in IMPACT_FACTORS]


def round_percent(value: float) -> int:
    """Fraction to a whole percentage, rounding halves up."""
    return int(math.floor(value * 100 + 0.5))


def format_percent(value: Optional[float]) -> str:
    """Render a 0-1 fraction as a percentage string, e.g. 0.42 -> '42%'."""
    if value is None:
        return "—"
    return f"{round_percent(value)}%"


def _csv_line(cells: list[str]) -> str:
    buffer = io.StringIO()
    csv.writer(buffer, lineterminator=QUOTE_TERMINATOR).writerow(cells)
    return buffer.getvalue()[:-len(QUOTE_TERMINATOR)]


def escape_csv_field(value: object) -> str:
    """Quote a single cell the way the report writer does."""
    text = "" if value is None else str(value)
    return _csv_line([text]) if text else ""


def _skill_row(
    department_label: str,
    skill: GreenSkill,
    action: Optional[PriorityAction],
    filters: ClassificationFilter,
) -> list[str]:
    risk = action.risk_score if action else filters.scorer.score_skill(skill)
    row = [
        department_label,
        skill.skill_family,
        skill.green_skill,
        skill.theme,
        str(skill.current_level),
        str(skill.required_level),
        get_maturity_label(skill.current_level),
        get_maturity_label(skill.required_level),
        str(skill.gap),
        skill.severity.value,
        skill.priority_level,
        f"{risk:.4f}",
        format_percent(skill.mean_impact()),
        "Yes" if filters.is_quick_win(skill) else "No",
        "Yes" if filters.is_compliance_risk(skill) else "No",
        action.action if action else skill.example_behaviours,
    ]
    row.extend(format_percent(v) for v in skill.impact_values())
    return row


def build_report_rows(
    result: AnalysisResult,
    snapshot: Snapshot,
    filters: Optional[ClassificationFilter] = None,
) -> list[list[str]]:
    """Header plus one row per skill.

    Departments follow the result's risk ordering and each department's
    skills follow its priority-action ranking. Skills of unknown
    departments are appended last in snapshot order.
    """
    filters = filters or ClassificationFilter()
    rows = [list(REPORT_COLUMNS)]

    for analysis in result.departments:
        label = analysis.department.display_label
        for action in analysis.priority_actions:
            rows.append(_skill_row(label, action.skill, action, filters))

    known_ids = {a.department.id for a in result.departments}
    for skill in snapshot.skills:
        if skill.department not in known_ids:
            rows.append(_skill_row(skill.department, skill, None, filters))

    return rows


def render_rows(rows: list[list[str]]) -> str:
    """Render rows to CSV text with a leading byte-order mark."""
    lines = [_csv_line(["" if cell is None else str(cell) for cell in row]) for row in rows]
    return BOM + "\n".join(lines)


def render_report(
    result: AnalysisResult,
    snapshot: Snapshot,
    filters: Optional[ClassificationFilter] = None,
) -> str:
    """Render the full analysis report as CSV text."""
    return render_rows(build_report_rows(result, snapshot, filters))


def write_report(
    path: Union[str, Path],
    result: AnalysisResult,
    snapshot: Snapshot,
    filters: Optional[ClassificationFilter] = None,
) -> Path:
    """Write the CSV report to disk (UTF-8, BOM included)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    content = render_report(result, snapshot, filters)
    with open(path, 'w', encoding='utf-8', newline='') as f:
        f.write(content)
    logger.info("Report written to %s", path)
    return path
