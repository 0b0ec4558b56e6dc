"""CLI for the Skills-Gap Scoring Engine.

Provides command-line interface for scoring a department/skill snapshot,
listing priority actions and classifications, and exporting a CSV report.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import find_config_file, get_config, load_config, save_default_config
from .engine import GapAnalysisEngine
from .export import format_percent, write_report
from .loader import load_knowledge_resource, load_snapshot
from .schema import AnalysisResult, GreenSkill, Snapshot, UnitAnalysis

console = Console()


def _data_options(func):
    """Options shared by every command that reads a snapshot."""
    options = [
        click.option(
            "--departments", "-d",
            required=True,
            type=click.Path(exists=True, dir_okay=False, path_type=Path),
            help="Path to departments JSON/YAML file"
        ),
        click.option(
            "--skills", "-s",
            required=True,
            type=click.Path(exists=True, dir_okay=False, path_type=Path),
            help="Path to skills JSON/YAML file"
        ),
        click.option(
            "--edges", "-e",
            type=click.Path(exists=True, dir_okay=False, path_type=Path),
            help="Path to department edges JSON/YAML file"
        ),
        click.option(
            "--knowledge", "-k",
            type=click.Path(exists=True, dir_okay=False, path_type=Path),
            help="Path to knowledge resource JSON/YAML file"
        ),
        click.option(
            "--config", "config_path",
            type=click.Path(exists=True, dir_okay=False, path_type=Path),
            help="Path to scorer config YAML (default: auto-discovered)"
        ),
        click.option(
            "--verbose", "-v",
            is_flag=True,
            help="Show detailed output and debug logging"
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _load(
    departments: Path,
    skills: Path,
    edges: Optional[Path],
    knowledge: Optional[Path],
    config_path: Optional[Path],
    verbose: bool,
) -> tuple[GapAnalysisEngine, Snapshot]:
    """Configure logging and config, load inputs and build the engine."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    config_file = config_path or find_config_file()
    if config_file:
        load_config(config_file)
        if verbose:
            console.print(f"Config: {config_file}")

    snapshot = load_snapshot(departments, skills, edges)
    resource = load_knowledge_resource(knowledge) if knowledge else None
    return GapAnalysisEngine(resource, get_config()), snapshot


@click.group()
@click.version_option(version="1.0.0", prog_name="skills-gap-scorer")
def main():
    """Skills-Gap Risk Scoring and Recommendation Engine.

    Scores organisational skill gaps by severity, sustainability impact
    and priority, and returns ranked, explainable remediation actions.
    """
    pass


@main.command("analyze")
@_data_options
@click.option(
    "--top", "-n",
    type=int,
    default=None,
    help="Size of the org-wide priority list (default from config)"
)
@click.option(
    "--department", "department_id",
    default=None,
    help="Only report the analysis for this department id"
)
@click.option(
    "--out", "-o",
    type=click.Path(path_type=Path),
    help="Output file for JSON results"
)
@click.option(
    "--json-output", "-j",
    is_flag=True,
    help="Output raw JSON instead of formatted text"
)
def analyze_cmd(
    departments: Path,
    skills: Path,
    edges: Optional[Path],
    knowledge: Optional[Path],
    config_path: Optional[Path],
    verbose: bool,
    top: Optional[int],
    department_id: Optional[str],
    out: Optional[Path],
    json_output: bool,
):
    """Analyze every department and the organisation as a whole.

    Examples:
        skills-gap-scorer analyze -d departments.json -s skills.json
        skills-gap-scorer analyze -d departments.json -s skills.json -k knowledge.json -n 5
        skills-gap-scorer analyze -d departments.json -s skills.json --department it
    """
    try:
        engine, snapshot = _load(departments, skills, edges, knowledge, config_path, verbose)
        if department_id and snapshot.get_department(department_id) is None:
            console.print(f"[red]Error: Department not found: {department_id}[/red]")
            sys.exit(1)

        result = engine.analyze(snapshot, top_n=top)
        if department_id:
            result = result.model_copy(update={
                "departments": [a for a in result.departments if a.department.id == department_id]
            })

        if json_output:
            click.echo(result.model_dump_json(indent=2))
        else:
            display_result(result, verbose)

        if out:
            out.parent.mkdir(parents=True, exist_ok=True)
            out.write_text(result.model_dump_json(indent=2), encoding="utf-8")
            if not json_output:
                console.print(f"\n[green]Results saved to {out}[/green]")

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


@main.command("actions")
@_data_options
@click.option(
    "--department", "department_id",
    required=True,
    help="Department id to show priority actions for"
)
@click.option(
    "--json-output", "-j",
    is_flag=True,
    help="Output raw JSON instead of formatted text"
)
def actions_cmd(
    departments: Path,
    skills: Path,
    edges: Optional[Path],
    knowledge: Optional[Path],
    config_path: Optional[Path],
    verbose: bool,
    department_id: str,
    json_output: bool,
):
    """Show ranked priority actions and learning pathways for a department."""
    try:
        engine, snapshot = _load(departments, skills, edges, knowledge, config_path, verbose)
        dept = snapshot.get_department(department_id)
        if dept is None:
            console.print(f"[red]Error: Department not found: {department_id}[/red]")
            sys.exit(1)

        analysis = engine.analyze_department(dept, snapshot.skills)

        if json_output:
            click.echo(json.dumps(
                [a.model_dump(mode="json") for a in analysis.priority_actions], indent=2
            ))
            return

        display_department(analysis, verbose=True)

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


@main.command("quick-wins")
@_data_options
def quick_wins_cmd(
    departments: Path,
    skills: Path,
    edges: Optional[Path],
    knowledge: Optional[Path],
    config_path: Optional[Path],
    verbose: bool,
):
    """List moderate-gap, high-impact skills (cheap to close, high payoff)."""
    try:
        engine, snapshot = _load(departments, skills, edges, knowledge, config_path, verbose)
        wins = engine.filters.quick_wins(snapshot.skills)
        if not wins:
            console.print("[green]No quick wins found.[/green]")
            return
        _print_skill_table(f"Quick Wins ({len(wins)})", wins, engine)
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


@main.command("compliance")
@_data_options
def compliance_cmd(
    departments: Path,
    skills: Path,
    edges: Optional[Path],
    knowledge: Optional[Path],
    config_path: Optional[Path],
    verbose: bool,
):
    """List critical gaps on regulatory, compliance or climate themes."""
    try:
        engine, snapshot = _load(departments, skills, edges, knowledge, config_path, verbose)
        risks = engine.filters.compliance_risks(snapshot.skills)
        if not risks:
            console.print("[green]No compliance risks found.[/green]")
            return
        _print_skill_table(f"Compliance Risks ({len(risks)})", risks, engine)
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


@main.command("export")
@_data_options
@click.option(
    "--out", "-o",
    required=True,
    type=click.Path(path_type=Path),
    help="Output path for the CSV report"
)
def export_cmd(
    departments: Path,
    skills: Path,
    edges: Optional[Path],
    knowledge: Optional[Path],
    config_path: Optional[Path],
    verbose: bool,
    out: Path,
):
    """Export a complete gap analysis report as CSV.

    Example:
        skills-gap-scorer export -d departments.json -s skills.json -o report.csv
    """
    try:
        engine, snapshot = _load(departments, skills, edges, knowledge, config_path, verbose)
        result = engine.analyze(snapshot)
        write_report(out, result, snapshot, engine.filters)
        console.print(f"[green]✓[/green] Report written: {out} ({len(snapshot.skills)} skills)")
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


@main.command(name="init-config")
@click.option(
    "--out", "-o",
    type=click.Path(path_type=Path),
    default="gap-config.yaml",
    help="Output path for the configuration file"
)
@click.option(
    "--force", "-f",
    is_flag=True,
    help="Overwrite existing config file"
)
def init_config(out: Path, force: bool):
    """Generate a default configuration file.

    Example:
        skills-gap-scorer init-config --out gap-config.yaml
    """
    if out.exists() and not force:
        console.print(f"[red]Error:[/red] Config file already exists: {out}")
        console.print("Use --force to overwrite")
        sys.exit(1)

    try:
        save_default_config(out)
        console.print(f"[green]✓[/green] Config file created: {out}")
        console.print("\nEdit this file to customize:")
        console.print("  • risk_weights - Gap / impact / priority split")
        console.print("  • gap_weights - Weight per gap severity")
        console.print("  • priority_weights - Weight per priority level")
        console.print("  • classification - Quick-win and compliance thresholds")
    except Exception as e:
        console.print(f"[red]Error creating config:[/red] {e}")
        sys.exit(1)


# =============================================================================
# Display helpers
# =============================================================================


def display_result(result: AnalysisResult, verbose: bool = False):
    """Display an analysis result with rich formatting."""
    summary = result.summary

    console.print(Panel(
        f"[bold]{summary.readiness_percent}%[/bold] green-ready\n"
        f"Departments: {summary.department_count}  Skills: {summary.skill_count}\n"
        f"[red]Critical: {summary.total_critical}[/red]  "
        f"[yellow]Moderate: {summary.total_moderate}[/yellow]  "
        f"[green]No gap: {summary.total_no_gap}[/green]\n"
        f"Average impact: {format_percent(summary.avg_impact)}",
        title="Organisation Readiness",
    ))

    table = Table(title="Department Risk")
    table.add_column("Department", style="cyan")
    table.add_column("Risk", justify="right")
    table.add_column("Skills", justify="right")
    table.add_column("Critical", justify="right", style="red")
    table.add_column("Moderate", justify="right", style="yellow")
    table.add_column("Quick Wins", justify="right", style="green")
    for analysis in result.departments:
        table.add_row(
            analysis.department.display_label,
            f"{analysis.risk_score:.4f}",
            str(len(analysis.priority_actions)),
            str(analysis.severity_counts.get("Critical", 0)),
            str(analysis.severity_counts.get("Moderate", 0)),
            str(len(analysis.quick_wins)),
        )
    console.print(table)

    top = Table(title=f"Top {len(result.top_priority_skills)} Priority Skills")
    top.add_column("#", justify="right")
    top.add_column("Skill", style="cyan")
    top.add_column("Department")
    top.add_column("Severity")
    top.add_column("Risk", justify="right")
    for i, entry in enumerate(result.top_priority_skills, 1):
        top.add_row(
            str(i),
            entry.skill.green_skill,
            entry.skill.department,
            entry.skill.severity.value,
            f"{entry.risk_score:.4f}",
        )
    console.print(top)

    if verbose:
        for analysis in result.departments:
            display_department(analysis, verbose=False)

    if result.processing_warnings:
        console.print("\n[yellow]Warnings:[/yellow]")
        for warning in result.processing_warnings:
            console.print(f"  • {warning}")


def display_department(analysis: UnitAnalysis, verbose: bool = False):
    """Display priority actions for one department."""
    dept = analysis.department
    console.print(f"\n[bold blue]{dept.display_label}[/bold blue] (risk {analysis.risk_score:.4f})")

    profile = analysis.profile
    if profile.overview and profile.overview.definition:
        console.print(f"[dim]{profile.overview.definition}[/dim]")
    if profile.scorecard_key:
        sc = profile.scorecard
        console.print(
            f"Scorecard: target {format_percent(sc.desired_knowledge)}, "
            f"current {format_percent(sc.current_capability)}, "
            f"gap {format_percent(sc.gap)} ({sc.priority_level})"
        )

    for i, action in enumerate(analysis.priority_actions, 1):
        skill = action.skill
        console.print(
            f"  [bold]{i}. {skill.green_skill}[/bold] "
            f"[dim]({skill.skill_family}, {skill.severity.value})[/dim] "
            f"risk {action.risk_score:.4f}"
        )
        console.print(f"     {action.current_maturity} → {action.target_maturity}")
        if verbose:
            if action.action:
                console.print(f"     Action: {action.action}")
            for step in action.learning_pathway:
                console.print(f"       - {step}")


def _print_skill_table(title: str, skills: list[GreenSkill], engine: GapAnalysisEngine):
    table = Table(title=title)
    table.add_column("Skill", style="cyan")
    table.add_column("Department")
    table.add_column("Theme")
    table.add_column("Gap", justify="right")
    table.add_column("Avg Impact", justify="right")
    table.add_column("Risk", justify="right")
    for skill in skills:
        table.add_row(
            skill.green_skill,
            skill.department,
            skill.theme,
            str(skill.gap),
            format_percent(skill.mean_impact()),
            f"{engine.scorer.score_skill(skill):.4f}",
        )
    console.print(table)


if __name__ == "__main__":
    main()
