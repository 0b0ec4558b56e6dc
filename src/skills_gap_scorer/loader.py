"""Snapshot and knowledge-resource loading from local files.

Reads department, skill and edge records and the knowledge resource from
JSON or YAML files and validates them into schema models. This is the
only place where malformed input raises; the scoring core never does.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import ValidationError

from .schema import (
    Department,
    DepartmentEdge,
    GreenSkill,
    KnowledgeResource,
    Snapshot,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class SnapshotLoadError(Exception):
    """Raised when a snapshot or knowledge resource cannot be loaded."""


def _read_data(path: PathLike) -> Any:
    """Parse a JSON or YAML file based on its extension."""
    path = Path(path)
    if not path.exists():
        raise SnapshotLoadError(f"File not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            if path.suffix.lower() in (".yaml", ".yml"):
                return yaml.safe_load(f)
            return json.load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SnapshotLoadError(f"Could not parse {path}: {e}") from e


def _records(data: Any, key: str, path: PathLike) -> list:
    """Accept either a bare list or an object wrapping the list under ``key``."""
    if data is None:
        return []
    if isinstance(data, dict):
        data = data.get(key, [])
    if not isinstance(data, list):
        raise SnapshotLoadError(f"Expected a list of {key} in {path}")
    return data


def _validate_list(model, records: list, key: str, path: PathLike) -> list:
    try:
        return [model.model_validate(r) for r in records]
    except ValidationError as e:
        raise SnapshotLoadError(f"Invalid {key} in {path}: {e}") from e


def load_snapshot(
    departments_path: PathLike,
    skills_path: PathLike,
    edges_path: Optional[PathLike] = None,
) -> Snapshot:
    """Load a snapshot from separate department, skill and edge files.

    Args:
        departments_path: JSON/YAML list of department records
        skills_path: JSON/YAML list of skill records
        edges_path: Optional JSON/YAML list of department edges

    Returns:
        Validated Snapshot
    """
    departments = _validate_list(
        Department, _records(_read_data(departments_path), "departments", departments_path),
        "departments", departments_path,
    )
    skills = _validate_list(
        GreenSkill, _records(_read_data(skills_path), "skills", skills_path),
        "skills", skills_path,
    )
    edges = []
    if edges_path:
        edges = _validate_list(
            DepartmentEdge, _records(_read_data(edges_path), "edges", edges_path),
            "edges", edges_path,
        )

    logger.info(
        "Loaded snapshot: %d departments, %d skills, %d edges",
        len(departments), len(skills), len(edges),
    )
    return Snapshot(departments=departments, skills=skills, edges=edges)


def load_snapshot_file(path: PathLike) -> Snapshot:
    """Load a single-file snapshot with departments, skills and edges keys."""
    data = _read_data(path)
    if not isinstance(data, dict):
        raise SnapshotLoadError(f"Expected an object with departments and skills in {path}")

    try:
        snapshot = Snapshot.model_validate(data)
    except ValidationError as e:
        raise SnapshotLoadError(f"Invalid snapshot in {path}: {e}") from e

    logger.info(
        "Loaded snapshot %s: %d departments, %d skills",
        path, len(snapshot.departments), len(snapshot.skills),
    )
    return snapshot


def load_knowledge_resource(path: PathLike) -> KnowledgeResource:
    """Load the knowledge resource (overview, maturity_map, scorecard, actions)."""
    data = _read_data(path)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise SnapshotLoadError(f"Expected an object in knowledge resource {path}")

    try:
        resource = KnowledgeResource.model_validate(data)
    except ValidationError as e:
        raise SnapshotLoadError(f"Invalid knowledge resource in {path}: {e}") from e

    logger.info(
        "Loaded knowledge resource %s: %d overviews, %d maturity maps, %d scorecards, %d action lists",
        path, len(resource.overview), len(resource.maturity_map),
        len(resource.scorecard), len(resource.actions),
    )
    return resource
