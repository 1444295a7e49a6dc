from __future__ import annotations

"""
Warning Tree Domain Models.

Defines the immutable snapshot published by the warnings provider: warnings
grouped by project, then by pipeline or application name. Counts are always
derived from the length of the warning sequences, never stored.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

# -----------------------------------------------------------------------------
# WARNING RECORD
# -----------------------------------------------------------------------------

class WarningKind(str, Enum):
    """Kind of element a warning is attached to."""
    VARIABLE = "variable"
    JOB = "job"
    PARAMETER = "parameter"
    ACTION = "action"


@dataclass(frozen=True)
class WarningItem:
    """
    A single flagged item. Only counted by the navbar, never inspected.

    Attributes:
        id: Identifier assigned by the warnings backend.
        kind: Element category.
        project_key: Project the warning belongs to.
        pipeline_name: Pipeline for job and parameter warnings.
        application_name: Application for action and application variable warnings.
        action_name: Action involved, when relevant.
        element: Name of the flagged element (variable, parameter...).
        message: Human readable explanation.
    """
    id: int = 0
    kind: WarningKind = WarningKind.VARIABLE
    project_key: str = ""
    pipeline_name: Optional[str] = None
    application_name: Optional[str] = None
    action_name: Optional[str] = None
    element: str = ""
    message: str = ""

# -----------------------------------------------------------------------------
# TREE NODES
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class PipelineWarnings:
    """Warnings of one pipeline."""
    jobs: Tuple[WarningItem, ...] = ()
    parameters: Tuple[WarningItem, ...] = ()

    @property
    def count(self) -> int:
        return len(self.jobs) + len(self.parameters)


@dataclass(frozen=True)
class ApplicationWarnings:
    """Warnings of one application."""
    variables: Tuple[WarningItem, ...] = ()
    actions: Tuple[WarningItem, ...] = ()

    @property
    def count(self) -> int:
        return len(self.variables) + len(self.actions)


@dataclass(frozen=True)
class ProjectWarnings:
    """
    Warnings of one project.

    Attributes:
        variables: Project-level variable warnings.
        pipelines: Pipeline warnings keyed by pipeline name (read-only view).
        applications: Application warnings keyed by application name (read-only view).
    """
    variables: Tuple[WarningItem, ...] = ()
    pipelines: Mapping[str, PipelineWarnings] = field(default_factory=dict)
    applications: Mapping[str, ApplicationWarnings] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Freeze the name maps so a published snapshot cannot be edited in place
        object.__setattr__(self, "pipelines", MappingProxyType(dict(self.pipelines)))
        object.__setattr__(self, "applications", MappingProxyType(dict(self.applications)))

    @property
    def variable_count(self) -> int:
        return len(self.variables)


WarningTree = Dict[str, ProjectWarnings]

# -----------------------------------------------------------------------------
# LOADERS
# -----------------------------------------------------------------------------

def warning_tree_from_dict(raw: Mapping[str, Any]) -> WarningTree:
    """
    Build a WarningTree from its nested JSON representation.

    Expected shape::

        {"<project>": {
            "variables": [...],
            "pipelines": {"<name>": {"jobs": [...], "parameters": [...]}},
            "applications": {"<name>": {"variables": [...], "actions": [...]}}
        }}

    List items may be warning dictionaries or any placeholder value; they
    are only counted. Missing sections are treated as empty.

    Args:
        raw: Decoded JSON mapping.

    Returns:
        WarningTree: A fresh snapshot.

    Raises:
        ValueError: If a project, pipeline or application record is not a mapping,
            or a warning section is neither a list nor null.
    """
    if not isinstance(raw, Mapping):
        raise ValueError("Warnings tree must be a mapping of project keys.")

    tree: WarningTree = {}
    for project_key, project_raw in raw.items():
        _require_mapping(project_raw, f"project '{project_key}'")

        pipelines_raw = _section(project_raw, "pipelines")
        applications_raw = _section(project_raw, "applications")
        _require_mapping(pipelines_raw, f"pipelines of '{project_key}'")
        _require_mapping(applications_raw, f"applications of '{project_key}'")

        pipelines: Dict[str, PipelineWarnings] = {}
        for pip_name, pip_raw in pipelines_raw.items():
            _require_mapping(pip_raw, f"pipeline '{project_key}/{pip_name}'")
            pipelines[pip_name] = PipelineWarnings(
                jobs=_items(pip_raw.get("jobs"), WarningKind.JOB, project_key, pipeline_name=pip_name),
                parameters=_items(
                    pip_raw.get("parameters"), WarningKind.PARAMETER, project_key, pipeline_name=pip_name
                ),
            )

        applications: Dict[str, ApplicationWarnings] = {}
        for app_name, app_raw in applications_raw.items():
            _require_mapping(app_raw, f"application '{project_key}/{app_name}'")
            applications[app_name] = ApplicationWarnings(
                variables=_items(
                    app_raw.get("variables"), WarningKind.VARIABLE, project_key, application_name=app_name
                ),
                actions=_items(
                    app_raw.get("actions"), WarningKind.ACTION, project_key, application_name=app_name
                ),
            )

        tree[project_key] = ProjectWarnings(
            variables=_items(project_raw.get("variables"), WarningKind.VARIABLE, project_key),
            pipelines=pipelines,
            applications=applications,
        )
    return tree


def warning_item_from_dict(raw: Any) -> WarningItem:
    """
    Build a WarningItem from a flat backend record.

    Raises:
        ValueError: If the record is not an object or its kind is unknown.
    """
    if not isinstance(raw, Mapping):
        raise ValueError("Warning records must be JSON objects.")
    try:
        kind = WarningKind(str(raw.get("kind", WarningKind.VARIABLE.value)).lower())
    except ValueError:
        raise ValueError(f"Unknown warning kind '{raw.get('kind')}'.") from None

    return WarningItem(
        id=_warning_id(raw),
        kind=kind,
        project_key=str(raw.get("project_key", "")),
        pipeline_name=raw.get("pipeline_name"),
        application_name=raw.get("application_name"),
        action_name=raw.get("action_name"),
        element=str(raw.get("element", "")),
        message=str(raw.get("message", "")),
    )


def _require_mapping(value: Any, label: str) -> None:
    if not isinstance(value, Mapping):
        raise ValueError(f"Invalid warnings record for {label}: expected an object.")


def _section(record: Mapping[str, Any], name: str) -> Any:
    value = record.get(name)
    return {} if value is None else value


def _warning_id(record: Mapping[str, Any]) -> int:
    try:
        return int(record.get("id") or 0)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid warning id {record.get('id')!r}.") from None


def _items(
        values: Any,
        kind: WarningKind,
        project_key: str,
        pipeline_name: Optional[str] = None,
        application_name: Optional[str] = None,
) -> Tuple[WarningItem, ...]:
    """Convert a JSON list into WarningItem records, filling in the tree position."""
    if values is None:
        return ()
    if not isinstance(values, (list, tuple)):
        raise ValueError(
            f"Invalid {kind.value} warnings for '{project_key}': expected a list, "
            f"got {type(values).__name__}."
        )

    out = []
    for v in values:
        if isinstance(v, Mapping):
            out.append(WarningItem(
                id=_warning_id(v),
                kind=kind,
                project_key=project_key,
                pipeline_name=pipeline_name,
                application_name=application_name,
                action_name=v.get("action_name"),
                element=str(v.get("element", "")),
                message=str(v.get("message", "")),
            ))
        else:
            out.append(WarningItem(
                kind=kind,
                project_key=project_key,
                pipeline_name=pipeline_name,
                application_name=application_name,
                element=str(v),
            ))
    return tuple(out)
