from __future__ import annotations

"""
Warning Grouping Service.

Turns the flat list of warning records returned by the warnings backend
into the per-project WarningTree snapshot consumed by the navbar.
"""

import logging
from typing import Dict, Iterable, List, Tuple

from navshell.domain.warning_models import (
    ApplicationWarnings,
    PipelineWarnings,
    ProjectWarnings,
    WarningItem,
    WarningKind,
    WarningTree,
)

logger = logging.getLogger(__name__)


class _ProjectBucket:
    """Mutable accumulator used only while a snapshot is being built."""

    def __init__(self) -> None:
        self.variables: List[WarningItem] = []
        self.pipelines: Dict[str, Tuple[List[WarningItem], List[WarningItem]]] = {}
        self.applications: Dict[str, Tuple[List[WarningItem], List[WarningItem]]] = {}

    def freeze(self) -> ProjectWarnings:
        return ProjectWarnings(
            variables=tuple(self.variables),
            pipelines={
                name: PipelineWarnings(jobs=tuple(jobs), parameters=tuple(params))
                for name, (jobs, params) in self.pipelines.items()
            },
            applications={
                name: ApplicationWarnings(variables=tuple(variables), actions=tuple(actions))
                for name, (variables, actions) in self.applications.items()
            },
        )


def group_warnings(records: Iterable[WarningItem]) -> WarningTree:
    """
    Group warning records by project, pipeline and application.

    Placement rules:
        VARIABLE with an application name -> application variables.
        VARIABLE without one               -> project variables.
        JOB / PARAMETER                    -> pipeline (pipeline name required).
        ACTION                             -> application (application name required).

    Records lacking the name their kind requires, or lacking a project key,
    are logged and skipped. Input order is preserved inside every sequence.

    Args:
        records: Warning records in backend order.

    Returns:
        WarningTree: New immutable snapshot.
    """
    buckets: Dict[str, _ProjectBucket] = {}

    for w in records:
        if not w.project_key:
            logger.warning(f"Warning {w.id} has no project key. Skipped.")
            continue

        bucket = buckets.setdefault(w.project_key, _ProjectBucket())

        if w.kind in (WarningKind.JOB, WarningKind.PARAMETER):
            if not w.pipeline_name:
                logger.warning(f"Warning {w.id} ({w.kind.value}) has no pipeline name. Skipped.")
                continue
            jobs, params = bucket.pipelines.setdefault(w.pipeline_name, ([], []))
            (jobs if w.kind is WarningKind.JOB else params).append(w)

        elif w.kind is WarningKind.ACTION:
            if not w.application_name:
                logger.warning(f"Warning {w.id} (action) has no application name. Skipped.")
                continue
            bucket.applications.setdefault(w.application_name, ([], []))[1].append(w)

        elif w.application_name:
            bucket.applications.setdefault(w.application_name, ([], []))[0].append(w)

        else:
            bucket.variables.append(w)

    return {key: bucket.freeze() for key, bucket in buckets.items()}
