from __future__ import annotations

"""
Warning Count Aggregation.

Computes the number of outstanding warnings shown in the navbar badge for
the current route. The count always includes the project-level variable
warnings, then:

- on a pipeline page, the job and parameter warnings of that pipeline;
- on an application page, the variable and action warnings of that application;
  a pipeline name missing from the tree does not hide a known application;
- on the project page, the warnings of every pipeline and every application.

A route and the warnings tree can briefly disagree while either is being
updated; a name missing from the tree then contributes nothing.
"""

from typing import Optional

from navshell.domain.navigation_models import RouteScope
from navshell.domain.warning_models import WarningTree


def compute_warning_count(tree: Optional[WarningTree], scope: RouteScope) -> int:
    """
    Count the warnings visible from a route scope.

    Args:
        tree: Latest warnings snapshot. None is treated as empty.
        scope: Scope derived from the current route.

    Returns:
        int: Non-negative warning count.
    """
    if not tree or not scope.project_key:
        return 0

    project = tree.get(scope.project_key)
    if project is None:
        return 0

    count = project.variable_count

    pipeline = project.pipelines.get(scope.pipeline_name) if scope.pipeline_name else None
    application = project.applications.get(scope.application_name) if scope.application_name else None

    # Pipeline page takes priority if a route ever names both
    if pipeline is not None:
        count += pipeline.count
    elif application is not None:
        count += application.count
    elif not scope.pipeline_name and not scope.application_name:
        count += sum(p.count for p in project.pipelines.values())
        count += sum(a.count for a in project.applications.values())
    return count
