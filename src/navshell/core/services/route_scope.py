from __future__ import annotations

"""
Route Scope Derivation.

Flattens the activated route tree into a single parameter mapping and
extracts the drill-down scope (project, pipeline, application) used by the
warning counter.
"""

from typing import Dict, Mapping, Optional

from navshell.domain import constants as const
from navshell.domain.navigation_models import RouteNode, RouteScope


def flatten_route_params(node: Optional[RouteNode], params: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    """
    Merge the parameters of every level of a route tree.

    Levels are visited depth first; a parameter defined on a deeper level
    overrides the same name on a shallower one.

    Args:
        node: Root of the activated route tree.
        params: Accumulator, mostly for recursion.

    Returns:
        Dict[str, str]: Flat parameter mapping.
    """
    out: Dict[str, str] = dict(params or {})
    if node is None:
        return out

    out.update(node.params)
    for child in node.children:
        out = flatten_route_params(child, out)
    return out


def derive_scope(raw_params: Optional[Mapping[str, str]]) -> RouteScope:
    """
    Build the RouteScope for a flat route parameter mapping.

    Absent keys and empty values both map to None.

    Args:
        raw_params: Parameters of the current route.

    Returns:
        RouteScope: Fresh scope snapshot.
    """
    params = raw_params or {}
    return RouteScope(
        project_key=params.get(const.PARAM_PROJECT_KEY) or None,
        pipeline_name=params.get(const.PARAM_PIPELINE_NAME) or None,
        application_name=params.get(const.PARAM_APPLICATION_NAME) or None,
    )
