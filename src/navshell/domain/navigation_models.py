from __future__ import annotations

"""
Navigation Domain Models.

Immutable records for the entities shown in the navigation shell (user,
projects, applications), the route scope derived from the current URL and
the project selection state of the navbar.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from navshell.domain import constants as const

# -----------------------------------------------------------------------------
# ENTITIES
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class User:
    """
    Authenticated user as published by the session provider.

    Attributes:
        username: Login identifier.
        fullname: Display name.
        email: Contact address.
        admin: Whether the user has administrator rights.
    """
    username: str
    fullname: str = ""
    email: str = ""
    admin: bool = False


@dataclass(frozen=True)
class Application:
    """
    Application entry of a project.

    Attributes:
        name: Application name, unique within its project.
        project_key: Key of the owning project.
    """
    name: str
    project_key: str

    @property
    def route(self) -> str:
        """Navigation path of the application page."""
        return const.APPLICATION_ROUTE.format(key=self.project_key, app_name=self.name)


@dataclass(frozen=True)
class Project:
    """
    Project entry of the navigation list.

    Attributes:
        key: Unique project key.
        name: Display name.
        applications: Applications of the project, in display order.
    """
    key: str
    name: str = ""
    applications: Tuple[Application, ...] = ()

    @property
    def route(self) -> str:
        """Navigation path of the project page."""
        return const.PROJECT_ROUTE.format(key=self.key)

# -----------------------------------------------------------------------------
# ROUTING
# -----------------------------------------------------------------------------

class ScopeLevel(str, Enum):
    """Drill-down level implied by the current route."""
    NONE = "none"
    PROJECT = "project"
    PIPELINE = "pipeline"
    APPLICATION = "application"


@dataclass(frozen=True)
class RouteScope:
    """
    Scope derived from the current route parameters.

    A well-formed route names at most one of pipeline or application; when
    both are absent the scope is the whole project.

    Attributes:
        project_key: Key of the project in the route, if any.
        pipeline_name: Pipeline drilled into, if any.
        application_name: Application drilled into, if any.
    """
    project_key: Optional[str] = None
    pipeline_name: Optional[str] = None
    application_name: Optional[str] = None

    @property
    def level(self) -> ScopeLevel:
        if not self.project_key:
            return ScopeLevel.NONE
        if self.pipeline_name:
            return ScopeLevel.PIPELINE
        if self.application_name:
            return ScopeLevel.APPLICATION
        return ScopeLevel.PROJECT


@dataclass(frozen=True)
class RouteNode:
    """
    One level of the activated route tree.

    Attributes:
        params: Parameters captured at this level.
        children: Nested activated routes.
    """
    params: Dict[str, str] = field(default_factory=dict)
    children: List["RouteNode"] = field(default_factory=list)

# -----------------------------------------------------------------------------
# SELECTION STATE
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class NoProjectSelected:
    """Navbar shows the recent applications (or global filter results)."""


@dataclass(frozen=True)
class ProjectSelected:
    """Navbar shows the applications of one project."""
    key: str


Selection = Union[NoProjectSelected, ProjectSelected]


def projects_from_dicts(raw: List[Dict[str, Any]]) -> Tuple[Project, ...]:
    """
    Build Project records from plain dictionaries.

    Accepts ``{"key": ..., "name": ..., "applications": [{"name": ...}, ...]}``.
    Applications inherit the project key when they do not carry one.
    """
    projects = []
    for item in raw:
        key = str(item["key"])
        apps = tuple(
            Application(name=str(a["name"]), project_key=str(a.get("project_key", key)))
            for a in item.get("applications") or []
        )
        projects.append(Project(key=key, name=str(item.get("name", "")), applications=apps))
    return tuple(projects)
