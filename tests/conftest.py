from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures: warning trees, navigation projects and a fully wired
   navigation shell running on an ImmediateDispatcher.
"""

import os
import sys
from types import SimpleNamespace
from typing import Tuple

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from navshell.core.reactive.observable import ImmediateDispatcher  # noqa: E402
from navshell.core.services.router import Router  # noqa: E402
from navshell.core.services.stores import (  # noqa: E402
    ApplicationStore,
    LanguageStore,
    ProjectStore,
    SessionStore,
    WarningStore,
)
from navshell.domain.navigation_models import Application, Project  # noqa: E402
from navshell.domain.warning_models import WarningTree, warning_tree_from_dict  # noqa: E402
from navshell.interface.gui.controllers.navbar_controller import NavShellController  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def build_tree_scenario() -> WarningTree:
    """
    Return the single-pipeline tree of the reference scenario.

    proj1: 1 variable, pipeline 'build' with 2 jobs and no parameters,
    no applications.
    """
    return warning_tree_from_dict({
        "proj1": {
            "variables": ["v1"],
            "pipelines": {"build": {"jobs": ["j1", "j2"], "parameters": []}},
            "applications": {},
        }
    })


@pytest.fixture
def rich_tree() -> WarningTree:
    """
    Return a tree with several pipelines and applications.

    proj1: variables=2
        pipelines: build (jobs=2, params=1), deploy (jobs=0, params=3)
        applications: api (vars=1, actions=2), web (vars=0, actions=1)
    proj2: variables=0, pipelines: nightly (jobs=4)
    """
    return warning_tree_from_dict({
        "proj1": {
            "variables": ["v1", "v2"],
            "pipelines": {
                "build": {"jobs": ["j1", "j2"], "parameters": ["p1"]},
                "deploy": {"jobs": [], "parameters": ["p1", "p2", "p3"]},
            },
            "applications": {
                "api": {"variables": ["av1"], "actions": ["a1", "a2"]},
                "web": {"actions": ["a1"]},
            },
        },
        "proj2": {
            "pipelines": {"nightly": {"jobs": ["j1", "j2", "j3", "j4"]}},
        },
    })


@pytest.fixture
def nav_projects() -> Tuple[Project, ...]:
    """Two projects whose application names mix case around 'api'."""
    return (
        Project(key="p1", name="Platform", applications=(
            Application(name="api-gateway", project_key="p1"),
            Application(name="web-ui", project_key="p1"),
        )),
        Project(key="p2", name="Workers", applications=(
            Application(name="API-worker", project_key="p2"),
        )),
    )


@pytest.fixture
def recent_apps() -> Tuple[Application, ...]:
    return (
        Application(name="web-ui", project_key="p1"),
        Application(name="billing", project_key="p3"),
    )


@pytest.fixture
def shell() -> SimpleNamespace:
    """
    Wire every provider, the router and the controller on one dispatcher.

    The locale is not persisted so tests never touch the user config file.
    """
    loop = ImmediateDispatcher()
    ns = SimpleNamespace(
        dispatcher=loop,
        session=SessionStore(loop),
        language=LanguageStore(loop, persist=False),
        projects=ProjectStore(loop),
        applications=ApplicationStore(loop),
        warnings=WarningStore(loop),
        router=Router(loop),
    )
    ns.controller = NavShellController(
        ns.session, ns.language, ns.projects, ns.applications, ns.warnings, ns.router
    )
    yield ns
    ns.controller.dispose()
