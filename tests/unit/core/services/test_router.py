from __future__ import annotations

"""
Unit tests for the in-process Router.
"""

from unittest.mock import MagicMock

import pytest

from navshell.core.reactive.observable import ImmediateDispatcher
from navshell.core.services.router import Router


@pytest.fixture
def router() -> Router:
    return Router(ImmediateDispatcher())


@pytest.mark.parametrize("path, expected", [
    ("/project/proj1", {"key": "proj1"}),
    ("/project/proj1/pipeline/build", {"key": "proj1", "pipName": "build"}),
    ("/project/proj1/application/my%20app", {"key": "proj1", "appName": "my app"}),
    ("/project/proj1/application/api?tab=workflow", {"key": "proj1", "appName": "api"}),
    ("/", {}),
    ("/settings/user", {}),
])
def test_navigate_resolves_params(router: Router, path, expected) -> None:
    router.navigate(path)

    assert router.get_route_params() == expected
    assert router.url == path


def test_resolved_tree_nests_levels(router: Router) -> None:
    root = router.resolve("/project/proj1/pipeline/build")

    project_level = root.children[0]
    assert project_level.params == {"key": "proj1"}
    assert project_level.children[0].params == {"pipName": "build"}


def test_navigation_end_fires_after_params_are_updated(router: Router) -> None:
    seen = []
    router.navigation_end.connect(lambda: seen.append(router.get_route_params()))

    router.navigate("/project/p2")

    assert seen == [{"key": "p2"}]


def test_navigation_requested_in_handler_completes_afterwards(router: Router) -> None:
    """navigate() from inside a handler does not interrupt that handler."""
    trace = []

    def handler() -> None:
        trace.append(router.url)
        if router.url == "/project/a":
            router.navigate("/project/b")
            trace.append("handler-end")

    router.navigation_end.connect(handler)
    router.navigate("/project/a")

    assert trace == ["/project/a", "handler-end", "/project/b"]


def test_disconnected_listener_is_not_notified(router: Router) -> None:
    callback = MagicMock()
    router.navigation_end.connect(callback).unsubscribe()

    router.navigate("/project/p1")

    callback.assert_not_called()
