from __future__ import annotations

"""
In-Process Router.

Resolves navigation paths against the route table into an activated route
tree, publishes a navigation-end notification once the new tree is in
place, and answers route parameter queries for the current route.
"""

import logging
from typing import Dict, List, Optional, Tuple
from urllib.parse import unquote

from navshell.core.reactive.observable import Dispatcher, EventSignal, get_default_dispatcher
from navshell.core.services.route_scope import flatten_route_params
from navshell.domain import constants as const
from navshell.domain.navigation_models import RouteNode

logger = logging.getLogger(__name__)

RouteTable = List[List[Tuple[str, ...]]]


class Router:
    """
    Navigation sink, route-change notifier and parameter extractor.

    ``navigate`` is posted on the dispatcher: a navigation requested from
    inside a handler completes after that handler returns.

    Args:
        dispatcher: Event loop used for navigation and notifications.
        routes: Route table, defaults to the project/pipeline/application routes.
    """

    def __init__(self, dispatcher: Optional[Dispatcher] = None, routes: Optional[RouteTable] = None):
        self._dispatcher = dispatcher or get_default_dispatcher()
        self._routes = routes if routes is not None else const.ROUTE_TABLE
        self._url = const.HOME_ROUTE
        self._root = RouteNode()
        self.navigation_end = EventSignal(self._dispatcher)

    @property
    def url(self) -> str:
        return self._url

    @property
    def root(self) -> RouteNode:
        return self._root

    def navigate(self, path: str) -> None:
        """Request navigation to ``path``."""
        self._dispatcher.post(lambda: self._complete_navigation(path))

    def get_route_params(self) -> Dict[str, str]:
        """Flattened parameters of the current route."""
        return flatten_route_params(self._root)

    def resolve(self, path: str) -> RouteNode:
        """
        Match a path against the route table.

        Args:
            path: Absolute navigation path, query string allowed.

        Returns:
            RouteNode: Activated route tree; a bare root for unknown paths.
        """
        segments = [unquote(s) for s in path.split("?", 1)[0].split("/") if s]

        for levels in self._routes:
            pattern = [seg for level in levels for seg in level]
            if len(pattern) != len(segments):
                continue
            if not all(p.startswith(":") or p == s for p, s in zip(pattern, segments)):
                continue

            children: List[RouteNode] = []
            pos = len(pattern)
            # Build the nested levels from the innermost outwards
            for level in reversed(levels):
                pos -= len(level)
                params = {
                    p[1:]: segments[pos + i]
                    for i, p in enumerate(level) if p.startswith(":")
                }
                children = [RouteNode(params=params, children=children)]
            return RouteNode(children=children)

        logger.debug(f"Router: No route matches '{path}'.")
        return RouteNode()

    def _complete_navigation(self, path: str) -> None:
        self._root = self.resolve(path)
        self._url = path
        logger.debug(f"Router: Navigation to '{path}' completed.")
        self.navigation_end.fire()
