from __future__ import annotations

"""
Navigation Bar Controller.

Keeps the navbar state consistent with the session, locale, project,
recent-application and warning providers and with the router. It derives
the route scope on every completed navigation and recomputes the warning
badge whenever the scope or the warnings snapshot changes. All provider
subscriptions are owned by a SubscriptionSet released on ``dispose()``.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from navshell.core.reactive.subscriptions import Subscription, SubscriptionSet
from navshell.core.services.aggregator import compute_warning_count
from navshell.core.services.route_scope import derive_scope
from navshell.core.services.router import Router
from navshell.core.services.stores import (
    ApplicationStore,
    LanguageStore,
    ProjectStore,
    SessionStore,
    WarningStore,
)
from navshell.domain import constants as const
from navshell.domain.navigation_models import (
    Application,
    NoProjectSelected,
    Project,
    ProjectSelected,
    RouteScope,
    Selection,
    User,
)
from navshell.domain.warning_models import WarningTree

logger = logging.getLogger(__name__)

# ==============================================================================
# NAVBAR CONTROLLER
# ==============================================================================

class NavShellController:
    """
    State holder behind the navigation bar.

    Exposes to the view: ``current_user``, ``current_locale``,
    ``nav_projects``, ``list_applications``, ``selected_project_key``,
    ``selected_application``, ``current_route`` and ``warnings_count``.
    """

    def __init__(
            self,
            session_store: SessionStore,
            language_store: LanguageStore,
            project_store: ProjectStore,
            application_store: ApplicationStore,
            warning_store: WarningStore,
            router: Router
    ):
        """
        Subscribe to every provider.

        Args:
            session_store: Current user provider.
            language_store: Locale provider.
            project_store: Navigation project list provider.
            application_store: Recently viewed applications provider.
            warning_store: Warnings tree provider.
            router: Route notifier, parameter extractor and navigation sink.
        """
        self._project_store = project_store
        self._language_store = language_store
        self._router = router

        self._subscriptions = SubscriptionSet()
        self._project_subscription: Optional[Subscription] = None

        self.current_user: Optional[User] = None
        self.current_locale: Optional[str] = None

        self.nav_projects: Optional[Tuple[Project, ...]] = None
        self.nav_recent_apps: Optional[Tuple[Application, ...]] = None
        self.list_applications: List[Application] = []

        self.selected_project_key: Optional[str] = None
        self.selected_application: Optional[str] = None

        self.warnings: Optional[WarningTree] = None
        self.current_route: Dict[str, str] = dict(router.get_route_params())
        self.scope: RouteScope = derive_scope(self.current_route)
        self.warnings_count = 0

        subs = self._subscriptions
        subs.add(session_store.get_user().subscribe(self.on_user_changed))
        subs.add(language_store.get().subscribe(self._on_locale_changed))
        subs.add(warning_store.get_warnings().subscribe(self.on_warnings_changed))
        subs.add(application_store.get_recent_applications().subscribe(
            self.on_recent_applications_changed
        ))
        subs.add(router.navigation_end.connect(self.on_route_changed))

    # -------------------------------------------------------------------------
    # LIFECYCLE
    # -------------------------------------------------------------------------

    @property
    def disposed(self) -> bool:
        return self._subscriptions.disposed

    def dispose(self) -> None:
        """Release every provider subscription. Handlers become no-ops."""
        if self.disposed:
            return
        self._subscriptions.dispose()
        self._project_subscription = None
        logger.debug("Navbar: Controller disposed.")

    def __enter__(self) -> NavShellController:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.dispose()

    # -------------------------------------------------------------------------
    # PROVIDER HANDLERS
    # -------------------------------------------------------------------------

    def on_user_changed(self, user: Optional[User]) -> None:
        """Record the user and, once signed in, listen to the project list."""
        if self.disposed:
            return
        self.current_user = user
        if user is not None:
            self._refresh_projects()

    def on_projects_changed(self, projects: Tuple[Project, ...]) -> None:
        """Replace the project list. An empty emission means 'still loading'."""
        if self.disposed:
            return
        if projects:
            self.nav_projects = tuple(projects)

    def on_recent_applications_changed(self, applications: Optional[Tuple[Application, ...]]) -> None:
        if self.disposed or applications is None:
            return
        self.nav_recent_apps = tuple(applications)
        self.list_applications = list(self.nav_recent_apps)

    def on_warnings_changed(self, tree: WarningTree) -> None:
        if self.disposed:
            return
        self.warnings = tree
        self._update_warning_count()

    def on_route_changed(self, raw_params: Optional[Mapping[str, str]] = None) -> None:
        """
        Recompute the route scope, then the warning count.

        Args:
            raw_params: Flat route parameters. Queried from the router when omitted.
        """
        if self.disposed:
            return
        if raw_params is None:
            raw_params = self._router.get_route_params()

        self.current_route = dict(raw_params)
        self.scope = derive_scope(self.current_route)
        self._update_warning_count()

    def _on_locale_changed(self, code: str) -> None:
        if self.disposed:
            return
        self.current_locale = code

    # -------------------------------------------------------------------------
    # USER ACTIONS
    # -------------------------------------------------------------------------

    def change_locale(self, code: str) -> None:
        """Forward the locale picked in the language dropdown."""
        if self.disposed:
            return
        self.current_locale = code
        self._language_store.set(code)

    def select_all_projects(self) -> None:
        """Go back to the recently viewed applications."""
        if self.disposed:
            return
        self.list_applications = list(self.nav_recent_apps or ())

    def select_project(self, key: Optional[str]) -> None:
        """
        Show the applications of a project and open its page.

        Args:
            key: Key of a project from ``nav_projects``, or None to go back
                to the recent applications.
        """
        if self.disposed:
            return

        if key is None:
            self.selected_project_key = None
            self.select_all_projects()
            return

        project = next((p for p in self.nav_projects or () if p.key == key), None)
        if project is None:
            logger.error(f"Navbar: Project '{key}' is not in the navigation list. Selection ignored.")
            return

        self.selected_project_key = key
        self.list_applications = list(project.applications)
        self._router.navigate(project.route)

    def select_application(self, route: Optional[str]) -> None:
        """Open an application page. None (nothing picked) is ignored."""
        if self.disposed or route is None:
            return
        self.selected_application = None
        self._router.navigate(route)

    def handle_escape(self, event: Any) -> None:
        """Cancel the current drill-down when Escape is pressed."""
        if self.disposed or _event_key(event) != const.ESCAPE_KEY:
            return
        self.selected_project_key = None
        self.selected_application = None
        self.select_all_projects()

    def filter_applications(self, text: str) -> None:
        """
        Search applications of every project by name.

        Only active while no project is selected. Matching is a
        case-insensitive substring test; results keep project order, then
        application order within each project.
        """
        if self.disposed or self.selected_project_key is not None or self.nav_projects is None:
            return

        needle = (text or "").casefold()
        self.list_applications = [
            app
            for project in self.nav_projects
            for app in project.applications
            if needle in app.name.casefold()
        ]

    # -------------------------------------------------------------------------
    # DERIVED STATE
    # -------------------------------------------------------------------------

    @property
    def selection(self) -> Selection:
        if self.selected_project_key is None:
            return NoProjectSelected()
        return ProjectSelected(self.selected_project_key)

    def _refresh_projects(self) -> None:
        if self._project_subscription is not None:
            self._subscriptions.discard(self._project_subscription)
        self._project_subscription = self._subscriptions.add(
            self._project_store.get_projects_list().subscribe(self.on_projects_changed)
        )

    def _update_warning_count(self) -> None:
        self.warnings_count = compute_warning_count(self.warnings, self.scope)
        logger.debug(f"Navbar: {self.warnings_count} warning(s) for scope {self.scope.level.value}.")


def _event_key(event: Any) -> Optional[str]:
    """Key name of a Tk event (``keysym``), a DOM-like event (``key``) or a string."""
    if isinstance(event, str):
        return event
    return getattr(event, "keysym", None) or getattr(event, "key", None)
