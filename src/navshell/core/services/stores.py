from __future__ import annotations

"""
Navigation Data Stores.

In-process providers feeding the navigation shell. Each store owns one
SnapshotSubject and replaces its snapshot wholesale on every update; the
navbar only ever subscribes and reads.
"""

import logging
from typing import Iterable, Optional, Sequence, Tuple

from navshell.core.reactive.observable import Dispatcher, SnapshotSubject
from navshell.core.services.warnings import group_warnings
from navshell.domain import config as cfg
from navshell.domain import constants as const
from navshell.domain.navigation_models import Application, Project, User
from navshell.domain.warning_models import WarningItem, WarningTree

logger = logging.getLogger(__name__)


class SessionStore:
    """Publishes the authenticated user, or None when logged out."""

    def __init__(self, dispatcher: Optional[Dispatcher] = None):
        self._user: SnapshotSubject[Optional[User]] = SnapshotSubject(None, dispatcher)

    def get_user(self) -> SnapshotSubject[Optional[User]]:
        return self._user

    def login(self, user: User) -> None:
        logger.info(f"Session: '{user.username}' signed in.")
        self._user.emit(user)

    def logout(self) -> None:
        logger.info("Session: signed out.")
        self._user.emit(None)


class LanguageStore:
    """
    Publishes the active locale code and persists it in the app state.

    Args:
        dispatcher: Event loop for deliveries.
        persist: Whether ``set`` writes to the config file.
    """

    def __init__(self, dispatcher: Optional[Dispatcher] = None, persist: bool = True):
        self._persist = persist
        initial = cfg.load_locale() if persist else const.DEFAULT_LOCALE
        self._locale: SnapshotSubject[str] = SnapshotSubject(initial, dispatcher)

    def get(self) -> SnapshotSubject[str]:
        return self._locale

    def set(self, code: str) -> None:
        if code not in const.SUPPORTED_LOCALES:
            logger.warning(f"Language: '{code}' is not a bundled locale.")
        if self._persist:
            cfg.save_locale(code)
        self._locale.emit(code)


class ProjectStore:
    """Publishes the navigation project list. Empty until loaded."""

    def __init__(self, dispatcher: Optional[Dispatcher] = None):
        self._projects: SnapshotSubject[Tuple[Project, ...]] = SnapshotSubject((), dispatcher)

    def get_projects_list(self) -> SnapshotSubject[Tuple[Project, ...]]:
        return self._projects

    def set_projects(self, projects: Sequence[Project]) -> None:
        self._projects.emit(tuple(projects))


class ApplicationStore:
    """Publishes the recently viewed applications. None until loaded."""

    def __init__(self, dispatcher: Optional[Dispatcher] = None):
        self._recent: SnapshotSubject[Optional[Tuple[Application, ...]]] = SnapshotSubject(None, dispatcher)

    def get_recent_applications(self) -> SnapshotSubject[Optional[Tuple[Application, ...]]]:
        return self._recent

    def set_recent_applications(self, applications: Sequence[Application]) -> None:
        self._recent.emit(tuple(applications[:const.MAX_RECENT_APPLICATIONS]))

    def update_recent_application(self, application: Application) -> None:
        """
        Move an application to the head of the recent list.

        Duplicates (same project and name) are dropped and the list is
        capped at MAX_RECENT_APPLICATIONS entries.
        """
        current = self._recent.value or ()
        rest = tuple(
            a for a in current
            if (a.project_key, a.name) != (application.project_key, application.name)
        )
        self._recent.emit(((application,) + rest)[:const.MAX_RECENT_APPLICATIONS])


class WarningStore:
    """Publishes the full WarningTree on every change."""

    def __init__(self, dispatcher: Optional[Dispatcher] = None):
        self._warnings: SnapshotSubject[WarningTree] = SnapshotSubject({}, dispatcher)

    def get_warnings(self) -> SnapshotSubject[WarningTree]:
        return self._warnings

    def set_tree(self, tree: WarningTree) -> None:
        self._warnings.emit(tree)

    def update_warnings(self, records: Iterable[WarningItem]) -> None:
        tree = group_warnings(records)
        logger.debug(f"Warnings: Snapshot rebuilt for {len(tree)} project(s).")
        self._warnings.emit(tree)
