from __future__ import annotations

"""
Navigation Shell Assembly.

Wires the providers, the router and the navbar controller around a single
dispatcher. ``attach_navshell`` binds the whole graph to a CustomTkinter
root window so every delivery runs on its main loop.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import customtkinter as ctk

from navshell.core.reactive.observable import Dispatcher, ImmediateDispatcher
from navshell.core.services.router import Router
from navshell.core.services.stores import (
    ApplicationStore,
    LanguageStore,
    ProjectStore,
    SessionStore,
    WarningStore,
)
from navshell.domain import config as cfg
from navshell.infra.logging import LoggingConfig, configure_logging, get_default_log_path
from navshell.interface.gui.controllers.navbar_controller import NavShellController
from navshell.interface.gui.dispatch import TkDispatcher

logger = logging.getLogger(__name__)


@dataclass
class NavShell:
    """Providers, router and controller sharing one event loop."""
    dispatcher: Dispatcher
    session_store: SessionStore
    language_store: LanguageStore
    project_store: ProjectStore
    application_store: ApplicationStore
    warning_store: WarningStore
    router: Router
    controller: NavShellController

    def close(self) -> None:
        self.controller.dispose()


def build_navshell(dispatcher: Optional[Dispatcher] = None, persist_locale: bool = True) -> NavShell:
    """
    Create every provider and the navbar controller on one dispatcher.

    Args:
        dispatcher: Event loop. A private ImmediateDispatcher when omitted.
        persist_locale: Whether the locale is read from and saved to the config file.

    Returns:
        NavShell: The assembled graph.
    """
    loop = dispatcher or ImmediateDispatcher()

    session_store = SessionStore(loop)
    language_store = LanguageStore(loop, persist=persist_locale)
    project_store = ProjectStore(loop)
    application_store = ApplicationStore(loop)
    warning_store = WarningStore(loop)
    router = Router(loop)

    controller = NavShellController(
        session_store,
        language_store,
        project_store,
        application_store,
        warning_store,
        router,
    )
    logger.debug("NavShell: Providers and navbar controller assembled.")

    return NavShell(
        dispatcher=loop,
        session_store=session_store,
        language_store=language_store,
        project_store=project_store,
        application_store=application_store,
        warning_store=warning_store,
        router=router,
        controller=controller,
    )


def attach_navshell(app: ctk.CTk) -> NavShell:
    """
    Build the navigation shell on the main loop of a CustomTkinter window.

    Configures logging (persisted level, default log file) and disposes the controller
    when the window is destroyed.
    """
    configure_logging(LoggingConfig.for_desktop(cfg.load_log_level(), get_default_log_path()))

    shell = build_navshell(TkDispatcher(app))
    app.bind("<Destroy>", lambda event: shell.close() if event.widget is app else None, add="+")
    app.bind("<Escape>", shell.controller.handle_escape, add="+")
    logger.info("NavShell: Attached to the main window.")
    return shell
