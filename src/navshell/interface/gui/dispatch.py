from __future__ import annotations

"""
Tk Main Loop Dispatcher.

Delivers provider emissions on the CustomTkinter main loop. Stores may be
updated from worker threads (session refresh, warnings polling); every
delivery is re-posted through ``after(0, ...)`` so navbar handlers only
ever run on the UI thread, one at a time.
"""

import logging
from typing import Callable

import customtkinter as ctk

logger = logging.getLogger(__name__)


class TkDispatcher:
    """
    Dispatcher bound to a CustomTkinter root window.

    Args:
        app: Root window whose event loop runs the callbacks.
    """

    def __init__(self, app: ctk.CTk):
        self.app = app

    def post(self, callback: Callable[[], None]) -> None:
        self.app.after(0, lambda: self._run(callback))

    @staticmethod
    def _run(callback: Callable[[], None]) -> None:
        try:
            callback()
        except Exception as e:
            # Keep the Tk loop alive if a handler fails
            logger.error(f"UI Exception: Navbar handler failed: {e}", exc_info=True)
