from __future__ import annotations

"""
Logging Handlers.

The desktop shell can be embedded in a host window that already has its
own logging, and the test suite installs pytest's capture handlers on the
root logger. Every handler navshell creates is therefore tagged, and a
re-configuration only ever removes tagged handlers.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

_HANDLER_TAG_ATTR: str = "_navshell_handler"


def _tag_handler(handler: logging.Handler) -> None:
    setattr(handler, _HANDLER_TAG_ATTR, True)


def _is_our_handler(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def _create_rotating_file_handler(
        log_file: str,
        level_int: int,
        formatter: logging.Formatter,
        max_bytes: int,
        backup_count: int,
) -> Optional[RotatingFileHandler]:
    """
    Open the shell's rotating log file, creating its ``logs`` folder.

    A read-only data directory must not stop the navbar from starting, so
    an unusable path is reported on stderr and the shell carries on with
    console logging only.

    Returns:
        Optional[RotatingFileHandler]: Tagged handler, or None if the file cannot be opened.
    """
    try:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        fh = RotatingFileHandler(
            log_file,
            maxBytes=int(max_bytes),
            backupCount=int(backup_count),
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"WARNING: navshell cannot write its log file '{log_file}': {e}\n")
        return None

    fh.setLevel(level_int)
    fh.setFormatter(formatter)
    _tag_handler(fh)
    return fh
