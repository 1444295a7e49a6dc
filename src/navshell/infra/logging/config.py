from __future__ import annotations

"""
Logging Configuration Models.

navshell logs from two places: the desktop shell, where provider handlers
run on the Tk main loop and write to a rotating file in the user data
directory, and the ``navshell`` command, which only talks to stderr and
stays quiet unless ``--debug`` is given. ``LoggingConfig`` carries the
settings for both; the ``for_desktop`` / ``for_cli`` factories build them.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

# Level names accepted in config.json ("app_settings.log_level")
_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class LoggingConfig:
    """
    Settings handed to ``configure_logging``.

    Attributes:
        level: Minimum severity, as a level name.
        console: Mirror records on stderr.
        log_file: Rotating log file, or None for console-only logging.
        max_bytes: Size of a log segment before rollover.
        backup_count: Rolled-over segments kept next to the log file.
        console_fmt: Record layout on stderr.
        file_fmt: Record layout in the log file.
        datefmt: Timestamp layout in the log file.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 1024 * 1024
    backup_count: int = 2

    console_fmt: str = "%(levelname)s | %(name)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def for_desktop(cls, level: Optional[str], log_file: str) -> LoggingConfig:
        """Shell attached to a window: persisted level, console plus rotating file."""
        return cls(level=level or "INFO", console=True, log_file=log_file)

    @classmethod
    def for_cli(cls, debug: bool = False) -> LoggingConfig:
        """Command line: stderr only, warnings and above unless debugging."""
        return cls(level="DEBUG" if debug else "WARNING", console=True, log_file=None)
