from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Resolves the per-user data directory that holds the persisted shell state
(selected locale, log files) and provides small JSON read helpers shared by
the configuration layer and the CLI.
"""

import json
import os
from typing import Any

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "NavShell"
UNIX_APP_DIR_NAME = ".navshell"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Automatically creates the hierarchy if it does not exist.
    Standards:
    - Windows: %LOCALAPPDATA%/NavShell
    - Linux/Mac: ~/.navshell

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    # Posix fallback (Linux/Mac)
    if not path:
        home = os.path.expanduser("~")
        path = os.path.join(home, UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        pass

    return os.path.abspath(path)


def normalize_path(path: str) -> str:
    """Expand user and environment shortcuts into an absolute path."""
    return os.path.abspath(os.path.expandvars(os.path.expanduser(path.strip())))

# -----------------------------------------------------------------------------
# JSON HELPERS
# -----------------------------------------------------------------------------

def read_json_file(path: str) -> Any:
    """
    Load a UTF-8 JSON document from disk.

    Args:
        path: File to read.

    Returns:
        Any: Decoded JSON payload.

    Raises:
        OSError: If the file cannot be opened.
        ValueError: If the content is not valid JSON.
    """
    with open(normalize_path(path), "r", encoding="utf-8") as f:
        return json.load(f)
