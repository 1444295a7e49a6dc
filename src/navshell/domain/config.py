from __future__ import annotations

"""
Configuration Domain Management.

Persists the navigation shell's user preferences (selected locale, log
level) as a JSON document in the user data directory. Missing or corrupted
files fall back to defaults.
"""

import json
import logging
import os
from typing import Any, Dict

from navshell.domain.constants import CURRENT_CONFIG_VERSION, DEFAULT_LOCALE
from navshell.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

CONFIG_FILE = os.path.join(get_user_data_dir(), "config.json")


# -----------------------------------------------------------------------------
# Defaults
# -----------------------------------------------------------------------------
def get_default_app_state() -> Dict[str, Any]:
    """
    Generate the default persisted state structure.

    Returns:
        Dict[str, Any]: The full JSON structure for config.json.
    """
    return {
        "version": CURRENT_CONFIG_VERSION,
        "app_settings": {
            "locale": DEFAULT_LOCALE,
            "log_level": "INFO",
        },
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_app_state() -> Dict[str, Any]:
    """
    Load application state from disk, merged over the defaults.

    Returns:
        Dict[str, Any]: The loaded state or a default structure on failure.
    """
    state = get_default_app_state()

    if not os.path.exists(CONFIG_FILE):
        logger.debug("Config file not found. Returning defaults.")
        return state

    try:
        with open(CONFIG_FILE, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return state

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return state

    if isinstance(data.get("app_settings"), dict):
        state["app_settings"].update(data["app_settings"])

    state["version"] = CURRENT_CONFIG_VERSION
    return state


def save_app_state(state: Dict[str, Any]) -> None:
    """
    Persist application state to disk.

    Args:
        state: The state dictionary to save.
    """
    try:
        os.makedirs(os.path.dirname(CONFIG_FILE), exist_ok=True)
        state["version"] = CURRENT_CONFIG_VERSION
        with open(CONFIG_FILE, "w", encoding="utf-8") as f:
            json.dump(state, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {CONFIG_FILE}")
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")


# -----------------------------------------------------------------------------
# Facade API
# -----------------------------------------------------------------------------
def load_locale() -> str:
    """Return the persisted locale code."""
    return str(load_app_state()["app_settings"].get("locale") or DEFAULT_LOCALE)


def save_locale(code: str) -> None:
    """Persist the selected locale code."""
    state = load_app_state()
    state["app_settings"]["locale"] = code
    save_app_state(state)


def load_log_level() -> str:
    """Return the persisted log level name used by the desktop shell."""
    return str(load_app_state()["app_settings"].get("log_level") or "INFO")
