from __future__ import annotations

"""
Unit tests for the Config Domain.

Verifies:
1. Default state generation.
2. Resilience against missing and corrupted config files.
3. Locale persistence round-trip without touching real user data.
"""

import json
from unittest.mock import patch

import pytest

from navshell.domain.config import (
    get_default_app_state,
    load_app_state,
    load_locale,
    load_log_level,
    save_locale,
)
from navshell.domain.constants import CURRENT_CONFIG_VERSION, DEFAULT_LOCALE


@pytest.fixture
def config_path(tmp_path):
    """Redirect the config file into a temporary directory."""
    path = tmp_path / "NavShell" / "config.json"
    with patch("navshell.domain.config.CONFIG_FILE", str(path)):
        yield path


def test_load_fresh_state_returns_defaults(config_path) -> None:
    assert not config_path.exists()

    state = load_app_state()

    assert state == get_default_app_state()
    assert state["app_settings"]["locale"] == DEFAULT_LOCALE


def test_load_corrupted_file_returns_defaults(config_path) -> None:
    config_path.parent.mkdir(parents=True)
    config_path.write_text("{ incomplete json ", encoding="utf-8")

    state = load_app_state()

    assert state["version"] == CURRENT_CONFIG_VERSION
    assert state["app_settings"]["locale"] == DEFAULT_LOCALE


def test_non_object_file_returns_defaults(config_path) -> None:
    config_path.parent.mkdir(parents=True)
    config_path.write_text("[1, 2]", encoding="utf-8")

    assert load_app_state() == get_default_app_state()


def test_unknown_keys_are_merged_over_defaults(config_path) -> None:
    config_path.parent.mkdir(parents=True)
    config_path.write_text(
        json.dumps({"version": "0.1", "app_settings": {"locale": "fr"}}),
        encoding="utf-8",
    )

    state = load_app_state()

    assert state["app_settings"] == {"locale": "fr", "log_level": "INFO"}
    assert state["version"] == CURRENT_CONFIG_VERSION


def test_locale_round_trip(config_path) -> None:
    save_locale("fr")

    assert config_path.exists()
    assert load_locale() == "fr"


def test_log_level_defaults_and_reads_settings(config_path) -> None:
    assert load_log_level() == "INFO"

    config_path.parent.mkdir(parents=True)
    config_path.write_text(json.dumps({"app_settings": {"log_level": "DEBUG"}}), encoding="utf-8")

    assert load_log_level() == "DEBUG"
