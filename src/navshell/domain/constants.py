from __future__ import annotations

"""
Domain Constants.

Route parameter names, the navigation route table, locale defaults and
list limits shared by the stores, the router and the navbar controller.
"""

from typing import List, Tuple

CURRENT_CONFIG_VERSION = "1.0.0"

# -----------------------------------------------------------------------------
# ROUTING
# -----------------------------------------------------------------------------

PARAM_PROJECT_KEY = "key"
PARAM_PIPELINE_NAME = "pipName"
PARAM_APPLICATION_NAME = "appName"

HOME_ROUTE = "/"
PROJECT_ROUTE = "/project/{key}"
PIPELINE_ROUTE = "/project/{key}/pipeline/{pip_name}"
APPLICATION_ROUTE = "/project/{key}/application/{app_name}"

# Each entry is the list of path levels of one route; a level is a tuple of
# segments, ':'-prefixed segments capture a parameter.
ROUTE_TABLE: List[List[Tuple[str, ...]]] = [
    [("project", ":" + PARAM_PROJECT_KEY)],
    [("project", ":" + PARAM_PROJECT_KEY), ("pipeline", ":" + PARAM_PIPELINE_NAME)],
    [("project", ":" + PARAM_PROJECT_KEY), ("application", ":" + PARAM_APPLICATION_NAME)],
]

# -----------------------------------------------------------------------------
# LOCALES
# -----------------------------------------------------------------------------

DEFAULT_LOCALE = "en"
SUPPORTED_LOCALES: Tuple[str, ...] = ("en", "fr")

# -----------------------------------------------------------------------------
# NAVIGATION LISTS
# -----------------------------------------------------------------------------

MAX_RECENT_APPLICATIONS = 10

ESCAPE_KEY = "Escape"
