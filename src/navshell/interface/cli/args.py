from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema of the ``navshell`` tool and translates
``--param NAME=VALUE`` pairs into a route parameter mapping.
"""

import argparse
from typing import Dict, List, Optional

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the navshell CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="navshell",
        description="Compute the navbar warning count of a route from a warnings snapshot.",
    )

    p.add_argument(
        "-w", "--warnings",
        dest="warnings_file",
        required=True,
        help="JSON file holding a warnings tree or a list of warning records.",
    )

    # --- Route Selection ---
    route = p.add_mutually_exclusive_group()
    route.add_argument(
        "-r", "--route",
        dest="route",
        default=None,
        help="Navigation path, e.g. /project/KEY/pipeline/NAME.",
    )
    route.add_argument(
        "-p", "--param",
        dest="params",
        action="append",
        default=None,
        metavar="NAME=VALUE",
        help="Route parameter (key, pipName, appName). Repeatable.",
    )

    # --- Output and Diagnostics ---
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the scope and count as JSON.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def parse_params(values: Optional[List[str]]) -> Dict[str, str]:
    """
    Convert ``NAME=VALUE`` strings into a parameter mapping.

    Args:
        values: Raw ``--param`` values.

    Returns:
        Dict[str, str]: Parameter mapping; later duplicates win.

    Raises:
        ValueError: If an item has no ``=`` or an empty name.
    """
    params: Dict[str, str] = {}
    for item in values or []:
        name, sep, value = item.partition("=")
        name = name.strip()
        if not sep or not name:
            raise ValueError(f"Invalid route parameter '{item}'. Expected NAME=VALUE.")
        params[name] = value.strip()
    return params
