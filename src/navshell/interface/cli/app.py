from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Loads a warnings snapshot from disk, resolves the route scope (from a
navigation path or explicit parameters) and prints the warning count the
navbar would display for it.
"""

import json
import sys
from typing import List, Optional

from navshell.core.services.aggregator import compute_warning_count
from navshell.core.services.route_scope import derive_scope, flatten_route_params
from navshell.core.services.router import Router
from navshell.core.services.warnings import group_warnings
from navshell.domain.warning_models import WarningTree, warning_item_from_dict, warning_tree_from_dict
from navshell.infra.fs import read_json_file
from navshell.infra.logging import LoggingConfig, configure_logging, get_logger
from navshell.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_INVALID_INPUT = 2

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 for success, 2 for invalid input).
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    configure_logging(LoggingConfig.for_cli(args.debug))

    # 1. Load the warnings snapshot
    try:
        tree = load_warning_tree(args.warnings_file)
    except (OSError, ValueError) as e:
        logger.error(f"Cannot load warnings from '{args.warnings_file}': {e}")
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    # 2. Resolve the route parameters
    try:
        if args.route:
            raw_params = flatten_route_params(Router().resolve(args.route))
        else:
            raw_params = cli_args.parse_params(args.params)
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    scope = derive_scope(raw_params)
    count = compute_warning_count(tree, scope)
    logger.debug(f"Scope {scope} -> {count} warning(s).")

    # 3. Output rendering
    if args.json_output:
        print(json.dumps({
            "scope": {
                "level": scope.level.value,
                "project_key": scope.project_key,
                "pipeline_name": scope.pipeline_name,
                "application_name": scope.application_name,
            },
            "count": count,
        }, ensure_ascii=False, indent=2))
    else:
        print(count)

    return EXIT_OK

# -----------------------------------------------------------------------------
# SNAPSHOT LOADING
# -----------------------------------------------------------------------------

def load_warning_tree(path: str) -> WarningTree:
    """
    Read a warnings snapshot file.

    A JSON object is read as a nested warnings tree; a JSON list is read as
    flat warning records and grouped.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the content is not valid JSON or has the wrong shape.
    """
    data = read_json_file(path)
    if isinstance(data, list):
        return group_warnings(warning_item_from_dict(item) for item in data)
    return warning_tree_from_dict(data)

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
