from __future__ import annotations

"""
Unit tests for the CLI application controller.

Runs ``main()`` in-process against warnings snapshots written to a
temporary directory and checks the printed count and exit codes.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from navshell.interface.cli.app import EXIT_INVALID_INPUT, EXIT_OK, load_warning_tree, main

TREE = {
    "proj1": {
        "variables": ["v1"],
        "pipelines": {"build": {"jobs": ["j1", "j2"], "parameters": []}},
        "applications": {"api": {"variables": [], "actions": ["a1"]}},
    }
}


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep the CLI from installing queue handlers on the test process."""
    with patch("navshell.interface.cli.app.configure_logging") as configure:
        yield configure


@pytest.fixture
def tree_file(tmp_path: Path) -> Path:
    path = tmp_path / "warnings.json"
    path.write_text(json.dumps(TREE), encoding="utf-8")
    return path


@pytest.mark.parametrize("route, expected", [
    ("/project/proj1/pipeline/build", "3"),
    ("/project/proj1/application/api", "2"),
    ("/project/proj1", "4"),
    ("/project/other", "0"),
    ("/", "0"),
])
def test_route_counts(tree_file: Path, capsys, route: str, expected: str) -> None:
    code = main(["-w", str(tree_file), "-r", route])

    assert code == EXIT_OK
    assert capsys.readouterr().out.strip() == expected


def test_explicit_params_with_json_output(tree_file: Path, capsys) -> None:
    code = main(["-w", str(tree_file), "-p", "key=proj1", "-p", "pipName=build", "--json"])

    data = json.loads(capsys.readouterr().out)
    assert code == EXIT_OK
    assert data == {
        "scope": {
            "level": "pipeline",
            "project_key": "proj1",
            "pipeline_name": "build",
            "application_name": None,
        },
        "count": 3,
    }


def test_missing_file_is_invalid_input(tmp_path: Path, capsys) -> None:
    code = main(["-w", str(tmp_path / "missing.json"), "-r", "/project/proj1"])

    assert code == EXIT_INVALID_INPUT
    assert "ERROR" in capsys.readouterr().err


def test_malformed_param_is_invalid_input(tree_file: Path, capsys) -> None:
    code = main(["-w", str(tree_file), "-p", "proj1"])

    assert code == EXIT_INVALID_INPUT
    assert "NAME=VALUE" in capsys.readouterr().err


def test_flat_records_are_grouped(tmp_path: Path) -> None:
    path = tmp_path / "records.json"
    path.write_text(json.dumps([
        {"id": 1, "kind": "VARIABLE", "project_key": "proj1"},
        {"id": 2, "kind": "JOB", "project_key": "proj1", "pipeline_name": "build"},
        {"id": 3, "kind": "ACTION", "project_key": "proj1", "application_name": "api"},
    ]), encoding="utf-8")

    tree = load_warning_tree(str(path))

    assert tree["proj1"].variable_count == 1
    assert tree["proj1"].pipelines["build"].count == 1
    assert tree["proj1"].applications["api"].count == 1


def test_debug_flag_raises_verbosity(tree_file: Path, quiet_logging) -> None:
    main(["-w", str(tree_file), "-r", "/", "--debug"])

    cfg = quiet_logging.call_args.args[0]
    assert cfg.level == "DEBUG"
    assert cfg.log_file is None


@pytest.mark.parametrize("project", [
    {"variables": 5},
    {"variables": "oops"},
    {"pipelines": {"build": {"jobs": 3}}},
])
def test_malformed_sections_are_invalid_input(tmp_path: Path, capsys, project) -> None:
    path = tmp_path / "warnings.json"
    path.write_text(json.dumps({"proj1": project}), encoding="utf-8")

    code = main(["--warnings", str(path), "--param", "key=proj1"])

    captured = capsys.readouterr()
    assert code == EXIT_INVALID_INPUT
    assert captured.out == ""
    assert "expected a list" in captured.err
