from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Verifies the external behavior of the navshell CLI by invoking the entry
point script via subprocess: argument parsing, exit codes and stream
output (stdout/stderr).
"""

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import Any, Dict, List

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "navshell" / "main.py"


def run_cli(args: List[str]) -> subprocess.CompletedProcess[str]:
    """
    Execute the CLI in a separate process.

    Injects the 'src' directory into PYTHONPATH so the package resolves
    without being installed.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")

    cmd = [sys.executable, str(ENTRY_POINT)] + args

    return subprocess.run(
        cmd,
        env=env,
        capture_output=True,
        text=True,
        encoding="utf-8"
    )


@pytest.fixture
def warnings_file(tmp_path: Path) -> Path:
    """Snapshot with one variable and a 'build' pipeline holding two jobs."""
    path = tmp_path / "warnings.json"
    path.write_text(json.dumps({
        "proj1": {
            "variables": ["v1"],
            "pipelines": {"build": {"jobs": ["j1", "j2"], "parameters": []}},
            "applications": {},
        }
    }), encoding="utf-8")
    return path


def test_cli_pipeline_route(warnings_file: Path) -> None:
    """TC-01: Verify the pipeline scope count is printed (Exit Code 0)."""
    result = run_cli(["-w", str(warnings_file), "-r", "/project/proj1/pipeline/build"])

    assert result.returncode == 0, f"CLI failed with stderr: {result.stderr}"
    assert result.stdout.strip() == "3"


def test_cli_json_output_structure(warnings_file: Path) -> None:
    """TC-02: Verify structure and content of JSON output mode."""
    result = run_cli(["-w", str(warnings_file), "-p", "key=proj1", "--json"])
    assert result.returncode == 0

    data: Dict[str, Any] = json.loads(result.stdout)
    assert data["count"] == 3
    assert data["scope"]["level"] == "project"
    assert data["scope"]["project_key"] == "proj1"


def test_cli_handles_invalid_snapshot(tmp_path: Path) -> None:
    """TC-03: Verify a malformed snapshot returns exit code 2."""
    broken = tmp_path / "broken.json"
    broken.write_text("[1, 2", encoding="utf-8")

    result = run_cli(["-w", str(broken), "-r", "/"])

    assert result.returncode == 2
    assert "ERROR" in result.stderr


def test_cli_help_message() -> None:
    """TC-04: Verify help message is displayed (smoke test for argparse)."""
    result = run_cli(["--help"])

    assert result.returncode == 0
    assert "usage: navshell" in result.stdout
    assert "--warnings" in result.stdout
