"""
Entry points import cleanly in a fresh interpreter, whatever module
happens to be loaded first.
"""

import os
import subprocess
import sys
import tomllib
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent


@pytest.mark.parametrize(
    "module",
    ["main", "taskboard.config", "taskboard.utils.auth", "taskboard.db_handlers"],
)
def test_module_imports_in_fresh_interpreter(module):
    result = subprocess.run(
        [sys.executable, "-c", f"import {module}"],
        cwd=ROOT,
        env=os.environ.copy(),
        capture_output=True,
        text=True,
        timeout=60,
    )

    assert result.returncode == 0, result.stderr


def test_project_metadata_has_no_long_description():
    with open(ROOT / "pyproject.toml", "rb") as f:
        project = tomllib.load(f)["project"]

    assert "readme" not in project
    assert project["name"] == "taskboard"
