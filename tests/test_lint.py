"""Tests for code quality: ruff lint and format checks."""

import pathlib
import subprocess

import pytest

PROJECT_ROOT = pathlib.Path(__file__).parent.parent


@pytest.mark.parametrize("target", ["hets/", "alembic/"])
def test_ruff_check(target):
    """Service and migration code pass ruff lint checks."""
    result = subprocess.run(
        ["ruff", "check", target],
        cwd=str(PROJECT_ROOT),
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0, f"ruff check {target} failed:\n{result.stdout}\n{result.stderr}"


def test_ruff_format():
    """Service code is properly formatted per ruff."""
    result = subprocess.run(
        ["ruff", "format", "--check", "hets/"],
        cwd=str(PROJECT_ROOT),
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0, f"ruff format check failed:\n{result.stdout}\n{result.stderr}"
