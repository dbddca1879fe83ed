"""
Shared fixtures for the runkit test suite.

Markers (unit, integration, e2e) are registered in pyproject.toml.
"""

import shutil
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

pytest_plugins = [
    "tests.fixtures.logging",
]


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Temporary directory removed after the test."""
    temp_path = Path(tempfile.mkdtemp(prefix="runkit-test-"))
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def sample_config_dict() -> dict:
    """Config with debug logging and a Go watch setup."""
    return {
        "logging": {"level": "debug", "colors": False},
        "watch": {
            "patterns": ["*.go"],
            "ignore": ["vendor/*"],
            "interval": 0.05,
        },
    }


def pytest_collection_modifyitems(config, items):
    """Mark tests without a marker of their own as unit tests."""
    for item in items:
        if not any(mark.name in ("integration", "e2e") for mark in item.iter_markers()):
            item.add_marker(pytest.mark.unit)
