"""
Shared pytest fixtures and configuration for job-spine tests.

This module provides:
- Run settings and job-name counters for freezing jobs
- A temporary working directory the process is moved into

Usage:
    Fixtures are auto-discovered by pytest. Use them as function arguments.

    def test_freeze(settings, names, workdir):
        ...
"""

import sys
from pathlib import Path

import pytest

# Ensure jobspine package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from jobspine.core.settings import RunSettings
from jobspine.framework.naming import JobNameCounter


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Mark all tests without explicit markers as unit tests."""
    for item in items:
        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Run Fixtures
# =============================================================================


@pytest.fixture
def settings() -> RunSettings:
    """Run settings independent of the developer's environment."""
    return RunSettings(
        job_name_prefix="test",
        job_queue="short",
        job_project="genomics",
        memory_limit=2,
        _env_file=None,
    )


@pytest.fixture
def names() -> JobNameCounter:
    """A fresh job-name counter, as created once per pipeline run."""
    return JobNameCounter()


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temporary directory that is also the process working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
