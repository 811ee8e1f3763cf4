"""
Test support utilities for job-spine tests.

This module provides helper functions that don't fit as pytest fixtures
but are useful across multiple test files.
"""

from __future__ import annotations

import os
from pathlib import Path


def touch(path: Path, mtime: float) -> Path:
    """
    Create (or update) a file and pin its modification time.

    Args:
        path: File to create; parent directories are created as needed
        mtime: Modification time in seconds since the epoch

    Returns:
        The path, for chaining
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(path.name, encoding="utf-8")
    os.utime(path, (mtime, mtime))
    return path
