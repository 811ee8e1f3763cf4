"""Incremental-rebuild check.

A job can be skipped when every output it declares already exists and is
strictly newer than the newest of its inputs. The stdout/stderr capture files
are ignored: their presence says nothing about the job's real artifacts. A
job with no other outputs always runs.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jobspine.core.logging import get_logger
from jobspine.framework.files import inputs, outputs

logger = get_logger(__name__)


def modification_time(path: Path) -> int | None:
    """Return the mtime of *path* in nanoseconds, None if it cannot be read."""
    try:
        return path.stat().st_mtime_ns
    except OSError:
        return None


def is_up_to_date(job: Any) -> bool:
    """Return True if all outputs exist and are newer than every input."""
    capture_files = {getattr(job, "job_output_file", None), getattr(job, "job_error_file", None)}
    output_files = {file for file in outputs(job) if file not in capture_files}
    if not output_files:
        return False

    output_times = [modification_time(file) for file in output_files]
    if any(mtime is None for mtime in output_times):
        return False

    # Missing inputs are ignored.
    input_times = [modification_time(file) for file in inputs(job)]
    max_input = max((mtime for mtime in input_times if mtime is not None), default=None)
    min_output = min(output_times)
    up_to_date = max_input is None or max_input < min_output

    logger.debug(
        "staleness.evaluated",
        job_name=getattr(job, "job_name", None),
        outputs=len(output_files),
        up_to_date=up_to_date,
    )
    return up_to_date
