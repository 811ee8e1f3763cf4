"""Canonical file references.

The graph builder connects a producer to a consumer when an output of one
equals an input of the other. Equality only means something once both sides
are absolute, so freezing rewrites every relative file reference against the
job's command directory::

    job A: command_directory=/work, out=./x.bam  ->  /work/x.bam
    job B: command_directory=/work, in=x.bam     ->  /work/x.bam

Canonicalization is idempotent: absolute references are left as they are.
"""

from __future__ import annotations

import os
from functools import partial
from typing import Any

from jobspine.core.logging import get_logger
from jobspine.core.paths import absolute
from jobspine.framework.files import check_file_shapes, is_file_role, map_files
from jobspine.framework.params import ParameterRegistry, describe

logger = get_logger(__name__)


def canonicalize(
    job: Any,
    registry: ParameterRegistry | None = None,
    directory: os.PathLike | str | None = None,
) -> None:
    """Make every file held by the job's parameters absolute.

    Relative files are rooted at *directory* (default: the job's command
    directory). Input and Output parameters must hold supported shapes and
    are checked before anything is rewritten; Argument parameters may hold
    anything and non-file values pass through.

    Raises:
        ExtractionError: An Input or Output parameter holds a non-file.
    """
    registry = registry or describe(type(job))
    directory = job.command_directory if directory is None else directory
    check_file_shapes(job, registry)

    to_absolute = partial(absolute, directory)
    for descriptor in registry:
        map_files(descriptor, job, to_absolute, strict=is_file_role(descriptor))

    logger.debug(
        "canon.applied",
        job_type=registry.job_type,
        directory=str(directory),
        parameters=len(registry),
    )
