"""
job-spine framework - from job declaration to graph-ready specification.

Usage:
    from jobspine.framework import (
        CommandLineJob, JobNameCounter, freeze, inputs, outputs,
        job_directories, is_up_to_date, missing_required, relocate,
    )

    names = JobNameCounter()
    freeze(job, RunSettings(), names)
    if missing_required(job):
        ...  # refuse to admit the job
    if not is_up_to_date(job):
        ...  # schedule it
"""

from jobspine.framework.canon import canonicalize
from jobspine.framework.cmdline import optional, repeat
from jobspine.framework.files import (
    FileCapable,
    file_of,
    files_of,
    inputs,
    job_directories,
    outputs,
    relocate,
)
from jobspine.framework.job import CommandLineJob, freeze
from jobspine.framework.naming import JobNameCounter
from jobspine.framework.params import (
    ParameterDescriptor,
    ParameterRegistry,
    ParameterRole,
    argument_param,
    describe,
    has_value,
    input_param,
    output_param,
)
from jobspine.framework.staleness import is_up_to_date
from jobspine.framework.validation import missing_required

__all__ = [
    # Declaration
    "CommandLineJob",
    "FileCapable",
    "ParameterDescriptor",
    "ParameterRegistry",
    "ParameterRole",
    "argument_param",
    "input_param",
    "output_param",
    "describe",
    # Lifecycle
    "JobNameCounter",
    "freeze",
    "canonicalize",
    # Queries
    "inputs",
    "outputs",
    "job_directories",
    "files_of",
    "file_of",
    "is_up_to_date",
    "missing_required",
    "relocate",
    # Command-line helpers
    "has_value",
    "optional",
    "repeat",
]
