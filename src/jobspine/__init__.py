"""
job-spine - Job specification core for Make-style data-processing pipelines.

Turns declaratively described command-line jobs into graph-ready facts:
file sets, canonical paths, freshness and required-parameter violations.

- jobspine.core: errors, logging, run settings, path helpers
- jobspine.framework: parameter discovery, file extraction, canonicalization,
  staleness, validation and the job freeze protocol
"""

__version__ = "0.1.0"

from jobspine.core.errors import ConfigurationError, ExtractionError, JobSpineError  # noqa: E402
from jobspine.core.settings import RunSettings  # noqa: E402
from jobspine.framework import (  # noqa: E402
    CommandLineJob,
    FileCapable,
    JobNameCounter,
    argument_param,
    input_param,
    output_param,
)

__all__ = [
    "__version__",
    "CommandLineJob",
    "ConfigurationError",
    "ExtractionError",
    "FileCapable",
    "JobNameCounter",
    "JobSpineError",
    "RunSettings",
    "argument_param",
    "input_param",
    "output_param",
]
