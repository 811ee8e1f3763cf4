"""Core primitives: errors, logging, run settings and path helpers."""

from jobspine.core.errors import (
    ConfigurationError,
    ErrorCategory,
    ErrorContext,
    ExtractionError,
    JobSpineError,
)
from jobspine.core.paths import absolute, reset_parent
from jobspine.core.settings import RunSettings

__all__ = [
    "ConfigurationError",
    "ErrorCategory",
    "ErrorContext",
    "ExtractionError",
    "JobSpineError",
    "RunSettings",
    "absolute",
    "reset_parent",
]
