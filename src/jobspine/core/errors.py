"""
Structured error types for job-spine.

Provides a small hierarchy of typed errors with metadata for categorization
and reporting. Instead of generic exceptions that lose context, every
JobSpineError carries:
- **Category:** What kind of error (config, extraction, internal)
- **Context:** Job type, job name, parameter and offending value
- **Cause:** Chained underlying exception for root cause analysis

Manifesto:
    - **Typed Error Hierarchy:** Different error types for different failures
    - **Fail fast:** Declaration mistakes surface at introspection time
    - **Rich Context:** Errors name the parameter and value that caused them
    - **Nothing is retryable:** All inputs are local and deterministic

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────┐
        │                     JobSpineError                         │
        │             (category, context, cause)                    │
        ├──────────────────────────────────────────────────────────┤
        │                                                           │
        │  ConfigurationError              ExtractionError          │
        │  (CONFIG)                        (EXTRACTION)             │
        │  bad exclusion names,            unsupported value        │
        │  non-dataclass job types         shape on a file param    │
        └──────────────────────────────────────────────────────────┘

Validation violations (missing required parameters) are not errors: they are
returned as data by ``jobspine.framework.validation.missing_required`` and the
caller decides whether they block graph admission.

Examples:
    >>> error = ExtractionError("Non-file found").with_context(parameter="reference", value=42)
    >>> error.context.parameter
    'reference'
    >>> error.to_dict()["category"]
    'EXTRACTION'

Tags:
    error-handling, exception-hierarchy, error-context, job-spine

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Standard error categories for classification.

    Attributes:
        CONFIG: Invalid job type declarations
        EXTRACTION: Parameter values that cannot be resolved to files
        INTERNAL: Bugs, unexpected state
    """

    CONFIG = "CONFIG"
    EXTRACTION = "EXTRACTION"
    INTERNAL = "INTERNAL"


@dataclass
class ErrorContext:
    """
    Structured metadata context for errors.

    Attributes:
        job_type: Name of the job class being described or frozen
        job_name: Name of the job instance, once assigned
        parameter: Declared name of the offending parameter
        value: repr of the offending value
        metadata: Additional key-value pairs
    """

    job_type: str | None = None
    job_name: str | None = None
    parameter: str | None = None
    value: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["job_type", "job_name", "parameter", "value"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class JobSpineError(Exception):
    """
    Base exception for all job-spine errors.

    Subclasses set ``default_category`` to classify themselves.

    Examples:
        >>> error = JobSpineError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>

        Chaining errors:

        >>> try:
        ...     raise KeyError("reference")
        ... except KeyError as e:
        ...     error = JobSpineError("Lookup failed", cause=e)
        >>> error.cause
        KeyError('reference')
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    @property
    def retryable(self) -> bool:
        """Always False: job-spine has no transient failures."""
        return False

    def with_context(self, **kwargs: Any) -> JobSpineError:
        """
        Add context to this error (fluent API).

        Usage:
            raise ExtractionError("Non-file found").with_context(
                job_type="SortJob",
                parameter="reference",
            )
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


class ConfigurationError(JobSpineError):
    """
    A job type's parameter declarations are inconsistent.

    Raised while describing a job type, for example when an ``exclusive_of``
    entry names a parameter that the job type does not declare. Fatal for the
    job type: it can never be frozen until the declaration is fixed.
    """

    default_category = ErrorCategory.CONFIG


class ExtractionError(JobSpineError):
    """
    A file parameter holds a value that cannot be resolved to files.

    Raised by the file extractor and, through it, by canonicalization and
    freezing. The message names the parameter and the offending value.
    """

    default_category = ErrorCategory.EXTRACTION


def categorize_error(error: Exception) -> ErrorCategory:
    """Return the category of an error, INTERNAL for foreign exceptions."""
    if isinstance(error, JobSpineError):
        return error.category
    return ErrorCategory.INTERNAL
