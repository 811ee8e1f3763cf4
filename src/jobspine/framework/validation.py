"""Required-parameter checks before a job is admitted to the graph.

Violations are returned as sorted strings, never raised; the graph builder
decides whether a non-empty list blocks the job.
"""

from __future__ import annotations

from typing import Any

from jobspine.framework.params import ParameterDescriptor, describe


def describe_violation(descriptor: ParameterDescriptor) -> str:
    return f"@{descriptor.role.value}: {descriptor.name} - {descriptor.doc}"


def missing_required(job: Any) -> list[str]:
    """Return required parameters without a value, sorted.

    A required parameter is satisfied by its own value or by a value on any
    parameter named in its ``exclusive_of``. None and empty collections
    count as no value.
    """
    registry = describe(type(job))
    missing = set()
    for descriptor in registry:
        if not descriptor.required or descriptor.has_value(job):
            continue
        if any(other.has_value(job) for other in registry.exclusions(descriptor)):
            continue
        missing.add(describe_violation(descriptor))
    return sorted(missing)
