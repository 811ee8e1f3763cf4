"""File extraction from role-tagged parameters.

Manifesto:
    The dependency graph only understands sets of files. This module turns
    whatever a parameter holds into that shape, or fails loudly when it
    cannot.

Supported value shapes::

    None                                  -> no files
    Path (any os.PathLike)                -> {path}
    FileCapable (has a ``file``)          -> {value.file}
    list / tuple / set / frozenset of
    the above                             -> union of the elements

Anything else on an Input or Output parameter raises ExtractionError. A
``str`` is not a file reference: declare the field as ``Path``. Subclasses of
the collection types (named tuples, for instance) are not collections either.

Tags:
    job-spine, framework, files, extraction, relocation

Doc-Types:
    api-reference
"""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from jobspine.core.errors import ExtractionError
from jobspine.core.paths import parent_directory, reset_parent
from jobspine.framework.params import (
    COLLECTION_TYPES,
    ParameterDescriptor,
    ParameterRegistry,
    ParameterRole,
    describe,
)


@runtime_checkable
class FileCapable(Protocol):
    """A value that is not a file but wraps exactly one file."""

    file: Path | None


def _non_file(descriptor: ParameterDescriptor, job: Any, value: Any) -> ExtractionError:
    return ExtractionError(
        "Non-file found. Try removing the parameter declaration, declare it with "
        "argument_param, or implement FileCapable: "
        f"{type(job).__name__}.{descriptor.qualified_name}: {value!r}"
    ).with_context(
        job_type=type(job).__name__,
        job_name=getattr(job, "job_name", None),
        parameter=descriptor.qualified_name,
        value=repr(value),
    )


def _is_collection(value: Any) -> bool:
    # Exact types only; subclasses are single values.
    return type(value) in COLLECTION_TYPES


def _to_file(descriptor: ParameterDescriptor, job: Any, value: Any) -> Path | None:
    if value is None:
        return None
    if isinstance(value, os.PathLike):
        return Path(value)
    if isinstance(value, FileCapable):
        inner = value.file
        if inner is None:
            return None
        if isinstance(inner, os.PathLike):
            return Path(inner)
    raise _non_file(descriptor, job, value)


def files_of(descriptor: ParameterDescriptor, job: Any) -> set[Path]:
    """Return the files held by a parameter. Order is irrelevant."""
    value = descriptor.get_value(job)
    items = value if _is_collection(value) else (value,)
    files = set()
    for item in items:
        file = _to_file(descriptor, job, item)
        if file is not None:
            files.add(file)
    return files


def file_of(descriptor: ParameterDescriptor, job: Any) -> Path | None:
    """Return the single file held by a parameter, None if unset.

    Raises:
        ExtractionError: The parameter holds a collection or a non-file.
    """
    value = descriptor.get_value(job)
    if _is_collection(value):
        raise ExtractionError(
            f"Expected a single file but found a collection: "
            f"{type(job).__name__}.{descriptor.qualified_name}: {value!r}"
        ).with_context(
            job_type=type(job).__name__,
            parameter=descriptor.qualified_name,
            value=repr(value),
        )
    return _to_file(descriptor, job, value)


def _files_for(job: Any, descriptors: Iterable[ParameterDescriptor]) -> set[Path]:
    files: set[Path] = set()
    for descriptor in descriptors:
        files |= files_of(descriptor, job)
    return files


def inputs(job: Any) -> set[Path]:
    """Return every file held by the job's Input parameters."""
    return _files_for(job, describe(type(job)).inputs)


def outputs(job: Any) -> set[Path]:
    """Return every file held by the job's Output parameters."""
    return _files_for(job, describe(type(job)).outputs)


def job_directories(job: Any) -> set[Path]:
    """Return the directories a job needs: command, temp, and file parents."""
    dirs = {Path(job.command_directory)}
    temp_dir = getattr(job, "job_temp_dir", None)
    if temp_dir is not None:
        dirs.add(Path(temp_dir))
    dirs |= {parent_directory(file) for file in inputs(job)}
    dirs |= {parent_directory(file) for file in outputs(job)}
    return dirs


def check_file_shapes(job: Any, registry: ParameterRegistry | None = None) -> None:
    """Raise ExtractionError if any Input or Output holds an unsupported value."""
    registry = registry or describe(type(job))
    for descriptor in registry.inputs + registry.outputs:
        files_of(descriptor, job)


def _with_file(value: Any, file: Path) -> Any:
    """Point a FileCapable at a new file, copying frozen dataclasses."""
    if dataclasses.is_dataclass(value) and value.__dataclass_params__.frozen:
        return dataclasses.replace(value, file=file)
    value.file = file
    return value


def _map_item(
    descriptor: ParameterDescriptor,
    job: Any,
    item: Any,
    transform: Callable[[Path], Path],
    strict: bool,
) -> Any:
    if item is None:
        return None
    if isinstance(item, os.PathLike):
        new = transform(Path(item))
        return item if new == item else new
    if isinstance(item, FileCapable) and isinstance(item.file, os.PathLike):
        new = transform(Path(item.file))
        return item if new == item.file else _with_file(item, new)
    if isinstance(item, FileCapable) and item.file is None:
        return item
    if strict:
        raise _non_file(descriptor, job, item)
    return item


def map_files(
    descriptor: ParameterDescriptor,
    job: Any,
    transform: Callable[[Path], Path],
    *,
    strict: bool = True,
) -> Any:
    """Rewrite every file held by a parameter and write the value back.

    Collections keep their type. With ``strict=False`` values that are not
    files pass through unchanged; otherwise they raise ExtractionError before
    anything is written. Returns the parameter's new value.
    """
    value = descriptor.get_value(job)
    if value is None:
        return None
    if strict:
        files_of(descriptor, job)

    if _is_collection(value):
        items = [_map_item(descriptor, job, item, transform, strict) for item in value]
        if any(new is not old for new, old in zip(items, value)):
            new_value = type(value)(items)
        else:
            new_value = value
    else:
        new_value = _map_item(descriptor, job, value, transform, strict)

    if new_value is not value:
        descriptor.set_value(job, new_value)
    return new_value


def relocate(
    descriptor: ParameterDescriptor, job: Any, new_root: os.PathLike | str
) -> Path | list[Path] | None:
    """Move a parameter's file(s) under *new_root* and write them back.

    Files inside the job's command directory keep their relative location;
    other files keep only their name. Used when staging a job into temporary
    storage.

    Returns:
        The new file for a single-valued parameter, a list of new files for a
        collection, None if the parameter is unset.
    """
    anchor = getattr(job, "command_directory", None)

    def move(file: Path) -> Path:
        return reset_parent(new_root, file, anchor)

    new_value = map_files(descriptor, job, move, strict=True)
    if new_value is None:
        return None
    if _is_collection(new_value):
        return [file for file in (_to_file(descriptor, job, item) for item in new_value) if file is not None]
    return _to_file(descriptor, job, new_value)


def is_file_role(descriptor: ParameterDescriptor) -> bool:
    return descriptor.role in (ParameterRole.INPUT, ParameterRole.OUTPUT)
