"""Declarative parameter discovery for job types.

Manifesto:
    Every job type declares which of its fields are inputs, outputs or plain
    arguments. The declaration is read once per job type and turned into an
    immutable registry of descriptors, so the rest of the engine never
    inspects classes again.

A job type is a dataclass. Role-tagged fields are declared with
``input_param``, ``output_param`` and ``argument_param``::

    @dataclass
    class SortJob(CommandLineJob):
        reference: Path | None = input_param(doc="Reference sequence")
        bams: list[Path] = input_param(doc="Reads", default_factory=list)
        sorted_bam: Path | None = output_param(doc="Sorted reads")
        max_records: int | None = argument_param(doc="Records in RAM", required=False)
        options: SortOptions = field(default_factory=SortOptions)

An untagged field whose type is itself a dataclass (``SortOptions`` above) is
a value-holder: its role-tagged fields are discovered too, and their
descriptors carry the full attribute path (``("options", "index_file")``).
A role-tagged field of dataclass type is a FileCapable value and is not
descended into.

Tags:
    job-spine, framework, params, introspection, registry

Doc-Types:
    api-reference
"""

from __future__ import annotations

import dataclasses
import types
import typing
from collections.abc import Iterator, Sequence
from dataclasses import MISSING, dataclass, field
from enum import Enum
from functools import lru_cache
from typing import Any

from jobspine.core.errors import ConfigurationError
from jobspine.core.logging import get_logger

logger = get_logger(__name__)

PARAM_METADATA_KEY = "jobspine.param"

COLLECTION_TYPES = (list, tuple, set, frozenset)


class ParameterRole(str, Enum):
    """Semantics of a declared parameter."""

    INPUT = "Input"
    OUTPUT = "Output"
    ARGUMENT = "Argument"


@dataclass(frozen=True)
class ParamMeta:
    """Declaration attached to a dataclass field's metadata."""

    role: ParameterRole
    doc: str = ""
    required: bool = True
    exclusive_of: tuple[str, ...] = ()


def _split_names(names: str | Sequence[str]) -> tuple[str, ...]:
    if isinstance(names, str):
        names = names.split(",")
    return tuple(name.strip() for name in names if name.strip())


def _param(
    role: ParameterRole,
    doc: str,
    required: bool,
    exclusive_of: str | Sequence[str],
    default: Any,
    default_factory: Any,
) -> Any:
    metadata = {PARAM_METADATA_KEY: ParamMeta(role, doc, required, _split_names(exclusive_of))}
    if default_factory is not MISSING:
        return field(default_factory=default_factory, metadata=metadata)
    return field(default=default, metadata=metadata)


def input_param(
    *,
    doc: str = "",
    required: bool = True,
    exclusive_of: str | Sequence[str] = (),
    default: Any = None,
    default_factory: Any = MISSING,
) -> Any:
    """Declare a field holding input file(s).

    ``exclusive_of`` names other parameters that may be set instead of this
    one, either as a sequence or as a comma-separated string.
    """
    return _param(ParameterRole.INPUT, doc, required, exclusive_of, default, default_factory)


def output_param(
    *,
    doc: str = "",
    required: bool = True,
    exclusive_of: str | Sequence[str] = (),
    default: Any = None,
    default_factory: Any = MISSING,
) -> Any:
    """Declare a field holding output file(s)."""
    return _param(ParameterRole.OUTPUT, doc, required, exclusive_of, default, default_factory)


def argument_param(
    *,
    doc: str = "",
    required: bool = True,
    exclusive_of: str | Sequence[str] = (),
    default: Any = None,
    default_factory: Any = MISSING,
) -> Any:
    """Declare a plain argument. Its value need not be a file."""
    return _param(ParameterRole.ARGUMENT, doc, required, exclusive_of, default, default_factory)


def has_value(value: Any) -> bool:
    """Return False for None and empty list, tuple, set or frozenset values."""
    if value is None:
        return False
    if isinstance(value, COLLECTION_TYPES):
        return len(value) > 0
    return True


@dataclass(frozen=True)
class ParameterDescriptor:
    """One role-tagged parameter of a job type.

    ``path`` is the chain of attribute names from the job instance down to
    the object that owns the field; its last element is the field itself.
    """

    role: ParameterRole
    path: tuple[str, ...]
    required: bool = True
    exclusive_of: tuple[str, ...] = ()
    doc: str = ""

    @property
    def name(self) -> str:
        return self.path[-1]

    @property
    def qualified_name(self) -> str:
        return ".".join(self.path)

    def holder(self, job: Any) -> Any:
        """Return the object owning the field, or None if a holder is unset."""
        obj = job
        for attr in self.path[:-1]:
            obj = getattr(obj, attr)
            if obj is None:
                return None
        return obj

    def get_value(self, job: Any) -> Any:
        holder = self.holder(job)
        if holder is None:
            return None
        return getattr(holder, self.name)

    def set_value(self, job: Any, value: Any) -> None:
        holder = self.holder(job)
        if holder is None:
            raise ConfigurationError(
                f"Cannot set {self.qualified_name}: a value-holder on the path is not set"
            ).with_context(job_type=type(job).__name__, parameter=self.qualified_name)
        setattr(holder, self.name, value)

    def has_value(self, job: Any) -> bool:
        return has_value(self.get_value(job))


class ParameterRegistry:
    """Ordered, immutable descriptors of one job type.

    A bare name looks up the shallowest descriptor with that name, so a job's
    own field wins over a same-named field of a value-holder. Exclusion names
    are resolved when the registry is built: first as a sibling in the same
    holder, then by dotted path or bare name. An unknown name raises
    ConfigurationError.
    """

    def __init__(self, job_type: str, descriptors: Sequence[ParameterDescriptor]) -> None:
        self.job_type = job_type
        self.descriptors: tuple[ParameterDescriptor, ...] = tuple(descriptors)
        self._by_name: dict[str, ParameterDescriptor] = {}
        self._by_path: dict[str, ParameterDescriptor] = {}
        for descriptor in self.descriptors:
            self._by_path[descriptor.qualified_name] = descriptor
            current = self._by_name.get(descriptor.name)
            if current is None or len(descriptor.path) < len(current.path):
                self._by_name[descriptor.name] = descriptor
        self._exclusions = {
            descriptor: tuple(self._resolve(descriptor, name) for name in descriptor.exclusive_of)
            for descriptor in self.descriptors
        }

    def _resolve(self, descriptor: ParameterDescriptor, name: str) -> ParameterDescriptor:
        sibling = ".".join(descriptor.path[:-1] + (name,))
        other = self._by_path.get(sibling) or self.get(name)
        if other is None:
            raise ConfigurationError(
                f"Unable to find exclusion field {name} on {self.job_type}"
            ).with_context(job_type=self.job_type, parameter=descriptor.qualified_name)
        return other

    def by_role(self, role: ParameterRole) -> tuple[ParameterDescriptor, ...]:
        return tuple(d for d in self.descriptors if d.role is role)

    @property
    def inputs(self) -> tuple[ParameterDescriptor, ...]:
        return self.by_role(ParameterRole.INPUT)

    @property
    def outputs(self) -> tuple[ParameterDescriptor, ...]:
        return self.by_role(ParameterRole.OUTPUT)

    @property
    def arguments(self) -> tuple[ParameterDescriptor, ...]:
        return self.by_role(ParameterRole.ARGUMENT)

    def get(self, name: str) -> ParameterDescriptor | None:
        """Look up a descriptor by field name or dotted path."""
        if "." in name:
            return self._by_path.get(name)
        return self._by_name.get(name)

    def exclusions(self, descriptor: ParameterDescriptor) -> tuple[ParameterDescriptor, ...]:
        return self._exclusions[descriptor]

    def __iter__(self) -> Iterator[ParameterDescriptor]:
        return iter(self.descriptors)

    def __len__(self) -> int:
        return len(self.descriptors)

    def __repr__(self) -> str:
        return f"ParameterRegistry({self.job_type}, parameters={len(self.descriptors)})"


def _is_declared_dataclass(cls: Any) -> bool:
    """True if *cls* itself is decorated with @dataclass.

    ``dataclasses.is_dataclass`` is also true for an undecorated subclass,
    whose own field declarations would then be invisible.
    """
    return isinstance(cls, type) and "__dataclass_fields__" in cls.__dict__


def _holder_type(annotation: Any) -> type | None:
    """Return the dataclass type behind an annotation, unwrapping Optional."""
    if typing.get_origin(annotation) in (typing.Union, types.UnionType):
        args = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(args) != 1:
            return None
        annotation = args[0]
    if _is_declared_dataclass(annotation):
        return annotation
    return None


def _discover(
    cls: type, prefix: tuple[str, ...], seen: frozenset[type]
) -> Iterator[ParameterDescriptor]:
    try:
        hints = typing.get_type_hints(cls)
    except NameError as e:
        raise ConfigurationError(
            f"Unable to resolve field types of {cls.__name__}: {e}", cause=e
        ).with_context(job_type=cls.__name__) from e

    for f in dataclasses.fields(cls):
        path = prefix + (f.name,)
        meta: ParamMeta | None = f.metadata.get(PARAM_METADATA_KEY)
        if meta is not None:
            yield ParameterDescriptor(
                role=meta.role,
                path=path,
                required=meta.required,
                exclusive_of=meta.exclusive_of,
                doc=meta.doc,
            )
            continue
        holder = _holder_type(hints.get(f.name))
        if holder is not None and holder not in seen:
            yield from _discover(holder, path, seen | {holder})


@lru_cache(maxsize=None)
def describe(job_type: type) -> ParameterRegistry:
    """Return the parameter registry of a job type, computed once per type.

    Raises:
        ConfigurationError: job_type is not a dataclass, or an exclusion
            names a parameter the job type does not declare.
    """
    if not _is_declared_dataclass(job_type):
        raise ConfigurationError(
            f"{getattr(job_type, '__name__', job_type)!s} is not a dataclass job type; "
            "decorate it with @dataclass"
        ).with_context(job_type=getattr(job_type, "__name__", str(job_type)))

    registry = ParameterRegistry(
        job_type.__name__, list(_discover(job_type, (), frozenset({job_type})))
    )
    logger.debug(
        "introspector.described",
        job_type=registry.job_type,
        inputs=len(registry.inputs),
        outputs=len(registry.outputs),
        arguments=len(registry.arguments),
    )
    return registry
