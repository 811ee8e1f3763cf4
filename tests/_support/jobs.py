"""
Job types shared by the framework tests.

They cover the declaration shapes the engine supports: scalar files,
collections, FileCapable values (mutable and frozen), value-holders, mutual
exclusion and a few deliberately broken declarations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import NamedTuple

from jobspine.core.settings import RunSettings
from jobspine.framework import (
    CommandLineJob,
    JobNameCounter,
    argument_param,
    input_param,
    optional,
    output_param,
    repeat,
)


@dataclass
class IndexedFile:
    """FileCapable wrapping a file plus its index flavour."""

    file: Path | None = None
    index: str = "bai"

    def __str__(self) -> str:
        return str(self.file)


@dataclass(frozen=True)
class KnownSites:
    """Immutable, hashable FileCapable."""

    file: Path
    build: str = "hg38"


@dataclass
class ReferenceOptions:
    """Value-holder nested inside a job."""

    dictionary: Path | None = input_param(doc="Sequence dictionary", required=False)
    threads: int | None = argument_param(doc="Reference loader threads", required=False)


@dataclass(eq=False)
class AlignJob(CommandLineJob):
    reference: Path | None = input_param(doc="Reference sequence")
    reads: list[Path] = input_param(doc="Read files", default_factory=list)
    indexed: IndexedFile | None = input_param(doc="Indexed reads", required=False)
    known_sites: frozenset[KnownSites] = input_param(
        doc="Known variant sites", required=False, default_factory=frozenset
    )
    aligned: Path | None = output_param(doc="Aligned reads")
    threads: int = argument_param(doc="Worker threads", required=False, default=1)
    label: str | None = argument_param(doc="Read group label", required=False)
    options: ReferenceOptions = field(default_factory=ReferenceOptions)

    @property
    def command_line(self) -> str:
        return (
            "align"
            + optional(" -R ", self.reference)
            + repeat(" -I ", self.reads)
            + optional(" -o ", self.aligned)
            + optional(" -t ", self.threads)
            + optional(" --label ", self.label)
        )


@dataclass(eq=False)
class ReportJob(CommandLineJob):
    """Derives its required output from the job name when unset."""

    reference: Path | None = input_param(doc="Reference file")
    result: Path | None = output_param(doc="Report file")

    def freeze_field_values(self, settings: RunSettings, names: JobNameCounter) -> None:
        super().freeze_field_values(settings, names)
        if self.result is None:
            self.result = Path(f"{self.job_name}.out")

    @property
    def command_line(self) -> str:
        return "report" + optional(" ", self.reference) + optional(" > ", self.result)


@dataclass(eq=False)
class PlainReportJob(CommandLineJob):
    """Same declaration as ReportJob but without the derived default."""

    reference: Path | None = input_param(doc="Reference file")
    result: Path | None = output_param(doc="Report file")

    @property
    def command_line(self) -> str:
        return "report"


@dataclass(eq=False)
class IntervalJob(CommandLineJob):
    interval: str | None = argument_param(doc="Genomic interval", exclusive_of="interval_list")
    interval_list: Path | None = input_param(doc="File of intervals", exclusive_of=["interval"])
    output: Path | None = output_param(doc="Counts", required=False)

    @property
    def command_line(self) -> str:
        return "count" + optional(" -L ", self.interval or self.interval_list)


@dataclass(eq=False)
class CopyJob(CommandLineJob):
    source: Path | None = input_param(doc="File to copy")
    target: Path | None = output_param(doc="Copy")

    @property
    def command_line(self) -> str:
        return f"cp {self.source} {self.target}"


@dataclass(eq=False)
class NotAFileJob(CommandLineJob):
    """Declares an integer as an input, which cannot be extracted."""

    reference: Path | None = input_param(doc="Reference file", required=False)
    count: object = input_param(doc="Not a file", required=False)

    @property
    def command_line(self) -> str:
        return "noop"


@dataclass(eq=False)
class BadExclusionJob(CommandLineJob):
    interval: str | None = argument_param(doc="Interval", exclusive_of="missing_field")

    @property
    def command_line(self) -> str:
        return "noop"


@dataclass
class Chain:
    """Value-holder whose type refers to itself."""

    file: Path | None = input_param(doc="Chained file", required=False)
    next: Chain | None = None


@dataclass(eq=False)
class ChainJob(CommandLineJob):
    chain: Chain | None = None

    @property
    def command_line(self) -> str:
        return "chain"


class Pair(NamedTuple):
    """A tuple subclass, which is not a supported collection."""

    left: Path
    right: Path


@dataclass(eq=False)
class PairJob(CommandLineJob):
    reference: Path | None = input_param(doc="Reference file", required=False)
    pair: Pair | None = input_param(doc="Paired reads", required=False)
    lanes: Pair | None = argument_param(doc="Lane files", required=False)

    @property
    def command_line(self) -> str:
        return "pair"
