"""Command-line job specification and its freeze protocol.

Manifesto:
    A job is authored as a plain mutable dataclass, then frozen exactly once
    before it becomes a node of the dependency graph. Freezing fills the
    defaults a job did not set, names it, and rewrites every file reference
    into canonical absolute form. After that the job only answers queries.

Lifecycle::

    Mutable ──freeze(settings, names)──▶ Frozen
                    │
                    ├─ 0. check Input/Output shapes (ExtractionError, job stays Mutable)
                    ├─ 1. inherit prefix / queue / project / memory limit from RunSettings
                    ├─ 2. assign <prefix>-<n> if no job_name
                    ├─ 3. job_output_file defaults to <job_name>.out
                    ├─ 4. command_directory made absolute (process cwd)
                    ├─ 5. canonicalize every parameter
                    └─ 6. mark frozen

Freezing a frozen job is a no-op.

Example:
    @dataclass(eq=False)
    class CatJob(CommandLineJob):
        sources: list[Path] = input_param(doc="Files to concatenate", default_factory=list)
        target: Path | None = output_param(doc="Concatenated file")

        @property
        def command_line(self) -> str:
            return "cat" + repeat(" ", self.sources) + optional(" > ", self.target)

    names = JobNameCounter()
    job = CatJob(sources=[Path("a.txt"), Path("b.txt")], target=Path("ab.txt"))
    job.freeze(RunSettings(), names)
    job.outputs   # {PosixPath('/cwd/ab.txt'), PosixPath('/cwd/Q-4242-1.out')}

Tags:
    job-spine, framework, job, freeze, lifecycle

Doc-Types:
    api-reference
"""

from __future__ import annotations

import os
import tempfile
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path

from jobspine.core.logging import LogContext, get_logger
from jobspine.core.paths import absolute
from jobspine.core.settings import RunSettings
from jobspine.framework import files, staleness, validation
from jobspine.framework.canon import canonicalize
from jobspine.framework.naming import JobNameCounter
from jobspine.framework.params import (
    ParameterRegistry,
    describe,
    input_param,
    output_param,
)

logger = get_logger(__name__)


@dataclass(eq=False)
class CommandLineJob(ABC):
    """A command line that will be run in a pipeline."""

    # Directory to run the command in.
    command_directory: Path = field(default_factory=lambda: Path(os.curdir))
    # Temporary directory to write any files.
    job_temp_dir: Path | None = field(default_factory=lambda: Path(tempfile.gettempdir()))

    job_name: str | None = None
    job_name_prefix: str | None = None
    job_queue: str | None = None
    job_project: str | None = None
    # Upper memory limit in gigabytes.
    memory_limit: int | None = None

    job_restartable: bool = True
    # Run only if the jobs this one depends on succeed.
    job_run_only_if_previous_succeed: bool = True

    job_dependencies: list[Path] = input_param(
        doc="Explicit job dependencies", required=False, default_factory=list
    )
    # Defaults to <job_name>.out
    job_output_file: Path | None = output_param(doc="File to redirect any output", required=False)
    job_error_file: Path | None = output_param(doc="File to redirect any errors", required=False)

    _frozen: bool = field(default=False, init=False, repr=False)

    @property
    @abstractmethod
    def command_line(self) -> str:
        """The command to run."""
        ...

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def parameters(self) -> ParameterRegistry:
        return describe(type(self))

    # ── Derived queries ──────────────────────────────────────────

    @property
    def inputs(self) -> set[Path]:
        return files.inputs(self)

    @property
    def outputs(self) -> set[Path]:
        return files.outputs(self)

    @property
    def job_directories(self) -> set[Path]:
        return files.job_directories(self)

    @property
    def up_to_date(self) -> bool:
        return staleness.is_up_to_date(self)

    @property
    def missing_fields(self) -> list[str]:
        return validation.missing_required(self)

    @property
    def dot_string(self) -> str:
        """The job description in .dot files."""
        return f"{self.job_name} => {self.command_line}"

    # ── Freeze protocol ──────────────────────────────────────────

    def freeze(self, settings: RunSettings, names: JobNameCounter) -> CommandLineJob:
        """Fill defaults and make every file reference canonical.

        Raises:
            ExtractionError: An Input or Output parameter holds a value that
                is not a file. The job is left unfrozen and unchanged.
        """
        if self._frozen:
            logger.debug("job.freeze_skipped", job_name=self.job_name)
            return self

        registry = self.parameters
        with LogContext(job_type=registry.job_type):
            files.check_file_shapes(self, registry)
            self.freeze_field_values(settings, names)
            self.canon_field_values(registry)
            self._frozen = True
            logger.debug(
                "job.frozen",
                job_name=self.job_name,
                command_directory=str(self.command_directory),
                queue=self.job_queue,
            )
        return self

    def freeze_field_values(self, settings: RunSettings, names: JobNameCounter) -> None:
        """Set defaults. Subclasses extend this to derive their own fields."""
        if self.job_name_prefix is None:
            self.job_name_prefix = settings.job_name_prefix

        if self.job_queue is None:
            self.job_queue = settings.job_queue

        if self.job_project is None:
            self.job_project = settings.job_project

        if self.memory_limit is None and settings.memory_limit is not None:
            self.memory_limit = settings.memory_limit

        if settings.run_jobs_if_preceding_fail:
            self.job_run_only_if_previous_succeed = False

        if self.job_name is None:
            self.job_name = names.next_name(self.job_name_prefix)

        if self.job_output_file is None:
            self.job_output_file = Path(f"{self.job_name}.out")

        self.command_directory = absolute(os.curdir, self.command_directory)

    def canon_field_values(self, registry: ParameterRegistry | None = None) -> None:
        """Make all field values canonical so the graph can match files by equality."""
        canonicalize(self, registry)


def freeze(job: CommandLineJob, settings: RunSettings, names: JobNameCounter) -> CommandLineJob:
    """Freeze *job* with the run's settings and name counter."""
    return job.freeze(settings, names)
