"""Run settings shared by every job frozen during a pipeline run.

Jobs leave scheduling hints (queue, project, memory limit, name prefix)
unset and inherit them from ``RunSettings`` when they are frozen.

Manifesto:
    Configuration should be explicit, validated, and environment-driven.

    - **Pydantic validation:** Type-checked when the run starts
    - **Environment-driven:** Reads ``JOBSPINE_*`` env vars and a .env file
    - **Profiles:** A TOML file can pin the settings of a run
    - **Sensible defaults:** Works out of the box for local runs

Examples:
    >>> settings = RunSettings(job_queue="long", memory_limit=4)
    >>> settings.job_queue
    'long'

    Loading a profile::

        # run.toml
        [run]
        job_name_prefix = "nightly"
        job_queue = "week"
        run_jobs_if_preceding_fail = true

    >>> settings = RunSettings.from_toml(Path("run.toml"))  # doctest: +SKIP

Tags:
    settings, configuration, pydantic, environment, job-spine

Doc-Types:
    - API Reference
    - Configuration Guide
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from jobspine.core.logging import configure_logging

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _default_job_name_prefix() -> str:
    return f"Q-{os.getpid()}"


class RunSettings(BaseSettings):
    """Process-wide defaults applied to jobs at freeze time.

    Fields
    ──────
    job_name_prefix            : Prefix for generated job names (``<prefix>-<n>``)
    job_queue                  : Default batch queue
    job_project                : Default batch project
    memory_limit               : Default memory limit in gigabytes
    run_jobs_if_preceding_fail : Run jobs even when an upstream job failed
    log_level                  : Structlog log level
    """

    model_config = SettingsConfigDict(
        env_prefix="JOBSPINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Job defaults ─────────────────────────────────────────────
    job_name_prefix: str = Field(default_factory=_default_job_name_prefix)
    job_queue: str | None = None
    job_project: str | None = None
    memory_limit: int | None = Field(default=None, gt=0)
    run_jobs_if_preceding_fail: bool = False

    # ── Observability ────────────────────────────────────────────
    log_level: str = "INFO"

    @classmethod
    def from_toml(cls, path: Path) -> RunSettings:
        """Load settings from the ``[run]`` table of a TOML file.

        Keys present in the file win over environment variables; keys
        missing from it are still read from the environment.
        """
        data = tomllib.loads(path.read_text(encoding="utf-8"))
        table: dict[str, Any] = data.get("run", {})
        return cls(**table)

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    def configure_logging(self, json_format: bool | None = None) -> None:
        """Configure structlog at this run's ``log_level``."""
        configure_logging(level=self.log_level, json_format=json_format)
