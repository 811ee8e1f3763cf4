"""Tests for jobspine.core.logging module."""

import json

import pytest
import structlog

from jobspine.core.logging import LogContext, configure_logging, get_logger


@pytest.fixture
def reset_structlog():
    yield
    structlog.reset_defaults()


def _last_event(capsys) -> dict:
    return json.loads(capsys.readouterr().out.strip().splitlines()[-1])


class TestGetLogger:
    def test_named_logger_is_usable(self, capsys, reset_structlog):
        """A module-level get_logger(__name__) must not fail at import."""
        logger = get_logger("jobspine.framework.params")
        configure_logging(level="DEBUG", json_format=True)
        logger.debug("introspector.described", job_type="AlignJob")
        assert _last_event(capsys)["job_type"] == "AlignJob"

    def test_unnamed_logger(self, capsys, reset_structlog):
        configure_logging(level="INFO", json_format=True)
        get_logger().info("job.frozen")
        assert _last_event(capsys)["event"] == "job.frozen"


class TestConfigureLogging:
    def test_json_output_carries_service_and_event(self, capsys, reset_structlog):
        configure_logging(level="DEBUG", json_format=True, service="job-spine-test")
        get_logger("tests").info("job.frozen", job_name="test-1")
        entry = _last_event(capsys)
        assert entry["event"] == "job.frozen"
        assert entry["job_name"] == "test-1"
        assert entry["level"] == "info"
        assert entry["service.name"] == "job-spine-test"
        assert "timestamp" in entry

    def test_level_filters_debug(self, capsys, reset_structlog):
        configure_logging(level="INFO", json_format=True)
        get_logger("tests").debug("noise")
        assert "noise" not in capsys.readouterr().out


class TestLogContext:
    def test_binds_and_unbinds(self):
        with LogContext(job_type="AlignJob"):
            assert structlog.contextvars.get_contextvars()["job_type"] == "AlignJob"
        assert "job_type" not in structlog.contextvars.get_contextvars()

    def test_context_reaches_events(self, capsys, reset_structlog):
        configure_logging(level="DEBUG", json_format=True)
        with LogContext(job_type="CopyJob"):
            get_logger("tests").debug("canon.applied")
        assert _last_event(capsys)["job_type"] == "CopyJob"
