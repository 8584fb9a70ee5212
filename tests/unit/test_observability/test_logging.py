"""Unit tests for structured logging configuration."""

import json
import logging
from io import StringIO

import structlog

from pingwatch.observability.logging import (
    bind_run_context,
    clear_run_context,
    configure_logging,
)


class TestConfigureLogging:
    """Tests for configure_logging."""

    def teardown_method(self) -> None:
        """Restore structlog defaults."""
        structlog.contextvars.clear_contextvars()
        structlog.reset_defaults()
        for name in ("httpx", "httpcore"):
            logging.getLogger(name).setLevel(logging.NOTSET)

    def test_json_lines(self) -> None:
        """JSON format emits one object per event with run context."""
        output = StringIO()
        configure_logging(output=output)
        bind_run_context("run-123", "status")

        structlog.get_logger().info("aggregation_complete", endpoints_total=3)

        event = json.loads(output.getvalue().strip().splitlines()[-1])
        assert event["event"] == "aggregation_complete"
        assert event["endpoints_total"] == 3
        assert event["run_id"] == "run-123"
        assert event["command"] == "status"
        assert event["level"] == "info"
        assert "timestamp" in event

    def test_level_filtering(self) -> None:
        """Events below the configured level are dropped."""
        output = StringIO()
        configure_logging(level=logging.WARNING, output=output)

        log = structlog.get_logger()
        log.info("quiet")
        log.warning("loud")

        assert "quiet" not in output.getvalue()
        assert "loud" in output.getvalue()

    def test_console_format(self) -> None:
        """Console format renders plain text."""
        output = StringIO()
        configure_logging(output=output, json_format=False)

        structlog.get_logger().info("watch_interrupted", passes=2)

        assert "watch_interrupted" in output.getvalue()
        assert not output.getvalue().lstrip().startswith("{")

    def test_httpx_request_lines_hidden_at_info(self) -> None:
        """Per-request httpx logging is raised to WARNING unless verbose."""
        configure_logging(level=logging.INFO, output=StringIO())
        assert logging.getLogger("httpx").level == logging.WARNING

        configure_logging(level=logging.DEBUG, output=StringIO())
        assert logging.getLogger("httpx").level == logging.DEBUG

    def test_clear_run_context(self) -> None:
        """Cleared run context no longer appears."""
        output = StringIO()
        configure_logging(output=output)
        bind_run_context("run-456", "watch")
        clear_run_context()

        structlog.get_logger().info("refresh_complete")

        event = json.loads(output.getvalue().strip().splitlines()[-1])
        assert "run_id" not in event
        assert "command" not in event
