"""Unit tests for structured logging."""

import json
import logging
import sys

from syndbind.logging_config import (
    ExecutionLogger,
    StructuredFormatter,
    create_execution_logger,
)


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="syndbind.feed_input",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg="Processed %s feed",
        args=("rss_2.0",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredFormatterUnit:
    """Unit tests for the JSON formatter."""

    def test_formats_single_line_json(self):
        line = StructuredFormatter().format(make_record())

        assert "\n" not in line
        payload = json.loads(line)
        assert payload["level"] == "INFO"
        assert payload["logger"] == "syndbind.feed_input"
        assert payload["message"] == "Processed rss_2.0 feed"
        assert "timestamp" in payload

    def test_includes_context_fields(self):
        record = make_record(execution_id="exec_1", feed_type="rss_2.0", entries_count=3)

        payload = json.loads(StructuredFormatter().format(record))

        assert payload["execution_id"] == "exec_1"
        assert payload["feed_type"] == "rss_2.0"
        assert payload["entries_count"] == 3
        assert "target_type" not in payload

    def test_includes_exception(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = make_record()
            record.exc_info = sys.exc_info()

        payload = json.loads(StructuredFormatter().format(record))

        assert "ValueError: boom" in payload["exception"]


class TestExecutionLoggerUnit:
    """Unit tests for ExecutionLogger."""

    def test_records_carry_context(self, caplog):
        logger = ExecutionLogger("exec_42", "feed_output")

        with caplog.at_level(logging.INFO, logger="syndbind.feed_output"):
            logger.log_conversion("atom_1.0", "rss_2.0", 5)

        record = caplog.records[-1]
        assert record.name == "syndbind.feed_output"
        assert record.execution_id == "exec_42"
        assert record.component == "feed_output"
        assert record.source_type == "atom_1.0"
        assert record.target_type == "rss_2.0"
        assert record.entries_count == 5

    def test_execution_start_and_end(self, caplog):
        logger = ExecutionLogger("exec_1", "cli")

        with caplog.at_level(logging.INFO, logger="syndbind.cli"):
            logger.log_execution_start()
            logger.log_execution_end(success=False)

        start, end = caplog.records[-2:]
        assert start.getMessage() == "Starting cli execution"
        assert end.getMessage() == "Completed cli execution"
        assert end.execution_success is False
        assert end.execution_duration_seconds >= 0

    def test_create_execution_logger_generates_id(self):
        logger = create_execution_logger("feed_input")

        assert logger.execution_id.startswith("exec_")
        assert logger.logger.name == "syndbind.feed_input"

    def test_create_execution_logger_keeps_id(self):
        assert create_execution_logger("cli", "cli_1").execution_id == "cli_1"
