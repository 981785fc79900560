"""Tests for CLI logging setup."""

import json
import logging
import sys

from agentstory.interfaces.cli.logging import (
    JsonLinesFormatter,
    StoryLogFormatter,
    reset_cli_logging,
    setup_cli_logging,
)


def make_record(name="agentstory.validation.validator", msg="Validated %s", args=("story",), **extra):
    record = logging.LogRecord(name, logging.INFO, __file__, 1, msg, args, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStoryLogFormatter:
    """Tests for StoryLogFormatter."""

    def test_component_from_logger_name(self):
        line = StoryLogFormatter().format(make_record())
        assert line.endswith("[INFO] [VALIDATOR] Validated story")

    def test_component_override(self):
        line = StoryLogFormatter().format(make_record(component="EXPORT"))
        assert "[EXPORT]" in line


class TestJsonLinesFormatter:
    """Tests for JsonLinesFormatter."""

    def test_fields(self):
        entry = json.loads(JsonLinesFormatter().format(
            make_record(command="export", adapter_ids=["claude"], duration_ms=12.3456)
        ))
        assert entry["level"] == "INFO"
        assert entry["component"] == "VALIDATOR"
        assert entry["logger"] == "agentstory.validation.validator"
        assert entry["message"] == "Validated story"
        assert entry["command"] == "export"
        assert entry["adapter_ids"] == ["claude"]
        assert entry["duration_ms"] == 12.35
        assert "path" not in entry

    def test_exception_info(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = logging.LogRecord("agentstory", logging.ERROR, __file__, 1, "failed", (), None)
            record.exc_info = sys.exc_info()
        entry = json.loads(JsonLinesFormatter().format(record))
        assert entry["error_type"] == "ValueError"
        assert "boom" in entry["error"]


class TestSetupCliLogging:
    """Tests for setup_cli_logging and reset_cli_logging."""

    def test_console_only(self):
        logger = setup_cli_logging(level="debug")
        assert logger.name == "agentstory"
        assert logger.level == logging.DEBUG
        assert logger.propagate is False
        assert len(logger.handlers) == 1

    def test_idempotent(self):
        first = setup_cli_logging()
        assert setup_cli_logging(level=logging.DEBUG) is first
        assert first.level == logging.INFO

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "logs" / "agentstory.log"
        logger = setup_cli_logging(level=logging.INFO, log_file=log_file)
        logging.getLogger("agentstory.export.registry").info("Exported", extra={"command": "export"})

        entry = json.loads(log_file.read_text(encoding="utf-8").splitlines()[0])
        assert entry["message"] == "Exported"
        assert entry["component"] == "REGISTRY"
        assert entry["command"] == "export"
        assert len(logger.handlers) == 2

    def test_reset(self):
        logger = setup_cli_logging()
        reset_cli_logging()
        assert logger.handlers == []
        assert logger.propagate is True
        assert setup_cli_logging() is logger
