"""Unit tests for log formatters and configure_logging."""

import json
import logging
import sys
from pathlib import Path

import pytest

from mmtk.config.models import LoggingConfig
from mmtk.exceptions import OutputPathError, ToolInvocationError
from mmtk.logging import (
    JSONFormatter,
    OperationContextFilter,
    TextFormatter,
    configure_logging,
    operation_context,
)


def _record(name: str = "mmtk.operations", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name, logging.WARNING, __file__, 10, "Clip %d failed", (2,), None
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def _with_context(record: logging.LogRecord) -> logging.LogRecord:
    OperationContextFilter().filter(record)
    return record


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way the test found it."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_basic_fields(self) -> None:
        entry = json.loads(JSONFormatter().format(_record()))
        assert entry["level"] == "WARNING"
        assert entry["message"] == "Clip 2 failed"
        assert entry["logger"] == "mmtk.operations"
        assert entry["timestamp"].endswith("+00:00")
        assert not {"tool", "error", "extra", "operation"} & entry.keys()

    def test_runner_fields_grouped_as_tool(self) -> None:
        """Runner extras are lifted into a tool object, not mixed with other extras."""
        record = _record(
            command="ffmpeg", elapsed_seconds=1.5, returncode=1, request_id="abc"
        )
        entry = json.loads(JSONFormatter().format(record))
        assert entry["tool"] == {
            "command": "ffmpeg",
            "elapsed_seconds": 1.5,
            "returncode": 1,
        }
        assert entry["extra"] == {"request_id": "abc"}

    def test_timeout_fields(self) -> None:
        record = _record(command="ffmpeg", timeout_seconds=30, elapsed_seconds=30.002)
        entry = json.loads(JSONFormatter().format(record))
        assert entry["tool"]["timeout_seconds"] == 30

    def test_invocation_error_fields(self) -> None:
        error = ToolInvocationError("extract_clip", 1, "Invalid data", item_index=3)
        entry = json.loads(JSONFormatter().format(_record(error=error)))
        assert entry["error"] == {
            "type": "ToolInvocationError",
            "message": "extract_clip failed with exit code 1: Invalid data",
            "step": "extract_clip",
            "exit_code": 1,
            "timed_out": False,
            "item_index": 3,
        }
        assert "extra" not in entry

    def test_error_from_exc_info(self) -> None:
        try:
            raise OutputPathError("/out", "Permission denied")
        except OutputPathError:
            record = logging.LogRecord(
                "mmtk", logging.ERROR, __file__, 1, "failed", None, sys.exc_info()
            )
        entry = json.loads(JSONFormatter().format(record))
        assert entry["error"]["type"] == "OutputPathError"
        assert entry["error"]["path"] == "/out"
        assert entry["error"]["reason"] == "Permission denied"
        assert "OutputPathError: Cannot write to /out" in entry["exception"]

    def test_other_exceptions_have_no_error_object(self) -> None:
        try:
            raise RuntimeError("ffmpeg crashed")
        except RuntimeError:
            record = logging.LogRecord(
                "mmtk", logging.ERROR, __file__, 1, "failed", None, sys.exc_info()
            )
        entry = json.loads(JSONFormatter().format(record))
        assert "error" not in entry
        assert "RuntimeError: ffmpeg crashed" in entry["exception"]

    def test_operation_context_at_top_level(self) -> None:
        """Operation fields from the filter are top-level keys; the text tag is not."""
        with operation_context("extract_clips", 2):
            record = _with_context(_record())
        entry = json.loads(JSONFormatter().format(record))
        assert entry["operation"] == "extract_clips"
        assert entry["item"] == "2"
        assert "operation_tag" not in json.dumps(entry)

    def test_root_logger_name_omitted(self) -> None:
        entry = json.loads(JSONFormatter().format(_record(name="root")))
        assert "logger" not in entry


class TestTextFormatter:
    """Tests for TextFormatter."""

    def test_plain_record(self) -> None:
        line = TextFormatter().format(_with_context(_record()))
        assert line.endswith("mmtk.operations - WARNING - Clip 2 failed")

    def test_runner_fields_appended(self) -> None:
        record = _with_context(
            _record(command="ffmpeg", elapsed_seconds=0.25, returncode=0)
        )
        line = TextFormatter().format(record)
        assert line.endswith("Clip 2 failed (elapsed_seconds=0.25, returncode=0)")

    def test_error_step_appended(self) -> None:
        error = ToolInvocationError("merge_audio_files", -1, timed_out=True)
        with operation_context("merge_audio_files"):
            record = _with_context(_record(error=error))
        line = TextFormatter().format(record)
        assert "[merge_audio_files] mmtk.operations" in line
        assert line.endswith(
            "(type=ToolInvocationError, step=merge_audio_files, exit_code=-1, "
            "timed_out=True)"
        )


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_stderr_handler_by_default(self, restore_root_logger) -> None:
        configure_logging(LoggingConfig(level="info"))
        root = restore_root_logger
        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.StreamHandler)
        assert isinstance(root.handlers[0].formatter, TextFormatter)

    def test_json_file_handler(self, restore_root_logger, temp_dir: Path) -> None:
        log_file = temp_dir / "logs" / "mmtk.log"
        configure_logging(LoggingConfig(level="debug", file=log_file, format="json"))

        with operation_context("split_by_silence"):
            logging.getLogger("mmtk.test").debug(
                "Command completed",
                extra={"command": "ffmpeg", "elapsed_seconds": 2.0, "returncode": 0},
            )
        for handler in restore_root_logger.handlers:
            handler.flush()

        entry = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
        assert entry["message"] == "Command completed"
        assert entry["operation"] == "split_by_silence"
        assert entry["tool"]["returncode"] == 0

    def test_file_plus_stderr(self, restore_root_logger, temp_dir: Path) -> None:
        configure_logging(
            LoggingConfig(file=temp_dir / "mmtk.log", include_stderr=True)
        )
        assert len(restore_root_logger.handlers) == 2

    def test_unopenable_file_falls_back_to_stderr(
        self, restore_root_logger, temp_dir: Path, capsys
    ) -> None:
        blocker = temp_dir / "blocker"
        blocker.write_text("", encoding="utf-8")
        configure_logging(LoggingConfig(file=blocker / "mmtk.log"))
        handlers = restore_root_logger.handlers
        assert len(handlers) == 1
        assert not isinstance(handlers[0], logging.FileHandler)
        assert "Could not open log file" in capsys.readouterr().err

    def test_text_format_has_operation_tag(
        self, restore_root_logger, temp_dir: Path
    ) -> None:
        log_file = temp_dir / "mmtk.log"
        configure_logging(LoggingConfig(level="info", file=log_file))
        with operation_context("extract_clips", 1):
            logging.getLogger("mmtk.test").info("Extracting")
        for handler in restore_root_logger.handlers:
            handler.flush()
        assert "[extract_clips#1] mmtk.test - INFO - Extracting" in log_file.read_text(
            encoding="utf-8"
        )
