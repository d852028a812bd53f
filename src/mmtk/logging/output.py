"""Log record formatting and root handler setup.

The subprocess runner attaches command, arg_count, elapsed_seconds,
returncode and timeout_seconds to its records. Operation boundaries attach
the MediaToolkitError that ended them as ``error``. Both output formats
surface those fields: JSON as "tool" and "error" objects, text as a
trailing ``(key=value, ...)`` group.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING, Any

from mmtk.exceptions import MediaToolkitError
from mmtk.logging.context import OperationContextFilter

if TYPE_CHECKING:
    from mmtk.config.models import LoggingConfig

TEXT_FORMAT = "%(asctime)s - %(operation_tag)s%(name)s - %(levelname)s - %(message)s"
TEXT_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

# Extras set by SubprocessRunner
TOOL_FIELDS = (
    "command",
    "arg_count",
    "elapsed_seconds",
    "returncode",
    "timeout_seconds",
)

# Attributes copied from a MediaToolkitError when present
ERROR_FIELDS = (
    "step",
    "exit_code",
    "timed_out",
    "item_index",
    "tool",
    "reason",
    "path",
    "kind",
    "key",
    "field",
    "label",
)

_RESERVED = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
    "message",
    "asctime",
    "taskName",
    "operation",
    "item",
    "operation_tag",
    "error",
    *TOOL_FIELDS,
}


def tool_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Return the runner extras present on a record."""
    return {
        name: getattr(record, name) for name in TOOL_FIELDS if hasattr(record, name)
    }


def record_error(record: logging.LogRecord) -> MediaToolkitError | None:
    """Return the toolkit error attached via extra={"error": e} or exc_info."""
    error = getattr(record, "error", None)
    if isinstance(error, MediaToolkitError):
        return error
    if record.exc_info and isinstance(record.exc_info[1], MediaToolkitError):
        return record.exc_info[1]
    return None


def error_fields(error: MediaToolkitError) -> dict[str, Any]:
    """Describe a toolkit error as type, message and its context attributes."""
    fields: dict[str, Any] = {"type": type(error).__name__, "message": str(error)}
    for name in ERROR_FIELDS:
        value = getattr(error, name, None)
        if value is not None:
            fields[name] = value
    return fields


class JSONFormatter(logging.Formatter):
    """Format log records as one JSON object per line.

    Keys: timestamp, level, message, logger (omitted for root), operation
    and item (inside an operation context), tool, error, extra (any other
    attributes passed via ``extra=``) and exception.
    """

    def format(self, record: logging.LogRecord) -> str:
        record_time = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": record_time.isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
        }
        if record.name and record.name != "root":
            entry["logger"] = record.name

        for name in ("operation", "item"):
            value = getattr(record, name, None)
            if value:
                entry[name] = value

        tool = tool_fields(record)
        if tool:
            entry["tool"] = tool

        error = record_error(record)
        if error is not None:
            entry["error"] = error_fields(error)

        extra = {
            key: value
            for key, value in vars(record).items()
            if key not in _RESERVED and not key.startswith("_")
        }
        if extra:
            entry["extra"] = extra

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Single-line text records with tool and error details appended."""

    def __init__(self) -> None:
        super().__init__(TEXT_FORMAT, datefmt=TEXT_DATE_FORMAT)

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        details = [
            f"{name}={value}"
            for name, value in tool_fields(record).items()
            if name != "command"
        ]
        error = record_error(record)
        if error is not None:
            details.extend(
                f"{name}={value}"
                for name, value in error_fields(error).items()
                if name != "message"
            )
        if details:
            line += f" ({', '.join(details)})"
        return line


def _file_handler(config: LoggingConfig) -> logging.Handler | None:
    file_path = Path(config.file).expanduser()
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        return RotatingFileHandler(
            file_path,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"Warning: Could not open log file {config.file}: {e}\n")
        return None


def configure_logging(config: LoggingConfig) -> None:
    """Replace the root handlers according to config.

    Logs go to the configured file, to stderr, or both. A log file that
    cannot be opened is reported on stderr and logging falls back to stderr.
    """
    level = logging.getLevelName(config.level.upper())
    formatter: logging.Formatter
    if config.format.casefold() == "json":
        formatter = JSONFormatter()
    else:
        formatter = TextFormatter()

    handlers: list[logging.Handler] = []
    if config.file:
        handler = _file_handler(config)
        if handler is not None:
            handlers.append(handler)
    if config.include_stderr or not handlers:
        handlers.append(logging.StreamHandler(sys.stderr))

    context_filter = OperationContextFilter()
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)
        root_logger.addHandler(handler)
