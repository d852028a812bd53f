"""Structured logging with JSON output, file rotation and operation context."""

from mmtk.logging.context import (
    OperationContextFilter,
    get_operation_context,
    operation_context,
)
from mmtk.logging.output import JSONFormatter, TextFormatter, configure_logging

__all__ = [
    "JSONFormatter",
    "OperationContextFilter",
    "TextFormatter",
    "configure_logging",
    "get_operation_context",
    "operation_context",
]
