"""Operation context for structured logging.

Uses contextvars so that every record logged while an operation (or one
item of a batch) runs carries its name, including records from worker
threads that enter the context themselves.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

_operation: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "operation", default=None
)
_item: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "item", default=None
)


@contextmanager
def operation_context(
    operation: str, item: str | int | None = None
) -> Generator[None, None, None]:
    """Tag log records with an operation name and optional batch item.

    Restores the previous context on exit, so contexts nest.

    Example:
        with operation_context("extract_clips", 2):
            logger.info("Extracting")  # [extract_clips#2] Extracting
    """
    op_token = _operation.set(operation)
    item_token = _item.set(str(item) if item is not None else None)
    try:
        yield
    finally:
        _item.reset(item_token)
        _operation.reset(op_token)


def get_operation_context() -> tuple[str | None, str | None]:
    """Return (operation, item) of the current context."""
    return _operation.get(), _item.get()


class OperationContextFilter(logging.Filter):
    """Logging filter that injects operation context into log records.

    Adds operation and item attributes for JSON output and a compact
    operation_tag like "[extract_clips#2] " for text output.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        operation, item = get_operation_context()
        record.operation = operation
        record.item = item

        if operation:
            if item:
                record.operation_tag = f"[{operation}#{item}] "
            else:
                record.operation_tag = f"[{operation}] "
        else:
            record.operation_tag = ""

        return True  # Never filter out records
