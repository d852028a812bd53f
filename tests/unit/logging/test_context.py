"""Unit tests for logging context module."""

import logging
import threading

from mmtk.logging.context import (
    OperationContextFilter,
    get_operation_context,
    operation_context,
)


def _record(message: str = "message") -> logging.LogRecord:
    return logging.LogRecord("mmtk.test", logging.INFO, __file__, 1, message, None, None)


class TestOperationContext:
    """Tests for operation_context and get_operation_context."""

    def test_empty_by_default(self) -> None:
        assert get_operation_context() == (None, None)

    def test_sets_and_restores(self) -> None:
        """Context is set inside the block and cleared afterwards."""
        with operation_context("extract_clips", 2):
            assert get_operation_context() == ("extract_clips", "2")
        assert get_operation_context() == (None, None)

    def test_nesting_restores_outer(self) -> None:
        with operation_context("convert_to_formats"):
            with operation_context("convert_to_formats", "flac"):
                assert get_operation_context() == ("convert_to_formats", "flac")
            assert get_operation_context() == ("convert_to_formats", None)

    def test_restored_after_exception(self) -> None:
        try:
            with operation_context("merge_audio_files"):
                raise ValueError("boom")
        except ValueError:
            pass
        assert get_operation_context() == (None, None)

    def test_not_inherited_by_plain_threads(self) -> None:
        """Worker threads start with an empty context."""
        seen = []
        with operation_context("convert_to_formats"):
            thread = threading.Thread(target=lambda: seen.append(get_operation_context()))
            thread.start()
            thread.join()
        assert seen == [(None, None)]


class TestOperationContextFilter:
    """Tests for OperationContextFilter."""

    def test_adds_tag_with_item(self) -> None:
        record = _record()
        with operation_context("extract_clips", 3):
            assert OperationContextFilter().filter(record) is True
        assert record.operation == "extract_clips"
        assert record.item == "3"
        assert record.operation_tag == "[extract_clips#3] "

    def test_adds_tag_without_item(self) -> None:
        record = _record()
        with operation_context("detect_silence"):
            OperationContextFilter().filter(record)
        assert record.operation_tag == "[detect_silence] "

    def test_empty_tag_outside_operations(self) -> None:
        record = _record()
        OperationContextFilter().filter(record)
        assert record.operation is None
        assert record.operation_tag == ""
