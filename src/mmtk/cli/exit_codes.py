"""Centralized exit codes for all CLI commands.

Exit code ranges:
    0: Success
    1-9: General errors
    10-19: Validation errors (options, clip files, config)
    20-29: Input errors
    30-39: Tool errors
    40-49: Operation errors
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for mmtk CLI commands."""

    # Success (0)
    SUCCESS = 0

    # General errors (1-9)
    GENERAL_ERROR = 1
    INTERRUPTED = 2

    # Validation errors (10-19)
    VALIDATION_ERROR = 10
    CONFIG_ERROR = 11
    CLIP_FILE_ERROR = 12

    # Input errors (20-29)
    TARGET_NOT_FOUND = 20
    NO_CHAPTERS_FOUND = 21

    # Tool errors (30-39)
    TOOL_NOT_AVAILABLE = 30
    PROBE_FAILED = 31

    # Operation errors (40-49)
    OPERATION_FAILED = 40
