"""Media operations: compile, run and aggregate."""

from mmtk.operations.service import (
    DEFAULT_PREVIEW_DURATION,
    DEFAULT_WAVEFORM_SAMPLES,
    DRY_RUN_WARNING,
    MediaOperations,
)

__all__ = [
    "DEFAULT_PREVIEW_DURATION",
    "DEFAULT_WAVEFORM_SAMPLES",
    "DRY_RUN_WARNING",
    "MediaOperations",
]
