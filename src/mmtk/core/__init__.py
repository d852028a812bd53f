"""Core utilities package.

Pure helpers with no external dependencies: time value parsing and
formatting, clip validation, and file name handling.
"""

from mmtk.core.string_utils import base_name, sanitize_filename
from mmtk.core.timecode import (
    clip_bounds,
    format_clock,
    format_seconds,
    parse_time_to_seconds,
    validate_clip,
)

__all__ = [
    "base_name",
    "clip_bounds",
    "format_clock",
    "format_seconds",
    "parse_time_to_seconds",
    "sanitize_filename",
    "validate_clip",
]
