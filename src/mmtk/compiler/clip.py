"""Clip window arguments.

Seeking is split around the input: -ss goes before -i (fast input-side
seek) and -t/-to go after it. Duration takes precedence over end time and
the two are never emitted together.
"""

from __future__ import annotations

from mmtk.core.timecode import format_seconds, validate_clip
from mmtk.domain.models import TimeClip


def build_seek_args(clip: TimeClip | None) -> list[str]:
    """Arguments placed before -i."""
    if clip is None or not clip.start_time:
        return []
    return ["-ss", clip.start_time.strip()]


def build_window_args(clip: TimeClip | None) -> list[str]:
    """Arguments placed after -i."""
    if clip is None:
        return []
    if clip.duration is not None:
        return ["-t", format_seconds(clip.duration)]
    if clip.end_time:
        return ["-to", clip.end_time.strip()]
    return []


def build_clip_args(clip: TimeClip | None, input_path: str) -> list[str]:
    """Validate a clip and build the seek, input, and window arguments.

    Args:
        clip: Optional clip window.
        input_path: Input file argument.

    Returns:
        Arguments in the order [-ss S] -i INPUT [-t D | -to E].

    Raises:
        InvalidClipError: If the clip is not a usable window.
    """
    if clip is not None:
        validate_clip(clip)
    return [*build_seek_args(clip), "-i", input_path, *build_window_args(clip)]
