"""Time value parsing and formatting.

ffmpeg accepts both plain seconds and clock notation for -ss/-to. These
helpers validate user-supplied values before they reach a command line and
render computed seconds in a stable, compact form.
"""

from __future__ import annotations

import re

from mmtk.domain.models import TimeClip
from mmtk.exceptions import InvalidClipError

_SECONDS_PATTERN = re.compile(r"^\d+(\.\d+)?$")
_CLOCK_PATTERN = re.compile(r"^(?:(\d+):)?(\d{1,2}):(\d{1,2}(?:\.\d+)?)$")


def parse_time_to_seconds(value: str) -> float:
    """Parse a time value into seconds.

    Args:
        value: Seconds ("90", "12.5"), MM:SS ("01:30") or HH:MM:SS
            ("00:01:30.250").

    Returns:
        Time in seconds.

    Raises:
        InvalidClipError: If the value is empty or malformed.

    Examples:
        parse_time_to_seconds("90") -> 90.0
        parse_time_to_seconds("01:30") -> 90.0
        parse_time_to_seconds("1:00:05") -> 3605.0
    """
    text = value.strip() if isinstance(value, str) else ""
    if not text:
        raise InvalidClipError(f"Invalid time value: {value!r}")

    if _SECONDS_PATTERN.match(text):
        return float(text)

    match = _CLOCK_PATTERN.match(text)
    if match is None:
        raise InvalidClipError(f"Invalid time value: {value!r}")

    hours = int(match.group(1)) if match.group(1) is not None else 0
    minutes = int(match.group(2))
    seconds = float(match.group(3))
    if minutes >= 60 or seconds >= 60:
        raise InvalidClipError(f"Invalid time value: {value!r}")
    return hours * 3600 + minutes * 60 + seconds


def format_seconds(value: float) -> str:
    """Render seconds for an ffmpeg argument.

    Values are rounded to milliseconds and trailing zeros are dropped, so
    10.0 renders as "10" and 38.9999999 as "39".
    """
    text = f"{round(float(value), 3):.3f}".rstrip("0").rstrip(".")
    return text or "0"


def format_clock(seconds: float) -> str:
    """Format seconds as MM:SS, or HH:MM:SS when at least an hour."""
    total = int(seconds)
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours > 0:
        return f"{hours:02d}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"


def validate_clip(clip: TimeClip) -> None:
    """Check that a clip describes a usable extraction window.

    Raises:
        InvalidClipError: If the clip has neither duration nor end_time,
            has a malformed time value, a non-positive duration, or an
            end_time that is not after its start_time.
    """
    start = parse_time_to_seconds(clip.start_time) if clip.start_time else 0.0

    if clip.duration is None and not clip.end_time:
        raise InvalidClipError(
            "Clip must have either a duration or an end time", clip.label
        )

    if clip.duration is not None:
        if clip.duration <= 0:
            raise InvalidClipError(
                f"Clip duration must be positive, got {clip.duration}", clip.label
            )
        return

    end = parse_time_to_seconds(clip.end_time or "")
    if end <= start:
        raise InvalidClipError(
            f"Clip end time {clip.end_time} is not after start time "
            f"{clip.start_time or '0'}",
            clip.label,
        )


def clip_bounds(clip: TimeClip) -> tuple[float, float]:
    """Return (start, end) of a validated clip in seconds."""
    start = parse_time_to_seconds(clip.start_time) if clip.start_time else 0.0
    if clip.duration is not None:
        return start, start + clip.duration
    return start, parse_time_to_seconds(clip.end_time or "")
