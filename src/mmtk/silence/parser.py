"""Parser for ffmpeg silencedetect diagnostics.

silencedetect writes one line per event to stderr:

    [silencedetect @ 0x5581] silence_start: 20
    [silencedetect @ 0x5581] silence_end: 21 | silence_duration: 1

Lines are tokenised in order and paired by a two-state machine (waiting
for a start, waiting for an end). Markers that do not pair cleanly are
kept and reported instead of shifting every later pair.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterator

from mmtk.domain.enums import TrailingSilencePolicy
from mmtk.domain.models import SilenceSegment

logger = logging.getLogger(__name__)

_NUMBER = r"(-?\d+(?:\.\d+)?(?:e[-+]?\d+)?)"
_START_PATTERN = re.compile(rf"silence_start:\s*{_NUMBER}")
_END_PATTERN = re.compile(
    rf"silence_end:\s*{_NUMBER}\s*\|\s*silence_duration:\s*{_NUMBER}"
)


@dataclass(frozen=True)
class SilenceMarker:
    """A single silence_start or silence_end event."""

    kind: str  # "start" or "end"
    time: float
    duration: float | None = None  # Only set for "end"


@dataclass(frozen=True)
class SilenceDetection:
    """Parsed silencedetect output.

    Attributes:
        segments: Closed silence intervals in stream order.
        unmatched_start: Start of a silence that was still open when the
            output ended, or None.
        orphan_ends: Number of end markers that had no open start; their
            start was reconstructed from the reported duration.
    """

    segments: tuple[SilenceSegment, ...] = ()
    unmatched_start: float | None = None
    orphan_ends: int = 0


def tokenize_silence_output(text: str) -> Iterator[SilenceMarker]:
    """Yield start/end markers in the order they appear."""
    for line in text.splitlines():
        end_match = _END_PATTERN.search(line)
        if end_match:
            yield SilenceMarker(
                kind="end",
                time=float(end_match.group(1)),
                duration=float(end_match.group(2)),
            )
            continue
        start_match = _START_PATTERN.search(line)
        if start_match:
            yield SilenceMarker(kind="start", time=float(start_match.group(1)))


def _make_segment(start: float, end: float) -> SilenceSegment | None:
    # silencedetect can report a slightly negative start for leading silence
    start = max(start, 0.0)
    if end <= start:
        return None
    return SilenceSegment(start=start, end=end, duration=end - start)


def parse_silence_output(text: str) -> SilenceDetection:
    """Parse silencedetect diagnostic text.

    Args:
        text: Captured stderr of a silencedetect pass.

    Returns:
        SilenceDetection with closed segments and any unpaired markers.
    """
    segments: list[SilenceSegment] = []
    open_start: float | None = None
    orphan_ends = 0

    for marker in tokenize_silence_output(text):
        if marker.kind == "start":
            if open_start is not None:
                logger.warning(
                    "Repeated silence_start at %.3f while silence from %.3f "
                    "is open, keeping the earlier start",
                    marker.time,
                    open_start,
                )
                continue
            open_start = marker.time
            continue

        if open_start is None:
            start = marker.time - (marker.duration or 0.0)
            orphan_ends += 1
            logger.warning(
                "silence_end at %.3f has no matching start, "
                "reconstructed start %.3f from duration",
                marker.time,
                start,
            )
        else:
            start = open_start
            open_start = None

        segment = _make_segment(start, marker.time)
        if segment is not None:
            segments.append(segment)

    if open_start is not None:
        logger.info(
            "Output ended while silent (silence_start at %.3f without end)",
            open_start,
        )

    return SilenceDetection(
        segments=tuple(segments),
        unmatched_start=open_start,
        orphan_ends=orphan_ends,
    )


def resolve_segments(
    detection: SilenceDetection,
    media_duration: float | None,
    policy: TrailingSilencePolicy = TrailingSilencePolicy.EXTEND_TO_END,
) -> list[SilenceSegment]:
    """Close or drop a trailing open silence according to policy.

    Args:
        detection: Parsed detection.
        media_duration: Total media duration in seconds, if known.
        policy: What to do with an unmatched trailing start.

    Returns:
        Closed silence segments in stream order.
    """
    segments = list(detection.segments)
    start = detection.unmatched_start
    if start is None:
        return segments

    if policy == TrailingSilencePolicy.DISCARD:
        logger.debug("Discarding trailing silence from %.3f", start)
        return segments

    if not media_duration:
        logger.warning(
            "Cannot extend trailing silence from %.3f: media duration unknown",
            start,
        )
        return segments

    segment = _make_segment(start, media_duration)
    if segment is not None:
        segments.append(segment)
    return segments
