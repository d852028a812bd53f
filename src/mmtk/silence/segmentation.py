"""Non-silent segment computation."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from mmtk.core.timecode import format_seconds
from mmtk.domain.models import Segment, SilenceSegment, TimeClip
from mmtk.exceptions import NoSegmentsFoundError, NoSilenceDetectedError

logger = logging.getLogger(__name__)

DEFAULT_MIN_SEGMENT_DURATION = 5.0


def compute_segments(
    silences: Sequence[SilenceSegment],
    duration: float,
    min_segment_duration: float = DEFAULT_MIN_SEGMENT_DURATION,
) -> list[Segment]:
    """Compute the non-silent gaps between silences.

    Gaps shorter than min_segment_duration are dropped, never merged into
    a neighbour.

    Args:
        silences: Silence intervals in stream order.
        duration: Total media duration in seconds.
        min_segment_duration: Minimum length of a kept segment.

    Returns:
        Segments in order.

    Raises:
        NoSilenceDetectedError: If silences is empty.
        NoSegmentsFoundError: If no gap is long enough.

    Example:
        duration=100, silences (20-21), (60-62), minimum 5
        -> (0-20), (21-60), (62-100)
    """
    if not silences:
        raise NoSilenceDetectedError()

    segments: list[Segment] = []
    last_end = 0.0

    for silence in silences:
        if silence.start - last_end >= min_segment_duration:
            segments.append(Segment(start=last_end, end=silence.start))
        last_end = silence.end

    if duration - last_end >= min_segment_duration:
        segments.append(Segment(start=last_end, end=duration))

    if not segments:
        raise NoSegmentsFoundError(len(silences), min_segment_duration)

    logger.debug(
        "Computed %d segments from %d silences (min %.3fs)",
        len(segments),
        len(silences),
        min_segment_duration,
    )
    return segments


def segment_label(index: int) -> str:
    """1-based segment label, e.g. segment_001."""
    return f"segment_{index:03d}"


def segments_to_clips(segments: Sequence[Segment]) -> list[TimeClip]:
    """Turn segments into extraction clips labelled segment_001, ..."""
    return [
        TimeClip(
            start_time=format_seconds(segment.start),
            duration=segment.duration,
            label=segment_label(i),
        )
        for i, segment in enumerate(segments, start=1)
    ]
