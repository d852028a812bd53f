"""Unit tests for non-silent segment computation."""

import pytest

from mmtk.domain.models import Segment, SilenceSegment
from mmtk.exceptions import NoSegmentsFoundError, NoSilenceDetectedError
from mmtk.silence import compute_segments, segment_label, segments_to_clips


def _silence(start: float, end: float) -> SilenceSegment:
    return SilenceSegment(start=start, end=end, duration=end - start)


class TestComputeSegments:
    """Tests for compute_segments."""

    def test_gaps_between_silences(self) -> None:
        segments = compute_segments([_silence(20, 21), _silence(60, 62)], 100.0, 5.0)
        assert [(s.start, s.end) for s in segments] == [(0, 20), (21, 60), (62, 100)]

    def test_short_gaps_are_dropped_not_merged(self) -> None:
        segments = compute_segments(
            [_silence(3, 4), _silence(30, 31), _silence(33, 34)], 60.0, 5.0
        )
        # 0-3 and 31-33 are too short
        assert [(s.start, s.end) for s in segments] == [(4, 30), (34, 60)]

    def test_leading_silence(self) -> None:
        segments = compute_segments([_silence(0, 2)], 30.0, 5.0)
        assert segments == [Segment(start=2, end=30.0)]

    def test_trailing_silence_to_end(self) -> None:
        segments = compute_segments([_silence(50, 60)], 60.0, 5.0)
        assert segments == [Segment(start=0.0, end=50)]

    def test_gap_equal_to_minimum_is_kept(self) -> None:
        segments = compute_segments([_silence(5, 6)], 6.0, 5.0)
        assert segments == [Segment(start=0.0, end=5)]

    def test_no_silence(self) -> None:
        with pytest.raises(NoSilenceDetectedError):
            compute_segments([], 100.0, 5.0)

    def test_minimum_too_large(self) -> None:
        with pytest.raises(NoSegmentsFoundError) as exc_info:
            compute_segments([_silence(20, 21), _silence(60, 62)], 100.0, 50.0)
        assert exc_info.value.silence_count == 2
        assert exc_info.value.min_segment_duration == 50.0


class TestSegmentsToClips:
    """Tests for segment labels and clips."""

    def test_labels(self) -> None:
        assert segment_label(1) == "segment_001"
        assert segment_label(12) == "segment_012"

    def test_clips(self) -> None:
        clips = segments_to_clips([Segment(0.0, 20.0), Segment(21.0, 60.5)])
        assert clips[0].start_time == "0"
        assert clips[0].duration == 20.0
        assert clips[1].start_time == "21"
        assert clips[1].duration == 39.5
        assert [c.label for c in clips] == ["segment_001", "segment_002"]
        assert all(c.end_time is None for c in clips)
