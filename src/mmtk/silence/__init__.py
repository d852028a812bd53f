"""Audio analysis: silence and level diagnostics, and segmentation."""

from mmtk.compiler.silence import (
    DEFAULT_MIN_SILENCE_DURATION,
    DEFAULT_NOISE_THRESHOLD,
    compile_silence_detection,
)
from mmtk.silence.levels import (
    MIN_MEASURED_LEVELS,
    VolumeStats,
    db_to_linear,
    estimate_levels,
    parse_rms_levels,
    parse_volume_stats,
    resample_levels,
)
from mmtk.silence.parser import (
    SilenceDetection,
    SilenceMarker,
    parse_silence_output,
    resolve_segments,
    tokenize_silence_output,
)
from mmtk.silence.segmentation import (
    DEFAULT_MIN_SEGMENT_DURATION,
    compute_segments,
    segment_label,
    segments_to_clips,
)

__all__ = [
    "DEFAULT_MIN_SEGMENT_DURATION",
    "DEFAULT_MIN_SILENCE_DURATION",
    "DEFAULT_NOISE_THRESHOLD",
    "MIN_MEASURED_LEVELS",
    "SilenceDetection",
    "SilenceMarker",
    "VolumeStats",
    "compile_silence_detection",
    "compute_segments",
    "db_to_linear",
    "estimate_levels",
    "parse_rms_levels",
    "parse_silence_output",
    "parse_volume_stats",
    "resolve_segments",
    "resample_levels",
    "segment_label",
    "segments_to_clips",
    "tokenize_silence_output",
]
