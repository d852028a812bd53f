"""Domain models and enums shared across the toolkit."""

from mmtk.domain.enums import (
    AudioFormat,
    GifDither,
    ImageFormat,
    PaletteMode,
    PresetKind,
    PreviewType,
    QualityMode,
    ScalePolicy,
    TrailingSilencePolicy,
    VideoContainer,
)
from mmtk.domain.models import (
    LOSSLESS_BITRATE,
    SOURCE_RESOLUTION,
    AudioPresetSettings,
    BatchOutput,
    Chapter,
    ChapterOutput,
    CommandOutput,
    FormatOutputs,
    ImageConversionSettings,
    ImagePreset,
    MediaInfo,
    OperationResult,
    QualityPreset,
    ScaleSettings,
    Segment,
    SegmentedOutput,
    SilenceSegment,
    StreamInfo,
    TimeClip,
    VideoPresetSettings,
    VideoTranscodePreset,
    WaveformData,
)

__all__ = [
    # Enums
    "AudioFormat",
    "GifDither",
    "ImageFormat",
    "PaletteMode",
    "PresetKind",
    "PreviewType",
    "QualityMode",
    "ScalePolicy",
    "TrailingSilencePolicy",
    "VideoContainer",
    # Models
    "LOSSLESS_BITRATE",
    "SOURCE_RESOLUTION",
    "AudioPresetSettings",
    "BatchOutput",
    "Chapter",
    "ChapterOutput",
    "CommandOutput",
    "FormatOutputs",
    "ImageConversionSettings",
    "ImagePreset",
    "MediaInfo",
    "OperationResult",
    "QualityPreset",
    "ScaleSettings",
    "Segment",
    "SegmentedOutput",
    "SilenceSegment",
    "StreamInfo",
    "TimeClip",
    "VideoPresetSettings",
    "VideoTranscodePreset",
    "WaveformData",
]
