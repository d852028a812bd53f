"""Domain models for the multimedia toolkit.

All models are frozen dataclasses. Preset values come from the catalog and
are never mutated; request overrides produce new values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Generic, TypeVar

from mmtk.domain.enums import (
    GifDither,
    ImageFormat,
    PaletteMode,
    QualityMode,
    ScalePolicy,
    VideoContainer,
)

T = TypeVar("T")

# Bitrate sentinel marking a lossless quality preset
LOSSLESS_BITRATE = "0"

# Resolution name meaning "keep the source frame size"
SOURCE_RESOLUTION = "source"


@dataclass(frozen=True)
class QualityPreset:
    """Named bundle of audio encoding parameters."""

    name: str
    bitrate: str  # e.g. "192k", or "0" for lossless
    sample_rate: int
    channels: int
    description: str = ""

    def __post_init__(self) -> None:
        if self.channels not in (1, 2):
            raise ValueError(f"channels must be 1 or 2, got {self.channels}")
        if self.sample_rate <= 0:
            raise ValueError(f"sample_rate must be positive, got {self.sample_rate}")

    @property
    def is_lossless(self) -> bool:
        """True if this preset must never emit rate/bitrate overrides."""
        return self.bitrate == LOSSLESS_BITRATE


@dataclass(frozen=True)
class ScaleSettings:
    """Target frame size and how to fit the source into it."""

    policy: ScalePolicy = ScalePolicy.FIT
    max_resolution: str = SOURCE_RESOLUTION  # "source" or a named size
    preserve_aspect: bool = True


@dataclass(frozen=True)
class VideoPresetSettings:
    """Video encoder settings of a transcode preset."""

    codec: str
    quality_mode: QualityMode = QualityMode.CRF
    crf: int | None = None
    bitrate: str | None = None
    pixel_format: str | None = None
    scale: ScaleSettings = field(default_factory=ScaleSettings)

    def __post_init__(self) -> None:
        if self.crf is not None and not 0 <= self.crf <= 63:
            raise ValueError(f"Invalid crf: {self.crf}. Must be 0-63.")
        if self.quality_mode == QualityMode.BITRATE and not self.bitrate:
            raise ValueError("bitrate is required when quality_mode is 'bitrate'")


@dataclass(frozen=True)
class AudioPresetSettings:
    """Audio encoder settings of a transcode preset."""

    codec: str
    bitrate: str | None = None
    sample_rate: int | None = None
    channels: int | None = None
    extra_args: tuple[str, ...] = ()  # Codec-specific flags, appended verbatim


@dataclass(frozen=True)
class VideoTranscodePreset:
    """Complete container + video + audio recipe."""

    key: str
    label: str
    container: VideoContainer
    video: VideoPresetSettings
    audio: AudioPresetSettings
    notes: tuple[str, ...] = ()


@dataclass(frozen=True)
class ImageConversionSettings:
    """Settings for animated GIF/WebP output."""

    fps: int = 15
    width: int | None = 480  # None keeps the source width
    quality: int = 80  # WebP only, 1-100
    loop: bool = True
    loop_count: int = 0  # 0 = infinite
    dither: GifDither = GifDither.FLOYD_STEINBERG  # GIF only
    palette_mode: PaletteMode = PaletteMode.DIFF  # GIF only
    compression: int = 4  # WebP compression_level, 0-6
    lossless: bool = False  # WebP only

    def __post_init__(self) -> None:
        if self.fps < 0:
            raise ValueError(f"fps must not be negative, got {self.fps}")
        if not 1 <= self.quality <= 100:
            raise ValueError(f"quality must be 1-100, got {self.quality}")
        if not 0 <= self.compression <= 6:
            raise ValueError(f"compression must be 0-6, got {self.compression}")
        if self.loop_count < 0:
            raise ValueError(f"loop_count must not be negative, got {self.loop_count}")


@dataclass(frozen=True)
class ImagePreset:
    """Named GIF/WebP recipe."""

    key: str
    label: str
    description: str
    format: ImageFormat
    settings: ImageConversionSettings


@dataclass(frozen=True)
class TimeClip:
    """A time window within a source file.

    start_time and end_time accept seconds ("90", "12.5") or clock
    notation ("01:30", "00:01:30"). When both end_time and duration are
    given, duration wins.
    """

    start_time: str = ""
    end_time: str | None = None
    duration: float | None = None
    label: str | None = None


@dataclass(frozen=True)
class SilenceSegment:
    """Interval classified as silent, in seconds."""

    start: float
    end: float
    duration: float


@dataclass(frozen=True)
class Segment:
    """Non-silent interval kept after segmentation, in seconds."""

    start: float
    end: float

    @property
    def duration(self) -> float:
        return self.end - self.start


@dataclass(frozen=True)
class WaveformData:
    """Audio level envelope for drawing a waveform.

    Attributes:
        levels: Linear amplitudes in [0, 1], evenly spaced over the media.
        duration: Media duration in seconds.
        sample_rate: Levels per second, rounded.
        estimated: True when the levels were synthesised from overall
            volume statistics instead of measured per window.
    """

    levels: tuple[float, ...]
    duration: float
    sample_rate: int
    estimated: bool = False


@dataclass(frozen=True)
class Chapter:
    """Chapter marker read from a media container."""

    id: int
    title: str
    start_time: float
    end_time: float


@dataclass(frozen=True)
class StreamInfo:
    """Subset of ffprobe stream information."""

    index: int
    codec_type: str  # "audio", "video", "subtitle", ...
    codec_name: str | None = None
    sample_rate: int | None = None
    channels: int | None = None
    width: int | None = None
    height: int | None = None


@dataclass(frozen=True)
class MediaInfo:
    """Container-level information about a media file."""

    path: Path
    duration: float = 0.0
    format_name: str | None = None
    bit_rate: int | None = None
    title: str | None = None
    artist: str | None = None
    album: str | None = None
    chapters: tuple[Chapter, ...] = ()
    streams: tuple[StreamInfo, ...] = ()

    @property
    def audio_streams(self) -> tuple[StreamInfo, ...]:
        return tuple(s for s in self.streams if s.codec_type == "audio")


@dataclass(frozen=True)
class CommandOutput:
    """Result payload of a single compiled (and possibly executed) command."""

    command: str
    output_path: Path


@dataclass(frozen=True)
class BatchOutput:
    """Result payload of a batch; only successful items are listed."""

    outputs: tuple[Path, ...] = ()
    commands: tuple[str, ...] = ()


@dataclass(frozen=True)
class ChapterOutput(BatchOutput):
    """Batch payload of a chapter extraction."""

    chapters: tuple[Chapter, ...] = ()


@dataclass(frozen=True)
class SegmentedOutput(BatchOutput):
    """Batch payload of a silence split."""

    segments: tuple[Segment, ...] = ()


@dataclass(frozen=True)
class FormatOutputs(BatchOutput):
    """Batch payload of a multi-format conversion, keyed by format value."""

    by_format: dict[str, Path] = field(default_factory=dict)


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """Outcome of an operation.

    A failed result never carries data. A successful batch result may
    carry warnings describing items that failed.
    """

    success: bool
    data: T | None = None
    error: str | None = None
    warnings: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.success and self.data is not None:
            raise ValueError("A failed OperationResult cannot carry data")

    @classmethod
    def ok(cls, data: T, warnings: list[str] | tuple[str, ...] = ()) -> OperationResult[T]:
        """Build a successful result."""
        return cls(success=True, data=data, warnings=tuple(warnings))

    @classmethod
    def fail(cls, error: str, warnings: list[str] | tuple[str, ...] = ()) -> OperationResult[T]:
        """Build a failed result."""
        return cls(success=False, error=error, warnings=tuple(warnings))
