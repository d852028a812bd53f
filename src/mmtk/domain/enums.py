"""Domain enums for the multimedia toolkit.

Closed sets of formats, modes and policies. Values are the strings used on
the command line and in preset tables.
"""

from enum import Enum


class AudioFormat(Enum):
    """Audio output format."""

    MP3 = "mp3"
    AAC = "aac"
    OGG = "ogg"
    OPUS = "opus"
    FLAC = "flac"
    WAV = "wav"
    WEBM = "webm"

    @property
    def is_lossless(self) -> bool:
        """True for containers that never receive a bitrate/rate override."""
        return self in (AudioFormat.FLAC, AudioFormat.WAV)


class VideoContainer(Enum):
    """Video output container."""

    WEBM = "webm"
    MP4 = "mp4"
    MKV = "mkv"

    @property
    def muxer(self) -> str:
        """FFmpeg muxer name passed to -f."""
        return "matroska" if self is VideoContainer.MKV else self.value


class ImageFormat(Enum):
    """Animated image output format."""

    GIF = "gif"
    WEBP = "webp"


class QualityMode(Enum):
    """Video encoding quality mode."""

    CRF = "crf"  # Constant Rate Factor
    BITRATE = "bitrate"  # Target bitrate


class ScalePolicy(Enum):
    """How a frame is fitted into a target resolution."""

    FIT = "fit"  # Letterbox/pillarbox with padding
    STRETCH = "stretch"  # Ignore aspect ratio
    CROP = "crop"  # Fill and crop the overflow


class PresetKind(Enum):
    """Independent preset namespaces in the catalog."""

    QUALITY = "quality"
    VIDEO = "video"
    IMAGE = "image"
    RESOLUTION = "resolution"


class PreviewType(Enum):
    """Which part of a clip a preview covers."""

    START = "start"
    END = "end"
    BOTH = "both"


class TrailingSilencePolicy(Enum):
    """What to do with a silence that starts but never ends in the diagnostics.

    ffmpeg only prints silence_end when sound resumes, so a file that ends
    while silent leaves a dangling silence_start.
    """

    EXTEND_TO_END = "extend"  # Silence runs to the end of the media
    DISCARD = "discard"  # Ignore the dangling start


class GifDither(Enum):
    """paletteuse dithering algorithm."""

    NONE = "none"
    FLOYD_STEINBERG = "floyd_steinberg"
    SIERRA2 = "sierra2"
    BAYER = "bayer"


class PaletteMode(Enum):
    """palettegen stats_mode."""

    FULL = "full"
    DIFF = "diff"
