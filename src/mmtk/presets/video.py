"""Video transcode presets and named resolutions."""

from types import MappingProxyType

from mmtk.domain.enums import QualityMode, ScalePolicy, VideoContainer
from mmtk.domain.models import (
    AudioPresetSettings,
    ScaleSettings,
    VideoPresetSettings,
    VideoTranscodePreset,
)
from mmtk.presets.quality import WEBM_OPUS_ARGS

DEFAULT_VIDEO_PRESET = "any-to-webm"

# Named resolution -> (width, height)
RESOLUTION_SIZES = MappingProxyType(
    {
        "1080p": (1920, 1080),
        "720p": (1280, 720),
        "480p": (854, 480),
    }
)

# Codec-specific default CRF values, used when a CRF-mode request has no CRF
DEFAULT_CRF_VALUES = MappingProxyType(
    {
        "libx264": 23,
        "libx265": 28,
        "libvpx-vp9": 31,
        "libaom-av1": 30,
        "libsvtav1": 30,
    }
)


def get_default_crf(codec: str) -> int:
    """Get the default CRF value for an encoder.

    Args:
        codec: FFmpeg encoder name (libx264, libvpx-vp9, ...).

    Returns:
        Default CRF value, 23 for unknown encoders.
    """
    return DEFAULT_CRF_VALUES.get(codec.casefold(), 23)


VIDEO_TRANSCODE_PRESETS = MappingProxyType(
    {
        "any-to-webm": VideoTranscodePreset(
            key="any-to-webm",
            label="Any-to-WebM (Discord optimized)",
            container=VideoContainer.WEBM,
            video=VideoPresetSettings(
                codec="libvpx-vp9",
                quality_mode=QualityMode.CRF,
                crf=31,
                pixel_format="yuv420p",
                scale=ScaleSettings(
                    policy=ScalePolicy.FIT,
                    max_resolution="1080p",
                    preserve_aspect=True,
                ),
            ),
            audio=AudioPresetSettings(
                codec="libopus",
                bitrate="128k",
                sample_rate=48000,
                channels=2,
                extra_args=WEBM_OPUS_ARGS,
            ),
            notes=(
                "Defaults to 1080p output.",
                "Uses the optimized WebM/Opus audio settings.",
            ),
        ),
        "any-to-mp4": VideoTranscodePreset(
            key="any-to-mp4",
            label="Any-to-MP4 (H.264/AAC)",
            container=VideoContainer.MP4,
            video=VideoPresetSettings(
                codec="libx264",
                quality_mode=QualityMode.CRF,
                crf=20,
                pixel_format="yuv420p",
                scale=ScaleSettings(),
            ),
            audio=AudioPresetSettings(
                codec="aac",
                bitrate="192k",
                sample_rate=48000,
                channels=2,
            ),
            notes=("Safe default for broad device compatibility.",),
        ),
        "any-to-mkv": VideoTranscodePreset(
            key="any-to-mkv",
            label="Any-to-MKV (H.264/AAC)",
            container=VideoContainer.MKV,
            video=VideoPresetSettings(
                codec="libx264",
                quality_mode=QualityMode.CRF,
                crf=18,
                pixel_format="yuv420p",
                scale=ScaleSettings(),
            ),
            audio=AudioPresetSettings(
                codec="aac",
                bitrate="192k",
                sample_rate=48000,
                channels=2,
            ),
            notes=("MKV container for flexible muxing and archival.",),
        ),
    }
)
