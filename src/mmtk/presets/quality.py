"""Audio quality presets.

Keys are the names accepted by the --quality option. The "lossless" preset
uses the bitrate sentinel "0" and is meant for FLAC/WAV output.
"""

from types import MappingProxyType

from mmtk.domain.models import QualityPreset

DEFAULT_QUALITY = "music_medium"

# Name of the preset that enables the Opus VBR tuning flags for WebM output
OPTIMIZED_WEBM_QUALITY = "optimized_webm"

# Opus tuning appended for the optimized WebM preset
WEBM_OPUS_ARGS: tuple[str, ...] = (
    "-vbr",
    "on",
    "-compression_level",
    "10",
    "-application",
    "audio",
)

QUALITY_PRESETS = MappingProxyType(
    {
        "speech": QualityPreset(
            name="speech",
            bitrate="64k",
            sample_rate=16000,
            channels=1,
            description="Optimized for speech/podcasts",
        ),
        "music_low": QualityPreset(
            name="music_low",
            bitrate="128k",
            sample_rate=44100,
            channels=2,
            description="Music - Low quality",
        ),
        "music_medium": QualityPreset(
            name="music_medium",
            bitrate="192k",
            sample_rate=44100,
            channels=2,
            description="Music - Medium quality",
        ),
        "music_high": QualityPreset(
            name="music_high",
            bitrate="320k",
            sample_rate=48000,
            channels=2,
            description="Music - High quality",
        ),
        OPTIMIZED_WEBM_QUALITY: QualityPreset(
            name=OPTIMIZED_WEBM_QUALITY,
            bitrate="128k",
            sample_rate=48000,
            channels=2,
            description="Optimized for WebM/Opus output",
        ),
        "lossless": QualityPreset(
            name="lossless",
            bitrate="0",
            sample_rate=48000,
            channels=2,
            description="Lossless (FLAC/WAV only)",
        ),
    }
)
