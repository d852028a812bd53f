"""Audio extraction command compilation.

Builds the ffmpeg argument vector that extracts (and optionally clips) the
audio of a media file into one of the supported audio formats.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

from mmtk.compiler.clip import build_clip_args
from mmtk.compiler.command import (
    CompiledCommand,
    base_args,
    metadata_args,
    thread_args,
)
from mmtk.compiler.context import CompilerContext
from mmtk.domain.enums import AudioFormat
from mmtk.domain.models import QualityPreset, TimeClip
from mmtk.presets import DEFAULT_QUALITY, OPTIMIZED_WEBM_QUALITY, WEBM_OPUS_ARGS

logger = logging.getLogger(__name__)

# Output format -> ffmpeg audio encoder
AUDIO_CODECS = MappingProxyType(
    {
        AudioFormat.MP3: "libmp3lame",
        AudioFormat.AAC: "aac",
        AudioFormat.OGG: "libvorbis",
        AudioFormat.OPUS: "libopus",
        AudioFormat.FLAC: "flac",
        AudioFormat.WAV: "pcm_s16le",
        AudioFormat.WEBM: "libopus",
    }
)


@dataclass(frozen=True)
class AudioExtractionRequest:
    """Request to extract audio from a media file."""

    input_path: Path
    output_path: Path
    format: AudioFormat = AudioFormat.MP3
    quality: str | QualityPreset = DEFAULT_QUALITY
    clip: TimeClip | None = None
    preserve_metadata: bool | None = None  # None uses the context default


def resolve_quality(ctx: CompilerContext, quality: str | QualityPreset) -> QualityPreset:
    """Resolve a quality preset name, or pass a literal preset through.

    Raises:
        UnknownPresetError: If the name is not in the catalog.
    """
    if isinstance(quality, QualityPreset):
        return quality
    return ctx.catalog.quality(quality)


def get_audio_encoder(audio_format: AudioFormat) -> str:
    """Get the ffmpeg encoder for an audio output format."""
    return AUDIO_CODECS[audio_format]


def build_audio_quality_args(
    audio_format: AudioFormat, preset: QualityPreset
) -> list[str]:
    """Sample rate, channel and bitrate overrides.

    Lossless containers and the lossless preset get none of them.
    """
    if audio_format.is_lossless or preset.is_lossless:
        return []
    return [
        "-ar",
        str(preset.sample_rate),
        "-ac",
        str(preset.channels),
        "-b:a",
        preset.bitrate,
    ]


def compile_audio_extraction(
    ctx: CompilerContext, request: AudioExtractionRequest
) -> CompiledCommand:
    """Compile an audio extraction request.

    Args:
        ctx: Compiler context.
        request: Extraction request.

    Returns:
        CompiledCommand for the "extract_audio" step.

    Raises:
        UnknownPresetError: If the quality name is unknown.
        InvalidClipError: If the clip window is unusable.
    """
    preset = resolve_quality(ctx, request.quality)
    audio_format = request.format

    args = base_args(ctx)
    args.extend(build_clip_args(request.clip, str(request.input_path)))

    # Audio only
    args.append("-vn")
    args.extend(["-acodec", get_audio_encoder(audio_format)])
    args.extend(build_audio_quality_args(audio_format, preset))
    args.extend(metadata_args(ctx.metadata_flag(request.preserve_metadata)))

    if audio_format == AudioFormat.WEBM:
        if preset.name == OPTIMIZED_WEBM_QUALITY:
            args.extend(WEBM_OPUS_ARGS)
        args.extend(["-f", "webm"])

    args.extend(thread_args(ctx))
    args.append(str(request.output_path))

    logger.debug(
        "Compiled audio extraction: format=%s quality=%s clip=%s",
        audio_format.value,
        preset.name,
        request.clip.label if request.clip else None,
    )
    return CompiledCommand(
        step="extract_audio",
        argv=tuple(args),
        output_path=request.output_path,
    )
