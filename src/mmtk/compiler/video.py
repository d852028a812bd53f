"""Video transcode command compilation.

This module resolves a transcode preset, applies request-level overrides
field by field, and builds the ffmpeg arguments for scaling, quality,
audio and container selection.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from mmtk.compiler.command import (
    CompiledCommand,
    base_args,
    metadata_args,
    thread_args,
)
from mmtk.compiler.context import CompilerContext
from mmtk.domain.enums import QualityMode, ScalePolicy
from mmtk.domain.models import (
    SOURCE_RESOLUTION,
    AudioPresetSettings,
    ScaleSettings,
    VideoPresetSettings,
    VideoTranscodePreset,
)
from mmtk.exceptions import InvalidOptionError
from mmtk.presets import PresetCatalog, get_default_crf

logger = logging.getLogger(__name__)

# Encoder that needs -b:v 0 alongside -crf to select pure constant-quality mode
VP9_ENCODER = "libvpx-vp9"


@dataclass(frozen=True)
class VideoTranscodeRequest:
    """Request to transcode a video file.

    A literal preset wins over preset_key; with neither, the context's
    default preset is used. Every other field is an optional override of
    the matching preset field.
    """

    input_path: Path
    output_path: Path
    preset_key: str | None = None
    preset: VideoTranscodePreset | None = None
    resolution: str | None = None
    video_codec: str | None = None
    audio_codec: str | None = None
    quality_mode: QualityMode | None = None
    crf: int | None = None
    bitrate: str | None = None
    audio_bitrate: str | None = None
    preserve_metadata: bool | None = None


def resolve_video_preset(
    ctx: CompilerContext, request: VideoTranscodeRequest
) -> VideoTranscodePreset:
    """Pick the preset a request is based on.

    Raises:
        UnknownPresetError: If the key is not in the catalog.
    """
    if request.preset is not None:
        return request.preset
    return ctx.catalog.video(request.preset_key or ctx.default_video_preset)


def merge_video_preset(
    preset: VideoTranscodePreset, request: VideoTranscodeRequest
) -> VideoTranscodePreset:
    """Apply request overrides to a preset.

    Only the overridden fields change; everything else is carried over.
    The result is a new value and the preset passed in is left untouched.

    Raises:
        InvalidOptionError: If the overrides produce an invalid combination
            (for example bitrate mode without any bitrate).
    """
    video = preset.video
    audio = preset.audio

    scale = ScaleSettings(
        policy=video.scale.policy,
        max_resolution=(
            request.resolution
            if request.resolution is not None
            else video.scale.max_resolution
        ),
        preserve_aspect=video.scale.preserve_aspect,
    )

    try:
        merged_video = VideoPresetSettings(
            codec=request.video_codec or video.codec,
            quality_mode=request.quality_mode or video.quality_mode,
            crf=request.crf if request.crf is not None else video.crf,
            bitrate=request.bitrate if request.bitrate is not None else video.bitrate,
            pixel_format=video.pixel_format,
            scale=scale,
        )
    except ValueError as e:
        raise InvalidOptionError(str(e), field="video") from e

    merged_audio = AudioPresetSettings(
        codec=request.audio_codec or audio.codec,
        bitrate=request.audio_bitrate or audio.bitrate,
        sample_rate=audio.sample_rate,
        channels=audio.channels,
        extra_args=audio.extra_args,
    )

    return VideoTranscodePreset(
        key=preset.key,
        label=preset.label,
        container=preset.container,
        video=merged_video,
        audio=merged_audio,
        notes=preset.notes,
    )


def build_scale_filter(scale: ScaleSettings, catalog: PresetCatalog) -> str | None:
    """Build the -vf value for a scale policy.

    Args:
        scale: Scale settings.
        catalog: Catalog holding the named resolution sizes.

    Returns:
        Filter string, or None when the source size is kept.

    Raises:
        UnknownPresetError: If max_resolution is not a known size.
    """
    if scale.max_resolution == SOURCE_RESOLUTION:
        return None

    width, height = catalog.resolution(scale.max_resolution)

    if not scale.preserve_aspect or scale.policy == ScalePolicy.STRETCH:
        return f"scale={width}:{height}"

    if scale.policy == ScalePolicy.CROP:
        return (
            f"scale={width}:{height}:force_original_aspect_ratio=increase,"
            f"crop={width}:{height}"
        )

    return (
        f"scale={width}:{height}:force_original_aspect_ratio=decrease,"
        f"pad={width}:{height}:(ow-iw)/2:(oh-ih)/2"
    )


def build_quality_args(video: VideoPresetSettings) -> list[str]:
    """Build the CRF or bitrate arguments; never both.

    Args:
        video: Merged video settings.

    Returns:
        List of ffmpeg arguments for rate control.
    """
    if video.quality_mode == QualityMode.BITRATE:
        # Validated non-empty by VideoPresetSettings
        return ["-b:v", str(video.bitrate)]

    crf = video.crf if video.crf is not None else get_default_crf(video.codec)
    args: list[str] = []
    if video.codec == VP9_ENCODER:
        args.extend(["-b:v", "0"])
    args.extend(["-crf", str(crf)])
    return args


def build_audio_block(audio: AudioPresetSettings) -> list[str]:
    """Build audio encoder arguments in codec, bitrate, rate, channels order."""
    args = ["-c:a", audio.codec]
    if audio.bitrate:
        args.extend(["-b:a", audio.bitrate])
    if audio.sample_rate:
        args.extend(["-ar", str(audio.sample_rate)])
    if audio.channels:
        args.extend(["-ac", str(audio.channels)])
    if audio.extra_args:
        args.extend(audio.extra_args)
    return args


def compile_video_transcode(
    ctx: CompilerContext, request: VideoTranscodeRequest
) -> CompiledCommand:
    """Compile a video transcode request.

    Args:
        ctx: Compiler context.
        request: Transcode request.

    Returns:
        CompiledCommand for the "transcode_video" step.

    Raises:
        UnknownPresetError: If the preset key or resolution is unknown.
        InvalidOptionError: If the overrides are inconsistent.
    """
    preset = merge_video_preset(resolve_video_preset(ctx, request), request)
    video = preset.video

    args = base_args(ctx)
    args.extend(["-i", str(request.input_path)])

    scale_filter = build_scale_filter(video.scale, ctx.catalog)
    if scale_filter:
        args.extend(["-vf", scale_filter])

    args.extend(["-c:v", video.codec])
    if video.pixel_format:
        args.extend(["-pix_fmt", video.pixel_format])

    args.extend(build_quality_args(video))
    args.extend(build_audio_block(preset.audio))
    args.extend(metadata_args(ctx.metadata_flag(request.preserve_metadata)))

    # Container is always explicit, never inferred from the file extension
    args.extend(["-f", preset.container.muxer])
    args.extend(thread_args(ctx))
    args.append(str(request.output_path))

    logger.debug(
        "Compiled video transcode: preset=%s codec=%s mode=%s scale=%s",
        preset.key,
        video.codec,
        video.quality_mode.value,
        scale_filter or SOURCE_RESOLUTION,
    )
    return CompiledCommand(
        step="transcode_video",
        argv=tuple(args),
        output_path=request.output_path,
    )
