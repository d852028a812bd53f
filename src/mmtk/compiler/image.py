"""Animated GIF/WebP command compilation.

GIF output uses a single-pass palette filtergraph (split, palettegen,
paletteuse) so colors are chosen per source. WebP output uses the
libwebp_anim encoder.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from mmtk.compiler.clip import build_clip_args
from mmtk.compiler.command import CompiledCommand, base_args
from mmtk.compiler.context import CompilerContext
from mmtk.domain.enums import ImageFormat
from mmtk.domain.models import ImageConversionSettings, TimeClip
from mmtk.exceptions import InvalidOptionError
from mmtk.presets import DEFAULT_IMAGE_PRESET, DEFAULT_IMAGE_SETTINGS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageConversionRequest:
    """Request to convert a video (or clip of it) to an animated image.

    preset_key selects a catalog preset. Without it, format selects the
    baseline settings of that format; with neither, the default preset is
    used. A literal settings value replaces the resolved settings, and
    fps/width/quality override single fields on top.
    """

    input_path: Path
    output_path: Path
    preset_key: str | None = None
    format: ImageFormat | None = None
    settings: ImageConversionSettings | None = None
    fps: int | None = None
    width: int | None = None
    quality: int | None = None
    clip: TimeClip | None = None


def resolve_image_settings(
    ctx: CompilerContext, request: ImageConversionRequest
) -> tuple[ImageFormat, ImageConversionSettings]:
    """Resolve output format and settings for an image conversion.

    Raises:
        UnknownPresetError: If the preset key is unknown.
        InvalidOptionError: If the requested format contradicts the preset,
            or an override is out of range.
    """
    if request.preset_key is not None:
        preset = ctx.catalog.image(request.preset_key)
        if request.format is not None and request.format != preset.format:
            raise InvalidOptionError(
                f"Preset {preset.key} produces {preset.format.value}, "
                f"not {request.format.value}",
                field="format",
            )
        image_format, settings = preset.format, preset.settings
    elif request.format is not None:
        image_format = request.format
        settings = DEFAULT_IMAGE_SETTINGS[image_format]
    else:
        preset = ctx.catalog.image(DEFAULT_IMAGE_PRESET)
        image_format, settings = preset.format, preset.settings

    if request.settings is not None:
        settings = request.settings

    try:
        settings = ImageConversionSettings(
            fps=request.fps if request.fps is not None else settings.fps,
            width=request.width if request.width is not None else settings.width,
            quality=request.quality if request.quality is not None else settings.quality,
            loop=settings.loop,
            loop_count=settings.loop_count,
            dither=settings.dither,
            palette_mode=settings.palette_mode,
            compression=settings.compression,
            lossless=settings.lossless,
        )
    except ValueError as e:
        raise InvalidOptionError(str(e), field="settings") from e

    return image_format, settings


def _frame_filters(settings: ImageConversionSettings) -> list[str]:
    filters = []
    if settings.fps > 0:
        filters.append(f"fps={settings.fps}")
    if settings.width:
        filters.append(f"scale={settings.width}:-1:flags=lanczos")
    return filters


def build_gif_filter(settings: ImageConversionSettings) -> str:
    """Build the palette filtergraph for GIF output."""
    head = ",".join([*_frame_filters(settings), "split[s0][s1]"])
    return (
        f"{head};"
        f"[s0]palettegen=stats_mode={settings.palette_mode.value}[p];"
        f"[s1][p]paletteuse=dither={settings.dither.value}"
    )


def build_loop_args(image_format: ImageFormat, settings: ImageConversionSettings) -> list[str]:
    """Loop control; 0 loops forever.

    A GIF that must not loop uses -1. The WebP muxer has no "no loop"
    value, so a single play is requested with 1.
    """
    if settings.loop:
        return ["-loop", str(settings.loop_count)]
    if image_format == ImageFormat.GIF:
        return ["-loop", "-1"]
    return ["-loop", "1"]


def compile_image_conversion(
    ctx: CompilerContext, request: ImageConversionRequest
) -> CompiledCommand:
    """Compile a GIF/WebP conversion request.

    Raises:
        UnknownPresetError: If the preset key is unknown.
        InvalidOptionError: If options contradict each other.
        InvalidClipError: If the clip window is unusable.
    """
    image_format, settings = resolve_image_settings(ctx, request)

    args = base_args(ctx)
    args.extend(build_clip_args(request.clip, str(request.input_path)))

    if image_format == ImageFormat.GIF:
        args.extend(["-vf", build_gif_filter(settings)])
    else:
        frame_filters = _frame_filters(settings)
        if frame_filters:
            args.extend(["-vf", ",".join(frame_filters)])
        args.extend(["-c:v", "libwebp_anim"])
        args.extend(["-lossless", "1" if settings.lossless else "0"])
        args.extend(["-quality", str(settings.quality)])
        args.extend(["-compression_level", str(settings.compression)])

    args.extend(build_loop_args(image_format, settings))
    args.append("-an")
    args.extend(["-f", image_format.value])
    args.append(str(request.output_path))

    logger.debug(
        "Compiled image conversion: format=%s fps=%s width=%s",
        image_format.value,
        settings.fps,
        settings.width,
    )
    return CompiledCommand(
        step="convert_image",
        argv=tuple(args),
        output_path=request.output_path,
    )
