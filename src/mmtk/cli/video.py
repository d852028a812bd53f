"""Video commands: transcode and animated image conversion."""

from __future__ import annotations

from pathlib import Path

import click

from mmtk.cli.exit_codes import ExitCode
from mmtk.cli.options import (
    build_clip,
    clip_options,
    default_output,
    dry_run_option,
    get_operations,
    json_option,
    metadata_choice,
)
from mmtk.cli.output import error_exit, report_result
from mmtk.domain.enums import ImageFormat, QualityMode
from mmtk.exceptions import UnknownPresetError
from mmtk.presets import DEFAULT_IMAGE_PRESET

_input_argument = click.argument(
    "input_file", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)

_output_option = click.option(
    "--output", "-o", type=click.Path(dir_okay=False, path_type=Path), default=None
)


@click.command("transcode")
@_input_argument
@_output_option
@click.option(
    "--preset",
    "-p",
    "preset_key",
    default=None,
    help="Video preset (default from MMTK_DEFAULT_VIDEO_PRESET, else any-to-webm).",
)
@click.option(
    "--resolution", default=None, help="Target size: source, 1080p, 720p or 480p."
)
@click.option("--video-codec", default=None, help="Override the video encoder.")
@click.option("--audio-codec", default=None, help="Override the audio encoder.")
@click.option(
    "--quality-mode",
    type=click.Choice([m.value for m in QualityMode]),
    default=None,
    help="Rate control: crf or bitrate.",
)
@click.option("--crf", type=click.IntRange(0, 63), default=None, help="CRF value.")
@click.option("--bitrate", default=None, help="Target video bitrate, e.g. 4M.")
@click.option("--audio-bitrate", default=None, help="Audio bitrate, e.g. 160k.")
@click.option("--strip-metadata", is_flag=True, help="Drop global metadata.")
@dry_run_option
@json_option
@click.pass_context
def transcode_command(
    ctx: click.Context,
    input_file: Path,
    output: Path | None,
    preset_key: str | None,
    resolution: str | None,
    video_codec: str | None,
    audio_codec: str | None,
    quality_mode: str | None,
    crf: int | None,
    bitrate: str | None,
    audio_bitrate: str | None,
    strip_metadata: bool,
    dry_run: bool,
    json_output: bool,
) -> None:
    """Transcode INPUT_FILE with a video preset and optional overrides.

    Giving --bitrate without --quality-mode switches to bitrate mode.
    Without --output, the file is written to the configured output
    directory as <name>_transcoded.<container>.
    """
    operations = get_operations(ctx)

    if output is None:
        try:
            preset = operations.context.catalog.video(
                preset_key or operations.context.default_video_preset
            )
        except UnknownPresetError as e:
            error_exit(str(e), ExitCode.VALIDATION_ERROR, json_output)
        output = default_output(
            ctx, input_file, preset.container.value, tag="_transcoded"
        )

    mode = QualityMode(quality_mode) if quality_mode else None
    if mode is None and bitrate is not None:
        mode = QualityMode.BITRATE

    result = operations.transcode_video(
        input_file,
        output,
        preset_key=preset_key,
        resolution=resolution,
        video_codec=video_codec,
        audio_codec=audio_codec,
        quality_mode=mode,
        crf=crf,
        bitrate=bitrate,
        audio_bitrate=audio_bitrate,
        preserve_metadata=metadata_choice(strip_metadata),
        dry_run=dry_run,
    )
    report_result(result, json_output, dry_run)


@click.command("image")
@_input_argument
@_output_option
@click.option(
    "--preset",
    "-p",
    "preset_key",
    default=None,
    help=f"GIF/WebP preset (default: {DEFAULT_IMAGE_PRESET} unless --format is given).",
)
@click.option(
    "--format",
    "-f",
    "image_format",
    type=click.Choice([f.value for f in ImageFormat], case_sensitive=False),
    default=None,
    help="Output format when no preset is given.",
)
@click.option(
    "--fps", type=click.IntRange(min=0), default=None, help="Frame rate (0 keeps source)."
)
@click.option(
    "--width", type=click.IntRange(min=1), default=None, help="Output width in pixels."
)
@click.option(
    "--quality", type=click.IntRange(1, 100), default=None, help="WebP quality (1-100)."
)
@clip_options
@dry_run_option
@json_option
@click.pass_context
def image_command(
    ctx: click.Context,
    input_file: Path,
    output: Path | None,
    preset_key: str | None,
    image_format: str | None,
    fps: int | None,
    width: int | None,
    quality: int | None,
    start: str | None,
    end: str | None,
    duration: float | None,
    dry_run: bool,
    json_output: bool,
) -> None:
    """Convert INPUT_FILE (or a clip of it) to an animated GIF or WebP."""
    operations = get_operations(ctx)
    fmt = ImageFormat(image_format.lower()) if image_format else None

    if output is None:
        suffix = fmt.value if fmt else None
        if suffix is None:
            try:
                suffix = operations.context.catalog.image(
                    preset_key or DEFAULT_IMAGE_PRESET
                ).format.value
            except UnknownPresetError as e:
                error_exit(str(e), ExitCode.VALIDATION_ERROR, json_output)
        output = default_output(ctx, input_file, suffix)

    result = operations.convert_image(
        input_file,
        output,
        preset_key=preset_key,
        format=fmt,
        fps=fps,
        width=width,
        quality=quality,
        clip=build_clip(start, end, duration),
        dry_run=dry_run,
    )
    report_result(result, json_output, dry_run)
