"""Audio commands.

extract, clips, chapters, silence, waveform, split, convert, merge, preview.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from mmtk.cli.exit_codes import ExitCode
from mmtk.cli.options import (
    AUDIO_FORMAT_CHOICES,
    audio_format_option,
    build_clip,
    clip_options,
    default_output,
    dry_run_option,
    get_config,
    get_operations,
    json_option,
    metadata_choice,
    quality_option,
    resolve_format,
    resolve_quality,
)
from mmtk.cli.output import error_exit, report_result, result_to_dict
from mmtk.clips import ClipFileError, load_clip_file
from mmtk.core import format_clock
from mmtk.domain.enums import AudioFormat, PreviewType, TrailingSilencePolicy
from mmtk.exceptions import MediaToolkitError
from mmtk.operations import (
    DEFAULT_PREVIEW_DURATION,
    DEFAULT_WAVEFORM_SAMPLES,
    MediaOperations,
)
from mmtk.silence import (
    DEFAULT_MIN_SEGMENT_DURATION,
    DEFAULT_MIN_SILENCE_DURATION,
    DEFAULT_NOISE_THRESHOLD,
)

logger = logging.getLogger(__name__)

_input_argument = click.argument(
    "input_file", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)

_output_dir_option = click.option(
    "--output-dir",
    "-d",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for output files (default from MMTK_OUTPUT_DIR).",
)


def _noise_options(func):
    func = click.option(
        "--trailing",
        type=click.Choice([p.value for p in TrailingSilencePolicy]),
        default=TrailingSilencePolicy.EXTEND_TO_END.value,
        show_default=True,
        help="How to treat silence that lasts until the end of the file.",
    )(func)
    func = click.option(
        "--min-silence",
        type=float,
        default=DEFAULT_MIN_SILENCE_DURATION,
        show_default=True,
        help="Minimum silence length in seconds.",
    )(func)
    func = click.option(
        "--noise",
        default=DEFAULT_NOISE_THRESHOLD,
        show_default=True,
        help="Noise threshold, e.g. -30dB.",
    )(func)
    return func


@click.command("extract")
@_input_argument
@click.option(
    "--output", "-o", type=click.Path(dir_okay=False, path_type=Path), default=None
)
@audio_format_option
@quality_option
@clip_options
@click.option("--strip-metadata", is_flag=True, help="Drop global metadata.")
@dry_run_option
@json_option
@click.pass_context
def extract_command(
    ctx: click.Context,
    input_file: Path,
    output: Path | None,
    audio_format: str | None,
    quality: str | None,
    start: str | None,
    end: str | None,
    duration: float | None,
    strip_metadata: bool,
    dry_run: bool,
    json_output: bool,
) -> None:
    """Extract the audio of INPUT_FILE, optionally clipped."""
    fmt = resolve_format(ctx, audio_format)
    result = get_operations(ctx).extract_audio(
        input_file,
        output or default_output(ctx, input_file, fmt.value),
        format=fmt,
        quality=resolve_quality(ctx, quality),
        clip=build_clip(start, end, duration),
        preserve_metadata=metadata_choice(strip_metadata),
        dry_run=dry_run,
    )
    report_result(result, json_output, dry_run)


@click.command("clips")
@_input_argument
@click.argument(
    "clip_file", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@_output_dir_option
@audio_format_option
@quality_option
@click.option("--base-name", default=None, help="Output name prefix (default: input name).")
@dry_run_option
@json_option
@click.pass_context
def clips_command(
    ctx: click.Context,
    input_file: Path,
    clip_file: Path,
    output_dir: Path | None,
    audio_format: str | None,
    quality: str | None,
    base_name: str | None,
    dry_run: bool,
    json_output: bool,
) -> None:
    """Extract every clip listed in CLIP_FILE (YAML) from INPUT_FILE.

    Command-line --format/--quality win over the values in the clip file.
    """
    try:
        clip_list = load_clip_file(clip_file)
    except ClipFileError as e:
        error_exit(str(e), ExitCode.CLIP_FILE_ERROR, json_output)

    if audio_format is None and clip_list.format is not None:
        fmt = clip_list.format
    else:
        fmt = resolve_format(ctx, audio_format)

    result = get_operations(ctx).extract_clips(
        input_file,
        [entry.to_clip() for entry in clip_list.clips],
        output_dir or get_config(ctx).defaults.output_dir,
        format=fmt,
        quality=quality or clip_list.quality or resolve_quality(ctx, None),
        base_name=base_name,
        dry_run=dry_run,
    )
    report_result(result, json_output, dry_run)


@click.command("chapters")
@_input_argument
@_output_dir_option
@audio_format_option
@quality_option
@click.option(
    "--chapter",
    "-c",
    "chapter_numbers",
    type=click.IntRange(min=1),
    multiple=True,
    help="Chapter number to extract (1-based, repeatable; default: all).",
)
@click.option("--list", "list_only", is_flag=True, help="List chapters and exit.")
@dry_run_option
@json_option
@click.pass_context
def chapters_command(
    ctx: click.Context,
    input_file: Path,
    output_dir: Path | None,
    audio_format: str | None,
    quality: str | None,
    chapter_numbers: tuple[int, ...],
    list_only: bool,
    dry_run: bool,
    json_output: bool,
) -> None:
    """Extract the chapters of INPUT_FILE as separate audio files."""
    operations = get_operations(ctx)

    if list_only:
        _list_chapters(operations, input_file, json_output)
        return

    result = operations.extract_chapters(
        input_file,
        output_dir or get_config(ctx).defaults.output_dir,
        format=resolve_format(ctx, audio_format),
        quality=resolve_quality(ctx, quality),
        chapter_indices=[n - 1 for n in chapter_numbers] or None,
        dry_run=dry_run,
    )
    report_result(result, json_output, dry_run)


def _list_chapters(
    operations: MediaOperations, input_file: Path, json_output: bool
) -> None:
    probe = operations.probe
    if probe is None:
        error_exit("No media probe configured", ExitCode.TOOL_NOT_AVAILABLE, json_output)
    try:
        info = probe.info(input_file)
    except MediaToolkitError as e:
        error_exit(str(e), ExitCode.PROBE_FAILED, json_output)

    if not info.chapters:
        error_exit("No chapters found in media file", ExitCode.NO_CHAPTERS_FOUND, json_output)

    if json_output:
        click.echo(
            json.dumps(
                [
                    {
                        "number": i,
                        "title": ch.title,
                        "start": ch.start_time,
                        "end": ch.end_time,
                    }
                    for i, ch in enumerate(info.chapters, start=1)
                ],
                indent=2,
            )
        )
        return

    for i, ch in enumerate(info.chapters, start=1):
        click.echo(
            f"{i:3d}. {format_clock(ch.start_time)} - {format_clock(ch.end_time)}  {ch.title}"
        )


@click.command("silence")
@_input_argument
@_noise_options
@json_option
@click.pass_context
def silence_command(
    ctx: click.Context,
    input_file: Path,
    noise: str,
    min_silence: float,
    trailing: str,
    json_output: bool,
) -> None:
    """Detect and list the silent intervals of INPUT_FILE."""
    result = get_operations(ctx).detect_silence(
        input_file,
        noise_threshold=noise,
        min_duration=min_silence,
        trailing_policy=TrailingSilencePolicy(trailing),
    )

    if json_output:
        click.echo(json.dumps(result_to_dict(result), indent=2))
        if not result.success:
            sys.exit(ExitCode.OPERATION_FAILED)
        return

    if not result.success:
        error_exit(result.error or "Silence detection failed", ExitCode.OPERATION_FAILED)

    silences = result.data or []
    if not silences:
        click.echo("No silence detected")
    for s in silences:
        click.echo(f"{s.start:10.3f}  {s.end:10.3f}  ({s.duration:.3f}s)")
    for warning in result.warnings:
        click.echo(f"Warning: {warning}", err=True)


@click.command("waveform")
@_input_argument
@click.option(
    "--samples",
    type=click.IntRange(min=1),
    default=DEFAULT_WAVEFORM_SAMPLES,
    show_default=True,
    help="Maximum number of level points.",
)
@json_option
@click.pass_context
def waveform_command(
    ctx: click.Context,
    input_file: Path,
    samples: int,
    json_output: bool,
) -> None:
    """Print the audio level envelope of INPUT_FILE.

    Each line is a time offset in seconds and a linear level from 0 to 1.
    """
    result = get_operations(ctx).waveform_data(input_file, samples=samples)

    if json_output:
        click.echo(json.dumps(result_to_dict(result), indent=2))
        if not result.success:
            sys.exit(ExitCode.OPERATION_FAILED)
        return

    if not result.success or result.data is None:
        error_exit(result.error or "Waveform analysis failed", ExitCode.OPERATION_FAILED)

    waveform = result.data
    step = waveform.duration / len(waveform.levels) if waveform.levels else 0.0
    for i, level in enumerate(waveform.levels):
        click.echo(f"{i * step:10.3f}  {level:.3f}")
    for warning in result.warnings:
        click.echo(f"Warning: {warning}", err=True)


@click.command("split")
@_input_argument
@_output_dir_option
@audio_format_option
@quality_option
@_noise_options
@click.option(
    "--min-segment",
    type=float,
    default=DEFAULT_MIN_SEGMENT_DURATION,
    show_default=True,
    help="Drop segments shorter than this many seconds.",
)
@dry_run_option
@json_option
@click.pass_context
def split_command(
    ctx: click.Context,
    input_file: Path,
    output_dir: Path | None,
    audio_format: str | None,
    quality: str | None,
    noise: str,
    min_silence: float,
    trailing: str,
    min_segment: float,
    dry_run: bool,
    json_output: bool,
) -> None:
    """Split INPUT_FILE into segments separated by silence.

    Silence analysis runs even with --dry-run; only the segment
    extractions are skipped.
    """
    result = get_operations(ctx).split_by_silence(
        input_file,
        output_dir or get_config(ctx).defaults.output_dir,
        format=resolve_format(ctx, audio_format),
        quality=resolve_quality(ctx, quality),
        noise_threshold=noise,
        min_silence_duration=min_silence,
        min_segment_duration=min_segment,
        trailing_policy=TrailingSilencePolicy(trailing),
        dry_run=dry_run,
    )
    report_result(result, json_output, dry_run)


@click.command("convert")
@_input_argument
@click.option(
    "--to",
    "-t",
    "formats",
    type=click.Choice(AUDIO_FORMAT_CHOICES, case_sensitive=False),
    multiple=True,
    required=True,
    help="Target format (repeatable).",
)
@_output_dir_option
@quality_option
@clip_options
@click.option(
    "--jobs",
    "-j",
    type=click.IntRange(min=1),
    default=None,
    help="Parallel conversions (default from MMTK_MAX_JOBS).",
)
@dry_run_option
@json_option
@click.pass_context
def convert_command(
    ctx: click.Context,
    input_file: Path,
    formats: tuple[str, ...],
    output_dir: Path | None,
    quality: str | None,
    start: str | None,
    end: str | None,
    duration: float | None,
    jobs: int | None,
    dry_run: bool,
    json_output: bool,
) -> None:
    """Convert INPUT_FILE to several audio formats at once."""
    result = get_operations(ctx).convert_to_formats(
        input_file,
        output_dir or get_config(ctx).defaults.output_dir,
        [AudioFormat(f.lower()) for f in formats],
        quality=resolve_quality(ctx, quality),
        clip=build_clip(start, end, duration),
        dry_run=dry_run,
        max_workers=jobs,
    )
    report_result(result, json_output, dry_run)


@click.command("merge")
@click.argument(
    "input_files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--output", "-o", type=click.Path(dir_okay=False, path_type=Path), required=True
)
@audio_format_option
@quality_option
@dry_run_option
@json_option
@click.pass_context
def merge_command(
    ctx: click.Context,
    input_files: tuple[Path, ...],
    output: Path,
    audio_format: str | None,
    quality: str | None,
    dry_run: bool,
    json_output: bool,
) -> None:
    """Join INPUT_FILES, in order, into one audio file."""
    result = get_operations(ctx).merge_audio_files(
        list(input_files),
        output,
        format=resolve_format(ctx, audio_format),
        quality=resolve_quality(ctx, quality),
        dry_run=dry_run,
    )
    report_result(result, json_output, dry_run)


@click.command("preview")
@_input_argument
@click.option(
    "--output", "-o", type=click.Path(dir_okay=False, path_type=Path), default=None
)
@click.option(
    "--type",
    "preview_type",
    type=click.Choice([t.value for t in PreviewType]),
    default=PreviewType.START.value,
    show_default=True,
)
@click.option(
    "--seconds",
    type=click.FloatRange(min=0, min_open=True),
    default=DEFAULT_PREVIEW_DURATION,
    show_default=True,
    help="Length of each preview part.",
)
@audio_format_option
@clip_options
@dry_run_option
@json_option
@click.pass_context
def preview_command(
    ctx: click.Context,
    input_file: Path,
    output: Path | None,
    preview_type: str,
    seconds: float,
    audio_format: str | None,
    start: str | None,
    end: str | None,
    duration: float | None,
    dry_run: bool,
    json_output: bool,
) -> None:
    """Extract a short preview from the start and/or end of INPUT_FILE."""
    fmt = resolve_format(ctx, audio_format)
    result = get_operations(ctx).create_preview(
        input_file,
        output or default_output(ctx, input_file, fmt.value, tag="_preview"),
        clip=build_clip(start, end, duration),
        preview_type=PreviewType(preview_type),
        preview_duration=seconds,
        format=fmt,
        dry_run=dry_run,
    )
    report_result(result, json_output, dry_run)
