"""Options and helpers shared by CLI commands."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import click

from mmtk.config.models import ToolkitConfig
from mmtk.domain.enums import AudioFormat
from mmtk.domain.models import TimeClip
from mmtk.operations import MediaOperations

F = TypeVar("F", bound=Callable[..., Any])

AUDIO_FORMAT_CHOICES = [f.value for f in AudioFormat]


def dry_run_option(func: F) -> F:
    return click.option(
        "--dry-run",
        "-n",
        is_flag=True,
        help="Print the ffmpeg command(s) without running them.",
    )(func)


def json_option(func: F) -> F:
    return click.option(
        "--json",
        "json_output",
        is_flag=True,
        help="Print the result as JSON.",
    )(func)


def audio_format_option(func: F) -> F:
    return click.option(
        "--format",
        "-f",
        "audio_format",
        type=click.Choice(AUDIO_FORMAT_CHOICES, case_sensitive=False),
        default=None,
        help="Audio output format (default from MMTK_DEFAULT_FORMAT, else mp3).",
    )(func)


def quality_option(func: F) -> F:
    return click.option(
        "--quality",
        "-q",
        default=None,
        help="Audio quality preset (see 'mmtk presets quality').",
    )(func)


def clip_options(func: F) -> F:
    """Add --start/--end/--duration options describing a clip window."""
    func = click.option(
        "--duration",
        type=float,
        default=None,
        help="Clip length in seconds (wins over --end).",
    )(func)
    func = click.option(
        "--end",
        default=None,
        help="Clip end (seconds, MM:SS or HH:MM:SS).",
    )(func)
    func = click.option(
        "--start",
        default=None,
        help="Clip start (seconds, MM:SS or HH:MM:SS).",
    )(func)
    return func


def build_clip(
    start: str | None, end: str | None, duration: float | None
) -> TimeClip | None:
    """Build a TimeClip from clip options, or None if none were given."""
    if start is None and end is None and duration is None:
        return None
    return TimeClip(start_time=start or "", end_time=end, duration=duration)


def get_config(ctx: click.Context) -> ToolkitConfig:
    return ctx.obj["config"]


def get_operations(ctx: click.Context) -> MediaOperations:
    """Return the MediaOperations for this invocation.

    Tests may place a prepared instance in ctx.obj["operations"].
    """
    operations = ctx.obj.get("operations")
    if operations is None:
        from mmtk.introspector import FFprobeMediaProbe
        from mmtk.runner import SubprocessRunner

        config = get_config(ctx)
        runner = SubprocessRunner()
        operations = MediaOperations.from_config(
            config,
            runner=runner,
            probe=FFprobeMediaProbe(runner, ffprobe_path=config.tools.ffprobe),
        )
        ctx.obj["operations"] = operations
    return operations


def resolve_format(ctx: click.Context, value: str | None) -> AudioFormat:
    if value is None:
        return get_config(ctx).defaults.format
    return AudioFormat(value.lower())


def resolve_quality(ctx: click.Context, value: str | None) -> str:
    return value or get_config(ctx).defaults.quality


def default_output(
    ctx: click.Context, input_path: Path, suffix: str, tag: str = ""
) -> Path:
    """Output path in the configured output directory, named after the input.

    Never returns the input path itself.
    """
    path = get_config(ctx).defaults.output_dir / f"{input_path.stem}{tag}.{suffix}"
    if path.resolve() == input_path.resolve():
        path = path.with_name(f"{input_path.stem}{tag}_out.{suffix}")
    return path


def metadata_choice(strip_metadata: bool) -> bool | None:
    """Map --strip-metadata to a per-request override (None = config default)."""
    return False if strip_metadata else None
