"""CLI module for the multimedia toolkit."""

import logging
from pathlib import Path

import click

from mmtk.cli.exit_codes import ExitCode
from mmtk.cli.output import error_exit
from mmtk.config import build_logging_config, load_config
from mmtk.exceptions import ConfigurationError
from mmtk.logging import configure_logging

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(package_name="multimedia-toolkit")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: warning).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Write logs to this file instead of stderr.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.pass_context
def main(
    ctx: click.Context,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Multimedia toolkit - extract, split, convert and transcode with ffmpeg."""
    ctx.ensure_object(dict)

    # Preserve a config passed in by tests
    if "config" not in ctx.obj:
        try:
            ctx.obj["config"] = load_config()
        except ConfigurationError as e:
            error_exit(str(e), ExitCode.CONFIG_ERROR)

    config = ctx.obj["config"]
    configure_logging(
        build_logging_config(
            config.logging,
            level=log_level.lower() if log_level else None,
            file=log_file,
            format="json" if log_json else None,
        )
    )
    logger.debug(
        "mmtk starting: ffmpeg=%s, temp_dir=%s", config.tools.ffmpeg, config.defaults.temp_dir
    )


def _register_commands() -> None:
    from mmtk.cli.audio import (
        chapters_command,
        clips_command,
        convert_command,
        extract_command,
        merge_command,
        preview_command,
        silence_command,
        split_command,
        waveform_command,
    )
    from mmtk.cli.presets import presets_command
    from mmtk.cli.video import image_command, transcode_command

    main.add_command(extract_command)
    main.add_command(clips_command)
    main.add_command(chapters_command)
    main.add_command(silence_command)
    main.add_command(waveform_command)
    main.add_command(split_command)
    main.add_command(convert_command)
    main.add_command(merge_command)
    main.add_command(preview_command)
    main.add_command(transcode_command)
    main.add_command(image_command)
    main.add_command(presets_command)


_register_commands()
