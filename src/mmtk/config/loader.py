"""Configuration loader.

Configuration is resolved with the following precedence (highest first):
1. CLI arguments (passed directly to functions)
2. Environment variables (MMTK_*)
3. Default values

Environment variables:
- MMTK_FFMPEG_PATH: ffmpeg executable
- MMTK_FFPROBE_PATH: ffprobe executable
- MMTK_DEFAULT_QUALITY: audio quality preset name
- MMTK_DEFAULT_FORMAT: audio output format
- MMTK_DEFAULT_VIDEO_PRESET: video transcode preset key
- MMTK_PRESERVE_METADATA: keep global metadata (true/false)
- MMTK_THREADS: value passed to -threads
- MMTK_MAX_JOBS: worker threads for multi-format conversion
- MMTK_TEMP_DIR: directory for intermediate files
- MMTK_OUTPUT_DIR: default output directory
- MMTK_TIMEOUT: seconds before a tool invocation is killed
- MMTK_LOG_LEVEL, MMTK_LOG_FORMAT, MMTK_LOG_FILE: logging
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

from mmtk.config.env import EnvReader
from mmtk.config.models import (
    DefaultsConfig,
    LoggingConfig,
    ToolkitConfig,
    ToolPathsConfig,
)
from mmtk.domain.enums import AudioFormat
from mmtk.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

_AUDIO_FORMATS = tuple(f.value for f in AudioFormat)


def _get_int(reader: EnvReader, var: str, default: int) -> int:
    value = reader.get_int(var)
    return default if value is None else value


def _load_tools(reader: EnvReader) -> ToolPathsConfig:
    base = ToolPathsConfig()
    return ToolPathsConfig(
        ffmpeg=reader.get_str("MMTK_FFMPEG_PATH", base.ffmpeg) or base.ffmpeg,
        ffprobe=reader.get_str("MMTK_FFPROBE_PATH", base.ffprobe) or base.ffprobe,
    )


def _load_defaults(reader: EnvReader) -> DefaultsConfig:
    base = DefaultsConfig()
    return DefaultsConfig(
        quality=reader.get_str("MMTK_DEFAULT_QUALITY", base.quality) or base.quality,
        format=AudioFormat(
            reader.get_choice("MMTK_DEFAULT_FORMAT", _AUDIO_FORMATS, base.format.value)
        ),
        video_preset=(
            reader.get_str("MMTK_DEFAULT_VIDEO_PRESET", base.video_preset)
            or base.video_preset
        ),
        preserve_metadata=bool(
            reader.get_bool("MMTK_PRESERVE_METADATA", base.preserve_metadata)
        ),
        threads=_get_int(reader, "MMTK_THREADS", base.threads),
        max_concurrent_jobs=_get_int(reader, "MMTK_MAX_JOBS", base.max_concurrent_jobs),
        temp_dir=reader.get_path("MMTK_TEMP_DIR", base.temp_dir) or base.temp_dir,
        output_dir=reader.get_path("MMTK_OUTPUT_DIR", base.output_dir) or base.output_dir,
        timeout=reader.get_int("MMTK_TIMEOUT", base.timeout),
    )


def _load_logging(reader: EnvReader) -> LoggingConfig:
    base = LoggingConfig()
    return LoggingConfig(
        level=reader.get_choice(
            "MMTK_LOG_LEVEL", ("debug", "info", "warning", "error"), base.level
        ),
        format=reader.get_choice("MMTK_LOG_FORMAT", ("text", "json"), base.format),
        file=reader.get_path("MMTK_LOG_FILE", base.file),
    )


def load_config(env: Mapping[str, str] | None = None) -> ToolkitConfig:
    """Load configuration from environment variables over defaults.

    Args:
        env: Optional mapping to read instead of os.environ.

    Returns:
        ToolkitConfig.

    Raises:
        ConfigurationError: If a value parses but is out of range
            (e.g., MMTK_MAX_JOBS=0).
    """
    reader = EnvReader(env=env)
    try:
        config = ToolkitConfig(
            tools=_load_tools(reader),
            defaults=_load_defaults(reader),
            logging=_load_logging(reader),
        )
    except ValueError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e

    logger.debug(
        "Loaded configuration: ffmpeg=%s quality=%s video_preset=%s jobs=%d",
        config.tools.ffmpeg,
        config.defaults.quality,
        config.defaults.video_preset,
        config.defaults.max_concurrent_jobs,
    )
    return config


def build_logging_config(
    base: LoggingConfig,
    *,
    level: str | None = None,
    file: Path | None = None,
    format: str | None = None,
    include_stderr: bool | None = None,
) -> LoggingConfig:
    """Merge CLI logging overrides into a base LoggingConfig.

    Non-None arguments replace the base values. Validation runs in
    LoggingConfig.__post_init__, so invalid values raise ValueError.
    """
    return LoggingConfig(
        level=level if level is not None else base.level,
        file=file if file is not None else base.file,
        format=format if format is not None else base.format,
        include_stderr=(
            include_stderr if include_stderr is not None else base.include_stderr
        ),
        max_bytes=base.max_bytes,
        backup_count=base.backup_count,
    )
