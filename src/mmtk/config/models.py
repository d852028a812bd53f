"""Configuration data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from mmtk.domain.enums import AudioFormat
from mmtk.presets import DEFAULT_QUALITY, DEFAULT_VIDEO_PRESET

DEFAULT_DATA_DIR = Path.home() / ".multimedia-toolkit"

_VALID_LEVELS = ("debug", "info", "warning", "error")
_VALID_FORMATS = ("text", "json")


@dataclass(frozen=True)
class ToolPathsConfig:
    """External tool executables. Bare names are looked up in PATH."""

    ffmpeg: str = "ffmpeg"
    ffprobe: str = "ffprobe"


@dataclass(frozen=True)
class DefaultsConfig:
    """Defaults applied when a request or command leaves a field unset."""

    quality: str = DEFAULT_QUALITY
    format: AudioFormat = AudioFormat.MP3
    video_preset: str = DEFAULT_VIDEO_PRESET
    preserve_metadata: bool = True

    # Passed to -threads; 0 lets ffmpeg decide
    threads: int = 0

    # Worker threads for multi-format conversion
    max_concurrent_jobs: int = 2

    temp_dir: Path = DEFAULT_DATA_DIR / "temp"
    output_dir: Path = Path(".")

    # Seconds before a tool invocation is killed; None disables the limit
    timeout: int | None = None

    def __post_init__(self) -> None:
        if self.threads < 0:
            raise ValueError(f"threads must not be negative, got {self.threads}")
        if self.max_concurrent_jobs < 1:
            raise ValueError(
                f"max_concurrent_jobs must be at least 1, got {self.max_concurrent_jobs}"
            )
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")


@dataclass(frozen=True)
class LoggingConfig:
    """Configuration for logging."""

    # Log level: debug, info, warning, error
    level: str = "warning"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760

    # Number of rotated files to keep
    backup_count: int = 5

    def __post_init__(self) -> None:
        if self.level.lower() not in _VALID_LEVELS:
            raise ValueError(f"level must be one of {_VALID_LEVELS}, got {self.level}")
        if self.format.lower() not in _VALID_FORMATS:
            raise ValueError(
                f"format must be one of {_VALID_FORMATS}, got {self.format}"
            )


@dataclass(frozen=True)
class ToolkitConfig:
    """Complete toolkit configuration."""

    tools: ToolPathsConfig = field(default_factory=ToolPathsConfig)
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
