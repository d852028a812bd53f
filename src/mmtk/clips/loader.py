"""Clip list file loading and validation.

A clip file is a YAML document listing the windows to extract:

    format: mp3
    quality: music_high
    clips:
      - start: "00:01:30"
        end: "00:02:00"
        label: intro
      - start: 120
        duration: 15

A bare YAML list of clips is accepted as well. Unquoted clock values are
read by YAML as base-60 integers (01:30 -> 90), which is the same number
of seconds.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from mmtk.core.timecode import format_seconds, parse_time_to_seconds
from mmtk.domain.enums import AudioFormat
from mmtk.domain.models import TimeClip
from mmtk.exceptions import InvalidClipError, MediaToolkitError


class ClipFileError(MediaToolkitError):
    """Error while loading a clip file."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.message = message
        self.field = field
        super().__init__(message)


class ClipEntryModel(BaseModel):
    """Pydantic model for one clip entry."""

    model_config = ConfigDict(extra="forbid")

    start: str = ""
    end: str | None = None
    duration: float | None = Field(default=None, gt=0)
    label: str | None = None

    @field_validator("start", "end", mode="before")
    @classmethod
    def coerce_number(cls, v: Any) -> Any:
        """Accept plain numbers of seconds."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return format_seconds(v)
        return v

    @field_validator("start", "end")
    @classmethod
    def validate_time(cls, v: str | None) -> str | None:
        if v:
            try:
                parse_time_to_seconds(v)
            except InvalidClipError as e:
                raise ValueError(str(e)) from e
        return v

    @model_validator(mode="after")
    def validate_window(self) -> ClipEntryModel:
        if self.end is None and self.duration is None:
            raise ValueError("clip needs either 'end' or 'duration'")
        return self

    def to_clip(self) -> TimeClip:
        return TimeClip(
            start_time=self.start,
            end_time=self.end,
            duration=self.duration,
            label=self.label,
        )


class ClipFileModel(BaseModel):
    """Pydantic model for a clip file."""

    model_config = ConfigDict(extra="forbid")

    clips: list[ClipEntryModel] = Field(min_length=1)
    format: AudioFormat | None = None
    quality: str | None = None


def _format_validation_error(error: ValidationError) -> str:
    errors = error.errors()
    if errors:
        first_error = errors[0]
        loc = ".".join(str(x) for x in first_error.get("loc", []))
        msg = first_error.get("msg", str(error))
        if loc:
            return f"Clip file validation failed: {loc}: {msg}"
        return f"Clip file validation failed: {msg}"
    return f"Clip file validation failed: {error}"


def load_clip_file_from_data(data: Any) -> ClipFileModel:
    """Validate already-parsed clip file data.

    Raises:
        ClipFileError: If the data is not a valid clip file.
    """
    if data is None:
        raise ClipFileError("Clip file is empty")
    if isinstance(data, list):
        data = {"clips": data}
    if not isinstance(data, dict):
        raise ClipFileError("Clip file must be a YAML mapping or list")

    try:
        return ClipFileModel.model_validate(data)
    except ValidationError as e:
        raise ClipFileError(_format_validation_error(e)) from e


def load_clip_file(path: Path) -> ClipFileModel:
    """Load and validate a clip file.

    Args:
        path: Path to the YAML clip file.

    Returns:
        Validated ClipFileModel; use clip.to_clip() for each entry.

    Raises:
        ClipFileError: If the file is missing, not YAML, or invalid.
    """
    if not path.exists():
        raise ClipFileError(f"Clip file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ClipFileError(f"Invalid YAML syntax: {e}") from e
    except UnicodeDecodeError as e:
        raise ClipFileError(f"Clip file is not valid UTF-8: {path}: {e.reason}") from e
    except OSError as e:
        raise ClipFileError(f"Cannot read clip file {path}: {e.strerror or e}") from e

    return load_clip_file_from_data(data)
