"""Clip list files."""

from mmtk.clips.loader import (
    ClipEntryModel,
    ClipFileError,
    ClipFileModel,
    load_clip_file,
    load_clip_file_from_data,
)

__all__ = [
    "ClipEntryModel",
    "ClipFileError",
    "ClipFileModel",
    "load_clip_file",
    "load_clip_file_from_data",
]
