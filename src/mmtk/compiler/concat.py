"""Audio merge via the ffmpeg concat demuxer.

The concat demuxer reads its inputs from a manifest file. The manifest is
an intermediate file: concat_manifest() creates it and removes it when the
block exits, whether the merge succeeded, failed, timed out or raised.
"""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

from mmtk.compiler.audio import (
    build_audio_quality_args,
    get_audio_encoder,
    resolve_quality,
)
from mmtk.compiler.command import CompiledCommand, base_args
from mmtk.compiler.context import CompilerContext
from mmtk.domain.enums import AudioFormat
from mmtk.domain.models import QualityPreset
from mmtk.exceptions import InvalidOptionError, OutputPathError
from mmtk.presets import DEFAULT_QUALITY, OPTIMIZED_WEBM_QUALITY, WEBM_OPUS_ARGS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MergeRequest:
    """Request to join several audio files into one."""

    input_paths: tuple[Path, ...]
    output_path: Path
    format: AudioFormat = AudioFormat.MP3
    quality: str | QualityPreset = DEFAULT_QUALITY


def render_concat_manifest(input_paths: Sequence[Path]) -> str:
    """Render manifest text, escaping single quotes in paths."""
    lines = []
    for path in input_paths:
        escaped = str(path).replace("'", "'\\''")
        lines.append(f"file '{escaped}'")
    return "\n".join(lines) + "\n"


@contextmanager
def concat_manifest(
    input_paths: Sequence[Path], temp_dir: Path | None = None
) -> Iterator[Path]:
    """Write a concat manifest and delete it on exit.

    Args:
        input_paths: Files to list, in order.
        temp_dir: Directory for the manifest; None uses the system default.

    Yields:
        Path to the manifest file.

    Raises:
        OutputPathError: If the manifest cannot be created or written.
    """
    directory = temp_dir if temp_dir is not None else Path(tempfile.gettempdir())
    try:
        directory.mkdir(parents=True, exist_ok=True)
        fd, manifest_str = tempfile.mkstemp(
            prefix="concat_", suffix=".txt", dir=str(directory)
        )
    except OSError as e:
        raise OutputPathError(directory, e.strerror or str(e)) from e

    manifest = Path(manifest_str)
    try:
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(render_concat_manifest(input_paths))
        except OSError as e:
            raise OutputPathError(manifest, e.strerror or str(e)) from e
        yield manifest
    finally:
        try:
            manifest.unlink(missing_ok=True)
            logger.debug("Removed concat manifest: %s", manifest)
        except OSError as e:
            logger.warning("Could not remove concat manifest %s: %s", manifest, e)


def validate_merge_request(request: MergeRequest) -> None:
    """Raises InvalidOptionError if fewer than two inputs are given."""
    if len(request.input_paths) < 2:
        raise InvalidOptionError(
            "Need at least 2 files to merge", field="input_paths"
        )


def compile_concat(
    ctx: CompilerContext, request: MergeRequest, manifest_path: Path
) -> CompiledCommand:
    """Compile the merge command reading from an existing manifest.

    Raises:
        InvalidOptionError: If fewer than two inputs are given.
        UnknownPresetError: If the quality name is unknown.
    """
    validate_merge_request(request)
    preset = resolve_quality(ctx, request.quality)

    args = base_args(ctx)
    args.extend(["-f", "concat", "-safe", "0", "-i", str(manifest_path)])
    args.append("-vn")
    args.extend(["-acodec", get_audio_encoder(request.format)])
    args.extend(build_audio_quality_args(request.format, preset))

    if request.format == AudioFormat.WEBM:
        if preset.name == OPTIMIZED_WEBM_QUALITY:
            args.extend(WEBM_OPUS_ARGS)
        args.extend(["-f", "webm"])

    args.append(str(request.output_path))
    return CompiledCommand(
        step="merge_audio",
        argv=tuple(args),
        output_path=request.output_path,
    )
