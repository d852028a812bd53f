"""Silence detection command compilation."""

from __future__ import annotations

import re
from pathlib import Path

from mmtk.compiler.command import CompiledCommand, base_args
from mmtk.compiler.context import CompilerContext
from mmtk.core.timecode import format_seconds
from mmtk.exceptions import InvalidOptionError

DEFAULT_NOISE_THRESHOLD = "-30dB"
DEFAULT_MIN_SILENCE_DURATION = 0.5

# silencedetect accepts a dB value or a plain amplitude ratio
_NOISE_PATTERN = re.compile(r"^(-?\d+(\.\d+)?dB|\d+(\.\d+)?)$")


def build_silencedetect_filter(noise_threshold: str, min_duration: float) -> str:
    """Build the silencedetect filter expression.

    Raises:
        InvalidOptionError: If the threshold or duration is malformed.
    """
    if not _NOISE_PATTERN.match(noise_threshold):
        raise InvalidOptionError(
            f"Invalid noise threshold: {noise_threshold!r} (expected e.g. -30dB)",
            field="noise_threshold",
        )
    if min_duration <= 0:
        raise InvalidOptionError(
            f"Minimum silence duration must be positive, got {min_duration}",
            field="min_duration",
        )
    return f"silencedetect=noise={noise_threshold}:d={format_seconds(min_duration)}"


def compile_silence_detection(
    ctx: CompilerContext,
    input_path: Path,
    noise_threshold: str = DEFAULT_NOISE_THRESHOLD,
    min_duration: float = DEFAULT_MIN_SILENCE_DURATION,
) -> CompiledCommand:
    """Compile a silence analysis pass that decodes into the null muxer.

    The interesting output is the diagnostic text on stderr; nothing is
    written to disk.
    """
    args = base_args(ctx, overwrite=False)
    args.extend(["-i", str(input_path)])
    args.extend(["-af", build_silencedetect_filter(noise_threshold, min_duration)])
    args.extend(["-f", "null", "-"])
    return CompiledCommand(step="detect_silence", argv=tuple(args))
