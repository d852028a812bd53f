"""Audio level analysis command compilation.

Two passes decode into the null muxer and report on stderr:

- astats over fixed-size windows, with ametadata printing each window's
  overall RMS level
- volumedetect, a single mean/max summary used when the windowed pass
  yields too few values
"""

from __future__ import annotations

from pathlib import Path

from mmtk.compiler.command import CompiledCommand, base_args
from mmtk.compiler.context import CompilerContext
from mmtk.exceptions import InvalidOptionError

# Audio samples per astats window (about 0.1s at 44.1kHz)
DEFAULT_WINDOW_SAMPLES = 4096

RMS_LEVEL_KEY = "lavfi.astats.Overall.RMS_level"


def build_levels_filter(window_samples: int) -> str:
    """Build the windowed astats filter chain.

    Raises:
        InvalidOptionError: If window_samples is not positive.
    """
    if window_samples <= 0:
        raise InvalidOptionError(
            f"Window size must be positive, got {window_samples}",
            field="window_samples",
        )
    return (
        f"asetnsamples=n={window_samples},"
        "astats=metadata=1:reset=1,"
        f"ametadata=mode=print:key={RMS_LEVEL_KEY}"
    )


def _null_output(
    ctx: CompilerContext, input_path: Path, audio_filter: str, step: str
) -> CompiledCommand:
    args = base_args(ctx, overwrite=False)
    args.extend(["-i", str(input_path), "-vn"])
    args.extend(["-af", audio_filter])
    args.extend(["-f", "null", "-"])
    return CompiledCommand(step=step, argv=tuple(args))


def compile_level_analysis(
    ctx: CompilerContext,
    input_path: Path,
    window_samples: int = DEFAULT_WINDOW_SAMPLES,
) -> CompiledCommand:
    """Compile the windowed RMS level pass."""
    return _null_output(
        ctx, input_path, build_levels_filter(window_samples), "analyze_levels"
    )


def compile_volume_detection(
    ctx: CompilerContext, input_path: Path
) -> CompiledCommand:
    """Compile the whole-file volumedetect pass."""
    return _null_output(ctx, input_path, "volumedetect", "detect_volume")
