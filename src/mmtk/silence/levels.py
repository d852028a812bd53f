"""Parser for ffmpeg audio level diagnostics.

The windowed pass prints one metadata line per astats window:

    lavfi.astats.Overall.RMS_level=-23.418712

and astats itself ends with a per-channel summary containing
``RMS level dB: -23.4``. volumedetect prints a whole-file summary:

    [Parsed_volumedetect_0 @ 0x55] mean_volume: -27.1 dB
    [Parsed_volumedetect_0 @ 0x55] max_volume: -4.0 dB

Levels are converted from dBFS to linear amplitude clamped to [0, 1].
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

# Fewer measured windows than this and the waveform is estimated instead
MIN_MEASURED_LEVELS = 10

# Used when volumedetect output lacks a value
DEFAULT_MEAN_VOLUME_DB = -20.0
DEFAULT_MAX_VOLUME_DB = -10.0

_DB = r"(-?inf|-?\d+(?:\.\d+)?)"
_WINDOW_PATTERN = re.compile(rf"lavfi\.astats\.Overall\.RMS_level={_DB}")
_SUMMARY_PATTERN = re.compile(rf"RMS level dB:\s*{_DB}")
_MEAN_PATTERN = re.compile(rf"mean_volume:\s*{_DB} dB")
_MAX_PATTERN = re.compile(rf"max_volume:\s*{_DB} dB")


@dataclass(frozen=True)
class VolumeStats:
    """Whole-file loudness from volumedetect, in dBFS."""

    mean_db: float = DEFAULT_MEAN_VOLUME_DB
    max_db: float = DEFAULT_MAX_VOLUME_DB


def db_to_linear(db: float) -> float:
    """Convert dBFS to a linear amplitude in [0, 1]; -inf (digital silence) is 0."""
    if math.isinf(db) and db < 0:
        return 0.0
    return min(1.0, max(0.0, 10 ** (db / 20)))


def parse_rms_levels(text: str) -> list[float]:
    """Return linear RMS levels in stream order.

    Per-window metadata lines are preferred. Without them the astats
    summary values are used.
    """
    values = _WINDOW_PATTERN.findall(text) or _SUMMARY_PATTERN.findall(text)
    return [db_to_linear(float(value)) for value in values]


def parse_volume_stats(text: str) -> VolumeStats:
    mean_match = _MEAN_PATTERN.search(text)
    max_match = _MAX_PATTERN.search(text)
    return VolumeStats(
        mean_db=float(mean_match.group(1)) if mean_match else DEFAULT_MEAN_VOLUME_DB,
        max_db=float(max_match.group(1)) if max_match else DEFAULT_MAX_VOLUME_DB,
    )


def resample_levels(levels: list[float], count: int) -> list[float]:
    """Reduce levels to count evenly sized buckets by averaging.

    Shorter inputs are returned unchanged.
    """
    if count <= 0 or len(levels) <= count:
        return list(levels)
    resampled = []
    for i in range(count):
        lo = i * len(levels) // count
        hi = (i + 1) * len(levels) // count
        bucket = levels[lo:hi]
        resampled.append(sum(bucket) / len(bucket))
    return resampled


def estimate_levels(stats: VolumeStats, count: int) -> list[float]:
    """Synthesise count levels between the mean and peak volume.

    The shape is a fixed sine ripple, so the same stats always give the
    same envelope.
    """
    base = db_to_linear(stats.mean_db)
    peak = max(base, db_to_linear(stats.max_db))
    return [base + (peak - base) * abs(math.sin(i * 0.5)) for i in range(count)]
