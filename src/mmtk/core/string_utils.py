"""String helpers for building output file names."""

from __future__ import annotations

import re
from pathlib import Path

# Characters that are invalid in file names on at least one common platform
_UNSAFE_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*]')


def sanitize_filename(name: str) -> str:
    """Replace characters that cannot appear in a file name with underscores.

    Example:
        >>> sanitize_filename('Intro: "Part 1/2"')
        'Intro_ _Part 1_2_'
    """
    return _UNSAFE_FILENAME_CHARS.sub("_", name).strip()


def base_name(path: Path | str, fallback: str = "output") -> str:
    """Return the file name of path without its extension."""
    stem = Path(path).stem
    return stem or fallback
