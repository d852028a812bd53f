"""Media information via ffprobe."""

from mmtk.introspector.ffprobe import FFprobeMediaProbe
from mmtk.introspector.interface import MediaProbe
from mmtk.introspector.parsers import parse_chapters, parse_ffprobe_output

__all__ = [
    "FFprobeMediaProbe",
    "MediaProbe",
    "parse_chapters",
    "parse_ffprobe_output",
]
