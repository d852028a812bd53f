"""Pure parsing functions for ffprobe JSON output.

These functions transform ffprobe JSON data into domain objects. They do
no I/O, so they are tested directly against captured JSON.
"""

import logging
from pathlib import Path

from mmtk.domain.models import Chapter, MediaInfo, StreamInfo

logger = logging.getLogger(__name__)


def parse_duration(value: str | None) -> float | None:
    """Parse a duration string from ffprobe into seconds.

    Args:
        value: Duration string from ffprobe (e.g., "3600.000") or None.

    Returns:
        Duration in seconds, or None if parsing fails.
    """
    if value is None:
        return None
    try:
        return float(value)
    except (ValueError, TypeError):
        return None


def parse_int(value: object) -> int | None:
    """Parse an integer that ffprobe may report as a string."""
    if value is None:
        return None
    try:
        return int(value)  # type: ignore[call-overload]
    except (ValueError, TypeError):
        return None


def parse_stream(stream: dict) -> StreamInfo:
    """Parse a single ffprobe stream dict into a StreamInfo."""
    codec_type = stream.get("codec_type", "")
    info = StreamInfo(
        index=stream.get("index", 0),
        codec_type=codec_type,
        codec_name=stream.get("codec_name"),
        sample_rate=parse_int(stream.get("sample_rate")) if codec_type == "audio" else None,
        channels=parse_int(stream.get("channels")) if codec_type == "audio" else None,
        width=parse_int(stream.get("width")) if codec_type == "video" else None,
        height=parse_int(stream.get("height")) if codec_type == "video" else None,
    )
    return info


def parse_chapters(chapters: list[dict], file_path: str | None = None) -> list[Chapter]:
    """Parse ffprobe chapters, numbering them from 0 in file order.

    Chapters without a title are named "Chapter N" (1-based). Chapters with
    unreadable times are skipped.
    """
    result: list[Chapter] = []
    for idx, chapter in enumerate(chapters):
        start = parse_duration(chapter.get("start_time"))
        end = parse_duration(chapter.get("end_time"))
        if start is None or end is None:
            logger.warning(
                "Skipping chapter %d with unreadable times in %s",
                idx,
                file_path or "unknown",
            )
            continue
        title = (chapter.get("tags") or {}).get("title") or f"Chapter {idx + 1}"
        result.append(
            Chapter(id=idx, title=title, start_time=start, end_time=end)
        )
    return result


def parse_ffprobe_output(path: Path, data: dict) -> MediaInfo:
    """Parse ffprobe JSON output into MediaInfo.

    Args:
        path: Path to the media file.
        data: Parsed ffprobe JSON output.

    Returns:
        MediaInfo with streams and chapters. A missing or unreadable
        duration is reported as 0.0.
    """
    format_info = data.get("format", {})
    tags = {k.casefold(): v for k, v in (format_info.get("tags") or {}).items()}

    streams = tuple(parse_stream(s) for s in data.get("streams", []))
    chapters = tuple(parse_chapters(data.get("chapters", []), str(path)))

    return MediaInfo(
        path=path,
        duration=parse_duration(format_info.get("duration")) or 0.0,
        format_name=format_info.get("format_name"),
        bit_rate=parse_int(format_info.get("bit_rate")),
        title=tags.get("title"),
        artist=tags.get("artist"),
        album=tags.get("album"),
        chapters=chapters,
        streams=streams,
    )
