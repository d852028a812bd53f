"""MediaProbe interface for reading media information."""

from pathlib import Path
from typing import Protocol

from mmtk.domain.models import MediaInfo


class MediaProbe(Protocol):
    """Protocol for media information providers.

    Operations use it for total duration (silence splitting, previews) and
    for chapter markers.
    """

    def info(self, path: Path) -> MediaInfo:
        """Read container information for a media file.

        Args:
            path: Path to the media file.

        Returns:
            MediaInfo with duration, streams and chapters.

        Raises:
            MediaProbeError: If the file cannot be read.
        """
        ...
