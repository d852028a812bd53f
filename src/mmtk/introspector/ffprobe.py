"""FFprobe-based implementation of the MediaProbe protocol."""

import json
import logging
from pathlib import Path

from mmtk.domain.models import MediaInfo
from mmtk.exceptions import MediaProbeError
from mmtk.introspector.parsers import parse_ffprobe_output
from mmtk.runner.interface import ProcessRunner

logger = logging.getLogger(__name__)

# Prevent hangs on corrupted files
DEFAULT_PROBE_TIMEOUT = 60.0


class FFprobeMediaProbe:
    """ffprobe-based implementation of MediaProbe.

    Args:
        runner: ProcessRunner used to start ffprobe.
        ffprobe_path: ffprobe executable.
        timeout: Seconds before ffprobe is killed.
    """

    def __init__(
        self,
        runner: ProcessRunner,
        ffprobe_path: str = "ffprobe",
        timeout: float = DEFAULT_PROBE_TIMEOUT,
    ) -> None:
        self._runner = runner
        self._ffprobe_path = ffprobe_path
        self._timeout = timeout

    def build_args(self, path: Path) -> list[str]:
        return [
            self._ffprobe_path,
            "-v",
            "error",
            "-print_format",
            "json",
            "-show_format",
            "-show_streams",
            "-show_chapters",
            str(path),
        ]

    def info(self, path: Path) -> MediaInfo:
        """Read container information for a media file.

        Raises:
            MediaProbeError: If ffprobe fails, times out or prints invalid JSON.
        """
        result = self._runner.run(self.build_args(path), timeout=self._timeout)

        if result.timed_out:
            raise MediaProbeError(f"ffprobe timed out for {path} after {self._timeout}s")
        if result.exit_code != 0:
            raise MediaProbeError(
                f"ffprobe failed for {path}: {result.stderr.strip() or result.exit_code}"
            )

        try:
            data = json.loads(result.stdout)
        except json.JSONDecodeError as e:
            raise MediaProbeError(f"Invalid ffprobe output for {path}: {e}") from e

        if "format" not in data:
            raise MediaProbeError(
                f"Missing 'format' in ffprobe output for {path}. "
                "File may be corrupted or not a valid media file."
            )

        info = parse_ffprobe_output(path, data)
        logger.debug(
            "Probed %s: duration=%.3f chapters=%d streams=%d",
            path,
            info.duration,
            len(info.chapters),
            len(info.streams),
        )
        return info
