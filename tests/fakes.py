"""Scripted stand-ins for the process runner, media probe and CLI context."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from mmtk.compiler import CompilerContext
from mmtk.config import ToolkitConfig
from mmtk.domain.models import Chapter, MediaInfo
from mmtk.exceptions import MediaProbeError
from mmtk.operations import MediaOperations
from mmtk.runner.interface import ProcessResult

SILENCE_STDERR = """\
Input #0, mp3, from 'talk.mp3':
  Duration: 00:01:40.00, start: 0.000000, bitrate: 128 kb/s
[silencedetect @ 0x55d5c2e0] silence_start: 20
[silencedetect @ 0x55d5c2e0] silence_end: 21 | silence_duration: 1
[silencedetect @ 0x55d5c2e0] silence_start: 60
[silencedetect @ 0x55d5c2e0] silence_end: 62 | silence_duration: 2
size=N/A time=00:01:40.00 bitrate=N/A speed= 512x
"""


class FakeRunner:
    """ProcessRunner that records argv lists and returns scripted results.

    Args:
        results: Results returned in call order; once exhausted, every call
            succeeds with empty output.
        handler: Callable deciding the result from argv; wins over results.
    """

    def __init__(
        self,
        results: Sequence[ProcessResult] = (),
        handler: Callable[[list[str]], ProcessResult] | None = None,
    ) -> None:
        self._results = list(results)
        self._handler = handler
        self.calls: list[list[str]] = []
        self.timeouts: list[float | None] = []

    def run(self, argv, timeout=None) -> ProcessResult:
        argv = list(argv)
        self.calls.append(argv)
        self.timeouts.append(timeout)
        if self._handler is not None:
            return self._handler(argv)
        if self._results:
            return self._results.pop(0)
        return ProcessResult(exit_code=0)


class FakeProbe:
    """MediaProbe returning a fixed MediaInfo for every path."""

    def __init__(
        self,
        duration: float = 100.0,
        chapters: Sequence[Chapter] = (),
        error: Exception | None = None,
    ) -> None:
        self.duration = duration
        self.chapters = tuple(chapters)
        self.error = error
        self.calls: list[Path] = []

    def info(self, path: Path) -> MediaInfo:
        self.calls.append(path)
        if self.error is not None:
            raise self.error
        return MediaInfo(path=path, duration=self.duration, chapters=self.chapters)


def failing_probe(message: str = "ffprobe failed") -> FakeProbe:
    return FakeProbe(error=MediaProbeError(message))


@dataclass
class CliHarness:
    """Objects shared by one CLI test."""

    runner: FakeRunner
    probe: FakeProbe
    config: ToolkitConfig
    input_file: Path
    output_dir: Path

    def obj(self) -> dict:
        """Context object handing the prepared config and service to the CLI."""
        operations = MediaOperations(
            CompilerContext.from_config(self.config),
            self.runner,
            self.probe,
            temp_dir=self.config.defaults.temp_dir,
        )
        return {"config": self.config, "operations": operations}
