"""Exception hierarchy for the multimedia toolkit.

Validation errors (presets, clips, options) are raised before any external
process is considered. Invocation and analysis errors carry the context
needed to report which step and which batch item failed.
"""

from __future__ import annotations

from pathlib import Path

# Lines of captured stderr repeated in ToolInvocationError messages
STDERR_TAIL_LINES = 10


class MediaToolkitError(Exception):
    """Base class for all toolkit errors."""

    pass


class UnknownPresetError(MediaToolkitError):
    """Raised when a preset key is not present in its catalog namespace."""

    def __init__(self, kind: str, key: str, available: tuple[str, ...] = ()) -> None:
        """Initialize the error.

        Args:
            kind: Preset namespace (e.g., "quality", "video", "image").
            key: The key that was requested.
            available: Keys that exist in the namespace, for the message.
        """
        self.kind = kind
        self.key = key
        self.available = available
        message = f"Unknown {kind} preset: {key}"
        if available:
            message += f" (available: {', '.join(available)})"
        super().__init__(message)


class InvalidClipError(MediaToolkitError):
    """Raised when a clip window is incomplete or has a malformed time value."""

    def __init__(self, message: str, label: str | None = None) -> None:
        self.label = label
        if label:
            message = f"{message} (clip: {label})"
        super().__init__(message)


class InvalidOptionError(MediaToolkitError):
    """Raised when request options cannot be combined into a valid command."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.message = message
        self.field = field
        super().__init__(message)


class ToolInvocationError(MediaToolkitError):
    """Raised when ffmpeg (or ffprobe) exits unsuccessfully.

    The captured stderr is kept verbatim on the exception. The message names
    the step and repeats the last lines of stderr; batch callers prefix it
    with the item they were processing.
    """

    def __init__(
        self,
        step: str,
        exit_code: int,
        stderr: str = "",
        item_index: int | None = None,
        timed_out: bool = False,
    ) -> None:
        """Initialize the error.

        Args:
            step: Operation step that failed (e.g., "extract_audio").
            exit_code: Process exit code (-1 when the process timed out).
            stderr: Captured diagnostic output.
            item_index: 1-based index of the batch item, if any.
            timed_out: True if the runner killed the process on timeout.
        """
        self.step = step
        self.exit_code = exit_code
        self.stderr = stderr
        self.item_index = item_index
        self.timed_out = timed_out

        if timed_out:
            message = f"{step} timed out"
        else:
            message = f"{step} failed with exit code {exit_code}"
        detail = "\n".join(stderr.strip().splitlines()[-STDERR_TAIL_LINES:])
        if detail:
            message += f": {detail}"
        super().__init__(message)


class SilenceAnalysisError(MediaToolkitError):
    """Base class for silence analysis outcomes that end an operation."""

    pass


class NoSilenceDetectedError(SilenceAnalysisError):
    """Raised when the diagnostic output contains no silence intervals."""

    def __init__(self, source: str | None = None) -> None:
        self.source = source
        message = "No silence detected"
        if source:
            message += f" in {source}"
        super().__init__(message)


class NoSegmentsFoundError(SilenceAnalysisError):
    """Raised when no non-silent segment survives the minimum length filter."""

    def __init__(self, silence_count: int, min_segment_duration: float) -> None:
        self.silence_count = silence_count
        self.min_segment_duration = min_segment_duration
        super().__init__(
            f"No segments found after silence detection "
            f"({silence_count} silences, minimum segment {min_segment_duration}s)"
        )


class MediaProbeError(MediaToolkitError):
    """Raised when media information cannot be read."""

    pass


class ToolLaunchError(MediaToolkitError):
    """Raised when an external tool executable cannot be started."""

    def __init__(self, tool: str, reason: str, message: str | None = None) -> None:
        self.tool = tool
        self.reason = reason
        super().__init__(message or f"Could not start {tool}: {reason}")


class ToolNotFoundError(ToolLaunchError):
    """Raised when an external tool executable does not exist."""

    def __init__(self, tool: str) -> None:
        super().__init__(tool, "not found", f"Executable not found: {tool}")


class OutputPathError(MediaToolkitError):
    """Raised when an output or work location cannot be created or written."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot write to {path}: {reason}")


class ConfigurationError(MediaToolkitError):
    """Raised when environment configuration produces invalid settings."""

    pass
