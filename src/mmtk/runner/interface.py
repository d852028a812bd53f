"""Process runner protocol.

The compiler only produces argument vectors. Anything that actually starts
a process goes through a ProcessRunner, so operations can be exercised
with a scripted fake.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence


@dataclass(frozen=True)
class ProcessResult:
    """Captured outcome of a finished (or killed) process."""

    exit_code: int
    """Process exit code; -1 when the process was killed on timeout."""

    stdout: str = ""
    stderr: str = ""

    timed_out: bool = False
    """True if the runner killed the process because the timeout elapsed."""

    @property
    def success(self) -> bool:
        return self.exit_code == 0 and not self.timed_out


class ProcessRunner(Protocol):
    """Protocol for running external commands."""

    def run(self, argv: Sequence[str], timeout: float | None = None) -> ProcessResult:
        """Run a command to completion and capture its output.

        Args:
            argv: Program and arguments; never passed through a shell.
            timeout: Seconds before the process is killed, None for no limit.

        Returns:
            ProcessResult with exit code and captured text.

        Raises:
            ToolNotFoundError: If the executable does not exist.
            ToolLaunchError: If it exists but cannot be started.
        """
        ...
