"""ProcessRunner backed by subprocess.run."""

from __future__ import annotations

import logging
import subprocess  # nosec B404 - subprocess is required for FFmpeg invocation
import time
from typing import Sequence

from mmtk.exceptions import ToolLaunchError, ToolNotFoundError
from mmtk.runner.interface import ProcessResult

logger = logging.getLogger(__name__)


def _as_text(value: str | bytes | None) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


class SubprocessRunner:
    """Run commands with captured UTF-8 output.

    Args:
        default_timeout: Timeout used when run() is called without one.
            None means no limit.
    """

    def __init__(self, default_timeout: float | None = None) -> None:
        self.default_timeout = default_timeout

    def run(self, argv: Sequence[str], timeout: float | None = None) -> ProcessResult:
        str_args = [str(arg) for arg in argv]
        command_name = str_args[0].split("/")[-1] if str_args else "unknown"
        effective_timeout = timeout if timeout is not None else self.default_timeout

        logger.debug(
            "Executing command: %s",
            " ".join(str_args),
            extra={"command": command_name, "arg_count": len(str_args)},
        )
        start_time = time.monotonic()

        try:
            result = subprocess.run(  # nosec B603 - argv is compiled, no shell
                str_args,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=effective_timeout,
            )
        except FileNotFoundError as e:
            raise ToolNotFoundError(str_args[0] if str_args else "") from e
        except OSError as e:
            # Not executable, permission denied, too many open files
            raise ToolLaunchError(
                str_args[0] if str_args else "", e.strerror or str(e)
            ) from e
        except subprocess.TimeoutExpired as e:
            # subprocess.run kills the child before raising
            elapsed = time.monotonic() - start_time
            logger.warning(
                "Command timed out after %ss: %s",
                effective_timeout,
                " ".join(str_args[:3]) + ("..." if len(str_args) > 3 else ""),
                extra={
                    "command": command_name,
                    "timeout_seconds": effective_timeout,
                    "elapsed_seconds": round(elapsed, 3),
                },
            )
            return ProcessResult(
                exit_code=-1,
                stdout=_as_text(e.stdout),
                stderr=_as_text(e.stderr),
                timed_out=True,
            )

        elapsed = time.monotonic() - start_time
        logger.debug(
            "Command completed",
            extra={
                "command": command_name,
                "elapsed_seconds": round(elapsed, 3),
                "returncode": result.returncode,
            },
        )
        return ProcessResult(
            exit_code=result.returncode,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
        )
