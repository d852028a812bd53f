"""External process execution."""

from mmtk.runner.interface import ProcessResult, ProcessRunner
from mmtk.runner.subprocess_runner import SubprocessRunner

__all__ = [
    "ProcessResult",
    "ProcessRunner",
    "SubprocessRunner",
]
