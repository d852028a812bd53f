"""Compiled command value and shared argument helpers."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from mmtk.compiler.context import CompilerContext


@dataclass(frozen=True)
class CompiledCommand:
    """An ffmpeg invocation ready to hand to a ProcessRunner.

    The display string is derived from argv, so what is logged or shown
    for a dry run is always what would be executed. It is a plain
    space join and does not shell-quote paths containing spaces.
    """

    step: str
    argv: tuple[str, ...]
    output_path: Path | None = None

    @property
    def display(self) -> str:
        return " ".join(self.argv)

    def index_of(self, token: str) -> int:
        """Position of the first occurrence of token in argv, or -1."""
        try:
            return self.argv.index(token)
        except ValueError:
            return -1

    def __contains__(self, token: object) -> bool:
        return token in self.argv


def base_args(ctx: CompilerContext, overwrite: bool = True) -> list[str]:
    """Leading arguments shared by every compiled command."""
    args = [ctx.ffmpeg_path]
    if overwrite:
        args.append("-y")
    args.append("-hide_banner")
    return args


def thread_args(ctx: CompilerContext) -> list[str]:
    return ["-threads", str(ctx.threads)]


def metadata_args(preserve_metadata: bool) -> list[str]:
    """Arguments that strip global metadata, if requested."""
    if preserve_metadata:
        return []
    return ["-map_metadata", "-1"]
