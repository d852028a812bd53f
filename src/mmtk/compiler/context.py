"""Compiler context passed explicitly into every compile call."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from mmtk.presets import DEFAULT_VIDEO_PRESET, PresetCatalog

if TYPE_CHECKING:
    from mmtk.config.models import ToolkitConfig


@dataclass(frozen=True)
class CompilerContext:
    """Everything a compiler needs besides the request itself.

    Constructed once by the caller and shared by reference; it holds no
    mutable state, so concurrent compile calls are safe.
    """

    catalog: PresetCatalog = field(default_factory=PresetCatalog.default)
    ffmpeg_path: str = "ffmpeg"
    preserve_metadata: bool = True
    default_video_preset: str = DEFAULT_VIDEO_PRESET
    threads: int = 0  # 0 lets ffmpeg pick

    @classmethod
    def from_config(
        cls, config: ToolkitConfig, catalog: PresetCatalog | None = None
    ) -> CompilerContext:
        """Build a context from toolkit configuration.

        Args:
            config: Loaded toolkit configuration.
            catalog: Catalog to use, defaults to the built-in tables.

        Returns:
            New CompilerContext.
        """
        return cls(
            catalog=catalog or PresetCatalog.default(),
            ffmpeg_path=str(config.tools.ffmpeg),
            preserve_metadata=config.defaults.preserve_metadata,
            default_video_preset=config.defaults.video_preset,
            threads=config.defaults.threads,
        )

    def metadata_flag(self, preserve_metadata: bool | None) -> bool:
        """Resolve a per-request metadata choice against the default."""
        if preserve_metadata is None:
            return self.preserve_metadata
        return preserve_metadata
