"""Preset catalog.

The catalog is a plain value over immutable tables. Callers construct one
(usually via PresetCatalog.default()) and pass it into every compiler call
through the CompilerContext, so there is no module-level shared instance.

Each PresetKind is its own namespace: a resolution name such as "720p"
never resolves as a quality or video preset, and lookups are exact (no
prefix or case-insensitive matching).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from mmtk.domain.enums import PresetKind
from mmtk.domain.models import ImagePreset, QualityPreset, VideoTranscodePreset
from mmtk.exceptions import UnknownPresetError
from mmtk.presets.image import IMAGE_PRESETS
from mmtk.presets.quality import QUALITY_PRESETS
from mmtk.presets.video import RESOLUTION_SIZES, VIDEO_TRANSCODE_PRESETS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PresetCatalog:
    """Lookup tables for every preset namespace."""

    quality_presets: Mapping[str, QualityPreset]
    video_presets: Mapping[str, VideoTranscodePreset]
    image_presets: Mapping[str, ImagePreset]
    resolutions: Mapping[str, tuple[int, int]]

    @classmethod
    def default(cls) -> PresetCatalog:
        """Build a catalog over the built-in tables."""
        return cls(
            quality_presets=QUALITY_PRESETS,
            video_presets=VIDEO_TRANSCODE_PRESETS,
            image_presets=IMAGE_PRESETS,
            resolutions=RESOLUTION_SIZES,
        )

    def _table(self, kind: PresetKind) -> Mapping[str, Any]:
        if kind == PresetKind.QUALITY:
            return self.quality_presets
        if kind == PresetKind.VIDEO:
            return self.video_presets
        if kind == PresetKind.IMAGE:
            return self.image_presets
        return self.resolutions

    def lookup(self, kind: PresetKind, key: str) -> Any:
        """Resolve a key in one namespace.

        Args:
            kind: Namespace to search.
            key: Exact preset key.

        Returns:
            The preset value stored under key.

        Raises:
            UnknownPresetError: If key is not in the namespace.
        """
        table = self._table(kind)
        try:
            return table[key]
        except (KeyError, TypeError):
            logger.debug("Preset lookup miss: %s/%s", kind.value, key)
            raise UnknownPresetError(kind.value, str(key), tuple(table)) from None

    def keys(self, kind: PresetKind) -> tuple[str, ...]:
        """List the keys of a namespace in table order."""
        return tuple(self._table(kind))

    def quality(self, key: str) -> QualityPreset:
        return self.lookup(PresetKind.QUALITY, key)

    def video(self, key: str) -> VideoTranscodePreset:
        return self.lookup(PresetKind.VIDEO, key)

    def image(self, key: str) -> ImagePreset:
        return self.lookup(PresetKind.IMAGE, key)

    def resolution(self, name: str) -> tuple[int, int]:
        return self.lookup(PresetKind.RESOLUTION, name)
