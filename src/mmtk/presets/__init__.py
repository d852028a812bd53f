"""Preset tables and the catalog used to resolve them.

- quality: audio quality presets
- video: video transcode presets, resolution sizes, default CRFs
- image: GIF/WebP presets
- catalog: PresetCatalog lookup over all namespaces
"""

from mmtk.presets.catalog import PresetCatalog
from mmtk.presets.image import (
    DEFAULT_IMAGE_PRESET,
    DEFAULT_IMAGE_SETTINGS,
    IMAGE_PRESETS,
)
from mmtk.presets.quality import (
    DEFAULT_QUALITY,
    OPTIMIZED_WEBM_QUALITY,
    QUALITY_PRESETS,
    WEBM_OPUS_ARGS,
)
from mmtk.presets.video import (
    DEFAULT_VIDEO_PRESET,
    RESOLUTION_SIZES,
    VIDEO_TRANSCODE_PRESETS,
    get_default_crf,
)

__all__ = [
    "PresetCatalog",
    # Quality
    "DEFAULT_QUALITY",
    "OPTIMIZED_WEBM_QUALITY",
    "QUALITY_PRESETS",
    "WEBM_OPUS_ARGS",
    # Video
    "DEFAULT_VIDEO_PRESET",
    "RESOLUTION_SIZES",
    "VIDEO_TRANSCODE_PRESETS",
    "get_default_crf",
    # Image
    "DEFAULT_IMAGE_PRESET",
    "DEFAULT_IMAGE_SETTINGS",
    "IMAGE_PRESETS",
]
