"""Animated GIF/WebP presets."""

from types import MappingProxyType

from mmtk.domain.enums import GifDither, ImageFormat, PaletteMode
from mmtk.domain.models import ImageConversionSettings, ImagePreset

DEFAULT_IMAGE_PRESET = "webp-discord"

# Baseline settings per format, used for a conversion without a preset
DEFAULT_IMAGE_SETTINGS = MappingProxyType(
    {
        ImageFormat.GIF: ImageConversionSettings(
            fps=15,
            width=480,
            quality=100,
            dither=GifDither.FLOYD_STEINBERG,
            palette_mode=PaletteMode.DIFF,
            compression=0,
        ),
        ImageFormat.WEBP: ImageConversionSettings(
            fps=30,
            width=480,
            quality=80,
            dither=GifDither.NONE,
            palette_mode=PaletteMode.FULL,
            compression=4,
        ),
    }
)

IMAGE_PRESETS = MappingProxyType(
    {
        "gif-discord": ImagePreset(
            key="gif-discord",
            label="GIF - Discord Optimized",
            description="Max 8MB, 480px wide, 30fps for Discord uploads",
            format=ImageFormat.GIF,
            settings=ImageConversionSettings(
                fps=30,
                width=480,
                quality=100,
                dither=GifDither.FLOYD_STEINBERG,
                palette_mode=PaletteMode.DIFF,
                compression=0,
            ),
        ),
        "gif-high-quality": ImagePreset(
            key="gif-high-quality",
            label="GIF - High Quality",
            description="Best visual quality, larger file size, 60fps",
            format=ImageFormat.GIF,
            settings=ImageConversionSettings(
                fps=60,
                width=720,
                quality=100,
                dither=GifDither.FLOYD_STEINBERG,
                palette_mode=PaletteMode.FULL,
                compression=0,
            ),
        ),
        "gif-small-file": ImagePreset(
            key="gif-small-file",
            label="GIF - Small File",
            description="Optimized for small file size, 10fps, 320px",
            format=ImageFormat.GIF,
            settings=ImageConversionSettings(
                fps=10,
                width=320,
                quality=100,
                dither=GifDither.BAYER,
                palette_mode=PaletteMode.DIFF,
                compression=0,
            ),
        ),
        "gif-smooth-loop": ImagePreset(
            key="gif-smooth-loop",
            label="GIF - Smooth Loop",
            description="High framerate for smooth looping animations",
            format=ImageFormat.GIF,
            settings=ImageConversionSettings(
                fps=50,
                width=480,
                quality=100,
                dither=GifDither.FLOYD_STEINBERG,
                palette_mode=PaletteMode.DIFF,
                compression=0,
            ),
        ),
        "webp-discord": ImagePreset(
            key="webp-discord",
            label="WebP - Discord Optimized",
            description="High quality WebP for Discord (better than GIF)",
            format=ImageFormat.WEBP,
            settings=ImageConversionSettings(
                fps=30, width=480, quality=80, compression=4, lossless=False
            ),
        ),
        "webp-high-quality": ImagePreset(
            key="webp-high-quality",
            label="WebP - High Quality",
            description="Best visual quality, 60fps, near-lossless",
            format=ImageFormat.WEBP,
            settings=ImageConversionSettings(
                fps=60, width=720, quality=95, compression=6, lossless=False
            ),
        ),
        "webp-small-file": ImagePreset(
            key="webp-small-file",
            label="WebP - Small File",
            description="Aggressive compression, good quality/size ratio",
            format=ImageFormat.WEBP,
            settings=ImageConversionSettings(
                fps=24, width=480, quality=70, compression=6, lossless=False
            ),
        ),
        "webp-lossless": ImagePreset(
            key="webp-lossless",
            label="WebP - Lossless",
            description="Perfect quality, larger files, preserves all detail",
            format=ImageFormat.WEBP,
            settings=ImageConversionSettings(
                fps=60, width=None, quality=100, compression=6, lossless=True
            ),
        ),
    }
)
