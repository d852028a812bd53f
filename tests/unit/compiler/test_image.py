"""Unit tests for animated GIF/WebP compilation."""

from pathlib import Path

import pytest

from mmtk.compiler import (
    CompilerContext,
    ImageConversionRequest,
    build_gif_filter,
    compile_image_conversion,
    resolve_image_settings,
)
from mmtk.domain.enums import GifDither, ImageFormat, PaletteMode
from mmtk.domain.models import ImageConversionSettings, TimeClip
from mmtk.exceptions import InvalidOptionError, UnknownPresetError


def _request(**kwargs) -> ImageConversionRequest:
    return ImageConversionRequest(
        input_path=Path("clip.mp4"),
        output_path=kwargs.pop("output_path", Path("clip.gif")),
        **kwargs,
    )


def _value_after(argv: tuple[str, ...], flag: str) -> str:
    return argv[argv.index(flag) + 1]


class TestResolveSettings:
    """Tests for resolve_image_settings."""

    def test_default_preset_is_webp(self, ctx: CompilerContext) -> None:
        image_format, settings = resolve_image_settings(ctx, _request())
        assert image_format == ImageFormat.WEBP
        assert settings.quality == 80

    def test_format_without_preset_uses_format_defaults(
        self, ctx: CompilerContext
    ) -> None:
        image_format, settings = resolve_image_settings(
            ctx, _request(format=ImageFormat.GIF)
        )
        assert image_format == ImageFormat.GIF
        assert settings.fps == 15

    def test_field_overrides(self, ctx: CompilerContext) -> None:
        _, settings = resolve_image_settings(
            ctx, _request(preset_key="gif-discord", fps=12, width=320)
        )
        assert settings.fps == 12
        assert settings.width == 320
        assert settings.dither == GifDither.FLOYD_STEINBERG

    def test_format_conflicting_with_preset_rejected(self, ctx: CompilerContext) -> None:
        with pytest.raises(InvalidOptionError, match="produces gif"):
            resolve_image_settings(
                ctx, _request(preset_key="gif-discord", format=ImageFormat.WEBP)
            )

    def test_out_of_range_override_rejected(self, ctx: CompilerContext) -> None:
        with pytest.raises(InvalidOptionError):
            resolve_image_settings(ctx, _request(quality=150))

    def test_unknown_preset_raises(self, ctx: CompilerContext) -> None:
        with pytest.raises(UnknownPresetError):
            resolve_image_settings(ctx, _request(preset_key="apng-best"))


class TestGifFilter:
    """Tests for build_gif_filter."""

    def test_palette_filtergraph(self) -> None:
        settings = ImageConversionSettings(
            fps=15,
            width=480,
            dither=GifDither.BAYER,
            palette_mode=PaletteMode.DIFF,
        )
        assert build_gif_filter(settings) == (
            "fps=15,scale=480:-1:flags=lanczos,split[s0][s1];"
            "[s0]palettegen=stats_mode=diff[p];"
            "[s1][p]paletteuse=dither=bayer"
        )

    def test_source_fps_and_width(self) -> None:
        settings = ImageConversionSettings(fps=0, width=None)
        assert build_gif_filter(settings).startswith("split[s0][s1];")


class TestCompileImageConversion:
    """Tests for compile_image_conversion."""

    def test_gif_command(self, ctx: CompilerContext) -> None:
        command = compile_image_conversion(ctx, _request(preset_key="gif-small-file"))
        assert "palettegen" in _value_after(command.argv, "-vf")
        assert _value_after(command.argv, "-loop") == "0"
        assert _value_after(command.argv, "-f") == "gif"
        assert "-an" in command
        assert "-c:v" not in command
        assert command.step == "convert_image"

    def test_webp_command(self, ctx: CompilerContext) -> None:
        command = compile_image_conversion(
            ctx, _request(preset_key="webp-discord", output_path=Path("clip.webp"))
        )
        assert _value_after(command.argv, "-vf") == "fps=30,scale=480:-1:flags=lanczos"
        assert _value_after(command.argv, "-c:v") == "libwebp_anim"
        assert _value_after(command.argv, "-lossless") == "0"
        assert _value_after(command.argv, "-quality") == "80"
        assert _value_after(command.argv, "-compression_level") == "4"
        assert _value_after(command.argv, "-f") == "webp"
        assert command.argv[-1] == "clip.webp"

    def test_lossless_webp(self, ctx: CompilerContext) -> None:
        command = compile_image_conversion(ctx, _request(preset_key="webp-lossless"))
        assert _value_after(command.argv, "-lossless") == "1"
        # Keeps source width
        assert "scale" not in _value_after(command.argv, "-vf")

    def test_clip_window(self, ctx: CompilerContext) -> None:
        command = compile_image_conversion(
            ctx, _request(clip=TimeClip(start_time="5", duration=3))
        )
        assert command.index_of("-ss") < command.index_of("-i") < command.index_of("-t")

    def test_no_loop_gif(self, ctx: CompilerContext) -> None:
        settings = ImageConversionSettings(loop=False)
        command = compile_image_conversion(
            ctx, _request(format=ImageFormat.GIF, settings=settings)
        )
        assert _value_after(command.argv, "-loop") == "-1"
