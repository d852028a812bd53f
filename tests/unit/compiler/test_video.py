"""Unit tests for video transcode compilation."""

from pathlib import Path

import pytest

from mmtk.compiler import (
    CompilerContext,
    VideoTranscodeRequest,
    build_quality_args,
    build_scale_filter,
    compile_video_transcode,
    merge_video_preset,
)
from mmtk.domain.enums import QualityMode, ScalePolicy
from mmtk.domain.models import ScaleSettings, VideoPresetSettings
from mmtk.exceptions import InvalidOptionError, UnknownPresetError
from mmtk.presets import PresetCatalog


def _request(**kwargs) -> VideoTranscodeRequest:
    return VideoTranscodeRequest(
        input_path=Path("in.mov"), output_path=Path("out.webm"), **kwargs
    )


def _value_after(argv: tuple[str, ...], flag: str) -> str:
    return argv[argv.index(flag) + 1]


class TestScaleFilter:
    """Tests for build_scale_filter."""

    def test_source_resolution_has_no_filter(self) -> None:
        assert build_scale_filter(ScaleSettings(), PresetCatalog.default()) is None

    def test_fit_pads(self) -> None:
        scale = ScaleSettings(policy=ScalePolicy.FIT, max_resolution="720p")
        assert build_scale_filter(scale, PresetCatalog.default()) == (
            "scale=1280:720:force_original_aspect_ratio=decrease,"
            "pad=1280:720:(ow-iw)/2:(oh-ih)/2"
        )

    def test_crop_fills(self) -> None:
        scale = ScaleSettings(policy=ScalePolicy.CROP, max_resolution="480p")
        assert build_scale_filter(scale, PresetCatalog.default()) == (
            "scale=854:480:force_original_aspect_ratio=increase,crop=854:480"
        )

    def test_stretch_ignores_aspect(self) -> None:
        scale = ScaleSettings(policy=ScalePolicy.STRETCH, max_resolution="1080p")
        assert build_scale_filter(scale, PresetCatalog.default()) == "scale=1920:1080"

    def test_aspect_not_preserved_stretches(self) -> None:
        scale = ScaleSettings(max_resolution="720p", preserve_aspect=False)
        assert build_scale_filter(scale, PresetCatalog.default()) == "scale=1280:720"

    def test_unknown_resolution_raises(self) -> None:
        with pytest.raises(UnknownPresetError):
            build_scale_filter(
                ScaleSettings(max_resolution="4k"), PresetCatalog.default()
            )


class TestQualityArgs:
    """Tests for build_quality_args."""

    def test_crf_mode(self) -> None:
        args = build_quality_args(VideoPresetSettings(codec="libx264", crf=20))
        assert args == ["-crf", "20"]

    def test_vp9_crf_sets_zero_bitrate(self) -> None:
        args = build_quality_args(VideoPresetSettings(codec="libvpx-vp9", crf=31))
        assert args == ["-b:v", "0", "-crf", "31"]

    def test_missing_crf_uses_codec_default(self) -> None:
        args = build_quality_args(VideoPresetSettings(codec="libx265"))
        assert args == ["-crf", "28"]

    def test_bitrate_mode(self) -> None:
        args = build_quality_args(
            VideoPresetSettings(
                codec="libx264", quality_mode=QualityMode.BITRATE, crf=20, bitrate="4M"
            )
        )
        assert args == ["-b:v", "4M"]


class TestMergePreset:
    """Tests for merge_video_preset."""

    def test_overrides_only_named_fields(self, ctx: CompilerContext) -> None:
        preset = ctx.catalog.video("any-to-webm")
        merged = merge_video_preset(preset, _request(crf=24, audio_bitrate="96k"))
        assert merged.video.crf == 24
        assert merged.video.codec == preset.video.codec
        assert merged.video.pixel_format == preset.video.pixel_format
        assert merged.video.scale == preset.video.scale
        assert merged.audio.bitrate == "96k"
        assert merged.audio.extra_args == preset.audio.extra_args

    def test_preset_is_not_mutated(self, ctx: CompilerContext) -> None:
        preset = ctx.catalog.video("any-to-mp4")
        merge_video_preset(preset, _request(crf=30, resolution="480p"))
        assert ctx.catalog.video("any-to-mp4").video.crf == 20
        assert ctx.catalog.video("any-to-mp4").video.scale.max_resolution == "source"

    def test_bitrate_mode_without_bitrate_rejected(self, ctx: CompilerContext) -> None:
        preset = ctx.catalog.video("any-to-mp4")
        with pytest.raises(InvalidOptionError):
            merge_video_preset(preset, _request(quality_mode=QualityMode.BITRATE))


class TestCompileVideoTranscode:
    """Tests for compile_video_transcode."""

    def test_default_preset_is_webm(self, ctx: CompilerContext) -> None:
        command = compile_video_transcode(ctx, _request())
        assert _value_after(command.argv, "-c:v") == "libvpx-vp9"
        assert _value_after(command.argv, "-c:a") == "libopus"
        assert _value_after(command.argv, "-f") == "webm"
        assert _value_after(command.argv, "-pix_fmt") == "yuv420p"
        assert command.argv[-1] == "out.webm"
        assert command.step == "transcode_video"

    def test_source_resolution_never_scales(self, ctx: CompilerContext) -> None:
        command = compile_video_transcode(
            ctx, _request(preset_key="any-to-webm", resolution="source")
        )
        assert "-vf" not in command

    def test_resolution_override_scales(self, ctx: CompilerContext) -> None:
        command = compile_video_transcode(
            ctx, _request(preset_key="any-to-mp4", resolution="720p")
        )
        assert _value_after(command.argv, "-vf").startswith("scale=1280:720")

    def test_crf_and_bitrate_are_exclusive(self, ctx: CompilerContext) -> None:
        crf_command = compile_video_transcode(ctx, _request(preset_key="any-to-mp4"))
        assert "-crf" in crf_command
        assert "-b:v" not in crf_command

        bitrate_command = compile_video_transcode(
            ctx,
            _request(
                preset_key="any-to-mp4",
                quality_mode=QualityMode.BITRATE,
                bitrate="5M",
            ),
        )
        assert "-crf" not in bitrate_command
        assert _value_after(bitrate_command.argv, "-b:v") == "5M"

    def test_vp9_crf_has_zero_video_bitrate(self, ctx: CompilerContext) -> None:
        command = compile_video_transcode(ctx, _request(preset_key="any-to-webm"))
        assert _value_after(command.argv, "-b:v") == "0"
        assert _value_after(command.argv, "-crf") == "31"

    def test_mkv_uses_matroska_muxer(self, ctx: CompilerContext) -> None:
        command = compile_video_transcode(ctx, _request(preset_key="any-to-mkv"))
        assert _value_after(command.argv, "-f") == "matroska"

    def test_audio_block_order(self, ctx: CompilerContext) -> None:
        command = compile_video_transcode(ctx, _request(preset_key="any-to-mp4"))
        positions = [command.index_of(flag) for flag in ("-c:a", "-b:a", "-ar", "-ac")]
        assert positions == sorted(positions)

    def test_codec_overrides(self, ctx: CompilerContext) -> None:
        command = compile_video_transcode(
            ctx,
            _request(preset_key="any-to-mkv", video_codec="libx265", audio_codec="flac"),
        )
        assert _value_after(command.argv, "-c:v") == "libx265"
        assert _value_after(command.argv, "-c:a") == "flac"

    def test_context_default_preset(self) -> None:
        ctx = CompilerContext(default_video_preset="any-to-mp4")
        command = compile_video_transcode(ctx, _request())
        assert _value_after(command.argv, "-f") == "mp4"

    def test_unknown_preset_raises(self, ctx: CompilerContext) -> None:
        with pytest.raises(UnknownPresetError):
            compile_video_transcode(ctx, _request(preset_key="any-to-avi"))

    def test_unknown_resolution_raises(self, ctx: CompilerContext) -> None:
        with pytest.raises(UnknownPresetError):
            compile_video_transcode(ctx, _request(resolution="8k"))
