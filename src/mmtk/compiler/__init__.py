"""Argument compiler package.

Pure functions that turn a request value and a CompilerContext into a
CompiledCommand. Nothing here spawns a process.

Modules:
- command: CompiledCommand and shared argument helpers
- context: CompilerContext
- clip: seek/window arguments
- audio: audio extraction
- video: video transcode, preset merge, scale filter
- image: animated GIF/WebP conversion
- silence: silencedetect analysis pass
- levels: astats and volumedetect level analysis passes
- concat: concat-demuxer merge and manifest handling
"""

from mmtk.compiler.audio import (
    AUDIO_CODECS,
    AudioExtractionRequest,
    build_audio_quality_args,
    compile_audio_extraction,
    get_audio_encoder,
    resolve_quality,
)
from mmtk.compiler.clip import build_clip_args
from mmtk.compiler.command import CompiledCommand
from mmtk.compiler.concat import (
    MergeRequest,
    compile_concat,
    concat_manifest,
    render_concat_manifest,
)
from mmtk.compiler.context import CompilerContext
from mmtk.compiler.image import (
    ImageConversionRequest,
    build_gif_filter,
    compile_image_conversion,
    resolve_image_settings,
)
from mmtk.compiler.levels import (
    DEFAULT_WINDOW_SAMPLES,
    compile_level_analysis,
    compile_volume_detection,
)
from mmtk.compiler.silence import (
    DEFAULT_MIN_SILENCE_DURATION,
    DEFAULT_NOISE_THRESHOLD,
    compile_silence_detection,
)
from mmtk.compiler.video import (
    VideoTranscodeRequest,
    build_audio_block,
    build_quality_args,
    build_scale_filter,
    compile_video_transcode,
    merge_video_preset,
    resolve_video_preset,
)

__all__ = [
    "CompiledCommand",
    "CompilerContext",
    "build_clip_args",
    # Audio
    "AUDIO_CODECS",
    "AudioExtractionRequest",
    "build_audio_quality_args",
    "compile_audio_extraction",
    "get_audio_encoder",
    "resolve_quality",
    # Video
    "VideoTranscodeRequest",
    "build_audio_block",
    "build_quality_args",
    "build_scale_filter",
    "compile_video_transcode",
    "merge_video_preset",
    "resolve_video_preset",
    # Image
    "ImageConversionRequest",
    "build_gif_filter",
    "compile_image_conversion",
    "resolve_image_settings",
    # Silence
    "DEFAULT_MIN_SILENCE_DURATION",
    "DEFAULT_NOISE_THRESHOLD",
    "compile_silence_detection",
    # Levels
    "DEFAULT_WINDOW_SAMPLES",
    "compile_level_analysis",
    "compile_volume_detection",
    # Concat
    "MergeRequest",
    "compile_concat",
    "concat_manifest",
    "render_concat_manifest",
]
