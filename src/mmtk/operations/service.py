"""Media operations service.

MediaOperations ties the compiler, the process runner and the media probe
together. Each public method compiles one or more commands, runs them
(unless dry_run is set) and reports an OperationResult. Errors raised by
validation, compilation or execution are converted to failed results at
this boundary; nothing here raises MediaToolkitError to the caller.

Batch operations never stop on a failed item: successful items are
reported as outputs and failed ones as warnings. A batch fails only when
no item succeeded.
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import TYPE_CHECKING

from mmtk.compiler import (
    AudioExtractionRequest,
    CompiledCommand,
    CompilerContext,
    ImageConversionRequest,
    MergeRequest,
    VideoTranscodeRequest,
    compile_audio_extraction,
    compile_concat,
    compile_image_conversion,
    compile_level_analysis,
    compile_silence_detection,
    compile_video_transcode,
    compile_volume_detection,
    concat_manifest,
)
from mmtk.compiler.concat import validate_merge_request
from mmtk.compiler.levels import DEFAULT_WINDOW_SAMPLES
from mmtk.core import base_name as path_base_name
from mmtk.core import clip_bounds, format_seconds, sanitize_filename, validate_clip
from mmtk.domain import (
    AudioFormat,
    BatchOutput,
    ChapterOutput,
    CommandOutput,
    FormatOutputs,
    ImageFormat,
    OperationResult,
    PreviewType,
    QualityMode,
    QualityPreset,
    SegmentedOutput,
    SilenceSegment,
    TimeClip,
    TrailingSilencePolicy,
    VideoTranscodePreset,
    WaveformData,
)
from mmtk.exceptions import (
    InvalidOptionError,
    MediaProbeError,
    MediaToolkitError,
    OutputPathError,
    ToolInvocationError,
)
from mmtk.logging import operation_context
from mmtk.presets import DEFAULT_QUALITY
from mmtk.silence import (
    DEFAULT_MIN_SEGMENT_DURATION,
    DEFAULT_MIN_SILENCE_DURATION,
    DEFAULT_NOISE_THRESHOLD,
    MIN_MEASURED_LEVELS,
    compute_segments,
    estimate_levels,
    parse_rms_levels,
    parse_silence_output,
    parse_volume_stats,
    resample_levels,
    resolve_segments,
    segments_to_clips,
)

if TYPE_CHECKING:
    from mmtk.config.models import ToolkitConfig
    from mmtk.introspector.interface import MediaProbe
    from mmtk.runner.interface import ProcessRunner

logger = logging.getLogger(__name__)

DRY_RUN_WARNING = "Dry run - command not executed"

# Previews are for listening only
PREVIEW_QUALITY = "speech"
DEFAULT_PREVIEW_DURATION = 5.0

DEFAULT_MAX_WORKERS = 2

# Points in a waveform envelope
DEFAULT_WAVEFORM_SAMPLES = 100


def _ensure_directory(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputPathError(path, e.strerror or str(e)) from e


def _unique_stem(stem: str, used: set[str]) -> str:
    """Reserve stem, suffixing _2, _3, ... if an earlier item already took it."""
    candidate = stem
    n = 2
    while candidate.casefold() in used:
        candidate = f"{stem}_{n}"
        n += 1
    used.add(candidate.casefold())
    return candidate


class MediaOperations:
    """High-level media operations.

    Args:
        context: Compiler context shared by every compiled command.
        runner: Runs compiled commands.
        probe: Reads durations and chapters; operations that need it fail
            cleanly when it is not configured.
        temp_dir: Directory for intermediate files; None uses the system
            temp directory.
        max_workers: Default worker count for multi-format conversion.
        timeout: Seconds before a single command is killed, None for none.
    """

    def __init__(
        self,
        context: CompilerContext,
        runner: ProcessRunner,
        probe: MediaProbe | None = None,
        temp_dir: Path | None = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
        timeout: float | None = None,
    ) -> None:
        self._context = context
        self._runner = runner
        self._probe = probe
        self._temp_dir = temp_dir
        self._max_workers = max(1, max_workers)
        self._timeout = timeout

    @classmethod
    def from_config(
        cls,
        config: ToolkitConfig,
        runner: ProcessRunner,
        probe: MediaProbe | None = None,
    ) -> MediaOperations:
        """Build the service from loaded configuration."""
        return cls(
            context=CompilerContext.from_config(config),
            runner=runner,
            probe=probe,
            temp_dir=config.defaults.temp_dir,
            max_workers=config.defaults.max_concurrent_jobs,
            timeout=config.defaults.timeout,
        )

    @property
    def context(self) -> CompilerContext:
        return self._context

    @property
    def probe(self) -> MediaProbe | None:
        return self._probe

    # ------------------------------------------------------------------
    # Execution helpers
    # ------------------------------------------------------------------

    def _execute(self, command: CompiledCommand, item_index: int | None = None) -> str:
        """Run a compiled command and return its stderr.

        Raises:
            ToolInvocationError: If the command fails or times out.
            ToolLaunchError: If ffmpeg cannot be started.
            OutputPathError: If the output directory cannot be created.
        """
        if command.output_path is not None:
            _ensure_directory(command.output_path.parent)

        logger.debug("Running %s: %s", command.step, command.display)
        result = self._runner.run(command.argv, timeout=self._timeout)
        if not result.success:
            raise ToolInvocationError(
                step=command.step,
                exit_code=result.exit_code,
                stderr=result.stderr,
                item_index=item_index,
                timed_out=result.timed_out,
            )
        return result.stderr

    def _run_single(
        self, command: CompiledCommand, output_path: Path, dry_run: bool
    ) -> OperationResult[CommandOutput]:
        output = CommandOutput(command=command.display, output_path=output_path)
        if dry_run:
            return OperationResult.ok(output, warnings=[DRY_RUN_WARNING])
        self._execute(command)
        return OperationResult.ok(output)

    def _require_probe(self) -> MediaProbe:
        if self._probe is None:
            raise MediaProbeError("No media probe configured")
        return self._probe

    def _media_duration(self, input_path: Path) -> float:
        duration = self._require_probe().info(input_path).duration
        if duration <= 0:
            raise MediaProbeError(f"Could not determine duration of {input_path}")
        return duration

    # ------------------------------------------------------------------
    # Single operations
    # ------------------------------------------------------------------

    def extract_audio(
        self,
        input_path: Path,
        output_path: Path,
        format: AudioFormat = AudioFormat.MP3,
        quality: str | QualityPreset = DEFAULT_QUALITY,
        clip: TimeClip | None = None,
        preserve_metadata: bool | None = None,
        dry_run: bool = False,
    ) -> OperationResult[CommandOutput]:
        """Extract (and optionally clip) the audio of a media file."""
        with operation_context("extract_audio"):
            try:
                command = compile_audio_extraction(
                    self._context,
                    AudioExtractionRequest(
                        input_path=input_path,
                        output_path=output_path,
                        format=format,
                        quality=quality,
                        clip=clip,
                        preserve_metadata=preserve_metadata,
                    ),
                )
                logger.info("Extracting audio: %s -> %s", input_path, output_path)
                return self._run_single(command, output_path, dry_run)
            except MediaToolkitError as e:
                logger.error("Audio extraction failed: %s", e, extra={"error": e})
                return OperationResult.fail(str(e))

    def transcode_video(
        self,
        input_path: Path,
        output_path: Path,
        preset_key: str | None = None,
        preset: VideoTranscodePreset | None = None,
        resolution: str | None = None,
        video_codec: str | None = None,
        audio_codec: str | None = None,
        quality_mode: QualityMode | None = None,
        crf: int | None = None,
        bitrate: str | None = None,
        audio_bitrate: str | None = None,
        preserve_metadata: bool | None = None,
        dry_run: bool = False,
    ) -> OperationResult[CommandOutput]:
        """Transcode a video using a preset plus overrides."""
        with operation_context("transcode_video"):
            try:
                command = compile_video_transcode(
                    self._context,
                    VideoTranscodeRequest(
                        input_path=input_path,
                        output_path=output_path,
                        preset_key=preset_key,
                        preset=preset,
                        resolution=resolution,
                        video_codec=video_codec,
                        audio_codec=audio_codec,
                        quality_mode=quality_mode,
                        crf=crf,
                        bitrate=bitrate,
                        audio_bitrate=audio_bitrate,
                        preserve_metadata=preserve_metadata,
                    ),
                )
                logger.info("Transcoding video: %s -> %s", input_path, output_path)
                return self._run_single(command, output_path, dry_run)
            except MediaToolkitError as e:
                logger.error("Video transcode failed: %s", e, extra={"error": e})
                return OperationResult.fail(str(e))

    def convert_image(
        self,
        input_path: Path,
        output_path: Path,
        preset_key: str | None = None,
        format: ImageFormat | None = None,
        fps: int | None = None,
        width: int | None = None,
        quality: int | None = None,
        clip: TimeClip | None = None,
        dry_run: bool = False,
    ) -> OperationResult[CommandOutput]:
        """Convert a video (or a clip of it) to an animated GIF or WebP."""
        with operation_context("convert_image"):
            try:
                command = compile_image_conversion(
                    self._context,
                    ImageConversionRequest(
                        input_path=input_path,
                        output_path=output_path,
                        preset_key=preset_key,
                        format=format,
                        fps=fps,
                        width=width,
                        quality=quality,
                        clip=clip,
                    ),
                )
                logger.info("Converting to image: %s -> %s", input_path, output_path)
                return self._run_single(command, output_path, dry_run)
            except MediaToolkitError as e:
                logger.error("Image conversion failed: %s", e, extra={"error": e})
                return OperationResult.fail(str(e))

    def merge_audio_files(
        self,
        input_paths: Sequence[Path],
        output_path: Path,
        format: AudioFormat = AudioFormat.MP3,
        quality: str | QualityPreset = DEFAULT_QUALITY,
        dry_run: bool = False,
    ) -> OperationResult[CommandOutput]:
        """Concatenate audio files into one.

        The concat manifest is written to the temp directory and removed
        before this method returns, in every outcome.
        """
        with operation_context("merge_audio_files"):
            request = MergeRequest(
                input_paths=tuple(input_paths),
                output_path=output_path,
                format=format,
                quality=quality,
            )
            try:
                command = self._merge(request, dry_run)
            except MediaToolkitError as e:
                logger.error("Merge failed: %s", e, extra={"error": e})
                return OperationResult.fail(str(e))

            output = CommandOutput(command=command.display, output_path=output_path)
            if dry_run:
                return OperationResult.ok(output, warnings=[DRY_RUN_WARNING])
            return OperationResult.ok(output)

    def _merge(self, request: MergeRequest, dry_run: bool) -> CompiledCommand:
        validate_merge_request(request)
        logger.info(
            "Merging %d files -> %s", len(request.input_paths), request.output_path
        )
        with concat_manifest(request.input_paths, self._temp_dir) as manifest:
            command = compile_concat(self._context, request, manifest)
            if not dry_run:
                self._execute(command)
        return command

    def create_preview(
        self,
        input_path: Path,
        output_path: Path,
        clip: TimeClip | None = None,
        preview_type: PreviewType = PreviewType.START,
        preview_duration: float = DEFAULT_PREVIEW_DURATION,
        format: AudioFormat = AudioFormat.MP3,
        dry_run: bool = False,
    ) -> OperationResult[CommandOutput]:
        """Extract the first and/or last seconds of a clip for listening.

        Without a clip the whole file is previewed; the end and both
        previews then need the media duration from the probe. A "both"
        preview extracts two temporary clips and merges them; the
        temporaries are removed in every outcome.
        """
        with operation_context("create_preview"):
            try:
                if preview_duration <= 0:
                    raise InvalidOptionError(
                        f"Preview duration must be positive, got {preview_duration}",
                        field="preview_duration",
                    )
                start, end = self._preview_bounds(input_path, clip, preview_type)
                start_clip = TimeClip(
                    start_time=format_seconds(start), duration=preview_duration
                )
                end_clip = TimeClip(
                    start_time=format_seconds(max(start, end - preview_duration)),
                    duration=preview_duration,
                )

                if preview_type == PreviewType.BOTH:
                    display = self._preview_both(
                        input_path, output_path, start_clip, end_clip, format, dry_run
                    )
                    output = CommandOutput(command=display, output_path=output_path)
                    if dry_run:
                        return OperationResult.ok(output, warnings=[DRY_RUN_WARNING])
                    return OperationResult.ok(output)

                command = compile_audio_extraction(
                    self._context,
                    AudioExtractionRequest(
                        input_path=input_path,
                        output_path=output_path,
                        format=format,
                        quality=PREVIEW_QUALITY,
                        clip=start_clip if preview_type == PreviewType.START else end_clip,
                    ),
                )
                return self._run_single(command, output_path, dry_run)
            except MediaToolkitError as e:
                logger.error("Preview failed: %s", e, extra={"error": e})
                return OperationResult.fail(str(e))

    def _preview_bounds(
        self, input_path: Path, clip: TimeClip | None, preview_type: PreviewType
    ) -> tuple[float, float]:
        if clip is not None:
            validate_clip(clip)
            return clip_bounds(clip)
        if preview_type == PreviewType.START:
            return 0.0, 0.0
        return 0.0, self._media_duration(input_path)

    def _preview_both(
        self,
        input_path: Path,
        output_path: Path,
        start_clip: TimeClip,
        end_clip: TimeClip,
        format: AudioFormat,
        dry_run: bool,
    ) -> str:
        if self._temp_dir is not None:
            _ensure_directory(self._temp_dir)
        try:
            work_dir = Path(
                tempfile.mkdtemp(
                    prefix="preview_",
                    dir=str(self._temp_dir) if self._temp_dir else None,
                )
            )
        except OSError as e:
            raise OutputPathError(
                self._temp_dir or tempfile.gettempdir(), e.strerror or str(e)
            ) from e
        try:
            parts = []
            for name, part_clip in (("start", start_clip), ("end", end_clip)):
                part_path = work_dir / f"preview_{name}.{format.value}"
                command = compile_audio_extraction(
                    self._context,
                    AudioExtractionRequest(
                        input_path=input_path,
                        output_path=part_path,
                        format=format,
                        quality=PREVIEW_QUALITY,
                        clip=part_clip,
                    ),
                )
                if not dry_run:
                    self._execute(command)
                parts.append(command)

            merge = self._merge(
                MergeRequest(
                    input_paths=tuple(c.output_path for c in parts if c.output_path),
                    output_path=output_path,
                    format=format,
                    quality=PREVIEW_QUALITY,
                ),
                dry_run,
            )
            return " && ".join(c.display for c in (*parts, merge))
        finally:
            shutil.rmtree(work_dir, ignore_errors=True)
            logger.debug("Removed preview work directory: %s", work_dir)

    # ------------------------------------------------------------------
    # Silence analysis
    # ------------------------------------------------------------------

    def _analyze_silence(
        self,
        input_path: Path,
        noise_threshold: str,
        min_duration: float,
        trailing_policy: TrailingSilencePolicy,
        media_duration: float | None,
    ) -> tuple[list[SilenceSegment], list[str]]:
        command = compile_silence_detection(
            self._context, input_path, noise_threshold, min_duration
        )
        stderr = self._execute(command)
        detection = parse_silence_output(stderr)

        warnings = []
        if detection.orphan_ends:
            warnings.append(
                f"{detection.orphan_ends} silence end marker(s) had no start; "
                "start reconstructed from duration"
            )
        if (
            detection.unmatched_start is not None
            and trailing_policy == TrailingSilencePolicy.EXTEND_TO_END
            and media_duration is None
            and self._probe is not None
        ):
            media_duration = self._media_duration(input_path)

        silences = resolve_segments(detection, media_duration, trailing_policy)
        logger.info("Detected %d silences in %s", len(silences), input_path)
        return silences, warnings

    def detect_silence(
        self,
        input_path: Path,
        noise_threshold: str = DEFAULT_NOISE_THRESHOLD,
        min_duration: float = DEFAULT_MIN_SILENCE_DURATION,
        trailing_policy: TrailingSilencePolicy = TrailingSilencePolicy.EXTEND_TO_END,
    ) -> OperationResult[list[SilenceSegment]]:
        """Run a silencedetect pass and return the silent intervals.

        The analysis always runs; there is no dry-run mode. A silence still
        open at the end of the output is closed at the media duration when
        the probe can provide it.
        """
        with operation_context("detect_silence"):
            try:
                silences, warnings = self._analyze_silence(
                    input_path, noise_threshold, min_duration, trailing_policy, None
                )
            except MediaToolkitError as e:
                logger.error("Silence detection failed: %s", e, extra={"error": e})
                return OperationResult.fail(str(e))
            return OperationResult.ok(silences, warnings=warnings)

    def waveform_data(
        self,
        input_path: Path,
        samples: int = DEFAULT_WAVEFORM_SAMPLES,
        window_samples: int = DEFAULT_WINDOW_SAMPLES,
    ) -> OperationResult[WaveformData]:
        """Measure an audio level envelope of at most samples points.

        Per-window RMS levels are averaged down to samples buckets. When the
        level pass yields fewer than MIN_MEASURED_LEVELS values, a
        volumedetect pass runs and an envelope of exactly samples points is
        estimated from its mean and peak volume; the result is flagged
        estimated and carries a warning. Like silence detection, this
        always runs.
        """
        with operation_context("waveform_data"):
            try:
                if samples <= 0:
                    raise InvalidOptionError(
                        f"Sample count must be positive, got {samples}", field="samples"
                    )
                duration = self._media_duration(input_path)
                stderr = self._execute(
                    compile_level_analysis(self._context, input_path, window_samples)
                )
                levels = parse_rms_levels(stderr)
                warnings = []
                estimated = len(levels) < MIN_MEASURED_LEVELS
                if estimated:
                    logger.info(
                        "Only %d level windows measured, falling back to volumedetect",
                        len(levels),
                    )
                    stderr = self._execute(
                        compile_volume_detection(self._context, input_path)
                    )
                    levels = estimate_levels(parse_volume_stats(stderr), samples)
                    warnings.append("Waveform estimated from overall volume statistics")
                else:
                    levels = resample_levels(levels, samples)
            except MediaToolkitError as e:
                logger.error("Waveform analysis failed: %s", e, extra={"error": e})
                return OperationResult.fail(str(e))

            return OperationResult.ok(
                WaveformData(
                    levels=tuple(levels),
                    duration=duration,
                    sample_rate=round(len(levels) / duration),
                    estimated=estimated,
                ),
                warnings=warnings,
            )

    # ------------------------------------------------------------------
    # Batches
    # ------------------------------------------------------------------

    def _run_clip_batch(
        self,
        input_path: Path,
        clips: Sequence[TimeClip],
        output_dir: Path,
        format: AudioFormat,
        quality: str | QualityPreset,
        base: str,
        preserve_metadata: bool | None,
        dry_run: bool,
    ) -> tuple[list[Path], list[str], list[str]]:
        """Extract clips one after another.

        Returns:
            Tuple of (outputs, commands, errors) for the items in order.
        """
        outputs: list[Path] = []
        commands: list[str] = []
        errors: list[str] = []
        used_stems: set[str] = set()

        for i, clip in enumerate(clips, start=1):
            label = sanitize_filename(clip.label or f"clip_{i}")
            stem = _unique_stem(f"{base}_{label}", used_stems)
            output_path = output_dir / f"{stem}.{format.value}"
            with operation_context("extract_clips", i):
                try:
                    command = compile_audio_extraction(
                        self._context,
                        AudioExtractionRequest(
                            input_path=input_path,
                            output_path=output_path,
                            format=format,
                            quality=quality,
                            clip=clip,
                            preserve_metadata=preserve_metadata,
                        ),
                    )
                    if not dry_run:
                        self._execute(command, item_index=i)
                except MediaToolkitError as e:
                    logger.warning("Clip %d failed: %s", i, e, extra={"error": e})
                    errors.append(f"Clip {i}: {e}")
                    continue
            outputs.append(output_path)
            commands.append(command.display)

        return outputs, commands, errors

    @staticmethod
    def _batch_warnings(errors: list[str], dry_run: bool) -> list[str]:
        warnings = list(errors)
        if dry_run:
            warnings.append(DRY_RUN_WARNING)
        return warnings

    def extract_clips(
        self,
        input_path: Path,
        clips: Sequence[TimeClip],
        output_dir: Path,
        format: AudioFormat = AudioFormat.MP3,
        quality: str | QualityPreset = DEFAULT_QUALITY,
        base_name: str | None = None,
        preserve_metadata: bool | None = None,
        dry_run: bool = False,
    ) -> OperationResult[BatchOutput]:
        """Extract several clips of one file, sequentially.

        Outputs are named <output_dir>/<base>_<label or clip_N>.<format>.
        A name already taken earlier in the batch gets a _2, _3, ... suffix.
        """
        with operation_context("extract_clips"):
            if not clips:
                return OperationResult.fail("No clips to extract")

            base = base_name or path_base_name(input_path, fallback="clip")
            outputs, commands, errors = self._run_clip_batch(
                input_path,
                clips,
                output_dir,
                format,
                quality,
                base,
                preserve_metadata,
                dry_run,
            )
            if errors and not outputs:
                return OperationResult.fail("\n".join(errors))

            logger.info("Extracted %d of %d clips", len(outputs), len(clips))
            return OperationResult.ok(
                BatchOutput(outputs=tuple(outputs), commands=tuple(commands)),
                warnings=self._batch_warnings(errors, dry_run),
            )

    def extract_chapters(
        self,
        input_path: Path,
        output_dir: Path,
        format: AudioFormat = AudioFormat.MP3,
        quality: str | QualityPreset = DEFAULT_QUALITY,
        chapter_indices: Sequence[int] | None = None,
        dry_run: bool = False,
    ) -> OperationResult[ChapterOutput]:
        """Extract chapters as individual files.

        Args:
            chapter_indices: 0-based chapter positions to keep; None keeps all.
        """
        with operation_context("extract_chapters"):
            try:
                info = self._require_probe().info(input_path)
            except MediaToolkitError as e:
                logger.error("Could not read chapters: %s", e, extra={"error": e})
                return OperationResult.fail(str(e))

            chapters = list(info.chapters)
            if chapter_indices is not None:
                wanted = set(chapter_indices)
                chapters = [ch for idx, ch in enumerate(chapters) if idx in wanted]
            if not chapters:
                return OperationResult.fail("No chapters found in media file")

            clips = [
                TimeClip(
                    start_time=format_seconds(ch.start_time),
                    end_time=format_seconds(ch.end_time),
                    label=sanitize_filename(ch.title),
                )
                for ch in chapters
            ]
            outputs, commands, errors = self._run_clip_batch(
                input_path,
                clips,
                output_dir,
                format,
                quality,
                path_base_name(input_path, fallback="clip"),
                None,
                dry_run,
            )
            if errors and not outputs:
                return OperationResult.fail("\n".join(errors))

            return OperationResult.ok(
                ChapterOutput(
                    outputs=tuple(outputs),
                    commands=tuple(commands),
                    chapters=tuple(chapters),
                ),
                warnings=self._batch_warnings(errors, dry_run),
            )

    def split_by_silence(
        self,
        input_path: Path,
        output_dir: Path,
        format: AudioFormat = AudioFormat.MP3,
        quality: str | QualityPreset = DEFAULT_QUALITY,
        noise_threshold: str = DEFAULT_NOISE_THRESHOLD,
        min_silence_duration: float = DEFAULT_MIN_SILENCE_DURATION,
        min_segment_duration: float = DEFAULT_MIN_SEGMENT_DURATION,
        trailing_policy: TrailingSilencePolicy = TrailingSilencePolicy.EXTEND_TO_END,
        dry_run: bool = False,
    ) -> OperationResult[SegmentedOutput]:
        """Split a file at its silences.

        Silence analysis always runs, even for a dry run, since the
        segment commands depend on it. Segments shorter than
        min_segment_duration are dropped.
        """
        with operation_context("split_by_silence"):
            try:
                duration = self._media_duration(input_path)
                silences, warnings = self._analyze_silence(
                    input_path,
                    noise_threshold,
                    min_silence_duration,
                    trailing_policy,
                    duration,
                )
                segments = compute_segments(silences, duration, min_segment_duration)
            except MediaToolkitError as e:
                logger.error("Split by silence failed: %s", e, extra={"error": e})
                return OperationResult.fail(str(e))

            outputs, commands, errors = self._run_clip_batch(
                input_path,
                segments_to_clips(segments),
                output_dir,
                format,
                quality,
                path_base_name(input_path, fallback="clip"),
                None,
                dry_run,
            )
            if errors and not outputs:
                return OperationResult.fail("\n".join(errors))

            logger.info("Split %s into %d segments", input_path, len(outputs))
            return OperationResult.ok(
                SegmentedOutput(
                    outputs=tuple(outputs),
                    commands=tuple(commands),
                    segments=tuple(segments),
                ),
                warnings=warnings + self._batch_warnings(errors, dry_run),
            )

    def convert_to_formats(
        self,
        input_path: Path,
        output_dir: Path,
        formats: Sequence[AudioFormat],
        quality: str | QualityPreset = DEFAULT_QUALITY,
        clip: TimeClip | None = None,
        dry_run: bool = False,
        max_workers: int | None = None,
    ) -> OperationResult[FormatOutputs]:
        """Convert one file to several audio formats concurrently.

        Outputs are named <output_dir>/<base>.<format>. Results are
        reported in the order the formats were given.
        """
        unique_formats = list(dict.fromkeys(formats))
        if not unique_formats:
            return OperationResult.fail("No output formats given")

        base = path_base_name(input_path)
        workers = min(max_workers or self._max_workers, len(unique_formats))

        def convert(audio_format: AudioFormat) -> CompiledCommand:
            # Worker threads do not inherit the caller's context
            with operation_context("convert_to_formats", audio_format.value):
                command = compile_audio_extraction(
                    self._context,
                    AudioExtractionRequest(
                        input_path=input_path,
                        output_path=output_dir / f"{base}.{audio_format.value}",
                        format=audio_format,
                        quality=quality,
                        clip=clip,
                    ),
                )
                if not dry_run:
                    self._execute(command)
                return command

        by_format: dict[str, Path] = {}
        commands: list[str] = []
        errors: list[str] = []

        with operation_context("convert_to_formats"):
            logger.info(
                "Converting %s to %d formats with %d workers",
                input_path,
                len(unique_formats),
                workers,
            )
            with ThreadPoolExecutor(max_workers=workers) as executor:
                futures = [(f, executor.submit(convert, f)) for f in unique_formats]
                for audio_format, future in futures:
                    try:
                        command = future.result()
                    except MediaToolkitError as e:
                        logger.warning(
                            "Format %s failed: %s",
                            audio_format.value,
                            e,
                            extra={"error": e},
                        )
                        errors.append(f"{audio_format.value}: {e}")
                        continue
                    if command.output_path is not None:
                        by_format[audio_format.value] = command.output_path
                    commands.append(command.display)

            if errors and not by_format:
                return OperationResult.fail("\n".join(errors))

            return OperationResult.ok(
                FormatOutputs(
                    outputs=tuple(by_format.values()),
                    commands=tuple(commands),
                    by_format=by_format,
                ),
                warnings=self._batch_warnings(errors, dry_run),
            )
