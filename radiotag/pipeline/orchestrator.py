"""Pipeline orchestration for radiotag.

Responsibilities:
- Run validate -> probe -> transcode -> concatenate for one invocation.
- Track the run state and always clean up intermediates once transcoding starts.

Key types:
- `RadioTagPipeline`: orchestration facade.
"""

from __future__ import annotations

from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor

from ..audio.concat import AudioConcatenator, ProgressCallback
from ..audio.probe import AudioProber
from ..audio.transcode import AudioTranscoder
from ..audio.validation import validate_formats
from ..config import RadioTagConfig
from ..errors import InputFileNotFoundError, PipelineStageError
from ..models.datatypes import AudioFileRef, PipelineState, Playlist, ProbeResult, RunResult
from ..runtime_tools import resolve_media_tools
from ..telemetry.logger import RunLogger
from .telemetry import PipelineTelemetryMixin
from .workspace import TranscodeWorkspace


class RadioTagPipeline(PipelineTelemetryMixin):
    """Place a radio tag before and after a main audio file."""

    def __init__(
        self,
        run_logger: RunLogger | None = None,
        stage_progress_callback: Callable[[str, int, int], None] | None = None,
        concat_progress_callback: ProgressCallback | None = None,
        *,
        prober: AudioProber | None = None,
        transcoder: AudioTranscoder | None = None,
        concatenator: AudioConcatenator | None = None,
    ) -> None:
        """Initialize optional logging/progress hooks and stage collaborators.

        Collaborators left as `None` are built from the run config.
        """

        self._run_logger = run_logger
        self._stage_progress_callback = stage_progress_callback
        self._concat_progress_callback = concat_progress_callback
        self._prober = prober
        self._transcoder = transcoder
        self._concatenator = concatenator
        self.state = PipelineState.IDLE

    def run(self, config: RadioTagConfig) -> RunResult:
        """Execute one full run and return the written output description."""

        try:
            result = self._execute(config)
        except Exception:
            self.state = PipelineState.FAILED
            raise
        self.state = PipelineState.DONE
        return result

    def _execute(self, config: RadioTagConfig) -> RunResult:
        self.state = PipelineState.VALIDATING
        main_ref, tag_ref, output_ref = self._run_stage(
            "validate", lambda: self._validate(config)
        )
        prober, transcoder, concatenator = self._collaborators(config)

        self.state = PipelineState.PROBING
        main_probe, tag_probe = self._run_stage(
            "probe",
            lambda: (
                prober.probe(main_ref.path, role="main"),
                prober.probe(tag_ref.path, role="tag"),
            ),
        )

        expected_duration = _expected_duration(main_probe, tag_probe)
        workspace = TranscodeWorkspace(config.work_dir)
        try:
            self.state = PipelineState.TRANSCODING
            self._run_stage(
                "transcode",
                lambda: self._transcode(config, transcoder, main_ref, tag_ref, workspace),
            )

            self.state = PipelineState.CONCATENATING
            playlist = Playlist.bracketed(
                tag=AudioFileRef.from_path(workspace.tag_wav),
                main=AudioFileRef.from_path(workspace.main_wav),
            )
            self._run_stage(
                "concatenate",
                lambda: concatenator.concatenate(
                    playlist,
                    output_ref.path,
                    manifest_path=workspace.manifest,
                    expected_duration_seconds=expected_duration,
                    progress_callback=self._concat_progress_callback,
                ),
            )
        except Exception:
            self._cleanup(workspace, run_failed=True)
            raise
        self._cleanup(workspace, run_failed=False)

        return RunResult(
            output_path=output_ref.path,
            output_format=output_ref.format,
            expected_duration_seconds=expected_duration,
            main_probe=main_probe,
            tag_probe=tag_probe,
        )

    def _cleanup(self, workspace: TranscodeWorkspace, *, run_failed: bool) -> None:
        """Remove intermediates; a cleanup error never hides an earlier stage error."""

        try:
            removed = self._run_stage("cleanup", workspace.cleanup)
        except OSError as exc:
            if self._run_logger is not None:
                self._run_logger.log_cleanup_failure(type(exc).__name__)
            if run_failed:
                return
            raise PipelineStageError(
                stage="cleanup",
                detail=f"Failed to remove intermediate files in `{workspace.root}`: {exc}",
                hint="Check permissions on the work directory and remove it manually.",
            ) from exc
        if self._run_logger is not None:
            self._run_logger.log_cleanup(len(removed))

    def _validate(
        self, config: RadioTagConfig
    ) -> tuple[AudioFileRef, AudioFileRef, AudioFileRef]:
        """Check settings, formats, and input presence before any tool call."""

        config.validate()
        refs = validate_formats(config.main_audio, config.radio_tag, config.output_path)
        for ref in refs[:2]:
            if not ref.path.is_file():
                raise InputFileNotFoundError(
                    f"File not found: `{ref.path}`.",
                    hint="Check MAIN_AUDIO_PATH and RADIO_TAG_PATH.",
                )
        return refs

    def _collaborators(
        self, config: RadioTagConfig
    ) -> tuple[AudioProber, AudioTranscoder, AudioConcatenator]:
        """Return injected stage collaborators or build them from config."""

        tools = resolve_media_tools(config.ffmpeg_binary, config.ffprobe_binary)
        if self._run_logger is not None:
            self._run_logger.log_tool_resolution("ffmpeg", tools.ffmpeg)
            self._run_logger.log_tool_resolution("ffprobe", tools.ffprobe)
        prober = self._prober or AudioProber(tools.ffprobe)
        transcoder = self._transcoder or AudioTranscoder(tools.ffmpeg)
        concatenator = self._concatenator or AudioConcatenator(
            tools.ffmpeg,
            mp3_quality=config.mp3_quality,
            sample_rate=config.sample_rate,
            channels=config.channels,
        )
        return prober, transcoder, concatenator

    def _transcode(
        self,
        config: RadioTagConfig,
        transcoder: AudioTranscoder,
        main_ref: AudioFileRef,
        tag_ref: AudioFileRef,
        workspace: TranscodeWorkspace,
    ) -> None:
        """Convert main and tag to the shared intermediate representation."""

        jobs = (
            (main_ref.path, workspace.main_wav),
            (tag_ref.path, workspace.tag_wav),
        )
        if not config.parallel_transcode:
            for source, target in jobs:
                transcoder.transcode(
                    source,
                    target,
                    sample_rate=config.sample_rate,
                    channels=config.channels,
                )
            return

        with ThreadPoolExecutor(max_workers=2) as executor:
            futures = [
                executor.submit(
                    transcoder.transcode,
                    source,
                    target,
                    sample_rate=config.sample_rate,
                    channels=config.channels,
                )
                for source, target in jobs
            ]
            for future in futures:
                future.result()


def _expected_duration(main_probe: ProbeResult, tag_probe: ProbeResult) -> float | None:
    """Return main + 2 * tag duration, or `None` when either is unknown."""

    if main_probe.duration_seconds is None or tag_probe.duration_seconds is None:
        return None
    return main_probe.duration_seconds + 2 * tag_probe.duration_seconds
