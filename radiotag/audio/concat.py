"""Final concatenation stage built on the ffmpeg concat demuxer.

Responsibilities:
- Write the ordered concat manifest for a playlist.
- Select encoder settings for the output format.
- Stream ffmpeg `-progress` output into percentage callbacks.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path
import subprocess
import tempfile

from ..errors import ConcatenationError, UnsupportedFormatError
from ..models.datatypes import Playlist
from ..parsing import normalize_optional_string

ProgressCallback = Callable[[int], None]


class ProgressTracker:
    """Convert ffmpeg `-progress` key/value lines into whole percentages."""

    def __init__(self, expected_duration_seconds: float | None) -> None:
        if expected_duration_seconds is not None and expected_duration_seconds > 0:
            self._expected_us: float | None = expected_duration_seconds * 1_000_000
        else:
            self._expected_us = None
        self._last_percent: int | None = None

    def feed(self, line: str) -> int | None:
        """Return a new percentage for `line`, or `None` when nothing changed."""

        key, _, value = line.strip().partition("=")
        if key == "progress" and value == "end":
            return self._emit(100)
        if key not in {"out_time_us", "out_time_ms"} or self._expected_us is None:
            return None
        # ffmpeg reports both keys in microseconds.
        try:
            elapsed_us = int(value)
        except ValueError:
            return None
        percent = round(elapsed_us / self._expected_us * 100)
        return self._emit(min(100, max(0, percent)))

    def _emit(self, percent: int) -> int | None:
        if percent == self._last_percent:
            return None
        self._last_percent = percent
        return percent


class AudioConcatenator:
    """Stitch intermediate WAV files and encode the final output."""

    def __init__(
        self,
        ffmpeg_binary: str = "ffmpeg",
        *,
        mp3_quality: int = 0,
        sample_rate: int = 44100,
        channels: int = 2,
    ) -> None:
        self._ffmpeg = ffmpeg_binary
        self._mp3_quality = mp3_quality
        self._sample_rate = sample_rate
        self._channels = channels

    def write_manifest(self, playlist: Playlist, manifest_path: Path) -> Path:
        """Write the concat list, one `file '<path>'` line per playlist entry."""

        manifest_path.parent.mkdir(parents=True, exist_ok=True)
        manifest_path.write_text("\n".join(playlist.manifest_lines()) + "\n", encoding="utf-8")
        return manifest_path

    def encoding_options(self, output_format: str) -> list[str]:
        """Return encoder arguments for one output format."""

        layout = ["-ar", str(self._sample_rate), "-ac", str(self._channels)]
        if output_format == "wav":
            return ["-acodec", "pcm_s16le", *layout]
        if output_format == "mp3":
            return ["-acodec", "libmp3lame", "-q:a", str(self._mp3_quality), *layout]
        raise UnsupportedFormatError(
            f"Unsupported output format `{output_format}`.",
            hint="Use an output path ending in .mp3 or .wav.",
        )

    def command(self, manifest_path: Path, output_path: Path, output_format: str) -> list[str]:
        """Build the ffmpeg concat command."""

        return [
            self._ffmpeg,
            "-y",
            "-hide_banner",
            "-loglevel",
            "error",
            "-nostats",
            "-progress",
            "pipe:1",
            "-f",
            "concat",
            "-safe",
            "0",
            "-i",
            str(manifest_path),
            "-vn",
            *self.encoding_options(output_format),
            str(output_path),
        ]

    def concatenate(
        self,
        playlist: Playlist,
        output_path: Path,
        *,
        manifest_path: Path,
        expected_duration_seconds: float | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> Path:
        """Concatenate playlist entries in order into `output_path`.

        Raises:
            ConcatenationError: If ffmpeg is missing or exits non-zero.
        """

        output_format = output_path.suffix.lower().lstrip(".")
        command = self.command(manifest_path, output_path, output_format)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        self.write_manifest(playlist, manifest_path)

        tracker = ProgressTracker(expected_duration_seconds)
        with tempfile.TemporaryFile(mode="w+", encoding="utf-8") as stderr_buffer:
            try:
                process = subprocess.Popen(
                    command,
                    stdout=subprocess.PIPE,
                    stderr=stderr_buffer,
                    text=True,
                )
            except FileNotFoundError as exc:
                raise ConcatenationError(
                    f"Concatenation tool `{self._ffmpeg}` is not available on PATH.",
                    hint="Install ffmpeg and rerun.",
                ) from exc

            with process:
                self._relay_progress(process.stdout or (), tracker, progress_callback)
                returncode = process.wait()

            if returncode != 0:
                stderr_buffer.seek(0)
                stderr = normalize_optional_string(stderr_buffer.read()) or "no stderr output"
                raise ConcatenationError(
                    f"ffmpeg concatenation failed for `{output_path}` "
                    f"(exit code {returncode}): {stderr}",
                    hint="Verify local ffmpeg codec support (`libmp3lame` for mp3 output).",
                )

        return output_path

    def _relay_progress(
        self,
        lines: Iterable[str],
        tracker: ProgressTracker,
        progress_callback: ProgressCallback | None,
    ) -> None:
        for line in lines:
            percent = tracker.feed(line)
            if percent is not None and progress_callback is not None:
                progress_callback(percent)
