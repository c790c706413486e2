"""Transcoding to the PCM intermediate representation."""

from __future__ import annotations

from pathlib import Path
import subprocess

from ..errors import TranscodeError
from ..parsing import normalize_optional_string

INTERMEDIATE_CODEC = "pcm_s16le"


class AudioTranscoder:
    """Normalize any supported input to 16-bit PCM WAV at a fixed rate and layout."""

    def __init__(self, ffmpeg_binary: str = "ffmpeg") -> None:
        self._ffmpeg = ffmpeg_binary

    def command(
        self,
        source: Path,
        target: Path,
        *,
        sample_rate: int = 44100,
        channels: int = 2,
    ) -> list[str]:
        """Build the ffmpeg command for one transcode."""

        return [
            self._ffmpeg,
            "-y",
            "-hide_banner",
            "-loglevel",
            "error",
            "-i",
            str(source),
            "-vn",
            "-acodec",
            INTERMEDIATE_CODEC,
            "-ar",
            str(sample_rate),
            "-ac",
            str(channels),
            str(target),
        ]

    def transcode(
        self,
        source: Path,
        target: Path,
        *,
        sample_rate: int = 44100,
        channels: int = 2,
    ) -> Path:
        """Convert `source` into `target`; a partial target is left for cleanup."""

        try:
            subprocess.run(
                self.command(source, target, sample_rate=sample_rate, channels=channels),
                check=True,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError as exc:
            raise TranscodeError(
                f"Transcode tool `{self._ffmpeg}` is not available on PATH.",
                hint="Install ffmpeg and rerun.",
            ) from exc
        except subprocess.CalledProcessError as exc:
            stderr = normalize_optional_string(exc.stderr) or "no stderr output"
            raise TranscodeError(
                f"ffmpeg failed to convert `{source}`: {stderr}",
                hint="Verify the input decodes with your local ffmpeg build.",
            ) from exc
        return target
