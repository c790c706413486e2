"""Audio metadata probing through `ffprobe`.

Responsibilities:
- Query stream and container metadata as JSON.
- Reject files without an audio stream.
"""

from __future__ import annotations

import json
from pathlib import Path
import subprocess
from typing import Any

from ..errors import ProbeError
from ..models.datatypes import ProbeResult
from ..parsing import normalize_optional_string


class AudioProber:
    """Read-only metadata inspection via the external `ffprobe` binary."""

    def __init__(self, ffprobe_binary: str = "ffprobe") -> None:
        self._ffprobe = ffprobe_binary

    def probe(self, path: Path, role: str = "input") -> ProbeResult:
        """Probe `path` and return metadata for its first audio stream.

        Raises:
            ProbeError: If ffprobe is missing, fails, emits invalid JSON, or the
                file holds no audio stream.
        """

        command = [
            self._ffprobe,
            "-v",
            "error",
            "-print_format",
            "json",
            "-show_streams",
            "-show_format",
            str(path),
        ]
        try:
            completed = subprocess.run(
                command,
                check=True,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError as exc:
            raise ProbeError(
                f"Probe tool `{self._ffprobe}` is not available on PATH.",
                hint="Install ffmpeg (which ships ffprobe) and rerun.",
            ) from exc
        except subprocess.CalledProcessError as exc:
            stderr = normalize_optional_string(exc.stderr) or "no stderr output"
            raise ProbeError(
                f"Error analyzing {role} audio file `{path}`: {stderr}",
                hint="Verify the file is a readable audio file.",
            ) from exc

        try:
            payload = json.loads(completed.stdout or "{}")
        except json.JSONDecodeError as exc:
            raise ProbeError(
                f"ffprobe returned unreadable metadata for {role} audio file `{path}`."
            ) from exc

        return self._parse_payload(path, role, payload)

    def _parse_payload(self, path: Path, role: str, payload: Any) -> ProbeResult:
        """Build a probe result from ffprobe JSON output."""

        streams = payload.get("streams", []) if isinstance(payload, dict) else []
        audio_stream = next(
            (
                stream
                for stream in streams
                if isinstance(stream, dict) and stream.get("codec_type") == "audio"
            ),
            None,
        )
        if audio_stream is None:
            raise ProbeError(
                f"No audio stream found in {role} file `{path}`.",
                hint="Provide a file that contains an audio track.",
            )

        container = payload.get("format", {}) if isinstance(payload, dict) else {}
        duration = _optional_float(container.get("duration"))
        if duration is None:
            duration = _optional_float(audio_stream.get("duration"))

        return ProbeResult(
            path=path,
            has_audio=True,
            codec_name=normalize_optional_string(audio_stream.get("codec_name")),
            sample_rate=_optional_int(audio_stream.get("sample_rate")),
            channels=_optional_int(audio_stream.get("channels")),
            duration_seconds=duration,
        )


def _optional_float(value: object) -> float | None:
    try:
        return float(value) if value is not None else None
    except (TypeError, ValueError):
        return None


def _optional_int(value: object) -> int | None:
    try:
        return int(value) if value is not None else None
    except (TypeError, ValueError):
        return None
