"""Core datatypes shared across radiotag modules.

Responsibilities:
- Represent transient records exchanged between pipeline stages.
- Keep all run state in memory for the duration of one invocation.

Key types:
- `AudioFileRef`, `ProbeResult`, `Playlist`, `PipelineState`, and `RunResult`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


@dataclass(frozen=True, slots=True)
class AudioFileRef:
    """A filesystem path plus its extension-derived format tag.

    Attributes:
        path: Path to the audio file.
        format: Lowercase extension without the leading dot (empty when absent).
    """

    path: Path
    format: str

    @classmethod
    def from_path(cls, path: Path | str) -> AudioFileRef:
        """Build a reference deriving the format from the file extension."""

        resolved = Path(path)
        return cls(path=resolved, format=resolved.suffix.lower().lstrip("."))


@dataclass(frozen=True, slots=True)
class ProbeResult:
    """Audio stream metadata reported by the probe stage.

    Attributes:
        path: Probed file path.
        has_audio: Whether at least one audio stream is present.
        codec_name: Codec of the first audio stream.
        sample_rate: Sample rate in Hz of the first audio stream.
        channels: Channel count of the first audio stream.
        duration_seconds: Container (or stream) duration in seconds.
    """

    path: Path
    has_audio: bool
    codec_name: str | None = None
    sample_rate: int | None = None
    channels: int | None = None
    duration_seconds: float | None = None


@dataclass(frozen=True, slots=True)
class Playlist:
    """Ordered concat entries consumed by the concatenation stage."""

    entries: tuple[AudioFileRef, ...]

    @classmethod
    def bracketed(cls, tag: AudioFileRef, main: AudioFileRef) -> Playlist:
        """Place the tag before and after the main segment."""

        return cls(entries=(tag, main, tag))

    def manifest_lines(self) -> list[str]:
        """Render ffmpeg concat-demuxer `file '<path>'` lines."""

        return [
            f"file '{escape_concat_path(entry.path.resolve())}'" for entry in self.entries
        ]


class PipelineState(str, Enum):
    """Lifecycle states of a single pipeline run."""

    IDLE = "idle"
    VALIDATING = "validating"
    PROBING = "probing"
    TRANSCODING = "transcoding"
    CONCATENATING = "concatenating"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class RunResult:
    """Outcome of one successful run.

    Attributes:
        output_path: Written output file.
        output_format: Output format tag (`mp3` or `wav`).
        expected_duration_seconds: Main duration plus twice the tag duration,
            `None` when a probe reported no duration.
        main_probe: Probe metadata for the main file.
        tag_probe: Probe metadata for the tag file.
    """

    output_path: Path
    output_format: str
    expected_duration_seconds: float | None
    main_probe: ProbeResult
    tag_probe: ProbeResult


def escape_concat_path(path: Path) -> str:
    """Escape one file path for ffmpeg concat list format."""

    return str(path).replace("'", "'\\''")
