"""External media tool resolution helpers.

Responsibilities:
- Resolve `ffmpeg`/`ffprobe` paths with bundled-first precedence.
- Support frozen app layouts (for example PyInstaller) and local development runs.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import shutil
import sys


@dataclass(frozen=True, slots=True)
class MediaTools:
    """Resolved executables for the external media collaborator."""

    ffmpeg: str
    ffprobe: str


def resolve_media_tools(ffmpeg_name: str = "ffmpeg", ffprobe_name: str = "ffprobe") -> MediaTools:
    """Resolve both media executables configured for a run."""

    return MediaTools(
        ffmpeg=resolve_executable(ffmpeg_name),
        ffprobe=resolve_executable(ffprobe_name),
    )


def resolve_executable(command_name: str) -> str:
    """Resolve an executable with bundled-first precedence, then PATH.

    Resolution order:
    1. Explicit filesystem path when the name already points to a file.
    2. Bundled app directories (`./bin/<tool>` then `./<tool>` from app root).
    3. System `PATH`.
    4. Raw command name (allowing subprocess to raise a native missing-binary error).
    """

    normalized = command_name.strip()
    if not normalized:
        return command_name

    explicit = Path(normalized)
    if explicit.parent != Path(".") and explicit.is_file():
        return str(explicit)

    for candidate in _bundled_candidates(normalized):
        if candidate.is_file():
            return str(candidate)

    resolved_path = shutil.which(normalized)
    if resolved_path is not None:
        return resolved_path

    return normalized


def _bundled_candidates(command_name: str) -> list[Path]:
    """Return bundled candidate paths for one executable name."""

    app_root = _app_root()
    candidates: list[Path] = []
    for name in _candidate_names(command_name):
        candidates.append(app_root / "bin" / name)
        candidates.append(app_root / name)
    return candidates


def _candidate_names(command_name: str) -> tuple[str, ...]:
    """Return command name variants including Windows `.exe` fallback."""

    if command_name.lower().endswith(".exe"):
        return (command_name,)
    return (command_name, f"{command_name}.exe")


def _app_root() -> Path:
    """Resolve runtime application root for frozen and non-frozen execution."""

    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    return Path(__file__).resolve().parents[1]
