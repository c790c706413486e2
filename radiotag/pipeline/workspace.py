"""Per-run temporary workspace for intermediate artifacts.

Each run gets its own directory so concurrent invocations never share
intermediate file names.
"""

from __future__ import annotations

from pathlib import Path
import tempfile

from ..audio.cleanup import remove_intermediates


class TranscodeWorkspace:
    """Unique directory holding transcoded temporaries and the concat manifest."""

    def __init__(self, parent: Path | None = None) -> None:
        if parent is not None:
            parent.mkdir(parents=True, exist_ok=True)
        self.root = Path(
            tempfile.mkdtemp(prefix="radiotag-", dir=str(parent) if parent is not None else None)
        )
        self.main_wav = self.root / "temp_main.wav"
        self.tag_wav = self.root / "temp_tag.wav"
        self.manifest = self.root / "temp_list.txt"

    @property
    def intermediate_paths(self) -> tuple[Path, Path, Path]:
        return (self.manifest, self.main_wav, self.tag_wav)

    def cleanup(self) -> list[Path]:
        """Remove intermediates and the workspace directory; safe to call twice."""

        removed = remove_intermediates(self.intermediate_paths)
        if self.root.is_dir() and not any(self.root.iterdir()):
            self.root.rmdir()
        return removed
