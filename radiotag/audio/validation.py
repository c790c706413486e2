"""Extension-based format validation.

Runs before any external tool invocation; pure and side-effect free.
"""

from __future__ import annotations

from pathlib import Path

from ..errors import UnsupportedFormatError
from ..models.datatypes import AudioFileRef

SUPPORTED_FORMATS = ("mp3", "wav")


def audio_format(path: Path | str) -> str:
    """Return the lowercase extension of `path` without the leading dot."""

    return AudioFileRef.from_path(path).format


def validate_formats(
    main_audio: Path | str,
    radio_tag: Path | str,
    output_path: Path | str,
) -> tuple[AudioFileRef, AudioFileRef, AudioFileRef]:
    """Check main, tag, and output extensions against `SUPPORTED_FORMATS`.

    Returns:
        File references for main, tag, and output in that order.

    Raises:
        UnsupportedFormatError: If any extension is unsupported.
    """

    refs = (
        AudioFileRef.from_path(main_audio),
        AudioFileRef.from_path(radio_tag),
        AudioFileRef.from_path(output_path),
    )
    for ref in refs:
        if ref.format not in SUPPORTED_FORMATS:
            shown = ref.format or "(none)"
            raise UnsupportedFormatError(
                f"Unsupported audio format: {shown} (`{ref.path}`). "
                f"Supported formats are: {', '.join(SUPPORTED_FORMATS)}",
                hint="Convert the file to mp3 or wav, or pick an output path ending in .mp3/.wav.",
            )
    return refs
