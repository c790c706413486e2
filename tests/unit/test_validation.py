"""Unit tests for extension-based format validation."""

from __future__ import annotations

from pathlib import Path

import pytest

from radiotag.audio.validation import SUPPORTED_FORMATS, audio_format, validate_formats
from radiotag.errors import UnsupportedFormatError


def test_audio_format_is_lowercase_extension_without_dot() -> None:
    """Extension casing should not affect the derived format tag."""

    assert audio_format("Voice.WAV") == "wav"
    assert audio_format(Path("dir.d/jingle.Mp3")) == "mp3"
    assert audio_format("no_extension") == ""


def test_validate_formats_returns_refs_in_main_tag_output_order() -> None:
    """Supported inputs should yield file references in call order."""

    main_ref, tag_ref, output_ref = validate_formats("voice.wav", "jingle.mp3", "out/final.MP3")

    assert main_ref.path == Path("voice.wav")
    assert tag_ref.format == "mp3"
    assert output_ref.format == "mp3"
    assert SUPPORTED_FORMATS == ("mp3", "wav")


@pytest.mark.parametrize(
    ("main", "tag", "output", "offender"),
    [
        ("voice.flac", "jingle.wav", "final.mp3", "flac"),
        ("voice.wav", "jingle.ogg", "final.mp3", "ogg"),
        ("voice.wav", "jingle.wav", "final.m4a", "m4a"),
        ("voice", "jingle.wav", "final.mp3", "(none)"),
    ],
)
def test_validate_formats_rejects_unsupported_extensions(
    main: str, tag: str, output: str, offender: str
) -> None:
    """Any unsupported extension should fail with a descriptive message."""

    with pytest.raises(UnsupportedFormatError) as exc_info:
        validate_formats(main, tag, output)

    assert exc_info.value.stage == "validate"
    assert f"Unsupported audio format: {offender}" in exc_info.value.detail
    assert "Supported formats are: mp3, wav" in exc_info.value.detail
