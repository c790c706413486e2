"""Shared helpers for writing synthetic WAV fixtures."""

from __future__ import annotations

from array import array
import math
from pathlib import Path
import shutil
import wave

import pytest


def write_tone_wav(
    path: Path,
    *,
    duration_seconds: float,
    sample_rate: int = 44100,
    channels: int = 2,
    frequency_hz: float = 440.0,
) -> Path:
    """Write a 16-bit PCM sine tone of the requested duration and layout."""

    frame_count = int(round(duration_seconds * sample_rate))
    samples = array("h")
    for index in range(frame_count):
        value = int(12000 * math.sin(2 * math.pi * frequency_hz * index / sample_rate))
        samples.extend([value] * channels)
    path.parent.mkdir(parents=True, exist_ok=True)
    with wave.open(str(path), "wb") as wav_file:
        wav_file.setnchannels(channels)
        wav_file.setsampwidth(2)
        wav_file.setframerate(sample_rate)
        wav_file.writeframes(samples.tobytes())
    return path


requires_ffmpeg = pytest.mark.skipif(
    shutil.which("ffmpeg") is None or shutil.which("ffprobe") is None,
    reason="ffmpeg and ffprobe must be on PATH",
)
