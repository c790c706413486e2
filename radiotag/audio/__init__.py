"""Audio validation, probing, transcoding, concatenation, and cleanup.

Every stage that touches audio data delegates to the external ffmpeg tools.
"""

from .cleanup import remove_intermediates
from .concat import AudioConcatenator, ProgressTracker
from .probe import AudioProber
from .transcode import AudioTranscoder
from .validation import SUPPORTED_FORMATS, audio_format, validate_formats

__all__ = [
    "SUPPORTED_FORMATS",
    "AudioConcatenator",
    "AudioProber",
    "AudioTranscoder",
    "ProgressTracker",
    "audio_format",
    "remove_intermediates",
    "validate_formats",
]
