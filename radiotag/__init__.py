"""Top-level package for radiotag.

This package wraps a main audio file with a radio tag (station identifier)
at its start and end, delegating all audio work to ffmpeg. The main
orchestration entry point is `RadioTagPipeline`.
"""

from .pipeline import RadioTagPipeline

__all__ = ["RadioTagPipeline", "__version__"]

__version__ = "0.1.0"
