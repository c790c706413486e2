"""radiotag pipeline package.

This package contains orchestration, stage telemetry, and the per-run
temporary workspace.
"""

from .orchestrator import RadioTagPipeline
from .workspace import TranscodeWorkspace

__all__ = ["RadioTagPipeline", "TranscodeWorkspace"]
