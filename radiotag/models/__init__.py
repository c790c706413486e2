"""Typed records shared by radiotag modules."""

from .datatypes import AudioFileRef, PipelineState, Playlist, ProbeResult, RunResult

__all__ = ["AudioFileRef", "PipelineState", "Playlist", "ProbeResult", "RunResult"]
