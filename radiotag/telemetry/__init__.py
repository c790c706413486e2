"""Run logging for pipeline observability."""

from .logger import RunLogger

__all__ = ["RunLogger"]
