"""Idempotent removal of intermediate artifacts."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path


def remove_intermediates(paths: Iterable[Path]) -> list[Path]:
    """Delete each existing file and return the ones removed; missing paths are skipped."""

    removed: list[Path] = []
    for path in paths:
        if path.is_file():
            path.unlink()
            removed.append(path)
    return removed
