"""Shared pytest fixtures for the full radiotag test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from radiotag.config import ConfigLoader

_ENV_KEYS = tuple(ConfigLoader.ENV_KEYS.values())


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Clear radiotag environment variables and run from an empty directory."""

    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
