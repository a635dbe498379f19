"""Global pytest fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from src.config import Settings

SETTINGS_ENV_KEYS = [name.upper() for name in Settings.model_fields]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the runner's own environment (PORT, DATABASE_URL, ...) out of tests."""
    for key in SETTINGS_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def env_file(tmp_path: Path) -> Callable[[str], Path]:
    """Write an ``env`` file with the given contents and return its path."""

    def write(contents: str) -> Path:
        path = tmp_path / "env"
        path.write_text(contents, encoding="utf-8")
        return path

    return write


@pytest.fixture
def missing_env_file(tmp_path: Path) -> Path:
    return tmp_path / "does-not-exist" / "env"


@pytest.fixture
def sqlite_url(tmp_path: Path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'app.db'}"
