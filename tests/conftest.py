"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _isolated_dirs(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep log files and settings out of the real home directory."""

    monkeypatch.setenv("CURSORTRIM_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("CURSORTRIM_SETTINGS_PATH", str(tmp_path / "settings.json"))
    for name in ("CURSORTRIM_DEBUG", "CURSORTRIM_DEBUG_LOGGING", "CURSORTRIM_FOLLOW_UP_EDIT",
                 "CURSORTRIM_DEFAULT_DIRECTION", "CURSORTRIM_NEWLINE"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sample_text() -> str:
    return "foo   bar\n\tindented\t\nplain"
