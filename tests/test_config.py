from __future__ import annotations

import os
from pathlib import Path

import pytest

from weekly_scheduler.config import (
    DEFAULT_SCHEDULE_FILE,
    SCHEDULE_FILE_ENV,
    ConfigError,
    load_env_file,
    resolve_schedule_file,
)


def test_load_env_file_sets_missing_values(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(f"{SCHEDULE_FILE_ENV}=/tmp/week.json\n# comment\nBAZ = 123\n", encoding="utf-8")

    # registers the variable with monkeypatch so the value set by the loader is undone
    monkeypatch.setenv(SCHEDULE_FILE_ENV, "placeholder")
    monkeypatch.delenv(SCHEDULE_FILE_ENV)
    monkeypatch.setenv("BAZ", "keep")

    load_env_file(env_file)

    assert os.environ[SCHEDULE_FILE_ENV] == "/tmp/week.json"
    assert os.environ["BAZ"] == "keep"


def test_load_env_file_is_noop_when_missing(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    missing = tmp_path / "missing.env"
    monkeypatch.delenv("FOO", raising=False)

    load_env_file(missing)

    assert "FOO" not in os.environ


def test_invalid_line_raises(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("INVALID", encoding="utf-8")

    with pytest.raises(ConfigError, match="Invalid line"):
        load_env_file(env_file)


def test_resolve_schedule_file_precedence(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(SCHEDULE_FILE_ENV, raising=False)
    assert resolve_schedule_file() == DEFAULT_SCHEDULE_FILE

    monkeypatch.setenv(SCHEDULE_FILE_ENV, str(tmp_path / "env.json"))
    assert resolve_schedule_file() == tmp_path / "env.json"

    assert resolve_schedule_file(tmp_path / "cli.json") == tmp_path / "cli.json"
