"""Tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from paperdraft.config import Settings, load_settings


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PAPERDRAFT_STALE_REFERENCES_POLICY", "remove")
    monkeypatch.setenv("PAPERDRAFT_OPENAI_MODEL", "gpt-test")

    settings = Settings()

    assert settings.stale_references_policy == "remove"
    assert settings.openai_model == "gpt-test"


def test_settings_reject_unknown_policy(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PAPERDRAFT_STALE_REFERENCES_POLICY", "archive")
    with pytest.raises(ValidationError):
        Settings()


def test_load_settings_env_file_override(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    env = tmp_path / "custom.env"
    env.write_text("PAPERDRAFT_LOG_LEVEL=DEBUG\nPAPERDRAFT_GENERATION_CONCURRENCY=5\n", encoding="utf-8")
    monkeypatch.setenv("PAPERDRAFT_ENV_FILE", str(env))

    settings = load_settings()

    assert settings.log_level == "DEBUG"
    assert settings.generation_concurrency == 5


def test_load_settings_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("PAPERDRAFT_ENV_FILE", raising=False)
    monkeypatch.delenv("PAPERDRAFT_STALE_REFERENCES_POLICY", raising=False)

    settings = load_settings()

    assert settings.stale_references_policy == "keep"
    assert settings.openai_model == "gpt-4.1-2025-04-14"
