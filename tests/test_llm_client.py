"""Tests for the OpenAI-compatible client wrapper."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest

from paperdraft.config import Settings
from paperdraft.llm.client import LLMClient


class _FakeCompletions:
    def __init__(self, content: str | None) -> None:
        self.content = content
        self.calls: list[dict[str, Any]] = []

    def create(self, **kwargs: Any) -> SimpleNamespace:
        self.calls.append(kwargs)
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _client(content: str | None) -> tuple[LLMClient, _FakeCompletions]:
    client = LLMClient(Settings(openai_api_key="sk-test", openai_model="gpt-test"))
    completions = _FakeCompletions(content)
    client._client = SimpleNamespace(chat=SimpleNamespace(completions=completions))  # type: ignore[assignment]
    return client, completions


def test_missing_api_key() -> None:
    with pytest.raises(ValueError):
        LLMClient(Settings(openai_api_key=None))


def test_generate_text_builds_messages() -> None:
    client, completions = _client("Drafted [CITE: x].")

    text = client.generate_text("Write it", system="Be academic", max_tokens=50)

    assert text == "Drafted [CITE: x]."
    call = completions.calls[0]
    assert call["model"] == "gpt-test"
    assert call["messages"] == [
        {"role": "system", "content": "Be academic"},
        {"role": "user", "content": "Write it"},
    ]
    assert call["temperature"] == 0.7
    assert call["max_tokens"] == 50


def test_generate_text_empty_message() -> None:
    client, completions = _client(None)

    assert client.generate_text("Write it") == ""
    assert "max_tokens" not in completions.calls[0]
    assert completions.calls[0]["messages"] == [{"role": "user", "content": "Write it"}]
