"""OpenAI-compatible LLM client.

This wraps the `openai` Python SDK and exposes the single text-generation capability the
drafting layer needs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Protocol, Sequence

from openai import OpenAI

from paperdraft.config import Settings
from paperdraft.logging import get_logger

logger = get_logger(__name__)

Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class ChatMessage:
    """A chat message."""

    role: Role
    content: str


class TextGenerator(Protocol):
    """Anything that turns a prompt into text."""

    def generate_text(
        self,
        prompt: str,
        *,
        system: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str: ...


class LLMClient:
    """LLM client using OpenAI-compatible Chat Completions API."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        if not settings.openai_api_key:
            raise ValueError(
                "Missing PAPERDRAFT_OPENAI_API_KEY. "
                "Set it in environment variables or a .env file."
            )

        self._client = OpenAI(api_key=settings.openai_api_key, base_url=settings.openai_base_url)

    def complete(
        self,
        messages: Sequence[ChatMessage],
        *,
        temperature: float,
        max_tokens: int | None = None,
    ) -> str:
        """Generate a completion.

        Args:
            messages: Chat messages.
            temperature: Sampling temperature.
            max_tokens: Optional completion length limit.

        Returns:
            Assistant message content, or an empty string when the model returned none.
        """

        payload: list[dict[str, str]] = [{"role": m.role, "content": m.content} for m in messages]
        extra: dict[str, Any] = {}
        if max_tokens is not None:
            extra["max_tokens"] = max_tokens
        resp = self._client.chat.completions.create(
            model=self._settings.openai_model,
            messages=payload,
            temperature=temperature,
            timeout=self._settings.openai_timeout_s,
            **extra,
        )
        choice = resp.choices[0]
        if not choice.message or choice.message.content is None:
            logger.warning("Model %s returned an empty message", self._settings.openai_model)
            return ""
        return choice.message.content

    def generate_text(
        self,
        prompt: str,
        *,
        system: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Generate text for a single user prompt."""

        messages: list[ChatMessage] = []
        if system:
            messages.append(ChatMessage(role="system", content=system))
        messages.append(ChatMessage(role="user", content=prompt))
        if temperature is None:
            temperature = self._settings.temperature_default
        return self.complete(messages, temperature=temperature, max_tokens=max_tokens)
