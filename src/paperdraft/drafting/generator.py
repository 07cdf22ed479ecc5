"""Section drafting on top of a text generator."""

from __future__ import annotations

from paperdraft.config import Settings
from paperdraft.drafting.content import context_for_generation
from paperdraft.llm.client import TextGenerator
from paperdraft.logging import get_logger
from paperdraft.models.document import Figure, PaperDocument, TextBlock
from paperdraft.prompts import (
    ABSTRACT_SYSTEM_PROMPT,
    CAPTION_SYSTEM_PROMPT,
    REWRITE_SYSTEM_PROMPT,
    SECTION_SYSTEM_PROMPT,
    TITLE_SYSTEM_PROMPT,
    build_abstract_prompt,
    build_caption_prompt,
    build_rewrite_prompt,
    build_section_prompt,
    build_title_prompt,
)

logger = get_logger(__name__)


class GenerationError(RuntimeError):
    """Raised when the text generator fails to produce content."""


def _abstract_text(doc: PaperDocument) -> str:
    block = doc.abstract()
    if block is None:
        return ""
    return block.body or ""


class SectionGenerator:
    """Build prompts for a paper and call the text generator."""

    def __init__(self, llm: TextGenerator, settings: Settings) -> None:
        self._llm = llm
        self._settings = settings

    def _call(self, prompt: str, *, system: str, temperature: float, max_tokens: int) -> str:
        try:
            return self._llm.generate_text(
                prompt, system=system, temperature=temperature, max_tokens=max_tokens
            )
        except Exception as exc:
            raise GenerationError(str(exc)) from exc

    def draft_section(self, doc: PaperDocument, section: TextBlock) -> str:
        """Draft the body of ``section``.

        The abstract is written from the rest of the paper; other sections get the abstract
        as context.
        """

        if section.title.strip().lower() == "abstract":
            prompt = build_abstract_prompt(doc.title, context_for_generation(doc))
            return self._call(
                prompt,
                system=ABSTRACT_SYSTEM_PROMPT,
                temperature=self._settings.temperature_default,
                max_tokens=self._settings.max_tokens_abstract,
            )

        prompt = build_section_prompt(section, doc.title, _abstract_text(doc))
        logger.debug("Section prompt for %s: %d chars", section.id, len(prompt))
        return self._call(
            prompt,
            system=SECTION_SYSTEM_PROMPT,
            temperature=self._settings.temperature_default,
            max_tokens=self._settings.max_tokens_section,
        )

    def caption(self, doc: PaperDocument, section: TextBlock, figure: Figure) -> str:
        prompt = build_caption_prompt(
            figure.description, section.title, doc.title, _abstract_text(doc)
        )
        return self._call(
            prompt,
            system=CAPTION_SYSTEM_PROMPT,
            temperature=self._settings.temperature_default,
            max_tokens=self._settings.max_tokens_caption,
        )

    def rewrite(
        self,
        doc: PaperDocument,
        section: TextBlock,
        selected_text: str,
        instructions: str | None = None,
    ) -> str:
        """Rewrite a passage; an empty model reply keeps the original passage."""

        prompt = build_rewrite_prompt(
            selected_text, section.title, doc.title, _abstract_text(doc), instructions
        )
        text = self._call(
            prompt,
            system=REWRITE_SYSTEM_PROMPT,
            temperature=self._settings.temperature_default,
            max_tokens=self._settings.max_tokens_rewrite,
        )
        return text or selected_text

    def suggest_titles(self, doc: PaperDocument) -> list[str]:
        """Return up to five alternative titles."""

        context = _abstract_text(doc) or context_for_generation(doc)
        text = self._call(
            build_title_prompt(doc.title, context),
            system=TITLE_SYSTEM_PROMPT,
            temperature=self._settings.temperature_title_suggestion,
            max_tokens=self._settings.max_tokens_title_suggestion,
        )
        return [line.strip() for line in text.splitlines() if line.strip()][:5]
