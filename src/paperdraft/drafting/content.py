"""Plain-text views of a paper."""

from __future__ import annotations

from paperdraft.models.document import PaperDocument
from paperdraft.prompts import NO_CONTENT_AVAILABLE
from paperdraft.utils.citations import strip_markers


def full_content(doc: PaperDocument) -> str:
    """Title, authors and every drafted section, as one text."""

    body = "\n\n".join(f"{s.title}\n\n{s.body}" for s in doc.sections if s.body)
    return f"Title: {doc.title}\n\nAuthors: {doc.authors}\n\n{body}"


def context_for_generation(doc: PaperDocument) -> str:
    """Drafted sections other than the abstract, used as context for abstracts and titles."""

    text = "\n\n".join(
        f"{s.title}\n\n{s.body}"
        for s in doc.sections
        if s.body and s.title.strip().lower() != "abstract"
    )
    return text or NO_CONTENT_AVAILABLE


def preview_text(doc: PaperDocument) -> str:
    """Reading preview with citation markers removed."""

    return strip_markers(full_content(doc))
