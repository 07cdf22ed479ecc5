"""Pydantic models used across the project."""

from __future__ import annotations

from paperdraft.models.citation import LibraryCitation
from paperdraft.models.document import ContentVersion, Figure, PaperDocument, TextBlock
from paperdraft.models.references import ReferenceEntry

__all__ = [
    "ContentVersion",
    "Figure",
    "LibraryCitation",
    "PaperDocument",
    "ReferenceEntry",
    "TextBlock",
]
