"""Drafting workflow: editing, generation and plain-text views of a paper."""

from __future__ import annotations

from paperdraft.drafting.editor import (
    DEFAULT_STRUCTURE,
    DocumentEditor,
    SectionNotFoundError,
    VersionNotFoundError,
)
from paperdraft.drafting.generator import GenerationError, SectionGenerator

__all__ = [
    "DEFAULT_STRUCTURE",
    "DocumentEditor",
    "GenerationError",
    "SectionGenerator",
    "SectionNotFoundError",
    "VersionNotFoundError",
]
