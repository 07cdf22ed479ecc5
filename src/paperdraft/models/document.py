"""Paper document models.

A paper is an ordered collection of :class:`TextBlock` sections. Blocks are immutable; every
edit produces a new block via ``model_copy`` and the collection is replaced wholesale.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from paperdraft.models.citation import LibraryCitation
from paperdraft.utils.ids import new_id, new_section_id

BlockKind = Literal["standard", "references"]
VersionSource = Literal["initial", "manual", "generated", "rewrite", "revert"]

REFERENCES_TITLE = "References"


def title_suggests_references(title: str) -> bool:
    """Return True when a display title names a references section."""

    return "reference" in title.lower()


class Figure(BaseModel):
    """A figure attached to a section."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: new_id("figure"))
    description: str = ""
    caption: str | None = None


class ContentVersion(BaseModel):
    """A saved body of a section."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: new_id("version"))
    body: str
    saved_at: datetime = Field(default_factory=datetime.utcnow)
    source: VersionSource
    description: str = ""


class TextBlock(BaseModel):
    """One section of the paper."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_section_id)
    title: str
    body: str | None = None
    kind: BlockKind = "standard"

    description: str = ""
    bullet_points: list[str] = Field(default_factory=list)
    figures: list[Figure] = Field(default_factory=list)
    min_word_count: int | None = Field(default=None, ge=1)
    versions: list[ContentVersion] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _infer_kind(cls, data: Any) -> Any:
        # Records saved before blocks were tagged only carry a title.
        if isinstance(data, dict) and "kind" not in data:
            title = data.get("title")
            if isinstance(title, str) and title_suggests_references(title):
                return {**data, "kind": "references"}
        return data

    @property
    def is_references(self) -> bool:
        return self.kind == "references"

    @property
    def has_body(self) -> bool:
        return bool(self.body)


class PaperDocument(BaseModel):
    """A paper being drafted."""

    id: str = Field(default_factory=lambda: new_id("paper"))
    title: str = ""
    authors: str = ""
    sections: list[TextBlock] = Field(default_factory=list)
    citations: list[LibraryCitation] = Field(default_factory=list)

    def find_section(self, section_id: str) -> TextBlock | None:
        for block in self.sections:
            if block.id == section_id:
                return block
        return None

    def abstract(self) -> TextBlock | None:
        """Return the section titled ``Abstract``, if any."""

        for block in self.sections:
            if block.title.strip().lower() == "abstract":
                return block
        return None
