"""Bibliography library models.

The library is maintained by hand; no metadata is fetched for a DOI.
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, Field, model_validator

from paperdraft.utils.ids import new_id

_KEY_CHARS_RE = re.compile(r"[^a-z0-9]+")


def default_bibtex_key(authors: str, year: str) -> str:
    """Build a key from the first author's last name and the year, e.g. ``vaswani2017``."""

    first_author = authors.split(",")[0].strip()
    last_name = first_author.split()[-1] if first_author else ""
    return _KEY_CHARS_RE.sub("", last_name.lower()) + year.strip()


class LibraryCitation(BaseModel):
    """A bibliography entry added by the user."""

    id: str = Field(default_factory=lambda: new_id("citation"))
    title: str = Field(min_length=1)
    authors: str = Field(min_length=1)
    year: str = Field(min_length=1)
    journal: str | None = None
    doi: str | None = None
    url: str | None = None
    bibtex_key: str = ""

    @model_validator(mode="before")
    @classmethod
    def _fill_key(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("bibtex_key"):
            authors = data.get("authors")
            year = data.get("year")
            if isinstance(authors, str) and isinstance(year, str):
                return {**data, "bibtex_key": default_bibtex_key(authors, year)}
        return data
