"""Reference list models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ReferenceEntry(BaseModel):
    """One numbered line of a derived reference list."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=1)
    reason: str

    def render(self) -> str:
        return f"[{self.index}] {self.reason}"
