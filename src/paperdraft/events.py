"""Edit event model used for the document history log.

Every mutation the editor applies to a paper is described by an event. Events are recorded
to JSONL so the editing history of a paper can be replayed later.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class EditEventType(str, Enum):
    """Kinds of document mutations."""

    # Structure
    SECTION_ADDED = "section_added"
    SECTION_UPDATED = "section_updated"
    SECTION_DELETED = "section_deleted"
    SECTIONS_REORDERED = "sections_reordered"
    STRUCTURE_APPLIED = "structure_applied"
    FIGURE_UPDATED = "figure_updated"

    # Content
    GENERATION_COMPLETED = "generation_completed"
    GENERATION_FAILED = "generation_failed"
    MANUAL_SAVE = "manual_save"
    REWRITE_APPLIED = "rewrite_applied"
    SECTION_REVERTED = "section_reverted"
    REFERENCES_REQUESTED = "references_requested"

    # Synchronizer
    REFERENCES_SYNCED = "references_synced"


class EditEvent(BaseModel):
    """A single event in a paper's editing history."""

    document_id: str
    seq: int = Field(ge=1)
    ts: datetime = Field(default_factory=datetime.utcnow)

    event_type: EditEventType
    section_id: str | None = None

    data: str | dict | list | None = None
