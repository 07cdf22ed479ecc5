"""File-based edit history.

Each paper gets its own ``<artifacts>/<document_id>/history.jsonl``. Sequence numbers resume
from the last recorded event when a paper is reopened.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

from paperdraft.events import EditEvent, EditEventType


@dataclass
class FileEventRecorder:
    """Append-only JSONL recorder for one paper."""

    path: Path
    document_id: str
    _seq: int = field(default=0, init=False, repr=False)

    def __post_init__(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        existing = iter_events(self.path)
        if existing:
            self._seq = existing[-1].seq

    @classmethod
    def for_document(cls, artifacts_dir: Path, document_id: str) -> "FileEventRecorder":
        return cls(path=artifacts_dir / document_id / "history.jsonl", document_id=document_id)

    def record(
        self,
        event_type: EditEventType,
        *,
        section_id: str | None = None,
        data: str | dict | list | None = None,
    ) -> EditEvent:
        """Build, number and append an event."""

        self._seq += 1
        event = EditEvent(
            document_id=self.document_id,
            seq=self._seq,
            event_type=event_type,
            section_id=section_id,
            data=data,
        )
        line = json.dumps(event.model_dump(mode="json"), ensure_ascii=False)
        with self.path.open("a", encoding="utf-8") as f:
            f.write(line + "\n")
        return event


def iter_events(path: Path, *, section_id: str | None = None) -> list[EditEvent]:
    """Load recorded events, optionally only those touching one section."""

    events: list[EditEvent] = []
    if not path.exists():
        return events
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line:
            continue
        ev = EditEvent.model_validate_json(line)
        if section_id is None or ev.section_id == section_id:
            events.append(ev)
    return events
