"""Saved drafting sessions.

Sessions are snapshots of a paper stored together in one JSON file. The store keeps them in
memory and rewrites the file after every change.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, Field, TypeAdapter

from paperdraft.logging import get_logger
from paperdraft.models.document import PaperDocument
from paperdraft.utils.ids import new_id

logger = get_logger(__name__)


class SessionNotFoundError(KeyError):
    """Raised when a session id is not in the store."""


class SessionData(BaseModel):
    """A named snapshot of a paper."""

    id: str = Field(default_factory=lambda: new_id("session"))
    name: str
    saved_at: datetime = Field(default_factory=datetime.now)
    document: PaperDocument


_SESSIONS = TypeAdapter(list[SessionData])


class SessionStore:
    """JSON-file backed session store."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._sessions: dict[str, SessionData] = {}
        self._load_existing()

    @property
    def path(self) -> Path:
        return self._path

    def _load_existing(self) -> None:
        if not self._path.exists():
            return
        raw = self._path.read_text(encoding="utf-8").strip()
        if not raw:
            return
        for session in _SESSIONS.validate_json(raw):
            self._sessions[session.id] = session
        logger.info("Loaded %d sessions from %s", len(self._sessions), self._path)

    def _flush(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = _SESSIONS.dump_python(list(self._sessions.values()), mode="json")
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        tmp.replace(self._path)

    def save(self, document: PaperDocument, name: str | None = None) -> SessionData:
        """Store a deep copy of ``document`` as a new session."""

        saved_at = datetime.now()
        session = SessionData(
            name=name or f"Session {saved_at:%Y-%m-%d %H:%M:%S}",
            saved_at=saved_at,
            document=document.model_copy(deep=True),
        )
        self._sessions[session.id] = session
        self._flush()
        logger.info('Session "%s" saved as %s', session.name, session.id)
        return session

    def load(self, session_id: str) -> PaperDocument:
        """Return a copy of the paper saved in a session."""

        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session.document.model_copy(deep=True)

    def delete(self, session_id: str) -> None:
        if self._sessions.pop(session_id, None) is None:
            raise SessionNotFoundError(session_id)
        self._flush()

    def list_all(self) -> list[SessionData]:
        """Sessions, most recently saved first."""

        newest_first = list(reversed(self._sessions.values()))
        return sorted(newest_first, key=lambda s: s.saved_at, reverse=True)

    def count(self) -> int:
        return len(self._sessions)
