"""Session persistence."""

from __future__ import annotations

from paperdraft.sessions.store import SessionData, SessionNotFoundError, SessionStore

__all__ = ["SessionData", "SessionNotFoundError", "SessionStore"]
