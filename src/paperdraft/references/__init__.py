"""References section management."""

from __future__ import annotations

from paperdraft.references.synchronizer import (
    CONTENT_EVENTS,
    ReferenceSectionSynchronizer,
    StaleReferencesPolicy,
    SyncAction,
    SyncResult,
    citation_sources,
    find_references_block,
    synchronize,
)

__all__ = [
    "CONTENT_EVENTS",
    "ReferenceSectionSynchronizer",
    "StaleReferencesPolicy",
    "SyncAction",
    "SyncResult",
    "citation_sources",
    "find_references_block",
    "synchronize",
]
