"""ID utilities."""

from __future__ import annotations

import itertools
import time

_counter = itertools.count(1)


def _millis() -> int:
    return int(time.time() * 1000)


def new_id(prefix: str) -> str:
    """Return a new opaque identifier.

    Ids look like ``section-1718000000000-3``: a millisecond timestamp keeps them readable in
    saved sessions and the process-wide counter keeps them unique within one millisecond.

    Args:
        prefix: Entity prefix such as ``section`` or ``session``.
    """

    return f"{prefix}-{_millis()}-{next(_counter)}"


def new_section_id() -> str:
    """Return an id for a user-created section."""

    return new_id("section")


def new_references_id() -> str:
    """Return an id for an automatically created References section."""

    return new_id("section-references")
