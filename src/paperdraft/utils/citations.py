"""Citation marker parsing and reference list rendering.

Generated prose marks places that need a citation with ``[CITE: <reason>]``. The helpers here
are pure: they never mutate blocks and never raise for any text input.
"""

from __future__ import annotations

import re
from typing import Iterable

from paperdraft.models.document import TextBlock
from paperdraft.models.references import ReferenceEntry

_CITE_RE = re.compile(r"\[CITE:\s*(?P<reason>[^\]]+)\]")

NO_CITATIONS_PLACEHOLDER = "No citations found in the text."


def format_marker(reason: str) -> str:
    """Build an inline marker for a citation reason."""

    return f"[CITE: {reason}]"


def extract_reasons(text: str | None, *, skip_blank: bool = False) -> list[str]:
    """Extract citation reasons from `[CITE: ...]` markers.

    A whitespace-only marker such as ``[CITE:   ]`` yields an empty reason unless
    ``skip_blank`` is set.

    Args:
        text: Body text; may be empty or missing.
        skip_blank: Drop reasons that are empty after trimming.

    Returns:
        Trimmed reasons in left-to-right order, duplicates included.
    """

    if not text:
        return []
    reasons: list[str] = []
    for m in _CITE_RE.finditer(text):
        reason = m.group("reason").strip()
        if reason or not skip_blank:
            reasons.append(reason)
    return reasons


def derive_reference_list(
    blocks: Iterable[TextBlock], *, skip_blank: bool = False
) -> list[ReferenceEntry]:
    """Number the distinct citation reasons across blocks.

    Blocks are scanned in collection order. The first occurrence of a reason fixes its
    position; later duplicates are dropped without shifting indices.

    Args:
        blocks: Blocks in document order.
        skip_blank: Ignore markers whose reason is empty after trimming.

    Returns:
        1-based reference entries, empty when no markers are present.
    """

    # De-duplicate while keeping order
    seen: dict[str, None] = {}
    for block in blocks:
        if not block.body:
            continue
        for reason in extract_reasons(block.body, skip_blank=skip_blank):
            seen.setdefault(reason, None)
    return [ReferenceEntry(index=i, reason=r) for i, r in enumerate(seen, start=1)]


def has_any_markers(blocks: Iterable[TextBlock]) -> bool:
    """Return True when the blocks yield at least one reference entry."""

    return bool(derive_reference_list(blocks))


def render_reference_list(entries: Iterable[ReferenceEntry]) -> str:
    """Render entries as ``[n] reason`` lines.

    An empty list renders as :data:`NO_CITATIONS_PLACEHOLDER`.
    """

    text = "\n".join(e.render() for e in entries)
    return text or NO_CITATIONS_PLACEHOLDER


def strip_markers(text: str) -> str:
    """Remove citation markers from text."""

    return _CITE_RE.sub("", text)
