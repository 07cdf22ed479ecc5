"""References section synchronizer.

The synchronizer is the only component allowed to create or rewrite the References block.
Given the current block collection it returns a new collection whose References block body is
the rendering of the reference list derived from every other block.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from paperdraft.events import EditEventType
from paperdraft.logging import get_logger
from paperdraft.models.document import REFERENCES_TITLE, TextBlock
from paperdraft.utils.citations import (
    NO_CITATIONS_PLACEHOLDER,
    derive_reference_list,
    render_reference_list,
)
from paperdraft.utils.ids import new_references_id

logger = get_logger(__name__)

# Events that change some block's body and therefore require a re-sync.
CONTENT_EVENTS: frozenset[EditEventType] = frozenset(
    {
        EditEventType.GENERATION_COMPLETED,
        EditEventType.MANUAL_SAVE,
        EditEventType.REWRITE_APPLIED,
        EditEventType.SECTION_REVERTED,
        EditEventType.SECTION_DELETED,
        EditEventType.REFERENCES_REQUESTED,
    }
)


class StaleReferencesPolicy(str, Enum):
    """Treatment of an existing References block once no markers remain."""

    KEEP = "keep"
    CLEAR = "clear"
    REMOVE = "remove"


class SyncAction(str, Enum):
    """What a synchronization pass did."""

    CREATED = "created"
    UPDATED = "updated"
    UNCHANGED = "unchanged"
    SKIPPED = "skipped"
    CLEARED = "cleared"
    REMOVED = "removed"


@dataclass(frozen=True)
class SyncResult:
    """Outcome of :meth:`ReferenceSectionSynchronizer.synchronize`."""

    blocks: list[TextBlock]
    action: SyncAction
    references_id: str | None = None

    @property
    def changed(self) -> bool:
        return self.action not in (SyncAction.UNCHANGED, SyncAction.SKIPPED)


def find_references_block(blocks: Sequence[TextBlock]) -> TextBlock | None:
    """Return the first References block in collection order."""

    for block in blocks:
        if block.is_references:
            return block
    return None


def citation_sources(blocks: Sequence[TextBlock]) -> list[TextBlock]:
    """Blocks whose markers feed the reference list.

    Only the managed References block (the first one) is left out; any further blocks of
    kind references are scanned like ordinary sections.
    """

    refs = find_references_block(blocks)
    return [b for b in blocks if refs is None or b.id != refs.id]


class ReferenceSectionSynchronizer:
    """Keep a single References block consistent with the citation markers."""

    def __init__(self, policy: StaleReferencesPolicy | str = StaleReferencesPolicy.KEEP) -> None:
        self._policy = StaleReferencesPolicy(policy)

    @property
    def policy(self) -> StaleReferencesPolicy:
        return self._policy

    def synchronize(self, blocks: Sequence[TextBlock]) -> SyncResult:
        """Create or rewrite the References block for ``blocks``.

        The input sequence is never mutated. Calling this twice without an intervening edit
        returns ``UNCHANGED`` the second time.

        Args:
            blocks: The full block collection in document order.

        Returns:
            The new collection and the action taken.
        """

        current = list(blocks)
        refs = find_references_block(current)
        if refs is not None:
            extra = [b.id for b in current if b.is_references and b.id != refs.id]
            if extra:
                logger.warning(
                    "Multiple References blocks; synchronizing %s and leaving %s untouched",
                    refs.id,
                    extra,
                )

        entries = derive_reference_list(citation_sources(current))

        if refs is None:
            if not entries:
                return SyncResult(blocks=current, action=SyncAction.SKIPPED)
            created = TextBlock(
                id=new_references_id(),
                title=REFERENCES_TITLE,
                kind="references",
                description="Academic references and citations",
                body=render_reference_list(entries),
            )
            logger.info("Added References section with %d entries", len(entries))
            return SyncResult(
                blocks=current + [created], action=SyncAction.CREATED, references_id=created.id
            )

        if not entries:
            return self._apply_stale_policy(current, refs)

        rendered = render_reference_list(entries)
        if refs.body == rendered:
            return SyncResult(blocks=current, action=SyncAction.UNCHANGED, references_id=refs.id)

        logger.info("Updated References section %s with %d entries", refs.id, len(entries))
        return SyncResult(
            blocks=_replace_body(current, refs.id, rendered),
            action=SyncAction.UPDATED,
            references_id=refs.id,
        )

    def _apply_stale_policy(self, blocks: list[TextBlock], refs: TextBlock) -> SyncResult:
        if self._policy is StaleReferencesPolicy.REMOVE:
            logger.info("No citation markers left; removing References section %s", refs.id)
            return SyncResult(
                blocks=[b for b in blocks if b.id != refs.id],
                action=SyncAction.REMOVED,
                references_id=refs.id,
            )
        if self._policy is StaleReferencesPolicy.CLEAR and refs.body != NO_CITATIONS_PLACEHOLDER:
            logger.info("No citation markers left; clearing References section %s", refs.id)
            return SyncResult(
                blocks=_replace_body(blocks, refs.id, NO_CITATIONS_PLACEHOLDER),
                action=SyncAction.CLEARED,
                references_id=refs.id,
            )
        return SyncResult(blocks=blocks, action=SyncAction.UNCHANGED, references_id=refs.id)


def _replace_body(blocks: list[TextBlock], block_id: str, body: str) -> list[TextBlock]:
    return [b.model_copy(update={"body": body}) if b.id == block_id else b for b in blocks]


def synchronize(
    blocks: Sequence[TextBlock],
    policy: StaleReferencesPolicy | str = StaleReferencesPolicy.KEEP,
) -> list[TextBlock]:
    """Convenience wrapper returning only the synchronized blocks."""

    return ReferenceSectionSynchronizer(policy).synchronize(blocks).blocks
