"""Tests for the References section synchronizer."""

from __future__ import annotations

import logging

import pytest

from paperdraft.models.document import TextBlock
from paperdraft.references import (
    ReferenceSectionSynchronizer,
    StaleReferencesPolicy,
    SyncAction,
    find_references_block,
    synchronize,
)
from paperdraft.utils.citations import NO_CITATIONS_PLACEHOLDER


def _refs(blocks: list[TextBlock]) -> list[TextBlock]:
    return [b for b in blocks if b.is_references]


def test_creates_references_block_when_markers_exist() -> None:
    """It should append exactly one References block at the end."""

    blocks = [
        TextBlock(id="s1", title="Intro", body="Foo [CITE: prior survey] bar."),
        TextBlock(id="s2", title="Methods", body="Baz [CITE: dataset source]."),
    ]
    result = ReferenceSectionSynchronizer().synchronize(blocks)

    assert result.action is SyncAction.CREATED
    assert len(result.blocks) == 3
    created = result.blocks[-1]
    assert created.title == "References"
    assert created.kind == "references"
    assert created.body == "[1] prior survey\n[2] dataset source"
    assert created.id == result.references_id
    assert created.id not in {"s1", "s2"}


def test_does_not_mutate_input() -> None:
    blocks = [TextBlock(id="s1", title="Intro", body="[CITE: x]")]
    ReferenceSectionSynchronizer().synchronize(blocks)
    assert len(blocks) == 1


def test_single_marker_creates_single_line() -> None:
    blocks = [TextBlock(id="s1", title="Intro", body="Claim [CITE: reason].")]
    out = synchronize(blocks)
    assert out[-1].body == "[1] reason"


def test_never_creates_from_empty_list() -> None:
    blocks = [TextBlock(id="s1", title="Intro", body="No citations."), TextBlock(id="s2", title="Body")]
    result = ReferenceSectionSynchronizer().synchronize(blocks)

    assert result.action is SyncAction.SKIPPED
    assert result.blocks == blocks
    assert find_references_block(result.blocks) is None


def test_updates_existing_block_only() -> None:
    """A new marker should extend the list without touching other blocks."""

    blocks = [
        TextBlock(id="s1", title="Intro", body="A [CITE: x]. B [CITE: y]."),
        TextBlock(id="refs", title="References", kind="references", body="[1] x"),
        TextBlock(id="s3", title="Notes", body="Plain."),
    ]
    result = ReferenceSectionSynchronizer().synchronize(blocks)

    assert result.action is SyncAction.UPDATED
    assert [b.id for b in result.blocks] == ["s1", "refs", "s3"]
    assert [b.title for b in result.blocks] == ["Intro", "References", "Notes"]
    assert result.blocks[1].body == "[1] x\n[2] y"
    assert result.blocks[0] is blocks[0]
    assert result.blocks[2] is blocks[2]
    assert len(_refs(result.blocks)) == 1


def test_second_pass_is_unchanged() -> None:
    sync = ReferenceSectionSynchronizer()
    blocks = [TextBlock(id="s1", title="Intro", body="[CITE: a] [CITE: b]")]

    first = sync.synchronize(blocks)
    second = sync.synchronize(first.blocks)

    assert first.action is SyncAction.CREATED
    assert second.action is SyncAction.UNCHANGED
    assert second.blocks == first.blocks
    assert second.changed is False


def test_markers_inside_references_block_are_ignored() -> None:
    blocks = [
        TextBlock(id="s1", title="Intro", body="[CITE: a]"),
        TextBlock(id="refs", title="References", kind="references", body="[CITE: stray]"),
    ]
    out = synchronize(blocks)
    assert out[1].body == "[1] a"


def test_legacy_title_is_recognized_as_references() -> None:
    """Blocks loaded without a kind are classified by their title."""

    blocks = [
        TextBlock.model_validate({"id": "s1", "title": "Intro", "body": "[CITE: a]"}),
        TextBlock.model_validate({"id": "r", "title": "Reference List", "body": "old"}),
    ]
    result = ReferenceSectionSynchronizer().synchronize(blocks)

    assert result.action is SyncAction.UPDATED
    assert len(result.blocks) == 2
    assert result.blocks[1].body == "[1] a"


def test_explicit_standard_kind_is_not_references() -> None:
    blocks = [
        TextBlock(id="s1", title="References and Notes", kind="standard", body="[CITE: a]"),
    ]
    result = ReferenceSectionSynchronizer().synchronize(blocks)

    assert result.action is SyncAction.CREATED
    assert result.blocks[0].body == "[CITE: a]"
    assert result.blocks[1].body == "[1] a"


def test_stale_block_is_kept_by_default() -> None:
    """With no markers left the existing References block stays as it was."""

    blocks = [
        TextBlock(id="s1", title="Intro", body="All citations removed."),
        TextBlock(id="refs", title="References", kind="references", body="[1] old reason"),
    ]
    result = ReferenceSectionSynchronizer().synchronize(blocks)

    assert result.action is SyncAction.UNCHANGED
    assert result.blocks[1].body == "[1] old reason"


def test_stale_block_cleared_with_clear_policy() -> None:
    blocks = [
        TextBlock(id="s1", title="Intro", body="Nothing."),
        TextBlock(id="refs", title="References", kind="references", body="[1] old reason"),
    ]
    sync = ReferenceSectionSynchronizer(StaleReferencesPolicy.CLEAR)
    result = sync.synchronize(blocks)

    assert result.action is SyncAction.CLEARED
    assert result.blocks[1].body == NO_CITATIONS_PLACEHOLDER
    assert sync.synchronize(result.blocks).action is SyncAction.UNCHANGED


def test_stale_block_removed_with_remove_policy() -> None:
    blocks = [
        TextBlock(id="s1", title="Intro", body="Nothing."),
        TextBlock(id="refs", title="References", kind="references", body="[1] old reason"),
    ]
    result = ReferenceSectionSynchronizer("remove").synchronize(blocks)

    assert result.action is SyncAction.REMOVED
    assert [b.id for b in result.blocks] == ["s1"]


def test_invalid_policy_rejected() -> None:
    with pytest.raises(ValueError):
        ReferenceSectionSynchronizer("archive")


def test_multiple_references_blocks_use_first(caplog: pytest.LogCaptureFixture) -> None:
    """Only the first References block in collection order is rewritten."""

    blocks = [
        TextBlock(id="s1", title="Intro", body="[CITE: a]"),
        TextBlock(id="r1", title="References", kind="references", body="old 1"),
        TextBlock(id="r2", title="References", kind="references", body="old 2"),
    ]
    with caplog.at_level(logging.WARNING):
        result = ReferenceSectionSynchronizer().synchronize(blocks)

    assert result.references_id == "r1"
    assert result.blocks[1].body == "[1] a"
    assert result.blocks[2].body == "old 2"
    assert "Multiple References blocks" in caplog.text
