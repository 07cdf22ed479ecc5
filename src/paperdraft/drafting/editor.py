"""Document editor.

The editor is the single writer of a :class:`PaperDocument`. Every operation replaces the
section list with a new one; operations that change a section body run the References
synchronizer immediately afterwards, so the References block never lags behind the text.
"""

from __future__ import annotations

import asyncio
from typing import Iterable

from paperdraft.drafting.generator import GenerationError, SectionGenerator
from paperdraft.events import EditEventType
from paperdraft.logging import document_context, get_logger, log_exception
from paperdraft.models.document import ContentVersion, Figure, PaperDocument, TextBlock, VersionSource
from paperdraft.models.references import ReferenceEntry
from paperdraft.recording.file_recorder import FileEventRecorder
from paperdraft.references.synchronizer import (
    CONTENT_EVENTS,
    ReferenceSectionSynchronizer,
    SyncResult,
    citation_sources,
)
from paperdraft.utils.citations import derive_reference_list
from paperdraft.utils.ids import new_section_id

logger = get_logger(__name__)

DEFAULT_STRUCTURE: list[tuple[str, str]] = [
    ("Abstract", "Brief summary of the research, methodology, and key findings"),
    ("Introduction", "Background, motivation, and research objectives"),
    ("Related Work", "Review of existing literature and previous research"),
    ("Methodology", "Research methods, experimental setup, and approach"),
    ("Results", "Experimental results and findings"),
    ("Discussion", "Interpretation of results and implications"),
    ("Conclusion", "Summary of contributions and future work"),
]


class SectionNotFoundError(KeyError):
    """Raised when an operation names a section id that is not in the paper."""


class VersionNotFoundError(KeyError):
    """Raised when a section has no saved version with the requested id."""


def _with_version(
    block: TextBlock, body: str, source: VersionSource, description: str
) -> TextBlock:
    """Set ``body`` and append it to the block's version history."""

    versions = list(block.versions)
    if not versions and block.body:
        versions.append(
            ContentVersion(body=block.body, source="initial", description="Initial content")
        )
    versions.append(ContentVersion(body=body, source=source, description=description))
    return block.model_copy(update={"body": body, "versions": versions})


class DocumentEditor:
    """Apply edits to a paper and keep its References section synchronized."""

    def __init__(
        self,
        document: PaperDocument,
        *,
        synchronizer: ReferenceSectionSynchronizer | None = None,
        generator: SectionGenerator | None = None,
        recorder: FileEventRecorder | None = None,
    ) -> None:
        self._doc = document
        self._sync = synchronizer or ReferenceSectionSynchronizer()
        self._generator = generator
        self._recorder = recorder

    @property
    def document(self) -> PaperDocument:
        return self._doc

    @property
    def sections(self) -> list[TextBlock]:
        return list(self._doc.sections)

    # ------------------------------------------------------------------
    # Internals

    def _get(self, section_id: str) -> TextBlock:
        block = self._doc.find_section(section_id)
        if block is None:
            raise SectionNotFoundError(section_id)
        return block

    def _require_generator(self) -> SectionGenerator:
        if self._generator is None:
            raise GenerationError("No text generator configured for this editor")
        return self._generator

    def _record(
        self,
        event_type: EditEventType,
        *,
        section_id: str | None = None,
        data: str | dict | list | None = None,
    ) -> None:
        if self._recorder is not None:
            self._recorder.record(event_type, section_id=section_id, data=data)

    def _commit(
        self,
        blocks: list[TextBlock],
        event_type: EditEventType,
        *,
        section_id: str | None = None,
        data: str | dict | list | None = None,
    ) -> SyncResult | None:
        self._doc.sections = blocks
        self._record(event_type, section_id=section_id, data=data)
        if event_type in CONTENT_EVENTS:
            return self.synchronize_references()
        return None

    def _replace(self, block: TextBlock) -> list[TextBlock]:
        return [block if b.id == block.id else b for b in self._doc.sections]

    # ------------------------------------------------------------------
    # References

    def synchronize_references(self) -> SyncResult:
        """Run the synchronizer over the current sections and store its output."""

        with document_context(document_id=self._doc.id, step="references"):
            result = self._sync.synchronize(self._doc.sections)
            self._doc.sections = result.blocks
            if result.changed:
                self._record(
                    EditEventType.REFERENCES_SYNCED,
                    section_id=result.references_id,
                    data={"action": result.action.value},
                )
            return result

    def ensure_references(self) -> SyncResult:
        """Explicit user request to add or refresh the References section."""

        self._record(EditEventType.REFERENCES_REQUESTED)
        return self.synchronize_references()

    def reference_list(self) -> list[ReferenceEntry]:
        """Reference list the synchronizer would write for the current sections."""

        return derive_reference_list(citation_sources(self._doc.sections))

    def has_citations(self) -> bool:
        return bool(self.reference_list())

    # ------------------------------------------------------------------
    # Structure

    def add_section(
        self,
        title: str = "New Section",
        *,
        description: str = "",
        bullet_points: Iterable[str] = (),
    ) -> TextBlock:
        block = TextBlock(
            id=new_section_id(),
            title=title,
            kind="standard",
            description=description,
            bullet_points=list(bullet_points),
        )
        self._commit(self.sections + [block], EditEventType.SECTION_ADDED, section_id=block.id)
        return block

    def apply_default_structure(self) -> list[TextBlock]:
        """Replace the sections with the standard research paper layout."""

        blocks = [
            TextBlock(id=new_section_id(), title=title, kind="standard", description=desc)
            for title, desc in DEFAULT_STRUCTURE
        ]
        self._commit(blocks, EditEventType.STRUCTURE_APPLIED, data=[b.title for b in blocks])
        return blocks

    def update_section(
        self,
        section_id: str,
        *,
        title: str | None = None,
        description: str | None = None,
        bullet_points: Iterable[str] | None = None,
        min_word_count: int | None = None,
    ) -> TextBlock:
        """Edit section metadata. Bodies are not touched, so no re-sync happens."""

        update: dict[str, object] = {}
        if title is not None:
            update["title"] = title
        if description is not None:
            update["description"] = description
        if bullet_points is not None:
            update["bullet_points"] = list(bullet_points)
        if min_word_count is not None:
            update["min_word_count"] = min_word_count
        block = self._get(section_id).model_copy(update=update)
        self._commit(
            self._replace(block),
            EditEventType.SECTION_UPDATED,
            section_id=section_id,
            data=sorted(update),
        )
        return block

    def move_section(self, section_id: str, index: int) -> None:
        block = self._get(section_id)
        blocks = [b for b in self._doc.sections if b.id != section_id]
        index = max(0, min(index, len(blocks)))
        blocks.insert(index, block)
        self._commit(
            blocks, EditEventType.SECTIONS_REORDERED, section_id=section_id, data={"index": index}
        )

    def delete_section(self, section_id: str) -> None:
        self._get(section_id)
        blocks = [b for b in self._doc.sections if b.id != section_id]
        self._commit(blocks, EditEventType.SECTION_DELETED, section_id=section_id)

    # ------------------------------------------------------------------
    # Content

    def save_body(self, section_id: str, body: str) -> TextBlock:
        """Store a manually edited body."""

        block = _with_version(self._get(section_id), body, "manual", "Manual edit")
        self._commit(self._replace(block), EditEventType.MANUAL_SAVE, section_id=section_id)
        return self._get(section_id)

    def apply_rewrite(self, section_id: str, selected_text: str, replacement: str) -> TextBlock:
        """Replace the first occurrence of ``selected_text`` in a section body."""

        block = self._get(section_id)
        body = block.body or ""
        if not selected_text or selected_text not in body:
            raise ValueError(f"Selected text not found in section {section_id}")
        new_body = body.replace(selected_text, replacement, 1)
        self._commit(
            self._replace(_with_version(block, new_body, "rewrite", "Rewrite applied")),
            EditEventType.REWRITE_APPLIED,
            section_id=section_id,
        )
        return self._get(section_id)

    def section_versions(self, section_id: str) -> list[ContentVersion]:
        """Saved bodies of a section, oldest first."""

        return list(self._get(section_id).versions)

    def revert_section(self, section_id: str, version_id: str) -> TextBlock:
        """Restore a saved body.

        The revert is itself appended to the history, so it can be undone the same way.

        Raises:
            VersionNotFoundError: The section has no version ``version_id``.
        """

        block = self._get(section_id)
        version = next((v for v in block.versions if v.id == version_id), None)
        if version is None:
            raise VersionNotFoundError(version_id)
        reverted = _with_version(
            block, version.body, "revert", f"Reverted to {version.description}"
        )
        self._commit(
            self._replace(reverted),
            EditEventType.SECTION_REVERTED,
            section_id=section_id,
            data={"version_id": version_id},
        )
        return self._get(section_id)

    def rewrite_selection(
        self, section_id: str, selected_text: str, instructions: str | None = None
    ) -> str:
        """Ask the model to rewrite a passage and apply the result."""

        generator = self._require_generator()
        block = self._get(section_id)
        replacement = generator.rewrite(self._doc, block, selected_text, instructions)
        self.apply_rewrite(section_id, selected_text, replacement)
        return replacement

    def _apply_generated(self, section_id: str, body: str) -> TextBlock | None:
        block = self._doc.find_section(section_id)
        if block is None:
            logger.warning("Section %s was deleted before its generation completed", section_id)
            return None
        self._commit(
            self._replace(_with_version(block, body, "generated", "Generated")),
            EditEventType.GENERATION_COMPLETED,
            section_id=section_id,
            data={"chars": len(body)},
        )
        return self._doc.find_section(section_id)

    def generate_section(self, section_id: str) -> TextBlock | None:
        """Draft one section with the model.

        On failure the body is left unchanged and :class:`GenerationError` propagates.
        """

        generator = self._require_generator()
        block = self._get(section_id)
        with document_context(document_id=self._doc.id, step=f"generate:{section_id}"):
            try:
                body = generator.draft_section(self._doc, block)
            except GenerationError as exc:
                self._record(
                    EditEventType.GENERATION_FAILED, section_id=section_id, data=str(exc)
                )
                raise
            logger.info("Generated %d chars for %s", len(body), block.title)
            return self._apply_generated(section_id, body)

    def generate_all(self) -> list[str]:
        """Sequentially draft every section that has no body yet.

        Returns:
            Ids of the sections that were drafted.
        """

        done: list[str] = []
        for block in self.sections:
            if block.body or block.is_references:
                continue
            if self.generate_section(block.id) is not None:
                done.append(block.id)
        return done

    async def generate_sections_async(
        self, section_ids: Iterable[str] | None = None, *, concurrency: int = 3
    ) -> list[str]:
        """Draft several sections with overlapping model calls.

        Model calls run in worker threads; each completion is applied and synchronized on the
        event loop as soon as it arrives. Failed sections are logged and left unchanged.

        Args:
            section_ids: Sections to draft; defaults to every empty non-References section.
            concurrency: Maximum number of model calls in flight.

        Returns:
            Ids of the sections that were drafted, in completion order.
        """

        generator = self._require_generator()
        if section_ids is None:
            targets = [b.id for b in self._doc.sections if not b.body and not b.is_references]
        else:
            targets = list(section_ids)
            for sid in targets:
                self._get(sid)

        semaphore = asyncio.Semaphore(concurrency)
        done: list[str] = []

        async def _one(section_id: str) -> None:
            async with semaphore:
                block = self._doc.find_section(section_id)
                if block is None:
                    return
                try:
                    body = await asyncio.to_thread(generator.draft_section, self._doc, block)
                except GenerationError as exc:
                    log_exception(logger, "Section generation failed", section_id=section_id)
                    self._record(
                        EditEventType.GENERATION_FAILED, section_id=section_id, data=str(exc)
                    )
                    return
                if self._apply_generated(section_id, body) is not None:
                    done.append(section_id)

        with document_context(document_id=self._doc.id, step="generate:batch"):
            await asyncio.gather(*(_one(sid) for sid in targets))
        return done

    # ------------------------------------------------------------------
    # Figures

    def add_figure(self, section_id: str, description: str) -> Figure:
        block = self._get(section_id)
        figure = Figure(description=description)
        self._commit(
            self._replace(block.model_copy(update={"figures": [*block.figures, figure]})),
            EditEventType.FIGURE_UPDATED,
            section_id=section_id,
            data={"figure_id": figure.id},
        )
        return figure

    def generate_caption(self, section_id: str, figure_id: str) -> Figure:
        generator = self._require_generator()
        block = self._get(section_id)
        figure = next((f for f in block.figures if f.id == figure_id), None)
        if figure is None:
            raise KeyError(figure_id)
        if not figure.description.strip():
            raise ValueError("Figure needs a description before a caption can be generated")
        captioned = figure.model_copy(update={"caption": generator.caption(self._doc, block, figure)})
        figures = [captioned if f.id == figure_id else f for f in block.figures]
        self._commit(
            self._replace(block.model_copy(update={"figures": figures})),
            EditEventType.FIGURE_UPDATED,
            section_id=section_id,
            data={"figure_id": figure_id},
        )
        return captioned
