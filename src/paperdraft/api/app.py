"""FastAPI app exposing reference derivation, synchronization and export."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from paperdraft.config import Settings, load_settings
from paperdraft.drafting import DocumentEditor
from paperdraft.export import render_bibtex, render_latex
from paperdraft.logging import configure_logging, document_context, get_logger
from paperdraft.models.document import PaperDocument
from paperdraft.models.references import ReferenceEntry
from paperdraft.references import ReferenceSectionSynchronizer, StaleReferencesPolicy, SyncAction
from paperdraft.utils.citations import render_reference_list


class ReferencesResponse(BaseModel):
    """Derived reference list."""

    entries: list[ReferenceEntry]
    rendered: str
    has_markers: bool


class SyncRequest(BaseModel):
    """Synchronization request."""

    document: PaperDocument
    policy: StaleReferencesPolicy | None = None


class SyncResponse(BaseModel):
    """Synchronized document."""

    action: SyncAction
    references_id: str | None = None
    document: PaperDocument


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create FastAPI app."""

    settings = settings or load_settings()
    configure_logging(settings.log_level)
    logger = get_logger(__name__)

    app = FastAPI(title="PaperDraft", version="0.1.0")

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/references")
    def references(doc: PaperDocument) -> ReferencesResponse:
        entries = DocumentEditor(doc).reference_list()
        return ReferencesResponse(
            entries=entries,
            rendered=render_reference_list(entries),
            has_markers=bool(entries),
        )

    @app.post("/sync")
    def sync(req: SyncRequest) -> SyncResponse:
        policy = req.policy or settings.stale_references_policy
        editor = DocumentEditor(req.document, synchronizer=ReferenceSectionSynchronizer(policy))
        with document_context(document_id=req.document.id, step="api:sync"):
            result = editor.ensure_references()
            logger.info("API sync %s", result.action.value)
        return SyncResponse(
            action=result.action,
            references_id=result.references_id,
            document=editor.document,
        )

    @app.post("/export/latex", response_class=PlainTextResponse)
    def export_latex(doc: PaperDocument) -> str:
        return render_latex(doc)

    @app.post("/export/bibtex", response_class=PlainTextResponse)
    def export_bibtex(doc: PaperDocument) -> str:
        return render_bibtex(doc)

    return app
