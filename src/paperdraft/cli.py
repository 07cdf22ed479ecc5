"""CLI entrypoints for PaperDraft."""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer

from paperdraft.config import Settings, load_settings
from paperdraft.drafting import (
    DocumentEditor,
    GenerationError,
    SectionGenerator,
    SectionNotFoundError,
    VersionNotFoundError,
)
from paperdraft.export import render_bibtex, render_latex
from paperdraft.llm.client import LLMClient
from paperdraft.logging import configure_logging, document_context, get_logger, set_step
from paperdraft.models.document import PaperDocument
from paperdraft.recording.file_recorder import FileEventRecorder
from paperdraft.references import ReferenceSectionSynchronizer, StaleReferencesPolicy
from paperdraft.sessions import SessionNotFoundError, SessionStore
from paperdraft.utils.citations import render_reference_list

app = typer.Typer(add_completion=False, help="PaperDraft academic paper drafting CLI")
logger = get_logger(__name__)


def _read_document(path: Path) -> PaperDocument:
    if not path.exists():
        raise typer.BadParameter(f"Document not found: {path}")
    return PaperDocument.model_validate_json(path.read_text(encoding="utf-8"))


def _write_document(doc: PaperDocument, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(doc.model_dump_json(indent=2), encoding="utf-8")


def _settings() -> Settings:
    settings = load_settings()
    configure_logging(settings.log_level)
    return settings


def _generator(settings: Settings) -> SectionGenerator:
    try:
        llm = LLMClient(settings)
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc
    return SectionGenerator(llm, settings)


def _editor(
    doc: PaperDocument,
    settings: Settings,
    *,
    policy: StaleReferencesPolicy | None = None,
    generator: SectionGenerator | None = None,
) -> DocumentEditor:
    return DocumentEditor(
        doc,
        synchronizer=ReferenceSectionSynchronizer(policy or settings.stale_references_policy),
        generator=generator,
        recorder=FileEventRecorder.for_document(settings.artifacts_dir, doc.id),
    )


@app.command()
def references(document: Path = typer.Argument(..., help="Paper JSON file")) -> None:
    """Print the numbered reference list derived from the citation markers."""

    _settings()
    doc = _read_document(document)
    editor = DocumentEditor(doc)
    typer.echo(render_reference_list(editor.reference_list()))


@app.command()
def sync(
    document: Path = typer.Argument(..., help="Paper JSON file"),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write the result here instead of in place"
    ),
    policy: StaleReferencesPolicy | None = typer.Option(
        None,
        "--policy",
        help="Stale References handling (overrides PAPERDRAFT_STALE_REFERENCES_POLICY)",
    ),
) -> None:
    """Create or refresh the References section of a paper."""

    settings = _settings()
    doc = _read_document(document)
    editor = _editor(doc, settings, policy=policy)
    result = editor.ensure_references()
    _write_document(editor.document, output or document)
    typer.echo(result.action.value)


@app.command()
def export(
    document: Path = typer.Argument(..., help="Paper JSON file"),
    tex: Path = typer.Option(Path("paper.tex"), "--tex", help="LaTeX output file"),
    bib: Path = typer.Option(Path("references.bib"), "--bib", help="BibTeX output file"),
) -> None:
    """Export a paper to LaTeX and BibTeX."""

    _settings()
    doc = _read_document(document)
    for path, content in ((tex, render_latex(doc)), (bib, render_bibtex(doc))):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        typer.echo(str(path))


@app.command()
def generate(
    document: Path = typer.Argument(..., help="Paper JSON file"),
    section: str | None = typer.Option(
        None, "--section", "-s", help="Section id to draft; drafts every empty section if omitted"
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write the result here instead of in place"
    ),
    concurrent: bool = typer.Option(
        False, "--concurrent", help="Draft empty sections with overlapping model calls"
    ),
) -> None:
    """Draft section text with the configured model."""

    settings = _settings()
    doc = _read_document(document)
    editor = _editor(doc, settings, generator=_generator(settings))

    with document_context(document_id=doc.id, step="cli"):
        logger.info("CLI generation requested")
        try:
            if section is not None:
                set_step(f"generate:{section}")
                editor.generate_section(section)
            elif concurrent:
                asyncio.run(
                    editor.generate_sections_async(concurrency=settings.generation_concurrency)
                )
            else:
                editor.generate_all()
        except KeyError as exc:
            raise typer.BadParameter(f"Unknown section id: {section}") from exc
        except GenerationError as exc:
            _write_document(editor.document, output or document)
            typer.echo(f"Generation failed: {exc}", err=True)
            raise typer.Exit(code=1) from exc

    _write_document(editor.document, output or document)
    typer.echo(str(output or document))


@app.command("suggest-titles")
def suggest_titles(document: Path = typer.Argument(..., help="Paper JSON file")) -> None:
    """Print alternative titles for a paper."""

    settings = _settings()
    doc = _read_document(document)
    generator = _generator(settings)
    with document_context(document_id=doc.id, step="cli:titles"):
        try:
            titles = generator.suggest_titles(doc)
        except GenerationError as exc:
            typer.echo(f"Title suggestion failed: {exc}", err=True)
            raise typer.Exit(code=1) from exc
    for title in titles:
        typer.echo(title)


@app.command()
def versions(
    document: Path = typer.Argument(..., help="Paper JSON file"),
    section: str = typer.Argument(..., help="Section id"),
) -> None:
    """List the saved versions of a section, oldest first."""

    _settings()
    editor = DocumentEditor(_read_document(document))
    try:
        saved = editor.section_versions(section)
    except SectionNotFoundError as exc:
        raise typer.BadParameter(f"Unknown section id: {section}") from exc
    for v in saved:
        typer.echo(f"{v.id}\t{v.saved_at:%Y-%m-%d %H:%M:%S}\t{v.source}\t{v.description}")


@app.command()
def revert(
    document: Path = typer.Argument(..., help="Paper JSON file"),
    section: str = typer.Argument(..., help="Section id"),
    version: str = typer.Argument(..., help="Version id"),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write the result here instead of in place"
    ),
) -> None:
    """Restore a saved section version and refresh the References section."""

    settings = _settings()
    doc = _read_document(document)
    editor = _editor(doc, settings)
    try:
        editor.revert_section(section, version)
    except SectionNotFoundError as exc:
        raise typer.BadParameter(f"Unknown section id: {section}") from exc
    except VersionNotFoundError as exc:
        raise typer.BadParameter(f"Unknown version id: {version}") from exc
    _write_document(editor.document, output or document)
    typer.echo(str(output or document))


@app.command("session-save")
def session_save(
    document: Path = typer.Argument(..., help="Paper JSON file"),
    name: str | None = typer.Option(None, "--name", "-n", help="Session name"),
) -> None:
    """Save a paper as a named session."""

    settings = _settings()
    store = SessionStore(settings.sessions_path)
    session = store.save(_read_document(document), name)
    typer.echo(session.id)


@app.command("session-list")
def session_list() -> None:
    """List saved sessions, newest first."""

    settings = _settings()
    for session in SessionStore(settings.sessions_path).list_all():
        typer.echo(f"{session.id}\t{session.saved_at:%Y-%m-%d %H:%M:%S}\t{session.name}")


@app.command("session-load")
def session_load(
    session_id: str = typer.Argument(..., help="Session id"),
    output: Path = typer.Option(Path("paper.json"), "--output", "-o", help="Paper JSON file"),
) -> None:
    """Write the paper stored in a session to a file."""

    settings = _settings()
    try:
        doc = SessionStore(settings.sessions_path).load(session_id)
    except SessionNotFoundError as exc:
        raise typer.BadParameter(f"Unknown session id: {session_id}") from exc
    _write_document(doc, output)
    typer.echo(str(output))


if __name__ == "__main__":
    app()
