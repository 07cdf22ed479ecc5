"""Tests for LaTeX and BibTeX export."""

from __future__ import annotations

from paperdraft.drafting.content import preview_text
from paperdraft.export import render_bibtex, render_latex
from paperdraft.models.citation import LibraryCitation
from paperdraft.models.document import PaperDocument, TextBlock


def test_render_latex_sections_and_abstract() -> None:
    doc = PaperDocument(
        title="On Citations",
        authors="Ada Lovelace",
        sections=[
            TextBlock(id="a", title="Abstract", body="We study markers."),
            TextBlock(id="i", title="Introduction", description="Motivation"),
            TextBlock(id="m", title="Methods"),
            TextBlock(id="r", title="References", kind="references", body="[1] prior work"),
        ],
    )

    tex = render_latex(doc)

    assert tex.startswith("\\documentclass{article}")
    assert "\\title{On Citations}" in tex
    assert "\\author{Ada Lovelace}" in tex
    assert "\\begin{abstract}\nWe study markers.\n\\end{abstract}" in tex
    assert "\\section{Introduction}\nMotivation" in tex
    assert "\\section{Methods}\nContent to be generated..." in tex
    assert "\\section{References}\n[1] prior work" in tex
    assert tex.rstrip().endswith("\\end{document}")


def test_render_latex_defaults() -> None:
    tex = render_latex(PaperDocument())

    assert "\\title{Your Academic Paper Title}" in tex
    assert "\\author{Author Name}" in tex
    assert "\\begin{abstract}" not in tex


def test_render_bibtex_example_when_library_empty() -> None:
    bib = render_bibtex(PaperDocument())

    assert bib.startswith("% BibTeX entries for your paper")
    assert "@article{example2023," in bib


def test_render_bibtex_entries() -> None:
    doc = PaperDocument(
        citations=[
            LibraryCitation(
                title="Attention Is All You Need",
                authors="Ashish Vaswani, Noam Shazeer",
                year="2017",
                journal="NeurIPS",
            ),
            LibraryCitation(title="A Blog Post", authors="Jane Doe", year="2020", url="https://x.y"),
        ]
    )

    bib = render_bibtex(doc)

    assert "@article{vaswani2017,\n  title={Attention Is All You Need}," in bib
    assert "author={Ashish Vaswani and Noam Shazeer}" in bib
    assert "@misc{doe2020," in bib
    assert "url={https://x.y}" in bib


def test_preview_text_strips_markers() -> None:
    doc = PaperDocument(
        title="T",
        authors="A",
        sections=[TextBlock(id="s1", title="Intro", body="Claim [CITE: source]."), TextBlock(title="Empty")],
    )

    assert preview_text(doc) == "Title: T\n\nAuthors: A\n\nIntro\n\nClaim ."
