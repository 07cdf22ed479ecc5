"""LaTeX and BibTeX export."""

from __future__ import annotations

from paperdraft.models.citation import LibraryCitation
from paperdraft.models.document import PaperDocument

_PREAMBLE = r"""\documentclass{article}
\usepackage[utf8]{inputenc}
\usepackage{amsmath}
\usepackage{amsfonts}
\usepackage{amssymb}
\usepackage{cite}
\usepackage{url}
"""

_EXAMPLE_BIBTEX = """% BibTeX entries for your paper
% Add your references here

@article{example2023,
  title={Example Paper Title},
  author={Author, First and Author, Second},
  journal={Journal Name},
  volume={1},
  number={1},
  pages={1--10},
  year={2023},
  publisher={Publisher}
}"""

SECTION_PLACEHOLDER = "Content to be generated..."


def render_latex(doc: PaperDocument) -> str:
    """Render the paper as a standalone LaTeX article."""

    abstract_block = doc.abstract()
    abstract = abstract_block.body if abstract_block is not None and abstract_block.body else ""

    parts = [
        _PREAMBLE,
        f"\\title{{{doc.title or 'Your Academic Paper Title'}}}",
        f"\\author{{{doc.authors or 'Author Name'}}}",
        "\\date{\\today}",
        "",
        "\\begin{document}",
        "",
        "\\maketitle",
        "",
    ]
    if abstract:
        parts += ["\\begin{abstract}", abstract, "\\end{abstract}", ""]
    for section in doc.sections:
        content = section.body or section.description or SECTION_PLACEHOLDER
        parts += [f"\\section{{{section.title}}}", content, ""]
    parts += [
        "\\bibliographystyle{plain}",
        "\\bibliography{references}",
        "",
        "\\end{document}",
    ]
    return "\n".join(parts) + "\n"


def _bibtex_entry(citation: LibraryCitation) -> str:
    authors = " and ".join(a.strip() for a in citation.authors.split(",") if a.strip())
    fields = [("title", citation.title), ("author", authors)]
    if citation.journal:
        fields.append(("journal", citation.journal))
    fields.append(("year", citation.year))
    if citation.doi:
        fields.append(("doi", citation.doi))
    if citation.url:
        fields.append(("url", citation.url))
    entry_type = "article" if citation.journal else "misc"
    body = ",\n".join(f"  {name}={{{value}}}" for name, value in fields)
    return f"@{entry_type}{{{citation.bibtex_key},\n{body}\n}}"


def render_bibtex(doc: PaperDocument) -> str:
    """Render the citation library; an empty library yields a commented example entry."""

    if not doc.citations:
        return _EXAMPLE_BIBTEX + "\n"
    return "\n\n".join(_bibtex_entry(c) for c in doc.citations) + "\n"
