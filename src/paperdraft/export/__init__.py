"""Document export."""

from __future__ import annotations

from paperdraft.export.latex import render_bibtex, render_latex

__all__ = ["render_bibtex", "render_latex"]
