"""Adapters connecting rendered documents to external LaTeX tooling."""

from __future__ import annotations

from .latexmk import TexRender


__all__ = ["TexRender"]
