"""Document construction core: element tree, escaping and rendering.

Everything in this package is pure: no I/O, no logging, no shared state.
"""

from __future__ import annotations

from .escaping import LATEX_ESCAPE_MAP, escape_latex_chars
from .exceptions import (
    InvalidArityError,
    InvalidElementError,
    InvalidIdentifierError,
    MissingRequiredArgumentError,
    StructuralError,
    TexRenderError,
)
from .renderer import render, render_bytes
from .tree import (
    Braced,
    Command,
    Document,
    Element,
    Environment,
    Group,
    Joined,
    Raw,
    Sequence,
    Text,
    to_element,
)


__all__ = [
    "LATEX_ESCAPE_MAP",
    "Braced",
    "Command",
    "Document",
    "Element",
    "Environment",
    "Group",
    "InvalidArityError",
    "InvalidElementError",
    "InvalidIdentifierError",
    "Joined",
    "MissingRequiredArgumentError",
    "Raw",
    "Sequence",
    "StructuralError",
    "TexRenderError",
    "Text",
    "escape_latex_chars",
    "render",
    "render_bytes",
    "to_element",
]
