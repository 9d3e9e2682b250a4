"""Primary public API for texrender.

Build a document as a tree of elements, render it to LaTeX source, and
optionally compile it with latexmk::

    from texrender import Document, TexRender, document, documentclass, render, section

    tex = Document(documentclass("article"), document(section("Hello"), "50% off"))
    source = render(tex)
    pdf = TexRender.from_element(tex).render()
"""

from __future__ import annotations

from texrender.adapters.latexmk import TexRender
from texrender.core.config import RenderSettings
from texrender.core.escaping import LATEX_ESCAPE_MAP, escape_latex_chars
from texrender.core.exceptions import (
    EngineLaunchError,
    InvalidArityError,
    InvalidElementError,
    InvalidIdentifierError,
    LatexError,
    MissingRequiredArgumentError,
    PipelineError,
    ReadOutputFileError,
    StructuralError,
    TempdirCreationError,
    TexRenderError,
    WriteInputFileError,
)
from texrender.core.library import (
    author,
    braced,
    chapter,
    cite,
    command,
    date,
    document,
    documentclass,
    elems,
    emph,
    enumerated,
    environment,
    group,
    hline,
    item,
    itemize,
    joined,
    label,
    maketitle,
    newpage,
    paragraph,
    part,
    raw,
    ref,
    section,
    subsection,
    subsubsection,
    table_row,
    tabular,
    text,
    textbf,
    textit,
    texttt,
    title,
    usepackage,
)
from texrender.core.renderer import render, render_bytes
from texrender.core.tree import (
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
from texrender.version import get_version


__version__ = get_version()


__all__ = [
    "LATEX_ESCAPE_MAP",
    "Braced",
    "Command",
    "Document",
    "Element",
    "EngineLaunchError",
    "Environment",
    "Group",
    "InvalidArityError",
    "InvalidElementError",
    "InvalidIdentifierError",
    "Joined",
    "LatexError",
    "MissingRequiredArgumentError",
    "PipelineError",
    "Raw",
    "ReadOutputFileError",
    "RenderSettings",
    "Sequence",
    "StructuralError",
    "TempdirCreationError",
    "TexRender",
    "TexRenderError",
    "Text",
    "WriteInputFileError",
    "__version__",
    "author",
    "braced",
    "chapter",
    "cite",
    "command",
    "date",
    "document",
    "documentclass",
    "elems",
    "emph",
    "enumerated",
    "environment",
    "escape_latex_chars",
    "group",
    "hline",
    "item",
    "itemize",
    "joined",
    "label",
    "maketitle",
    "newpage",
    "paragraph",
    "part",
    "raw",
    "ref",
    "render",
    "render_bytes",
    "section",
    "subsection",
    "subsubsection",
    "table_row",
    "tabular",
    "text",
    "textbf",
    "textit",
    "texttt",
    "title",
    "to_element",
    "usepackage",
]
