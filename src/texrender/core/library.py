"""Factories and shortcuts for building element trees.

The variant classes in :mod:`texrender.core.tree` are usable directly, but
most documents read better with these helpers::

    tex = Document(
        documentclass("article"),
        document(
            section("Hello, world"),
            "This is fun & easy.",
        ),
    )

Titles and other free text passed as ``str`` are escaped. Identifiers such as
class names, package names, labels and column specifications are inserted
raw.
"""

from __future__ import annotations

from collections.abc import Iterable

from .tree import (
    Braced,
    Command,
    Element,
    Environment,
    Group,
    Joined,
    Raw,
    Sequence,
    Text,
    to_element,
    to_elements,
)


def raw(content: str) -> Raw:
    return Raw(content)


def text(content: object) -> Text:
    return Text(content if isinstance(content, str) else str(content))


def command(
    name: str,
    *args: object,
    opt_args: Iterable[object] | object = (),
    arity: int | None = None,
) -> Command:
    """Build ``\\name[opt_args...]{args...}``.

    A single string passed as ``opt_args`` is one optional argument.
    """
    return Command(name, opt_args, args, arity=arity)


def environment(
    name: str,
    *children: object,
    opt_args: Iterable[object] | object = (),
    args: Iterable[object] | object = (),
) -> Environment:
    return Environment(name, Sequence(children), opt_args=opt_args, args=args)


def elems(*children: object) -> Sequence:
    """Collect ``children`` into a block-level :class:`Sequence`."""
    return Sequence(children)


def group(*children: object) -> Group:
    return Group(children)


def braced(*children: object) -> Braced:
    return Braced(children)


def joined(separator: str, children: Iterable[object]) -> Joined:
    return Joined(separator, tuple(children))


def _options(options: Iterable[object] | str | None) -> tuple[Element, ...]:
    """Return a single comma-separated optional argument, or nothing."""
    if options is None:
        return ()
    if isinstance(options, str):
        options = (options,)
    items = tuple(Raw(option) if isinstance(option, str) else option for option in options)
    if not items:
        return ()
    return (Joined(",", items),)


def documentclass(name: str, options: Iterable[object] | str | None = ()) -> Command:
    """``\\documentclass[options]{name}``."""
    return Command("documentclass", _options(options), (Raw(name),))


def usepackage(name: str, options: Iterable[object] | str | None = ()) -> Command:
    """``\\usepackage[options]{name}``."""
    return Command("usepackage", _options(options), (Raw(name),))


def document(*children: object) -> Environment:
    """The ``document`` environment holding ``children`` one per line."""
    return Environment("document", Sequence(children))


def _heading(name: str, title: object, short_title: object | None, starred: bool) -> Command:
    if starred:
        name = f"{name}*"
    opt_args = () if short_title is None else (short_title,)
    return Command(name, opt_args, (title,))


def part(title: object, *, short_title: object | None = None, starred: bool = False) -> Command:
    return _heading("part", title, short_title, starred)


def chapter(title: object, *, short_title: object | None = None, starred: bool = False) -> Command:
    return _heading("chapter", title, short_title, starred)


def section(title: object, *, short_title: object | None = None, starred: bool = False) -> Command:
    """``\\section{title}``; ``starred`` gives the unnumbered ``\\section*``."""
    return _heading("section", title, short_title, starred)


def subsection(
    title: object, *, short_title: object | None = None, starred: bool = False
) -> Command:
    return _heading("subsection", title, short_title, starred)


def subsubsection(
    title: object, *, short_title: object | None = None, starred: bool = False
) -> Command:
    return _heading("subsubsection", title, short_title, starred)


def paragraph(title: object) -> Command:
    return Command("paragraph", (), (title,))


def textbf(content: object) -> Command:
    return Command("textbf", (), (content,))


def textit(content: object) -> Command:
    return Command("textit", (), (content,))


def texttt(content: object) -> Command:
    return Command("texttt", (), (content,))


def emph(content: object) -> Command:
    return Command("emph", (), (content,))


def label(key: str) -> Command:
    return Command("label", (), (Raw(key),))


def ref(key: str) -> Command:
    return Command("ref", (), (Raw(key),))


def cite(*keys: str) -> Command:
    return Command("cite", (), (Joined(",", tuple(Raw(key) for key in keys)),))


def title(content: object) -> Command:
    return Command("title", (), (content,))


def author(content: object) -> Command:
    return Command("author", (), (content,))


def date(content: object) -> Command:
    return Command("date", (), (content,))


def maketitle() -> Command:
    return Command("maketitle")


def newpage() -> Command:
    return Command("newpage")


def hline() -> Command:
    return Command("hline")


def item(*content: object, marker: object | None = None) -> Group:
    """An ``\\item`` followed by its inline content."""
    opt_args = () if marker is None else (marker,)
    parts: list[Element] = [Command("item", opt_args)]
    if content:
        parts.append(Raw(" "))
        parts.extend(to_elements(content))
    return Group(tuple(parts))


def _list_environment(name: str, items: Iterable[object]) -> Environment:
    entries = tuple(
        entry if isinstance(entry, Group) else item(entry) for entry in items
    )
    return Environment(name, Sequence(entries))


def itemize(*items: object) -> Environment:
    """``itemize`` with one ``\\item`` per entry; plain values are wrapped."""
    return _list_environment("itemize", items)


def enumerated(*items: object) -> Environment:
    return _list_environment("enumerate", items)


def table_row(*cells: object) -> Group:
    """Cells joined by `` & `` and terminated by ``\\\\``."""
    return Group((Joined(" & ", to_elements(cells)), Raw(r" \\")))


_ROW_PASSTHROUGH = (Raw, Text, Command, Group, Joined, Braced)


def tabular(spec: str, rows: Iterable[object], *, position: str | None = None) -> Environment:
    """``tabular`` with column ``spec``; rows given as sequences become table rows."""
    body: list[Element] = []
    for row in rows:
        if isinstance(row, (str, *_ROW_PASSTHROUGH)):
            body.append(to_element(row))
        else:
            body.append(table_row(*row))
    opt_args = () if position is None else (Raw(position),)
    return Environment("tabular", Sequence(tuple(body)), opt_args=opt_args, args=(Raw(spec),))


__all__ = [
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
    "usepackage",
]
