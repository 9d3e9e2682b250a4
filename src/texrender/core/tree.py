"""Element tree for programmatic LaTeX construction.

A document is a tree of immutable elements. The variant set is closed: the
renderer matches every variant exhaustively, so new kinds of nodes are added
here rather than by subclassing elsewhere.

The tree only guarantees syntactic well-formedness (every ``\\begin`` has its
``\\end``, every group is closed). It does not check semantics, so a tree may
still contain two ``\\documentclass`` calls.
"""

from __future__ import annotations

from collections.abc import Iterable, Set
from dataclasses import dataclass, field
from decimal import Decimal
import re
from typing import TypeAlias

from .exceptions import InvalidArityError, InvalidElementError, InvalidIdentifierError


# Control words (letters, optionally starred) or a single control symbol.
_COMMAND_NAME_PATTERN = re.compile(r"(?:[A-Za-z@]+\*?|[^A-Za-z@\s])")
_ENVIRONMENT_NAME_PATTERN = re.compile(r"[A-Za-z@][A-Za-z0-9@:._-]*\*?")

#: Minimum number of mandatory arguments for well-known commands.
COMMAND_ARITY: dict[str, int] = {
    "documentclass": 1,
    "usepackage": 1,
    "begin": 1,
    "end": 1,
    "part": 1,
    "chapter": 1,
    "section": 1,
    "subsection": 1,
    "subsubsection": 1,
    "paragraph": 1,
    "subparagraph": 1,
    "part*": 1,
    "chapter*": 1,
    "section*": 1,
    "subsection*": 1,
    "subsubsection*": 1,
    "textbf": 1,
    "textit": 1,
    "texttt": 1,
    "textsc": 1,
    "underline": 1,
    "emph": 1,
    "label": 1,
    "ref": 1,
    "pageref": 1,
    "cite": 1,
    "footnote": 1,
    "title": 1,
    "author": 1,
    "date": 1,
    "url": 1,
    "href": 2,
    "includegraphics": 1,
    "input": 1,
    "include": 1,
    "caption": 1,
    "newcommand": 2,
    "renewcommand": 2,
    "setlength": 2,
    "multicolumn": 3,
}


def _validate_identifier(name: object, pattern: re.Pattern[str], kind: str) -> str:
    if not isinstance(name, str) or not pattern.fullmatch(name):
        raise InvalidIdentifierError(name, kind)
    return name


@dataclass(frozen=True, slots=True)
class Raw:
    """Markup inserted verbatim.

    No escaping is applied. The content is the caller's responsibility and can
    break the document; use :class:`Text` for anything not already valid LaTeX.
    """

    content: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.content, str):
            raise InvalidElementError(f"Raw content must be a string, got {self.content!r}")


@dataclass(frozen=True, slots=True)
class Text:
    """Free text, escaped when rendered."""

    content: str

    def __post_init__(self) -> None:
        if not isinstance(self.content, str):
            raise InvalidElementError(f"Text content must be a string, got {self.content!r}")


@dataclass(frozen=True, slots=True)
class Command:
    """A macro call such as ``\\name[opt]{arg}``.

    ``arity`` is the minimum number of mandatory arguments. When omitted it is
    taken from :data:`COMMAND_ARITY` (zero for unknown commands).
    """

    name: str
    opt_args: tuple[Element, ...] = ()
    args: tuple[Element, ...] = ()
    arity: int | None = field(default=None, kw_only=True)

    def __post_init__(self) -> None:
        _validate_identifier(self.name, _COMMAND_NAME_PATTERN, "command")
        object.__setattr__(self, "opt_args", to_elements(self.opt_args))
        object.__setattr__(self, "args", to_elements(self.args))
        if self.arity is not None and self.arity < 0:
            raise InvalidArityError(self.name, self.arity)

    @property
    def required_arity(self) -> int:
        if self.arity is not None:
            return self.arity
        return COMMAND_ARITY.get(self.name, 0)


@dataclass(frozen=True, slots=True)
class Environment:
    """A ``\\begin{name}`` ... ``\\end{name}`` block around ``body``."""

    name: str
    body: Element = field(default_factory=Raw)
    opt_args: tuple[Element, ...] = field(default=(), kw_only=True)
    args: tuple[Element, ...] = field(default=(), kw_only=True)

    def __post_init__(self) -> None:
        _validate_identifier(self.name, _ENVIRONMENT_NAME_PATTERN, "environment")
        object.__setattr__(self, "body", to_element(self.body))
        object.__setattr__(self, "opt_args", to_elements(self.opt_args))
        object.__setattr__(self, "args", to_elements(self.args))


@dataclass(frozen=True, slots=True)
class Sequence:
    """Block-level children, each rendered on its own line."""

    children: tuple[Element, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", to_elements(self.children))


@dataclass(frozen=True, slots=True)
class Group:
    """Children concatenated without any separator."""

    children: tuple[Element, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", to_elements(self.children))


@dataclass(frozen=True, slots=True)
class Braced:
    """An anonymous ``{...}`` group."""

    children: tuple[Element, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", to_elements(self.children))


@dataclass(frozen=True, slots=True)
class Joined:
    """Children separated by a raw ``separator`` (``,`` or `` & `` typically)."""

    separator: str
    children: tuple[Element, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.separator, str):
            raise InvalidElementError(f"Separator must be a string, got {self.separator!r}")
        object.__setattr__(self, "children", to_elements(self.children))


@dataclass(frozen=True, slots=True)
class Document:
    """Root of a document: class declaration plus the ``document`` environment."""

    class_decl: Element
    body: Element = field(default_factory=Sequence)

    def __post_init__(self) -> None:
        object.__setattr__(self, "class_decl", to_element(self.class_decl))
        body = to_element(self.body)
        if not (isinstance(body, Environment) and body.name == "document"):
            body = Environment("document", body)
        object.__setattr__(self, "body", body)


Element: TypeAlias = (
    Raw | Text | Command | Environment | Sequence | Group | Braced | Joined | Document
)

ELEMENT_TYPES: tuple[type, ...] = (
    Raw,
    Text,
    Command,
    Environment,
    Sequence,
    Group,
    Braced,
    Joined,
    Document,
)


def to_element(value: object) -> Element:
    """Convert ``value`` into an element.

    * elements are returned unchanged;
    * strings become escaped :class:`Text`;
    * numbers become :class:`Text` of their ``str()``;
    * ``None`` becomes an empty :class:`Raw`;
    * other ordered iterables become a :class:`Sequence` of their converted
      items; sets are rejected because their order is arbitrary.
    """
    if isinstance(value, ELEMENT_TYPES):
        return value  # type: ignore[return-value]
    if isinstance(value, str):
        return Text(value)
    if isinstance(value, bool):
        raise InvalidElementError(f"Cannot convert boolean {value!r} into an element")
    if isinstance(value, (int, float, Decimal)):
        return Text(str(value))
    if value is None:
        return Raw("")
    if isinstance(value, (bytes, bytearray)):
        raise InvalidElementError("Bytes must be decoded before building elements")
    if isinstance(value, Set):
        raise InvalidElementError("Unordered collections cannot become a sequence of elements")
    if isinstance(value, Iterable):
        return Sequence(tuple(value))
    raise InvalidElementError(f"Cannot convert {type(value).__name__} into an element")


def to_elements(values: Iterable[object] | object) -> tuple[Element, ...]:
    """Convert a collection of values into a tuple of elements.

    A single string or element is treated as one item and ``None`` as no items.
    """
    if values is None:
        return ()
    if isinstance(values, (str, *ELEMENT_TYPES)):
        return (to_element(values),)
    if not isinstance(values, Iterable) or isinstance(values, (bytes, bytearray, Set)):
        return (to_element(values),)
    return tuple(to_element(value) for value in values)


__all__ = [
    "COMMAND_ARITY",
    "ELEMENT_TYPES",
    "Braced",
    "Command",
    "Document",
    "Element",
    "Environment",
    "Group",
    "Joined",
    "Raw",
    "Sequence",
    "Text",
    "to_element",
    "to_elements",
]
