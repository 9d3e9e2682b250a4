"""Depth-first serialisation of element trees into LaTeX source."""

from __future__ import annotations

from .escaping import escape_latex_chars
from .exceptions import InvalidElementError, MissingRequiredArgumentError
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


def _terminates_line(element: Element) -> bool:
    """Return whether ``element`` ends its own last line at block level."""
    while isinstance(element, Group) and element.children:
        element = element.children[-1]
    return isinstance(element, Sequence)


class _Writer:
    """Accumulates output for a single render call."""

    __slots__ = ("legacy_accents", "parts")

    def __init__(self, *, legacy_accents: bool) -> None:
        self.legacy_accents = legacy_accents
        self.parts: list[str] = []

    def capture(self, element: Element, *, inline: bool) -> str:
        """Render ``element`` into a detached buffer and return it."""
        saved = self.parts
        self.parts = []
        try:
            self.write(element, inline=inline)
            return "".join(self.parts)
        finally:
            self.parts = saved

    def write_arguments(self, opt_args: tuple[Element, ...], args: tuple[Element, ...]) -> None:
        for option in opt_args:
            self.parts.append("[")
            self.write(option, inline=True)
            self.parts.append("]")
        for argument in args:
            self.parts.append("{")
            self.write(argument, inline=True)
            self.parts.append("}")

    def write(self, element: Element, *, inline: bool) -> None:
        match element:
            case Raw(content=content):
                self.parts.append(content)
            case Text(content=content):
                self.parts.append(escape_latex_chars(content, legacy_accents=self.legacy_accents))
            case Command():
                required = element.required_arity
                if len(element.args) < required:
                    raise MissingRequiredArgumentError(element.name, required, len(element.args))
                self.parts.append(f"\\{element.name}")
                self.write_arguments(element.opt_args, element.args)
            case Environment(name=name, body=body):
                self.parts.append(f"\\begin{{{name}}}")
                self.write_arguments(element.opt_args, element.args)
                self.parts.append("\n")
                content = self.capture(body, inline=False)
                if content and not content.endswith("\n"):
                    content += "\n"
                self.parts.append(content)
                self.parts.append(f"\\end{{{name}}}")
            case Sequence(children=children):
                for child in children:
                    self.write(child, inline=inline)
                    # Nested sequences already terminate their own lines.
                    if not inline and not _terminates_line(child):
                        self.parts.append("\n")
            case Group(children=children):
                for child in children:
                    self.write(child, inline=inline)
            case Braced(children=children):
                self.parts.append("{")
                for child in children:
                    self.write(child, inline=True)
                self.parts.append("}")
            case Joined(separator=separator, children=children):
                for index, child in enumerate(children):
                    if index:
                        self.parts.append(separator)
                    self.write(child, inline=True)
            case Document(class_decl=class_decl, body=body):
                self.write(class_decl, inline=False)
                self.parts.append("\n")
                self.write(body, inline=False)
                self.parts.append("\n")
            case _:
                raise InvalidElementError(
                    f"Cannot render object of type {type(element).__name__}"
                )


def render(element: Element | object, *, legacy_accents: bool = False) -> str:
    """Render ``element`` into LaTeX source.

    Non-element values are converted with :func:`~texrender.core.tree.to_element`
    first, so plain strings render as escaped text.

    Rendering is all-or-nothing: a structural error such as
    :class:`~texrender.core.exceptions.MissingRequiredArgumentError` propagates
    and no partial output is returned.
    """
    writer = _Writer(legacy_accents=legacy_accents)
    writer.write(to_element(element), inline=False)
    return "".join(writer.parts)


def render_bytes(
    element: Element | object,
    *,
    encoding: str = "utf-8",
    legacy_accents: bool = False,
) -> bytes:
    """Render ``element`` and encode the result for the LaTeX engine."""
    return render(element, legacy_accents=legacy_accents).encode(encoding)


__all__ = ["render", "render_bytes"]
