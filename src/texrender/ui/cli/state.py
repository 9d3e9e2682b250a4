"""Shared CLI state management utilities."""

from __future__ import annotations

from contextvars import ContextVar
from dataclasses import dataclass, field
import sys
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from rich.console import Console

__all__ = [
    "CLIState",
    "debug_enabled",
    "emit_error",
    "get_cli_state",
    "render_message",
    "set_cli_state",
]


@dataclass(slots=True)
class CLIState:
    """Shared state controlling CLI diagnostics."""

    verbosity: int = 0
    show_tracebacks: bool = False
    _console: Console | None = field(default=None, init=False, repr=False)
    _err_console: Console | None = field(default=None, init=False, repr=False)

    @property
    def console(self) -> Console:
        """Return a lazily instantiated stdout console."""
        from rich.console import Console

        current = getattr(self._console, "file", None)
        if self._console is None or current is not sys.stdout:
            self._console = Console(file=sys.stdout)
        return self._console

    @property
    def err_console(self) -> Console:
        """Return a lazily instantiated stderr console."""
        from rich.console import Console

        current = getattr(self._err_console, "file", None)
        if self._err_console is None or current is not sys.stderr:
            self._err_console = Console(file=sys.stderr, highlight=False)
        return self._err_console


_STATE_VAR: ContextVar[CLIState | None] = ContextVar("texrender_cli_state", default=None)


def get_cli_state() -> CLIState:
    """Return the CLI state of the current context, creating it on first use."""
    state = _STATE_VAR.get(None)
    if state is None:
        state = CLIState()
        _STATE_VAR.set(state)
    return state


def set_cli_state(*, verbosity: int | None = None, debug: bool | None = None) -> CLIState:
    """Update the CLI state, returning the current instance."""
    state = get_cli_state()
    if verbosity is not None:
        state.verbosity = max(0, verbosity)
    if debug is not None:
        state.show_tracebacks = debug
    return state


def _exception_chain(exc: BaseException) -> list[str]:
    chain: list[str] = []
    visited: set[int] = set()
    current = exc.__cause__ or exc.__context__
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        chain.append(f"{type(current).__name__}: {current}")
        current = current.__cause__ or current.__context__
    return chain


def render_message(
    level: str,
    message: str,
    *,
    exception: BaseException | None = None,
) -> None:
    """Render a formatted message to stderr, including optional diagnostics."""
    from rich.text import Text

    state = get_cli_state()
    style = "red" if level == "error" else "yellow"
    text = Text.assemble((f"{level}: ", f"bold {style}"), (message, style))

    extra_lines: list[str] = []
    if exception is not None and state.verbosity >= 1:
        detail = str(exception).strip()
        if detail and detail not in message:
            extra_lines.append(detail)
        extra_lines.append(f"type: {type(exception).__name__}")
        if state.verbosity >= 2:
            chain = _exception_chain(exception)
            if chain:
                extra_lines.append("caused by:")
                extra_lines.extend(f"  {entry}" for entry in chain)

    if extra_lines:
        text.append("\n")
        text.append("\n".join(extra_lines), style=style)

    state.err_console.print(text)


def emit_error(message: str, *, exception: BaseException | None = None) -> None:
    """Log an error-level message to stderr respecting verbosity settings."""
    render_message("error", message, exception=exception)


def debug_enabled() -> bool:
    """Return whether full tracebacks should be displayed."""
    return get_cli_state().show_tracebacks
