"""Exception hierarchy for document construction and the LaTeX pipeline.

Structural errors come from the element tree and the renderer. Pipeline errors
come from the external ``latexmk`` run. The two branches never share a class
below :class:`TexRenderError`, so callers can tell a malformed tree apart from
a failed compilation.
"""

from __future__ import annotations


class TexRenderError(RuntimeError):
    """Base exception for every texrender failure."""


class StructuralError(TexRenderError, ValueError):
    """Raised when an element tree violates a structural precondition."""


class MissingRequiredArgumentError(StructuralError):
    """Raised when a command is rendered with fewer arguments than it needs."""

    def __init__(self, name: str, required: int, given: int) -> None:
        self.name = name
        self.required = required
        self.given = given
        super().__init__(
            f"\\{name} requires at least {required} argument(s), got {given}"
        )


class InvalidIdentifierError(StructuralError):
    """Raised when a command or environment name is not a valid identifier."""

    def __init__(self, identifier: object, kind: str = "command") -> None:
        self.identifier = identifier
        self.kind = kind
        super().__init__(f"Invalid {kind} name: {identifier!r}")


class InvalidArityError(StructuralError):
    """Raised when a command declares a negative number of required arguments."""

    def __init__(self, name: str, arity: int) -> None:
        self.name = name
        self.arity = arity
        super().__init__(f"Arity of \\{name} must be non-negative, got {arity}")


class InvalidElementError(StructuralError, TypeError):
    """Raised when a value cannot be turned into an element."""


class PipelineError(TexRenderError):
    """Base exception for failures of the external render pipeline."""


class TempdirCreationError(PipelineError):
    """Raised when the temporary working directory cannot be created."""


class WriteInputFileError(PipelineError):
    """Raised when the LaTeX source cannot be written to the working directory."""


class ReadOutputFileError(PipelineError):
    """Raised when the produced PDF cannot be read back."""


class EngineLaunchError(PipelineError):
    """Raised when the LaTeX engine binary cannot be executed."""


class LatexError(PipelineError):
    """Raised when latexmk exits unsuccessfully.

    ``stdout`` and ``stderr`` hold the tool's output verbatim.
    """

    def __init__(self, status: int | None, stdout: bytes, stderr: bytes) -> None:
        self.status = status
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(f"LaTeX failure (exit status {status})")


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "EngineLaunchError",
    "InvalidArityError",
    "InvalidElementError",
    "InvalidIdentifierError",
    "LatexError",
    "MissingRequiredArgumentError",
    "PipelineError",
    "ReadOutputFileError",
    "StructuralError",
    "TempdirCreationError",
    "TexRenderError",
    "WriteInputFileError",
    "exception_hint",
    "exception_messages",
]
