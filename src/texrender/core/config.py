"""Configuration model for the LaTeX render pipeline.

RenderSettings

`latexmk_path` (`Path`)
: Location of the `latexmk` executable. A bare name is looked up on `PATH`.

`use_xelatex` (`bool`)
: Compile with XeLaTeX (`-xelatex`). Disable to fall back to pdfLaTeX.

`allow_shell_escape` (`bool`)
: Permit `\\write18`. When `False` the engine receives `-no-shell-escape`.

`texinputs` (`list[Path]`)
: Additional directories searched for classes, packages and included files.
  They are exported through the `TEXINPUTS` environment variable.

`legacy_latex_accents` (`bool`)
: Escape non-ASCII characters with legacy LaTeX macros when rendering element
  trees, for engines without Unicode input support.

`encoding` (`str`)
: Character encoding used to turn rendered element trees into bytes.
"""

from __future__ import annotations

import codecs
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RenderSettings(BaseModel):
    """Options controlling a single latexmk run."""

    model_config = ConfigDict(extra="forbid")

    latexmk_path: Path = Path("latexmk")
    use_xelatex: bool = True
    allow_shell_escape: bool = False
    texinputs: list[Path] = Field(default_factory=list)
    legacy_latex_accents: bool = False
    encoding: str = "utf-8"

    @field_validator("encoding")
    @classmethod
    def check_encoding(cls, value: str) -> str:
        """Reject encodings Python cannot encode to."""
        try:
            codecs.lookup(value)
        except LookupError as exc:
            raise ValueError(f"Unknown encoding: {value}") from exc
        return value


__all__ = ["RenderSettings"]
