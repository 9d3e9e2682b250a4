"""Compile LaTeX sources to PDF through an external ``latexmk`` run.

This is a thin process wrapper: bytes in, PDF bytes or a failure out. The
engine's output is handed back verbatim on failure and never parsed.

TEXINPUTS
: The search path for classes, packages and included files can be extended
  with :meth:`TexRender.add_texinput`; the directories are exported through the
  ``TEXINPUTS`` environment variable of the engine process.

Assets
: Files added with :meth:`TexRender.add_asset_from_bytes` or
  :meth:`TexRender.add_asset_from_file` are stored in a temporary directory
  owned by the :class:`TexRender` instance. That directory is added to
  ``TEXINPUTS`` automatically and removed by :meth:`TexRender.close`.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
import subprocess
import tempfile
from types import TracebackType

from texrender.core.config import RenderSettings
from texrender.core.exceptions import (
    EngineLaunchError,
    LatexError,
    ReadOutputFileError,
    TempdirCreationError,
    WriteInputFileError,
)
from texrender.core.renderer import render_bytes
from texrender.core.tree import Element


logger = logging.getLogger(__name__)

INPUT_FILENAME = "input.tex"
OUTPUT_FILENAME = "input.pdf"


class TexRender:
    """A configured LaTeX render of a single source buffer."""

    def __init__(self, source: bytes, settings: RenderSettings | None = None) -> None:
        self.source = bytes(source)
        self.settings = settings.model_copy(deep=True) if settings else RenderSettings()
        self._assets_dir: tempfile.TemporaryDirectory[str] | None = None

    @classmethod
    def from_bytes(cls, source: bytes, settings: RenderSettings | None = None) -> TexRender:
        """Create a render from raw source bytes."""
        return cls(source, settings)

    @classmethod
    def from_file(cls, path: str | Path, settings: RenderSettings | None = None) -> TexRender:
        """Create a render from an existing ``.tex`` file."""
        return cls(Path(path).read_bytes(), settings)

    @classmethod
    def from_element(
        cls, element: Element, settings: RenderSettings | None = None
    ) -> TexRender:
        """Create a render from an element tree, rendered with ``settings``."""
        settings = settings or RenderSettings()
        source = render_bytes(
            element,
            encoding=settings.encoding,
            legacy_accents=settings.legacy_latex_accents,
        )
        return cls(source, settings)

    def __enter__(self) -> TexRender:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Remove the assets directory, if one was created."""
        if self._assets_dir is None:
            return
        assets_path = Path(self._assets_dir.name)
        self.settings.texinputs = [
            entry for entry in self.settings.texinputs if entry != assets_path
        ]
        self._assets_dir.cleanup()
        self._assets_dir = None

    @property
    def assets_dir(self) -> Path | None:
        """Location of the assets directory, once an asset has been added."""
        return Path(self._assets_dir.name) if self._assets_dir is not None else None

    def _ensure_assets_dir(self) -> Path:
        if self._assets_dir is None:
            self._assets_dir = tempfile.TemporaryDirectory(prefix="texrender-assets")
            assets_path = Path(self._assets_dir.name)
            self.settings.texinputs.append(assets_path)
            logger.debug("Created assets directory %s", assets_path)
        return Path(self._assets_dir.name)

    def add_asset_from_bytes(self, filename: str | Path, data: bytes) -> Path:
        """Store ``data`` as ``filename`` inside the assets directory."""
        target = self._ensure_assets_dir() / filename
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
        logger.debug("Wrote asset %s (%d bytes)", target, len(data))
        return target

    def add_asset_from_file(self, path: str | Path) -> Path:
        """Copy the file at ``path`` into the assets directory."""
        source = Path(path)
        if not source.name:
            raise ValueError(f"Asset path has no file name: {path}")
        return self.add_asset_from_bytes(source.name, source.read_bytes())

    def add_texinput(self, input_path: str | Path) -> TexRender:
        """Append a directory to ``TEXINPUTS``."""
        self.settings.texinputs.append(Path(input_path))
        return self

    def set_latexmk_path(self, latexmk_path: str | Path) -> TexRender:
        """Use ``latexmk_path`` instead of the ``latexmk`` found on ``PATH``."""
        self.settings.latexmk_path = Path(latexmk_path)
        return self

    def build_command(self, input_file: Path) -> list[str]:
        """Return the latexmk command line compiling ``input_file``."""
        command = [
            os.fspath(self.settings.latexmk_path),
            "-interaction=batchmode",
            "-halt-on-error",
            "-file-line-error",
            "-pdf",
        ]
        if self.settings.use_xelatex:
            command.append("-xelatex")
        if not self.settings.allow_shell_escape:
            command.append("-no-shell-escape")
        command.append(os.fspath(input_file))
        return command

    def build_env(self) -> dict[str, str]:
        """Return the engine environment with ``TEXINPUTS`` populated."""
        env = os.environ.copy()
        # The leading separator keeps TeX's default search path in front.
        env["TEXINPUTS"] = "".join(
            f"{os.pathsep}{os.fspath(entry)}" for entry in self.settings.texinputs
        )
        return env

    def render(self) -> bytes:
        """Compile the source and return the produced PDF bytes."""
        try:
            workdir = tempfile.TemporaryDirectory(prefix="texrender")
        except OSError as exc:
            raise TempdirCreationError(f"could not create temporary directory: {exc}") from exc

        with workdir as tmp:
            tmp_path = Path(tmp)
            input_file = tmp_path / INPUT_FILENAME
            output_file = tmp_path / OUTPUT_FILENAME

            try:
                input_file.write_bytes(self.source)
            except OSError as exc:
                raise WriteInputFileError(f"could not write input file: {exc}") from exc

            argv = self.build_command(input_file)
            logger.debug("Running %s in %s", " ".join(argv), tmp_path)
            try:
                process = subprocess.run(
                    argv,
                    check=False,
                    capture_output=True,
                    cwd=tmp_path,
                    env=self.build_env(),
                )
            except OSError as exc:
                raise EngineLaunchError(f"could not run latexmk: {exc}") from exc

            if process.returncode != 0:
                logger.warning("latexmk exited with status %s", process.returncode)
                raise LatexError(process.returncode, process.stdout, process.stderr)

            try:
                return output_file.read_bytes()
            except OSError as exc:
                raise ReadOutputFileError(f"could not read output file: {exc}") from exc


__all__ = ["INPUT_FILENAME", "OUTPUT_FILENAME", "TexRender"]
