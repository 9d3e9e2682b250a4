"""Typer application wiring for the texrender CLI."""

from __future__ import annotations

import logging
from pathlib import Path
import sys
from typing import Annotated

import typer

from texrender.adapters.latexmk import TexRender
from texrender.core.config import RenderSettings
from texrender.core.escaping import escape_latex_chars
from texrender.core.exceptions import LatexError, TexRenderError, exception_hint
from texrender.version import get_version

from .state import debug_enabled, emit_error, get_cli_state, set_cli_state


app = typer.Typer(
    help="Compile LaTeX sources to PDF and escape text for LaTeX.",
    context_settings={"help_option_names": ["--help"]},
    no_args_is_help=True,
)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(f"texrender {get_version()}")
        raise typer.Exit()


@app.callback()
def configure(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            count=True,
            help="Increase CLI verbosity. Combine multiple times for additional diagnostics.",
        ),
    ] = 0,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Show full tracebacks when an unexpected error occurs."),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_print_version,
            is_eager=True,
            help="Show the installed version and exit.",
        ),
    ] = False,
) -> None:
    """Configure diagnostics shared by every command."""
    set_cli_state(verbosity=verbose, debug=debug)
    if verbose >= 2:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _write_engine_output(error: LatexError) -> None:
    stream = sys.stderr.buffer if hasattr(sys.stderr, "buffer") else None
    for payload in (error.stdout, error.stderr):
        if not payload:
            continue
        if stream is not None:
            stream.write(payload)
            stream.flush()
        else:
            sys.stderr.write(payload.decode("utf-8", errors="replace"))


@app.command("compile")
def compile_command(
    source: Annotated[
        Path,
        typer.Argument(exists=True, dir_okay=False, readable=True, help="LaTeX source file."),
    ],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Destination PDF (defaults to SOURCE.pdf)."),
    ] = None,
    texinputs: Annotated[
        list[Path] | None,
        typer.Option("--texinput", help="Directory appended to TEXINPUTS (repeatable)."),
    ] = None,
    assets: Annotated[
        list[Path] | None,
        typer.Option(
            "--asset",
            exists=True,
            dir_okay=False,
            help="File made available next to the source (repeatable).",
        ),
    ] = None,
    latexmk: Annotated[
        Path,
        typer.Option("--latexmk", help="Path to the latexmk executable."),
    ] = Path("latexmk"),
    pdflatex: Annotated[
        bool,
        typer.Option("--pdflatex", help="Compile with pdfLaTeX instead of XeLaTeX."),
    ] = False,
    shell_escape: Annotated[
        bool,
        typer.Option("--shell-escape", help="Allow the engine to run external commands."),
    ] = False,
) -> None:
    """Compile SOURCE to PDF with latexmk."""
    settings = RenderSettings(
        latexmk_path=latexmk,
        use_xelatex=not pdflatex,
        allow_shell_escape=shell_escape,
        texinputs=list(texinputs or []),
    )
    destination = output or source.with_suffix(".pdf")

    try:
        with TexRender.from_file(source, settings) as tex:
            for asset in assets or []:
                tex.add_asset_from_file(asset)
            pdf = tex.render()
        destination.write_bytes(pdf)
    except LatexError as exc:
        _write_engine_output(exc)
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc
    except (TexRenderError, OSError) as exc:
        if debug_enabled():
            raise
        emit_error(exception_hint(exc) or str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    get_cli_state().console.print(f"[green]Wrote {destination}[/]")


@app.command("escape")
def escape_command(
    text: Annotated[str, typer.Argument(help="Text to escape.")],
    legacy_accents: Annotated[
        bool,
        typer.Option(
            "--legacy-accents",
            help="Escape accented characters with legacy LaTeX macros.",
        ),
    ] = False,
) -> None:
    """Print TEXT escaped for inclusion in a LaTeX document."""
    typer.echo(escape_latex_chars(text, legacy_accents=legacy_accents))


def main() -> None:
    """Entry point compatible with console scripts."""
    try:
        app()
    except typer.Exit:
        raise
    except KeyboardInterrupt as exc:
        if debug_enabled():
            raise
        emit_error("Operation cancelled by user.", exception=exc)
        raise typer.Exit(code=1) from exc


__all__ = ["app", "main"]
