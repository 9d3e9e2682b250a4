from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from texrender.adapters.latexmk import TexRender
from texrender.core.exceptions import EngineLaunchError, LatexError
from texrender.ui.cli import app
import texrender.ui.cli.state as cli_state


runner = CliRunner()


@pytest.fixture(autouse=True)
def _reset_state() -> None:
    cli_state.set_cli_state(verbosity=0, debug=False)


def _source(tmp_path: Path) -> Path:
    source = tmp_path / "doc.tex"
    source.write_text(
        "\\documentclass{article}\n\\begin{document}\nhi\n\\end{document}\n", encoding="utf-8"
    )
    return source


def test_escape_command() -> None:
    result = runner.invoke(app, ["escape", "50% of R&D"])

    assert result.exit_code == 0
    assert result.output.strip() == r"50\% of R\&D"


def test_escape_command_legacy_accents() -> None:
    result = runner.invoke(app, ["escape", "--legacy-accents", "café"])

    assert result.exit_code == 0
    assert "\\'{e}" in result.output


def test_version_flag() -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert result.output.startswith("texrender ")


def test_compile_writes_pdf(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    source = _source(tmp_path)
    asset = tmp_path / "style.sty"
    asset.write_text("% style", encoding="utf-8")
    seen: dict[str, Any] = {}

    def fake_render(self: TexRender) -> bytes:
        seen["source"] = self.source
        seen["settings"] = self.settings.model_copy(deep=True)
        seen["asset"] = (self.assets_dir / "style.sty").read_bytes()
        return b"%PDF"

    monkeypatch.setattr(TexRender, "render", fake_render)

    result = runner.invoke(
        app,
        [
            "compile",
            str(source),
            "--texinput",
            str(tmp_path),
            "--asset",
            str(asset),
            "--pdflatex",
            "--latexmk",
            "/opt/latexmk",
        ],
    )

    assert result.exit_code == 0, result.output
    assert (tmp_path / "doc.pdf").read_bytes() == b"%PDF"
    assert seen["source"] == source.read_bytes()
    assert seen["asset"] == b"% style"
    settings = seen["settings"]
    assert settings.use_xelatex is False
    assert settings.allow_shell_escape is False
    assert settings.latexmk_path == Path("/opt/latexmk")
    assert settings.texinputs[0] == tmp_path


def test_compile_custom_output(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    source = _source(tmp_path)
    target = tmp_path / "out" / "final.pdf"
    target.parent.mkdir()
    monkeypatch.setattr(TexRender, "render", lambda self: b"%PDF")

    result = runner.invoke(app, ["compile", str(source), "-o", str(target)])

    assert result.exit_code == 0, result.output
    assert target.read_bytes() == b"%PDF"


def test_compile_reports_bad_output(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    source = _source(tmp_path)
    target = tmp_path / "missing" / "final.pdf"
    monkeypatch.setattr(TexRender, "render", lambda self: b"%PDF")

    result = runner.invoke(app, ["compile", str(source), "-o", str(target)])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "error:" in result.output
    assert not target.exists()


def test_compile_reports_latex_failure(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    source = _source(tmp_path)

    def failing(self: TexRender) -> bytes:
        raise LatexError(1, b"! Emergency stop.\n", b"")

    monkeypatch.setattr(TexRender, "render", failing)

    result = runner.invoke(app, ["compile", str(source)])

    assert result.exit_code == 1
    assert "! Emergency stop." in result.output
    assert "LaTeX failure" in result.output
    assert not (tmp_path / "doc.pdf").exists()


def test_compile_reports_missing_engine(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    source = _source(tmp_path)

    def failing(self: TexRender) -> bytes:
        raise EngineLaunchError("could not run latexmk") from FileNotFoundError("latexmk")

    monkeypatch.setattr(TexRender, "render", failing)

    result = runner.invoke(app, ["compile", str(source)])

    assert result.exit_code == 1
    assert "latexmk" in result.output


def test_compile_requires_existing_source(tmp_path: Path) -> None:
    result = runner.invoke(app, ["compile", str(tmp_path / "missing.tex")])

    assert result.exit_code != 0
