"""Escaping of free text for inclusion in LaTeX documents."""

from __future__ import annotations

import re
import unicodedata

from pylatexenc.latexencode import unicode_to_latex


LATEX_ESCAPE_MAP: dict[str, str] = {
    "&": r"\&",
    "%": r"\%",
    "$": r"\$",
    "#": r"\#",
    "_": r"\_",
    "{": r"\{",
    "}": r"\}",
    "~": r"\textasciitilde{}",
    "^": r"\textasciicircum{}",
    "\\": r"\textbackslash{}",
    "<": r"\textless{}",
    ">": r"\textgreater{}",
    "|": r"\textbar{}",
    '"': r"\textquotedbl{}",
    # Brackets would otherwise be read as the optional argument of a preceding \\.
    "[": "{[}",
    "]": "{]}",
}

# Symbol accents (\' \^ ...) are always single-token macros. Letter accents
# (\v \c ...) only count when they are not the start of a longer control word
# such as \rho or \cdot.
_SYMBOL_ACCENTS = re.escape("`'^\"~=.")
_LETTER_ACCENTS = "Hrvuck"
_ACCENT_NEEDS_BRACES_PATTERN = re.compile(
    r"(?<!\\)\\([" + _SYMBOL_ACCENTS + r"])\s*([A-Za-z])(?!\{)"
    r"|(?<!\\)\\([" + _LETTER_ACCENTS + r"])\s+([A-Za-z])(?![A-Za-z{])"
)
_ACCENT_CONTROL_TARGET_PATTERN = re.compile(
    r"(?<!\\)\\([" + _SYMBOL_ACCENTS + r"])\s*(\\[ij])(?![A-Za-z])"
    r"|(?<!\\)\\([" + _LETTER_ACCENTS + r"])\s+(\\[ij])(?![A-Za-z])"
)


def _wrap_latex_output(payload: str) -> str:
    """Ensure accent macros wrap their payload in braces."""

    def _repl(match: re.Match[str]) -> str:
        symbol, char, letter, letter_char = match.groups()
        return f"\\{symbol or letter}{{{char or letter_char}}}"

    payload = _ACCENT_NEEDS_BRACES_PATTERN.sub(_repl, payload)
    return _ACCENT_CONTROL_TARGET_PATTERN.sub(_repl, payload)


def _should_skip_encoding(char: str) -> bool:
    try:
        name = unicodedata.name(char)
    except ValueError:
        return False
    if "SUPERSCRIPT" in name or "SUBSCRIPT" in name:
        return True
    return "MODIFIER LETTER" in name and ("SMALL" in name or "CAPITAL" in name)


def _encode_legacy(chunk: str) -> str:
    encoded = unicode_to_latex(chunk, non_ascii_only=True, unknown_char_warning=False)
    return _wrap_latex_output(encoded)


def escape_latex_chars(text: str, *, legacy_accents: bool = False) -> str:
    """Escape LaTeX special characters in ``text``.

    Every character listed in :data:`LATEX_ESCAPE_MAP` is replaced by its
    escape sequence, everything else passes through. The function is total:
    it never raises for a string input.

    With ``legacy_accents`` enabled, non-ASCII characters are also converted
    into legacy macros (``é`` becomes ``\\'{e}``) for engines without Unicode
    input support. Superscript, subscript and modifier letters are kept as is.
    """
    if not text:
        return text
    escaped = "".join(LATEX_ESCAPE_MAP.get(char, char) for char in text)
    if not legacy_accents or escaped.isascii():
        return escaped

    parts: list[str] = []
    buffer: list[str] = []
    for char in escaped:
        if _should_skip_encoding(char):
            if buffer:
                parts.append(_encode_legacy("".join(buffer)))
                buffer.clear()
            parts.append(char)
        else:
            buffer.append(char)
    if buffer:
        parts.append(_encode_legacy("".join(buffer)))
    return "".join(parts)


__all__ = ["LATEX_ESCAPE_MAP", "escape_latex_chars"]
