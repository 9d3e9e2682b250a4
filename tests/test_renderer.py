import threading

import pytest

from texrender.core.exceptions import (
    InvalidElementError,
    MissingRequiredArgumentError,
    StructuralError,
)
from texrender.core.library import document, documentclass, section
from texrender.core.renderer import render, render_bytes
from texrender.core.tree import (
    Braced,
    Command,
    Document,
    Environment,
    Group,
    Joined,
    Raw,
    Sequence,
    Text,
)


HELLO_WORLD = (
    "\\documentclass{article}\n"
    "\\begin{document}\n"
    "\\section{Hello, world}\n"
    "This is fun \\& easy.\n"
    "\\end{document}\n"
)


def test_hello_world_document() -> None:
    tex = Document(
        documentclass("article"),
        document(Sequence([section("Hello, world"), Text("This is fun & easy.")])),
    )

    assert render(tex) == HELLO_WORLD


def test_hello_world_with_plain_strings() -> None:
    tex = Document(
        documentclass("article"),
        document(section("Hello, world"), "This is fun & easy."),
    )

    assert render(tex) == HELLO_WORLD


def test_document_wraps_plain_body_in_document_environment() -> None:
    tex = Document(documentclass("article"), Sequence([section("Hello, world"), "This is fun & easy."]))

    assert render(tex) == HELLO_WORLD


def test_document_class_with_options() -> None:
    tex = Document(documentclass("article", ["12pt", "a4paper"]), document("Hi"))

    assert render(tex).startswith("\\documentclass[12pt,a4paper]{article}\n\\begin{document}\n")


def test_raw_is_identity() -> None:
    payload = r"\weird{&%$#_}~^\\"

    assert render(Raw(payload)) == payload


def test_text_without_special_characters_is_identity() -> None:
    payload = "Just some words, numbers 123 and punctuation."

    assert render(Text(payload)) == payload


def test_text_escapes_ampersands() -> None:
    rendered = render(Text("A & B & C"))

    assert rendered == r"A \& B \& C"
    assert "&" not in rendered.replace(r"\&", "")


def test_command_with_required_argument() -> None:
    assert render(Command("section", [], [Text("Hello, world")])) == "\\section{Hello, world}"


def test_command_optional_arguments_each_get_brackets() -> None:
    tex = Command("foo", [Raw("a"), Raw("b")], [Raw("x"), Raw("y")])

    assert render(tex) == r"\foo[a][b]{x}{y}"


def test_command_without_arguments() -> None:
    assert render(Command("maketitle")) == r"\maketitle"


def test_missing_required_argument_is_reported() -> None:
    with pytest.raises(MissingRequiredArgumentError) as excinfo:
        render(Command("section", [], []))

    assert excinfo.value.name == "section"
    assert excinfo.value.required == 1
    assert excinfo.value.given == 0
    assert isinstance(excinfo.value, StructuralError)


def test_explicit_arity_overrides_known_commands() -> None:
    with pytest.raises(MissingRequiredArgumentError):
        render(Command("mymacro", [], [Raw("one")], arity=2))

    assert render(Command("mymacro", [], [Raw("one"), Raw("two")], arity=2)) == (
        r"\mymacro{one}{two}"
    )


def test_explicit_empty_argument_renders_empty_group() -> None:
    assert render(Command("section", [], [Raw("")])) == r"\section{}"


def test_rendering_is_all_or_nothing() -> None:
    tex = Sequence([Text("before"), Group([Command("textbf", [], [])]), Text("after")])

    with pytest.raises(MissingRequiredArgumentError):
        render(tex)


def test_nested_failure_inside_environment_propagates() -> None:
    tex = Document(documentclass("article"), document(Command("emph")))

    with pytest.raises(MissingRequiredArgumentError):
        render(tex)


def test_environment_renders_begin_and_end() -> None:
    assert render(Environment("center", Text("middle"))) == (
        "\\begin{center}\nmiddle\n\\end{center}"
    )


def test_environment_with_empty_body() -> None:
    assert render(Environment("center")) == "\\begin{center}\n\\end{center}"


def test_environment_arguments() -> None:
    tex = Environment("tabular", Raw("a & b"), opt_args=[Raw("t")], args=[Raw("ll")])

    assert render(tex) == "\\begin{tabular}[t]{ll}\na & b\n\\end{tabular}"


def test_sequence_terminates_each_child_with_newline() -> None:
    assert render(Sequence(["one", "two"])) == "one\ntwo\n"


def test_nested_sequence_does_not_add_blank_lines() -> None:
    tex = Sequence(["one", Sequence(["two", "three"]), "four"])

    assert render(tex) == "one\ntwo\nthree\nfour\n"


def test_group_ending_in_sequence_does_not_add_blank_lines() -> None:
    assert render(Sequence([Group([Sequence(["a"])]), "b"])) == "a\nb\n"
    assert render(Sequence([Group(["x", Sequence(["a"])]), "b"])) == "xa\nb\n"
    assert render(Sequence([Group([]), "b"])) == "\nb\n"


def test_sequence_inside_argument_is_inline() -> None:
    tex = Command("textbf", [], [Sequence(["bold", " ", "text"])])

    assert render(tex) == r"\textbf{bold text}"


def test_sequence_preserves_order() -> None:
    first = Command("alpha")
    second = Text("beta & gamma")
    rendered = render(Sequence([first, second]))

    assert rendered.index(render(first)) < rendered.index(render(second))


def test_group_concatenates_without_separator() -> None:
    assert render(Group(["a", Raw("~"), "b"])) == "a~b"


def test_braced_wraps_children() -> None:
    assert render(Braced([Command("bfseries"), Raw(" bold")])) == r"{\bfseries bold}"


def test_joined_uses_raw_separator() -> None:
    assert render(Joined(" & ", ["a", "b&c"])) == r"a & b\&c"


def test_render_accepts_plain_values() -> None:
    assert render("50%") == r"50\%"
    assert render(42) == "42"
    assert render(None) == ""


def test_render_rejects_unknown_objects() -> None:
    with pytest.raises(InvalidElementError):
        render(object())


def test_render_legacy_accents() -> None:
    assert "\\'{e}" in render(Text("é"), legacy_accents=True)


def test_render_bytes_encodes_output() -> None:
    assert render_bytes(Text("café & co")) == "café \\& co".encode()
    assert render_bytes(Text("café"), encoding="latin-1") == "café".encode("latin-1")


def test_concurrent_renders_are_independent() -> None:
    results: dict[int, str] = {}

    def worker(index: int) -> None:
        tex = Document(documentclass("article"), document(section(f"Part {index}"), "x & y"))
        results[index] = render(tex)

    threads = [threading.Thread(target=worker, args=(index,)) for index in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    for index, output in results.items():
        assert f"\\section{{Part {index}}}" in output
        assert output.endswith("x \\& y\n\\end{document}\n")
