from __future__ import annotations

import pytest

from lamfront import (
    AstError,
    Diagnostic,
    ExprKind,
    FileRegistry,
    InvalidDefinition,
    Label,
    MissingNode,
    ParseError,
    Severity,
    Span,
    check_source,
    emit,
    pretty_diagnostic,
)
from lamfront.failures import LexicalError, ParseFailure, User
from lamfront.files import UnknownFileError
from lamfront.spans import Position


def test_registry_ids_and_lookup() -> None:
    files = FileRegistry()
    assert files.add("a.lam", "a = 1;") == 0
    assert files.add("b.lam", "b = 2;") == 1
    assert len(files) == 2
    assert files.name(1) == "b.lam"
    assert files.source(0) == "a = 1;"
    assert 1 in files
    assert 2 not in files
    with pytest.raises(UnknownFileError):
        files.get(2)
    with pytest.raises(KeyError):
        files.name(-1)


def test_source_file_locations() -> None:
    files = FileRegistry()
    f = files.get(files.add("m.lam", "ab\ncde\n\nf"))
    assert f.location(0) == Position(offset=0, line=1, column=1)
    assert f.location(2) == Position(offset=2, line=1, column=3)
    assert f.location(3) == Position(offset=3, line=2, column=1)
    assert f.location(8) == Position(offset=8, line=4, column=1)
    assert f.location(9) == Position(offset=9, line=4, column=2)
    assert f.line_text(2) == "cde"
    assert f.line_text(3) == ""
    assert f.line_text(4) == "f"
    with pytest.raises(IndexError):
        f.location(10)


def test_diagnostic_builders_return_new_values() -> None:
    base = Diagnostic.error()
    diag = base.with_message("boom").with_labels([Label.primary(0, 1, 2)]).with_notes(["see here"])
    assert base.message == "" and base.labels == ()
    assert diag.severity is Severity.ERROR
    assert diag.labels == (Label.primary(0, 1, 2),)
    assert diag.notes == ("see here",)


def test_pretty_diagnostic_labels_positioned_errors() -> None:
    files = FileRegistry()
    fid = files.add("m.lam", "x = ;\n")
    diag = pretty_diagnostic(MissingNode(Span(0, 5, fid), ExprKind.EXPRESSION), files)
    assert diag.message == "Expected a expression, but got nothing"
    assert diag.labels == (Label.primary(fid, 0, 5),)


@pytest.mark.parametrize(
    "err",
    [
        InvalidDefinition(),
        MissingNode(Span(100, 105, 0), ExprKind.EXPRESSION),
        InvalidDefinition(Span(0, 1, 7)),
        ParseError(file_id=0, source=User(error=LexicalError("unterminated string literal", 4))),
        ParseError(file_id=None, source=User(error=LexicalError("unterminated string literal", 4))),
        AstError("boom"),
        ParseError(file_id=0, source=ParseFailure()),
    ],
)
def test_pretty_diagnostic_degrades_to_message_only(err) -> None:
    files = FileRegistry()
    files.add("m.lam", "x = ;\n")
    diag = pretty_diagnostic(err, files)
    assert diag.labels == ()
    assert diag.message == str(err)


def test_emit_single_line_label() -> None:
    files = FileRegistry()
    diag = check_source("x = ;\n", name="main.lam", files=files)
    assert diag is not None
    assert emit(diag, files) == (
        "error: Expected a expression, but got nothing\n"
        " --> main.lam:1:1\n"
        "  |\n"
        "1 | x = ;\n"
        "  | ^^^^^\n"
    )


def test_emit_zero_width_label_at_end_of_input() -> None:
    files = FileRegistry()
    diag = check_source("x = 1", name="main.lam", files=files)
    assert diag is not None
    lines = emit(diag, files).splitlines()
    assert lines[0] == "error: Parse error: Unrecognized EOF found at 5"
    assert " --> main.lam:1:6" in lines
    assert lines[-1] == "  | " + " " * 5 + "^"


def test_emit_multi_line_label() -> None:
    files = FileRegistry()
    fid = files.add("f", "abc\ndef\nghi\n")
    diag = Diagnostic.error().with_message("spread").with_labels([Label.secondary(fid, 0, 9)])
    assert emit(diag, files).splitlines() == [
        "error: spread",
        " --> f:1:1",
        "  |",
        "1 | abc",
        "  | ---",
        "  | ...",
        "3 | ghi",
        "  | -",
    ]


def test_emit_label_message_and_notes() -> None:
    files = FileRegistry()
    fid = files.add("f", "a = b c;")
    diag = (
        Diagnostic.error()
        .with_message("bad")
        .with_labels([Label.primary(fid, 4, 7).with_message("here")])
        .with_notes(["first failure only"])
    )
    lines = emit(diag, files).splitlines()
    assert lines[-2] == "  |     ^^^ here"
    assert lines[-1] == "  = note: first failure only"


def test_emit_skips_labels_it_cannot_place() -> None:
    files = FileRegistry()
    diag = Diagnostic.error().with_message("lost").with_labels([Label.primary(3, 0, 1)])
    assert emit(diag, files) == "error: lost\n"


def test_pretty_diagnostic_on_bare_base_errors() -> None:
    files = FileRegistry()
    files.add("m.lam", "x = ;\n")
    assert pretty_diagnostic(AstError("boom"), files) == Diagnostic.error().with_message("boom")
    diag = pretty_diagnostic(ParseError(file_id=0, source=ParseFailure()), files)
    assert diag.labels == ()
    assert diag.message.startswith("Parse error:")


def test_emit_clamps_underline_to_line_when_range_ends_at_newline() -> None:
    files = FileRegistry()
    fid = files.add("f", "abc\ndef")
    diag = Diagnostic.error().with_message("head").with_labels([Label.primary(fid, 0, 4)])
    assert emit(diag, files).splitlines() == [
        "error: head",
        " --> f:1:1",
        "  |",
        "1 | abc",
        "  | ^^^",
    ]
