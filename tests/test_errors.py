from __future__ import annotations

import pytest

from lamfront import (
    AstError,
    ExprKind,
    FileRegistry,
    InvalidDefinition,
    LabelStyle,
    MissingNode,
    ParseError,
    Span,
    WrongExprType,
    from_parse_error,
    parse_failure_span,
    pretty_diagnostic,
)
from lamfront.failures import (
    ExtraToken,
    InvalidToken,
    LexicalError,
    ParseFailure,
    UnrecognizedEof,
    UnrecognizedToken,
    User,
)
from lamfront.tokens import Token, TokenKind


def _tok(start: int, end: int, file_id: int = 2) -> Token:
    return Token(TokenKind.IDENT, "foo", Span(start, end, file_id))


def test_messages() -> None:
    assert str(InvalidDefinition()) == "Definition invalid"
    assert str(MissingNode(None, ExprKind.VARIABLE)) == "Expected a variable, but got nothing"
    assert (
        str(WrongExprType(None, ExprKind.VARIABLE, ExprKind.NUMBER))
        == "Wrong type of expression: Expected variable but got number"
    )
    err = ParseError(file_id=0, source=InvalidToken(location=4))
    assert str(err) == "Parse error: Invalid token at 4"


def test_every_case_is_an_ast_error() -> None:
    for err in (
        InvalidDefinition(),
        MissingNode(None, ExprKind.LAMBDA),
        WrongExprType(None, ExprKind.LAMBDA, ExprKind.SUM),
        ParseError(file_id=None, source=InvalidToken(location=0)),
    ):
        assert isinstance(err, AstError)
        assert isinstance(err, Exception)


def test_simple_variants_return_their_span() -> None:
    span = Span(1, 4, 0)
    assert InvalidDefinition(span).get_span() == span
    assert MissingNode(span, ExprKind.STRING).get_span() == span
    assert WrongExprType(span, ExprKind.STRING, ExprKind.NUMBER).get_span() == span
    assert MissingNode(None, ExprKind.STRING).get_span() is None


def test_errors_compare_by_value() -> None:
    assert MissingNode(None, ExprKind.SUM) == MissingNode(None, ExprKind.SUM)
    assert MissingNode(None, ExprKind.SUM) != MissingNode(Span(0, 1, 0), ExprKind.SUM)
    assert InvalidDefinition() != MissingNode(None, ExprKind.SUM)


@pytest.mark.parametrize(
    ("failure", "expected"),
    [
        (InvalidToken(location=7), Span(7, 7, 2)),
        (UnrecognizedEof(location=9, expected=('"="',)), Span(9, 9, 2)),
        (UnrecognizedToken(token=(10, _tok(10, 13), 13), expected=()), Span(10, 13, 2)),
        (ExtraToken(token=(4, _tok(4, 6), 6)), Span(4, 6, 2)),
        (User(error=LexicalError("unterminated string literal", 3)), None),
    ],
)
def test_parse_failure_span_covers_every_shape(failure, expected) -> None:
    assert parse_failure_span(2, failure) == expected


def test_parse_failure_span_is_none_for_unknown_shapes() -> None:
    assert parse_failure_span(0, ParseFailure()) is None
    assert ParseError(file_id=0, source=ParseFailure()).get_span() is None


def test_parse_error_needs_file_id_for_span() -> None:
    failure = InvalidToken(location=7)
    assert ParseError(file_id=None, source=failure).get_span() is None
    assert ParseError(file_id=1, source=failure).get_span() == Span(7, 7, 1)


def test_from_parse_error_keeps_failure_verbatim() -> None:
    failure = ExtraToken(token=(4, _tok(4, 6), 6))
    err = from_parse_error(5, failure)
    assert isinstance(err, ParseError)
    assert err.file_id == 5
    assert err.source is failure


def test_failure_messages() -> None:
    tok = _tok(10, 13)
    assert str(UnrecognizedToken(token=(10, tok, 13), expected=())) == "Unrecognized token `foo` found at 10:13"
    assert (
        str(UnrecognizedToken(token=(10, tok, 13), expected=('"="', '"+"', "identifier")))
        == 'Unrecognized token `foo` found at 10:13\nExpected one of "=", "+" or identifier'
    )
    assert str(UnrecognizedEof(location=3, expected=('";"',))) == 'Unrecognized EOF found at 3\nExpected one of ";"'
    assert str(ExtraToken(token=(10, tok, 13))) == "Extra token `foo` found at 10:13"
    assert str(User(error=LexicalError("unexpected character '$'", 6))) == "unexpected character '$' at 6"


def test_unrecognized_token_end_to_end() -> None:
    files = FileRegistry()
    files.add("a.lam", "")
    files.add("b.lam", "")
    fid = files.add("c.lam", "x = 1;\nfoo foo bar\n")
    assert fid == 2

    err = from_parse_error(2, UnrecognizedToken(token=(10, _tok(10, 13), 13), expected=('"="',)))
    assert isinstance(err, ParseError)
    assert err.get_span() == Span(10, 13, 2)

    diag = pretty_diagnostic(err, files)
    assert len(diag.labels) == 1
    label = diag.labels[0]
    assert label.style is LabelStyle.PRIMARY
    assert (label.file_id, label.start, label.end) == (2, 10, 13)
    assert diag.message.startswith("Parse error: Unrecognized token `foo` found at 10:13")
