"""AST-construction failures.

Every failure between source text and a finished :class:`~lamfront.ast.Module`
is one of the four :class:`AstError` cases below. The simple cases are raised
unpositioned and pick up a span from the innermost enclosing
:func:`~lamfront.combinators.spanned` scope; :class:`ParseError` works out its
span from the grammar-engine failure it wraps.
"""

from __future__ import annotations

from dataclasses import dataclass

from .ast import ExprKind
from .failures import (
    ExtraToken,
    InvalidToken,
    ParseFailure,
    UnrecognizedEof,
    UnrecognizedToken,
)
from .spans import Span


class AstError(Exception):
    """Closed base of the AST error taxonomy."""

    def get_span(self) -> Span | None:
        return None


@dataclass(slots=True)
class InvalidDefinition(AstError):
    span: Span | None = None

    def __str__(self) -> str:
        return "Definition invalid"

    def get_span(self) -> Span | None:
        return self.span


@dataclass(slots=True)
class MissingNode(AstError):
    span: Span | None
    kind: ExprKind

    def __str__(self) -> str:
        return f"Expected a {self.kind}, but got nothing"

    def get_span(self) -> Span | None:
        return self.span


@dataclass(slots=True)
class WrongExprType(AstError):
    span: Span | None
    expected: ExprKind
    actual: ExprKind

    def __str__(self) -> str:
        return f"Wrong type of expression: Expected {self.expected} but got {self.actual}"

    def get_span(self) -> Span | None:
        return self.span


@dataclass(slots=True)
class ParseError(AstError):
    file_id: int | None
    source: ParseFailure

    def __str__(self) -> str:
        return f"Parse error: {self.source}"

    def get_span(self) -> Span | None:
        if self.file_id is None:
            return None
        return parse_failure_span(self.file_id, self.source)


def from_parse_error(file_id: int, failure: ParseFailure) -> ParseError:
    return ParseError(file_id=file_id, source=failure)


def parse_failure_span(file_id: int, failure: ParseFailure) -> Span | None:
    if isinstance(failure, InvalidToken):
        return Span(failure.location, failure.location, file_id)
    if isinstance(failure, UnrecognizedEof):
        return Span(failure.location, failure.location, file_id)
    if isinstance(failure, UnrecognizedToken):
        start, _, end = failure.token
        return Span(start, end, file_id)
    if isinstance(failure, ExtraToken):
        start, _, end = failure.token
        return Span(start, end, file_id)
    # User failures carry their offset in the lexer message. Anything else
    # has no position to report.
    return None
