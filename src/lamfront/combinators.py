"""Span attachment for AST-construction code.

Construction code raises unpositioned errors where it notices a problem and
declares the source range it is building with :func:`spanned` or :func:`at`.
The innermost scope that sees an error positions it; outer scopes leave it
alone.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import replace
from typing import TypeVar

from .ast import Expr, ExprKind
from .errors import AstError, InvalidDefinition, MissingNode, WrongExprType
from .spans import Span


T = TypeVar("T")
E = TypeVar("E", bound=Expr)


def attach_span(span: Span, err: AstError) -> AstError:
    """Return ``err`` positioned at ``span`` unless it already has a position.

    ``ParseError`` is always returned as is; its span comes from the parse
    failure it wraps.
    """
    if isinstance(err, (InvalidDefinition, MissingNode, WrongExprType)) and err.span is None:
        return replace(err, span=span)
    return err


def or_missing(value: T | None, kind: ExprKind) -> T:
    if value is None:
        raise MissingNode(None, kind)
    return value


@contextmanager
def spanned(span: Span) -> Iterator[Span]:
    try:
        yield span
    except AstError as err:
        positioned = attach_span(span, err)
        if positioned is err:
            raise
        notes = getattr(err, "__notes__", None)
        if notes is not None:
            positioned.__notes__ = list(notes)
        raise positioned.with_traceback(err.__traceback__) from err.__cause__


def at(span: Span, fn: Callable[..., T], /, *args: object, **kwargs: object) -> T:
    with spanned(span):
        return fn(*args, **kwargs)


def expect_kind(node: E, kind: ExprKind) -> E:
    if kind is ExprKind.EXPRESSION or node.kind is kind:
        return node
    raise WrongExprType(None, kind, node.kind)
