from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from .failures import (
    ExtraToken,
    InvalidCharacter,
    InvalidToken,
    LexicalError,
    ParseFailure,
    UnrecognizedEof,
    UnrecognizedToken,
    User,
)
from .grammar import Grammar, Production
from .lalr import ParseTable, build_lalr_table
from .spans import Span
from .tokens import Token, TokenKind


def _span_of(v: object) -> Span:
    # Token and AST nodes both carry .span.
    sp = getattr(v, "span", None)
    if sp is None:
        raise TypeError(f"semantic value has no span: {type(v)!r}")
    return sp


def join_span(*vals: object) -> Span:
    """Join spans of tokens/nodes into a single span (from first to last), skipping ``None``."""
    real = [v for v in vals if v is not None]
    if not real:
        raise ValueError("join_span() requires at least one value")
    return _span_of(real[0]).join(_span_of(real[-1]))


def _next_token(stream: Iterator[Token]) -> Token:
    try:
        return next(stream)
    except InvalidCharacter as e:
        raise InvalidToken(location=e.offset) from e
    except LexicalError as e:
        raise User(error=e) from e
    except StopIteration:
        raise RuntimeError("token stream ended without an EOF token") from None


@dataclass(slots=True)
class Parser:
    grammar: Grammar
    table: ParseTable

    @classmethod
    def for_grammar(cls, grammar: Grammar) -> "Parser":
        return cls(grammar=grammar, table=build_lalr_table(grammar))

    def failure_at(self, state: int, tok: Token) -> ParseFailure:
        expected = self.table.expected(state)
        names = tuple(k.display() for k in expected)
        if tok.kind is TokenKind.EOF:
            return UnrecognizedEof(location=tok.span.start, expected=names)
        triple = (tok.span.start, tok, tok.span.end)
        if expected == (TokenKind.EOF,):
            # Only the end of input could follow.
            return ExtraToken(token=triple)
        return UnrecognizedToken(token=triple, expected=names)

    def parse(self, tokens: Iterable[Token]) -> object:
        """Run the tables over ``tokens``.

        Raises a :class:`ParseFailure` shape on bad input. Errors raised by
        semantic actions propagate unchanged.
        """
        stream = iter(tokens)
        states: list[int] = [0]
        values: list[object] = []
        tok = _next_token(stream)

        while True:
            state = states[-1]
            act = self.table.action.get(state, {}).get(tok.kind)
            if act is None:
                raise self.failure_at(state, tok)

            kind, arg = act
            if kind == "shift":
                states.append(arg)
                values.append(tok)
                tok = _next_token(stream)
                continue

            if kind == "reduce":
                prod: Production = self.grammar.productions[arg]
                k = len(prod.body)
                if k > len(values) or k > (len(states) - 1):
                    raise RuntimeError(
                        "invalid reduce: stack underflow "
                        f"(state={state}, prod={arg}='{prod}', k={k}, "
                        f"values={len(values)}, states={len(states)}, lookahead={tok.kind.value})"
                    )
                rhs_vals = values[-k:] if k else []
                if k:
                    del values[-k:]
                    del states[-k:]
                values.append(prod.action(rhs_vals))
                goto_state = self.table.goto.get(states[-1], {}).get(prod.head)
                if goto_state is None:
                    raise RuntimeError(f"no goto from state {states[-1]} on {prod.head.name}")
                states.append(goto_state)
                continue

            if kind == "accept":
                if not values:
                    raise RuntimeError("accept with empty value stack")
                return values[-1]

            raise RuntimeError(f"unknown action: {act}")
