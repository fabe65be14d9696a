"""Failures produced below the AST layer.

The lexer raises :class:`LexicalError`. The grammar engine raises one of the
:class:`ParseFailure` shapes, wrapping lexical errors it cannot place itself
in :class:`User`.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .tokens import Token


TokenTriple = tuple[int, Token, int]


@dataclass(slots=True)
class LexicalError(Exception):
    message: str
    offset: int

    def __str__(self) -> str:
        return f"{self.message} at {self.offset}"


class InvalidCharacter(LexicalError):
    """No token starts with the character at ``offset``."""


def format_expected(expected: tuple[str, ...]) -> str:
    if not expected:
        return ""
    parts: list[str] = []
    for i, e in enumerate(expected):
        if i == 0:
            sep = "Expected one of"
        elif i < len(expected) - 1:
            sep = ","
        else:
            sep = " or"
        parts.append(f"{sep} {e}")
    return "\n" + "".join(parts)


class ParseFailure(Exception):
    """Base of the closed set of grammar-engine failures."""


@dataclass(slots=True)
class InvalidToken(ParseFailure):
    location: int

    def __str__(self) -> str:
        return f"Invalid token at {self.location}"


@dataclass(slots=True)
class UnrecognizedEof(ParseFailure):
    location: int
    expected: tuple[str, ...] = field(default_factory=tuple)

    def __str__(self) -> str:
        return f"Unrecognized EOF found at {self.location}{format_expected(self.expected)}"


@dataclass(slots=True)
class UnrecognizedToken(ParseFailure):
    token: TokenTriple
    expected: tuple[str, ...] = field(default_factory=tuple)

    def __str__(self) -> str:
        start, tok, end = self.token
        return f"Unrecognized token `{tok}` found at {start}:{end}{format_expected(self.expected)}"


@dataclass(slots=True)
class ExtraToken(ParseFailure):
    token: TokenTriple

    def __str__(self) -> str:
        start, tok, end = self.token
        return f"Extra token `{tok}` found at {start}:{end}"


@dataclass(slots=True)
class User(ParseFailure):
    error: LexicalError

    def __str__(self) -> str:
        return str(self.error)
