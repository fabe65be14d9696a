from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .spans import Span


class TokenKind(str, Enum):
    # Identifiers and literals
    IDENT = "identifier"
    INT = "integer"
    STRING = "string"

    # Punctuation / operators
    LPAREN = "("
    RPAREN = ")"
    SEMI = ";"
    EQ = "="
    PLUS = "+"
    BACKSLASH = "\\"
    ARROW = "->"

    # Keywords
    IF = "if"
    THEN = "then"
    ELSE = "else"

    EOF = "EOF"

    def display(self) -> str:
        # Literal terminals are quoted, token classes are named.
        if self in (TokenKind.IDENT, TokenKind.INT, TokenKind.STRING, TokenKind.EOF):
            return self.value
        return f'"{self.value}"'


KEYWORDS: dict[str, TokenKind] = {
    "if": TokenKind.IF,
    "then": TokenKind.THEN,
    "else": TokenKind.ELSE,
}


@dataclass(frozen=True, slots=True)
class Token:
    kind: TokenKind
    lexeme: str
    span: Span

    def __str__(self) -> str:
        return self.lexeme if self.kind is not TokenKind.EOF else "EOF"

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.lexeme!r}, {self.span.start}..{self.span.end})"
