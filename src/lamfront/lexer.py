from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass

from .failures import InvalidCharacter, LexicalError
from .spans import Span
from .tokens import KEYWORDS, Token, TokenKind


_IDENT_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_']*")
_INT_RE = re.compile(r"[0-9]+")

_PUNCT: dict[str, TokenKind] = {
    "->": TokenKind.ARROW,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    ";": TokenKind.SEMI,
    "=": TokenKind.EQ,
    "+": TokenKind.PLUS,
    "\\": TokenKind.BACKSLASH,
}


@dataclass(slots=True)
class _Cursor:
    src: str
    i: int = 0

    def eof(self) -> bool:
        return self.i >= len(self.src)

    def peek(self, n: int = 0) -> str:
        j = self.i + n
        if j >= len(self.src):
            return ""
        return self.src[j]

    def advance(self, n: int = 1) -> None:
        self.i = min(self.i + n, len(self.src))


def iter_tokens(src: str, *, file_id: int = 0) -> Iterator[Token]:
    """Yield tokens lazily, ending with a single EOF token.

    Raises :class:`LexicalError` (or :class:`InvalidCharacter`) at the first
    text that cannot start a token.
    """
    cur = _Cursor(src=src)

    def make(kind: TokenKind, start: int) -> Token:
        return Token(kind, src[start : cur.i], Span(start, cur.i, file_id))

    while not cur.eof():
        ch = cur.peek()

        if ch in " \t\r\n":
            cur.advance()
            continue

        # line comment
        if ch == "#":
            while not cur.eof() and cur.peek() != "\n":
                cur.advance()
            continue

        start = cur.i

        if ch == '"':
            cur.advance()
            while True:
                c = cur.peek()
                if c == "" or c == "\n":
                    raise LexicalError("unterminated string literal", start)
                if c == "\\":
                    if cur.peek(1) in ("", "\n"):
                        raise LexicalError("unterminated string escape", cur.i)
                    cur.advance(2)
                    continue
                cur.advance()
                if c == '"':
                    break
            tok = make(TokenKind.STRING, start)
            # Strip the quotes; escapes stay as written.
            yield Token(TokenKind.STRING, tok.lexeme[1:-1], tok.span)
            continue

        m = _INT_RE.match(src, cur.i)
        if m:
            cur.advance(len(m.group(0)))
            if _IDENT_RE.match(src, cur.i):
                raise LexicalError(f"invalid number literal {src[start:cur.i + 1]!r}", start)
            yield make(TokenKind.INT, start)
            continue

        m = _IDENT_RE.match(src, cur.i)
        if m:
            lex = m.group(0)
            cur.advance(len(lex))
            yield make(KEYWORDS.get(lex, TokenKind.IDENT), start)
            continue

        for text, kind in _PUNCT.items():
            if src.startswith(text, cur.i):
                cur.advance(len(text))
                yield make(kind, start)
                break
        else:
            raise InvalidCharacter(f"unexpected character {ch!r}", start)

    yield Token(TokenKind.EOF, "", Span(cur.i, cur.i, file_id))


def tokenize(src: str, *, file_id: int = 0) -> list[Token]:
    return list(iter_tokens(src, file_id=file_id))
