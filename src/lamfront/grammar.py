from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Callable, Union

from .tokens import TokenKind


@dataclass(frozen=True, slots=True)
class Terminal:
    kind: TokenKind

    def __str__(self) -> str:
        return self.kind.display()


@dataclass(frozen=True, slots=True)
class NonTerminal:
    name: str

    def __str__(self) -> str:
        return self.name


Symbol = Union[Terminal, NonTerminal]


ActionFn = Callable[[list[object]], object]


@dataclass(frozen=True, slots=True)
class Production:
    head: NonTerminal
    body: tuple[Symbol, ...]
    action: ActionFn

    def __str__(self) -> str:
        rhs = " ".join(str(s) for s in self.body) if self.body else "ε"
        return f"{self.head.name} -> {rhs}"


@dataclass(frozen=True, slots=True)
class Grammar:
    start: NonTerminal
    productions: tuple[Production, ...]

    def prods_for(self, head: NonTerminal) -> tuple[int, ...]:
        return tuple(i for i, p in enumerate(self.productions) if p.head == head)

    def symbols(self) -> tuple[Symbol, ...]:
        """Every symbol used in a production body, in first-use order."""
        seen: dict[Symbol, None] = {}
        for p in self.productions:
            for s in p.body:
                seen.setdefault(s, None)
        return tuple(seen)


@dataclass(slots=True)
class ProductionSink:
    """Collects productions written as ``sink.add("Head", ["Nt", TokenKind.X], action)``.

    Strings name nonterminals, ``TokenKind`` members name terminals.
    """

    productions: list[Production] = field(default_factory=list)

    def add(self, head: str, body: Sequence[str | TokenKind], action: ActionFn) -> None:
        syms: list[Symbol] = []
        for s in body:
            if isinstance(s, TokenKind):
                syms.append(Terminal(s))
            elif isinstance(s, str):
                syms.append(NonTerminal(s))
            else:
                raise TypeError(f"production symbol must be str or TokenKind, got {type(s)!r}")
        self.productions.append(Production(head=NonTerminal(head), body=tuple(syms), action=action))

    def build(self, start: str) -> Grammar:
        heads = {p.head for p in self.productions}
        for p in self.productions:
            for s in p.body:
                if isinstance(s, NonTerminal) and s not in heads:
                    raise TypeError(f"{p}: nonterminal {s.name} has no productions")
        if NonTerminal(start) not in heads:
            raise TypeError(f"start symbol {start} has no productions")
        return Grammar(start=NonTerminal(start), productions=tuple(self.productions))
