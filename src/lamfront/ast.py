from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from .spans import Span


class ExprKind(str, Enum):
    # Matches any expression; used when only presence matters.
    EXPRESSION = "expression"

    VARIABLE = "variable"
    NUMBER = "number"
    STRING = "string"
    APPLICATION = "application"
    LAMBDA = "lambda"
    CONDITIONAL = "conditional"
    SUM = "sum"
    DEFINITION = "definition"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Node:
    span: Span


@dataclass(frozen=True, slots=True)
class Expr(Node):
    kind: ClassVar[ExprKind] = ExprKind.EXPRESSION


@dataclass(frozen=True, slots=True)
class Variable(Expr):
    kind: ClassVar[ExprKind] = ExprKind.VARIABLE

    name: str


@dataclass(frozen=True, slots=True)
class Number(Expr):
    kind: ClassVar[ExprKind] = ExprKind.NUMBER

    value: int


@dataclass(frozen=True, slots=True)
class String(Expr):
    kind: ClassVar[ExprKind] = ExprKind.STRING

    value: str  # raw literal content, escapes kept as written


@dataclass(frozen=True, slots=True)
class Application(Expr):
    kind: ClassVar[ExprKind] = ExprKind.APPLICATION

    func: Expr
    arg: Expr

    def spine(self) -> tuple[Expr, ...]:
        """Flatten ``f a b`` into ``(f, a, b)``."""
        args: list[Expr] = []
        cur: Expr = self
        while isinstance(cur, Application):
            args.append(cur.arg)
            cur = cur.func
        return (cur, *reversed(args))


@dataclass(frozen=True, slots=True)
class Lambda(Expr):
    kind: ClassVar[ExprKind] = ExprKind.LAMBDA

    params: tuple[str, ...]
    body: Expr


@dataclass(frozen=True, slots=True)
class Conditional(Expr):
    kind: ClassVar[ExprKind] = ExprKind.CONDITIONAL

    cond: Expr
    then: Expr
    otherwise: Expr


@dataclass(frozen=True, slots=True)
class Sum(Expr):
    kind: ClassVar[ExprKind] = ExprKind.SUM

    left: Expr
    right: Expr


@dataclass(frozen=True, slots=True)
class Definition(Node):
    kind: ClassVar[ExprKind] = ExprKind.DEFINITION

    name: str
    params: tuple[str, ...]
    body: Expr


@dataclass(frozen=True, slots=True)
class Module(Node):
    definitions: tuple[Definition, ...] = ()

    def lookup(self, name: str) -> Definition | None:
        for d in self.definitions:
            if d.name == name:
                return d
        return None


def spine(expr: Expr) -> tuple[Expr, ...]:
    if isinstance(expr, Application):
        return expr.spine()
    return (expr,)
