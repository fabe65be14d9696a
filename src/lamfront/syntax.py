"""The lam grammar in one place.

::

    module      := definition*
    definition  := application "=" expr? ";"
    expr        := sum
                 | "\\" application "->" expr?
                 | "if" expr? "then" expr? "else" expr?
    sum         := sum "+" application | application
    application := application atom | atom
    atom        := identifier | integer | string | "(" expr? ")"

The grammar is deliberately loose: it accepts any application as a
definition head or lambda parameter list and leaves optional expressions
where one is required. The actions below tighten it, raising
:class:`~lamfront.errors.AstError` positioned at the construct being built.
"""

from __future__ import annotations

from . import ast as A
from .combinators import at, expect_kind, or_missing, spanned
from .errors import InvalidDefinition
from .grammar import Grammar, ProductionSink
from .parser import join_span
from .spans import Span
from .tokens import Token, TokenKind as T


# Placeholder for an empty module; parse_source replaces module spans.
EMPTY_SPAN = Span(0, 0, -1)


def _tok(v: object) -> Token:
    if not isinstance(v, Token):
        raise TypeError(f"expected Token, got {type(v)!r}")
    return v


def _variable_name(expr: A.Expr) -> str:
    return expect_kind(expr, A.ExprKind.VARIABLE).name


def _param_names(params: tuple[A.Expr, ...]) -> tuple[str, ...]:
    """Names of a parameter list. Raises unpositioned on duplicates."""
    names = tuple(at(p.span, _variable_name, p) for p in params)
    if len(set(names)) != len(names):
        raise InvalidDefinition()
    return names


def act_passthrough(xs: list[object]) -> object:
    return xs[0]


def act_none(xs: list[object]) -> object:
    return None


def act_empty_list(xs: list[object]) -> object:
    return []


def act_append(xs: list[object]) -> object:
    items = xs[0]
    if not isinstance(items, list):
        raise TypeError(f"expected list, got {type(items)!r}")
    items.append(xs[1])
    return items


def act_variable(xs: list[object]) -> object:
    tok = _tok(xs[0])
    return A.Variable(span=tok.span, name=tok.lexeme)


def act_number(xs: list[object]) -> object:
    tok = _tok(xs[0])
    return A.Number(span=tok.span, value=int(tok.lexeme))


def act_string(xs: list[object]) -> object:
    tok = _tok(xs[0])
    return A.String(span=tok.span, value=tok.lexeme)


def act_group(xs: list[object]) -> object:
    with spanned(join_span(xs[0], xs[2])):
        return or_missing(xs[1], A.ExprKind.EXPRESSION)


def act_application(xs: list[object]) -> object:
    return A.Application(span=join_span(xs[0], xs[1]), func=xs[0], arg=xs[1])


def act_sum(xs: list[object]) -> object:
    return A.Sum(span=join_span(xs[0], xs[2]), left=xs[0], right=xs[2])


def act_lambda(xs: list[object]) -> object:
    span = join_span(*xs)
    with spanned(span):
        params = _param_names(A.spine(xs[1]))
        body = or_missing(xs[3], A.ExprKind.EXPRESSION)
    return A.Lambda(span=span, params=params, body=body)


def act_conditional(xs: list[object]) -> object:
    span = join_span(*xs)
    with spanned(span):
        cond = or_missing(xs[1], A.ExprKind.EXPRESSION)
        then = or_missing(xs[3], A.ExprKind.EXPRESSION)
        otherwise = or_missing(xs[5], A.ExprKind.EXPRESSION)
    return A.Conditional(span=span, cond=cond, then=then, otherwise=otherwise)


def act_definition(xs: list[object]) -> object:
    span = join_span(*xs)
    with spanned(span):
        head, *params = A.spine(xs[0])
        name = at(head.span, _variable_name, head)
        names = _param_names(tuple(params))
        body = or_missing(xs[2], A.ExprKind.EXPRESSION)
    return A.Definition(span=span, name=name, params=names, body=body)


def act_module(xs: list[object]) -> object:
    defs: list[A.Definition] = xs[0]
    seen: set[str] = set()
    for d in defs:
        if d.name in seen:
            raise InvalidDefinition(d.span)
        seen.add(d.name)
    span = join_span(defs[0], defs[-1]) if defs else EMPTY_SPAN
    return A.Module(span=span, definitions=tuple(defs))


def build_lam_grammar() -> Grammar:
    g = ProductionSink()

    g.add("Module", ["Defs"], act_module)
    g.add("Defs", [], act_empty_list)
    g.add("Defs", ["Defs", "Def"], act_append)

    g.add("Def", ["App", T.EQ, "ExprOpt", T.SEMI], act_definition)

    g.add("ExprOpt", [], act_none)
    g.add("ExprOpt", ["Expr"], act_passthrough)

    g.add("Expr", ["Sum"], act_passthrough)
    g.add("Expr", [T.BACKSLASH, "App", T.ARROW, "ExprOpt"], act_lambda)
    g.add("Expr", [T.IF, "ExprOpt", T.THEN, "ExprOpt", T.ELSE, "ExprOpt"], act_conditional)

    g.add("Sum", ["App"], act_passthrough)
    g.add("Sum", ["Sum", T.PLUS, "App"], act_sum)

    g.add("App", ["Atom"], act_passthrough)
    g.add("App", ["App", "Atom"], act_application)

    g.add("Atom", [T.IDENT], act_variable)
    g.add("Atom", [T.INT], act_number)
    g.add("Atom", [T.STRING], act_string)
    g.add("Atom", [T.LPAREN, "ExprOpt", T.RPAREN], act_group)

    return g.build("Module")
