from __future__ import annotations

from dataclasses import dataclass

from .grammar import Grammar, NonTerminal, Production, Symbol, Terminal
from .tokens import TokenKind


@dataclass(frozen=True, slots=True)
class LR1Item:
    prod_index: int
    dot: int
    lookahead: TokenKind

    def core(self) -> tuple[int, int]:
        return (self.prod_index, self.dot)


@dataclass(frozen=True, slots=True)
class ParseTable:
    """ACTION / GOTO tables for an LALR parser.

    ACTION[state][terminal] = ("shift", next_state) | ("reduce", prod_index) | ("accept", 0)
    GOTO[state][nonterminal] = next_state
    """

    action: dict[int, dict[TokenKind, tuple[str, int]]]
    goto: dict[int, dict[NonTerminal, int]]

    def expected(self, state: int) -> tuple[TokenKind, ...]:
        """Terminals with an action in ``state``, in declaration order."""
        order = list(TokenKind)
        return tuple(sorted(self.action.get(state, {}), key=order.index))


class GrammarAnalysisError(Exception):
    pass


def build_lalr_table(grammar: Grammar) -> ParseTable:
    # Augment with S' -> start; production 0 is the augmented one.
    start_prime = NonTerminal(grammar.start.name + "'")
    prods: tuple[Production, ...] = (
        Production(head=start_prime, body=(grammar.start,), action=lambda xs: xs[0]),
    ) + grammar.productions

    by_head: dict[NonTerminal, list[int]] = {}
    for i, p in enumerate(prods):
        by_head.setdefault(p.head, []).append(i)

    # FIRST sets and nullability.
    first: dict[NonTerminal, set[TokenKind]] = {nt: set() for nt in by_head}
    nullable: set[NonTerminal] = set()
    changed = True
    while changed:
        changed = False
        for p in prods:
            before = (len(first[p.head]), p.head in nullable)
            for sym in p.body:
                if isinstance(sym, Terminal):
                    first[p.head].add(sym.kind)
                    break
                first[p.head] |= first[sym]
                if sym not in nullable:
                    break
            else:
                nullable.add(p.head)
            if (len(first[p.head]), p.head in nullable) != before:
                changed = True

    def first_seq(seq: tuple[Symbol, ...], lookahead: TokenKind) -> set[TokenKind]:
        out: set[TokenKind] = set()
        for sym in seq:
            if isinstance(sym, Terminal):
                out.add(sym.kind)
                return out
            out |= first[sym]
            if sym not in nullable:
                return out
        out.add(lookahead)
        return out

    def closure(items: set[LR1Item]) -> frozenset[LR1Item]:
        out = set(items)
        work = list(items)
        while work:
            it = work.pop()
            body = prods[it.prod_index].body
            if it.dot >= len(body):
                continue
            sym = body[it.dot]
            if not isinstance(sym, NonTerminal):
                continue
            for la in first_seq(body[it.dot + 1 :], it.lookahead):
                for j in by_head[sym]:
                    new_it = LR1Item(j, 0, la)
                    if new_it not in out:
                        out.add(new_it)
                        work.append(new_it)
        return frozenset(out)

    def goto(items: frozenset[LR1Item], sym: Symbol) -> frozenset[LR1Item]:
        moved = {
            LR1Item(it.prod_index, it.dot + 1, it.lookahead)
            for it in items
            if it.dot < len(prods[it.prod_index].body) and prods[it.prod_index].body[it.dot] == sym
        }
        return closure(moved) if moved else frozenset()

    symbols = tuple(dict.fromkeys((grammar.start, *grammar.symbols())))

    # Canonical LR(1) collection
    states: list[frozenset[LR1Item]] = [closure({LR1Item(0, 0, TokenKind.EOF)})]
    index: dict[frozenset[LR1Item], int] = {states[0]: 0}
    transitions: dict[tuple[int, Symbol], int] = {}
    work = [0]
    while work:
        i = work.pop()
        for sym in symbols:
            nxt = goto(states[i], sym)
            if not nxt:
                continue
            j = index.get(nxt)
            if j is None:
                j = len(states)
                states.append(nxt)
                index[nxt] = j
                work.append(j)
            transitions[(i, sym)] = j

    # Merge LR(1) states with the same LR(0) core => LALR
    core_to_new: dict[frozenset[tuple[int, int]], int] = {}
    old_to_new: dict[int, int] = {}
    merged: list[set[LR1Item]] = []
    for i, st in enumerate(states):
        core = frozenset(it.core() for it in st)
        j = core_to_new.get(core)
        if j is None:
            j = len(merged)
            core_to_new[core] = j
            merged.append(set())
        merged[j] |= st
        old_to_new[i] = j

    merged_trans = {(old_to_new[i], sym): old_to_new[j] for (i, sym), j in transitions.items()}

    action: dict[int, dict[TokenKind, tuple[str, int]]] = {}
    goto_tbl: dict[int, dict[NonTerminal, int]] = {}

    def add_action(st: int, term: TokenKind, act: tuple[str, int]) -> None:
        row = action.setdefault(st, {})
        if term in row and row[term] != act:
            raise GrammarAnalysisError(
                f"conflict in state {st} on {term.display()}: {row[term]} vs {act}"
            )
        row[term] = act

    for i, st in enumerate(merged):
        for it in st:
            body = prods[it.prod_index].body
            if it.dot < len(body):
                sym = body[it.dot]
                if isinstance(sym, Terminal):
                    add_action(i, sym.kind, ("shift", merged_trans[(i, sym)]))
            elif it.prod_index == 0:
                add_action(i, TokenKind.EOF, ("accept", 0))
            else:
                # reduce by index into the un-augmented grammar
                add_action(i, it.lookahead, ("reduce", it.prod_index - 1))

        for sym in symbols:
            if isinstance(sym, NonTerminal) and (i, sym) in merged_trans:
                goto_tbl.setdefault(i, {})[sym] = merged_trans[(i, sym)]

    return ParseTable(action=action, goto=goto_tbl)
