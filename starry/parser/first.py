"""NULLABLE and FIRST set computation."""

from __future__ import annotations

from typing import AbstractSet, Dict, FrozenSet, Iterable, List, Optional, Set

from starry.parser.cfg import ContextFreeGrammar, Epsilon, NonTerminal, Symbol, Terminal

FirstEntry = Optional[int]
"""A terminal index, or ``None`` standing for ε."""


class FirstSet:
    """FIRST sets of the non-terminals of a grammar."""

    def __init__(self, sets: Optional[Dict[int, Set[FirstEntry]]] = None) -> None:
        self._sets: Dict[int, Set[FirstEntry]] = sets if sets is not None else {}

    def get(self, non_terminal: int) -> FrozenSet[FirstEntry]:
        return frozenset(self._sets.get(non_terminal, ()))

    def contains(self, non_terminal: int, terminal: FirstEntry) -> bool:
        return terminal in self._sets.get(non_terminal, ())

    def contains_epsilon(self, non_terminal: int) -> bool:
        return self.contains(non_terminal, None)

    def terminals(self, non_terminal: int) -> List[int]:
        """The terminal indices in FIRST(``non_terminal``), without ε, sorted."""
        return sorted(t for t in self._sets.get(non_terminal, ()) if t is not None)

    def _add(self, non_terminal: int, entry: FirstEntry) -> bool:
        target = self._sets.setdefault(non_terminal, set())
        if entry in target:
            return False
        target.add(entry)
        return True

    def describe(self, cfg: ContextFreeGrammar) -> str:
        lines = ["FIRST Sets:"]
        for index, name in enumerate(cfg.non_terminals):
            entries = self._sets.get(index)
            if entries is None:
                continue
            names = [cfg.terminals[t] for t in sorted(e for e in entries if e is not None)]
            if None in entries:
                names.append("ε")
            lines.append(f"  FIRST({name}) = {{ {', '.join(names)} }}")
        return "\n".join(lines)


def compute_nullable(cfg: ContextFreeGrammar) -> Set[int]:
    """Non-terminals that can derive the empty string."""
    nullable: Set[int] = set()
    changed = True
    while changed:
        changed = False
        for production in cfg.productions:
            if production.lhs in nullable:
                continue
            if production.is_epsilon() or all(
                isinstance(s, NonTerminal) and s.id in nullable for s in production.rhs
            ):
                nullable.add(production.lhs)
                changed = True
    return nullable


def describe_nullable(nullable: AbstractSet[int], cfg: ContextFreeGrammar) -> str:
    if not nullable:
        return "NULLABLE Set:\n  (empty)"
    names = ", ".join(cfg.non_terminal_name(nt) for nt in sorted(nullable))
    return f"NULLABLE Set:\n  {{ {names} }}"


def compute_first(
    cfg: ContextFreeGrammar, nullable: Optional[AbstractSet[int]] = None
) -> FirstSet:
    """FIRST sets of every non-terminal; ``nullable`` is computed if not given."""
    if nullable is None:
        nullable = compute_nullable(cfg)
    first = FirstSet({index: set() for index in range(len(cfg.non_terminals))})

    changed = True
    while changed:
        changed = False
        for production in cfg.productions:
            lhs = production.lhs
            if production.is_epsilon():
                changed |= first._add(lhs, None)
                continue
            last = len(production.rhs) - 1
            for position, symbol in enumerate(production.rhs):
                if isinstance(symbol, Terminal):
                    changed |= first._add(lhs, symbol.id)
                    break
                if isinstance(symbol, NonTerminal):
                    for entry in first.get(symbol.id):
                        if entry is not None:
                            changed |= first._add(lhs, entry)
                    if symbol.id not in nullable:
                        break
                    if position == last:
                        changed |= first._add(lhs, None)
                elif isinstance(symbol, Epsilon):
                    changed |= first._add(lhs, None)
    return first


def first_of_symbols(
    symbols: Iterable[Symbol], first_sets: FirstSet, nullable: AbstractSet[int]
) -> Set[FirstEntry]:
    """FIRST of a string of symbols; ``None`` in the result stands for ε."""
    items = list(symbols)
    if not items:
        return {None}
    result: Set[FirstEntry] = set()
    last = len(items) - 1
    for position, symbol in enumerate(items):
        if isinstance(symbol, Terminal):
            result.add(symbol.id)
            return result
        if isinstance(symbol, NonTerminal):
            result.update(e for e in first_sets.get(symbol.id) if e is not None)
            if symbol.id not in nullable:
                return result
            if position == last:
                result.add(None)
        elif isinstance(symbol, Epsilon):
            result.add(None)
    return result