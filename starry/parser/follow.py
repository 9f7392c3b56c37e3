"""FOLLOW set computation."""

from __future__ import annotations

from typing import AbstractSet, Dict, FrozenSet, List, Optional, Set, Tuple

from starry.parser.cfg import ContextFreeGrammar, Epsilon, NonTerminal
from starry.parser.first import FirstSet, compute_first, compute_nullable, first_of_symbols


class FollowSet:
    """FOLLOW sets of the non-terminals of a grammar.

    The end marker ``$`` is the terminal index one past the grammar's
    last terminal.
    """

    def __init__(self, end_marker: int, sets: Optional[Dict[int, Set[int]]] = None) -> None:
        self.end_marker = end_marker
        self._sets: Dict[int, Set[int]] = sets if sets is not None else {}

    def get(self, non_terminal: int) -> FrozenSet[int]:
        return frozenset(self._sets.get(non_terminal, ()))

    def contains(self, non_terminal: int, terminal: int) -> bool:
        return terminal in self._sets.get(non_terminal, ())

    def contains_end_marker(self, non_terminal: int) -> bool:
        return self.contains(non_terminal, self.end_marker)

    def terminals(self, non_terminal: int) -> List[int]:
        """The terminal indices in FOLLOW(``non_terminal``), sorted."""
        return sorted(self._sets.get(non_terminal, ()))

    def _add_all(self, non_terminal: int, terminals: AbstractSet[int]) -> bool:
        target = self._sets.setdefault(non_terminal, set())
        before = len(target)
        target.update(terminals)
        return len(target) != before

    def describe(self, cfg: ContextFreeGrammar) -> str:
        lines = ["FOLLOW Sets:"]
        for index, name in enumerate(cfg.non_terminals):
            entries = self._sets.get(index)
            if entries is None:
                continue
            names = [
                "$" if t == self.end_marker else cfg.terminals[t] for t in sorted(entries)
            ]
            lines.append(f"  FOLLOW({name}) = {{ {', '.join(names)} }}")
        return "\n".join(lines)


def compute_follow(
    cfg: ContextFreeGrammar, first_sets: FirstSet, nullable: AbstractSet[int]
) -> FollowSet:
    """FOLLOW sets of every non-terminal, given FIRST and NULLABLE."""
    end_marker = len(cfg.terminals)
    follow = FollowSet(end_marker, {index: set() for index in range(len(cfg.non_terminals))})
    follow._add_all(cfg.start_symbol, {end_marker})

    changed = True
    while changed:
        changed = False
        for production in cfg.productions:
            lhs = production.lhs
            rhs = production.rhs
            for position, symbol in enumerate(rhs):
                if not isinstance(symbol, NonTerminal):
                    continue
                beta = rhs[position + 1:]
                if beta:
                    first_beta = first_of_symbols(beta, first_sets, nullable)
                    changed |= follow._add_all(
                        symbol.id, {t for t in first_beta if t is not None}
                    )
                    beta_nullable = all(
                        isinstance(s, Epsilon)
                        or (isinstance(s, NonTerminal) and s.id in nullable)
                        for s in beta
                    )
                    if beta_nullable or None in first_beta:
                        changed |= follow._add_all(symbol.id, follow.get(lhs))
                else:
                    changed |= follow._add_all(symbol.id, follow.get(lhs))
    return follow


def compute_all(cfg: ContextFreeGrammar) -> Tuple[Set[int], FirstSet, FollowSet]:
    """NULLABLE, FIRST and FOLLOW sets of ``cfg`` together."""
    nullable = compute_nullable(cfg)
    first_sets = compute_first(cfg, nullable)
    follow_sets = compute_follow(cfg, first_sets, nullable)
    return nullable, first_sets, follow_sets