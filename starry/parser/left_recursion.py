"""Detection of direct and indirect left recursion."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict, Iterable, List, Set, Tuple

from starry.parser.cfg import ContextFreeGrammar, NonTerminal


class LeftRecursionType(enum.Enum):
    DIRECT = "direct"
    INDIRECT = "indirect"


@dataclass(frozen=True)
class LeftRecursionInfo:
    """A left-recursive non-terminal and the cycle that makes it so.

    ``path`` starts and ends with ``non_terminal``.
    """

    non_terminal: int
    rec_type: LeftRecursionType
    path: Tuple[int, ...]


def _first_per_non_terminal(infos: Iterable[LeftRecursionInfo]) -> List[LeftRecursionInfo]:
    seen: Set[int] = set()
    unique = []
    for info in infos:
        if info.non_terminal not in seen:
            seen.add(info.non_terminal)
            unique.append(info)
    return unique


def _left_edges(cfg: ContextFreeGrammar) -> Dict[int, List[int]]:
    """Edges ``A -> B`` where some rule for A begins with non-terminal B."""
    edges: Dict[int, List[int]] = {}
    for production in cfg.productions:
        if production.rhs and isinstance(production.rhs[0], NonTerminal):
            edges.setdefault(production.lhs, []).append(production.rhs[0].id)
    return edges


def detect_left_recursion(cfg: ContextFreeGrammar) -> List[LeftRecursionInfo]:
    """Every left-recursive non-terminal, direct or indirect, in index order."""
    edges = _left_edges(cfg)
    results: List[LeftRecursionInfo] = []

    def search(current: int, target: int, visited: Set[int], path: List[int]) -> None:
        if current in visited:
            if current == target and path:
                rec_type = (
                    LeftRecursionType.DIRECT if len(path) == 1 else LeftRecursionType.INDIRECT
                )
                results.append(LeftRecursionInfo(target, rec_type, tuple(path) + (target,)))
            return
        visited.add(current)
        path.append(current)
        for following in edges.get(current, ()):
            search(following, target, visited, path)
        path.pop()
        visited.discard(current)

    for start in range(len(cfg.non_terminals)):
        search(start, start, set(), [])

    return _first_per_non_terminal(results)


def detect_direct_left_recursion(cfg: ContextFreeGrammar) -> List[LeftRecursionInfo]:
    """Non-terminals with a rule that begins with themselves."""
    found = (
        LeftRecursionInfo(p.lhs, LeftRecursionType.DIRECT, (p.lhs, p.lhs))
        for p in cfg.productions
        if p.rhs and isinstance(p.rhs[0], NonTerminal) and p.rhs[0].id == p.lhs
    )
    return _first_per_non_terminal(found)