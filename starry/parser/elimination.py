"""Elimination of left recursion, and a combined detect-and-eliminate analyser."""

from __future__ import annotations

from typing import List, Tuple

from starry.parser.cfg import ContextFreeGrammar, NonTerminal, Production, Symbol
from starry.parser.left_recursion import (
    LeftRecursionInfo,
    detect_direct_left_recursion,
    detect_left_recursion,
)


class LeftRecursionError(ValueError):
    """Raised when left recursion cannot be removed from a grammar."""


def _starts_with(production: Production, non_terminal: int) -> bool:
    return (
        bool(production.rhs)
        and isinstance(production.rhs[0], NonTerminal)
        and production.rhs[0].id == non_terminal
    )


def _substitute(cfg: ContextFreeGrammar, ai: int, aj: int) -> None:
    """Replace every rule ``ai -> aj γ`` with ``ai -> δ γ`` for each ``aj -> δ``."""
    to_replace = [p for p in cfg.productions if p.lhs == ai and _starts_with(p, aj)]
    aj_productions = cfg.productions_for(aj)
    for replaced in to_replace:
        cfg.productions = [p for p in cfg.productions if p != replaced]
        gamma = replaced.rhs[1:]
        for aj_production in aj_productions:
            cfg.add_production(Production(ai, aj_production.rhs + gamma))


def _eliminate_direct(cfg: ContextFreeGrammar, non_terminal: int) -> None:
    """Rewrite ``A -> A α | β`` as ``A -> β A'`` and ``A' -> α A' | ε``."""
    alphas: List[Tuple[Symbol, ...]] = []
    betas: List[Tuple[Symbol, ...]] = []
    for production in cfg.productions_for(non_terminal):
        if _starts_with(production, non_terminal):
            alpha = production.rhs[1:]
            if alpha:
                alphas.append(alpha)
        else:
            betas.append(production.rhs)

    if not alphas:
        return
    name = cfg.non_terminal_name(non_terminal)
    if not betas:
        raise LeftRecursionError(
            f"Cannot eliminate left recursion for '{name}': no non-recursive productions"
        )

    tail = cfg.add_non_terminal(f"{name}'")
    tail_symbol = NonTerminal(tail)
    cfg.productions = [p for p in cfg.productions if p.lhs != non_terminal]
    for beta in betas:
        cfg.add_production(Production(non_terminal, beta + (tail_symbol,)))
    for alpha in alphas:
        cfg.add_production(Production(tail, alpha + (tail_symbol,)))
    cfg.add_production(Production.epsilon(tail))


def eliminate_left_recursion(cfg: ContextFreeGrammar) -> ContextFreeGrammar:
    """A copy of ``cfg`` without direct or indirect left recursion.

    Non-terminals are taken in index order; earlier ones are substituted into
    later ones, then direct recursion is removed by introducing primed
    non-terminals. Raises ``LeftRecursionError`` if a non-terminal has only
    left-recursive rules.
    """
    result = cfg.copy()
    count = len(result.non_terminals)
    for ai in range(count):
        for aj in range(ai):
            _substitute(result, ai, aj)
        _eliminate_direct(result, ai)
    return result


class LeftRecursionAnalyzer:
    """Detects and eliminates left recursion in context-free grammars."""

    def detect(self, cfg: ContextFreeGrammar) -> List[LeftRecursionInfo]:
        return detect_left_recursion(cfg)

    def detect_direct(self, cfg: ContextFreeGrammar) -> List[LeftRecursionInfo]:
        return detect_direct_left_recursion(cfg)

    def eliminate(self, cfg: ContextFreeGrammar) -> ContextFreeGrammar:
        return eliminate_left_recursion(cfg)