"""Right-linear regular grammars and their conversions.

A grammar can be built from a DFA, NFA or regular expression, turned into an
NFA, or solved into a regular expression with Arden's rule.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from starry.lex.dfa import Dfa
from starry.lex.nfa import Nfa
from starry.lex.regex import Char, Concat, Empty, Regex, Star, Union
from starry.lex.subset import nfa_to_dfa
from starry.lex.thompson import regex_to_nfa


class GrammarError(ValueError):
    """Raised when grammar text cannot be parsed."""


@dataclass(frozen=True)
class Production:
    """One alternative of a right-linear rule.

    ``Production()`` is ``ε``; ``Production("a")`` is the terminal ``a``;
    ``Production("a", 1)`` is ``a`` followed by non-terminal 1; and
    ``Production(None, 1)`` is a unit production to non-terminal 1.
    """

    symbol: Optional[str] = None
    target: Optional[int] = None


@dataclass
class RegularGrammar:
    """A right-linear grammar whose non-terminals are numbered from zero."""

    non_terminals: List[str] = field(default_factory=list)
    start_symbol: int = 0
    productions: Dict[int, List[Production]] = field(default_factory=dict)

    def add_non_terminal(self, name: str) -> int:
        self.non_terminals.append(name)
        return len(self.non_terminals) - 1

    def add_production(self, non_terminal: int, production: Production) -> None:
        self.productions.setdefault(non_terminal, []).append(production)

    @classmethod
    def parse(cls, text: str) -> RegularGrammar:
        """Parse lines of the form ``A -> aB | b | ε``.

        Blank lines and lines starting with ``#`` are skipped. The first
        rule's left-hand side becomes the start symbol.
        """
        grammar = cls()
        symbol_map: Dict[str, int] = {}
        rules: List[Tuple[str, str]] = []

        for raw in text.splitlines():
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            parts = line.split("->")
            if len(parts) != 2:
                raise GrammarError(f"Invalid production: {line}")
            lhs, rhs = parts[0].strip(), parts[1].strip()
            if lhs not in symbol_map:
                symbol_map[lhs] = grammar.add_non_terminal(lhs)
            rules.append((lhs, rhs))

        if rules:
            grammar.start_symbol = symbol_map[rules[0][0]]

        for lhs, rhs in rules:
            non_terminal = symbol_map[lhs]
            for production in grammar._parse_rhs(rhs, symbol_map):
                grammar.add_production(non_terminal, production)

        return grammar

    def _parse_rhs(self, rhs: str, symbol_map: Dict[str, int]) -> List[Production]:
        productions = []
        for alternative in rhs.split("|"):
            alt = alternative.strip()
            if alt in ("ε", "epsilon", ""):
                productions.append(Production())
            elif len(alt) == 1:
                if alt.isupper():
                    productions.append(Production(None, self._intern(alt, symbol_map)))
                else:
                    productions.append(Production(alt))
            elif len(alt) == 2:
                terminal, non_terminal = alt
                productions.append(
                    Production(terminal, self._intern(non_terminal, symbol_map))
                )
            else:
                raise GrammarError(f"Invalid production right-hand side: {alt}")
        return productions

    def _intern(self, name: str, symbol_map: Dict[str, int]) -> int:
        if name not in symbol_map:
            symbol_map[name] = self.add_non_terminal(name)
        return symbol_map[name]

    @classmethod
    def from_dfa(cls, dfa: Dfa) -> RegularGrammar:
        """One non-terminal per state (``S``, ``A1``, ``A2``, ...)."""
        grammar = cls()
        for index in range(len(dfa.states)):
            grammar.add_non_terminal("S" if index == 0 else f"A{index}")
        if 0 <= dfa.start < len(dfa.states):
            grammar.start_symbol = dfa.start

        for source, moves in enumerate(dfa.states):
            for symbol, target in moves.items():
                grammar.add_production(source, Production(symbol, target))

        for accept in dfa.accepts:
            if 0 <= accept < len(dfa.states):
                grammar.add_production(accept, Production())

        return grammar

    @classmethod
    def from_nfa(cls, nfa: Nfa) -> RegularGrammar:
        return cls.from_dfa(nfa_to_dfa(nfa))

    @classmethod
    def from_regex(cls, regex: Regex) -> RegularGrammar:
        return cls.from_nfa(regex_to_nfa(regex, "temp"))

    def to_nfa(self) -> Nfa:
        """NFA with one state per non-terminal plus a single accepting state."""
        nfa = Nfa()
        for _ in self.non_terminals:
            nfa.add_state()
        accept = nfa.add_state()

        for source, productions in self.productions.items():
            for production in productions:
                target = accept if production.target is None else production.target
                nfa.add_transition(source, production.symbol, target)

        nfa.start = self.start_symbol
        nfa.mark_accept(accept, "grammar_accept")
        return nfa

    def to_regex(self) -> Regex:
        """Solve the grammar's equations with Arden's rule."""
        n = len(self.non_terminals)
        if n == 0:
            return Empty()

        # equations[i][j] is the coefficient of X_j in X_i; column n is the constant.
        equations: List[List[Optional[Regex]]] = [[None] * (n + 1) for _ in range(n)]
        for non_terminal, productions in self.productions.items():
            for production in productions:
                term: Regex = Empty() if production.symbol is None else Char(production.symbol)
                column = n if production.target is None else production.target
                existing = equations[non_terminal][column]
                equations[non_terminal][column] = (
                    term if existing is None else Union(existing, term)
                )

        for k in reversed(range(n)):
            row_k = equations[k]
            self_ref = row_k[k]
            if self_ref is not None:
                star = Star(self_ref)
                for j, coefficient in enumerate(row_k):
                    if j != k and coefficient is not None:
                        row_k[j] = Concat(star, coefficient)
                row_k[k] = None

            for i, row_i in enumerate(equations):
                if i == k:
                    continue
                eq_ik = row_i[k]
                if eq_ik is None:
                    continue
                for j in range(n + 1):
                    eq_kj = row_k[j]
                    if j == k or eq_kj is None:
                        continue
                    concat = Concat(eq_ik, eq_kj)
                    existing = row_i[j]
                    row_i[j] = concat if existing is None else Union(existing, concat)
                row_i[k] = None

        result = equations[self.start_symbol][n]
        return Empty() if result is None else result

    def _render(self, production: Production) -> str:
        if production.target is None:
            return "ε" if production.symbol is None else production.symbol
        return (production.symbol or "") + self.non_terminals[production.target]

    def describe(self) -> str:
        """Human-readable listing of the grammar."""
        lines = [
            "Regular Grammar:",
            f"  Start: {self.non_terminals[self.start_symbol]}",
            "  Productions:",
        ]
        for non_terminal, productions in self.productions.items():
            alternatives = " | ".join(self._render(p) for p in productions)
            lines.append(f"    {self.non_terminals[non_terminal]} -> {alternatives}")
        return "\n".join(lines)