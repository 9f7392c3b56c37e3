"""Nondeterministic finite automata with epsilon transitions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

Symbol = Optional[str]
"""A transition label: a character, or ``None`` for an epsilon move."""


@dataclass
class Nfa:
    """An NFA whose states are numbered from zero.

    ``states[i]`` maps each symbol to the list of targets reachable from
    state ``i`` on that symbol.
    """

    states: List[Dict[Symbol, List[int]]] = field(default_factory=list)
    start: int = 0
    accepts: Dict[int, str] = field(default_factory=dict)

    def add_state(self) -> int:
        self.states.append({})
        return len(self.states) - 1

    def add_transition(self, source: int, symbol: Symbol, target: int) -> None:
        """Add a move; a source that is not a state is ignored."""
        if 0 <= source < len(self.states):
            self.states[source].setdefault(symbol, []).append(target)

    def mark_accept(self, state: int, token_name: str) -> None:
        self.accepts[state] = token_name

    def describe(self) -> str:
        """Human-readable listing of the automaton."""
        lines = ["NFA:", f"  Start: {self.start}", "  Accepts:"]
        lines.extend(f"    {state} -> {token}" for state, token in self.accepts.items())
        lines.append("  Transitions:")
        for index, transitions in enumerate(self.states):
            for symbol, targets in transitions.items():
                label = "ε" if symbol is None else f"'{symbol}'"
                lines.extend(f"    {index} --{label}--> {target}" for target in targets)
        return "\n".join(lines)