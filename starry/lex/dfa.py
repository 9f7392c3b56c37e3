"""Deterministic finite automata."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class Dfa:
    """A DFA whose states are numbered from zero.

    ``states[i]`` maps each character to the single target of state ``i``.
    """

    states: List[Dict[str, int]] = field(default_factory=list)
    start: int = 0
    accepts: Dict[int, str] = field(default_factory=dict)

    def add_state(self) -> int:
        self.states.append({})
        return len(self.states) - 1

    def add_transition(self, source: int, symbol: str, target: int) -> None:
        """Set the move on ``symbol``; a source that is not a state is ignored."""
        if 0 <= source < len(self.states):
            self.states[source][symbol] = target

    def transition(self, state: int, symbol: str) -> Optional[int]:
        """Target of ``state`` on ``symbol``, or ``None`` if there is none."""
        if 0 <= state < len(self.states):
            return self.states[state].get(symbol)
        return None

    def mark_accept(self, state: int, token_name: str) -> None:
        self.accepts[state] = token_name

    def alphabet(self) -> List[str]:
        """All characters used by any transition, in sorted order."""
        return sorted({symbol for moves in self.states for symbol in moves})

    def describe(self) -> str:
        """Human-readable listing of the automaton."""
        lines = ["DFA:", f"  Start: {self.start}", "  Accepts:"]
        lines.extend(f"    {state} -> {token}" for state, token in self.accepts.items())
        lines.append("  Transitions:")
        for index, moves in enumerate(self.states):
            lines.extend(
                f"    {index} --'{symbol}'--> {target}" for symbol, target in moves.items()
            )
        return "\n".join(lines)