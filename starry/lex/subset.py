"""Subset construction from NFAs to DFAs."""

from __future__ import annotations

from collections import deque
from typing import Dict, Iterable, List, Optional, Tuple

from starry.lex.dfa import Dfa
from starry.lex.nfa import Nfa, Symbol

StateSet = Tuple[int, ...]


def _targets(nfa: Nfa, state: int, symbol: Symbol) -> List[int]:
    if 0 <= state < len(nfa.states):
        return nfa.states[state].get(symbol, [])
    return []


def epsilon_closure(nfa: Nfa, states: Iterable[int]) -> StateSet:
    """All states reachable from ``states`` by epsilon moves, sorted."""
    stack = list(states)
    closure = set(stack)
    while stack:
        for target in _targets(nfa, stack.pop(), None):
            if target not in closure:
                closure.add(target)
                stack.append(target)
    return tuple(sorted(closure))


def move(nfa: Nfa, states: Iterable[int], symbol: str) -> StateSet:
    """States reachable from ``states`` by one move on ``symbol``, sorted."""
    return tuple(sorted({t for s in states for t in _targets(nfa, s, symbol)}))


def _priority_token(nfa: Nfa, states: StateSet) -> Optional[str]:
    """Token of the lowest-numbered accepting state in ``states``."""
    return next((nfa.accepts[s] for s in states if s in nfa.accepts), None)


def nfa_to_dfa(nfa: Nfa) -> Dfa:
    """Determinise ``nfa``; each DFA state takes its highest-priority token."""
    alphabet = sorted(
        {symbol for moves in nfa.states for symbol in moves if symbol is not None}
    )

    dfa = Dfa()
    start_set = epsilon_closure(nfa, [nfa.start])
    dfa.start = dfa.add_state()
    set_to_state: Dict[StateSet, int] = {start_set: dfa.start}
    token = _priority_token(nfa, start_set)
    if token is not None:
        dfa.mark_accept(dfa.start, token)

    queue = deque([start_set])
    while queue:
        current = queue.popleft()
        current_state = set_to_state[current]
        for symbol in alphabet:
            target_set = epsilon_closure(nfa, move(nfa, current, symbol))
            if not target_set:
                continue
            target_state = set_to_state.get(target_set)
            if target_state is None:
                target_state = dfa.add_state()
                set_to_state[target_set] = target_state
                token = _priority_token(nfa, target_set)
                if token is not None:
                    dfa.mark_accept(target_state, token)
                queue.append(target_set)
            dfa.add_transition(current_state, symbol, target_state)

    return dfa