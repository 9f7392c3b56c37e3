"""Thompson construction of NFAs from regular expressions."""

from __future__ import annotations

from typing import Iterable, Optional

from starry.lex.nfa import Nfa
from starry.lex.regex import Char, Concat, Empty, Regex, Star, Union


def _append(dest: Nfa, src: Nfa) -> int:
    """Copy the states of ``src`` onto the end of ``dest``; return the offset."""
    offset = len(dest.states)
    dest.states.extend(
        {symbol: [target + offset for target in targets] for symbol, targets in moves.items()}
        for moves in src.states
    )
    return offset


def _first_accept(nfa: Nfa) -> Optional[int]:
    return next(iter(nfa.accepts), None)


def _build_empty() -> Nfa:
    nfa = Nfa()
    start, accept = nfa.add_state(), nfa.add_state()
    nfa.start = start
    nfa.add_transition(start, None, accept)
    return nfa


def _build_char(symbol: str) -> Nfa:
    nfa = Nfa()
    start, accept = nfa.add_state(), nfa.add_state()
    nfa.start = start
    nfa.add_transition(start, symbol, accept)
    nfa.mark_accept(accept, "temp")
    return nfa


def _build_concat(left_regex: Regex, right_regex: Regex) -> Nfa:
    left = _convert(left_regex)
    right = _convert(right_regex)
    offset = _append(left, right)
    left_accept = _first_accept(left)
    if left_accept is not None:
        left.add_transition(left_accept, None, right.start + offset)
        del left.accepts[left_accept]
    for state, token in right.accepts.items():
        left.mark_accept(state + offset, token)
    return left


def _wrap(final: Nfa, inner: Nfa, accept: int) -> int:
    """Append ``inner`` to ``final`` and link its accept to ``accept``."""
    offset = _append(final, inner)
    inner_start = inner.start + offset
    final.add_transition(final.start, None, inner_start)
    inner_accept = _first_accept(inner)
    if inner_accept is not None:
        final.add_transition(inner_accept + offset, None, accept)
    return inner_start


def _build_union(left_regex: Regex, right_regex: Regex) -> Nfa:
    left = _convert(left_regex)
    right = _convert(right_regex)
    final = Nfa()
    final.start = final.add_state()
    accept = final.add_state()
    _wrap(final, left, accept)
    _wrap(final, right, accept)
    final.mark_accept(accept, "union")
    return final


def _build_star(regex: Regex) -> Nfa:
    inner = _convert(regex)
    final = Nfa()
    start = final.add_state()
    accept = final.add_state()
    final.start = start
    offset = _append(final, inner)
    inner_start = inner.start + offset
    final.add_transition(start, None, inner_start)
    final.add_transition(start, None, accept)
    inner_accept = _first_accept(inner)
    if inner_accept is not None:
        final.add_transition(inner_accept + offset, None, inner_start)
        final.add_transition(inner_accept + offset, None, accept)
    final.mark_accept(accept, "star")
    return final


def _convert(regex: Regex) -> Nfa:
    match regex:
        case Empty():
            return _build_empty()
        case Char(symbol):
            return _build_char(symbol)
        case Concat(left, right):
            return _build_concat(left, right)
        case Union(left, right):
            return _build_union(left, right)
        case Star(inner):
            return _build_star(inner)
    raise TypeError(f"not a regular expression: {regex!r}")


def regex_to_nfa(regex: Regex, token_name: str) -> Nfa:
    """Build an NFA for ``regex`` whose accepting state yields ``token_name``."""
    built = _convert(regex)
    result = Nfa(states=built.states, start=built.start)
    accept = _first_accept(built)
    if accept is not None:
        result.mark_accept(accept, token_name)
    return result


def union_nfas(nfas: Iterable[Nfa]) -> Nfa:
    """Join NFAs under a fresh start state with epsilon moves to each."""
    items = list(nfas)
    if not items:
        return Nfa()
    if len(items) == 1:
        return items[0]
    final = Nfa()
    final.start = final.add_state()
    for nfa in items:
        offset = _append(final, nfa)
        final.add_transition(final.start, None, nfa.start + offset)
        for state, token in nfa.accepts.items():
            final.mark_accept(state + offset, token)
    return final