"""DFA minimisation by Hopcroft's, Moore's and Brzozowski's algorithms."""

from __future__ import annotations

from collections import deque
from typing import Dict, FrozenSet, List, Optional, Sequence, Set, Tuple

from starry.lex.dfa import Dfa
from starry.lex.nfa import Nfa
from starry.lex.subset import nfa_to_dfa

Block = FrozenSet[int]


def _predecessors(dfa: Dfa, block: Block, symbol: str) -> Block:
    """States that move into ``block`` on ``symbol``."""
    return frozenset(
        index for index, moves in enumerate(dfa.states) if moves.get(symbol) in block
    )


def _build_minimized(dfa: Dfa, blocks: Sequence[Block], alphabet: Sequence[str]) -> Dfa:
    """Build the quotient DFA whose states are ``blocks``, in order."""
    mapping: Dict[int, int] = {
        state: index for index, block in enumerate(blocks) for state in block
    }

    result = Dfa()
    for _ in blocks:
        result.add_state()
    result.start = mapping[dfa.start]

    for block in blocks:
        if not block:
            continue
        representative = min(block)
        new_state = mapping[representative]
        token = dfa.accepts.get(representative)
        if token is not None:
            result.mark_accept(new_state, token)
        for symbol in alphabet:
            target = dfa.transition(representative, symbol)
            if target is not None:
                result.add_transition(new_state, symbol, mapping[target])

    return result


def _initial_blocks(dfa: Dfa) -> List[Block]:
    """One block per token name, then one for the non-accepting states."""
    by_token: Dict[str, Set[int]] = {}
    non_accepting: Set[int] = set()
    for state in range(len(dfa.states)):
        token = dfa.accepts.get(state)
        if token is None:
            non_accepting.add(state)
        else:
            by_token.setdefault(token, set()).add(state)
    blocks = [frozenset(states) for states in by_token.values()]
    if non_accepting:
        blocks.append(frozenset(non_accepting))
    return blocks


def hopcroft(dfa: Dfa) -> Dfa:
    """Minimise ``dfa`` by partition refinement with a splitter worklist."""
    alphabet = dfa.alphabet()
    partitions = _initial_blocks(dfa)
    worklist = deque(partitions)

    while worklist:
        splitter = worklist.popleft()
        for symbol in alphabet:
            predecessors = _predecessors(dfa, splitter, symbol)

            refined: List[Block] = []
            to_remove: Optional[Block] = None
            to_add: List[Block] = []
            split = False

            for block in partitions:
                inside = block & predecessors
                outside = block - predecessors
                if inside and outside:
                    refined.extend((inside, outside))
                    if block in worklist:
                        to_remove = block
                        to_add.extend((inside, outside))
                    elif len(inside) <= len(outside):
                        to_add.append(inside)
                    else:
                        to_add.append(outside)
                    split = True
                else:
                    refined.append(block)

            if split:
                partitions = refined
                if to_remove is not None:
                    worklist = deque(block for block in worklist if block != to_remove)
                worklist.extend(to_add)
                break

    return _build_minimized(dfa, partitions, alphabet)


def moore(dfa: Dfa) -> Dfa:
    """Minimise ``dfa`` by iterating transition signatures to a fixed point."""
    alphabet = dfa.alphabet()
    states = range(len(dfa.states))

    token_ids: Dict[str, int] = {}
    partition: Dict[int, int] = {}
    for state in states:
        token = dfa.accepts.get(state)
        partition[state] = 0 if token is None else token_ids.setdefault(token, len(token_ids))

    def target_class(state: int, symbol: str, classes: Dict[int, int]) -> int:
        target = dfa.transition(state, symbol)
        return -1 if target is None else classes[target]

    while True:
        signature_ids: Dict[Tuple[int, ...], int] = {}
        refined: Dict[int, int] = {}
        for state in states:
            signature = (partition[state],) + tuple(
                target_class(state, symbol, partition) for symbol in alphabet
            )
            refined[state] = signature_ids.setdefault(signature, len(signature_ids))
        if refined == partition:
            break
        partition = refined

    classes: Dict[int, Set[int]] = {}
    for state, class_id in partition.items():
        classes.setdefault(class_id, set()).add(state)
    blocks = [frozenset(classes[class_id]) for class_id in sorted(classes)]
    return _build_minimized(dfa, blocks, alphabet)


def reverse_dfa(dfa: Dfa) -> Nfa:
    """NFA for the reversed language of ``dfa``.

    Every move is turned around; the old accepting states become the start
    (through a fresh epsilon state unless there is exactly one) and the old
    start becomes the only accepting state.
    """
    nfa = Nfa()
    for _ in dfa.states:
        nfa.add_state()

    for source, moves in enumerate(dfa.states):
        for symbol, target in moves.items():
            nfa.add_transition(target, symbol, source)

    if len(dfa.accepts) == 1:
        nfa.start = next(iter(dfa.accepts))
    else:
        start = nfa.add_state()
        for accept in dfa.accepts:
            nfa.add_transition(start, None, accept)
        nfa.start = start

    nfa.mark_accept(dfa.start, "reversed_accept")
    return nfa


def brzozowski(dfa: Dfa) -> Dfa:
    """Minimise ``dfa`` by reversing and determinising twice."""
    intermediate = nfa_to_dfa(reverse_dfa(dfa))
    return nfa_to_dfa(reverse_dfa(intermediate))