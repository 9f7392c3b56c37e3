import pytest

from starry.lex.dfa import Dfa
from starry.lex.minimize import brzozowski, hopcroft, moore, reverse_dfa
from starry.lex.regex import parse_regex
from starry.lex.subset import nfa_to_dfa
from starry.lex.thompson import regex_to_nfa


def create_test_dfa() -> Dfa:
    dfa = Dfa()
    s0, s1, s2, s3 = (dfa.add_state() for _ in range(4))
    dfa.start = s0
    dfa.mark_accept(s3, "test_token")
    dfa.add_transition(s0, "a", s1)
    dfa.add_transition(s0, "b", s2)
    dfa.add_transition(s1, "a", s3)
    dfa.add_transition(s1, "b", s2)
    dfa.add_transition(s2, "a", s1)
    dfa.add_transition(s2, "b", s3)
    dfa.add_transition(s3, "a", s3)
    dfa.add_transition(s3, "b", s3)
    return dfa


def run(dfa: Dfa, text: str):
    state = dfa.start
    for ch in text:
        state = dfa.transition(state, ch)
        if state is None:
            return None
    return dfa.accepts.get(state)


def test_hopcroft():
    dfa = create_test_dfa()
    minimized = hopcroft(dfa)
    assert len(minimized.states) <= len(dfa.states)


def test_moore():
    dfa = create_test_dfa()
    minimized = moore(dfa)
    assert len(minimized.states) <= len(dfa.states)


def test_brzozowski():
    dfa = create_test_dfa()
    minimized = brzozowski(dfa)
    assert len(minimized.states) <= len(dfa.states)


@pytest.mark.parametrize(
    "text, accepted",
    [("aa", True), ("bb", True), ("abba", True), ("ab", False), ("abab", False), ("", False)],
)
def test_hopcroft_preserves_language(text, accepted):
    minimized = hopcroft(create_test_dfa())
    assert len(minimized.states) == 4
    assert (run(minimized, text) == "test_token") is accepted


@pytest.mark.parametrize(
    "text, accepted",
    [("aa", True), ("babb", True), ("ba", False), ("a", False)],
)
def test_brzozowski_preserves_language(text, accepted):
    minimized = brzozowski(create_test_dfa())
    assert len(minimized.states) == 4
    assert (run(minimized, text) is not None) is accepted


def test_hopcroft_merges_equivalent_states():
    dfa = nfa_to_dfa(regex_to_nfa(parse_regex("a(b|a)*"), "TOK"))
    minimized = hopcroft(dfa)
    assert len(minimized.states) == 2
    assert run(minimized, "abab") == "TOK"
    assert run(minimized, "b") is None


def test_hopcroft_keeps_tokens_apart():
    dfa = Dfa()
    s0, s1, s2 = (dfa.add_state() for _ in range(3))
    dfa.start = s0
    dfa.add_transition(s0, "x", s1)
    dfa.add_transition(s0, "y", s2)
    dfa.mark_accept(s1, "X")
    dfa.mark_accept(s2, "Y")
    minimized = hopcroft(dfa)
    assert len(minimized.states) == 3
    assert run(minimized, "x") == "X"
    assert run(minimized, "y") == "Y"


def test_reverse_dfa_single_accept():
    dfa = Dfa()
    s0, s1 = dfa.add_state(), dfa.add_state()
    dfa.start = s0
    dfa.add_transition(s0, "a", s1)
    dfa.mark_accept(s1, "T")
    nfa = reverse_dfa(dfa)
    assert len(nfa.states) == 2
    assert nfa.start == s1
    assert nfa.states[s1] == {"a": [s0]}
    assert nfa.accepts == {s0: "reversed_accept"}


def test_reverse_dfa_many_accepts_adds_start():
    dfa = Dfa()
    s0, s1, s2 = (dfa.add_state() for _ in range(3))
    dfa.start = s0
    dfa.add_transition(s0, "a", s1)
    dfa.add_transition(s0, "b", s2)
    dfa.mark_accept(s1, "A")
    dfa.mark_accept(s2, "B")
    nfa = reverse_dfa(dfa)
    assert len(nfa.states) == 4
    assert nfa.start == 3
    assert sorted(nfa.states[3][None]) == [s1, s2]