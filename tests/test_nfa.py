from starry.lex.nfa import Nfa


def test_new_nfa_is_empty():
    nfa = Nfa()
    assert nfa.states == []
    assert nfa.start == 0
    assert nfa.accepts == {}


def test_add_state_numbers_sequentially():
    nfa = Nfa()
    ids = [nfa.add_state() for _ in range(4)]
    assert ids == list(range(4))
    assert len(nfa.states) == 4


def test_transitions_collect_multiple_targets():
    nfa = Nfa()
    a, b, c = (nfa.add_state() for _ in range(3))
    nfa.add_transition(a, "x", b)
    nfa.add_transition(a, "x", c)
    nfa.add_transition(a, None, c)
    assert nfa.states[a]["x"] == [b, c]
    assert nfa.states[a][None] == [c]


def test_transition_from_unknown_state_is_ignored():
    nfa = Nfa()
    nfa.add_state()
    nfa.add_transition(5, "a", 0)
    assert nfa.states == [{}]


def test_mark_accept_overwrites():
    nfa = Nfa()
    state = nfa.add_state()
    nfa.mark_accept(state, "ONE")
    nfa.mark_accept(state, "TWO")
    assert nfa.accepts == {state: "TWO"}


def test_describe_lists_moves():
    nfa = Nfa()
    a, b = nfa.add_state(), nfa.add_state()
    nfa.add_transition(a, "q", b)
    nfa.add_transition(b, None, a)
    nfa.mark_accept(b, "TOKEN")
    text = nfa.describe()
    assert text.splitlines()[0] == "NFA:"
    assert f"{a} --'q'--> {b}" in text
    assert f"{b} --ε--> {a}" in text
    assert f"{b} -> TOKEN" in text