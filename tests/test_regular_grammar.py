import re

import pytest

from starry.lex.dfa import Dfa
from starry.lex.regex import Char, Concat, Empty, Regex, Star, Union, parse_regex
from starry.lex.regular_grammar import GrammarError, Production, RegularGrammar
from starry.lex.subset import nfa_to_dfa


def _pattern(regex: Regex) -> str:
    if isinstance(regex, Empty):
        return ""
    if isinstance(regex, Char):
        return re.escape(regex.symbol)
    if isinstance(regex, Concat):
        return _pattern(regex.left) + _pattern(regex.right)
    if isinstance(regex, Union):
        return f"(?:{_pattern(regex.left)}|{_pattern(regex.right)})"
    if isinstance(regex, Star):
        return f"(?:{_pattern(regex.inner)})*"
    raise TypeError(regex)


def _regex_matches(regex: Regex, word: str) -> bool:
    return re.fullmatch(_pattern(regex), word) is not None


def _dfa_accepts(dfa: Dfa, word: str) -> bool:
    state = dfa.start
    for ch in word:
        state = dfa.transition(state, ch)
        if state is None:
            return False
    return state in dfa.accepts


def test_parse_grammar():
    grammar = RegularGrammar.parse(
        """
            S -> aA | ε
            A -> aA | b
        """
    )
    assert len(grammar.non_terminals) == 2
    assert grammar.start_symbol == 0


def test_parse_productions_shapes():
    grammar = RegularGrammar.parse("S -> aA | b | A | epsilon\nA -> c")
    assert grammar.non_terminals == ["S", "A"]
    assert grammar.productions[0] == [
        Production("a", 1),
        Production("b"),
        Production(None, 1),
        Production(),
    ]
    assert grammar.productions[1] == [Production("c")]


def test_parse_skips_comments_and_blank_lines():
    grammar = RegularGrammar.parse("# comment\n\nX -> a\n")
    assert grammar.non_terminals == ["X"]
    assert grammar.productions == {0: [Production("a")]}


@pytest.mark.parametrize("text", ["S aA", "S -> a -> b", "S -> abc"])
def test_parse_errors(text):
    with pytest.raises(GrammarError):
        RegularGrammar.parse(text)


def test_grammar_to_nfa():
    grammar = RegularGrammar.parse(
        """
            S -> aA | ε
            A -> b
        """
    )
    nfa = grammar.to_nfa()
    assert len(nfa.states) >= 2
    assert len(nfa.states) == 3
    assert nfa.accepts == {2: "grammar_accept"}


def test_parsed_grammar_language_through_nfa():
    grammar = RegularGrammar.parse(
        """
            S -> aA
            A -> aA | bA | ε
        """
    )
    dfa = nfa_to_dfa(grammar.to_nfa())
    assert set(dfa.accepts.values()) == {"grammar_accept"}
    assert dfa.start not in dfa.accepts
    assert dfa.transition(dfa.start, "b") is None

    for word in ["a", "ab", "abba", "aaa"]:
        state = dfa.start
        for ch in word:
            state = dfa.transition(state, ch)
            assert state in range(len(dfa.states))
        assert state in dfa.accepts

    after_b = dfa.transition(dfa.transition(dfa.start, "b") or dfa.start, "a")
    assert dfa.transition(dfa.start, "b") is None
    assert after_b in range(len(dfa.states))


def test_simple_grammar():
    grammar = RegularGrammar()
    s = grammar.add_non_terminal("S")
    a = grammar.add_non_terminal("A")
    grammar.start_symbol = s
    grammar.add_production(s, Production("a"))
    grammar.add_production(s, Production("a", a))
    grammar.add_production(a, Production("b"))
    assert len(grammar.non_terminals) == 2
    assert len(grammar.productions) == 2


def test_arden_simple():
    grammar = RegularGrammar()
    s = grammar.add_non_terminal("S")
    grammar.start_symbol = s
    grammar.add_production(s, Production("a"))
    grammar.add_production(s, Production("a", s))
    regex = grammar.to_regex()
    assert regex == Concat(left=Star(inner=Char(symbol="a")), right=Char(symbol="a"))


def test_arden_two_nonterminals():
    grammar = RegularGrammar()
    s = grammar.add_non_terminal("S")
    a = grammar.add_non_terminal("A")
    grammar.start_symbol = s
    grammar.add_production(s, Production("a", s))
    grammar.add_production(s, Production("b", a))
    grammar.add_production(s, Production())
    grammar.add_production(a, Production("a", a))
    grammar.add_production(a, Production("b", s))
    grammar.add_production(a, Production("b"))
    regex = grammar.to_regex()

    b_astar_b = Concat(
        left=Char(symbol="b"),
        right=Concat(left=Star(inner=Char(symbol="a")), right=Char(symbol="b")),
    )
    expected = Concat(
        left=Star(inner=Union(left=Char(symbol="a"), right=b_astar_b)),
        right=Union(left=Empty(), right=b_astar_b),
    )
    assert regex == expected


def test_empty_grammar_to_regex():
    assert RegularGrammar().to_regex() == Empty()


def test_regex_to_grammar_via_nfa():
    grammar = RegularGrammar.from_regex(parse_regex("a(b|c)*"))
    assert grammar.non_terminals
    assert grammar.productions
    assert "Regular Grammar:" in grammar.describe()
    regex = grammar.to_regex()
    for word in ["a", "ab", "acbc"]:
        assert _regex_matches(regex, word)
    for word in ["", "b", "aa"]:
        assert not _regex_matches(regex, word)


def test_dfa_to_grammar():
    dfa = Dfa()
    s0 = dfa.add_state()
    s1 = dfa.add_state()
    dfa.start = s0
    dfa.mark_accept(s1, "test_token")
    dfa.add_transition(s0, "0", s1)
    dfa.add_transition(s0, "1", s0)
    dfa.add_transition(s1, "0", s1)
    dfa.add_transition(s1, "1", s0)

    grammar = RegularGrammar.from_dfa(dfa)
    assert len(grammar.non_terminals) == 2
    assert 1 in grammar.productions
    assert grammar.non_terminals == ["S", "A1"]
    assert Production() in grammar.productions[1]

    rebuilt = nfa_to_dfa(grammar.to_nfa())
    for word in ["0", "10", "0110", "1", "01", ""]:
        assert _dfa_accepts(rebuilt, word) == _dfa_accepts(dfa, word)


def test_roundtrip_regex_grammar_regex():
    grammar = RegularGrammar.from_regex(parse_regex("ab"))
    assert grammar.non_terminals == ["S", "A1", "A2"]
    back = grammar.to_regex()
    assert back == Concat(
        left=Char(symbol="a"),
        right=Concat(left=Char(symbol="b"), right=Empty()),
    )


def test_describe_lists_productions():
    grammar = RegularGrammar.parse("S -> aA | B\nA -> ε\nB -> b")
    text = grammar.describe()
    assert "  Start: S" in text
    assert "    S -> aA | B" in text
    assert "    A -> ε" in text
    assert "    B -> b" in text