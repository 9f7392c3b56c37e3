"""Longest-match lexing driven by a DFA."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple

from starry.lex.dfa import Dfa
from starry.lex.minimize import hopcroft
from starry.lex.regex import parse_regex
from starry.lex.subset import nfa_to_dfa
from starry.lex.thompson import regex_to_nfa, union_nfas

UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class Token:
    """A recognised token: its name and the text it matched."""

    name: str
    lexeme: str


class Lexer:
    """Splits source text into tokens using a DFA."""

    def __init__(self, dfa: Dfa, source: str = "") -> None:
        self.dfa = dfa
        self.source = source
        self._position = 0

    def set_source(self, source: str) -> None:
        """Replace the input and restart from its beginning."""
        self.source = source
        self._position = 0

    def _skip_whitespace(self) -> None:
        text = self.source
        while self._position < len(text) and text[self._position].isspace():
            self._position += 1

    def next_token(self) -> Optional[Token]:
        """The next token, or ``None`` when the input is exhausted.

        A character no rule can start is returned as an ``UNKNOWN`` token.
        """
        self._skip_whitespace()
        text = self.source
        if self._position >= len(text):
            return None

        state = self.dfa.start
        start = self._position
        last_accepting: Optional[Tuple[str, int]] = None

        while self._position < len(text):
            target = self.dfa.transition(state, text[self._position])
            if target is None:
                break
            state = target
            self._position += 1
            token_name = self.dfa.accepts.get(state)
            if token_name is not None:
                last_accepting = (token_name, self._position)

        if last_accepting is not None:
            name, end = last_accepting
            return Token(name, text[start:end])

        if self._position < len(text):
            unknown = text[self._position]
            self._position += 1
            return Token(UNKNOWN, unknown)
        return None

    def __iter__(self) -> Iterator[Token]:
        while (token := self.next_token()) is not None:
            yield token

    def tokenize(self) -> List[Token]:
        """All remaining tokens of the input."""
        return list(self)


def build_lexer(rules: Iterable[Tuple[str, str]]) -> Lexer:
    """Build a lexer from ``(regex, token_name)`` rules; earlier rules win ties.

    Raises ``RegexSyntaxError`` if a pattern is malformed.
    """
    nfas = [regex_to_nfa(parse_regex(pattern), name) for pattern, name in rules]
    dfa = hopcroft(nfa_to_dfa(union_nfas(nfas)))
    return Lexer(dfa)