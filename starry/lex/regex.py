"""Regular expression syntax trees and their parser.

The syntax supports single characters, concatenation, alternation with
``|``, Kleene star with ``*`` and grouping with parentheses.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


class RegexSyntaxError(ValueError):
    """Raised when a regular expression cannot be parsed."""


class Regex:
    """Base class of regular expression nodes."""

    __slots__ = ()


@dataclass(frozen=True)
class Empty(Regex):
    """The empty expression."""


@dataclass(frozen=True)
class Char(Regex):
    """A single literal character."""

    symbol: str


@dataclass(frozen=True)
class Concat(Regex):
    left: Regex
    right: Regex


@dataclass(frozen=True)
class Union(Regex):
    left: Regex
    right: Regex


@dataclass(frozen=True)
class Star(Regex):
    inner: Regex


class _Parser:
    def __init__(self, text: str) -> None:
        self._chars = iter(text)
        self.lookahead: Optional[str] = next(self._chars, None)

    def advance(self) -> None:
        self.lookahead = next(self._chars, None)

    def parse_expr(self) -> Regex:
        left = self.parse_concat()
        if self.lookahead == "|":
            self.advance()
            return Union(left, self.parse_expr())
        return left

    def parse_concat(self) -> Regex:
        left = self.parse_factor()
        while self.lookahead is not None and self.lookahead not in "|)":
            left = Concat(left, self.parse_factor())
        return left

    def parse_factor(self) -> Regex:
        atom = self.parse_atom()
        if self.lookahead == "*":
            self.advance()
            return Star(atom)
        return atom

    def parse_atom(self) -> Regex:
        current = self.lookahead
        if current is None:
            return Empty()
        if current == "(":
            self.advance()
            expr = self.parse_expr()
            if self.lookahead != ")":
                raise RegexSyntaxError("Expected ')'")
            self.advance()
            return expr
        if current in "|)*":
            raise RegexSyntaxError(f"Unexpected '{current}'")
        self.advance()
        return Char(current)


def parse_regex(text: str) -> Regex:
    """Parse ``text`` into a regular expression tree."""
    parser = _Parser(text)
    result = parser.parse_expr()
    if parser.lookahead is not None:
        raise RegexSyntaxError(
            f"Unexpected trailing character '{parser.lookahead}'"
        )
    return result