"""Source positions and spans."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable


@dataclass(frozen=True, order=True)
class Position:
    """A line/column location in source text."""

    line: int = 0
    col: int = 0

    def __str__(self) -> str:
        return f"{self.line}:{self.col}"


@dataclass(frozen=True)
class Span:
    """A region of source text between two positions."""

    start: Position = field(default_factory=Position)
    end: Position = field(default_factory=Position)

    @classmethod
    def from_positions(
        cls, start_line: int, start_col: int, end_line: int, end_col: int
    ) -> Span:
        return cls(Position(start_line, start_col), Position(end_line, end_col))

    @staticmethod
    def merge(first: Span, last: Span) -> Span:
        """Span running from the start of ``first`` to the end of ``last``."""
        return Span(first.start, last.end)

    @staticmethod
    def merge_all(spans: Iterable[Span]) -> Span:
        """Span covering a sequence of spans; the default span if there are none."""
        items = list(spans)
        if not items:
            return Span()
        return Span(items[0].start, items[-1].end)

    def __str__(self) -> str:
        if self.start.line == self.end.line:
            return f"{self.start.line}:{self.start.col}-{self.end.col}"
        return f"{self.start.line}:{self.start.col}-{self.end.line}:{self.end.col}"