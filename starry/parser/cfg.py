"""Context-free grammars over numbered terminals and non-terminals."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple, Union


class GrammarParseError(ValueError):
    """Raised when grammar text cannot be parsed."""


@dataclass(frozen=True)
class NonTerminal:
    """A reference to a non-terminal by its index in the grammar."""

    id: int

    def __str__(self) -> str:
        return f"N{self.id}"


@dataclass(frozen=True)
class Terminal:
    """A reference to a terminal by its index in the grammar."""

    id: int

    def __str__(self) -> str:
        return f"T{self.id}"


@dataclass(frozen=True)
class Epsilon:
    """The empty string."""

    def __str__(self) -> str:
        return "ε"


Symbol = Union[NonTerminal, Terminal, Epsilon]


@dataclass(frozen=True)
class Production:
    """A rule ``lhs -> rhs`` where ``lhs`` is a non-terminal index."""

    lhs: int
    rhs: Tuple[Symbol, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "rhs", tuple(self.rhs))

    @classmethod
    def epsilon(cls, lhs: int) -> Production:
        """The rule ``lhs -> ε``."""
        return cls(lhs, (Epsilon(),))

    def is_epsilon(self) -> bool:
        return len(self.rhs) == 1 and isinstance(self.rhs[0], Epsilon)


def _debug_list(names: Iterable[str]) -> str:
    return "[" + ", ".join(f'"{name}"' for name in names) + "]"


@dataclass
class ContextFreeGrammar:
    """A grammar whose symbols are interned by name and numbered from zero."""

    non_terminals: List[str] = field(default_factory=list)
    terminals: List[str] = field(default_factory=list)
    start_symbol: int = 0
    productions: List[Production] = field(default_factory=list)
    terminal_map: Dict[str, int] = field(default_factory=dict)
    non_terminal_map: Dict[str, int] = field(default_factory=dict)

    def add_non_terminal(self, name: str) -> int:
        """Index of the non-terminal ``name``, adding it if new."""
        existing = self.non_terminal_map.get(name)
        if existing is not None:
            return existing
        self.non_terminals.append(name)
        index = len(self.non_terminals) - 1
        self.non_terminal_map[name] = index
        return index

    def add_terminal(self, name: str) -> int:
        """Index of the terminal ``name``, adding it if new."""
        existing = self.terminal_map.get(name)
        if existing is not None:
            return existing
        self.terminals.append(name)
        index = len(self.terminals) - 1
        self.terminal_map[name] = index
        return index

    def add_production(self, production: Production) -> None:
        self.productions.append(production)

    def _symbol(self, name: str) -> Symbol:
        if name[:1].isupper():
            return NonTerminal(self.add_non_terminal(name))
        return Terminal(self.add_terminal(name))

    def add_production_from_str(self, lhs: str, rhs: Iterable[str]) -> None:
        """Add a rule given by symbol names; names starting upper-case are non-terminals."""
        lhs_id = self.add_non_terminal(lhs)
        names = list(rhs)
        if names == ["ε"]:
            symbols: List[Symbol] = [Epsilon()]
        else:
            symbols = [self._symbol(name) for name in names]
        self.add_production(Production(lhs_id, tuple(symbols)))

    def non_terminal_name(self, non_terminal: int) -> str:
        return self.non_terminals[non_terminal]

    def terminal_name(self, terminal: int) -> str:
        """Name of a terminal; indices past the end name the end marker ``$``."""
        if 0 <= terminal < len(self.terminals):
            return self.terminals[terminal]
        return "$"

    def productions_for(self, non_terminal: int) -> List[Production]:
        return [p for p in self.productions if p.lhs == non_terminal]

    def copy(self) -> ContextFreeGrammar:
        """An independent copy of the grammar."""
        return ContextFreeGrammar(
            non_terminals=list(self.non_terminals),
            terminals=list(self.terminals),
            start_symbol=self.start_symbol,
            productions=list(self.productions),
            terminal_map=dict(self.terminal_map),
            non_terminal_map=dict(self.non_terminal_map),
        )

    @classmethod
    def parse(cls, text: str) -> ContextFreeGrammar:
        """Parse lines like ``E -> E + T | T``; symbols are separated by spaces.

        Blank lines and lines starting with ``#`` are skipped; the first
        rule's left-hand side becomes the start symbol.
        """
        cfg = cls()
        first = True
        for raw in text.splitlines():
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            parts = line.split("->")
            if len(parts) != 2:
                raise GrammarParseError(f"Invalid production: {line}")
            lhs_id = cfg.add_non_terminal(parts[0].strip())
            if first:
                cfg.start_symbol = lhs_id
                first = False
            for alternative in parts[1].strip().split("|"):
                alt = alternative.strip()
                if alt in ("ε", "epsilon"):
                    cfg.add_production(Production.epsilon(lhs_id))
                else:
                    symbols = tuple(cfg._symbol(name) for name in alt.split())
                    cfg.add_production(Production(lhs_id, symbols))
        return cfg

    def _symbol_name(self, symbol: Symbol) -> str:
        if isinstance(symbol, NonTerminal):
            return self.non_terminals[symbol.id]
        if isinstance(symbol, Terminal):
            return self.terminals[symbol.id]
        return "ε"

    def describe(self) -> str:
        """Human-readable listing, with alternatives grouped per non-terminal."""
        start = (
            self.non_terminals[self.start_symbol]
            if 0 <= self.start_symbol < len(self.non_terminals)
            else ""
        )
        lines = [
            "Context-Free Grammar:",
            f"  Start: {start}",
            f"  Non-terminals: {_debug_list(self.non_terminals)}",
            f"  Terminals: {_debug_list(self.terminals)}",
            "  Productions:",
        ]
        grouped: Dict[int, List[str]] = {}
        for production in self.productions:
            rendered = " ".join(self._symbol_name(s) for s in production.rhs)
            grouped.setdefault(production.lhs, []).append(rendered)
        for lhs in sorted(grouped):
            alternatives = " | ".join(grouped[lhs])
            lines.append(f"    {self.non_terminals[lhs]} -> {alternatives}")
        return "\n".join(lines)