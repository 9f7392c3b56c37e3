"""Walk a regular expression through every lexer construction and print each stage."""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from starry.lex.minimize import brzozowski, hopcroft, moore
from starry.lex.regex import RegexSyntaxError, parse_regex
from starry.lex.regular_grammar import GrammarError, RegularGrammar
from starry.lex.subset import nfa_to_dfa
from starry.lex.thompson import regex_to_nfa

DEFAULT_REGEX = "a(b|a)*"

DEFAULT_GRAMMAR = """
        S -> aA
        A -> aA | bA | ε
    """


def main(argv: Optional[List[str]] = None) -> int:
    """Run the demonstration; returns the process exit status."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("regex", nargs="?", default=DEFAULT_REGEX)
    args = parser.parse_args(argv)

    try:
        _run(args.regex)
    except (RegexSyntaxError, GrammarError) as error:
        print(f"error: {error}", file=sys.stderr)
        return 1
    return 0


def _run(regex_text: str) -> None:
    regex = parse_regex(regex_text)
    print(f"Input: {regex_text}")
    print(f"Parsed: {regex!r}\n")

    nfa = regex_to_nfa(regex, "TEST_TOKEN")
    print(nfa.describe())
    print()

    dfa = nfa_to_dfa(nfa)
    print(dfa.describe())
    print()

    minimized = hopcroft(dfa)
    print("(Hopcroft):")
    print(minimized.describe())
    print("(Moore):")
    print(moore(dfa).describe())
    print("(Brzozowski):")
    print(brzozowski(dfa).describe())
    print()

    grammar_from_dfa = RegularGrammar.from_dfa(minimized)
    print(grammar_from_dfa.describe())
    print()

    print("Regex from grammar:")
    print(f"{grammar_from_dfa.to_regex()!r}\n")

    print("Grammar from regex:")
    grammar = RegularGrammar.from_regex(regex)
    print(grammar.describe())
    print()

    _show_pipeline(grammar)

    print(DEFAULT_GRAMMAR)
    parsed = RegularGrammar.parse(DEFAULT_GRAMMAR)
    print(parsed.describe())
    print()
    _show_pipeline(parsed)
    print(f"{parsed.to_regex()!r}\n")


def _show_pipeline(grammar: RegularGrammar) -> None:
    nfa = grammar.to_nfa()
    print(nfa.describe())
    print()
    dfa = nfa_to_dfa(nfa)
    print(dfa.describe())
    print()
    print(hopcroft(dfa).describe())
    print()


if __name__ == "__main__":
    sys.exit(main())