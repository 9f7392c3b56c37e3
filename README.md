# starry

A small toolkit for the front end of a compiler, in plain Python with no
third-party dependencies.

## Lexical side: `starry.lex`

- `starry.lex.regex`: `parse_regex(text)` parses single characters,
  concatenation, `|`, `*` and parentheses into a tree of `Empty`, `Char`,
  `Concat`, `Union` and `Star` nodes. Bad input raises `RegexSyntaxError`.
- `starry.lex.nfa` / `starry.lex.dfa`: the `Nfa` and `Dfa` automata, with
  numbered states, `add_state`, `add_transition`, `mark_accept` and
  `describe()` for a text listing. `Dfa` also has `transition` and `alphabet`.
- `starry.lex.thompson`: `regex_to_nfa(regex, token_name)` builds an NFA by
  Thompson's construction. `union_nfas(nfas)` joins several NFAs under one
  new start state.
- `starry.lex.subset`: `nfa_to_dfa(nfa)` runs the subset construction, with
  `epsilon_closure` and `move` as helpers. When a DFA state covers several
  accepting NFA states, it takes the token of the lowest-numbered one.
- `starry.lex.minimize`: `hopcroft`, `moore` and `brzozowski` minimise a DFA.
  `reverse_dfa` gives the NFA of the reversed language.
- `starry.lex.lexer`: `build_lexer(rules)` takes `(regex, token_name)` pairs
  and returns a `Lexer`. The lexer skips whitespace, matches the longest
  token it can, and yields `Token(name, lexeme)` values. A character that
  no rule can start comes back as an `UNKNOWN` token.
- `starry.lex.regular_grammar`: `RegularGrammar` holds right-linear grammars.
  It has `parse`, `from_regex`, `from_nfa`, `from_dfa`, `to_nfa`,
  `to_regex` (which uses Arden's rule) and `describe`. Malformed grammar
  text raises `GrammarError`.

```python
from starry.lex.lexer import build_lexer

lexer = build_lexer([("a*b", "A_STAR_B"), ("cc*", "C_PLUS")])
lexer.set_source("aaab ccc")
for token in lexer:
    print(token.name, token.lexeme)
```

## Syntactic side: `starry.parser`

- `starry.parser.cfg`: `ContextFreeGrammar.parse` reads lines such as
  `E -> E + T | T`. Symbols are separated by spaces, and names that start
  upper-case are non-terminals. `ε` or `epsilon` is the empty rule. Bad
  lines raise `GrammarParseError`.
- `starry.parser.first`: `compute_nullable`, `compute_first`,
  `first_of_symbols` and the `FirstSet` type.
- `starry.parser.follow`: `compute_follow`, `compute_all` and the `FollowSet`
  type. The end marker `$` is the terminal index one past the last terminal.
- `starry.parser.left_recursion`: `detect_left_recursion` and
  `detect_direct_left_recursion` return `LeftRecursionInfo` records.
- `starry.parser.elimination`: `eliminate_left_recursion(cfg)` returns a
  rewritten copy of the grammar that uses primed non-terminals such as
  `E'`. It raises `LeftRecursionError` when a non-terminal has only
  left-recursive rules. `LeftRecursionAnalyzer` bundles detection and
  elimination.

```python
from starry.parser.cfg import ContextFreeGrammar
from starry.parser.elimination import eliminate_left_recursion

cfg = ContextFreeGrammar.parse("""
    E -> E + T | T
    T -> T * F | F
    F -> ( E ) | num
""")
print(eliminate_left_recursion(cfg).describe())
```

## Demo

The following command prints every stage of the lexical pipeline:

```
starry-lex-demo [REGEX]
```

The stages are regex, NFA, DFA, the three minimisations, and the conversions
between grammars and automata. `REGEX` defaults to `a(b|a)*`.

## What it does not do

The package analyses context-free grammars. It does not parse token streams
with them: there are no LL(1) or LR parsing tables, no parser driver and no
syntax-tree construction. `starry.span` offers `Position` and `Span` values
for source locations, but nothing in the package attaches them to tokens yet.

## Installing and testing

```
pip install .[test]
pytest
```