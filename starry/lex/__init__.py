"""Regular expressions, finite automata, minimisation, regular grammars and lexers."""