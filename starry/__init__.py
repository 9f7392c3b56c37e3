"""Compiler-construction toolkit: automata, lexers and grammar analysis."""

__version__ = "0.1.0"