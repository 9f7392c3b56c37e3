[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "starry"
version = "0.1.0"
description = "Compiler-construction toolkit: regular expressions, automata, lexers, regular and context-free grammar analysis"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "lexer", "regex", "nfa", "dfa", "minimization", "grammar", "first", "follow", "left-recursion"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
starry-lex-demo = "starry.lex.demo:main"

[tool.setuptools.packages.find]
include = ["starry*"]

[tool.pytest.ini_options]
addopts = "-ra"
