"""
TeachLang - Compiler Front End for a Small Teaching Language
============================================================

TeachLang is a tiny imperative language used to teach compiler
construction: typed variable declarations (int, float, bool), assignments,
if/else, while, for, and read/write statements over arithmetic, logical,
relational and bitwise expressions.

This package provides the front end of a TeachLang compiler.

Main Components
---------------
- **frontend.lexer**: Scanner turning source text into position-annotated
  tokens, with lexical errors embedded as error tokens
- **frontend.tokenfile**: The textual token record format used to hand
  tokens from the scanner to the parser
- **frontend.parser**: Recursive descent parser with an operator-precedence
  expression engine, producing an Abstract Syntax Tree
- **cli**: The ``tlscan`` and ``tlparse`` command-line tools

Quick Start
-----------
    >>> from teachlang.frontend import parse_source, ASTPrinter
    >>> tree = parse_source("int x; x = 1 + 2 * 3;")
    >>> print(ASTPrinter().print(tree))

Or use the command-line tools:
    $ tlscan prog.tl -o prog.tok
    $ tlparse prog.tok --tokens -o prog.ast
"""

__version__ = "1.0.0"

from teachlang.errors import TeachLangError, SourceLocation

__all__ = [
    "__version__",
    "TeachLangError",
    "SourceLocation",
]
