"""
TeachLang Command-Line Interface
================================

This package provides the command-line tools of the TeachLang front end:

- **tlscan**: scanner, writes a token record file
- **tlparse**: parser, writes the syntax tree dump

Each tool is implemented as a Click-based CLI application.
"""

__all__ = ["tlscan", "tlparse"]
