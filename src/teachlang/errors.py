"""
TeachLang Error Hierarchy
=========================

This module defines the root of the exception hierarchy for the TeachLang
toolchain. All exceptions inherit from TeachLangError, allowing callers
to catch every toolchain error with a single except clause if desired.

Exception Hierarchy
-------------------
TeachLangError (base)
└── FrontEndError (scanner and parser, see teachlang.frontend.errors)
    ├── LexicalError - a lexical error token surfaced as a diagnostic
    ├── ParseError - fatal structural error
    ├── TokenFileError - malformed token record file
    └── FrontEndCompilationError - aggregate report of several errors

Design Philosophy
-----------------
Each exception captures source location information (filename, line, column)
when applicable, so that messages point straight at the offending lexeme:

    filename:line:column: error: description
        source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass


# =============================================================================
# Base Exception Class
# =============================================================================

class TeachLangError(Exception):
    """
    Base exception for all TeachLang errors.

    Callers embedding the front end can catch everything it raises with:

        try:
            tree = parse_source(text)
        except TeachLangError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Tokens and AST nodes carry one of these so diagnostics can name the
    exact position of the construct involved.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"
