"""
Front-End Error Hierarchy
=========================

This module defines the exceptions raised by the TeachLang scanner driver
and parser. All of them inherit from FrontEndError, which itself inherits
from TeachLangError for consistent error handling across the toolchain.

Exception Hierarchy
-------------------
FrontEndError (base for all front-end errors)
├── LexicalError - an embedded lexical error token reported as a diagnostic
├── ParseError - fatal structural errors
│   ├── UnexpectedTokenError - token does not fit the grammar here
│   ├── MissingTokenError - required token absent
│   └── ExpressionError - operator-precedence reduction failures
├── TokenFileError - unreadable token record
└── FrontEndCompilationError - pre-formatted aggregate report

Two Taxonomies
--------------
Lexical errors are recoverable: the scanner embeds them in the token stream
as LEX_ERROR tokens and carries on. Only a consumer decides to turn them into
LexicalError exceptions.

Syntactic errors are fatal: the parser raises on the first one and makes no
attempt to resynchronize, so no partial tree is ever returned.

Error Message Format
--------------------
    prog.tl:3:9: error: unexpected token '2'
        a = 1 2;
              ^
    hint: expected ';' after assignment
"""

from typing import Optional, List

from teachlang.errors import TeachLangError, SourceLocation


# =============================================================================
# Base Front-End Exception
# =============================================================================

class FrontEndError(TeachLangError):
    """
    Base exception for all front-end errors.

    Provides message formatting with source location, source line context
    and an optional hint.

    Attributes:
        message: The error description
        location: Where in the source the error occurred
        hint: A suggestion for fixing the error
        source_line: The actual source text at the error location
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

            prog.tl:5:12: error: expected operand in expression
                x = 3 + ;
                        ^
            hint: found ';'
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class FrontEndCompilationError(FrontEndError):
    """
    Aggregate error containing several diagnostics.

    The message is an already formatted report from FrontEndErrorCollector,
    so no location prefix is added.
    """

    def _format_message(self) -> str:
        """Return message as-is - it's already a formatted aggregate report."""
        return self.message


# =============================================================================
# Lexical Errors
# =============================================================================

class LexicalError(FrontEndError):
    """
    A lexical error token surfaced as a diagnostic.

    The scanner never raises this itself. It is built from a LEX_ERROR
    token by whichever consumer decides the error is fatal.

    Examples:
        - 12abc   illegal identifier (cannot start with a digit)
        - 1.2.3   illegal number format
        - @       unrecognized symbol
    """

    def __init__(
        self,
        detail: str,
        lexeme: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.detail = detail
        self.lexeme = lexeme
        super().__init__(
            f"{detail}: '{lexeme}'",
            location=location,
            source_line=source_line,
        )


# =============================================================================
# Syntax Errors (Parser)
# =============================================================================

class ParseError(FrontEndError):
    """
    Fatal structural error in a token stream.

    Raised when the parser meets a token that cannot continue the
    grammar. Parsing stops immediately; there is no recovery.
    """
    pass


class UnexpectedTokenError(ParseError):
    """
    Unexpected token during parsing.

    Raised when the current token does not start any construct that is
    allowed at this point, e.g. a statement position holding ')'.
    """

    def __init__(
        self,
        found: str,
        expected: Optional[str] = None,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.found = found
        self.expected = expected

        hint = None
        if expected:
            hint = f"expected {expected}"

        super().__init__(
            f"unexpected token '{found}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class MissingTokenError(ParseError):
    """
    Required token is missing.

    Raised when a required token (like ';' or ')') is not found where
    the grammar demands it. The token actually found is reported too.
    """

    def __init__(
        self,
        expected: str,
        found: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.expected = expected
        self.found = found
        super().__init__(
            f"expected {expected}",
            location=location,
            hint=f"found {found}",
            source_line=source_line,
        )


class ExpressionError(ParseError):
    """
    Failure inside the operator-precedence expression engine.

    Raised for:
        - unmatched parentheses
        - a unary or binary operator lacking operands
        - an empty expression (a = ;)
        - leftover operands (a = 1 2;)
    """
    pass


# =============================================================================
# Token File Errors
# =============================================================================

class TokenFileError(FrontEndError):
    """
    A token record file line could not be decoded.

    Attributes:
        line_number: 1-based line within the token file
    """

    def __init__(
        self,
        message: str,
        line_number: int,
        filename: str = "<tokens>",
        source_line: Optional[str] = None,
    ):
        self.line_number = line_number
        super().__init__(
            message,
            location=SourceLocation(filename, line_number, 0),
            source_line=source_line,
        )


# =============================================================================
# Error Collection (for multi-error reporting)
# =============================================================================

class FrontEndErrorCollector:
    """
    Collects several diagnostics for batch reporting.

    The driver uses this to report every lexical error found in a file at
    once rather than one per run.

    Example:
        collector = FrontEndErrorCollector(max_errors=100)

        for token in tokens:
            if token.is_error():
                collector.add(lexical_error_for(token))
                if collector.should_stop():
                    break

        collector.raise_if_errors()
    """

    def __init__(self, max_errors: int = 100):
        """
        Initialize the error collector.

        Args:
            max_errors: Maximum errors to collect before stopping
        """
        self.errors: List[FrontEndError] = []
        self.warnings: List[str] = []
        self.max_errors = max_errors

    def add(self, error: FrontEndError) -> None:
        """Add an error to the collection."""
        self.errors.append(error)

    def add_warning(self, message: str, location: Optional[SourceLocation] = None) -> None:
        """Add a warning message."""
        if location:
            self.warnings.append(f"{location}: warning: {message}")
        else:
            self.warnings.append(f"warning: {message}")

    def has_errors(self) -> bool:
        """Return True if any errors have been collected."""
        return len(self.errors) > 0

    def should_stop(self) -> bool:
        """Return True if max_errors has been reached."""
        return len(self.errors) >= self.max_errors

    def error_count(self) -> int:
        """Return the number of collected errors."""
        return len(self.errors)

    def warning_count(self) -> int:
        """Return the number of collected warnings."""
        return len(self.warnings)

    def report(self) -> str:
        """Format all errors and warnings for display."""
        lines = []

        for error in self.errors:
            lines.append(str(error))
            lines.append("")

        for warning in self.warnings:
            lines.append(warning)

        error_word = "error" if len(self.errors) == 1 else "errors"
        warning_word = "warning" if len(self.warnings) == 1 else "warnings"
        lines.append(
            f"\n{len(self.errors)} {error_word}, {len(self.warnings)} {warning_word}"
        )

        return "\n".join(lines)

    def clear(self) -> None:
        """Clear all collected errors and warnings."""
        self.errors.clear()
        self.warnings.clear()

    def raise_if_errors(self) -> None:
        """Raise a FrontEndCompilationError if any errors were collected."""
        if self.has_errors():
            raise FrontEndCompilationError(self.report())
