"""
TeachLang Front-End Driver
==========================

This module ties the scanner and the parser together:

    Source → Scan → Tokens → (check lexical errors) → Parse → AST

or, starting from a token record file:

    Token file → Tokens → (check lexical errors) → Parse → AST

Usage
-----
Command line:
    $ tlscan prog.tl -o prog.tok
    $ tlparse prog.tok --tokens -o prog.ast

Programmatic:
    >>> from teachlang.frontend import FrontEnd
    >>> result = FrontEnd().compile_source("int a; a = 1;")
    >>> result.success
    True

Error Handling
--------------
Lexical errors are collected, so a file with several bad lexemes reports
all of them at once. When ``lexical_errors_fatal`` is off they become
warnings, the offending tokens are dropped, and parsing goes ahead.
A syntax error stops the parse at once. Either way a failure is raised as
a FrontEndCompilationError carrying the formatted report.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence
import logging

from teachlang.frontend.lexer import Scanner, Token
from teachlang.frontend.tokenfile import load_tokens
from teachlang.frontend.parser import Parser
from teachlang.frontend.ast import Program
from teachlang.frontend.errors import (
    FrontEndError,
    FrontEndCompilationError,
    FrontEndErrorCollector,
    LexicalError,
)

logger = logging.getLogger(__name__)


@dataclass
class FrontEndOptions:
    """
    Front-end configuration options.

    Attributes:
        filename: Name used in diagnostics when none is given per call
        lexical_errors_fatal: If True (default), any lexical error token
                              stops the run before parsing. If False the
                              error tokens are reported as warnings and
                              dropped from the stream.
        max_errors: Maximum number of lexical errors to collect
        dump_tokens: Ask the command-line tools to print every token
    """
    filename: str = "<input>"
    lexical_errors_fatal: bool = True
    max_errors: int = 100
    dump_tokens: bool = False


@dataclass
class FrontEndResult:
    """
    Result of a front-end run.

    Attributes:
        filename: Source filename
        success: True if a tree was built
        tokens: Tokens fed to the parser, lexical error tokens included
        token_count: Number of tokens (the sentinel is not counted)
        ast: The Program tree (if parsing succeeded)
        errors: Collected errors
        warnings: Collected warning messages
    """
    filename: str = ""
    success: bool = False
    tokens: list[Token] = field(default_factory=list)
    token_count: int = 0
    ast: Optional[Program] = None
    errors: list[FrontEndError] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


class FrontEnd:
    """
    TeachLang compiler front end.

    Example:
        front_end = FrontEnd(FrontEndOptions(lexical_errors_fatal=False))
        result = front_end.compile_file("prog.tl")
        print(ASTPrinter().print(result.ast))

    Attributes:
        options: Front-end configuration
    """

    def __init__(self, options: Optional[FrontEndOptions] = None):
        self.options = options or FrontEndOptions()
        self._errors = FrontEndErrorCollector(self.options.max_errors)

    # =========================================================================
    # Scanning
    # =========================================================================

    def scan(self, source: str, filename: Optional[str] = None) -> list[Token]:
        """
        Tokenize source text. Never raises for bad input; lexical errors
        stay in the list as LEX_ERROR tokens.
        """
        filename = filename or self.options.filename
        tokens = Scanner(source, filename).tokens()
        logger.info(f"{filename}: {len(tokens)} tokens")
        return tokens

    def lexical_errors(
        self,
        tokens: Sequence[Token],
        source_lines: Optional[list[str]] = None,
    ) -> list[LexicalError]:
        """Build a LexicalError for every error token, in stream order."""
        lines = source_lines or []
        errors = []
        for token in tokens:
            if not token.is_error():
                continue
            source_line = lines[token.line - 1] if 0 < token.line <= len(lines) else None
            errors.append(LexicalError(
                token.detail or "lexical error",
                token.lexeme,
                token.location,
                source_line,
            ))
        return errors

    # =========================================================================
    # Full Runs
    # =========================================================================

    def compile_source(self, source: str, filename: Optional[str] = None) -> FrontEndResult:
        """
        Scan and parse source text.

        Returns:
            FrontEndResult with tokens and tree

        Raises:
            FrontEndCompilationError: If any error was found
        """
        filename = filename or self.options.filename
        tokens = self.scan(source, filename)
        return self.compile_tokens(tokens, filename, source.splitlines())

    def compile_tokens(
        self,
        tokens: Sequence[Token],
        filename: Optional[str] = None,
        source_lines: Optional[list[str]] = None,
    ) -> FrontEndResult:
        """
        Parse an already scanned token sequence.

        Raises:
            FrontEndCompilationError: If any error was found
        """
        filename = filename or self.options.filename
        self._errors.clear()

        tokens = [t for t in tokens if not t.is_end()]
        result = FrontEndResult(filename=filename, tokens=tokens, token_count=len(tokens))

        parse_input = self._check_lexical_errors(tokens, source_lines)

        if not self._errors.has_errors():
            try:
                result.ast = Parser(parse_input, filename, source_lines).parse()
                result.success = True
            except FrontEndError as e:
                logger.debug(f"{filename}: parse stopped: {e.message}")
                self._errors.add(e)

        result.errors = list(self._errors.errors)
        result.warnings = list(self._errors.warnings)

        logger.info(
            f"{filename}: {self._errors.error_count()} errors, "
            f"{self._errors.warning_count()} warnings"
        )

        if self._errors.has_errors():
            raise FrontEndCompilationError(self._errors.report())

        logger.info(f"{filename}: parsed {result.token_count} tokens")
        return result

    def compile_file(self, filepath: str) -> FrontEndResult:
        """
        Scan and parse a source file.

        Raises:
            FrontEndCompilationError: If any error was found
            FileNotFoundError: If the source file does not exist
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        source = path.read_text(encoding="utf-8")
        return self.compile_source(source, str(filepath))

    def compile_token_file(self, filepath: str) -> FrontEndResult:
        """
        Parse a token record file.

        Raises:
            FrontEndCompilationError: If any error was found
            TokenFileError: If the file holds a malformed record
            FileNotFoundError: If the token file does not exist
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Token file not found: {filepath}")

        tokens = load_tokens(path)
        return self.compile_tokens(tokens, str(filepath))

    def _check_lexical_errors(
        self,
        tokens: list[Token],
        source_lines: Optional[list[str]],
    ) -> list[Token]:
        """
        Record lexical errors and return the tokens the parser should see.
        """
        errors = self.lexical_errors(tokens, source_lines)
        if not errors:
            return tokens

        if self.options.lexical_errors_fatal:
            for error in errors:
                self._errors.add(error)
                if self._errors.should_stop():
                    logger.warning(f"Stopped after {self.options.max_errors} lexical errors")
                    break
            return tokens

        for error in errors:
            self._errors.add_warning(f"{error.message} (skipped)", error.location)
        return [t for t in tokens if not t.is_error()]


# =============================================================================
# Convenience Function
# =============================================================================

def compile_source(source: str, filename: str = "<input>") -> Program:
    """
    Scan and parse source text with default options.

    Returns:
        The root Program node

    Raises:
        FrontEndCompilationError: If any error was found
    """
    return FrontEnd().compile_source(source, filename).ast
