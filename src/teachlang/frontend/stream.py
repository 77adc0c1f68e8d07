"""
Token Stream Cursor
===================

A forward-only cursor over a token sequence, shared by the statement
parser and the expression engine so that both consume the same stream
exactly once, left to right, with one token of lookahead.

The cursor is the single place where an embedded lexical error meets the
parser: looking at a LEX_ERROR token raises LexicalError, since a
malformed lexeme can never continue any grammar rule. The end-of-input
sentinel is returned like any other token and is never reported as a
lexical error.
"""

from typing import Optional, Sequence

from teachlang.frontend.lexer import Token, TokenKind, end_token
from teachlang.frontend.errors import (
    LexicalError,
    MissingTokenError,
    UnexpectedTokenError,
)


class TokenStream:
    """
    Cursor over a list of tokens.

    Attributes:
        tokens: Tokens to parse (any sentinel in the input is dropped and a
                fresh one is kept after the last real token)
        filename: Source filename for error reporting
        source_lines: Original source lines for error context
    """

    def __init__(
        self,
        tokens: Sequence[Token],
        filename: str = "<input>",
        source_lines: Optional[list[str]] = None,
    ):
        self.tokens = [t for t in tokens if not t.is_end()]
        self.filename = filename
        self.source_lines = source_lines or []

        if self.tokens:
            last = self.tokens[-1]
            self._end = end_token(last.line, last.column + len(last.lexeme), filename)
        else:
            self._end = end_token(1, 1, filename)

        self._pos = 0

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def peek(self, offset: int = 0) -> Token:
        """
        Look at the token at current position + offset.

        Raises:
            LexicalError: If that token is a lexical error token
        """
        pos = self._pos + offset
        if pos >= len(self.tokens):
            return self._end

        token = self.tokens[pos]
        if token.is_error():
            raise LexicalError(
                token.detail or "lexical error",
                token.lexeme,
                token.location,
                self.source_line(token.line),
            )
        return token

    def at_end(self) -> bool:
        """Check if all tokens have been consumed."""
        return self._pos >= len(self.tokens)

    def advance(self) -> Token:
        """Consume and return the current token."""
        token = self.peek()
        if not self.at_end():
            self._pos += 1
        return token

    def check(self, kind: TokenKind, lexeme: Optional[str] = None) -> bool:
        """Check if the current token has the given kind (and lexeme)."""
        if self.at_end():
            return False
        return self.peek().matches(kind, lexeme)

    def match(self, kind: TokenKind, lexeme: Optional[str] = None) -> Optional[Token]:
        """
        Consume current token if it matches.

        Returns:
            The consumed token, or None if no match
        """
        if self.check(kind, lexeme):
            return self.advance()
        return None

    def expect(
        self,
        kind: TokenKind,
        lexeme: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Token:
        """
        Expect and consume a specific token.

        Args:
            kind: The expected token kind
            lexeme: The expected lexeme, if it matters
            description: What to call the expectation in the error message

        Returns:
            The consumed token

        Raises:
            MissingTokenError: If the expected token is not found
        """
        if self.check(kind, lexeme):
            return self.advance()

        if description is None:
            description = f"'{lexeme}'" if lexeme else kind.name.lower().replace("_", " ")

        current = self.peek()
        raise MissingTokenError(
            description,
            self.describe(current),
            current.location,
            self.source_line(current.line),
        )

    # =========================================================================
    # Diagnostics
    # =========================================================================

    def describe(self, token: Token) -> str:
        """Describe a token for an error message."""
        if token.is_end():
            return "end of input"
        return f"'{token.lexeme}'"

    def unexpected(self, expected: str, token: Optional[Token] = None) -> UnexpectedTokenError:
        """Build an UnexpectedTokenError for the current (or given) token."""
        token = token or self.peek()
        found = "end of input" if token.is_end() else token.lexeme
        return UnexpectedTokenError(
            found,
            expected=expected,
            location=token.location,
            source_line=self.source_line(token.line),
        )

    def source_line(self, line: int) -> Optional[str]:
        """Get source line for error reporting."""
        if 0 < line <= len(self.source_lines):
            return self.source_lines[line - 1]
        return None
