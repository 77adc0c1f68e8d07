"""
TeachLang Scanner (Lexer)
=========================

This module implements the lexical scanner for TeachLang, the small
imperative teaching language. It converts source text into an ordered
sequence of position-annotated tokens for the parser.

Token Kinds
-----------
| Kind             | Code | Examples                        |
|------------------|------|---------------------------------|
| IDENTIFIER       | 0    | x, total_1, _tmp                |
| INT_LITERAL      | 1    | 0, 42                           |
| FLOAT_LITERAL    | 2    | 3.14, 0.5                       |
| BOOL_LITERAL     | 3    | true, false                     |
| KEYWORD          | 4    | int float bool if else while    |
|                  |      | for read write                  |
| OPERATOR         | 5    | + - * / = += == && ! ++ & |     |
| SEPARATOR        | 6    | ; , ( ) { } ] :                 |
| BITWISE_OPERATOR | 7    | ~ ^ << >>                       |
| LEX_ERROR        | 8    | 12abc, 1.2.3, @                 |

The codes are the ones used by the textual token record format
(see teachlang.frontend.tokenfile).

Comments
--------
- Line comments: ``# comment`` and ``// comment``
- Block comments: ``/* comment */`` (non-nesting)

An unterminated block comment runs to end of input; a warning is logged.

Error Tokens
------------
The scanner never raises. Malformed input becomes a LEX_ERROR token carrying
the offending lexeme and a short description in ``detail``, and scanning
resumes right after it. End of input is signalled by a LEX_ERROR token with
an empty lexeme; it is a control marker, not a diagnostic.

Example Usage
-------------
>>> from teachlang.frontend.lexer import Scanner
>>> for token in Scanner("int a = 1;").tokens():
...     print(token)
Token(KEYWORD, 'int', 1:1)
Token(IDENTIFIER, 'a', 1:5)
Token(OPERATOR, '=', 1:7)
Token(INT_LITERAL, '1', 1:9)
Token(SEPARATOR, ';', 1:10)
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterator, Optional
import logging
import string

from teachlang.errors import SourceLocation

logger = logging.getLogger(__name__)


# =============================================================================
# Token Kind Enumeration
# =============================================================================

class TokenKind(IntEnum):
    """
    Token kinds for TeachLang.

    The integer value of each member is its code in the token record
    format, so ``TokenKind(code)`` decodes a record directly.
    """

    IDENTIFIER = 0
    INT_LITERAL = 1
    FLOAT_LITERAL = 2
    BOOL_LITERAL = 3
    KEYWORD = 4
    OPERATOR = 5
    SEPARATOR = 6
    BITWISE_OPERATOR = 7
    LEX_ERROR = 8


# =============================================================================
# Symbol Tables
# =============================================================================

# Reserved words. "true" and "false" are literals, not keywords.
KEYWORDS: dict[str, TokenKind] = {
    # Types
    "int": TokenKind.KEYWORD,
    "float": TokenKind.KEYWORD,
    "bool": TokenKind.KEYWORD,

    # Control flow
    "if": TokenKind.KEYWORD,
    "else": TokenKind.KEYWORD,
    "while": TokenKind.KEYWORD,
    "for": TokenKind.KEYWORD,

    # I/O
    "read": TokenKind.KEYWORD,
    "write": TokenKind.KEYWORD,

    # Boolean constants
    "true": TokenKind.BOOL_LITERAL,
    "false": TokenKind.BOOL_LITERAL,
}

TYPE_KEYWORDS = frozenset({"int", "float", "bool"})

OPERATORS = frozenset({
    "+", "-", "*", "/", "=", "&", "|",
    "+=", "-=", "*=", "/=",
    "==", "!=", "<", "<=", ">", ">=",
    "&&", "||", "!", "++", "--",
})

# "&" and "|" also appear in OPERATORS, which takes priority.
BITWISE_OPERATORS = frozenset({"&", "|", "~", "^", "<<", ">>"})

SEPARATORS = frozenset({";", ",", "(", ")", "{", "}", "]", ":"})

# Diagnostic descriptions carried by LEX_ERROR tokens
ILLEGAL_IDENTIFIER = "illegal identifier (cannot start with a digit)"
ILLEGAL_NUMBER = "illegal number format"
UNRECOGNIZED_SYMBOL = "unrecognized symbol"


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single lexical unit of TeachLang source.

    Tokens are immutable. Equality compares kind, lexeme and position;
    the filename and error detail are informational only.

    Attributes:
        kind: The TokenKind classification
        lexeme: The exact source text of the token
        line: Line of the first character (1-indexed)
        column: Column of the first character (1-indexed)
        filename: Name of the source the token came from
        detail: Description of the problem for LEX_ERROR tokens
    """
    kind: TokenKind
    lexeme: str
    line: int
    column: int
    filename: str = field(default="<input>", compare=False)
    detail: Optional[str] = field(default=None, compare=False)

    def __repr__(self) -> str:
        """Format token for debugging output."""
        if self.is_end():
            return f"Token(END, {self.line}:{self.column})"
        return f"Token({self.kind.name}, {self.lexeme!r}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)

    def is_end(self) -> bool:
        """Return True for the end-of-input sentinel."""
        return self.kind == TokenKind.LEX_ERROR and self.lexeme == ""

    def is_error(self) -> bool:
        """Return True for a real lexical error (never the sentinel)."""
        return self.kind == TokenKind.LEX_ERROR and self.lexeme != ""

    def is_type_keyword(self) -> bool:
        """Return True if this token is one of int, float, bool."""
        return self.kind == TokenKind.KEYWORD and self.lexeme in TYPE_KEYWORDS

    def matches(self, kind: TokenKind, lexeme: Optional[str] = None) -> bool:
        """Return True if the token has the given kind (and lexeme, if given)."""
        if self.kind != kind:
            return False
        return lexeme is None or self.lexeme == lexeme


def end_token(line: int = 1, column: int = 1, filename: str = "<input>") -> Token:
    """Build the end-of-input sentinel."""
    return Token(TokenKind.LEX_ERROR, "", line, column, filename)


# =============================================================================
# Scanner Implementation
# =============================================================================

class Scanner:
    """
    Tokenizes TeachLang source code.

    Uses maximal munch throughout: identifiers, numbers and two-character
    operators always take the longest lexeme available before classifying.

    Usage:
        scanner = Scanner(source_text, filename)
        tokens = scanner.tokens()

    Attributes:
        source: The source code being tokenized
        filename: Name of the source file (for error reporting)
    """

    # Characters that can start an identifier
    IDENT_START = string.ascii_letters + "_"

    # Characters that can continue an identifier
    IDENT_CHARS = string.ascii_letters + string.digits + "_"

    WHITESPACE = " \t\n\r\v\f"

    def __init__(
        self,
        source: str,
        filename: str = "<input>",
        line_number: int = 1,
    ):
        """
        Initialize the scanner with source code.

        Args:
            source: The TeachLang source to tokenize
            filename: Name of the source file (for error messages)
            line_number: Starting line number
        """
        self.source = source
        self.filename = filename

        # Scan cursor
        self._pos = 0
        self._line = line_number
        self._column = 1

    def next_token(self) -> Token:
        """
        Scan and return the next token.

        Returns the end-of-input sentinel (an empty-lexeme LEX_ERROR
        token) once the source is exhausted, and keeps returning it on
        further calls.
        """
        self._skip_whitespace_and_comments()

        if self._at_end():
            return end_token(self._line, self._column, self.filename)

        start_line = self._line
        start_column = self._column
        char = self._peek()

        if char in self.IDENT_START:
            return self._scan_identifier(start_line, start_column)

        if char in string.digits:
            return self._scan_number(start_line, start_column)

        return self._scan_operator(start_line, start_column)

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens from the source code.

        Yields every token followed by the end-of-input sentinel.
        """
        count = 0
        while True:
            token = self.next_token()
            yield token
            if token.is_end():
                break
            count += 1
        logger.debug(f"Scanned {count} tokens from {self.filename}")

    def tokens(self) -> list[Token]:
        """Return all tokens as a list, without the end-of-input sentinel."""
        return [t for t in self.tokenize() if not t.is_end()]

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        """Check if we've reached the end of source."""
        return self._pos >= len(self.source)

    def _peek(self, offset: int = 0) -> str:
        """
        Look at character at current position + offset without advancing.

        Returns empty string if past end of source.
        """
        pos = self._pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _advance(self) -> str:
        """
        Consume and return the current character, advancing position.

        A newline moves to the next line and resets the column to 1.
        """
        if self._at_end():
            return ""

        char = self.source[self._pos]
        self._pos += 1

        if char == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1

        return char

    def _make_token(
        self,
        kind: TokenKind,
        lexeme: str,
        start_line: int,
        start_column: int,
        detail: Optional[str] = None,
    ) -> Token:
        """Create a token positioned at its first character."""
        return Token(
            kind=kind,
            lexeme=lexeme,
            line=start_line,
            column=start_column,
            filename=self.filename,
            detail=detail,
        )

    # =========================================================================
    # Whitespace and Comment Handling
    # =========================================================================

    def _skip_whitespace_and_comments(self) -> None:
        """Skip all whitespace and comments."""
        while not self._at_end():
            char = self._peek()

            if char in self.WHITESPACE:
                self._advance()
                continue

            # Line comments: # and //
            if char == "#" or (char == "/" and self._peek(1) == "/"):
                self._skip_line_comment()
                continue

            # Block comment: /* */
            if char == "/" and self._peek(1) == "*":
                self._skip_block_comment()
                continue

            break

    def _skip_line_comment(self) -> None:
        """Skip to (but not past) the end of the line."""
        while not self._at_end() and self._peek() != "\n":
            self._advance()

    def _skip_block_comment(self) -> None:
        """
        Skip a block comment (/* ... */).

        Block comments do not nest. A comment left open runs to the end
        of input without producing an error token.
        """
        start = SourceLocation(self.filename, self._line, self._column)

        # Consume the /*
        self._advance()
        self._advance()

        while not self._at_end():
            if self._peek() == "*" and self._peek(1) == "/":
                self._advance()
                self._advance()
                return
            self._advance()

        logger.warning(f"{start}: unterminated block comment runs to end of input")

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_identifier(self, start_line: int, start_column: int) -> Token:
        """
        Scan an identifier or keyword.

        Identifiers start with a letter or underscore and continue with
        letters, digits and underscores. Keywords and boolean literals are
        picked out by the keyword table.
        """
        chars = []
        while self._peek() and self._peek() in self.IDENT_CHARS:
            chars.append(self._advance())

        name = "".join(chars)
        kind = KEYWORDS.get(name, TokenKind.IDENTIFIER)
        return self._make_token(kind, name, start_line, start_column)

    def _scan_number(self, start_line: int, start_column: int) -> Token:
        """
        Scan an integer or floating point literal.

        Handles:
        - 42       INT_LITERAL
        - 3.14     FLOAT_LITERAL
        - 12abc    LEX_ERROR (identifier cannot start with a digit)
        - 1.       LEX_ERROR (no digit after the decimal point)
        - 1.2.3    LEX_ERROR (more than one decimal point)
        - 1.5e     LEX_ERROR (alphanumeric suffix)

        Malformed literals are consumed whole so the error token shows the
        full offending text.
        """
        chars = self._take_digits()
        has_point = False
        detail = None

        if self._peek() == ".":
            has_point = True
            chars.append(self._advance())

            if self._peek() and self._peek() in string.digits:
                chars.extend(self._take_digits())
            else:
                detail = ILLEGAL_NUMBER

            while self._peek() == ".":
                detail = ILLEGAL_NUMBER
                chars.append(self._advance())
                chars.extend(self._take_digits())

        if self._peek() and self._peek() in self.IDENT_START:
            if detail is None:
                detail = ILLEGAL_NUMBER if has_point else ILLEGAL_IDENTIFIER
            while self._peek() and self._peek() in self.IDENT_CHARS:
                chars.append(self._advance())

        lexeme = "".join(chars)

        if detail is not None:
            logger.debug(f"{self.filename}:{start_line}:{start_column}: {detail}: {lexeme!r}")
            return self._make_token(
                TokenKind.LEX_ERROR, lexeme, start_line, start_column, detail
            )

        kind = TokenKind.FLOAT_LITERAL if has_point else TokenKind.INT_LITERAL
        return self._make_token(kind, lexeme, start_line, start_column)

    def _take_digits(self) -> list[str]:
        """Consume a (possibly empty) run of decimal digits."""
        chars = []
        while self._peek() and self._peek() in string.digits:
            chars.append(self._advance())
        return chars

    def _scan_operator(self, start_line: int, start_column: int) -> Token:
        """
        Scan an operator, bitwise operator or separator.

        A two-character operator is always tried first. Failing that, the
        single character is looked up in the operator, bitwise and
        separator tables in that order.
        """
        char = self._advance()

        pair = char + self._peek()
        if len(pair) == 2 and (pair in OPERATORS or pair in BITWISE_OPERATORS):
            self._advance()
            kind = TokenKind.OPERATOR if pair in OPERATORS else TokenKind.BITWISE_OPERATOR
            return self._make_token(kind, pair, start_line, start_column)

        if char in OPERATORS:
            return self._make_token(TokenKind.OPERATOR, char, start_line, start_column)
        if char in BITWISE_OPERATORS:
            return self._make_token(TokenKind.BITWISE_OPERATOR, char, start_line, start_column)
        if char in SEPARATORS:
            return self._make_token(TokenKind.SEPARATOR, char, start_line, start_column)

        logger.debug(f"{self.filename}:{start_line}:{start_column}: {UNRECOGNIZED_SYMBOL}: {char!r}")
        return self._make_token(
            TokenKind.LEX_ERROR, char, start_line, start_column, UNRECOGNIZED_SYMBOL
        )


# =============================================================================
# Convenience Functions
# =============================================================================

def scan_source(source: str, filename: str = "<input>") -> list[Token]:
    """
    Tokenize source text.

    Args:
        source: TeachLang source code
        filename: Source filename for diagnostics

    Returns:
        All tokens in order, without the end-of-input sentinel. Lexical
        errors are included as LEX_ERROR tokens.
    """
    return Scanner(source, filename).tokens()
