"""
Token Record Format
===================

Reads and writes the line-oriented textual form of a token stream, used to
hand tokens from the scanner to the parser through a file.

Record Layout
-------------
One token per line:

    (kindCode, "lexeme", line, column)

where ``kindCode`` is the integer value of the TokenKind:

    identifier=0, int=1, float=2, bool=3, keyword=4,
    operator=5, separator=6, bitwise=7, error=8

Example
-------
    (4, "int", 1, 1)
    (0, "a", 1, 5)
    (6, ";", 1, 6)

Decoding
--------
A reader locates the first ``(``, the comma after the kind code, the last
two commas before the final ``)``, and the final ``)``. Everything between
the first comma and the line field is the lexeme; embedded whitespace is
stripped from it and then the surrounding quotes are removed. Splitting from
both ends keeps a lexeme of ``,`` intact.

Lines that are blank or carry no parenthesised record are skipped.
"""

from pathlib import Path
from typing import Iterable, Iterator, Optional, TextIO
import logging

from teachlang.frontend.lexer import Token, TokenKind
from teachlang.frontend.errors import TokenFileError

logger = logging.getLogger(__name__)


# =============================================================================
# Encoding
# =============================================================================

def format_token(token: Token) -> str:
    """
    Format one token as a record line (without the trailing newline).

    Args:
        token: The token to encode

    Returns:
        Record text such as ``(0, "a", 1, 5)``
    """
    return f'({int(token.kind)}, "{token.lexeme}", {token.line}, {token.column})'


def write_tokens(tokens: Iterable[Token], stream: TextIO) -> int:
    """
    Write tokens to a text stream, one record per line.

    The end-of-input sentinel is never written.

    Returns:
        Number of records written
    """
    count = 0
    for token in tokens:
        if token.is_end():
            continue
        stream.write(format_token(token))
        stream.write("\n")
        count += 1
    logger.debug(f"Wrote {count} token records")
    return count


def save_tokens(tokens: Iterable[Token], path: Path) -> int:
    """Write tokens to a file. Returns the number of records written."""
    with open(path, "w", encoding="utf-8") as f:
        return write_tokens(tokens, f)


# =============================================================================
# Decoding
# =============================================================================

def parse_token_record(
    text: str,
    line_number: int = 1,
    filename: str = "<tokens>",
) -> Optional[Token]:
    """
    Decode a single record line.

    Args:
        text: One line of a token file
        line_number: Position of the line in the file, for diagnostics
        filename: Name of the token file, for diagnostics

    Returns:
        The decoded Token, or None if the line holds no record

    Raises:
        TokenFileError: If the line looks like a record but is malformed
    """
    start = text.find("(")
    end = text.rfind(")")
    if start == -1 or end == -1 or end < start:
        return None

    body = text[start + 1:end]
    kind_text, sep, rest = body.partition(",")
    fields = rest.rsplit(",", 2) if sep else []
    if len(fields) != 3:
        raise TokenFileError(
            "token record needs four comma-separated fields",
            line_number, filename, source_line=text,
        )

    raw_lexeme, line_text, column_text = fields

    try:
        kind = TokenKind(int(kind_text.strip()))
        line = int(line_text.strip())
        column = int(column_text.strip())
    except ValueError:
        raise TokenFileError(
            f"invalid token record {text.strip()!r}",
            line_number, filename, source_line=text,
        ) from None

    lexeme = "".join(raw_lexeme.split())
    if len(lexeme) >= 2 and lexeme[0] == '"' and lexeme[-1] == '"':
        lexeme = lexeme[1:-1]

    detail = "lexical error" if kind == TokenKind.LEX_ERROR else None
    return Token(kind, lexeme, line, column, filename, detail)


def read_tokens(stream: TextIO, filename: str = "<tokens>") -> Iterator[Token]:
    """
    Decode every record from a text stream.

    Yields:
        Tokens in file order (the sentinel is not part of the file)

    Raises:
        TokenFileError: On the first malformed record
    """
    for number, text in enumerate(stream, start=1):
        if not text.strip():
            continue
        token = parse_token_record(text, number, filename)
        if token is None:
            logger.warning(f"{filename}:{number}: skipping line without a token record")
            continue
        yield token


def load_tokens(path: Path) -> list[Token]:
    """Read a token file into a list."""
    with open(path, "r", encoding="utf-8") as f:
        tokens = list(read_tokens(f, str(path)))
    logger.debug(f"Loaded {len(tokens)} tokens from {path}")
    return tokens
