# =============================================================================
# test_lexer.py - Scanner Unit Tests
# =============================================================================
# Tests for the TeachLang scanner.
#
# Test coverage includes:
#   - Identifiers, keywords, boolean literals
#   - Integer and floating point literals
#   - Operators, bitwise operators and separators (maximal munch)
#   - Line and block comments
#   - Position tracking (line and column of the first character)
#   - Lexical error tokens and the end-of-input sentinel
# =============================================================================

import pytest
from teachlang.frontend.lexer import (
    Scanner,
    Token,
    TokenKind,
    scan_source,
    ILLEGAL_IDENTIFIER,
    ILLEGAL_NUMBER,
    UNRECOGNIZED_SYMBOL,
)


# =============================================================================
# Helper Function
# =============================================================================

def kinds_and_lexemes(source: str) -> list:
    """Scan source and return (kind, lexeme) pairs, without the sentinel."""
    return [(t.kind, t.lexeme) for t in scan_source(source, "<test>")]


# =============================================================================
# Basic Token Recognition Tests
# =============================================================================

class TestBasicTokens:
    """Test basic token recognition for simple inputs."""

    def test_empty_source(self):
        """Empty source produces no tokens."""
        assert scan_source("") == []

    def test_whitespace_only(self):
        """Whitespace alone produces no tokens."""
        assert scan_source("  \t\n\r\n  ") == []

    def test_identifier(self):
        tokens = scan_source("total_1")
        assert len(tokens) == 1
        assert tokens[0].kind == TokenKind.IDENTIFIER
        assert tokens[0].lexeme == "total_1"

    def test_identifier_with_leading_underscore(self):
        assert kinds_and_lexemes("_tmp") == [(TokenKind.IDENTIFIER, "_tmp")]

    def test_keywords(self):
        """Every reserved word is a KEYWORD token."""
        for word in ("int", "float", "bool", "if", "else", "while", "for", "read", "write"):
            assert kinds_and_lexemes(word) == [(TokenKind.KEYWORD, word)]

    def test_keyword_prefix_is_identifier(self):
        """Maximal munch: 'integer' is one identifier, not 'int' + 'eger'."""
        assert kinds_and_lexemes("integer") == [(TokenKind.IDENTIFIER, "integer")]

    def test_boolean_literals(self):
        assert kinds_and_lexemes("true false") == [
            (TokenKind.BOOL_LITERAL, "true"),
            (TokenKind.BOOL_LITERAL, "false"),
        ]

    def test_integer_literal(self):
        assert kinds_and_lexemes("42") == [(TokenKind.INT_LITERAL, "42")]

    def test_float_literal(self):
        assert kinds_and_lexemes("3.14") == [(TokenKind.FLOAT_LITERAL, "3.14")]

    def test_minus_is_not_part_of_literal(self):
        """Negative numbers are an operator followed by a literal."""
        assert kinds_and_lexemes("a-1") == [
            (TokenKind.IDENTIFIER, "a"),
            (TokenKind.OPERATOR, "-"),
            (TokenKind.INT_LITERAL, "1"),
        ]

    def test_declaration_statement(self):
        assert kinds_and_lexemes("int a = 1;") == [
            (TokenKind.KEYWORD, "int"),
            (TokenKind.IDENTIFIER, "a"),
            (TokenKind.OPERATOR, "="),
            (TokenKind.INT_LITERAL, "1"),
            (TokenKind.SEPARATOR, ";"),
        ]


# =============================================================================
# Operator Tests
# =============================================================================

class TestOperators:
    """Test operator, bitwise operator and separator classification."""

    @pytest.mark.parametrize("op", ["+=", "-=", "*=", "/=", "==", "!=", "<=", ">=", "&&", "||", "++", "--"])
    def test_two_character_operators(self, op):
        """Two-character operators are a single token."""
        assert kinds_and_lexemes(f"a{op}b") == [
            (TokenKind.IDENTIFIER, "a"),
            (TokenKind.OPERATOR, op),
            (TokenKind.IDENTIFIER, "b"),
        ]

    def test_shift_operators_are_bitwise(self):
        assert kinds_and_lexemes("x<<2>>1") == [
            (TokenKind.IDENTIFIER, "x"),
            (TokenKind.BITWISE_OPERATOR, "<<"),
            (TokenKind.INT_LITERAL, "2"),
            (TokenKind.BITWISE_OPERATOR, ">>"),
            (TokenKind.INT_LITERAL, "1"),
        ]

    def test_single_and_or_are_operators(self):
        """'&' and '|' appear in both tables; the operator table wins."""
        assert kinds_and_lexemes("& |") == [
            (TokenKind.OPERATOR, "&"),
            (TokenKind.OPERATOR, "|"),
        ]

    def test_tilde_and_caret_are_bitwise(self):
        assert kinds_and_lexemes("~ ^") == [
            (TokenKind.BITWISE_OPERATOR, "~"),
            (TokenKind.BITWISE_OPERATOR, "^"),
        ]

    def test_separators(self):
        assert [t.kind for t in scan_source("; , ( ) { } ] :")] == [TokenKind.SEPARATOR] * 8

    def test_increment_then_identifier(self):
        assert kinds_and_lexemes("--x") == [
            (TokenKind.OPERATOR, "--"),
            (TokenKind.IDENTIFIER, "x"),
        ]

    def test_maximal_munch_for_comparison(self):
        """'<=' wins over '<' followed by '='."""
        assert kinds_and_lexemes("a<=b")[1] == (TokenKind.OPERATOR, "<=")


# =============================================================================
# Comment Tests
# =============================================================================

class TestComments:
    """Test comment handling."""

    def test_hash_comment(self):
        tokens = scan_source("# comment\nint")
        assert len(tokens) == 1
        assert (tokens[0].line, tokens[0].column) == (2, 1)

    def test_slash_comment(self):
        tokens = scan_source("a // comment\nb")
        assert [t.lexeme for t in tokens] == ["a", "b"]
        assert tokens[1].line == 2

    def test_block_comment_spanning_lines(self):
        tokens = scan_source("/* x\n y */ c")
        assert len(tokens) == 1
        assert (tokens[0].line, tokens[0].column) == (2, 7)

    def test_unterminated_block_comment(self):
        """An open block comment runs to end of input without an error token."""
        assert scan_source("a /* never closed") == [Token(TokenKind.IDENTIFIER, "a", 1, 1)]

    def test_comments_do_not_change_tokens(self):
        """Adding comments and whitespace leaves the kinds and lexemes unchanged."""
        plain = kinds_and_lexemes("a=1;b+=a;")
        commented = kinds_and_lexemes("a = 1 ; // set\n/* then */ b += a ; # done")
        assert plain == commented


# =============================================================================
# Position Tracking Tests
# =============================================================================

class TestPositions:
    """Test line and column tracking."""

    def test_columns_on_one_line(self):
        tokens = scan_source("int a = 1;")
        assert [(t.line, t.column) for t in tokens] == [
            (1, 1), (1, 5), (1, 7), (1, 9), (1, 10),
        ]

    def test_line_numbers(self):
        tokens = scan_source("a\n  b\n\n c")
        assert [(t.line, t.column) for t in tokens] == [(1, 1), (2, 3), (4, 2)]

    def test_starting_line_number(self):
        tokens = Scanner("x", "<test>", line_number=5).tokens()
        assert tokens[0].line == 5

    def test_filename_in_location(self):
        token = scan_source("x", "prog.tl")[0]
        assert str(token.location) == "prog.tl:1:1"


# =============================================================================
# Lexical Error Tests
# =============================================================================

class TestLexicalErrors:
    """Malformed input becomes error tokens; the scanner never raises."""

    def test_identifier_starting_with_digit(self):
        """'12abc' is one error token, not a number and an identifier."""
        tokens = scan_source("12abc")
        assert len(tokens) == 1
        assert tokens[0].kind == TokenKind.LEX_ERROR
        assert tokens[0].lexeme == "12abc"
        assert tokens[0].detail == ILLEGAL_IDENTIFIER

    def test_several_decimal_points(self):
        tokens = scan_source("1.2.3")
        assert len(tokens) == 1
        assert tokens[0].is_error()
        assert tokens[0].lexeme == "1.2.3"
        assert tokens[0].detail == ILLEGAL_NUMBER

    def test_missing_fraction_digits(self):
        assert kinds_and_lexemes("1.;") == [
            (TokenKind.LEX_ERROR, "1."),
            (TokenKind.SEPARATOR, ";"),
        ]

    def test_alpha_suffix_after_fraction(self):
        tokens = scan_source("1.5e")
        assert len(tokens) == 1
        assert tokens[0].lexeme == "1.5e"
        assert tokens[0].detail == ILLEGAL_NUMBER

    @pytest.mark.parametrize("symbol", ["@", "$", "%", "[", '"'])
    def test_unrecognized_symbol(self, symbol):
        tokens = scan_source(symbol)
        assert len(tokens) == 1
        assert tokens[0].kind == TokenKind.LEX_ERROR
        assert tokens[0].detail == UNRECOGNIZED_SYMBOL

    def test_scanning_resumes_after_error(self):
        assert kinds_and_lexemes("a @ b") == [
            (TokenKind.IDENTIFIER, "a"),
            (TokenKind.LEX_ERROR, "@"),
            (TokenKind.IDENTIFIER, "b"),
        ]

    def test_error_token_position(self):
        token = scan_source("x = 12abc;")[2]
        assert token.is_error()
        assert (token.line, token.column) == (1, 5)


# =============================================================================
# End-of-Input Sentinel Tests
# =============================================================================

class TestEndOfInput:
    """The end of input is an empty-lexeme LEX_ERROR token."""

    def test_tokenize_ends_with_sentinel(self):
        tokens = list(Scanner("a").tokenize())
        assert len(tokens) == 2
        assert tokens[-1].kind == TokenKind.LEX_ERROR
        assert tokens[-1].lexeme == ""
        assert tokens[-1].is_end()
        assert not tokens[-1].is_error()

    def test_next_token_keeps_returning_sentinel(self):
        scanner = Scanner("a")
        scanner.next_token()
        assert scanner.next_token().is_end()
        assert scanner.next_token().is_end()

    def test_tokens_excludes_sentinel(self):
        assert all(not t.is_end() for t in Scanner("a b c").tokens())

    def test_token_equality_ignores_filename(self):
        assert Token(TokenKind.IDENTIFIER, "a", 1, 1, "x.tl") == Token(TokenKind.IDENTIFIER, "a", 1, 1)
