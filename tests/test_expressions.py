"""
Tests for the operator-precedence expression engine
===================================================

Expressions are checked through their compact form (to_sexpr), where
``Op(+, 1, 2)`` is a BinaryOperation and ``Bool(<, a, b)`` a comparison.
"""

import pytest

from teachlang.frontend.lexer import scan_source
from teachlang.frontend.stream import TokenStream
from teachlang.frontend.expressions import ExpressionParser, PRECEDENCE
from teachlang.frontend.ast import (
    Expression,
    BooleanExpression,
    BinaryOperation,
    to_sexpr,
)
from teachlang.frontend.errors import (
    ExpressionError,
    LexicalError,
    ParseError,
    UnexpectedTokenError,
)


def engine_for(source: str) -> ExpressionParser:
    return ExpressionParser(TokenStream(scan_source(source, "<test>"), "<test>", source.splitlines()))


def arith(source: str, in_parens: bool = False) -> str:
    """Parse an arithmetic expression and return its compact form."""
    return to_sexpr(engine_for(source).parse_arithmetic(in_parens))


def cond(source: str, in_parens: bool = False) -> str:
    """Parse a condition and return its compact form."""
    return to_sexpr(engine_for(source).parse_boolean(in_parens))


# =============================================================================
# Precedence and Associativity
# =============================================================================

class TestPrecedence:
    """Test operator precedence and left associativity."""

    def test_multiplication_binds_tighter(self):
        assert arith("1 + 2 * 3") == "Op(+, 1, Op(*, 2, 3))"

    def test_parentheses_override(self):
        assert arith("(1 + 2) * 3") == "Op(*, Op(+, 1, 2), 3)"

    def test_left_associative(self):
        assert arith("a - b - c") == "Op(-, Op(-, a, b), c)"
        assert arith("a / b * c") == "Op(*, Op(/, a, b), c)"

    def test_and_binds_tighter_than_or(self):
        assert arith("a || b && c") == "Op(||, a, Op(&&, b, c))"

    def test_relational_below_arithmetic(self):
        assert arith("a + 1 < b * 2") == "Op(<, Op(+, a, 1), Op(*, b, 2))"

    def test_logical_below_relational(self):
        assert arith("a < b && c == d") == "Op(&&, Op(<, a, b), Op(==, c, d))"

    def test_bitwise_order(self):
        assert arith("x & 1 | y") == "Op(|, Op(&, x, 1), y)"
        assert arith("a | b ^ c & d") == "Op(|, a, Op(^, b, Op(&, c, d)))"

    def test_shift_below_additive(self):
        assert arith("1 << 2 + 3") == "Op(<<, 1, Op(+, 2, 3))"

    def test_nested_parentheses(self):
        assert arith("((a))") == "a"
        assert arith("(a * (b + c))") == "Op(*, a, Op(+, b, c))"

    def test_literal_kinds(self):
        assert arith("1.5 * 2") == "Op(*, 1.5, 2)"
        assert arith("true && false") == "Op(&&, true, false)"

    def test_unary_level_is_highest(self):
        assert PRECEDENCE["neg"] > PRECEDENCE["*"]
        assert PRECEDENCE["!"] == PRECEDENCE["~"] == PRECEDENCE["neg"]


# =============================================================================
# Unary Operators
# =============================================================================

class TestUnaryOperators:
    """Test unary minus, logical not, complement and increments."""

    def test_leading_minus_is_negation(self):
        assert arith("-a") == "Op(neg, a)"

    def test_minus_after_operator_is_negation(self):
        assert arith("a * -b") == "Op(*, a, Op(neg, b))"

    def test_minus_after_open_paren_is_negation(self):
        assert arith("(-a)") == "Op(neg, a)"

    def test_binary_minus_inside_parentheses(self):
        assert arith("(a - b)") == "Op(-, a, b)"

    def test_negated_group(self):
        assert arith("-(a + b)") == "Op(neg, Op(+, a, b))"

    def test_double_not(self):
        assert arith("!!a") == "Op(!, Op(!, a))"

    def test_not_binds_tighter_than_and(self):
        assert arith("!a && b") == "Op(&&, Op(!, a), b)"

    def test_complement(self):
        assert arith("~a") == "Op(~, a)"

    def test_postfix_increment(self):
        assert arith("i++") == "Op(++, i)"
        assert arith("a++ + b") == "Op(+, Op(++, a), b)"

    def test_prefix_decrement(self):
        assert arith("--i") == "Op(--, i)"


# =============================================================================
# Conditions
# =============================================================================

class TestConditions:
    """parse_boolean turns a top-level comparison into a BooleanExpression."""

    def test_comparison(self):
        result = engine_for("a + 1 < b").parse_boolean()
        assert isinstance(result, BooleanExpression)
        assert result.operator == "<"
        assert isinstance(result.left, Expression)
        assert isinstance(result.right, Expression)
        assert to_sexpr(result) == "Bool(<, Op(+, a, 1), b)"

    def test_logical_combination_stays_expression(self):
        result = engine_for("a < b && c").parse_boolean()
        assert isinstance(result, Expression)
        assert to_sexpr(result) == "Op(&&, Op(<, a, b), c)"

    def test_bare_identifier(self):
        assert cond("done") == "done"

    def test_parenthesised_comparison_operand(self):
        assert cond("(a + b) > c") == "Bool(>, Op(+, a, b), c)"


# =============================================================================
# Expression Boundaries
# =============================================================================

class TestBoundaries:
    """Expressions stop before their terminator without consuming it."""

    @pytest.mark.parametrize("source,boundary", [
        ("1 + 2; x", ";"),
        ("a, b", ","),
        ("a {", "{"),
        ("a * 2 }", "}"),
        ("a + b else", "else"),
    ])
    def test_stops_at_boundary(self, source, boundary):
        engine = engine_for(source)
        engine.parse_arithmetic()
        assert engine.stream.peek().lexeme == boundary

    def test_stops_at_end_of_input(self):
        engine = engine_for("a + b")
        assert to_sexpr(engine.parse_arithmetic()) == "Op(+, a, b)"
        assert engine.stream.at_end()

    def test_unmatched_close_paren_ends_clause(self):
        engine = engine_for("a > 1) {")
        assert to_sexpr(engine.parse_boolean(in_parens=True)) == "Bool(>, a, 1)"
        assert engine.stream.peek().lexeme == ")"

    def test_matched_parens_inside_clause(self):
        engine = engine_for("(i) < 3)")
        assert to_sexpr(engine.parse_boolean(in_parens=True)) == "Bool(<, i, 3)"
        assert engine.stream.peek().lexeme == ")"

    def test_location_of_binary_is_left_operand(self):
        result = engine_for("  a + b").parse_arithmetic()
        assert isinstance(result.value, BinaryOperation)
        assert result.value.location.column == 3


# =============================================================================
# Errors
# =============================================================================

class TestExpressionErrors:
    """Test malformed expressions."""

    def test_unmatched_close_paren(self):
        with pytest.raises(ExpressionError, match="unmatched parentheses"):
            arith("a)")

    def test_unclosed_paren(self):
        with pytest.raises(ExpressionError, match="unmatched parentheses"):
            arith("(a + b")

    def test_empty_expression(self):
        with pytest.raises(ExpressionError, match="empty expression"):
            arith(";")

    def test_empty_parentheses(self):
        with pytest.raises(ExpressionError):
            arith("()")

    def test_two_operands_without_operator(self):
        with pytest.raises(ExpressionError, match="malformed expression") as exc_info:
            arith("1 2")
        assert exc_info.value.location.column == 3

    def test_missing_right_operand(self):
        with pytest.raises(ExpressionError, match="missing operands"):
            arith("1 +")

    def test_adjacent_binary_operators(self):
        with pytest.raises(ExpressionError):
            arith("1 + * 2")

    def test_assignment_operator_inside_expression(self):
        with pytest.raises(UnexpectedTokenError):
            arith("a = b")

    def test_separator_where_operand_expected(self):
        with pytest.raises(ParseError, match="expected operand"):
            arith("1 + ]")

    def test_lexical_error_inside_expression(self):
        with pytest.raises(LexicalError, match="12abc"):
            arith("1 + 12abc")
