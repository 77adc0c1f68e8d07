"""
Operator-Precedence Expression Engine
=====================================

Parses TeachLang arithmetic, boolean and bitwise expressions with two
explicit stacks (operands and pending operators) and a precedence table,
the classical shunting-yard reduction. No grammar recursion per precedence
level is involved.

Precedence (lowest to highest, all left-associative)
----------------------------------------------------
1.  logical or        ||
2.  logical and       &&
3.  bitwise or        |
4.  bitwise xor       ^
5.  bitwise and       &
6.  relational        == != < <= > >=
7.  shift             << >>
8.  additive          + -
9.  multiplicative    * /
10. unary             ! ~ ++ -- neg

Parentheses are sentinels on the operator stack, not table entries.

Unary / Binary Disambiguation
-----------------------------
``-`` with no left operand available (start of expression, after '(' or
after another operator) is relabelled ``neg``. ``++``/``--`` after an
operand apply postfix to it at once; before an operand they are prefix
operators like ``!`` and ``~``.

Boundaries
----------
An expression ends, without consuming the boundary token, at ';', ',',
'{', '}', any keyword, or end of input. Inside a parenthesised clause
(if/while/for headers) a ')' with no pending '(' also ends it.

Example
-------
>>> from teachlang.frontend.lexer import scan_source
>>> from teachlang.frontend.stream import TokenStream
>>> from teachlang.frontend.ast import to_sexpr
>>> engine = ExpressionParser(TokenStream(scan_source("1 + 2 * 3;")))
>>> to_sexpr(engine.parse_arithmetic())
'Op(+, 1, Op(*, 2, 3))'
"""

from typing import Optional, Union
import logging

from teachlang.frontend.lexer import Token, TokenKind
from teachlang.frontend.stream import TokenStream
from teachlang.frontend.errors import ExpressionError
from teachlang.frontend.ast import (
    Operand,
    Expression,
    BooleanExpression,
    UnaryOperation,
    BinaryOperation,
    Identifier,
    IntLiteral,
    FloatLiteral,
    BoolLiteral,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Operator Tables
# =============================================================================

PRECEDENCE: dict[str, int] = {
    "||": 1,
    "&&": 2,
    "|": 3,
    "^": 4,
    "&": 5,
    "==": 6, "!=": 6, "<": 6, "<=": 6, ">": 6, ">=": 6,
    "<<": 7, ">>": 7,
    "+": 8, "-": 8,
    "*": 9, "/": 9,
    "!": 10, "~": 10, "++": 10, "--": 10, "neg": 10,
}

UNARY_OPERATORS = frozenset({"!", "~", "++", "--", "neg"})

RELATIONAL_OPERATORS = frozenset({"==", "!=", "<", "<=", ">", ">="})

# Marker for '(' on the operator stack
OPEN_PAREN = "("

OPERAND_KINDS = (
    TokenKind.IDENTIFIER,
    TokenKind.INT_LITERAL,
    TokenKind.FLOAT_LITERAL,
    TokenKind.BOOL_LITERAL,
)


class ExpressionParser:
    """
    Two-stack expression parser.

    Each call parses one expression from the shared TokenStream and keeps
    no state between calls.

    Attributes:
        stream: The token cursor shared with the statement parser
    """

    def __init__(self, stream: TokenStream):
        self.stream = stream

    # =========================================================================
    # Entry Points
    # =========================================================================

    def parse_arithmetic(self, in_parens: bool = False) -> Expression:
        """
        Parse one expression and wrap the result in an Expression node.

        Args:
            in_parens: True inside a parenthesised clause, where an
                       unmatched ')' ends the expression

        Raises:
            ExpressionError: On unmatched parentheses, missing operands,
                             an empty or a malformed expression
            UnexpectedTokenError: On a token that is not an operand
        """
        start = self.stream.peek()
        operands: list[Operand] = []
        operators: list[tuple[str, Token]] = []
        expect_operand = True

        while not self._at_boundary(operators, in_parens):
            token = self.stream.peek()

            if token.matches(TokenKind.SEPARATOR, "("):
                self.stream.advance()
                operators.append((OPEN_PAREN, token))
                expect_operand = True
                continue

            if token.matches(TokenKind.SEPARATOR, ")"):
                self.stream.advance()
                while operators and operators[-1][0] != OPEN_PAREN:
                    self._reduce(operands, operators)
                if not operators:
                    raise self._error("unmatched parentheses", token, "no '(' for this ')'")
                operators.pop()
                expect_operand = False
                continue

            if token.kind in (TokenKind.OPERATOR, TokenKind.BITWISE_OPERATOR):
                self.stream.advance()
                expect_operand = self._push_operator(token, operands, operators, expect_operand)
                continue

            operands.append(self._parse_operand(token))
            expect_operand = False

        while operators:
            if operators[-1][0] == OPEN_PAREN:
                raise self._error("unmatched parentheses", operators[-1][1], "missing ')'")
            self._reduce(operands, operators)

        if not operands:
            raise self._error("empty expression", start, "an expression is required here")
        if len(operands) > 1:
            raise ExpressionError(
                "malformed expression",
                location=operands[1].location,
                hint="missing operator between operands",
                source_line=self.stream.source_line(operands[1].location.line),
            )

        return Expression(location=start.location, value=operands[0])

    def parse_boolean(self, in_parens: bool = False) -> Union[Expression, BooleanExpression]:
        """
        Parse a condition.

        Parses an arithmetic expression. When its outermost operator is a
        comparison, the two sides become a BooleanExpression of two
        Expressions. Anything else is returned unchanged, so bare
        variables, literals and logical combinations work as conditions.

            a < b + 1       Bool(<, a, Op(+, b, 1))
            a < b && c      Op(&&, Op(<, a, b), c)
            done            done
        """
        result = self.parse_arithmetic(in_parens)
        root = result.value

        if isinstance(root, BinaryOperation) and root.operator in RELATIONAL_OPERATORS:
            return BooleanExpression(
                location=result.location,
                operator=root.operator,
                left=Expression(location=root.left.location, value=root.left),
                right=Expression(location=root.right.location, value=root.right),
            )

        return result

    # =========================================================================
    # Stack Handling
    # =========================================================================

    def _at_boundary(self, operators: list[tuple[str, Token]], in_parens: bool) -> bool:
        """Return True if the current token ends the expression."""
        if self.stream.at_end():
            return True

        token = self.stream.peek()
        if token.kind == TokenKind.KEYWORD:
            return True
        if token.kind == TokenKind.SEPARATOR:
            if token.lexeme in (";", ",", "{", "}"):
                return True
            if token.lexeme == ")" and in_parens:
                return not any(op == OPEN_PAREN for op, _ in operators)
        return False

    def _push_operator(
        self,
        token: Token,
        operands: list[Operand],
        operators: list[tuple[str, Token]],
        expect_operand: bool,
    ) -> bool:
        """
        Handle an operator token.

        Returns:
            The new expect_operand state
        """
        op = token.lexeme
        if op == "-" and expect_operand:
            op = "neg"

        if op not in PRECEDENCE:
            raise self.stream.unexpected("an expression operator", token)

        if op in UNARY_OPERATORS:
            if op in ("++", "--") and not expect_operand:
                # Postfix: applies to the operand just parsed
                if not operands:
                    raise self._error(f"missing operand for unary operator '{op}'", token)
                operand = operands.pop()
                operands.append(UnaryOperation(location=operand.location, operator=op, operand=operand))
                return False
            operators.append((op, token))
            return True

        while (operators and operators[-1][0] != OPEN_PAREN
               and PRECEDENCE[operators[-1][0]] >= PRECEDENCE[op]):
            self._reduce(operands, operators)
        operators.append((op, token))
        return True

    def _reduce(self, operands: list[Operand], operators: list[tuple[str, Token]]) -> None:
        """Pop one operator, apply it to its operands, push the result."""
        op, token = operators.pop()

        if op in UNARY_OPERATORS:
            if not operands:
                raise self._error(f"missing operand for unary operator '{token.lexeme}'", token)
            operand = operands.pop()
            operands.append(UnaryOperation(location=token.location, operator=op, operand=operand))
            return

        if len(operands) < 2:
            raise self._error(f"missing operands for binary operator '{op}'", token)
        right = operands.pop()
        left = operands.pop()
        operands.append(BinaryOperation(location=left.location, operator=op, left=left, right=right))

    # =========================================================================
    # Operands
    # =========================================================================

    def _parse_operand(self, token: Token) -> Operand:
        """Consume an identifier or literal and return its leaf node."""
        if token.kind not in OPERAND_KINDS:
            raise self._error("expected operand in expression", token, f"found {self.stream.describe(token)}")

        self.stream.advance()
        if token.kind == TokenKind.IDENTIFIER:
            return Identifier(location=token.location, name=token.lexeme)
        if token.kind == TokenKind.INT_LITERAL:
            return IntLiteral(location=token.location, text=token.lexeme)
        if token.kind == TokenKind.FLOAT_LITERAL:
            return FloatLiteral(location=token.location, text=token.lexeme)
        return BoolLiteral(location=token.location, value=token.lexeme == "true")

    def _error(self, message: str, token: Token, hint: Optional[str] = None) -> ExpressionError:
        """Build an ExpressionError located at token."""
        logger.debug(f"{token.location}: {message}")
        return ExpressionError(
            message,
            location=token.location,
            hint=hint,
            source_line=self.stream.source_line(token.line),
        )
