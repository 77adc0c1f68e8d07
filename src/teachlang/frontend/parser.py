"""
TeachLang Recursive Descent Parser
==================================

This module implements the statement and declaration grammar of TeachLang.
It consumes a token sequence once, left to right, with one token of
lookahead, and builds an Abstract Syntax Tree. Expressions are handed to
the operator-precedence engine in teachlang.frontend.expressions.

Grammar (Simplified EBNF)
-------------------------
program      ::= declaration* statement*
declaration  ::= type declarator (',' declarator)* ';'
type         ::= 'int' | 'float' | 'bool'
declarator   ::= IDENTIFIER ('=' expr)?

statement    ::= block | assignment | if_stmt | while_stmt | for_stmt
               | read_stmt | write_stmt | ';'
block        ::= '{' statement* '}'
assignment   ::= IDENTIFIER ('=' | '+=' | '-=' | '*=' | '/=') expr ';'
               | IDENTIFIER ('++' | '--') ';'
if_stmt      ::= 'if' '(' condition ')' block ('else' block)?
while_stmt   ::= 'while' '(' condition ')' body
for_stmt     ::= 'for' '(' (declaration | assignment_nosemi ';' | ';')
                 condition? ';' assignment_nosemi? ')' body
body         ::= block | statement
read_stmt    ::= 'read' '(' IDENTIFIER (',' IDENTIFIER)* ')' ';'
write_stmt   ::= 'write' '(' IDENTIFIER (',' IDENTIFIER)* ')' ';'
               | 'write' IDENTIFIER ';'

Declarations of type bool take a condition as initializer; int and float
take an arithmetic expression. A plain '=' assignment takes a condition
when the right-hand side starts with a boolean literal, '!', an identifier
or '('; compound assignments always take an arithmetic expression. The
parser does not check types.

Error Policy
------------
The first structural error aborts the parse with a ParseError naming the
expectation, the offending lexeme and its position. There is no recovery,
and no partial tree is returned.

Example Usage
-------------
>>> from teachlang.frontend.parser import parse_source
>>> from teachlang.frontend.ast import ASTPrinter
>>> print(ASTPrinter().print(parse_source("int a; a = 1;")))
[BLOCK]
  [DECLS]
    [LIST]
      [TYPE] int
      [ID] a
  [STMTS]
    [ASSIGN] =
      [ID] a
      [EXPR]
        [NUM] 1
"""

from typing import Optional, Sequence, Union
import logging

from teachlang.errors import SourceLocation
from teachlang.frontend.lexer import Scanner, Token, TokenKind
from teachlang.frontend.stream import TokenStream
from teachlang.frontend.expressions import ExpressionParser
from teachlang.frontend.ast import (
    Program,
    DeclarationList,
    VariableDeclaration,
    Declarator,
    TypeTag,
    StatementList,
    Statement,
    Block,
    Assignment,
    IfStatement,
    WhileStatement,
    ForStatement,
    ReadStatement,
    WriteStatement,
    EmptyStatement,
    Identifier,
)

logger = logging.getLogger(__name__)


ASSIGNMENT_OPERATORS = frozenset({"=", "+=", "-=", "*=", "/="})
INCREMENT_OPERATORS = frozenset({"++", "--"})


class Parser:
    """
    Recursive descent parser for TeachLang.

    Parses a sequence of tokens into a Program tree. Each instance owns
    its own cursor, so parsers never share state.

    Attributes:
        stream: Cursor over the tokens being parsed
        expressions: Operator-precedence engine reading the same cursor
    """

    def __init__(
        self,
        tokens: Sequence[Token],
        filename: str = "<input>",
        source_lines: Optional[list[str]] = None,
    ):
        """
        Initialize the parser.

        Args:
            tokens: Tokens from the scanner or a token file
            filename: Source filename for error messages
            source_lines: Original source lines for error context
        """
        self.filename = filename
        self.stream = TokenStream(tokens, filename, source_lines)
        self.expressions = ExpressionParser(self.stream)

    def parse(self) -> Program:
        """
        Parse the token stream into an AST.

        Returns:
            Program holding the declaration and statement sections

        Raises:
            ParseError: On the first structural error
            LexicalError: If a lexical error token is reached
        """
        declarations = self._parse_declarations()
        statements = self._parse_statements()

        logger.debug(
            f"Parsed {len(declarations.declarations)} declarations and "
            f"{len(statements.statements)} statements from {self.filename}"
        )

        return Program(
            location=SourceLocation(self.filename, 1, 1),
            declarations=declarations,
            statements=statements,
        )

    # =========================================================================
    # Declarations
    # =========================================================================

    def _parse_declarations(self) -> DeclarationList:
        """Parse declarations while the lookahead is a type keyword."""
        location = self.stream.peek().location
        declarations = []

        while not self.stream.at_end() and self.stream.peek().is_type_keyword():
            declarations.append(self._parse_declaration())

        return DeclarationList(location=location, declarations=declarations)

    def _parse_declaration(self) -> VariableDeclaration:
        """
        Parse one declaration group, including its ';'.

        Supports several declarators with optional initializers:
            int a, b = 2;
            bool done = false;
        """
        type_token = self.stream.advance()
        logger.debug(f"{type_token.location}: declaration of type {type_token.lexeme}")

        type_tag = TypeTag(location=type_token.location, name=type_token.lexeme)
        declarators = [self._parse_declarator(type_tag.name)]
        while self.stream.match(TokenKind.SEPARATOR, ","):
            declarators.append(self._parse_declarator(type_tag.name))

        self.stream.expect(TokenKind.SEPARATOR, ";", "';' after declaration")

        return VariableDeclaration(
            location=type_token.location,
            type_tag=type_tag,
            declarators=declarators,
        )

    def _parse_declarator(self, type_name: str) -> Declarator:
        """Parse a declared name and its optional initializer."""
        name_token = self.stream.expect(TokenKind.IDENTIFIER, description="variable name")
        name = Identifier(location=name_token.location, name=name_token.lexeme)

        initializer = None
        if self.stream.match(TokenKind.OPERATOR, "="):
            if type_name == "bool":
                initializer = self.expressions.parse_boolean()
            else:
                initializer = self.expressions.parse_arithmetic()

        return Declarator(location=name_token.location, name=name, initializer=initializer)

    # =========================================================================
    # Statements
    # =========================================================================

    def _parse_statements(self) -> StatementList:
        """Parse statements up to the end of input."""
        location = self.stream.peek().location
        statements = []

        while not self.stream.at_end():
            statements.append(self._parse_statement())

        return StatementList(location=location, statements=statements)

    def _parse_statement(self) -> Statement:
        """Parse any statement."""
        token = self.stream.peek()

        if token.matches(TokenKind.SEPARATOR, "{"):
            return self._parse_block()
        if token.matches(TokenKind.KEYWORD, "if"):
            return self._parse_if_statement()
        if token.matches(TokenKind.KEYWORD, "while"):
            return self._parse_while_statement()
        if token.matches(TokenKind.KEYWORD, "for"):
            return self._parse_for_statement()
        if token.matches(TokenKind.KEYWORD, "read"):
            return self._parse_read_statement()
        if token.matches(TokenKind.KEYWORD, "write"):
            return self._parse_write_statement()
        if token.kind == TokenKind.IDENTIFIER:
            return self._parse_assignment()
        if token.matches(TokenKind.SEPARATOR, ";"):
            self.stream.advance()
            return EmptyStatement(location=token.location)

        raise self.stream.unexpected("statement", token)

    def _parse_block(self) -> Block:
        """Parse a block statement { ... }."""
        location = self.stream.expect(TokenKind.SEPARATOR, "{", "'{' to start block").location

        statements = []
        while not self.stream.at_end() and not self.stream.check(TokenKind.SEPARATOR, "}"):
            statements.append(self._parse_statement())

        self.stream.expect(TokenKind.SEPARATOR, "}", "'}' to end block")
        return Block(location=location, statements=statements)

    def _parse_body(self) -> Statement:
        """Parse a loop body: a block, or else a single statement."""
        if self.stream.check(TokenKind.SEPARATOR, "{"):
            return self._parse_block()
        return self._parse_statement()

    def _parse_assignment(self, in_for_header: bool = False) -> Assignment:
        """
        Parse an assignment.

        Args:
            in_for_header: True for the init/update clauses of a for loop;
                           the for statement owns the terminator, so no ';'
                           is consumed here
        """
        target_token = self.stream.expect(TokenKind.IDENTIFIER, description="identifier in assignment")
        target = Identifier(location=target_token.location, name=target_token.lexeme)

        op_token = self.stream.peek()
        if op_token.kind == TokenKind.OPERATOR and op_token.lexeme in INCREMENT_OPERATORS:
            self.stream.advance()
            node = Assignment(location=target.location, operator=op_token.lexeme, target=target)
        elif op_token.kind == TokenKind.OPERATOR and op_token.lexeme in ASSIGNMENT_OPERATORS:
            self.stream.advance()
            value = self._parse_assignment_value(op_token.lexeme, in_for_header)
            node = Assignment(
                location=target.location,
                operator=op_token.lexeme,
                target=target,
                value=value,
            )
        else:
            raise self.stream.unexpected("assignment operator", op_token)

        if not in_for_header:
            self.stream.expect(TokenKind.SEPARATOR, ";", "';' after assignment")
        return node

    def _parse_assignment_value(self, operator: str, in_for_header: bool):
        """Pick the expression entry point for an assignment's right side."""
        if operator == "=" and not self.stream.at_end():
            lookahead = self.stream.peek()
            if (lookahead.kind in (TokenKind.BOOL_LITERAL, TokenKind.IDENTIFIER)
                    or lookahead.matches(TokenKind.OPERATOR, "!")
                    or lookahead.matches(TokenKind.SEPARATOR, "(")):
                return self.expressions.parse_boolean(in_parens=in_for_header)
        return self.expressions.parse_arithmetic(in_parens=in_for_header)

    def _parse_if_statement(self) -> IfStatement:
        """Parse if statement; both branches need braces."""
        location = self.stream.advance().location
        logger.debug(f"{location}: if statement")

        self.stream.expect(TokenKind.SEPARATOR, "(", "'(' after 'if'")
        condition = self.expressions.parse_boolean(in_parens=True)
        self.stream.expect(TokenKind.SEPARATOR, ")", "')' after condition")

        then_branch = self._parse_block()

        else_branch = None
        if self.stream.match(TokenKind.KEYWORD, "else"):
            else_branch = self._parse_block()

        return IfStatement(
            location=location,
            condition=condition,
            then_branch=then_branch,
            else_branch=else_branch,
        )

    def _parse_while_statement(self) -> WhileStatement:
        """Parse while statement."""
        location = self.stream.advance().location
        logger.debug(f"{location}: while statement")

        self.stream.expect(TokenKind.SEPARATOR, "(", "'(' after 'while'")
        condition = self.expressions.parse_boolean(in_parens=True)
        self.stream.expect(TokenKind.SEPARATOR, ")", "')' after condition")

        body = self._parse_body()

        return WhileStatement(location=location, condition=condition, body=body)

    def _parse_for_statement(self) -> ForStatement:
        """
        Parse for statement.

        The init clause is either a declaration, which consumes its own
        ';', or an assignment, whose ';' is consumed here. Any clause may
        be absent and is then None.
        """
        location = self.stream.advance().location
        logger.debug(f"{location}: for statement")

        self.stream.expect(TokenKind.SEPARATOR, "(", "'(' after 'for'")

        initializer: Optional[Union[VariableDeclaration, Assignment]] = None
        if self.stream.check(TokenKind.SEPARATOR, ";"):
            self.stream.advance()
        elif not self.stream.at_end() and self.stream.peek().is_type_keyword():
            initializer = self._parse_declaration()
        else:
            initializer = self._parse_assignment(in_for_header=True)
            self.stream.expect(TokenKind.SEPARATOR, ";", "';' after for initializer")

        condition = None
        if not self.stream.check(TokenKind.SEPARATOR, ";"):
            condition = self.expressions.parse_boolean(in_parens=True)
        self.stream.expect(TokenKind.SEPARATOR, ";", "';' after for condition")

        update = None
        if not self.stream.check(TokenKind.SEPARATOR, ")"):
            update = self._parse_assignment(in_for_header=True)
        self.stream.expect(TokenKind.SEPARATOR, ")", "')' after for clauses")

        if self.stream.check(TokenKind.SEPARATOR, "{"):
            body = self._parse_block()
        else:
            statement = self._parse_statement()
            body = Block(location=statement.location, statements=[statement])

        return ForStatement(
            location=location,
            initializer=initializer,
            condition=condition,
            update=update,
            body=body,
        )

    def _parse_read_statement(self) -> ReadStatement:
        """Parse read(a, b, ...);"""
        location = self.stream.advance().location
        self.stream.expect(TokenKind.SEPARATOR, "(", "'(' after 'read'")
        targets = self._parse_identifier_list("variable name in read statement")
        self.stream.expect(TokenKind.SEPARATOR, ")", "')' after read arguments")
        self.stream.expect(TokenKind.SEPARATOR, ";", "';' after read statement")
        return ReadStatement(location=location, targets=targets)

    def _parse_write_statement(self) -> WriteStatement:
        """Parse write(a, b, ...); or the short form write a;"""
        location = self.stream.advance().location
        description = "variable name in write statement"

        if self.stream.match(TokenKind.SEPARATOR, "("):
            targets = self._parse_identifier_list(description)
            self.stream.expect(TokenKind.SEPARATOR, ")", "')' after write arguments")
        else:
            token = self.stream.expect(TokenKind.IDENTIFIER, description=description)
            targets = [Identifier(location=token.location, name=token.lexeme)]

        self.stream.expect(TokenKind.SEPARATOR, ";", "';' after write statement")
        return WriteStatement(location=location, targets=targets)

    def _parse_identifier_list(self, description: str) -> list[Identifier]:
        """Parse IDENTIFIER (',' IDENTIFIER)*."""
        identifiers = []
        while True:
            token = self.stream.expect(TokenKind.IDENTIFIER, description=description)
            identifiers.append(Identifier(location=token.location, name=token.lexeme))
            if not self.stream.match(TokenKind.SEPARATOR, ","):
                return identifiers


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_tokens(
    tokens: Sequence[Token],
    filename: str = "<input>",
    source_lines: Optional[list[str]] = None,
) -> Program:
    """
    Parse an already scanned token sequence into an AST.

    The tokens may come straight from the scanner or from a token file.
    """
    return Parser(tokens, filename, source_lines).parse()


def parse_source(source: str, filename: str = "<input>") -> Program:
    """
    Parse TeachLang source code into an AST.

    This is a convenience function that combines scanning and parsing.

    Args:
        source: The TeachLang source code
        filename: Source filename for error messages

    Returns:
        The root Program node of the AST

    Raises:
        ParseError: If parsing fails
        LexicalError: If the source contains a lexical error
    """
    tokens = Scanner(source, filename).tokens()
    return Parser(tokens, filename, source.splitlines()).parse()
