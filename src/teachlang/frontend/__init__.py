"""
TeachLang Front End
===================

Scanner, token record format, parser and AST for TeachLang.

Pipeline
--------
    Source → Scanner → Tokens → Parser → AST

Tokens may also travel through a token record file between the two
stages, which is how the ``tlscan`` and ``tlparse`` tools are chained.

Usage
-----
>>> from teachlang.frontend import Scanner, Parser, ASTPrinter
>>> tokens = Scanner("int a; a = 1;").tokens()
>>> tree = Parser(tokens).parse()
>>> print(ASTPrinter().print(tree))
"""

from teachlang.frontend.compiler import (
    FrontEnd,
    FrontEndOptions,
    FrontEndResult,
    compile_source,
)
from teachlang.frontend.errors import (
    FrontEndError,
    FrontEndCompilationError,
    LexicalError,
    ParseError,
    UnexpectedTokenError,
    MissingTokenError,
    ExpressionError,
    TokenFileError,
)
from teachlang.frontend.lexer import Scanner, Token, TokenKind, scan_source
from teachlang.frontend.tokenfile import (
    format_token,
    write_tokens,
    save_tokens,
    parse_token_record,
    read_tokens,
    load_tokens,
)
from teachlang.frontend.parser import Parser, parse_source, parse_tokens
from teachlang.frontend.expressions import ExpressionParser
from teachlang.frontend.ast import (
    ASTNode,
    NodeKind,
    Program,
    DeclarationList,
    VariableDeclaration,
    Declarator,
    TypeTag,
    StatementList,
    Block,
    Assignment,
    IfStatement,
    WhileStatement,
    ForStatement,
    ReadStatement,
    WriteStatement,
    EmptyStatement,
    Expression,
    BooleanExpression,
    UnaryOperation,
    BinaryOperation,
    Identifier,
    IntLiteral,
    FloatLiteral,
    BoolLiteral,
    ASTVisitor,
    ASTPrinter,
    to_sexpr,
)

__all__ = [
    # Driver
    "FrontEnd",
    "FrontEndOptions",
    "FrontEndResult",
    "compile_source",
    # Errors
    "FrontEndError",
    "FrontEndCompilationError",
    "LexicalError",
    "ParseError",
    "UnexpectedTokenError",
    "MissingTokenError",
    "ExpressionError",
    "TokenFileError",
    # Scanner
    "Scanner",
    "Token",
    "TokenKind",
    "scan_source",
    # Token records
    "format_token",
    "write_tokens",
    "save_tokens",
    "parse_token_record",
    "read_tokens",
    "load_tokens",
    # Parser
    "Parser",
    "ExpressionParser",
    "parse_source",
    "parse_tokens",
    # AST
    "ASTNode",
    "NodeKind",
    "Program",
    "DeclarationList",
    "VariableDeclaration",
    "Declarator",
    "TypeTag",
    "StatementList",
    "Block",
    "Assignment",
    "IfStatement",
    "WhileStatement",
    "ForStatement",
    "ReadStatement",
    "WriteStatement",
    "EmptyStatement",
    "Expression",
    "BooleanExpression",
    "UnaryOperation",
    "BinaryOperation",
    "Identifier",
    "IntLiteral",
    "FloatLiteral",
    "BoolLiteral",
    "ASTVisitor",
    "ASTPrinter",
    "to_sexpr",
]
