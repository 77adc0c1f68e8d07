"""
TeachLang Abstract Syntax Tree (AST) Definitions
================================================

This module defines the AST node types produced by the TeachLang parser.
Each syntactic construct has its own node class carrying exactly the fields
that construct needs, so a node's shape fixes its arity.

Node Hierarchy
--------------
ASTNode (base)
├── Program - root: declaration section + statement section
├── Declarations
│   ├── DeclarationList - every declaration of the program, in order
│   ├── VariableDeclaration - one "type a, b = 1;" group
│   ├── Declarator - one name with its optional initializer
│   └── TypeTag - int, float or bool
├── Statements
│   ├── StatementList - top-level statements
│   ├── Block - { ... }
│   ├── Assignment - =, +=, -=, *=, /=, ++, --
│   ├── IfStatement - if with optional else
│   ├── WhileStatement
│   ├── ForStatement - three optional clauses and a body
│   ├── ReadStatement / WriteStatement
│   └── EmptyStatement - a lone ';'
└── Expressions
    ├── Expression - wrapper around one operator-precedence result
    ├── BooleanExpression - comparison of two Expressions
    ├── UnaryOperation - !, ~, ++, --, neg
    ├── BinaryOperation - every two-operand operator
    ├── Identifier
    └── IntLiteral / FloatLiteral / BoolLiteral

Design Notes
------------
- All nodes are dataclasses; each stores its source location
- The tree is strictly hierarchical: a node belongs to exactly one parent
- Absent ``for`` clauses are None, never an empty Expression
- ``children()`` lists a node's sub-nodes in dump order

Dump Format
-----------
ASTPrinter renders one line per node, two spaces of indent per level,
``[TAG]`` optionally followed by the node's literal value:

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

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import ClassVar, Optional, Union

from teachlang.errors import SourceLocation


# =============================================================================
# Node Kinds
# =============================================================================

class NodeKind(Enum):
    """Node kinds, valued by their tag in the tree dump."""
    EXPRESSION = "EXPR"
    BOOLEAN_EXPRESSION = "BOOL"
    DECLARATION_LIST = "DECLS"
    STATEMENT_LIST = "STMTS"
    ASSIGNMENT = "ASSIGN"
    IF = "IF"
    WHILE = "WHILE"
    FOR = "FOR"
    READ = "READ"
    WRITE = "WRITE"
    BLOCK = "BLOCK"
    OPERATOR = "OP"
    IDENTIFIER = "ID"
    INT_LITERAL = "NUM"
    FLOAT_LITERAL = "FLOAT"
    BOOL_LITERAL = "BOOLVAL"
    TYPE_TAG = "TYPE"
    GENERIC_LIST = "LIST"


# =============================================================================
# AST Node Base Class
# =============================================================================

@dataclass
class ASTNode:
    """
    Base class for all AST nodes.

    Attributes:
        location: Source location where this node appears
    """
    kind: ClassVar[NodeKind]

    location: SourceLocation

    def __repr__(self) -> str:
        """Default representation showing node type."""
        return f"{self.__class__.__name__}@{self.location.line}:{self.location.column}"

    def label(self) -> str:
        """Literal value shown after the tag in the dump ("" for none)."""
        return ""

    def children(self) -> tuple[Optional["ASTNode"], ...]:
        """Sub-nodes in source order."""
        return ()


# =============================================================================
# Leaf Nodes
# =============================================================================

@dataclass
class Identifier(ASTNode):
    """
    Variable reference.

    Attributes:
        name: The variable name
    """
    kind: ClassVar[NodeKind] = NodeKind.IDENTIFIER
    name: str = ""

    def label(self) -> str:
        return self.name


@dataclass
class IntLiteral(ASTNode):
    """
    Integer literal.

    Attributes:
        text: The literal exactly as written
    """
    kind: ClassVar[NodeKind] = NodeKind.INT_LITERAL
    text: str = "0"

    @property
    def value(self) -> int:
        return int(self.text)

    def label(self) -> str:
        return self.text


@dataclass
class FloatLiteral(ASTNode):
    """
    Floating point literal.

    Attributes:
        text: The literal exactly as written
    """
    kind: ClassVar[NodeKind] = NodeKind.FLOAT_LITERAL
    text: str = "0.0"

    @property
    def value(self) -> float:
        return float(self.text)

    def label(self) -> str:
        return self.text


@dataclass
class BoolLiteral(ASTNode):
    """Boolean literal (true or false)."""
    kind: ClassVar[NodeKind] = NodeKind.BOOL_LITERAL
    value: bool = False

    def label(self) -> str:
        return "true" if self.value else "false"


@dataclass
class TypeTag(ASTNode):
    """
    Declared type of a declaration group.

    Attributes:
        name: "int", "float" or "bool"
    """
    kind: ClassVar[NodeKind] = NodeKind.TYPE_TAG
    name: str = "int"

    def label(self) -> str:
        return self.name


Operand = Union[Identifier, IntLiteral, FloatLiteral, BoolLiteral,
                "UnaryOperation", "BinaryOperation"]


# =============================================================================
# Expression Nodes
# =============================================================================

@dataclass
class UnaryOperation(ASTNode):
    """
    One-operand operator application.

    Attributes:
        operator: "!", "~", "++", "--" or "neg" (unary minus)
        operand: The operand
    """
    kind: ClassVar[NodeKind] = NodeKind.OPERATOR
    operator: str = ""
    operand: Operand = None

    def label(self) -> str:
        return self.operator

    def children(self) -> tuple[Optional[ASTNode], ...]:
        return (self.operand,)


@dataclass
class BinaryOperation(ASTNode):
    """
    Two-operand operator application (left op right).

    Attributes:
        operator: The operator lexeme, e.g. "+", "&&", "<<"
        left: Left operand
        right: Right operand
    """
    kind: ClassVar[NodeKind] = NodeKind.OPERATOR
    operator: str = ""
    left: Operand = None
    right: Operand = None

    def label(self) -> str:
        return self.operator

    def children(self) -> tuple[Optional[ASTNode], ...]:
        return (self.left, self.right)


@dataclass
class Expression(ASTNode):
    """
    Wrapper around the single operand left by the expression engine.

    Attributes:
        value: The expression tree
    """
    kind: ClassVar[NodeKind] = NodeKind.EXPRESSION
    value: Operand = None

    def children(self) -> tuple[Optional[ASTNode], ...]:
        return (self.value,)


@dataclass
class BooleanExpression(ASTNode):
    """
    Comparison of two arithmetic expressions.

    Attributes:
        operator: One of ==, !=, <, <=, >, >=
        left: Left-hand Expression
        right: Right-hand Expression
    """
    kind: ClassVar[NodeKind] = NodeKind.BOOLEAN_EXPRESSION
    operator: str = ""
    left: Expression = None
    right: Expression = None

    def label(self) -> str:
        return self.operator

    def children(self) -> tuple[Optional[ASTNode], ...]:
        return (self.left, self.right)


Condition = Union[Expression, BooleanExpression]


# =============================================================================
# Declaration Nodes
# =============================================================================

@dataclass
class Declarator(ASTNode):
    """
    One declared name with its optional initializer.

    Declarators are not tagged in the dump; their name and initializer
    appear directly under the owning declaration.

    Attributes:
        name: The declared identifier
        initializer: Optional initial value
    """
    name: Identifier = None
    initializer: Optional[Condition] = None

    def children(self) -> tuple[Optional[ASTNode], ...]:
        if self.initializer is None:
            return (self.name,)
        return (self.name, self.initializer)


@dataclass
class VariableDeclaration(ASTNode):
    """
    One declaration group such as ``int a, b = 2;``.

    Attributes:
        type_tag: The declared type
        declarators: Declared names in order (at least one)
    """
    kind: ClassVar[NodeKind] = NodeKind.GENERIC_LIST
    type_tag: TypeTag = None
    declarators: list[Declarator] = field(default_factory=list)

    def children(self) -> tuple[Optional[ASTNode], ...]:
        nodes: list[ASTNode] = [self.type_tag]
        for declarator in self.declarators:
            nodes.extend(declarator.children())
        return tuple(nodes)


@dataclass
class DeclarationList(ASTNode):
    """
    The declaration section of a program.

    Attributes:
        declarations: Declaration groups in source order
    """
    kind: ClassVar[NodeKind] = NodeKind.DECLARATION_LIST
    declarations: list[VariableDeclaration] = field(default_factory=list)

    def children(self) -> tuple[Optional[ASTNode], ...]:
        return tuple(self.declarations)


# =============================================================================
# Statement Nodes
# =============================================================================

@dataclass
class Assignment(ASTNode):
    """
    Assignment statement.

    Plain and compound forms carry a value; ``x++`` and ``x--`` do not.

    Attributes:
        operator: "=", "+=", "-=", "*=", "/=", "++" or "--"
        target: The assigned variable
        value: Right-hand side (None for ++ and --)
    """
    kind: ClassVar[NodeKind] = NodeKind.ASSIGNMENT
    operator: str = "="
    target: Identifier = None
    value: Optional[Condition] = None

    def label(self) -> str:
        return self.operator

    @property
    def is_increment(self) -> bool:
        return self.operator in ("++", "--")

    def children(self) -> tuple[Optional[ASTNode], ...]:
        if self.value is None:
            return (self.target,)
        return (self.target, self.value)


@dataclass
class Block(ASTNode):
    """
    Statements enclosed in braces.

    Attributes:
        statements: Statements in source order
    """
    kind: ClassVar[NodeKind] = NodeKind.BLOCK
    statements: list["Statement"] = field(default_factory=list)

    def children(self) -> tuple[Optional[ASTNode], ...]:
        return tuple(self.statements)


@dataclass
class IfStatement(ASTNode):
    """
    If statement with optional else branch.

    Attributes:
        condition: The condition
        then_branch: Block run when the condition holds
        else_branch: Optional block run otherwise
    """
    kind: ClassVar[NodeKind] = NodeKind.IF
    condition: Condition = None
    then_branch: Block = None
    else_branch: Optional[Block] = None

    def children(self) -> tuple[Optional[ASTNode], ...]:
        if self.else_branch is None:
            return (self.condition, self.then_branch)
        return (self.condition, self.then_branch, self.else_branch)


@dataclass
class WhileStatement(ASTNode):
    """
    While loop.

    Attributes:
        condition: Loop condition
        body: Block or single statement
    """
    kind: ClassVar[NodeKind] = NodeKind.WHILE
    condition: Condition = None
    body: "Statement" = None

    def children(self) -> tuple[Optional[ASTNode], ...]:
        return (self.condition, self.body)


@dataclass
class ForStatement(ASTNode):
    """
    For loop with four fixed slots.

    Attributes:
        initializer: Declaration or assignment, or None if absent
        condition: Loop condition, or None if absent
        update: Update assignment, or None if absent
        body: Loop body (a single statement is wrapped in a Block)
    """
    kind: ClassVar[NodeKind] = NodeKind.FOR
    initializer: Optional[Union[VariableDeclaration, Assignment]] = None
    condition: Optional[Condition] = None
    update: Optional[Assignment] = None
    body: Block = None

    def children(self) -> tuple[Optional[ASTNode], ...]:
        return (self.initializer, self.condition, self.update, self.body)


@dataclass
class ReadStatement(ASTNode):
    """read(a, b, ...);"""
    kind: ClassVar[NodeKind] = NodeKind.READ
    targets: list[Identifier] = field(default_factory=list)

    def children(self) -> tuple[Optional[ASTNode], ...]:
        return tuple(self.targets)


@dataclass
class WriteStatement(ASTNode):
    """write(a, b, ...); or write a;"""
    kind: ClassVar[NodeKind] = NodeKind.WRITE
    targets: list[Identifier] = field(default_factory=list)

    def children(self) -> tuple[Optional[ASTNode], ...]:
        return tuple(self.targets)


@dataclass
class EmptyStatement(ASTNode):
    """A lone ';'."""
    kind: ClassVar[NodeKind] = NodeKind.STATEMENT_LIST

    def label(self) -> str:
        return "empty_stmt"


Statement = Union[Assignment, Block, IfStatement, WhileStatement, ForStatement,
                  ReadStatement, WriteStatement, EmptyStatement]


@dataclass
class StatementList(ASTNode):
    """
    The statement section of a program.

    Attributes:
        statements: Statements in source order
    """
    kind: ClassVar[NodeKind] = NodeKind.STATEMENT_LIST
    statements: list[Statement] = field(default_factory=list)

    def children(self) -> tuple[Optional[ASTNode], ...]:
        return tuple(self.statements)


# =============================================================================
# Program Root Node
# =============================================================================

@dataclass
class Program(ASTNode):
    """
    Root node: ``program := declaration* statement*``.

    Rendered as a BLOCK holding the declaration and statement sections.

    Attributes:
        declarations: The declaration section
        statements: The statement section
    """
    kind: ClassVar[NodeKind] = NodeKind.BLOCK
    declarations: DeclarationList = None
    statements: StatementList = None

    def children(self) -> tuple[Optional[ASTNode], ...]:
        return (self.declarations, self.statements)


# =============================================================================
# AST Visitor Pattern
# =============================================================================

class ASTVisitor:
    """
    Base class for AST visitors.

    Subclasses override visit_* methods for the node types they care about;
    everything else falls through to generic_visit, which walks children.

    Usage:
        class NameCollector(ASTVisitor):
            def __init__(self):
                self.names = []

            def visit_Identifier(self, node):
                self.names.append(node.name)

        collector = NameCollector()
        collector.visit(program)
    """

    def visit(self, node: ASTNode):
        """Visit a node by dispatching to visit_<ClassName>."""
        method_name = f"visit_{node.__class__.__name__}"
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: ASTNode) -> None:
        """Visit every child node held in the node's fields."""
        for f in fields(node):
            value = getattr(node, f.name)
            if isinstance(value, ASTNode):
                self.visit(value)
            elif isinstance(value, list):
                for item in value:
                    if isinstance(item, ASTNode):
                        self.visit(item)


# =============================================================================
# AST Pretty Printer
# =============================================================================

class ASTPrinter:
    """
    Depth-first textual dump of a tree.

    Usage:
        printer = ASTPrinter()
        print(printer.print(program))
    """

    NULL_TAG = "[NULL]"

    def __init__(self, indent: str = "  "):
        self.indent = indent
        self.output: list[str] = []

    def print(self, node: ASTNode) -> str:
        """Render the tree rooted at node and return it as a string."""
        self.output = []
        self._emit(node, 0)
        return "\n".join(self.output)

    def _emit(self, node: Optional[ASTNode], depth: int) -> None:
        prefix = self.indent * depth
        if node is None:
            self.output.append(f"{prefix}{self.NULL_TAG}")
            return

        line = f"{prefix}[{node.kind.value}]"
        label = node.label()
        if label:
            line = f"{line} {label}"
        self.output.append(line)

        for child in node.children():
            self._emit(child, depth + 1)


# =============================================================================
# Compact Form
# =============================================================================

def to_sexpr(node: Optional[ASTNode]) -> str:
    """
    Render a node as a compact one-line term, mainly for tests and logs.

    Examples:
        Assign(=, a, Op(+, 1, Op(*, 2, 3)))
        For(-, -, -, Block())
    """
    if node is None:
        return "-"
    if isinstance(node, (Identifier, IntLiteral, FloatLiteral, BoolLiteral, TypeTag)):
        return node.label()
    if isinstance(node, Expression):
        return to_sexpr(node.value)

    name = {
        UnaryOperation: "Op",
        BinaryOperation: "Op",
        BooleanExpression: "Bool",
        Assignment: "Assign",
        IfStatement: "If",
        WhileStatement: "While",
        ForStatement: "For",
        ReadStatement: "Read",
        WriteStatement: "Write",
        Block: "Block",
        EmptyStatement: "Empty",
        VariableDeclaration: "Decl",
        DeclarationList: "Decls",
        StatementList: "Stmts",
        Program: "Program",
        Declarator: "Var",
    }.get(type(node), type(node).__name__)

    parts = []
    if node.label() and not isinstance(node, EmptyStatement):
        parts.append(node.label())
    parts.extend(to_sexpr(child) for child in node.children())
    return f"{name}({', '.join(parts)})"
