"""
Defines the abstract syntax tree (AST) node structure for the Oxide language.

Classes:
    ASTNode:
        Base class for every node. Tracks the source position of the node's first
        token and provides structural equality, a debugging repr, and `to_dict`.

    Program:
        The root node, an ordered tuple of statements.

    Statements:
        LetStatement, BlockStatement, ExpressionStatement

    Expressions:
        NumberLiteral, Identifier, BinaryExpression, UnaryExpression, Grouping

    ASTDict:
        TypedDict representation for serializing nodes to plain Python dictionaries,
        suitable for JSON output or debugging.

Each node lists its payload attributes in `fields`. Child nodes are always fully
constructed before their parent; statement sequences are stored as tuples so a
returned tree is never modified in place.

Equality compares node class and fields only. Positions are metadata and are
excluded, so `NumberLiteral(1, line=1, col=5) == NumberLiteral(1)`.

Example:
    node = BinaryExpression(NumberLiteral(1), "Add", NumberLiteral(2))
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, TypedDict


class ASTDict(TypedDict, total=False):
    """
    TypedDict representation of an ASTNode used for serialization.

    Fields:
        kind (str): The node kind (e.g., "let", "binary", "number").
        line (int): Line number in the source code where the node originates.
        col (int): Column number in the source code where the node originates.

    Remaining keys are the node's own fields; nested nodes appear as nested
    ASTDicts and statement sequences as lists of ASTDicts.
    """

    kind: str
    line: int
    col: int


class ASTNode:
    """
    Base class for nodes of the Oxide syntax tree.

    Attributes:
        kind (str): Short name of the node type, used by `to_dict` and the printer.
        fields (tuple[str, ...]): Names of the payload attributes, in display order.
        line (int): Source line number of the node's first token (default is 0).
        col (int): Source column number of the node's first token (default is 0).
    """

    kind = "node"
    fields: tuple[str, ...] = ()

    def __init__(self, line: int = 0, col: int = 0) -> None:
        self.line = line
        self.col = col

    def children(self) -> list[ASTNode]:
        """Returns the direct child nodes, in source order."""
        result: list[ASTNode] = []
        for name in self.fields:
            val = getattr(self, name)
            if isinstance(val, ASTNode):
                result.append(val)
            elif isinstance(val, tuple):
                result.extend(v for v in val if isinstance(v, ASTNode))
        return result

    def __repr__(self) -> str:
        parts = [f"{name}={getattr(self, name)!r}" for name in self.fields]
        return f"{type(self).__name__}({', '.join(parts)})"

    def __eq__(self, other: Any) -> bool:
        if type(self) is not type(other):
            return False
        return all(getattr(self, name) == getattr(other, name) for name in self.fields)

    def __hash__(self) -> int:
        return hash((type(self).__name__,) + tuple(getattr(self, n) for n in self.fields))

    def to_dict(self) -> ASTDict:
        result: dict[str, Any] = {"kind": self.kind, "line": self.line, "col": self.col}
        for name in self.fields:
            val = getattr(self, name)
            if isinstance(val, ASTNode):
                val = val.to_dict()
            elif isinstance(val, tuple):
                val = [v.to_dict() if isinstance(v, ASTNode) else v for v in val]
            result[name] = val
        return result  # type: ignore[return-value]


class Expression(ASTNode):
    """Marker base for expression nodes."""


class Statement(ASTNode):
    """Marker base for statement nodes."""


class NumberLiteral(Expression):
    kind = "number"
    fields = ("value",)

    def __init__(self, value: int, line: int = 0, col: int = 0) -> None:
        super().__init__(line, col)
        self.value = value


class Identifier(Expression):
    kind = "identifier"
    fields = ("name",)

    def __init__(self, name: str, line: int = 0, col: int = 0) -> None:
        super().__init__(line, col)
        self.name = name


class BinaryExpression(Expression):
    """`left op right`, where op is one of Add, Sub, Mul, Div."""

    kind = "binary"
    fields = ("left", "op", "right")

    def __init__(
        self, left: Expression, op: str, right: Expression, line: int = 0, col: int = 0
    ) -> None:
        super().__init__(line, col)
        self.left = left
        self.op = op
        self.right = right


class UnaryExpression(Expression):
    """Prefix operator applied to an operand. The only operator is Neg."""

    kind = "unary"
    fields = ("op", "operand")

    def __init__(self, op: str, operand: Expression, line: int = 0, col: int = 0) -> None:
        super().__init__(line, col)
        self.op = op
        self.operand = operand


class Grouping(Expression):
    """A parenthesized expression, kept as its own node so display can restore it."""

    kind = "grouping"
    fields = ("inner",)

    def __init__(self, inner: Expression, line: int = 0, col: int = 0) -> None:
        super().__init__(line, col)
        self.inner = inner


class LetStatement(Statement):
    kind = "let"
    fields = ("name", "value")

    def __init__(
        self, name: Identifier, value: Expression, line: int = 0, col: int = 0
    ) -> None:
        super().__init__(line, col)
        self.name = name
        self.value = value


class BlockStatement(Statement):
    kind = "block"
    fields = ("statements",)

    def __init__(
        self, statements: Iterable[Statement] = (), line: int = 0, col: int = 0
    ) -> None:
        super().__init__(line, col)
        self.statements: tuple[Statement, ...] = tuple(statements)


class ExpressionStatement(Statement):
    kind = "expr_stmt"
    fields = ("expr",)

    def __init__(self, expr: Expression, line: int = 0, col: int = 0) -> None:
        super().__init__(line, col)
        self.expr = expr


class Program(ASTNode):
    """Root of a parsed source text."""

    kind = "program"
    fields = ("statements",)

    def __init__(self, statements: Iterable[Statement] = ()) -> None:
        super().__init__(1, 1)
        self.statements: tuple[Statement, ...] = tuple(statements)


__all__ = [
    "ASTDict",
    "ASTNode",
    "BinaryExpression",
    "BlockStatement",
    "Expression",
    "ExpressionStatement",
    "Grouping",
    "Identifier",
    "LetStatement",
    "NumberLiteral",
    "Program",
    "Statement",
    "UnaryExpression",
]
