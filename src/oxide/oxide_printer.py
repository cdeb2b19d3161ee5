"""
Renders Oxide ASTs as text for display.

Classes and Features:
    - Emitter: Base class with an indented line buffer and `emit_<kind>` dispatch.
    - SourceEmitter: Source-like rendering with every operation parenthesized,
      so precedence is visible: `1 + 2 * 3;` renders as `(1 + (2 * 3));`.
    - TreeEmitter: Indented, labelled tree used by the REPL and the CLI.
    - format_source(), format_tree(): One-call helpers over the emitters.

Usage:
    >>> from oxide.oxide_parser import parse_source
    >>> print(format_source(parse_source("let x = -a * (b + 1);")))
    let x = ((-a) * ((b + 1)));

Raises:
    NotImplementedError: If an emitter has no method for a node kind.
"""

from oxide.oxide_ast import (
    ASTNode,
    BinaryExpression,
    BlockStatement,
    ExpressionStatement,
    Grouping,
    Identifier,
    LetStatement,
    NumberLiteral,
    Program,
    UnaryExpression,
)
from oxide.oxide_constants import OPERATOR_SYMBOLS


class Emitter:
    """Dispatches AST nodes to `emit_<kind>` methods and collects output lines.

    Attributes:
        lines (list[str]): Accumulated output lines.
        indent (int): Current indentation level.
        indent_unit (str): Text added per indentation level.
    """

    indent_unit = "  "

    def __init__(self) -> None:
        self.lines: list[str] = []
        self.indent = 0

    def indent_str(self) -> str:
        return self.indent_unit * self.indent

    def write(self, text: str) -> None:
        self.lines.append(f"{self.indent_str()}{text}")

    def get_output(self) -> str:
        return "\n".join(self.lines)

    def _visit(self, node: ASTNode) -> str | None:
        method_name = f"emit_{node.kind}"
        emit_method = getattr(self, method_name, None)
        if emit_method is None:
            raise NotImplementedError(
                f"No emitter method for node kind '{node.kind}' "
                f"(line {node.line}, col {node.col})"
            )
        return emit_method(node)  # type: ignore[no-any-return]


class SourceEmitter(Emitter):
    """Emits statements as lines and expressions as fully parenthesized strings."""

    def emit_program(self, node: Program) -> None:
        for stmt in node.statements:
            self._visit(stmt)

    def emit_let(self, node: LetStatement) -> None:
        self.write(f"let {node.name.name} = {self.emit_expr(node.value)};")

    def emit_expr_stmt(self, node: ExpressionStatement) -> None:
        self.write(f"{self.emit_expr(node.expr)};")

    def emit_block(self, node: BlockStatement) -> None:
        self.write("{")
        self.indent += 1
        for stmt in node.statements:
            self._visit(stmt)
        self.indent -= 1
        self.write("}")

    def emit_expr(self, node: ASTNode) -> str:
        result = self._visit(node)
        if result is None:
            raise TypeError(f"Expected an expression node, got {type(node).__name__}")
        return result

    def emit_number(self, node: NumberLiteral) -> str:
        return str(node.value)

    def emit_identifier(self, node: Identifier) -> str:
        return node.name

    def emit_binary(self, node: BinaryExpression) -> str:
        left = self.emit_expr(node.left)
        right = self.emit_expr(node.right)
        return f"({left} {OPERATOR_SYMBOLS[node.op]} {right})"

    def emit_unary(self, node: UnaryExpression) -> str:
        return f"({OPERATOR_SYMBOLS[node.op]}{self.emit_expr(node.operand)})"

    def emit_grouping(self, node: Grouping) -> str:
        return f"({self.emit_expr(node.inner)})"


class TreeEmitter(Emitter):
    """Emits one labelled line per node, children indented beneath their parent."""

    def child(self, label: str, node: ASTNode) -> None:
        self.write(f"{label}:")
        self.indent += 1
        self._visit(node)
        self.indent -= 1

    def emit_program(self, node: Program) -> None:
        self.write(f"Program ({len(node.statements)} statement(s)):")
        self.indent += 1
        for stmt in node.statements:
            self._visit(stmt)
        self.indent -= 1

    def emit_let(self, node: LetStatement) -> None:
        self.write("Let Statement:")
        self.indent += 1
        self.write(f"Variable: {node.name.name}")
        self.child("Value", node.value)
        self.indent -= 1

    def emit_expr_stmt(self, node: ExpressionStatement) -> None:
        self.write("Expression Statement:")
        self.indent += 1
        self._visit(node.expr)
        self.indent -= 1

    def emit_block(self, node: BlockStatement) -> None:
        self.write(f"Block Statement ({len(node.statements)} statement(s)):")
        self.indent += 1
        for i, stmt in enumerate(node.statements):
            self.child(f"[{i}]", stmt)
        self.indent -= 1

    def emit_number(self, node: NumberLiteral) -> None:
        self.write(f"Number: {node.value}")

    def emit_identifier(self, node: Identifier) -> None:
        self.write(f"Identifier: {node.name}")

    def emit_binary(self, node: BinaryExpression) -> None:
        self.write(f"Binary Expression ({node.op}):")
        self.indent += 1
        self.child("Left", node.left)
        self.child("Right", node.right)
        self.indent -= 1

    def emit_unary(self, node: UnaryExpression) -> None:
        self.write(f"Unary Expression ({node.op}):")
        self.indent += 1
        self.child("Operand", node.operand)
        self.indent -= 1

    def emit_grouping(self, node: Grouping) -> None:
        self.write("Grouped Expression:")
        self.indent += 1
        self._visit(node.inner)
        self.indent -= 1


def format_source(node: ASTNode) -> str:
    """Renders a Program, statement, or expression as parenthesized source text."""
    emitter = SourceEmitter()
    result = emitter._visit(node)
    return result if result is not None else emitter.get_output()


def format_tree(node: ASTNode) -> str:
    """Renders any node as an indented tree."""
    emitter = TreeEmitter()
    emitter._visit(node)
    return emitter.get_output()


__all__ = ["Emitter", "SourceEmitter", "TreeEmitter", "format_source", "format_tree"]
