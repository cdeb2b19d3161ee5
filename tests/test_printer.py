import pytest

from oxide.oxide_ast import ASTNode, ExpressionStatement, Identifier, NumberLiteral
from oxide.oxide_parser import parse_source
from oxide.oxide_printer import SourceEmitter, format_source, format_tree


@pytest.mark.parametrize(
    "source, rendered",
    [
        ("let x = 1 + 2 * 3;", "let x = (1 + (2 * 3));"),
        ("(1 + 2) * 3 - 4 / 2;", "((((1 + 2)) * 3) - (4 / 2));"),
        ("--x;", "(-(-x));"),
        ("let x = -a * (b + 1);", "let x = ((-a) * ((b + 1)));"),
        ("a - b - c;", "((a - b) - c);"),
    ],
)
def test_format_source(source: str, rendered: str) -> None:
    assert format_source(parse_source(source)) == rendered


def test_format_source_block() -> None:
    program = parse_source("{ let x = 5; { x; } }")
    assert format_source(program).splitlines() == [
        "{",
        "  let x = 5;",
        "  {",
        "    x;",
        "  }",
        "}",
    ]


def test_format_source_expression_node() -> None:
    assert format_source(NumberLiteral(3)) == "3"
    assert format_source(Identifier("abc")) == "abc"


def test_format_source_empty_program() -> None:
    assert format_source(parse_source("")) == ""


def test_emit_expr_rejects_statements() -> None:
    with pytest.raises(TypeError, match="Expected an expression node"):
        SourceEmitter().emit_expr(ExpressionStatement(NumberLiteral(1)))


def test_format_tree_let() -> None:
    assert format_tree(parse_source("let x = 1;")).splitlines() == [
        "Program (1 statement(s)):",
        "  Let Statement:",
        "    Variable: x",
        "    Value:",
        "      Number: 1",
    ]


def test_format_tree_expression() -> None:
    assert format_tree(parse_source("-(a + 2);")).splitlines() == [
        "Program (1 statement(s)):",
        "  Expression Statement:",
        "    Unary Expression (Neg):",
        "      Operand:",
        "        Grouped Expression:",
        "          Binary Expression (Add):",
        "            Left:",
        "              Identifier: a",
        "            Right:",
        "              Number: 2",
    ]


def test_format_tree_block() -> None:
    assert format_tree(parse_source("{ 1; }")).splitlines() == [
        "Program (1 statement(s)):",
        "  Block Statement (1 statement(s)):",
        "    [0]:",
        "      Expression Statement:",
        "        Number: 1",
    ]


def test_unknown_node_kind() -> None:
    with pytest.raises(NotImplementedError, match="No emitter method for node kind 'node'"):
        format_tree(ASTNode(1, 1))
    with pytest.raises(NotImplementedError):
        format_source(ASTNode())
