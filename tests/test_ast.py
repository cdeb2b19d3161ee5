import hypothesis.strategies as st
from hypothesis import given

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


def test_number_repr() -> None:
    assert repr(NumberLiteral(1)) == "NumberLiteral(value=1)"


def test_binary_repr() -> None:
    node = BinaryExpression(NumberLiteral(1), "Add", Identifier("x"))
    assert repr(node) == (
        "BinaryExpression(left=NumberLiteral(value=1), op='Add', right=Identifier(name='x'))"
    )


def test_eq_ignores_positions() -> None:
    assert NumberLiteral(1, line=3, col=7) == NumberLiteral(1)
    assert LetStatement(Identifier("x", 1, 5), NumberLiteral(2, 1, 9), 1, 1) == LetStatement(
        Identifier("x"), NumberLiteral(2)
    )


def test_eq_different_class_same_payload() -> None:
    assert UnaryExpression("Neg", Identifier("x")) != Grouping(Identifier("x"))
    assert NumberLiteral(1) != Identifier("1")


def test_eq_different_children() -> None:
    n1 = ExpressionStatement(BinaryExpression(Identifier("a"), "Add", Identifier("b")))
    n2 = ExpressionStatement(BinaryExpression(Identifier("a"), "Sub", Identifier("b")))
    assert n1 != n2


def test_eq_non_astnode() -> None:
    assert NumberLiteral(1) != 1
    assert Identifier("x") != "x"


def test_equal_nodes_hash_equal() -> None:
    a = BlockStatement([ExpressionStatement(NumberLiteral(1, 2, 3))], 2, 1)
    b = BlockStatement([ExpressionStatement(NumberLiteral(1))])
    assert hash(a) == hash(b)
    assert len({a, b}) == 1


def test_statement_sequences_are_tuples() -> None:
    stmts = [ExpressionStatement(NumberLiteral(1))]
    block = BlockStatement(stmts)
    program = Program(stmts)
    stmts.append(ExpressionStatement(NumberLiteral(2)))
    assert block.statements == (ExpressionStatement(NumberLiteral(1)),)
    assert program.statements == (ExpressionStatement(NumberLiteral(1)),)


def test_program_position() -> None:
    program = Program()
    assert (program.line, program.col) == (1, 1)
    assert program.statements == ()


def test_children() -> None:
    left, right = NumberLiteral(1), Identifier("y")
    assert BinaryExpression(left, "Mul", right).children() == [left, right]
    assert UnaryExpression("Neg", left).children() == [left]
    assert NumberLiteral(1).children() == []

    inner = ExpressionStatement(left)
    assert BlockStatement([inner, inner]).children() == [inner, inner]


def test_to_dict_nested() -> None:
    node = LetStatement(
        Identifier("x", 1, 5),
        BinaryExpression(NumberLiteral(1, 1, 9), "Add", NumberLiteral(2, 1, 13), 1, 9),
        1,
        1,
    )
    d = node.to_dict()
    assert d["kind"] == "let"
    assert (d["line"], d["col"]) == (1, 1)
    assert d["name"] == {"kind": "identifier", "line": 1, "col": 5, "name": "x"}  # type: ignore[typeddict-item]
    value = d["value"]  # type: ignore[typeddict-item]
    assert value["kind"] == "binary"
    assert value["op"] == "Add"
    assert value["right"]["value"] == 2


def test_to_dict_statement_list() -> None:
    program = Program([ExpressionStatement(NumberLiteral(4, 1, 1), 1, 1)])
    d = program.to_dict()
    assert d["kind"] == "program"
    statements = d["statements"]  # type: ignore[typeddict-item]
    assert isinstance(statements, list)
    assert statements[0]["expr"] == {"kind": "number", "line": 1, "col": 1, "value": 4}


def test_base_node_has_no_fields() -> None:
    node = ASTNode(2, 3)
    assert node.kind == "node"
    assert node.children() == []
    assert node.to_dict() == {"kind": "node", "line": 2, "col": 3}


@given(st.integers(min_value=0, max_value=2**63 - 1))  # type: ignore[misc]
def test_number_eq_same_value(value: int) -> None:
    assert NumberLiteral(value) == NumberLiteral(value, line=9, col=9)


@given(st.text(min_size=1))  # type: ignore[misc]
def test_identifier_eq_different_name(name: str) -> None:
    assert Identifier(name) != Identifier(name + "x")
