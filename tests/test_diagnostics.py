import pytest

from oxide.oxide_diagnostics import Diagnostic, ParseErrors, describe_token
from oxide.oxide_lexer import Token


def make(message: str = "expected ';', found end of input", line: int = 1, col: int = 10) -> Diagnostic:
    return Diagnostic("ExpectedToken", message, line, col, expected="';'")


def test_describe_token() -> None:
    assert describe_token(Token("EOF", "EOF", 1, 1)) == "end of input"
    assert describe_token(Token("SEMICOLON", ";", 1, 1)) == "';'"
    assert describe_token(Token("IDENT", "abc", 1, 1)) == "'abc'"


def test_diagnostic_at_token() -> None:
    tok = Token("RBRACE", "}", 4, 2)
    diag = Diagnostic.at("UnexpectedToken", "expected expression, found '}'", tok)
    assert diag.position == (4, 2)
    assert diag.found is tok
    assert diag.expected is None


def test_diagnostic_str_and_repr() -> None:
    diag = make()
    assert str(diag) == "line 1, col 10: expected ';', found end of input"
    assert repr(diag) == (
        "Diagnostic(ExpectedToken, \"expected ';', found end of input\", line=1, col=10)"
    )


def test_diagnostic_eq_and_hash() -> None:
    assert make() == make()
    assert make() != make(col=11)
    assert make() != "line 1, col 10"
    assert len({make(), make(), make(line=2)}) == 2


def test_parse_errors_single() -> None:
    err = ParseErrors([make()])
    assert str(err) == "Parse error at line 1, col 10: expected ';', found end of input"
    assert len(err) == 1
    assert list(err) == [make()]


def test_parse_errors_many() -> None:
    err = ParseErrors([make(line=1), make(line=3)])
    assert str(err).splitlines() == [
        "Parse errors:",
        "  1: line 1, col 10: expected ';', found end of input",
        "  2: line 3, col 10: expected ';', found end of input",
    ]


def test_parse_errors_is_syntax_error() -> None:
    with pytest.raises(SyntaxError):
        raise ParseErrors([make()])


def test_parse_errors_copies_list() -> None:
    diags = [make()]
    err = ParseErrors(diags)
    diags.append(make(line=5))
    assert len(err.diagnostics) == 1
