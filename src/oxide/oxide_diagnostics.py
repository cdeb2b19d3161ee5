"""
Diagnostics reported by the Oxide parser.

Classes:
    - Diagnostic: One reported problem with a kind, message, and source position.
    - ParseErrors: Raised by `parse_source` when one or more diagnostics were recorded.

A diagnostic is a value, not a fault: the parser records it and keeps going.
`ParseErrors` only exists so a parse call can hand back the complete, ordered
list in place of a Program.
"""

from collections.abc import Iterator
from typing import Any

from oxide.oxide_constants import EOF, TOKEN_DESCRIPTIONS
from oxide.oxide_lexer import Position, Token


def describe_token(tok: Token) -> str:
    """Returns the text used for `tok` in diagnostic messages."""
    if tok.type == EOF:
        return TOKEN_DESCRIPTIONS[EOF]
    return f"'{tok.value}'"


class Diagnostic:
    """A single parse error with its source location.

    Attributes:
        kind (str): One of `DIAGNOSTIC_KINDS` (e.g. 'ExpectedToken').
        message (str): Human-readable description, without the position prefix.
        line (int): 1-based line of the offending token.
        col (int): 1-based column of the offending token.
        expected (str | None): Description of the token that was required, if any.
        found (Token | None): The token actually seen, if any.
    """

    def __init__(
        self,
        kind: str,
        message: str,
        line: int,
        col: int,
        expected: str | None = None,
        found: Token | None = None,
    ) -> None:
        self.kind = kind
        self.message = message
        self.line = line
        self.col = col
        self.expected = expected
        self.found = found

    @classmethod
    def at(
        cls, kind: str, message: str, tok: Token, expected: str | None = None
    ) -> "Diagnostic":
        """Builds a diagnostic positioned at `tok`."""
        return cls(kind, message, tok.line, tok.col, expected=expected, found=tok)

    @property
    def position(self) -> Position:
        return Position(self.line, self.col)

    def __str__(self) -> str:
        return f"line {self.line}, col {self.col}: {self.message}"

    def __repr__(self) -> str:
        return f"Diagnostic({self.kind}, {self.message!r}, line={self.line}, col={self.col})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Diagnostic)
            and self.kind == other.kind
            and self.message == other.message
            and self.line == other.line
            and self.col == other.col
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.message, self.line, self.col))


class ParseErrors(SyntaxError):
    """Raised when a parse call recorded at least one diagnostic.

    Attributes:
        diagnostics (list[Diagnostic]): Every diagnostic, in the order found.
    """

    def __init__(self, diagnostics: list[Diagnostic]):
        self.diagnostics = list(diagnostics)
        super().__init__(self.render())

    def render(self) -> str:
        if len(self.diagnostics) == 1:
            return f"Parse error at {self.diagnostics[0]}"
        lines = ["Parse errors:"]
        for i, diag in enumerate(self.diagnostics, 1):
            lines.append(f"  {i}: {diag}")
        return "\n".join(lines)

    def __len__(self) -> int:
        return len(self.diagnostics)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.diagnostics)


__all__ = ["Diagnostic", "ParseErrors", "describe_token"]
