"""
Lexical analyzer for the Oxide language.

This module provides core components for converting raw source code into token streams:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Position: A 1-based (line, column) source location.
    Token: Represents a single token with type, lexeme, and source location.
    Lexer: Converts a CharacterStream into a sequence of tokens.

Features:
    - Skips whitespace (space, tab, carriage return, newline)
    - Recognizes:
        * Identifiers and the `let` keyword
        * Integer numbers
        * Single-character operators and delimiters: = + - * / ; ( ) { }
    - Never raises on malformed input: unknown characters become ILLEGAL tokens

Example:
    >>> lexer = Lexer(CharacterStream("let x = 42;"))
    >>> lexer.next_token()
    Token(LET, let)

Exports:
    - CharacterStream
    - Position
    - Token
    - Lexer
    - tokenize
"""

from collections.abc import Callable, Iterator
from typing import Any, NamedTuple

from oxide.oxide_constants import EOF, IDENT, ILLEGAL, KEYWORDS, NUMBER, token_hashmap

WHITESPACE = " \t\r\n"
DIGITS = "0123456789"


class CharacterStream:
    """
    A utility for reading characters from a string source with line and column tracking.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Raises:
            EOFError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise EOFError(
                f"Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """Returns the character at `offset` without advancing, or "" when out of bounds."""
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Position(NamedTuple):
    line: int
    column: int


class Token:
    """Represents a single lexical token in the Oxide language.

    Tokens are value objects: they compare and hash by all four fields and
    are never modified after the lexer creates them.

    Attributes:
        type (str): The token type (e.g. 'IDENT', 'NUMBER', 'EOF').
        value (str): The lexeme, the exact source text matched.
        line (int): The 1-based line number where the token starts.
        col (int): The 1-based column number where the token starts.
    """

    __slots__ = ("type", "value", "line", "col")

    def __init__(self, type_: str, value: str, line: int = 0, col: int = 0):
        object.__setattr__(self, "type", type_)
        object.__setattr__(self, "value", value)
        object.__setattr__(self, "line", line)
        object.__setattr__(self, "col", col)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"Token is immutable; cannot set {name!r}")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"Token is immutable; cannot delete {name!r}")

    @property
    def position(self) -> Position:
        return Position(self.line, self.col)

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.type == other.type
            and self.value == other.value
            and self.line == other.line
            and self.col == other.col
        )

    def __hash__(self) -> int:
        return hash((self.type, self.value, self.line, self.col))


class Lexer:
    """Lexical analyzer for the Oxide language.

    The Lexer reads a CharacterStream left to right exactly once. Its only
    state is the stream cursor. After the end of input every call to
    `next_token` returns an equal EOF token.

    Iterating a Lexer yields tokens up to, but not including, EOF.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream

    def peek(self) -> str:
        return self.stream.peek()

    def advance(self) -> str:
        return self.stream.next()

    def skip_whitespace(self) -> None:
        while not self.stream.end_of_file() and self.peek() in WHITESPACE:
            self.advance()

    def read_while(self, accept: Callable[[str], bool]) -> str:
        """Consumes the maximal run of characters for which `accept` is true."""
        text = ""
        while not self.stream.end_of_file() and accept(self.peek()):
            text += self.advance()
        return text

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream."""
        self.skip_whitespace()

        line, col = self.stream.line, self.stream.column
        if self.stream.end_of_file():
            return Token(EOF, "EOF", line, col)

        ch = self.peek()

        # 1. Identifier or keyword
        if ch.isascii() and ch.isalpha():
            ident = self.read_while(lambda c: c.isascii() and (c.isalnum() or c == "_"))
            type_ = token_hashmap[ident] if ident in KEYWORDS else IDENT
            return Token(type_, ident, line, col)

        # 2. Number
        if ch in DIGITS:
            return Token(NUMBER, self.read_while(lambda c: c in DIGITS), line, col)

        # 3. Operator or delimiter
        if ch in token_hashmap:
            return Token(token_hashmap[self.advance()], ch, line, col)

        # 4. Anything else is surfaced to the parser
        return Token(ILLEGAL, self.advance(), line, col)

    def __iter__(self) -> Iterator[Token]:
        while True:
            tok = self.next_token()
            if tok.type == EOF:
                return
            yield tok


def tokenize(source: str) -> list[Token]:
    """Lexes `source` completely, returning every token including the final EOF."""
    lexer = Lexer(CharacterStream(source))
    tokens = []
    while True:
        tok = lexer.next_token()
        tokens.append(tok)
        if tok.type == EOF:
            break
    return tokens


__all__ = ["CharacterStream", "Lexer", "Position", "Token", "tokenize"]
