"""
Oxide Language Parser

Parses Oxide source tokens into structured abstract syntax trees (ASTs).

This module implements a recursive descent parser with precedence climbing for
binary operators. Tokens are pulled from the lexer one at a time; the parser
holds only the current token, the previously consumed one, and its own
diagnostic accumulator, so every parse call is independent of every other.

Grammar
-------
    program    = statement*
    statement  = letStmt | blockStmt | exprStmt
    letStmt    = "let" IDENTIFIER "=" expression ";"
    blockStmt  = "{" statement* "}"
    exprStmt   = expression ";"
    expression = binary
    binary     = unary ( ("+" | "-" | "*" | "/") unary )*     (precedence climbing)
    unary      = "-" unary | primary
    primary    = NUMBER | IDENTIFIER | "(" expression ")"

`*` and `/` bind tighter than `+` and `-`; all four are left-associative.

Parser Behavior
---------------
- A malformed statement records one `Diagnostic` and the parser resynchronizes
  at the next statement boundary (just after a `;`, or at `let`, `{` or EOF),
  so a single call reports every independent error in the input.
- Nesting of unary chains, groupings, and blocks is capped by
  `ParserConfig.max_depth`; deeper input is reported, never allowed to
  exhaust the interpreter stack.

Entry Points
------------
- `parse_source()`: Parse source text into a `Program`.
- `Parser.parse()`: Parse everything the parser's token stream yields.

Raises
------
ParseErrors
    When at least one diagnostic was recorded. No partial Program is returned.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Protocol

from oxide.oxide_ast import (
    BinaryExpression,
    BlockStatement,
    Expression,
    ExpressionStatement,
    Grouping,
    Identifier,
    LetStatement,
    NumberLiteral,
    Program,
    Statement,
    UnaryExpression,
)
from oxide.oxide_config import ParserConfig
from oxide.oxide_constants import (
    ASSIGN,
    BINARY_OPERATORS,
    BINDING_POWER,
    EOF,
    EXPECTED_TOKEN,
    IDENT,
    ILLEGAL,
    ILLEGAL_CHARACTER,
    INVALID_NUMBER,
    LBRACE,
    LET,
    LPAREN,
    MAX_NUMBER,
    NESTING_TOO_DEEP,
    NUMBER,
    RBRACE,
    RPAREN,
    SEMICOLON,
    STATEMENT_STARTERS,
    TOKEN_DESCRIPTIONS,
    UNARY_OPERATORS,
    UNEXPECTED_TOKEN,
    UNTERMINATED_BLOCK,
    UNTERMINATED_GROUP,
)
from oxide.oxide_diagnostics import Diagnostic, ParseErrors, describe_token
from oxide.oxide_lexer import CharacterStream, Lexer, Token

logger = logging.getLogger(__name__)

class TokenStream(Protocol):  # pragma: no cover
    """Anything that hands out tokens on demand, ending with repeated EOF."""

    def next_token(self) -> Token: ...


class ParseError(Exception):
    """Aborts the statement being parsed.

    Raised inside the parser and caught by the statement loop, which records
    `diagnostic` and resynchronizes. It never escapes `Parser.parse`.

    Attributes:
        diagnostic (Diagnostic): The problem to record.
        open_blocks (int): Blocks still open when the error was raised.
            Recovery skips past their closing `}`.
        open_groups (int): Groupings to skip past as well; only set when
            nesting went too deep.
        missing_terminator (bool): The statement failed at its closing `;`,
            so the offending token may start the next statement.
    """

    def __init__(
        self,
        diagnostic: Diagnostic,
        open_blocks: int = 0,
        open_groups: int = 0,
        missing_terminator: bool = False,
    ) -> None:
        super().__init__(str(diagnostic))
        self.diagnostic = diagnostic
        self.open_blocks = open_blocks
        self.open_groups = open_groups
        self.missing_terminator = missing_terminator


class Parser:
    """
    Oxide Parser Class

    Transforms the tokens produced by a `TokenStream` into a `Program`.

    Attributes
    ----------
    tokens : TokenStream
        Source of tokens, pulled one at a time.
    config : ParserConfig
        Limits for this parse.
    previous : Token | None
        The most recently consumed token.
    consumed : int
        Number of tokens consumed so far.
    depth : int
        Current nesting depth of unary chains, groupings, and blocks.
    open_blocks : int
        Blocks entered but not yet closed.
    open_groups : int
        Groupings entered but not yet closed.
    diagnostics : list[Diagnostic]
        Every diagnostic recorded so far, in source order.
    """

    def __init__(self, tokens: TokenStream, config: ParserConfig | None = None) -> None:
        self.tokens = tokens
        self.config = config or ParserConfig()
        self.previous: Token | None = None
        self.consumed = 0
        self.depth = 0
        self.open_blocks = 0
        self.open_groups = 0
        self.diagnostics: list[Diagnostic] = []
        self.current_token: Token = tokens.next_token()

    @classmethod
    def from_source(cls, source: str, config: ParserConfig | None = None) -> Parser:
        return cls(Lexer(CharacterStream(source)), config)

    # Token handling

    def check(self, *types: str) -> bool:
        return self.current_token.type in types

    def advance(self) -> Token:
        """Consumes the current token and pulls the next one. EOF is never consumed."""
        tok = self.current_token
        if tok.type != EOF:
            self.previous = tok
            self.current_token = self.tokens.next_token()
            self.consumed += 1
        return tok

    def expect(self, type_: str, context: str = "") -> Token:
        if self.check(type_):
            return self.advance()
        err = self.reject(self.current_token, TOKEN_DESCRIPTIONS[type_], context)
        err.missing_terminator = type_ == SEMICOLON
        raise err

    def error(
        self, kind: str, message: str, tok: Token, expected: str | None = None
    ) -> ParseError:
        return ParseError(
            Diagnostic.at(kind, message, tok, expected), open_blocks=self.open_blocks
        )

    def reject(
        self,
        tok: Token,
        expected: str,
        context: str = "",
        kind: str = EXPECTED_TOKEN,
    ) -> ParseError:
        """Builds the error for `tok` appearing where `expected` was required."""
        if tok.type == ILLEGAL:
            return self.error(
                ILLEGAL_CHARACTER, f"illegal character '{tok.value}'", tok, expected
            )
        where = f" {context}" if context else ""
        return self.error(
            kind, f"expected {expected}{where}, found {describe_token(tok)}", tok, expected
        )

    @contextmanager
    def nested(self, tok: Token) -> Iterator[None]:
        """Tracks one level of nesting opened at `tok`, a `-`, `(` or `{`."""
        if self.depth >= self.config.max_depth:
            raise ParseError(
                Diagnostic.at(
                    NESTING_TOO_DEEP,
                    f"nesting exceeds the maximum depth of {self.config.max_depth}",
                    tok,
                ),
                open_blocks=self.open_blocks,
                open_groups=self.open_groups,
            )
        self.depth += 1
        if tok.type == LBRACE:
            self.open_blocks += 1
        elif tok.type == LPAREN:
            self.open_groups += 1
        try:
            yield
        finally:
            self.depth -= 1
            if tok.type == LBRACE:
                self.open_blocks -= 1
            elif tok.type == LPAREN:
                self.open_groups -= 1

    # Program and recovery

    def parse(self) -> Program:
        """Parse every statement in the stream.

        Raises:
            ParseErrors: If any diagnostic was recorded.
        """
        statements: list[Statement] = []
        while not self.check(EOF):
            first = self.current_token
            try:
                statements.append(self.parse_statement())
            except ParseError as e:
                self.record(e.diagnostic)
                self.synchronize(e)
            except RecursionError:
                self.record(
                    Diagnostic.at(
                        NESTING_TOO_DEEP,
                        "nesting exhausted the interpreter stack; parsing stopped",
                        first,
                    )
                )
                self.depth = self.open_blocks = self.open_groups = 0
                while not self.check(EOF):
                    self.advance()

        logger.debug(
            "Parsed %d statement(s) with %d diagnostic(s)",
            len(statements),
            len(self.diagnostics),
        )
        if self.diagnostics:
            raise ParseErrors(self.diagnostics)
        return Program(statements)

    def record(self, diagnostic: Diagnostic) -> None:
        logger.debug("Recorded %s: %s", diagnostic.kind, diagnostic)
        self.diagnostics.append(diagnostic)

    def skip_open(self, blocks: int, groups: int = 0) -> bool:
        """Consumes tokens until `blocks` more `}` and `groups` more `)` have closed.

        Parentheses are only counted while `groups` is non-zero. Returns True
        if any token was consumed.
        """
        consumed = self.consumed
        track_groups = groups > 0
        while (blocks > 0 or groups > 0) and not self.check(EOF):
            tok = self.advance()
            if tok.type == LBRACE:
                blocks += 1
            elif tok.type == RBRACE and blocks:
                blocks -= 1
            elif track_groups and tok.type == LPAREN:
                groups += 1
            elif track_groups and tok.type == RPAREN:
                groups -= 1
        return self.consumed > consumed

    def synchronize(self, error: ParseError) -> None:
        """Discards tokens up to the next statement boundary after `error`.

        Blocks left open are closed first; their final `}` ends the top-level
        statement. Otherwise tokens are dropped through the next `;`, or up to
        a `let` or `{` that begins a new statement.
        """
        skipped = self.skip_open(error.open_blocks, error.open_groups)
        at_boundary = skipped and error.open_blocks > 0
        # The offending token is only a restart point after a missing `;`
        if not at_boundary and (skipped or error.missing_terminator):
            at_boundary = self.check(*STATEMENT_STARTERS)
        while not at_boundary and not self.check(EOF):
            tok = self.advance()
            if tok.type == LBRACE:
                self.skip_open(1)
            at_boundary = tok.type == SEMICOLON or self.check(*STATEMENT_STARTERS)

        tok = self.current_token
        logger.debug("Resynchronized at %s (line %d, col %d)", tok, tok.line, tok.col)

    # Statements

    def parse_statement(self) -> Statement:
        if self.check(LET):
            return self.parse_let()
        if self.check(LBRACE):
            return self.parse_block()
        return self.parse_expression_statement()

    def parse_let(self) -> LetStatement:
        """Parse `let NAME = expression ;`."""
        let_tok = self.expect(LET)
        name_tok = self.expect(IDENT, "after 'let'")
        self.expect(ASSIGN, f"after '{name_tok.value}'")
        value = self.parse_expression()
        self.expect(SEMICOLON, "after let statement")
        name = Identifier(name_tok.value, name_tok.line, name_tok.col)
        return LetStatement(name, value, let_tok.line, let_tok.col)

    def parse_block(self) -> BlockStatement:
        """Parse a `{}`-enclosed sequence of statements."""
        open_tok = self.current_token
        statements: list[Statement] = []
        with self.nested(open_tok):
            self.expect(LBRACE)
            while not self.check(RBRACE):
                if self.check(EOF):
                    raise self.error(
                        UNTERMINATED_BLOCK,
                        f"unterminated block opened at line {open_tok.line}, "
                        f"col {open_tok.col}: expected '}}', found end of input",
                        self.current_token,
                        expected=TOKEN_DESCRIPTIONS[RBRACE],
                    )
                statements.append(self.parse_statement())
            self.advance()
        return BlockStatement(statements, open_tok.line, open_tok.col)

    def parse_expression_statement(self) -> ExpressionStatement:
        expr = self.parse_expression()
        self.expect(SEMICOLON, "after expression")
        return ExpressionStatement(expr, expr.line, expr.col)

    # Expressions

    def parse_expression(self) -> Expression:
        return self.parse_binary()

    def parse_binary(self, min_power: int = 1) -> Expression:
        """Precedence climbing over `BINDING_POWER`.

        The right operand is parsed one level tighter than its operator, which
        makes every level left-associative.
        """
        left = self.parse_unary()
        while BINDING_POWER.get(self.current_token.type, 0) >= min_power:
            op_tok = self.advance()
            right = self.parse_binary(BINDING_POWER[op_tok.type] + 1)
            left = BinaryExpression(
                left, BINARY_OPERATORS[op_tok.type], right, left.line, left.col
            )
        return left

    def parse_unary(self) -> Expression:
        tok = self.current_token
        if tok.type not in UNARY_OPERATORS:
            return self.parse_primary()
        with self.nested(tok):
            self.advance()
            operand = self.parse_unary()
        return UnaryExpression(UNARY_OPERATORS[tok.type], operand, tok.line, tok.col)

    def parse_primary(self) -> Expression:
        tok = self.current_token

        if tok.type == NUMBER:
            self.advance()
            value = int(tok.value)
            if value > MAX_NUMBER:
                raise self.error(
                    INVALID_NUMBER,
                    f"number literal {tok.value} does not fit in 64 bits",
                    tok,
                )
            return NumberLiteral(value, tok.line, tok.col)

        if tok.type == IDENT:
            self.advance()
            return Identifier(tok.value, tok.line, tok.col)

        if tok.type == LPAREN:
            return self.parse_grouping()

        raise self.reject(tok, "expression", kind=UNEXPECTED_TOKEN)

    def parse_grouping(self) -> Grouping:
        open_tok = self.current_token
        with self.nested(open_tok):
            self.advance()
            inner = self.parse_expression()
            closing = self.current_token
            if closing.type == EOF:
                raise self.error(
                    UNTERMINATED_GROUP,
                    f"unterminated group opened at line {open_tok.line}, "
                    f"col {open_tok.col}: expected ')', found end of input",
                    closing,
                    expected=TOKEN_DESCRIPTIONS[RPAREN],
                )
            self.expect(RPAREN, "to close group")
        return Grouping(inner, open_tok.line, open_tok.col)


def parse_source(source: str, config: ParserConfig | None = None) -> Program:
    """Parse Oxide source text into a Program.

    Args:
        source: The complete source text.
        config: Parse limits; defaults to `ParserConfig()`.

    Returns:
        The Program, with one entry per top-level statement in source order.

    Raises:
        ParseErrors: Carrying every diagnostic, in order, if the text is malformed.
    """
    return Parser.from_source(source, config).parse()


__all__ = ["ParseError", "Parser", "TokenStream", "parse_source"]
