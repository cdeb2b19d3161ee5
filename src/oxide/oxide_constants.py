"""
Shared token, operator, and diagnostic tables for the Oxide language.

Token types are plain uppercase strings. The lexer resolves keywords and
single-character symbols through `token_hashmap`; the parser maps operator
token types to AST operator names and binding powers.

Exports:
    - TOKEN_TYPES: every token type the lexer can produce
    - token_hashmap: lexeme -> token type for keywords and symbols
    - BINARY_OPERATORS / UNARY_OPERATORS: token type -> AST operator name
    - BINDING_POWER: binary token type -> precedence level
    - OPERATOR_SYMBOLS: AST operator name -> display symbol
    - DIAGNOSTIC_KINDS: every diagnostic kind the parser can report
"""

NUMBER = "NUMBER"
IDENT = "IDENT"
LET = "LET"
PLUS = "PLUS"
SUB = "SUB"
MULT = "MULT"
DIV = "DIV"
ASSIGN = "ASSIGN"
SEMICOLON = "SEMICOLON"
LPAREN = "LPAREN"
RPAREN = "RPAREN"
LBRACE = "LBRACE"
RBRACE = "RBRACE"
EOF = "EOF"
ILLEGAL = "ILLEGAL"

TOKEN_TYPES: tuple[str, ...] = (
    NUMBER,
    IDENT,
    LET,
    PLUS,
    SUB,
    MULT,
    DIV,
    ASSIGN,
    SEMICOLON,
    LPAREN,
    RPAREN,
    LBRACE,
    RBRACE,
    EOF,
    ILLEGAL,
)

token_hashmap: dict[str, str] = {
    "let": LET,
    "=": ASSIGN,
    "+": PLUS,
    "-": SUB,
    "*": MULT,
    "/": DIV,
    ";": SEMICOLON,
    "(": LPAREN,
    ")": RPAREN,
    "{": LBRACE,
    "}": RBRACE,
}

KEYWORDS: frozenset[str] = frozenset(k for k in token_hashmap if k.isalpha())

# Human-readable names used in diagnostics
TOKEN_DESCRIPTIONS: dict[str, str] = {
    NUMBER: "number",
    IDENT: "identifier",
    LET: "'let'",
    PLUS: "'+'",
    SUB: "'-'",
    MULT: "'*'",
    DIV: "'/'",
    ASSIGN: "'='",
    SEMICOLON: "';'",
    LPAREN: "'('",
    RPAREN: "')'",
    LBRACE: "'{'",
    RBRACE: "'}'",
    EOF: "end of input",
    ILLEGAL: "illegal character",
}

ADD = "Add"
SUBTRACT = "Sub"
MULTIPLY = "Mul"
DIVIDE = "Div"
NEGATE = "Neg"

BINARY_OPERATORS: dict[str, str] = {
    PLUS: ADD,
    SUB: SUBTRACT,
    MULT: MULTIPLY,
    DIV: DIVIDE,
}

UNARY_OPERATORS: dict[str, str] = {SUB: NEGATE}

BINDING_POWER: dict[str, int] = {
    PLUS: 1,
    SUB: 1,
    MULT: 2,
    DIV: 2,
}

OPERATOR_SYMBOLS: dict[str, str] = {
    ADD: "+",
    SUBTRACT: "-",
    MULTIPLY: "*",
    DIVIDE: "/",
    NEGATE: "-",
}

# Tokens that may begin a statement after resynchronization
STATEMENT_STARTERS: frozenset[str] = frozenset({LET, LBRACE})

UNEXPECTED_TOKEN = "UnexpectedToken"
EXPECTED_TOKEN = "ExpectedToken"
ILLEGAL_CHARACTER = "IllegalCharacter"
UNTERMINATED_GROUP = "UnterminatedGroup"
UNTERMINATED_BLOCK = "UnterminatedBlock"
INVALID_NUMBER = "InvalidNumber"
NESTING_TOO_DEEP = "NestingTooDeep"

DIAGNOSTIC_KINDS: tuple[str, ...] = (
    UNEXPECTED_TOKEN,
    EXPECTED_TOKEN,
    ILLEGAL_CHARACTER,
    UNTERMINATED_GROUP,
    UNTERMINATED_BLOCK,
    INVALID_NUMBER,
    NESTING_TOO_DEEP,
)

MAX_NUMBER = 2**63 - 1

__all__ = [
    "BINARY_OPERATORS",
    "BINDING_POWER",
    "DIAGNOSTIC_KINDS",
    "KEYWORDS",
    "OPERATOR_SYMBOLS",
    "STATEMENT_STARTERS",
    "TOKEN_DESCRIPTIONS",
    "TOKEN_TYPES",
    "UNARY_OPERATORS",
    "token_hashmap",
]
