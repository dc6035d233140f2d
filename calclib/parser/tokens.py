"""
Token model for arithmetic expressions.

Defines the closed set of lexical symbols produced by the lexer and the
binding-power table the parser climbs over.
"""

from dataclasses import dataclass, field
from enum import Enum, auto


class TokenType(Enum):
    """Token types for arithmetic expressions."""

    # Literals
    NUMBER = auto()

    # Operators
    PLUS = auto()
    MINUS = auto()
    MULTIPLY = auto()
    DIVIDE = auto()
    CARET = auto()  # ^ (lexed, never evaluated)
    PERCENT = auto()  # % (lexed, never evaluated)
    EXCLAMATION = auto()  # ! (postfix factorial)

    # Grouping
    LPAREN = auto()
    RPAREN = auto()

    # Special
    EOF = auto()


# Binding powers, lowest first
LOWEST = 0
EOF = 1
ADD = 10
MULTIPLY = 20
PREFIX = 30
EXPONENT = 40
PARENTHETICAL = 50

PRECEDENCE: dict[TokenType, int] = {
    TokenType.EOF: EOF,
    TokenType.PLUS: ADD,
    TokenType.MINUS: ADD,
    TokenType.MULTIPLY: MULTIPLY,
    TokenType.DIVIDE: MULTIPLY,
    TokenType.PERCENT: MULTIPLY,
    TokenType.EXCLAMATION: MULTIPLY,
    TokenType.CARET: EXPONENT,
    TokenType.LPAREN: PARENTHETICAL,
}

SYMBOLS: dict[TokenType, str] = {
    TokenType.PLUS: "+",
    TokenType.MINUS: "-",
    TokenType.MULTIPLY: "*",
    TokenType.DIVIDE: "/",
    TokenType.CARET: "^",
    TokenType.PERCENT: "%",
    TokenType.EXCLAMATION: "!",
    TokenType.LPAREN: "(",
    TokenType.RPAREN: ")",
    TokenType.EOF: "",
}


@dataclass(frozen=True)
class Token:
    """
    A single lexical symbol.

    Attributes:
        type: The token type
        value: The parsed literal for NUMBER tokens, otherwise None
        pos: Offset in the source text (not part of equality)
    """

    type: TokenType
    value: float | None = None
    pos: int = field(default=-1, compare=False)

    @property
    def precedence(self) -> int:
        return precedence(self)

    @property
    def symbol(self) -> str:
        if self.type == TokenType.NUMBER:
            return repr(self.value)
        return SYMBOLS[self.type]

    def __repr__(self) -> str:
        if self.type == TokenType.NUMBER:
            return f"Token({self.type.name}, {self.value!r})"
        return f"Token({self.type.name})"


def precedence(token: Token | None) -> int:
    """Binding power of a token; anything outside the table binds LOWEST."""
    if token is None:
        return LOWEST
    return PRECEDENCE.get(token.type, LOWEST)


# Tokens without payload are interchangeable, so share one instance per type
PLUS_TOKEN = Token(TokenType.PLUS)
MINUS_TOKEN = Token(TokenType.MINUS)
MULTIPLY_TOKEN = Token(TokenType.MULTIPLY)
DIVIDE_TOKEN = Token(TokenType.DIVIDE)
EXCLAMATION_TOKEN = Token(TokenType.EXCLAMATION)
EOF_TOKEN = Token(TokenType.EOF)
