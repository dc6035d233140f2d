"""
Lexer for arithmetic expressions.

The lexer is pull-based: the parser asks for one token at a time and the
lexer only ever looks one character ahead. Once the input is exhausted every
further call returns an EOF token.
"""

import logging
from typing import Iterator

from ..errors import NumberParseError, UnknownCharacterError
from .tokens import Token, TokenType

logger = logging.getLogger(__name__)


# Single-character operators, including the display aliases × and ÷
OPERATORS: dict[str, TokenType] = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.MULTIPLY,
    "/": TokenType.DIVIDE,
    "×": TokenType.MULTIPLY,
    "÷": TokenType.DIVIDE,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "^": TokenType.CARET,
    "%": TokenType.PERCENT,
    "!": TokenType.EXCLAMATION,
}


def is_number_char(ch: str | None) -> bool:
    """ASCII digits and the decimal point start and continue a number."""
    # str.isdigit() would also accept superscripts and other scripts' digits
    return ch is not None and (ch == "." or "0" <= ch <= "9")


class Lexer:
    """
    Splits expression text into tokens on demand.

    Attributes:
        text: The source text
        position: Offset of the current character ``ch``
        read_position: Offset of the next unread character
        ch: The current character, or None at end of input
    """

    def __init__(self, text: str):
        self.text = text
        self.position = 0
        self.read_position = 0
        self.ch: str | None = None
        self._read_char()

    def next_token(self) -> Token:
        """
        Return the next token.

        Returns:
            The next token, or an EOF token once the input is exhausted

        Raises:
            UnknownCharacterError: If the current character is not recognised
            NumberParseError: If a run of digits and dots is not a valid float
        """
        if self.ch is None:
            return Token(TokenType.EOF, pos=self.position)

        start = self.position

        if is_number_char(self.ch):
            return Token(TokenType.NUMBER, self._read_number(), pos=start)

        token_type = OPERATORS.get(self.ch)
        if token_type is None:
            raise UnknownCharacterError(self.ch, start)

        self._read_char()
        return Token(token_type, pos=start)

    def tokens(self) -> Iterator[Token]:
        """Iterate over the remaining tokens, ending with (and including) EOF."""
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                return

    def _read_char(self) -> None:
        if self.read_position >= len(self.text):
            self.ch = None
        else:
            self.ch = self.text[self.read_position]

        self.position = self.read_position
        self.read_position += 1

    def _read_number(self) -> float:
        """Consume the maximal run of digits and dots starting at ``ch``."""
        start = self.position
        while is_number_char(self.ch):
            self._read_char()

        # position now sits on the first character after the literal
        literal = self.text[start:self.position]
        try:
            value = float(literal)
        except ValueError as e:
            raise NumberParseError(literal, start) from e

        logger.debug("Lexed number %r at %d", literal, start)
        return value
