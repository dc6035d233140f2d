"""
Recursive descent parser for arithmetic expressions.

The parser climbs operator precedence (Pratt parsing) over a token stream
pulled lazily from the lexer, keeping a two-token window (current and peek).
It handles:
- Binary operators, left associative within a precedence level
- Prefix negation, binding tighter than every binary operator but ^
- Postfix factorial
- Parenthesised groups
- Implicit multiplication: 5(3-1) parses exactly like 5*(3-1)

Malformed or partial input (a trailing operator, an unmatched parenthesis,
an empty string) is not an error: ``parse`` returns None so an interactive
caller can tell "still typing" apart from a real mistake. Lexing errors do
propagate.
"""

import logging

from .ast import Expression, Infix, Number, Prefix, Unary
from .lexer import Lexer
from .tokens import (
    LOWEST,
    MULTIPLY_TOKEN,
    PREFIX,
    Token,
    TokenType,
    precedence,
)

logger = logging.getLogger(__name__)


class Parser:
    """
    Precedence-climbing parser.

    An instance may be reused for independent inputs; ``parse`` resets all
    lexer and lookahead state first. Instances are not safe to share
    between threads.
    """

    def __init__(self):
        self.lexer = Lexer("")
        self.current: Token | None = None
        self.peek: Token | None = None
        self.found_eof = False

    def parse(self, text: str) -> Expression | None:
        """
        Parse expression text to an AST.

        Args:
            text: The expression to parse

        Returns:
            Root expression node, or None if the input is empty or incomplete

        Raises:
            LexError: If the text contains an unknown character or a
                malformed number
        """
        self.lexer = Lexer(text)
        self.current = None
        self.peek = None
        self.found_eof = False
        self.advance()
        self.advance()

        expression = self.parse_expression(LOWEST)

        # Anything short of a clean end is incomplete input
        if not self.found_eof or expression is None:
            # Lex what the parse stopped short of so bad characters still raise
            for _ in self.lexer.tokens():
                pass
            logger.debug("Incomplete expression %r", text)
            return None

        logger.debug("Parsed %r as %r", text, expression)
        return expression

    def advance(self) -> None:
        """Shift the token window by one."""
        self.current = self.peek
        self.peek = self.lexer.next_token()

    def current_is(self, token_type: TokenType) -> bool:
        return self.current is not None and self.current.type == token_type

    def peek_precedence(self) -> int:
        return precedence(self.peek)

    def parse_expression(self, min_precedence: int = LOWEST) -> Expression | None:
        """
        Parse an expression using operator precedence climbing.

        Args:
            min_precedence: Operators must bind tighter than this to be folded
                into the expression being built

        Returns:
            AST node, or None if no expression could be formed
        """
        token = self.current
        if token is None or token.type == TokenType.EOF:
            return None

        if token.type == TokenType.MINUS:
            left = self.parse_prefix()
        elif token.type == TokenType.LPAREN:
            left = self.parse_grouped()
            if not self.current_is(TokenType.RPAREN):
                return None
        elif token.type == TokenType.NUMBER:
            left = Number(token.value)
        else:
            return None

        while min_precedence < self.peek_precedence():
            self.advance()

            if self.current_is(TokenType.EOF):
                self.found_eof = True
                break

            left = self.parse_infix(left)

        return left

    def parse_prefix(self) -> Expression | None:
        """Parse a negation: the operand binds at PREFIX strength."""
        operator = self.current
        self.advance()
        right = self.parse_expression(PREFIX)

        if right is None:
            return None
        return Prefix(operator, right)

    def parse_grouped(self) -> Expression | None:
        """
        Parse ``( expr )`` starting at the opening parenthesis.

        Leaves the closing parenthesis as the current token; the caller checks
        it is really there.
        """
        self.advance()
        expression = self.parse_expression(LOWEST)
        self.advance()
        return expression

    def parse_infix(self, left: Expression | None) -> Expression | None:
        """
        Fold the current operator into the running left-hand expression.

        Args:
            left: The expression parsed so far

        Returns:
            The combined node, or None if either side is missing
        """
        operator = self.current

        # 5(3-1) -> 5 * (3-1)
        if operator.type == TokenType.LPAREN:
            right = self.parse_grouped()
            if not self.current_is(TokenType.RPAREN):
                return None
            if left is None or right is None:
                return None
            return Infix(left, MULTIPLY_TOKEN, right)

        # Postfix factorial takes no right operand
        if operator.type == TokenType.EXCLAMATION:
            if left is None:
                return None
            return Unary(operator, left)

        self.advance()
        right = self.parse_expression(precedence(operator))

        if left is None or right is None:
            return None
        return Infix(left, operator, right)
