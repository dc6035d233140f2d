"""
Calculator parser package.

Lexing, AST construction and tree visitors for arithmetic expressions.
"""

from .ast import Expression, ExpressionVisitor, Infix, Number, Prefix, Unary
from .lexer import Lexer
from .parser import Parser
from .tokens import Token, TokenType, precedence
from .visitors import EvalVisitor, StringVisitor

__all__ = [
    "Expression",
    "ExpressionVisitor",
    "Number",
    "Infix",
    "Prefix",
    "Unary",
    "Token",
    "TokenType",
    "precedence",
    "Lexer",
    "Parser",
    "EvalVisitor",
    "StringVisitor",
]
