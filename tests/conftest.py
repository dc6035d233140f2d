"""
Shared pytest fixtures and helpers for calclib tests.

This module provides:
- Fresh parser and session fixtures
- AST construction shorthands for expected trees
- Helpers for checking pydantic result models
"""

import pytest
from pydantic import BaseModel

from calclib.parser import Infix, Number, Parser, Prefix, Token, TokenType, Unary
from calclib.session import CalculatorSession


@pytest.fixture
def parser() -> Parser:
    """A fresh parser instance."""
    return Parser()


@pytest.fixture
def session() -> CalculatorSession:
    """A fresh calculator session with unlimited history."""
    return CalculatorSession()


@pytest.fixture
def ast():
    """Shorthands for building expected expression trees."""
    class _Builder:
        @staticmethod
        def num(value):
            return Number(value)

        @staticmethod
        def infix(left, op, right):
            return Infix(_wrap(left), Token(_OPS[op]), _wrap(right))

        @staticmethod
        def neg(right):
            return Prefix(Token(TokenType.MINUS), _wrap(right))

        @staticmethod
        def fact(expression):
            return Unary(Token(TokenType.EXCLAMATION), _wrap(expression))

    return _Builder()


_OPS = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.MULTIPLY,
    "/": TokenType.DIVIDE,
    "^": TokenType.CARET,
    "%": TokenType.PERCENT,
}


def _wrap(node):
    if isinstance(node, (int, float)):
        return Number(node)
    return node


@pytest.fixture
def assert_serializable():
    """Helper to assert that a model can be dumped and rebuilt unchanged."""
    def _assert_serialization(model: BaseModel) -> BaseModel:
        serialized = model.model_dump()
        reconstructed = type(model)(**serialized)
        assert reconstructed == model
        return reconstructed

    return _assert_serialization
