"""
Abstract Syntax Tree (AST) node definitions for arithmetic expressions.

The tree is built fresh by every parse; each node exclusively owns its
children. The node set is closed: Number, Infix, Prefix and Unary.
Operations over the tree (evaluation, rendering) are visitors.
"""

from abc import ABC, abstractmethod
from typing import Any, Protocol

from .tokens import Token


class ExpressionVisitor(Protocol):
    """Visitor protocol for traversing expression nodes."""

    def visit_number(self, node: "Number") -> Any:
        ...

    def visit_infix(self, node: "Infix") -> Any:
        ...

    def visit_prefix(self, node: "Prefix") -> Any:
        ...

    def visit_unary(self, node: "Unary") -> Any:
        ...


class Expression(ABC):
    """Base class for all expression nodes."""

    @abstractmethod
    def accept(self, visitor: ExpressionVisitor) -> Any:
        """Accept a visitor for traversal."""
        pass

    @abstractmethod
    def __repr__(self) -> str:
        pass


class Number(Expression):
    """
    A numeric literal.

    Examples: 42, 3.14, .5
    """

    def __init__(self, value: float):
        self.value = float(value)

    def accept(self, visitor: ExpressionVisitor) -> Any:
        return visitor.visit_number(self)

    def __repr__(self) -> str:
        return f"Number({self.value})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Number) and self.value == other.value


class Infix(Expression):
    """
    A binary operation.

    Examples: 2 + 3, 6 * 7, 5(3-1) (implicit multiplication)
    """

    def __init__(self, left: Expression, operator: Token, right: Expression):
        self.left = left
        self.operator = operator
        self.right = right

    def accept(self, visitor: ExpressionVisitor) -> Any:
        return visitor.visit_infix(self)

    def __repr__(self) -> str:
        return f"Infix({self.left!r}, '{self.operator.symbol}', {self.right!r})"

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, Infix)
            and self.left == other.left
            and self.operator == other.operator
            and self.right == other.right
        )


class Prefix(Expression):
    """
    A prefix operation. Only negation is evaluable.

    Examples: -5, -(2+3)
    """

    def __init__(self, operator: Token, right: Expression):
        self.operator = operator
        self.right = right

    def accept(self, visitor: ExpressionVisitor) -> Any:
        return visitor.visit_prefix(self)

    def __repr__(self) -> str:
        return f"Prefix('{self.operator.symbol}', {self.right!r})"

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, Prefix)
            and self.operator == other.operator
            and self.right == other.right
        )


class Unary(Expression):
    """
    A postfix operation. Only factorial is evaluable.

    Examples: 5!, 2.3!
    """

    def __init__(self, operator: Token, expression: Expression):
        self.operator = operator
        self.expression = expression

    def accept(self, visitor: ExpressionVisitor) -> Any:
        return visitor.visit_unary(self)

    def __repr__(self) -> str:
        return f"Unary('{self.operator.symbol}', {self.expression!r})"

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, Unary)
            and self.operator == other.operator
            and self.expression == other.expression
        )
