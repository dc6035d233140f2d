"""
AST Visitor implementations.

- StringVisitor: Render an AST back to compact infix text
- EvalVisitor: Evaluate an AST to a float64
"""

from ..errors import (
    DivisionByZeroError,
    FactorialComputationError,
    UnsupportedOperatorError,
)
from ..numeric import factorial, format_value, is_integer
from .ast import Expression, Infix, Number, Prefix, Unary
from .tokens import PRECEDENCE, PREFIX, TokenType


class StringVisitor:
    """
    Convert AST to infix text, parenthesising only where needed.

    Examples:
    - Infix(Number(2), '+', Number(3)) → "2+3"
    - Infix(Number(5), '*', Infix(Number(3), '-', Number(1))) → "5*(3-1)"
    - Unary('!', Prefix('-', Number(5))) → "(-5)!"
    """

    def visit_number(self, node: Number) -> str:
        # Integers are written out in full so the text lexes back to the same value
        if is_integer(node.value):
            return str(int(node.value))
        return format_value(node.value)

    def visit_infix(self, node: Infix) -> str:
        left_str = node.left.accept(self)
        right_str = node.right.accept(self)

        op_prec = PRECEDENCE.get(node.operator.type, 0)
        left_prec = self._get_precedence(node.left)
        right_prec = self._get_precedence(node.right)

        if left_prec and left_prec < op_prec:
            left_str = f"({left_str})"

        # Left associative: an equal-precedence right operand needs grouping
        if right_prec and right_prec <= op_prec:
            right_str = f"({right_str})"

        return f"{left_str}{node.operator.symbol}{right_str}"

    def visit_prefix(self, node: Prefix) -> str:
        operand_str = node.right.accept(self)

        if isinstance(node.right, (Infix, Unary)):
            operand_str = f"({operand_str})"

        return f"{node.operator.symbol}{operand_str}"

    def visit_unary(self, node: Unary) -> str:
        operand_str = node.expression.accept(self)

        if isinstance(node.expression, (Infix, Prefix, Unary)):
            operand_str = f"({operand_str})"

        return f"{operand_str}{node.operator.symbol}"

    def _get_precedence(self, node: Expression) -> int:
        """Get binding power of a node for parenthesization."""
        if isinstance(node, Infix):
            return PRECEDENCE.get(node.operator.type, 0)
        if isinstance(node, Unary):
            return PRECEDENCE[TokenType.EXCLAMATION]
        if isinstance(node, Prefix):
            return PREFIX
        return 0


class EvalVisitor:
    """
    Evaluate AST to a float.

    A pure function of the tree: the first error aborts the walk and no
    partial result is produced.
    """

    def visit_number(self, node: Number) -> float:
        return node.value

    def visit_infix(self, node: Infix) -> float:
        left = node.left.accept(self)
        right = node.right.accept(self)
        op = node.operator.type

        if op == TokenType.PLUS:
            return left + right
        if op == TokenType.MINUS:
            return left - right
        if op == TokenType.MULTIPLY:
            return left * right
        if op == TokenType.DIVIDE:
            if right == 0.0:
                raise DivisionByZeroError()
            return left / right

        raise UnsupportedOperatorError(node.operator.symbol)

    def visit_prefix(self, node: Prefix) -> float:
        right = node.right.accept(self)

        if node.operator.type == TokenType.MINUS:
            return -right

        raise UnsupportedOperatorError(node.operator.symbol)

    def visit_unary(self, node: Unary) -> float:
        if node.operator.type != TokenType.EXCLAMATION:
            raise UnsupportedOperatorError(node.operator.symbol)

        result = factorial(node.expression.accept(self))
        if result is None:
            raise FactorialComputationError()
        return result
