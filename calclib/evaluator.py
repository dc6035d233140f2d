"""
Expression evaluation entry point.

``evaluate`` is the single call the calculator front ends make: it parses
the text with a fresh parser, walks the tree and returns the result.
Each call is independent and keeps no state between calls.
"""

import logging

from .errors import NothingToEvaluateError
from .numeric import EvaluationResult
from .parser import Expression, Parser
from .parser.visitors import EvalVisitor

logger = logging.getLogger(__name__)


def evaluate_expression(expression: Expression) -> float:
    """
    Evaluate an already parsed expression.

    Raises:
        EvaluationError: On division by zero, an unsupported operator or a
            failed factorial
    """
    return expression.accept(EvalVisitor())


def evaluate(text: str) -> EvaluationResult:
    """
    Evaluate an arithmetic expression.

    Args:
        text: Expression text using ASCII operators (× and ÷ are accepted too)

    Returns:
        The evaluation result

    Raises:
        NothingToEvaluateError: If the text is empty or incomplete
        LexError: If the text contains an unknown character or bad number
        EvaluationError: If the expression cannot be evaluated
    """
    expression = Parser().parse(text)
    if expression is None:
        raise NothingToEvaluateError(text)

    result = EvaluationResult(value=evaluate_expression(expression))
    logger.debug("Evaluated %r to %s", text, result.display())
    return result
