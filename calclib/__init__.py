"""calclib - arithmetic expression interpreter.

Submodules:
- calclib.parser: Lexer, precedence-climbing parser, AST and visitors
- calclib.evaluator: The ``evaluate`` entry point
- calclib.numeric: Result classification, factorial/gamma, formatting
- calclib.validator: Keystroke filter and display substitution
- calclib.session: Headless calculator panel (input, result, history)
- calclib.cli: Command line front end
"""

from .errors import (
    CalcError,
    DivisionByZeroError,
    EvaluationError,
    FactorialComputationError,
    LexError,
    NothingToEvaluateError,
    NumberParseError,
    UnknownCharacterError,
    UnsupportedOperatorError,
)
from .evaluator import evaluate, evaluate_expression
from .numeric import EvaluationResult, calc_factorial
from .validator import validate

__version__ = "0.1.0"

__all__ = [
    "evaluate",
    "evaluate_expression",
    "validate",
    "calc_factorial",
    "EvaluationResult",
    "CalcError",
    "LexError",
    "UnknownCharacterError",
    "NumberParseError",
    "EvaluationError",
    "DivisionByZeroError",
    "UnsupportedOperatorError",
    "FactorialComputationError",
    "NothingToEvaluateError",
]
