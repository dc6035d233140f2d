"""
Calculator exceptions.

Every failure of a single evaluation is reported as a subclass of CalcError.
The string form of an error is the message shown to the user in place of a
result; ``code`` is a stable identifier for programmatic callers.
"""

from typing import Any, Dict, Optional


class CalcError(Exception):
    """Base exception for calculator errors"""

    code = "calc_error"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# Lexing

class LexError(CalcError):
    """Raised when the input cannot be split into tokens"""

    code = "lex_error"


class UnknownCharacterError(LexError):
    """Raised for a character outside the operator/digit set"""

    code = "unknown_character"

    def __init__(self, character: str, position: int):
        self.character = character
        self.position = position
        super().__init__(
            message=f"Unknown character: {character}",
            details={"character": character, "position": position}
        )


class NumberParseError(LexError):
    """Raised when a numeric literal is not a valid float"""

    code = "failed_to_parse_number"

    def __init__(self, text: str, position: int):
        self.text = text
        self.position = position
        super().__init__(
            message="Failed to parse number",
            details={"text": text, "position": position}
        )


# Evaluation

class EvaluationError(CalcError):
    """Raised when a parsed expression cannot be evaluated"""

    code = "evaluation_error"


class DivisionByZeroError(EvaluationError):
    """Raised when the right operand of a division is exactly zero"""

    code = "division_by_zero"

    def __init__(self):
        super().__init__(message="Division by zero")


class UnsupportedOperatorError(EvaluationError):
    """Raised when an operator has no meaning in its syntactic position"""

    code = "unsupported_operator"

    def __init__(self, operator: str):
        self.operator = operator
        super().__init__(
            message="Unsupported operator",
            details={"operator": operator}
        )


class FactorialComputationError(EvaluationError):
    """Raised when the factorial step has no value to operate on"""

    code = "factorial_computation_failed"

    def __init__(self):
        super().__init__(message="Factorial computation failed")


class NothingToEvaluateError(CalcError):
    """Raised for empty or incomplete input"""

    code = "nothing_to_evaluate"

    def __init__(self, text: str = ""):
        super().__init__(
            message="No expression to evaluate",
            details={"input": text}
        )
