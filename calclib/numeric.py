"""
Numeric semantics for calculator results.

Covers integer/float classification of float64 results, factorial through
the gamma function, and the textual form of a result.
"""

from __future__ import annotations

import math
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

# Largest magnitude still printed as a plain integer
INT64_MAX = 2**63 - 1


def is_integer(value: float | None) -> bool:
    """True if the value has no fractional part (never for None, NaN or inf)."""
    if value is None:
        return False
    return float(value).is_integer()


def is_negative(value: float | None) -> bool:
    if value is None:
        return False
    return value < 0.0


def change_sign(value: float, make_negative: bool) -> float:
    """Return ``-|value|`` or ``|value|``."""
    if make_negative:
        return -abs(value)
    return abs(value)


def calc_factorial(n: int) -> float:
    """
    Factorial of a non-negative integer, accumulated in float64.

    The product saturates to infinity past 170!, the largest factorial
    float64 can hold.

    Args:
        n: Non-negative integer

    Returns:
        n! as a float, or inf
    """
    result = 1.0
    for i in range(2, n + 1):
        result *= i
        if math.isinf(result):
            break
    return result


def gamma(value: float) -> float:
    """Gamma function, saturating to infinity instead of raising."""
    try:
        return math.gamma(value)
    except OverflowError:
        return math.inf


def factorial(value: float | None) -> float | None:
    """
    Factorial extended to real numbers.

    Integer magnitudes use the exact product, anything else ``Γ(|x| + 1)``.
    Negative arguments follow the calculator convention ``(-x)! = -(x!)``.

    Args:
        value: The operand, or None if there is nothing to operate on

    Returns:
        The signed factorial, or None for a None operand
    """
    if value is None:
        return None

    negative = is_negative(value)
    magnitude = abs(value)

    if is_integer(magnitude):
        result = calc_factorial(int(magnitude))
    else:
        result = gamma(magnitude + 1)

    return change_sign(result, negative)


def _scientific(value: float) -> str:
    """Shortest round-trip scientific notation with a bare exponent (1e20)."""
    for digits in range(17):
        text = f"{value:.{digits}e}"
        if float(text) == value:
            break
    mantissa, exponent = text.split("e")
    return f"{mantissa}e{int(exponent)}"


def _positional(value: float) -> str:
    """Shortest round-trip positional notation (0.0000001, never 1e-07)."""
    return format(Decimal(repr(value)), "f")


def format_value(value: float | None) -> str:
    """
    Textual form of a result.

    Examples:
        120.0 -> "120"
        2.5 -> "2.5"
        7.257415615307994e306 -> "7.257415615307994e306"
        nan -> "NaN"
    """
    if value is None or math.isnan(value):
        return "NaN"

    if math.isinf(value):
        return "inf" if value > 0 else "-inf"

    if is_integer(value):
        if abs(value) <= INT64_MAX:
            return str(int(value))
        return _scientific(value)

    return _positional(value)


class EvaluationResult(BaseModel):
    """
    The value of one evaluation.

    Immutable; classification is derived from the value on demand.
    """

    model_config = ConfigDict(frozen=True)

    value: float | None = Field(default=None, description="The numeric value")

    def is_float(self) -> bool:
        return self.value is not None and not self.is_integer()

    def is_integer(self) -> bool:
        """True if the value is integer-valued."""
        return is_integer(self.value)

    def is_int64(self) -> bool:
        """True if the value is integer-valued and fits a signed 64-bit int."""
        return self.is_integer() and abs(self.value) <= INT64_MAX

    def as_int(self) -> int | None:
        if not self.is_integer():
            return None
        return int(self.value)

    def display(self) -> str:
        return format_value(self.value)

    def __str__(self) -> str:
        return self.display()
