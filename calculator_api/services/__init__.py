"""Services package"""

from .calculator_service import CalculatorService, get_calculator_service

__all__ = [
    "CalculatorService",
    "get_calculator_service",
]
