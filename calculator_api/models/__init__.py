"""Domain models package"""

from .domain import (
    Evaluation,
    Validation,
    SessionRecord,
    SessionView,
)

__all__ = [
    "Evaluation",
    "Validation",
    "SessionRecord",
    "SessionView",
]
