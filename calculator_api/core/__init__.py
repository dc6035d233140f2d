"""Core utilities package"""

from .config import settings, get_settings
from .logging import setup_logging, get_logger, get_context_logger
from .errors import (
    CalculatorAPIError,
    SessionNotFoundError,
    SessionLimitError,
    HistoryEntryNotFoundError,
    InvalidKeyError,
    register_error_handlers,
)

__all__ = [
    "settings",
    "get_settings",
    "setup_logging",
    "get_logger",
    "get_context_logger",
    "CalculatorAPIError",
    "SessionNotFoundError",
    "SessionLimitError",
    "HistoryEntryNotFoundError",
    "InvalidKeyError",
    "register_error_handlers",
]
