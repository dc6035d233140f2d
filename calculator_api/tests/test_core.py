"""
Tests for core utilities.

Settings validation, log formatting and the error envelope.
"""

import json
import logging

import pytest
from pydantic import ValidationError

from calclib.errors import DivisionByZeroError, NothingToEvaluateError
from calculator_api.core.config import Settings
from calculator_api.core.errors import calc_error_status, error_body
from calculator_api.core.logging import (
    StructuredFormatter,
    TextFormatter,
    get_context_logger,
)


def make_record(message: str, **extra) -> logging.LogRecord:
    record = logging.makeLogRecord({
        "name": "calculator_api.test",
        "levelno": logging.INFO,
        "levelname": "INFO",
        "msg": message,
    })
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_settings_defaults():
    """Test default settings"""
    settings = Settings()

    assert settings.APP_NAME == "Calculator API"
    assert settings.LOG_FORMAT in ("json", "text")


def test_settings_normalizes_log_level():
    """Test log levels are upper-cased"""
    assert Settings(LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"


@pytest.mark.parametrize("field,value", [
    ("LOG_LEVEL", "chatty"),
    ("LOG_FORMAT", "xml"),
    ("HISTORY_LIMIT", -1),
    ("SESSION_TTL_SECONDS", 0),
])
def test_settings_rejects_bad_values(field, value):
    """Test invalid settings are refused"""
    with pytest.raises(ValidationError):
        Settings(**{field: value})


def test_structured_formatter_includes_extra_data():
    """Test extra_data becomes top-level JSON keys"""
    record = make_record("Session created", extra_data={"session_id": "abc"})

    data = json.loads(StructuredFormatter().format(record))

    assert data["message"] == "Session created"
    assert data["level"] == "INFO"
    assert data["session_id"] == "abc"
    assert "location" not in data


def test_structured_formatter_keeps_unicode():
    """Test display operators are written as-is"""
    record = make_record("Key pressed", extra_data={"key": "×"})

    assert '"key": "×"' in StructuredFormatter().format(record)


def test_text_formatter_appends_extra_data():
    """Test extra_data is appended as key=value pairs"""
    record = make_record("Text typed", extra_data={"accepted": True})

    assert TextFormatter().format(record).endswith("Text typed [accepted=True]")


def test_context_logger_adds_context(caplog):
    """Test context loggers attach their context to every record"""
    log = get_context_logger("calculator_api.test", session_id="abc")

    with caplog.at_level(logging.INFO, logger="calculator_api.test"):
        log.info("Key pressed", extra_data={"key": "7"})

    assert caplog.records[-1].extra_data == {"session_id": "abc", "key": "7"}


def test_calc_error_status():
    """Test HTTP status of calculator errors"""
    assert calc_error_status(NothingToEvaluateError()) == 400
    assert calc_error_status(DivisionByZeroError()) == 422


def test_error_body_omits_empty_fields():
    """Test code and details are only present when given"""
    assert error_body("HTTPException", "Not Found") == {
        "error": {"type": "HTTPException", "message": "Not Found"}
    }
    assert error_body("X", "m", code="c", details={"a": 1})["error"]["details"] == {"a": 1}
