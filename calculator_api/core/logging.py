"""
Structured logging configuration.

Service loggers accept an ``extra_data`` mapping that ends up as top-level
keys of the JSON log line:

    logger = get_logger(__name__)
    logger.info("Expression evaluated", extra_data={"expression": "2+3"})

Per-session loggers carry the session id on every line:

    log = get_context_logger(__name__, session_id=str(session_id))
    log.debug("Key pressed", extra_data={"key": "7"})
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List

from .config import settings

# Standard LogRecord attributes; anything else on a record is caller data
_RECORD_FIELDS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class StructuredFormatter(logging.Formatter):
    """One JSON object per log line"""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.levelno >= logging.WARNING:
            log_data["location"] = f"{record.module}:{record.funcName}:{record.lineno}"

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data.update(getattr(record, "extra_data", {}))

        # Plain ``extra=`` fields from library loggers
        for key, value in vars(record).items():
            if key not in _RECORD_FIELDS and key != "extra_data":
                log_data.setdefault(key, value)

        return json.dumps(log_data, default=str, ensure_ascii=False)


class TextFormatter(logging.Formatter):
    """Human-readable text log formatter"""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        extra_data = getattr(record, "extra_data", None)
        if extra_data:
            pairs = " ".join(f"{key}={value}" for key, value in extra_data.items())
            text = f"{text} [{pairs}]"
        return text


def _build_handlers(formatter: logging.Formatter, level: int) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if settings.LOG_FILE:
        log_path = Path(settings.LOG_FILE)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(level)
    return handlers


def setup_logging() -> None:
    """Configure the root logger from settings"""
    level = logging.getLevelName(settings.LOG_LEVEL)
    formatter = StructuredFormatter() if settings.LOG_FORMAT == "json" else TextFormatter()

    logging.basicConfig(
        level=level,
        handlers=_build_handlers(formatter, level),
        force=True
    )

    # calclib logs every token and parse at DEBUG
    calclib_level = logging.DEBUG if settings.DEBUG else logging.getLevelName(settings.CALCLIB_LOG_LEVEL)
    logging.getLogger("calclib").setLevel(calclib_level)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


class LoggerAdapter(logging.LoggerAdapter):
    """Logger adapter merging fixed context with per-call ``extra_data``"""

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        extra_data = {**self.extra, **kwargs.pop("extra_data", {})}
        kwargs.setdefault("extra", {})["extra_data"] = extra_data
        return msg, kwargs


def get_logger(name: str) -> LoggerAdapter:
    """Get logger accepting ``extra_data``"""
    return LoggerAdapter(logging.getLogger(name), {})


def get_context_logger(name: str, **context) -> LoggerAdapter:
    """Get logger that adds ``context`` to every line"""
    return LoggerAdapter(logging.getLogger(name), context)
