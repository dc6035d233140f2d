"""
Application configuration.

Settings are read from the environment (or a ``.env`` file); names are
case sensitive, e.g. ``HISTORY_LIMIT=20 calculator-api``.
"""

import logging
from functools import lru_cache
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings

LOG_FORMATS = ("json", "text")


class Settings(BaseSettings):
    """Calculator service settings"""

    # Service
    APP_NAME: str = "Calculator API"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"  # development, staging, production

    # Server
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000

    # CORS
    CORS_ORIGINS: list[str] = ["http://localhost:3000", "http://localhost:5173"]
    CORS_ALLOW_CREDENTIALS: bool = True
    CORS_ALLOW_METHODS: list[str] = ["GET", "POST", "DELETE"]
    CORS_ALLOW_HEADERS: list[str] = ["*"]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"
    LOG_FILE: Optional[str] = None
    CALCLIB_LOG_LEVEL: str = "WARNING"  # lexer/parser/evaluator loggers

    # Calculator
    MAX_EXPRESSION_LENGTH: int = 1000
    HISTORY_LIMIT: Optional[int] = 100  # per session, None = unlimited
    MAX_SESSIONS: int = 1000
    SESSION_TTL_SECONDS: Optional[int] = 3600  # idle sessions older than this are dropped, None = never

    @field_validator("LOG_LEVEL", "CALCLIB_LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        if v not in LOG_FORMATS:
            raise ValueError(f"LOG_FORMAT must be one of {', '.join(LOG_FORMATS)}")
        return v

    @field_validator("HISTORY_LIMIT")
    @classmethod
    def validate_history_limit(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 0:
            raise ValueError("HISTORY_LIMIT must not be negative")
        return v

    @field_validator("SESSION_TTL_SECONDS")
    @classmethod
    def validate_session_ttl(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v <= 0:
            raise ValueError("SESSION_TTL_SECONDS must be positive")
        return v

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
