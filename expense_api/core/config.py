"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here, no scattered magic strings.
"""

import logging
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LEGACY_AUTH_TOKEN = "January 2, 2006"


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        debug: Enable debug mode (exposes /docs). Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        log_json: Emit one JSON object per log line instead of plain text.
        host: Interface the server binds to.
        port: Port the server listens on.
        database_url: SQLAlchemy URL of the expense store.
        database_echo: Echo SQL statements to the log.
        auto_create_schema: Create the expenses table on startup if missing.
        store_backend: "sql" for the relational store, "memory" for a
            process-local store (local runs only, data is lost on exit).
        auth_token: Shared secret expected in the Authorization header.
        rate_limit_enabled: Toggle for the per-client rate limiter.
        rate_limit_default: Default rate limit applied to every route.
        cors_allow_origins: Origins allowed by the CORS middleware.
        shutdown_timeout_seconds: Grace period for in-flight requests on stop.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    project_name: str = "Expense Tracker"
    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    log_json: bool = False

    host: str = "0.0.0.0"
    port: int = 2565

    database_url: str = "sqlite:///./expenses.db"
    database_echo: bool = False
    auto_create_schema: bool = True
    store_backend: Literal["sql", "memory"] = "sql"

    # Legacy constant; override in production.
    auth_token: str = LEGACY_AUTH_TOKEN

    rate_limit_enabled: bool = True
    rate_limit_default: str = "60/minute"
    cors_allow_origins: list[str] = ["*"]
    shutdown_timeout_seconds: int = 5

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value}")
        return level

    @field_validator("port", "shutdown_timeout_seconds")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be positive")
        return value

    @field_validator("auth_token")
    @classmethod
    def _token_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("auth token must not be empty")
        return value


settings = Settings()
