"""
Centralized configuration management using pydantic-settings.
This module provides a single source of truth for all application configuration.
"""

import os

from dotenv import load_dotenv
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from taskboard.utils.logger import setup_logger

load_dotenv(override=True)


logger = setup_logger("core_config")

DEFAULT_SECRET_KEY = "your-secret-key-change-this-in-production"


class Settings(BaseSettings):
    """
    Application settings managed by pydantic-settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        env_prefix="",
    )

    # ===== Database Configuration =====
    taskboard_schema: str = Field(
        default="taskboard",
        alias="TASKBOARD_SCHEMA",
        description="Database schema holding the task and user tables",
    )

    app_database_url: str | None = Field(
        default=None,
        alias="TASKBOARD_DATABASE_URL",
        description="Application database URL (postgresql:// or postgresql+asyncpg://)",
    )

    db_pool_size: int = Field(
        default=10, alias="DB_POOL_SIZE", description="SQLAlchemy connection pool size"
    )

    db_retry_attempts: int = Field(
        default=3,
        alias="DB_RETRY_ATTEMPTS",
        description="Attempts per unit of work when the connection drops",
    )

    db_retry_delay_seconds: float = Field(
        default=1.0,
        alias="DB_RETRY_DELAY_SECONDS",
        description="Initial delay between connection retries, doubled on each attempt",
    )

    # ===== Security Configuration =====
    secret_key: str = Field(
        default=DEFAULT_SECRET_KEY,
        alias="SECRET_KEY",
        description="Key used to sign session, CSRF and flash tokens",
    )

    access_token_expire_minutes: int = Field(
        default=1440,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
        description="Lifetime of a login session in minutes",
    )

    csrf_token_expire_minutes: int = Field(
        default=60,
        alias="CSRF_TOKEN_EXPIRE_MINUTES",
        description="Lifetime of a CSRF token issued with a form",
    )

    bcrypt_rounds: int = Field(
        default=12,
        ge=4,
        le=31,
        alias="BCRYPT_ROUNDS",
        description="bcrypt cost factor; stored hashes with another cost are upgraded at login",
    )

    session_cookie_secure: bool = Field(
        default=False,
        alias="SESSION_COOKIE_SECURE",
        description="Send the session, flash and CSRF cookies over HTTPS only",
    )

    # ===== Server Configuration =====
    server_host: str = Field(
        default="0.0.0.0", alias="SERVER_HOST", description="Server host address"
    )

    server_port: int = Field(
        default=8080, alias="SERVER_PORT", description="Server port number"
    )

    server_workers: int = Field(
        default=1, alias="SERVER_WORKERS", description="Number of uvicorn workers"
    )

    # ===== CORS Configuration =====
    cors_allow_origins: list[str] = Field(
        default_factory=lambda: [
            "http://localhost:5173",
            "http://localhost:3000",
            "http://127.0.0.1:5173",
        ],
        alias="CORS_ALLOW_ORIGINS",
        description="CORS allowed origins",
    )

    cors_allow_credentials: bool = Field(
        default=True,
        alias="CORS_ALLOW_CREDENTIALS",
        description="Whether to allow credentials in CORS requests",
    )

    cors_allow_methods: list[str] = Field(
        default_factory=lambda: ["*"],
        alias="CORS_ALLOW_METHODS",
        description="CORS allowed methods",
    )

    cors_allow_headers: list[str] = Field(
        default_factory=lambda: ["*"],
        alias="CORS_ALLOW_HEADERS",
        description="CORS allowed headers",
    )

    # User-facing hint for database connection errors
    db_unavailable_hint: str = os.getenv(
        "DB_UNAVAILABLE_HINT",
        "Database connection failed. The server may be offline or network connectivity is down.",
    )

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Validate settings and log warnings for missing critical configurations."""
        if not self.app_database_url:
            logger.warning("TASKBOARD_DATABASE_URL environment variable not set.")

        if self.secret_key == DEFAULT_SECRET_KEY:
            logger.warning(
                "SECRET_KEY is not set; sessions are signed with the default key."
            )

        logger.debug(f"Using database schema: {self.taskboard_schema}")
        return self

    @property
    def schema_name(self) -> str:
        return self.taskboard_schema


# Global settings instance
settings = Settings()

SCHEMA_NAME = settings.schema_name
