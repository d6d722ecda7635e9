"""
Centralized configuration management using Pydantic Settings.

This module provides type-safe configuration management with validation,
loading settings from environment variables and .env files.
"""

from typing import List
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import json


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    """

    # API Configuration
    api_v1_prefix: str = Field(
        default="/api/v1",
        description="API version 1 prefix for all endpoints"
    )
    project_name: str = Field(
        default="Reward Network",
        description="Project name displayed in API docs"
    )

    # Database Configuration
    database_url: str = Field(
        default="sqlite+aiosqlite:///./data/rewards.db",
        description="Database connection URL (SQLite by default, PostgreSQL-ready format)"
    )
    db_create_all: bool = Field(
        default=True,
        description="Create missing tables at startup (disable when migrations own the schema)"
    )
    db_echo: bool = Field(
        default=False,
        description="Log every SQL statement (debug only)"
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Root log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_json: bool = Field(
        default=True,
        description="Emit structured JSON logs instead of plain text"
    )

    # Reward pipeline
    reward_max_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts per reward() call when the account is modified concurrently"
    )
    reward_retry_base_delay: float = Field(
        default=0.05,
        ge=0.0,
        description="First backoff delay in seconds between reward attempts"
    )
    reward_retry_max_delay: float = Field(
        default=1.0,
        ge=0.0,
        description="Upper bound in seconds for the backoff delay"
    )

    # CORS Configuration
    cors_origins: List[str] = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins"
    )

    # Pydantic Settings Configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | List[str]) -> List[str]:
        """
        Parse cors_origins from JSON string or list.

        Supports comma-separated origins for easier .env configuration.
        """
        if isinstance(v, str):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                # Fallback: split by comma if not valid JSON
                return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """
        Validate database URL format.

        Supports SQLite (default) and PostgreSQL.
        """
        if not v or v.strip() == "":
            raise ValueError("DATABASE_URL is required and cannot be empty")

        valid_schemes = ["sqlite", "sqlite+aiosqlite", "postgresql", "postgresql+asyncpg"]
        if not any(v.startswith(scheme + "://") for scheme in valid_schemes):
            raise ValueError(
                f"DATABASE_URL must start with one of: {', '.join(valid_schemes)}. "
                f"Got: {v[:20]}..."
            )
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"LOG_LEVEL must be a standard logging level, got {v}")
        return level

    @model_validator(mode="after")
    def validate_retry_delays(self) -> "Settings":
        if self.reward_retry_max_delay < self.reward_retry_base_delay:
            raise ValueError(
                "REWARD_RETRY_MAX_DELAY must be greater than or equal to "
                "REWARD_RETRY_BASE_DELAY"
            )
        return self

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


# Global settings instance
# Import this instance throughout the application
settings = Settings()
