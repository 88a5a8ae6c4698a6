"""
Cash Card API: Application Configuration
========================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or a .env file),
       validates types and ranges, and exposes a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; invalid values fail the import.
"""

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    The defaults run the service against a private in-memory SQLite
    database, which is what the test suite and local development use.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # Async SQLAlchemy URL: <dialect>+<async driver>://...
    # e.g. sqlite+aiosqlite:///:memory:, postgresql+asyncpg://user:pw@host/db
    database_url: str = Field(
        default="sqlite+aiosqlite:///:memory:",
        description="Async SQLAlchemy connection URL",
    )

    # Pool sizing only applies to server databases; SQLite uses a single
    # shared connection (see database.build_engine).
    db_pool_size: int = Field(default=5, ge=5, le=100)
    db_max_overflow: int = Field(default=10, ge=0, le=50)
    db_pool_pre_ping: bool = Field(default=True)

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Requires a parseable URL whose driver is an asyncio driver."""
        try:
            dialect = make_url(v).get_dialect()
        except ArgumentError as exc:
            # Includes NoSuchModuleError for unknown dialect or driver names
            raise ValueError(f"Invalid database_url '{v}': {exc}") from exc
        if not getattr(dialect, "is_async", False):
            raise ValueError(
                f"database_url '{v}' must name an async driver, "
                "e.g. sqlite+aiosqlite or postgresql+asyncpg"
            )
        return v

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8000, ge=1024, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # DATABASE_URL and database_url both work
    }


# Singleton instance, imported throughout the application
settings = Settings()
