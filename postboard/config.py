"""
PostBoard Backend — Application Configuration
===============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; checked again during app startup.
"""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./postboard.db"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have development defaults. Production deployments are
    expected to override DATABASE_URL and CORS_ORIGINS.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # Any SQLAlchemy async URL: postgresql+asyncpg://... or sqlite+aiosqlite://...
    database_url: str = Field(
        default=DEFAULT_DATABASE_URL,
        description="Async SQLAlchemy connection URL",
    )

    # Pool sizing only applies to server databases; SQLite ignores it.
    db_pool_size: int = Field(default=20, ge=5, le=100)
    db_max_overflow: int = Field(default=10, ge=0, le=50)
    db_pool_pre_ping: bool = Field(default=True)

    # ── Authentication ────────────────────────────────────────────────────
    password_min_length: int = Field(default=8, ge=4, le=128)

    # passlib scheme list; the first entry hashes new passwords.
    password_hash_schemes: List[str] = Field(default=["pbkdf2_sha256"])

    # None means issued tokens never expire and live until logout.
    token_expiration_minutes: Optional[int] = Field(default=None, ge=1)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated URLs
    cors_origins: str = Field(default="http://localhost:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

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

    # ── Rate Limiting ─────────────────────────────────────────────────────
    # Per-IP sliding window, 60 requests per minute by default
    rate_limit_requests: int = Field(default=60, ge=1, le=10000)
    rate_limit_window: int = Field(default=60, ge=1, le=86400)  # seconds

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # DATABASE_URL and database_url both work
    }

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    def validate_required_for_production(self) -> None:
        """
        What:  Validates that critical settings are configured.
        When:  Called during app startup (lifespan).
        How:   Collects every problem and raises one ValueError listing them.
        """
        errors = []
        if self.log_level != "DEBUG" and self.database_url == DEFAULT_DATABASE_URL:
            errors.append(
                "DATABASE_URL is not set; falling back to the local SQLite file "
                f"({DEFAULT_DATABASE_URL})"
            )
        if not self.password_hash_schemes:
            errors.append("PASSWORD_HASH_SCHEMES must name at least one passlib scheme")
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


# Singleton instance, imported throughout the application
settings = Settings()
