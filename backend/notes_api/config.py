"""
Notes API — Application Configuration
=======================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or a .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by the application factory, the store connector and the
       documentation publisher.
When:  Loaded once at module import time.

Defaults reproduce the fixed constants the service has always used:
MongoDB at localhost:27017, database "tutor", collection "notes", port 3000.
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every field has a development default, so the service starts with no
    environment at all. Attributes are grouped by concern.
    """

    # ── MongoDB ───────────────────────────────────────────────────────────
    # Format: mongodb://[user:password@]host:port
    mongo_url: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection URL",
    )
    mongo_database: str = Field(default="tutor", min_length=1)
    mongo_collection: str = Field(default="notes", min_length=1)

    # How long the driver waits to find a reachable server before an
    # operation (including the startup ping) fails.
    mongo_timeout_ms: int = Field(default=5000, ge=100, le=60_000)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated list of origins, "*" for any
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=3000, ge=1, le=65535)

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

    @property
    def public_url(self) -> str:
        """Base URL advertised in logs and in the API documentation."""
        return f"http://localhost:{self.backend_port}"

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # MONGO_URL and mongo_url both work
    }


# Singleton instance, imported throughout the application
settings = Settings()
