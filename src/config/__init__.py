"""
Configuration Module
====================

Application settings and configuration management using Pydantic.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from functools import lru_cache
from pathlib import Path
from typing import List


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses Pydantic for validation and type safety.
    """

    # ========== Application ==========
    app_name: str = Field(default="citizen-engagement-service", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Root logging level")

    # ========== Server ==========
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, description="Server port", ge=1, le=65535)

    # ========== Database ==========
    database_url: str = Field(
        default="postgresql+asyncpg://localhost:5432/citizen_engagement",
        description="PostgreSQL connection URL (async)"
    )
    db_pool_size: int = Field(default=5, description="Database connection pool size", ge=1)
    db_max_overflow: int = Field(default=10, description="Max overflow connections", ge=0)

    # ========== Categorization ==========
    keywords_path: Path = Field(
        default=Path("categorization_keywords.yaml"),
        description="Path to the keyword lexicon (YAML or JSON)"
    )
    default_language: str = Field(
        default="english",
        description="Lexicon language used when a submission's language is unknown"
    )
    default_category_name: str = Field(
        default="General",
        description="Catch-all category used when no other resolution succeeds"
    )

    # ========== Ticket IDs ==========
    ticket_prefix: str = Field(default="CE", min_length=1, description="Ticket ID prefix")
    ticket_sequence_width: int = Field(
        default=5,
        description="Zero padding of the daily sequence number",
        ge=1,
        le=12
    )
    ticket_max_attempts: int = Field(
        default=5,
        description="Attempts allowed to find an unused ticket ID",
        ge=1,
        le=50
    )

    # ========== Admin Auth ==========
    jwt_secret: str = Field(
        default="dev-insecure-jwt-secret-change-me",
        description="Secret used to sign admin access tokens"
    )
    jwt_algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    access_token_expire_minutes: int = Field(
        default=24 * 60,
        description="Admin access token lifetime",
        ge=1
    )

    # ========== CORS ==========
    cors_origins: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"],
        description="Allowed CORS origins"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is one of allowed values."""
        allowed = {"development", "staging", "production"}
        if v not in allowed:
            raise ValueError(f"environment must be one of {allowed}")
        return v

    @field_validator("default_language")
    @classmethod
    def normalize_language(cls, v: str) -> str:
        return v.strip().lower()


@lru_cache()
def get_settings() -> Settings:
    """Returns cached Settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


# ========== Constants ==========

class Language(str):
    """Languages a citizen can submit in."""
    ENGLISH = "english"
    KINYARWANDA = "kinyarwanda"


class SubmissionStatus(str):
    """Submission lifecycle statuses."""
    RECEIVED = "Received"
    IN_PROGRESS = "In Progress"
    RESOLVED = "Resolved"
    CLOSED = "Closed"


class AdminRole(str):
    """Roles of back-office users."""
    ADMIN = "admin"


class RoutingStrategy(str):
    """How a routing decision was reached."""
    EXPLICIT = "explicit"
    CLASSIFIED = "classified"
    DEFAULT = "default"


# ========== Lists for validation ==========

SUPPORTED_LANGUAGES = [Language.ENGLISH, Language.KINYARWANDA]
VALID_SUBMISSION_STATUSES = [
    SubmissionStatus.RECEIVED, SubmissionStatus.IN_PROGRESS,
    SubmissionStatus.RESOLVED, SubmissionStatus.CLOSED
]
