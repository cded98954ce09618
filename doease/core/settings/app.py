"""Application settings for FastAPI configuration."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["development", "staging", "production", "test"]


class AppSettings(BaseSettings):
    """FastAPI application settings.

    Environment variables use APP_ prefix.
    Example: APP_DEBUG=true, APP_TITLE="DoEase API"
    """

    # Service identity
    service_name: str = Field(
        default="doease-service",
        min_length=1,
        max_length=100,
        pattern=r"^[a-z0-9]+(-[a-z0-9]+)*$",
        description="Service name for logging/tracing (lowercase, hyphens allowed)",
    )
    title: str = Field(
        default="DoEase API",
        min_length=1,
        max_length=200,
        description="API title displayed in documentation",
    )
    description: str = Field(
        default="Personal task management with daily streaks and reminders",
        description="API description (supports Markdown)",
    )
    version: str = Field(
        default="1.0.0",
        min_length=1,
        max_length=50,
        pattern=r"^\d+\.\d+\.\d+(-[a-zA-Z0-9]+)?$",
        description="API version (semver format)",
    )
    environment: Environment = Field(
        default="development", description="Environment: development|staging|production|test",
    )
    api_prefix: str = Field(
        default="/api/v1",
        min_length=1,
        max_length=255,
        pattern=r"^/.*$",
        description="Base URL prefix for API routes (e.g., /api/v1)",
    )

    # FastAPI toggles
    debug: bool = Field(default=False, description="Enable debug mode")
    docs_url: str | None = Field(default="/docs", description="Swagger UI path")
    redoc_url: str | None = Field(default="/redoc", description="ReDoc path")
    openapi_url: str | None = Field(default="/openapi.json", description="OpenAPI schema path")
    disable_docs: bool = Field(default=False, description="Disable all API documentation")

    # Server configuration
    host: str = Field(default="0.0.0.0", description="Bind host for uvicorn")  # noqa: S104
    port: int = Field(default=8000, ge=1, le=65535, description="Bind port for uvicorn")

    # Schema management
    create_tables: bool = Field(
        default=True,
        description="Create missing tables on startup (use Alembic migrations in production)",
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )

    @property
    def docs_enabled(self) -> bool:
        """Whether interactive API documentation is served."""
        return not self.disable_docs

    @property
    def is_production(self) -> bool:
        """Whether running in the production environment."""
        return self.environment == "production"

    def get_docs_url(self) -> str | None:
        """Swagger UI path, or None when docs are disabled."""
        return self.docs_url if self.docs_enabled else None

    def get_redoc_url(self) -> str | None:
        """ReDoc path, or None when docs are disabled."""
        return self.redoc_url if self.docs_enabled else None

    def get_openapi_url(self) -> str | None:
        """OpenAPI schema path, or None when docs are disabled."""
        return self.openapi_url if self.docs_enabled else None
