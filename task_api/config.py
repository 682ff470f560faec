"""
Application configuration using Pydantic Settings.
Loads environment variables and provides type-safe configuration.
"""

from typing import List, Optional
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from pathlib import Path

# Get the base directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    environment: str = Field(default="development", description="Current environment")
    debug: bool = Field(default=False, description="Debug mode")

    # API Configuration
    api_title: str = Field(default="Task Service")
    api_version: str = Field(default="1.0.0")
    api_prefix: str = Field(default="/api")
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080)

    # Database
    database_url: str = Field(
        default=f"sqlite:///{BASE_DIR / 'tasks.db'}",
        description="SQLAlchemy database URL"
    )

    # Remote services
    user_service_url: str = Field(default="http://localhost:8081", description="Base URL of the user service")
    project_service_url: str = Field(default="http://localhost:8081", description="Base URL of the project service")
    remote_connect_timeout: float = Field(default=5.0, description="Connect timeout in seconds")
    remote_read_timeout: float = Field(default=10.0, description="Read timeout in seconds")

    # JWT Configuration
    jwt_algorithm: str = Field(default="RS256")
    jwt_public_key: Optional[str] = Field(default=None, description="PEM public key for RS*/ES* tokens")
    jwt_secret_key: str = Field(default="development-secret-key-change-in-production", description="Shared secret for HS* tokens")
    jwt_user_id_claim: str = Field(default="userId")
    jwt_roles_claim: str = Field(default="scope")

    # CORS
    cors_origins: str | List[str] = Field(
        default="http://localhost:3000,http://localhost:5173"
    )
    cors_allow_credentials: bool = Field(default=True)
    cors_allow_methods: List[str] = Field(default=["*"])
    cors_allow_headers: List[str] = Field(default=["*"])

    # Pagination
    default_page_size: int = Field(default=20)
    max_page_size: int = Field(default=100)

    # Sentry (Optional)
    sentry_dsn: Optional[str] = Field(default=None)
    sentry_traces_sample_rate: float = Field(default=0.1)

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from comma-separated string or list."""
        if v is None:
            return []
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def remote_timeout(self) -> tuple:
        """(connect, read) timeout pair for outbound HTTP calls."""
        return (self.remote_connect_timeout, self.remote_read_timeout)

    @property
    def jwt_verification_key(self) -> str:
        """Key used to verify inbound bearer tokens."""
        if self.jwt_algorithm.upper().startswith("HS"):
            return self.jwt_secret_key
        return self.jwt_public_key or ""

    def validate_environment(self) -> None:
        """Validate that all required environment variables are set."""
        required_vars = [
            "user_service_url",
            "project_service_url",
        ]
        if not self.jwt_algorithm.upper().startswith("HS"):
            required_vars.append("jwt_public_key")

        missing_vars = []
        for var in required_vars:
            if not getattr(self, var, None):
                missing_vars.append(var.upper())

        if missing_vars:
            raise ValueError(
                f"Missing required environment variables: {', '.join(missing_vars)}"
            )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Use this function to get settings throughout the application.
    """
    settings = Settings()

    # Validate environment in production
    if settings.is_production:
        settings.validate_environment()

    return settings


# Create a global settings instance
settings = get_settings()
