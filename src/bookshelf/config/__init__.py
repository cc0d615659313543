"""
Configuration Module
====================

Application settings and configuration management using Pydantic.

Database credentials are mandatory: the service refuses to start without
DB_USER, DB_PASSWORD, DB_HOST, DB_PORT and DB_NAME.
"""

from typing import Annotated, List, Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from bookshelf.core import ConfigurationException


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses Pydantic for validation and type safety.
    """

    # ========== Application ==========
    app_name: str = Field(default="bookshelf", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(default="development", description="Environment name")
    log_level: str = Field(default="INFO", description="Root log level")

    # ========== Server ==========
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8080, description="Server port", ge=1, le=65535)

    # ========== Database ==========
    db_user: str = Field(..., description="Database user")
    db_password: str = Field(..., description="Database password")
    db_host: str = Field(..., description="Database host")
    db_port: int = Field(..., description="Database port", ge=1, le=65535)
    db_name: str = Field(..., description="Database name")
    db_sslmode: str = Field(default="require", description="Transport encryption mode")
    db_pool_size: int = Field(default=5, description="Database connection pool size", ge=1)
    db_max_overflow: int = Field(default=10, description="Max overflow connections", ge=0)
    db_echo: bool = Field(default=False, description="Echo SQL statements")

    # ========== CORS ==========
    cors_origins: Annotated[List[str], NoDecode] = Field(
        default=["*"],
        description="Allowed CORS origins"
    )
    cors_methods: Annotated[List[str], NoDecode] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        description="Allowed CORS methods"
    )
    cors_headers: Annotated[List[str], NoDecode] = Field(
        default=["Content-Type", "Authorization"],
        description="Allowed CORS request headers"
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

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return v.upper()

    @field_validator("cors_origins", "cors_methods", "cors_headers", mode="before")
    @classmethod
    def split_comma_separated(cls, v):
        """Accept "GET,POST" style strings from the environment."""
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v


def load_settings(env_file: Optional[str] = ".env") -> Settings:
    """
    Load settings from the environment and an optional dotenv file.

    Args:
        env_file: Path of the dotenv file to read, or None to read only
            the process environment

    Returns:
        Settings: Validated settings

    Raises:
        ConfigurationException: If a required value is missing or invalid
    """
    try:
        return Settings(_env_file=env_file)
    except ValidationError as e:
        fields = sorted(
            ".".join(str(part) for part in error["loc"]) for error in e.errors()
        )
        raise ConfigurationException(
            "Invalid or missing configuration: " + ", ".join(fields),
            {"fields": fields}
        ) from e
