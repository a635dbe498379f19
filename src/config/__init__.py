"""
Configuration Module
====================

Application settings loaded from the ``./env`` file and the process
environment using Pydantic.

Settings are frozen once built. The entry point loads them a single time
and passes the instance down explicitly.
"""

from pathlib import Path
from typing import List, Union

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.core import ConfigurationException


DEFAULT_ENV_FILE = Path("./env")
DEFAULT_PORT = 8000


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Real environment variables win over values in the env file.
    """

    # ========== Application ==========
    app_name: str = Field(default="backend", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Root log level")

    # ========== Server ==========
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=DEFAULT_PORT, description="Server port", ge=1, le=65535)

    # ========== Database ==========
    database_url: str = Field(
        default="postgresql+asyncpg://localhost:5432/app",
        description="Database connection URL (async driver)"
    )
    db_pool_size: int = Field(default=5, description="Database connection pool size", ge=1)
    db_max_overflow: int = Field(default=10, description="Max overflow connections", ge=0)

    # ========== CORS ==========
    cors_origins: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:8080"],
        description="Allowed CORS origins"
    )

    model_config = SettingsConfigDict(
        env_file=DEFAULT_ENV_FILE,
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
        frozen=True,
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
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {v}")
        return level


def load_settings(env_file: Union[str, Path, None] = DEFAULT_ENV_FILE) -> Settings:
    """
    Build a fresh Settings instance from ``env_file`` and the environment.

    A missing env file is not an error; defaults apply.

    Raises:
        ConfigurationException: If a value fails validation
    """
    try:
        return Settings(_env_file=env_file)
    except ValidationError as e:
        raise ConfigurationException(
            "Invalid configuration",
            details={
                "env_file": str(env_file) if env_file is not None else None,
                "errors": [
                    {"field": ".".join(str(p) for p in err["loc"]), "error": err["msg"]}
                    for err in e.errors()
                ],
            },
        ) from e


__all__ = [
    "DEFAULT_ENV_FILE",
    "DEFAULT_PORT",
    "Settings",
    "load_settings",
]
