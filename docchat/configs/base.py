"""
Shared settings for the document chat service.

Every settings class reads the process environment and an optional .env
file in the working directory.

Dependencies: pydantic_settings
System role: Common configuration fields
"""

from pydantic import Field
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Deployment-wide settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(default="development", description="Deployment name")
    debug: bool = Field(default=False, description="Verbose error output")
    log_level: str = Field(default="INFO", description="Root log level passed to configure_logging")
