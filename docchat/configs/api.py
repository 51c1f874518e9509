"""
HTTP server configuration.

Route prefix, bind address, and CORS settings.

Dependencies: pydantic_settings
System role: API server configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ApiSettings(BaseSettings):
    """FastAPI/uvicorn settings."""

    model_config = SettingsConfigDict(
        env_prefix="API_",
        case_sensitive=False,
        extra="ignore",
    )

    prefix: str = Field(default="/api/chatbot", description="Mount point for chatbot routes")
    host: str = Field(default="0.0.0.0", description="Bind host")
    port: int = Field(default=8080, description="Bind port")
    cors_origins: list[str] = Field(default=["*"], description="Allowed CORS origins")
