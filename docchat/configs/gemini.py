"""
Gemini model configuration settings.

Model identifiers and credentials for generation and document extraction.

Dependencies: pydantic, pydantic_settings
System role: Generative model configuration
"""

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class GeminiSettings(BaseSettings):
    """Google Gemini configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="GEMINI_",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "GOOGLE_API_KEY"),
        description="Google AI Studio API key. Never log the raw value.",
    )
    chat_model: str = Field(default="gemini-1.5-flash", description="Model used for chat answers")
    extraction_model: str = Field(
        default="gemini-1.5-flash",
        description="Model used to extract text from PDF/DOC/DOCX uploads",
    )
    temperature: float = Field(default=0.7, description="Sampling temperature for chat answers")
    max_retries: int = Field(
        default=1,
        description="Attempts made by the chat model client before surfacing an error",
    )

    @property
    def is_configured(self) -> bool:
        """Whether an API key is available."""
        return self.api_key is not None and bool(self.api_key.get_secret_value())
