"""
Application settings.

One Settings object groups the per-concern settings classes. Each group reads
its own environment prefix (API_, GEMINI_, UPLOAD_, VECTOR_STORE_).

Dependencies: docchat.configs.*
System role: Configuration entry point
"""

from functools import lru_cache

from pydantic import Field

from docchat.configs.api import ApiSettings
from docchat.configs.base import BaseSettings
from docchat.configs.gemini import GeminiSettings
from docchat.configs.upload import UploadSettings
from docchat.configs.vector_store import VectorStoreSettings


class Settings(BaseSettings):
    """All service settings, grouped by concern."""

    api: ApiSettings = Field(default_factory=ApiSettings)
    gemini: GeminiSettings = Field(default_factory=GeminiSettings)
    upload: UploadSettings = Field(default_factory=UploadSettings)
    vector_store: VectorStoreSettings = Field(default_factory=VectorStoreSettings)


@lru_cache
def get_settings() -> Settings:
    """Settings read once per process and shared afterwards."""
    return Settings()
