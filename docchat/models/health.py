"""
Health check response schema.

Dependencies: pydantic
System role: Health API contract
"""

from typing import Any

from pydantic import Field

from docchat.models.common import CamelModel


class HealthResponse(CamelModel):
    """Vector store status, fallback availability, and model configuration."""

    success: bool = True
    vector_store: str
    vector_store_details: dict[str, Any]
    fallback_storage: str = "available"
    fallback_details: dict[str, int]
    gemini_ai: str = Field(alias="geminiAI")
