"""
Core domain layer.

Exception taxonomy, prompt assembly, text extraction, and the in-memory
fallback store used when the vector store is unavailable.
"""

from docchat.core.exceptions import (
    DocChatException,
    ExtractionError,
    QuotaExceededError,
    StoreError,
    UpstreamError,
    ValidationError,
    is_quota_error,
)

__all__ = [
    "DocChatException",
    "ExtractionError",
    "QuotaExceededError",
    "StoreError",
    "UpstreamError",
    "ValidationError",
    "is_quota_error",
]
