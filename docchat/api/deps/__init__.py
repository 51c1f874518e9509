"""API-specific dependencies."""

from .dependencies import (
    get_chat_service,
    get_health_service,
    get_ingestion_service,
    get_service_cache,
    get_session_service,
    get_settings_dependency,
)

__all__ = [
    "get_chat_service",
    "get_health_service",
    "get_ingestion_service",
    "get_service_cache",
    "get_session_service",
    "get_settings_dependency",
]
