"""Service orchestrators."""

from .chat_service import ChatService
from .health_service import HealthService
from .ingestion_service import IngestionService
from .session_service import SessionService

__all__ = [
    "ChatService",
    "HealthService",
    "IngestionService",
    "SessionService",
]
