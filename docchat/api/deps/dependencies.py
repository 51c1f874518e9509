"""
Dependency injection container.

Factory functions for FastAPI dependencies. Long-lived collaborators (the
fallback store, vector store adapter, and Gemini client) are built once per
process and shared by every request.

Dependencies: docchat.configs, docchat.application, docchat.boundary, docchat.core
System role: DI container for service injection
"""

from functools import lru_cache

from docchat.application.services import (
    ChatService,
    HealthService,
    IngestionService,
    SessionService,
)
from docchat.boundary.llm.gemini_client import GeminiClient
from docchat.boundary.vdb.vector_store_client import VectorStoreAdapter
from docchat.configs import Settings, get_settings
from docchat.core.fallback_store import FallbackStore
from docchat.core.text_extractor import TextExtractor


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self) -> None:
        self._fallback_store: FallbackStore | None = None
        self._vector_store: VectorStoreAdapter | None = None
        self._gemini_client: GeminiClient | None = None

    @property
    def fallback_store(self) -> FallbackStore:
        """Get cached fallback store."""
        if self._fallback_store is None:
            self._fallback_store = FallbackStore()
        return self._fallback_store

    @property
    def vector_store(self) -> VectorStoreAdapter:
        """Get cached vector store adapter."""
        if self._vector_store is None:
            settings = get_settings()
            config = settings.vector_store
            api_key = settings.gemini.api_key
            self._vector_store = VectorStoreAdapter(
                vectors_bucket=config.vectors_bucket,
                index_name=config.index_name,
                region=config.aws_region,
                embedding_model_id=config.embedding_model,
                embedding_dimension=config.embedding_dimension,
                max_content_length=config.max_content_length,
                list_limit=config.list_limit,
                health_max_pages=config.health_max_pages,
                enabled=config.enabled,
                google_api_key=api_key.get_secret_value() if api_key else None,
            )
        return self._vector_store

    @property
    def gemini_client(self) -> GeminiClient:
        """Get cached Gemini client."""
        if self._gemini_client is None:
            config = get_settings().gemini
            self._gemini_client = GeminiClient(
                api_key=config.api_key.get_secret_value() if config.api_key else None,
                chat_model=config.chat_model,
                extraction_model=config.extraction_model,
                temperature=config.temperature,
                max_retries=config.max_retries,
            )
        return self._gemini_client

    def clear(self) -> None:
        """Clear all cached instances."""
        self._fallback_store = None
        self._vector_store = None
        self._gemini_client = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_ingestion_service() -> IngestionService:
    """
    Get ingestion service instance.

    Returns:
        IngestionService: Service wired to the shared stores and Gemini client
    """
    cache = get_service_cache()
    return IngestionService(
        extractor=TextExtractor(cache.gemini_client),
        vector_store=cache.vector_store,
        fallback_store=cache.fallback_store,
    )


def get_chat_service() -> ChatService:
    """
    Get chat service instance.

    Returns:
        ChatService: Service wired to the shared stores and Gemini client
    """
    cache = get_service_cache()
    return ChatService(
        gemini_client=cache.gemini_client,
        vector_store=cache.vector_store,
        fallback_store=cache.fallback_store,
        top_k=get_settings().vector_store.top_k,
    )


def get_session_service() -> SessionService:
    """Get session service instance."""
    cache = get_service_cache()
    return SessionService(vector_store=cache.vector_store, fallback_store=cache.fallback_store)


def get_health_service() -> HealthService:
    """Get health service instance."""
    cache = get_service_cache()
    return HealthService(
        vector_store=cache.vector_store,
        fallback_store=cache.fallback_store,
        gemini_configured=get_settings().gemini.is_configured,
    )
