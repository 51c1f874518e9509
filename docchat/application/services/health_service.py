"""
Health service.

Aggregates vector store statistics, fallback store size, and Gemini
configuration for the health endpoint.

Dependencies: docchat.boundary.vdb, docchat.core.fallback_store
System role: Health reporting
"""

from docchat.boundary.vdb.vector_store_client import VectorStoreAdapter
from docchat.core.fallback_store import FallbackStore
from docchat.models.health import HealthResponse


class HealthService:
    """Health reporting for the chatbot backend."""

    def __init__(
        self,
        vector_store: VectorStoreAdapter,
        fallback_store: FallbackStore,
        gemini_configured: bool,
    ) -> None:
        self.vector_store = vector_store
        self.fallback_store = fallback_store
        self.gemini_configured = gemini_configured

    async def check(self) -> HealthResponse:
        """Build the health report. Vector store failures are reported, not raised."""
        health = await self.vector_store.health_check()
        if health.success:
            details = {
                "indexName": health.index_name,
                "totalVectors": health.total_vectors,
                "totalVectorsApproximate": health.total_vectors_approximate,
                "dimension": health.dimension,
            }
        else:
            details = {"error": health.error}

        return HealthResponse(
            vector_store="connected" if health.success else "unavailable",
            vector_store_details=details,
            fallback_details={
                "sessions": self.fallback_store.session_count,
                "documents": self.fallback_store.document_count,
            },
            gemini_ai="configured" if self.gemini_configured else "not configured",
        )
