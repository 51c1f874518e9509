"""
Test suite for SessionService and HealthService.

System role: Verification of session counts and health reporting
"""

import pytest

from docchat.application.services.health_service import HealthService
from docchat.application.services.session_service import SessionService
from docchat.models.document import DocumentMetadata, StorageTier, StoredDocument


def stored(session_id: str, document_id: str) -> StoredDocument:
    return StoredDocument(
        id=document_id,
        session_id=session_id,
        content="text",
        metadata=DocumentMetadata(filename="a.txt", mimetype="text/plain", size=4, timestamp="t"),
    )


class TestSessionService:
    """Test document counting across tiers."""

    @pytest.mark.asyncio
    async def test_counts_vector_documents(self, vector_store, fallback_store):
        await vector_store.store_document("s1", "a", "text")
        await vector_store.store_document("s1", "b", "text")
        await vector_store.store_document("s2", "c", "text")
        service = SessionService(vector_store=vector_store, fallback_store=fallback_store)

        info = await service.get_session_info("s1")

        assert info.document_count == 2
        assert info.storage == StorageTier.VECTOR

    @pytest.mark.asyncio
    async def test_unavailable_store_counts_fallback(self, unavailable_vector_store, fallback_store):
        fallback_store.add_document(stored("s1", "a"))
        service = SessionService(vector_store=unavailable_vector_store, fallback_store=fallback_store)

        info = await service.get_session_info("s1")

        assert info.document_count == 1
        assert info.storage == StorageTier.FALLBACK

    @pytest.mark.asyncio
    async def test_mixed_tiers_are_summed(self, vector_store, fallback_store):
        await vector_store.store_document("s1", "a", "text")
        fallback_store.add_document(stored("s1", "b"))
        service = SessionService(vector_store=vector_store, fallback_store=fallback_store)

        info = await service.get_session_info("s1")

        assert info.document_count == 2
        assert info.storage == StorageTier.FALLBACK


class TestHealthService:
    """Test health report assembly."""

    @pytest.mark.asyncio
    async def test_connected_store_reports_details(self, vector_store, fallback_store):
        await vector_store.store_document("s1", "a", "text")
        fallback_store.get_or_create_session("s9")
        service = HealthService(vector_store, fallback_store, gemini_configured=True)

        health = await service.check()

        assert health.vector_store == "connected"
        assert health.vector_store_details == {
            "indexName": "test-index",
            "totalVectors": 1,
            "totalVectorsApproximate": False,
            "dimension": 4,
        }
        assert health.fallback_details == {"sessions": 1, "documents": 0}
        assert health.gemini_ai == "configured"

    @pytest.mark.asyncio
    async def test_unavailable_store_reports_error(self, unavailable_vector_store, fallback_store):
        service = HealthService(unavailable_vector_store, fallback_store, gemini_configured=False)

        health = await service.check()

        assert health.success
        assert health.vector_store == "unavailable"
        assert "error" in health.vector_store_details
        assert health.fallback_storage == "available"
        assert health.gemini_ai == "not configured"
