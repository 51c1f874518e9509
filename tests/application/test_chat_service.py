"""
Test suite for ChatService.

Tests retrieval across tiers, prompt grounding, quota degradation, and
the end-to-end upload-then-chat flow.

System role: Verification of chat orchestration
"""

import pytest

from docchat.application.services.chat_service import QUOTA_WARNING, ChatService
from docchat.application.services.ingestion_service import IngestionService
from docchat.core.exceptions import UpstreamError
from docchat.core.text_extractor import TextExtractor
from docchat.models.document import DocumentMetadata, StorageTier, StoredDocument, UploadedFile


class QuotaError(Exception):
    code = 429


def fallback_document(session_id: str, document_id: str, filename: str, content: str) -> StoredDocument:
    return StoredDocument(
        id=document_id,
        session_id=session_id,
        content=content,
        metadata=DocumentMetadata(
            filename=filename,
            mimetype="text/plain",
            size=len(content),
            timestamp="2024-01-01T00:00:00+00:00",
        ),
    )


@pytest.fixture
def chat_service(fake_gemini, vector_store, fallback_store) -> ChatService:
    """Provide chat service backed by the in-memory vector store."""
    return ChatService(
        gemini_client=fake_gemini,
        vector_store=vector_store,
        fallback_store=fallback_store,
    )


@pytest.fixture
def degraded_chat_service(fake_gemini, unavailable_vector_store, fallback_store) -> ChatService:
    """Provide chat service whose vector store never connects."""
    return ChatService(
        gemini_client=fake_gemini,
        vector_store=unavailable_vector_store,
        fallback_store=fallback_store,
    )


class TestRetrieval:
    """Test document retrieval across tiers."""

    @pytest.mark.asyncio
    async def test_vector_documents_ground_the_prompt(self, chat_service, vector_store, fake_gemini):
        await vector_store.store_document("s1", "s1_a", "Glaze at cone 6", {"filename": "glaze.txt"})

        result = await chat_service.process_chat("s1", "How do I glaze?")

        assert result.documents_found == 1
        assert result.storage == StorageTier.VECTOR
        assert "Document: glaze.txt" in fake_gemini.prompts[-1]

    @pytest.mark.asyncio
    async def test_fallback_documents_used_when_vector_search_empty(
        self, chat_service, fallback_store, fake_gemini
    ):
        for index in range(4):
            fallback_store.add_document(fallback_document("s1", f"d{index}", f"f{index}.txt", "text"))

        result = await chat_service.process_chat("s1", "question")

        assert result.documents_found == 3
        assert result.storage == StorageTier.FALLBACK
        prompt = fake_gemini.prompts[-1]
        assert all(f"Document: f{index}.txt" in prompt for index in range(3))
        assert "f3.txt" not in prompt

    @pytest.mark.asyncio
    async def test_no_documents_builds_general_prompt(self, chat_service, fake_gemini):
        result = await chat_service.process_chat("new-session", "hello")

        assert result.documents_found == 0
        assert result.warning is None
        assert "Document:" not in fake_gemini.prompts[-1]

    @pytest.mark.asyncio
    async def test_other_sessions_documents_are_not_used(self, chat_service, vector_store, fallback_store):
        await vector_store.store_document("s2", "s2_a", "secret")
        fallback_store.add_document(fallback_document("s2", "s2_b", "other.txt", "secret"))

        result = await chat_service.process_chat("s1", "secret?")

        assert result.documents_found == 0


class TestSessions:
    """Test session handling per tier."""

    @pytest.mark.asyncio
    async def test_fallback_session_retains_messages(self, degraded_chat_service, fallback_store, fake_gemini):
        fake_gemini.answer = "Hi there"

        await degraded_chat_service.process_chat("s1", "hello")

        session = fallback_store.get_session("s1")
        assert [(m.role.value, m.content) for m in session.messages] == [
            ("user", "hello"),
            ("assistant", "Hi there"),
        ]

    @pytest.mark.asyncio
    async def test_vector_mode_keeps_no_session_state(self, chat_service, fallback_store):
        await chat_service.process_chat("s1", "hello")

        assert fallback_store.get_session("s1") is None


class TestFailures:
    """Test quota degradation and upstream failures."""

    @pytest.mark.asyncio
    async def test_quota_error_returns_degraded_answer(self, chat_service, fallback_store, fake_gemini):
        fallback_store.add_document(fallback_document("s1", "d1", "a.txt", "text"))
        fake_gemini.generate_error = QuotaError("Too many requests")

        result = await chat_service.process_chat("s1", "question")

        assert result.warning == QUOTA_WARNING
        assert result.documents_found == 1
        assert "I found 1 relevant document(s)" in result.response_text

    @pytest.mark.asyncio
    async def test_other_model_errors_raise_upstream_error(self, chat_service, fake_gemini):
        fake_gemini.generate_error = RuntimeError("model offline")

        with pytest.raises(UpstreamError):
            await chat_service.process_chat("s1", "question")


class TestEndToEnd:
    """Upload then chat through the real services and in-memory backends."""

    @pytest.mark.asyncio
    async def test_kiln_manual_scenario(self, chat_service, fake_gemini, vector_store, fallback_store):
        ingestion = IngestionService(
            extractor=TextExtractor(fake_gemini),
            vector_store=vector_store,
            fallback_store=fallback_store,
        )
        upload = UploadedFile(
            filename="manual.txt",
            mime_type="text/plain",
            data=b"Kiln temperature must stay below 1450C.",
        )

        ingested = await ingestion.ingest("s1", upload)
        fake_gemini.answer = "The kiln must stay below 1450C."
        result = await chat_service.process_chat("s1", "What is the max kiln temperature?")

        assert ingested.text_length == 39
        assert ingested.document_id.startswith("s1_")
        assert result.documents_found >= 1
        assert "1450" in result.response_text
        assert "1450C" in fake_gemini.prompts[-1]

    @pytest.mark.asyncio
    async def test_new_session_hello(self, chat_service, fake_gemini):
        result = await chat_service.process_chat("new-session", "hello")

        assert result.documents_found == 0
        assert not fake_gemini.prompts[-1].startswith("Based on the uploaded documents")
