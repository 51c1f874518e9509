"""
Chat service for document-grounded Q&A.

Runs one chat turn as an explicit stage pipeline:
RESOLVING_SESSION -> RETRIEVING -> PROMPTING -> GENERATING -> SUCCEEDED | DEGRADED | FAILED.
Each remote call is a single await; nothing is retried.

Dependencies: docchat.boundary, docchat.core, docchat.models
System role: Chat service orchestration layer
"""

import logging
from enum import Enum

from docchat.boundary.llm.gemini_client import GeminiClient
from docchat.boundary.vdb.vector_store_client import VectorStoreAdapter
from docchat.core.exceptions import UpstreamError, is_quota_error
from docchat.core.fallback_store import FallbackStore
from docchat.core.prompts import build_chat_prompt, degraded_response
from docchat.models.chat import ChatResult, RetrievedDocument
from docchat.models.document import StorageTier
from docchat.models.session import Session

logger = logging.getLogger(__name__)

QUOTA_WARNING = "API quota exceeded"


class ChatStage(str, Enum):
    """Stages of a chat turn."""

    RESOLVING_SESSION = "resolving_session"
    RETRIEVING = "retrieving"
    PROMPTING = "prompting"
    GENERATING = "generating"
    SUCCEEDED = "succeeded"
    DEGRADED = "degraded"
    FAILED = "failed"


class ChatService:
    """
    Retrieval-augmented chat orchestrator.

    Retrieves up to top_k documents for the session (vector search first,
    fallback scan second), builds the grounding prompt, and calls Gemini.
    Quota exhaustion yields a canned answer with a warning instead of an error.
    """

    def __init__(
        self,
        gemini_client: GeminiClient,
        vector_store: VectorStoreAdapter,
        fallback_store: FallbackStore,
        top_k: int = 3,
    ) -> None:
        """
        Initialize chat service.

        Args:
            gemini_client: Chat model client
            vector_store: Primary retrieval tier
            fallback_store: In-memory degraded tier
            top_k: Documents retrieved per turn
        """
        self.gemini_client = gemini_client
        self.vector_store = vector_store
        self.fallback_store = fallback_store
        self.top_k = top_k

    def _enter(self, stage: ChatStage, session_id: str) -> ChatStage:
        logger.debug(f"{__name__}:process_chat - stage={stage.value} session_id={session_id}")
        return stage

    async def resolve_session(self, session_id: str) -> Session:
        """
        Return the session for this turn.

        With the vector store available, no session state is kept server-side
        and a transient session is returned. Otherwise the fallback store keeps
        the session for the process lifetime.

        Args:
            session_id: Caller-supplied session identifier

        Returns:
            Session: Session that receives this turn's messages
        """
        if await self.vector_store.is_available():
            return Session(id=session_id)
        logger.info(f"{__name__}:resolve_session - Vector store unavailable, using fallback session")
        return self.fallback_store.get_or_create_session(session_id)

    async def retrieve(
        self,
        session_id: str,
        message: str,
    ) -> tuple[list[RetrievedDocument], StorageTier]:
        """
        Find grounding documents for a message.

        Vector search comes first. When it fails or finds nothing, the first
        top_k fallback documents of the session are used without ranking.

        Args:
            session_id: Session whose documents may be used
            message: User message used as the search query

        Returns:
            tuple: retrieved documents and the tier that served them
        """
        search = await self.vector_store.search_documents(session_id, message, self.top_k)
        if search.success and search.documents:
            logger.info(
                f"{__name__}:retrieve - Found {len(search.documents)} documents in vector store",
                extra={"session_id": session_id},
            )
            return [
                RetrievedDocument(
                    id=doc.id,
                    filename=doc.metadata.filename,
                    content=doc.content,
                    score=doc.score,
                )
                for doc in search.documents
            ], StorageTier.VECTOR

        fallback_docs = self.fallback_store.get_session_documents(session_id, limit=self.top_k)
        if fallback_docs:
            logger.info(
                f"{__name__}:retrieve - Found {len(fallback_docs)} documents in fallback storage",
                extra={"session_id": session_id},
            )
            return [
                RetrievedDocument(id=doc.id, filename=doc.metadata.filename, content=doc.content)
                for doc in fallback_docs
            ], StorageTier.FALLBACK

        tier = StorageTier.VECTOR if search.success else StorageTier.FALLBACK
        return [], tier

    async def process_chat(self, session_id: str, message: str) -> ChatResult:
        """
        Process one chat message.

        Args:
            session_id: Caller-supplied session identifier
            message: User's message

        Returns:
            ChatResult: answer text, documents used, tier, and optional warning

        Raises:
            UpstreamError: If the chat model fails for a reason other than quota
        """
        stage = self._enter(ChatStage.RESOLVING_SESSION, session_id)
        session = await self.resolve_session(session_id)

        stage = self._enter(ChatStage.RETRIEVING, session_id)
        documents, storage = await self.retrieve(session_id, message)

        stage = self._enter(ChatStage.PROMPTING, session_id)
        prompt = build_chat_prompt(message, documents)

        stage = self._enter(ChatStage.GENERATING, session_id)
        try:
            answer = await self.gemini_client.generate(prompt)
        except Exception as e:
            if is_quota_error(e):
                stage = self._enter(ChatStage.DEGRADED, session_id)
                logger.warning(
                    f"{__name__}:process_chat - Quota exhausted, returning degraded response",
                    extra={"session_id": session_id, "documents_found": len(documents)},
                )
                return ChatResult(
                    response_text=degraded_response(len(documents)),
                    documents_found=len(documents),
                    storage=storage,
                    warning=QUOTA_WARNING,
                )
            stage = self._enter(ChatStage.FAILED, session_id)
            logger.error(
                f"{__name__}:process_chat - Gemini call failed: {type(e).__name__}: {e}",
                extra={"session_id": session_id},
            )
            raise UpstreamError(
                f"Chat model call failed: {e}",
                service="gemini",
                details={"stage": stage.value},
            ) from e

        session.add_exchange(message, answer)
        self._enter(ChatStage.SUCCEEDED, session_id)

        return ChatResult(
            response_text=answer,
            documents_found=len(documents),
            storage=storage,
        )
