"""
Session service.

Reports how many documents a session owns across both storage tiers.

Dependencies: docchat.boundary.vdb, docchat.core.fallback_store
System role: Session info orchestration
"""

import logging

from docchat.boundary.vdb.vector_store_client import VectorStoreAdapter
from docchat.core.fallback_store import FallbackStore
from docchat.models.document import StorageTier
from docchat.models.session import SessionInfo

logger = logging.getLogger(__name__)


class SessionService:
    """Session info lookups."""

    def __init__(self, vector_store: VectorStoreAdapter, fallback_store: FallbackStore) -> None:
        self.vector_store = vector_store
        self.fallback_store = fallback_store

    async def get_session_info(self, session_id: str) -> SessionInfo:
        """
        Count documents owned by a session.

        Documents may live in either tier depending on vector store
        availability at upload time, so both counts are summed. The tier is
        reported as vector only when the listing succeeded and no fallback
        documents exist for the session.

        Args:
            session_id: Caller-supplied session identifier

        Returns:
            SessionInfo: document count and reporting tier
        """
        listing = await self.vector_store.get_session_documents(session_id)
        fallback_count = self.fallback_store.count_session_documents(session_id)

        vector_count = len(listing.documents) if listing.success else 0
        storage = (
            StorageTier.VECTOR
            if listing.success and fallback_count == 0
            else StorageTier.FALLBACK
        )

        logger.info(
            f"{__name__}:get_session_info - vector={vector_count} fallback={fallback_count}",
            extra={"session_id": session_id},
        )
        return SessionInfo(
            session_id=session_id,
            document_count=vector_count + fallback_count,
            storage=storage,
        )
