"""
In-memory fallback storage.

Process-local sessions and documents used whenever the vector store is
unavailable. Constructed once at startup and injected into the services;
there is no persistence, eviction, or size bound.

Dependencies: docchat.models
System role: Degraded storage tier
"""

import logging

from docchat.models.document import StoredDocument
from docchat.models.session import Session

logger = logging.getLogger(__name__)


class FallbackStore:
    """
    Session and document maps keyed by session id.

    Documents are keyed by ``f"{session_id}_{document_id}"`` and returned in
    insertion order. No operation awaits between reading and writing a map,
    so concurrent requests never observe a half-applied update.
    """

    def __init__(self) -> None:
        self._sessions: dict[str, Session] = {}
        self._documents: dict[str, StoredDocument] = {}

    @staticmethod
    def document_key(session_id: str, document_id: str) -> str:
        return f"{session_id}_{document_id}"

    def get_or_create_session(self, session_id: str) -> Session:
        """
        Return the retained session, creating it on first use.

        Args:
            session_id: Caller-supplied session identifier

        Returns:
            Session: Session kept for the process lifetime
        """
        session = self._sessions.get(session_id)
        if session is None:
            session = Session(id=session_id)
            self._sessions[session_id] = session
            logger.debug(f"{__name__}:get_or_create_session - Created session {session_id}")
        return session

    def get_session(self, session_id: str) -> Session | None:
        return self._sessions.get(session_id)

    def add_document(self, document: StoredDocument) -> str:
        """
        Store a document under its composite key.

        Args:
            document: Document with non-empty content

        Returns:
            str: Composite storage key
        """
        key = self.document_key(document.session_id, document.id)
        self._documents[key] = document
        logger.debug(
            f"{__name__}:add_document - Stored {document.id}",
            extra={"session_id": document.session_id, "key": key},
        )
        return key

    def get_session_documents(
        self,
        session_id: str,
        limit: int | None = None,
    ) -> list[StoredDocument]:
        """
        Documents owned by a session in storage order.

        Args:
            session_id: Owning session
            limit: Optional maximum number of documents

        Returns:
            list[StoredDocument]: Matching documents, oldest first
        """
        documents = [doc for doc in self._documents.values() if doc.session_id == session_id]
        if limit is not None:
            return documents[:limit]
        return documents

    def count_session_documents(self, session_id: str) -> int:
        return len(self.get_session_documents(session_id))

    @property
    def session_count(self) -> int:
        return len(self._sessions)

    @property
    def document_count(self) -> int:
        return len(self._documents)

    def clear(self) -> None:
        """Drop every session and document."""
        self._sessions.clear()
        self._documents.clear()
