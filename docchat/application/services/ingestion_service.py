"""
Document ingestion service.

Coordinates text extraction and storage for uploaded files. The storage tier
is chosen by an explicit availability check on the vector store; a failed
vector upsert still lands the document in the fallback store.

Dependencies: docchat.core, docchat.boundary.vdb, docchat.models
System role: Document ingestion orchestration
"""

import logging
import time
import uuid
from datetime import datetime, timezone

from docchat.boundary.vdb.vector_store_client import VectorStoreAdapter
from docchat.core.exceptions import DocChatException, ExtractionError
from docchat.core.fallback_store import FallbackStore
from docchat.core.text_extractor import TextExtractor
from docchat.models.document import (
    BatchIngestionResult,
    DocumentMetadata,
    IngestionFailure,
    IngestionResult,
    StorageTier,
    StoredDocument,
    UploadedFile,
)
from docchat.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)


def make_document_id(session_id: str, filename: str) -> str:
    """
    Build a unique document id for one upload.

    Format: ``{session_id}_{epoch_millis}_{8 hex}_{filename}``. The random
    part keeps ids distinct for uploads landing in the same millisecond.

    Args:
        session_id: Owning session
        filename: Original filename

    Returns:
        str: Document id prefixed by ``{session_id}_``
    """
    return f"{session_id}_{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}_{filename}"


class IngestionService:
    """
    Document ingestion orchestrator.

    Extract, then store in exactly one tier: vector store when available and
    the upsert succeeds, fallback store otherwise.
    """

    def __init__(
        self,
        extractor: TextExtractor,
        vector_store: VectorStoreAdapter,
        fallback_store: FallbackStore,
    ) -> None:
        """
        Initialize ingestion service.

        Args:
            extractor: Text extractor for uploaded bytes
            vector_store: Primary storage tier
            fallback_store: In-memory degraded tier
        """
        self.extractor = extractor
        self.vector_store = vector_store
        self.fallback_store = fallback_store

    async def _store(
        self,
        session_id: str,
        document_id: str,
        text: str,
        metadata: DocumentMetadata,
    ) -> StorageTier:
        """Store in the vector tier when possible, otherwise in the fallback tier."""
        if await self.vector_store.is_available():
            result = await self.vector_store.store_document(
                session_id,
                document_id,
                text,
                metadata.model_dump(exclude={"timestamp"}),
            )
            if result.success:
                logger.info(
                    f"{__name__}:_store - Document stored in vector store",
                    extra={"session_id": session_id, "document_id": document_id},
                )
                return StorageTier.VECTOR
            logger.warning(
                f"{__name__}:_store - Vector store upsert failed, using fallback: {result.error}",
                extra={"session_id": session_id, "document_id": document_id},
            )
        else:
            logger.info(
                f"{__name__}:_store - Vector store unavailable, using fallback",
                extra={"session_id": session_id},
            )

        self.fallback_store.get_or_create_session(session_id)
        self.fallback_store.add_document(
            StoredDocument(
                id=document_id,
                session_id=session_id,
                content=text,
                metadata=metadata,
            )
        )
        return StorageTier.FALLBACK

    async def ingest(self, session_id: str, upload: UploadedFile) -> IngestionResult:
        """
        Extract and store a single uploaded file.

        Args:
            session_id: Owning session
            upload: Uploaded file bytes and metadata

        Returns:
            IngestionResult: document id, text length, and storage tier

        Raises:
            ExtractionError: If extraction fails or yields only whitespace
            QuotaExceededError: If the extraction model is rate limited
        """
        logger.info(
            f"{__name__}:ingest - Processing file",
            extra={"session_id": session_id, "document_name": upload.filename},
        )

        text = await self.extractor.extract(upload.data, upload.mime_type, upload.filename)
        if not text.strip():
            raise ExtractionError(
                "No text could be extracted from the document",
                filename=upload.filename,
            )

        document_id = make_document_id(session_id, upload.filename)
        metadata = DocumentMetadata(
            filename=upload.filename,
            mimetype=upload.mime_type,
            size=upload.size,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )
        tier = await self._store(session_id, document_id, text, metadata)

        return IngestionResult(
            document_id=document_id,
            filename=upload.filename,
            text_length=len(text),
            storage=tier,
        )

    async def ingest_batch(
        self,
        session_id: str,
        uploads: list[UploadedFile],
    ) -> BatchIngestionResult:
        """
        Ingest files one after another, isolating per-file failures.

        Args:
            session_id: Owning session
            uploads: Files from one upload request

        Returns:
            BatchIngestionResult: successes and per-file errors
        """
        batch = BatchIngestionResult()
        for upload in uploads:
            try:
                batch.results.append(await self.ingest(session_id, upload))
            except DocChatException as e:
                log_with_context(
                    logger,
                    logging.ERROR,
                    f"{__name__}:ingest_batch - Error processing file: {e.message}",
                    session_id=session_id,
                    document_name=upload.filename,
                    details=e.details,
                )
                batch.errors.append(IngestionFailure(filename=upload.filename, error=e.message))

        logger.info(
            f"{__name__}:ingest_batch - Processed {len(batch.results)}/{len(uploads)} files",
            extra={"session_id": session_id},
        )
        return batch
