"""
S3 Vectors adapter for document storage and retrieval.

Stores one vector per uploaded document and searches within a session using
an exact-match ``session_id`` metadata filter. Every public operation except
``generate_embedding`` converts failures into a result with ``success=False``
so callers can fall back to in-memory storage.

Metadata Keys (matching the S3 Vectors index definition):
- Filterable: session_id, filename, mimetype, size, timestamp
- Non-filterable: content

Dependencies: boto3, botocore, docchat.boundary.vdb.embeddings_wrapper
System role: Primary (vector) storage tier
"""

import asyncio
import json
import logging
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from docchat.boundary.vdb.vector_schemas import (
    InitResult,
    ListResult,
    SearchResult,
    StoreResult,
    VectorHealth,
    VectorListing,
    VectorMetadata,
    VectorSearchResult,
)
from docchat.core.exceptions import StoreError

logger = logging.getLogger(__name__)

DEFAULT_DIMENSION = 1536
MAX_CONTENT_LENGTH = 40000
LIST_PAGE_SIZE = 1000
# S3 Vectors caps the metadata of one vector at 40 KB
METADATA_BYTE_LIMIT = 40 * 1024
METADATA_HEADROOM = 512


def _default_client_factory(region: str) -> Any:
    return boto3.client("s3vectors", region_name=region)


def truncate_utf8(text: str, max_bytes: int) -> str:
    """Longest prefix of text whose UTF-8 encoding fits in max_bytes."""
    return text.encode("utf-8")[: max(max_bytes, 0)].decode("utf-8", "ignore")


class VectorStoreAdapter:
    """
    Best-effort wrapper around an S3 Vectors index.

    The boto3 client is created lazily. ``initialize`` is idempotent and a
    failed attempt leaves the adapter uninitialized, so the next operation
    retries instead of staying broken.
    """

    def __init__(
        self,
        vectors_bucket: str = "chatbot-vectors",
        index_name: str = "chatbot-documents",
        region: str = "us-east-1",
        embedding_model_id: str = "models/gemini-embedding-001",
        embedding_dimension: int = DEFAULT_DIMENSION,
        max_content_length: int = MAX_CONTENT_LENGTH,
        list_limit: int = 100,
        health_max_pages: int = 10,
        enabled: bool = True,
        google_api_key: str | None = None,
        embeddings: Any | None = None,
        client_factory: Callable[[str], Any] | None = None,
    ) -> None:
        """
        Initialize adapter configuration. No remote call is made here.

        Args:
            vectors_bucket: S3 Vectors bucket name
            index_name: Index name within the bucket
            region: AWS region for S3 Vectors
            embedding_model_id: Google embedding model ID
            embedding_dimension: Output dimension for embeddings
            max_content_length: UTF-8 bytes of content stored in metadata
            list_limit: Maximum records returned by get_session_documents
            health_max_pages: list_vectors pages read when counting for health; a
                larger index is reported with an approximate (lower bound) count
            enabled: When False every operation reports the store unavailable
            google_api_key: Optional key for the embedding model
            embeddings: Optional pre-built embeddings (anything with embed_query)
            client_factory: Optional callable building the s3vectors client from a region
        """
        self._vectors_bucket = vectors_bucket
        self._index_name = index_name
        self._region = region
        self._embedding_model_id = embedding_model_id
        self._embedding_dimension = embedding_dimension
        self._max_content_length = max_content_length
        self._list_limit = list_limit
        self._health_max_pages = health_max_pages
        self._enabled = enabled
        self._google_api_key = google_api_key
        self._embeddings = embeddings
        self._client_factory = client_factory or _default_client_factory

        self._client: Any | None = None
        self._index_dimension: int | None = None
        self._initialized = False

    @property
    def index_name(self) -> str:
        return self._index_name

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def embeddings(self) -> Any:
        """Lazy-load embeddings to avoid requiring an API key at import time."""
        if self._embeddings is None:
            from docchat.boundary.vdb.embeddings_wrapper import FixedDimensionEmbeddings

            kwargs: dict[str, Any] = {}
            if self._google_api_key:
                kwargs["google_api_key"] = self._google_api_key
            self._embeddings = FixedDimensionEmbeddings(
                model=self._embedding_model_id,
                output_dimensionality=self._embedding_dimension,
                **kwargs,
            )
        return self._embeddings

    # ------------------------------------------------------------------
    # Connection
    # ------------------------------------------------------------------

    def _connect(self) -> int | None:
        """Create the client and resolve the index. Blocking."""
        try:
            client = self._client_factory(self._region)
            response = client.get_index(
                vectorBucketName=self._vectors_bucket,
                indexName=self._index_name,
            )
        except (ClientError, BotoCoreError) as e:
            raise StoreError(
                message=f"Failed to resolve index {self._index_name}: {e}",
                operation="initialize",
                details={"bucket": self._vectors_bucket},
            ) from e
        self._client = client
        return response.get("index", {}).get("dimension")

    async def initialize(self) -> InitResult:
        """
        Connect to S3 Vectors and resolve the target index.

        Returns:
            InitResult: success flag plus error detail
        """
        if self._initialized:
            return InitResult(success=True)
        if not self._enabled:
            return InitResult(success=False, error="Vector store disabled")

        try:
            self._index_dimension = await asyncio.to_thread(self._connect)
        except Exception as e:
            self._initialized = False
            logger.warning(f"{__name__}:initialize - Vector store unavailable: {e}")
            return InitResult(success=False, error=str(e))

        self._initialized = True
        logger.info(
            f"{__name__}:initialize - Connected to index {self._index_name}",
            extra={"bucket": self._vectors_bucket, "dimension": self._index_dimension},
        )
        return InitResult(success=True)

    async def _ensure_initialized(self) -> InitResult:
        if self._initialized:
            return InitResult(success=True)
        return await self.initialize()

    async def is_available(self) -> bool:
        """Capability check used to pick a storage tier. Never raises."""
        return (await self._ensure_initialized()).success

    def _count_vectors(self) -> tuple[int, bool]:
        """Count keys over at most health_max_pages pages. Returns (count, complete)."""
        total = 0
        next_token: str | None = None
        for _ in range(self._health_max_pages):
            kwargs: dict[str, Any] = {
                "vectorBucketName": self._vectors_bucket,
                "indexName": self._index_name,
                "maxResults": LIST_PAGE_SIZE,
                "returnData": False,
                "returnMetadata": False,
            }
            if next_token:
                kwargs["nextToken"] = next_token
            response = self._client.list_vectors(**kwargs)
            total += len(response.get("vectors", []))
            next_token = response.get("nextToken")
            if not next_token:
                return total, True
        return total, False

    async def health_check(self) -> VectorHealth:
        """
        Report index statistics, or unavailability without raising.

        S3 Vectors has no count call, so keys are paged with list_vectors.
        Counting stops after health_max_pages requests; beyond that the count
        is a lower bound and flagged as approximate.

        Returns:
            VectorHealth: index name, vector count, and dimension on success
        """
        init_result = await self._ensure_initialized()
        if not init_result.success:
            return VectorHealth(success=False, error=init_result.error)

        try:
            total, complete = await asyncio.to_thread(self._count_vectors)
        except Exception as e:
            logger.error(f"{__name__}:health_check - Failed: {type(e).__name__}: {e}")
            return VectorHealth(success=False, error=str(e))

        return VectorHealth(
            success=True,
            index_name=self._index_name,
            total_vectors=total,
            total_vectors_approximate=not complete,
            dimension=self._index_dimension or self._embedding_dimension,
        )

    # ------------------------------------------------------------------
    # Embeddings
    # ------------------------------------------------------------------

    async def generate_embedding(self, text: str) -> list[float]:
        """
        Embed text with the configured embedding model.

        Args:
            text: Text to embed

        Returns:
            list[float]: Embedding vector

        Raises:
            Exception: Embedding errors are propagated to the caller
        """
        try:
            return await asyncio.to_thread(self.embeddings.embed_query, text)
        except Exception as e:
            logger.error(f"{__name__}:generate_embedding - {type(e).__name__}: {e}")
            raise

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    def _put_vector(self, entry: dict[str, Any]) -> None:
        try:
            self._client.put_vectors(
                vectorBucketName=self._vectors_bucket,
                indexName=self._index_name,
                vectors=[entry],
            )
        except (ClientError, BotoCoreError) as e:
            raise StoreError(
                message=f"Failed to upsert vector {entry['key']}",
                operation="upsert",
                details={"error": str(e)},
            ) from e

    async def store_document(
        self,
        session_id: str,
        document_id: str,
        content: str,
        metadata: dict[str, Any] | None = None,
    ) -> StoreResult:
        """
        Embed and upsert one document as a single vector.

        Content is cut to max_content_length UTF-8 bytes, further reduced so
        the whole metadata payload stays under the 40 KB per-vector limit.
        The remainder is not retrievable verbatim.

        Args:
            session_id: Owning session, stored as the filter key
            document_id: Vector key
            content: Full extracted text
            metadata: filename, mimetype, size, and other document metadata

        Returns:
            StoreResult: success flag, never raises
        """
        init_result = await self._ensure_initialized()
        if not init_result.success:
            return StoreResult(success=False, document_id=document_id, error=init_result.error)

        try:
            embedding = await self.generate_embedding(content)
            record_metadata = {
                **(metadata or {}),
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "session_id": session_id,
            }
            other_bytes = len(json.dumps(record_metadata, ensure_ascii=False).encode("utf-8"))
            budget = min(
                self._max_content_length,
                METADATA_BYTE_LIMIT - METADATA_HEADROOM - other_bytes,
            )
            record_metadata["content"] = truncate_utf8(content, budget)
            entry = {
                "key": document_id,
                "data": {"float32": [float(value) for value in embedding]},
                "metadata": record_metadata,
            }
            await asyncio.to_thread(self._put_vector, entry)
        except Exception as e:
            logger.error(
                f"{__name__}:store_document - Failed: {type(e).__name__}: {e}",
                extra={"session_id": session_id, "document_id": document_id},
            )
            return StoreResult(success=False, document_id=document_id, error=str(e))

        logger.info(
            f"{__name__}:store_document - Stored {document_id}",
            extra={"session_id": session_id},
        )
        return StoreResult(success=True, document_id=document_id, vector_id=document_id)

    def _query(self, embedding: list[float], session_id: str, top_k: int) -> dict[str, Any]:
        try:
            return self._client.query_vectors(
                vectorBucketName=self._vectors_bucket,
                indexName=self._index_name,
                queryVector={"float32": [float(value) for value in embedding]},
                topK=top_k,
                filter={"session_id": {"$eq": session_id}},
                returnMetadata=True,
                returnDistance=True,
            )
        except (ClientError, BotoCoreError) as e:
            raise StoreError(
                message="Failed to query vectors",
                operation="query",
                details={"error": str(e), "session_id": session_id},
            ) from e

    async def search_documents(
        self,
        session_id: str,
        query: str,
        top_k: int = 3,
    ) -> SearchResult:
        """
        Similarity search restricted to one session.

        Args:
            session_id: Session whose documents may be returned
            query: Search text
            top_k: Maximum number of matches

        Returns:
            SearchResult: matches best-first, or empty with an error; never raises
        """
        init_result = await self._ensure_initialized()
        if not init_result.success:
            return SearchResult(success=False, query=query, error=init_result.error)

        try:
            embedding = await self.generate_embedding(query)
            response = await asyncio.to_thread(self._query, embedding, session_id, top_k)
        except Exception as e:
            logger.error(
                f"{__name__}:search_documents - Failed: {type(e).__name__}: {e}",
                extra={"session_id": session_id},
            )
            return SearchResult(success=False, query=query, error=str(e))

        documents = []
        for match in response.get("vectors", []):
            raw_metadata = dict(match.get("metadata") or {})
            if raw_metadata.get("session_id") != session_id:
                logger.warning(
                    f"{__name__}:search_documents - Dropped match outside session",
                    extra={"session_id": session_id, "key": match.get("key")},
                )
                continue
            content = raw_metadata.pop("content", "")
            documents.append(
                VectorSearchResult(
                    id=match["key"],
                    content=content,
                    metadata=VectorMetadata(**raw_metadata),
                    score=1.0 - float(match.get("distance", 1.0)),
                )
            )

        documents.sort(key=lambda doc: doc.score, reverse=True)
        return SearchResult(success=True, documents=documents[:top_k], query=query)

    def _list_session(self, session_id: str) -> list[VectorListing]:
        listings: list[VectorListing] = []
        next_token: str | None = None
        try:
            while len(listings) < self._list_limit:
                kwargs: dict[str, Any] = {
                    "vectorBucketName": self._vectors_bucket,
                    "indexName": self._index_name,
                    "maxResults": LIST_PAGE_SIZE,
                    "returnData": False,
                    "returnMetadata": True,
                }
                if next_token:
                    kwargs["nextToken"] = next_token
                response = self._client.list_vectors(**kwargs)
                for vector in response.get("vectors", []):
                    raw_metadata = dict(vector.get("metadata") or {})
                    if raw_metadata.get("session_id") != session_id:
                        continue
                    raw_metadata.pop("content", None)
                    listings.append(
                        VectorListing(id=vector["key"], metadata=VectorMetadata(**raw_metadata))
                    )
                next_token = response.get("nextToken")
                if not next_token:
                    break
        except (ClientError, BotoCoreError) as e:
            raise StoreError(
                message="Failed to list vectors",
                operation="list",
                details={"error": str(e), "session_id": session_id},
            ) from e
        return listings[: self._list_limit]

    async def get_session_documents(self, session_id: str) -> ListResult:
        """
        List up to list_limit documents owned by a session.

        Pages through the index and keeps records whose session_id matches
        exactly, rather than approximating a listing with a similarity query.
        S3 Vectors cannot filter list_vectors by metadata, so one call costs up
        to one request per 1000 vectors in the index; paging stops early once
        list_limit matches are found.

        Args:
            session_id: Owning session

        Returns:
            ListResult: document ids and metadata; never raises
        """
        init_result = await self._ensure_initialized()
        if not init_result.success:
            return ListResult(success=False, error=init_result.error)

        try:
            documents = await asyncio.to_thread(self._list_session, session_id)
        except Exception as e:
            logger.error(
                f"{__name__}:get_session_documents - Failed: {type(e).__name__}: {e}",
                extra={"session_id": session_id},
            )
            return ListResult(success=False, error=str(e))

        return ListResult(success=True, documents=documents)
