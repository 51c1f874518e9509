"""
Shared test fixtures and configuration for entire test suite.

Provides: fake Gemini client, fake S3 Vectors client, vector store adapters
wired to the fakes, and a fresh fallback store per test.
Dependencies: pytest, botocore
System role: Test infrastructure and fixture management
"""

from typing import Any

import pytest
from botocore.exceptions import ClientError

from docchat.boundary.vdb.vector_store_client import VectorStoreAdapter
from docchat.core.fallback_store import FallbackStore


class FakeGeminiClient:
    """In-memory stand-in for GeminiClient that records every call."""

    def __init__(self, answer: str = "Fake answer", extracted_text: str = "Extracted text") -> None:
        self.answer = answer
        self.extracted_text = extracted_text
        self.generate_error: Exception | None = None
        self.extract_error: Exception | None = None
        self.prompts: list[str] = []
        self.extract_calls: list[tuple[bytes, str, str]] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.generate_error is not None:
            raise self.generate_error
        return self.answer

    async def extract_text(self, data: bytes, mime_type: str, instruction: str) -> str:
        self.extract_calls.append((data, mime_type, instruction))
        if self.extract_error is not None:
            raise self.extract_error
        return self.extracted_text


class FakeEmbeddings:
    """Deterministic embeddings: a short vector derived from the text length."""

    def __init__(self, dimension: int = 4) -> None:
        self.dimension = dimension
        self.calls: list[str] = []
        self.error: Exception | None = None

    def embed_query(self, text: str) -> list[float]:
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return [float(len(text) % 7 + i) for i in range(self.dimension)]


def client_error(code: str, operation: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": f"{code} raised"}}, operation)


class FakeS3VectorsClient:
    """
    Minimal s3vectors client kept in memory.

    query_vectors honours the ``$eq`` session filter unless ``ignore_filter``
    is set, which lets tests simulate an index returning foreign matches.
    """

    def __init__(self, dimension: int = 4, page_size: int | None = None) -> None:
        self.dimension = dimension
        self.page_size = page_size
        self.vectors: dict[str, dict[str, Any]] = {}
        self.ignore_filter = False
        self.fail_get_index = False
        self.fail_put = False
        self.fail_query = False
        self.fail_list = False
        self.get_index_calls = 0
        self.query_calls: list[dict[str, Any]] = []

    def get_index(self, vectorBucketName: str, indexName: str) -> dict[str, Any]:
        self.get_index_calls += 1
        if self.fail_get_index:
            raise client_error("NotFoundException", "GetIndex")
        return {"index": {"indexName": indexName, "dimension": self.dimension}}

    def put_vectors(self, vectorBucketName: str, indexName: str, vectors: list[dict]) -> dict:
        if self.fail_put:
            raise client_error("ServiceUnavailableException", "PutVectors")
        for vector in vectors:
            self.vectors[vector["key"]] = vector
        return {}

    def query_vectors(self, **kwargs: Any) -> dict[str, Any]:
        self.query_calls.append(kwargs)
        if self.fail_query:
            raise client_error("ServiceUnavailableException", "QueryVectors")
        session_id = kwargs["filter"]["session_id"]["$eq"]
        matches = []
        for position, vector in enumerate(self.vectors.values()):
            if not self.ignore_filter and vector["metadata"].get("session_id") != session_id:
                continue
            matches.append(
                {
                    "key": vector["key"],
                    "metadata": dict(vector["metadata"]),
                    "distance": 0.1 * position,
                }
            )
        return {"vectors": matches[: kwargs["topK"]]}

    def list_vectors(self, **kwargs: Any) -> dict[str, Any]:
        if self.fail_list:
            raise client_error("ServiceUnavailableException", "ListVectors")
        records = list(self.vectors.values())
        page_size = self.page_size or kwargs.get("maxResults", 1000)
        start = int(kwargs.get("nextToken") or 0)
        page = records[start : start + page_size]
        response: dict[str, Any] = {"vectors": []}
        for vector in page:
            entry = {"key": vector["key"]}
            if kwargs.get("returnMetadata"):
                entry["metadata"] = dict(vector["metadata"])
            response["vectors"].append(entry)
        if start + page_size < len(records):
            response["nextToken"] = str(start + page_size)
        return response


@pytest.fixture
def fake_gemini() -> FakeGeminiClient:
    """Provide fake Gemini client."""
    return FakeGeminiClient()


@pytest.fixture
def fake_embeddings() -> FakeEmbeddings:
    """Provide deterministic embeddings."""
    return FakeEmbeddings()


@pytest.fixture
def fake_s3vectors() -> FakeS3VectorsClient:
    """Provide in-memory s3vectors client."""
    return FakeS3VectorsClient()


@pytest.fixture
def vector_store(fake_s3vectors: FakeS3VectorsClient, fake_embeddings: FakeEmbeddings) -> VectorStoreAdapter:
    """Provide adapter wired to the in-memory client and embeddings."""
    return VectorStoreAdapter(
        vectors_bucket="test-bucket",
        index_name="test-index",
        embedding_dimension=4,
        embeddings=fake_embeddings,
        client_factory=lambda region: fake_s3vectors,
    )


@pytest.fixture
def unavailable_vector_store(fake_s3vectors: FakeS3VectorsClient, fake_embeddings: FakeEmbeddings) -> VectorStoreAdapter:
    """Provide adapter whose index can never be resolved."""
    fake_s3vectors.fail_get_index = True
    return VectorStoreAdapter(
        vectors_bucket="test-bucket",
        index_name="test-index",
        embedding_dimension=4,
        embeddings=fake_embeddings,
        client_factory=lambda region: fake_s3vectors,
    )


@pytest.fixture
def fallback_store() -> FallbackStore:
    """Provide empty fallback store."""
    return FallbackStore()


@pytest.fixture
def sample_session_id() -> str:
    """Provide sample session id."""
    return "s1"
