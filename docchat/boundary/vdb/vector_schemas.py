"""
Vector database schemas.

Pydantic models for vector operations. Every public adapter operation returns
one of the result models below with a ``success`` flag and an optional
``error`` instead of raising.

Dependencies: pydantic
System role: Type definitions for vector operations
"""

from pydantic import BaseModel, ConfigDict, Field


class VectorMetadata(BaseModel):
    """
    Metadata attached to each vector.

    session_id is the only filterable key used at query time and is the
    tenancy boundary between sessions.
    """

    model_config = ConfigDict(extra="allow")

    session_id: str = Field(description="Owning session, matched exactly on every query")
    filename: str = Field(default="", description="Original upload filename")
    mimetype: str = Field(default="", description="Upload content type")
    size: int = Field(default=0, description="Upload size in bytes")
    timestamp: str = Field(default="", description="Server-side upsert time, ISO-8601 UTC")


class VectorSearchResult(BaseModel):
    """Single result from vector search."""

    id: str = Field(description="Document identifier (vector key)")
    content: str = Field(description="Stored, possibly truncated, document text")
    metadata: VectorMetadata
    score: float = Field(description="Similarity score, higher is better")


class VectorListing(BaseModel):
    """Single record from a session listing."""

    id: str
    metadata: VectorMetadata


class InitResult(BaseModel):
    success: bool
    error: str | None = None


class VectorHealth(BaseModel):
    """Index statistics, or the reason the store is unavailable."""

    success: bool
    index_name: str | None = None
    total_vectors: int = 0
    total_vectors_approximate: bool = False
    dimension: int | None = None
    error: str | None = None


class StoreResult(BaseModel):
    success: bool
    document_id: str
    vector_id: str | None = None
    error: str | None = None


class SearchResult(BaseModel):
    success: bool
    documents: list[VectorSearchResult] = Field(default_factory=list)
    query: str = ""
    error: str | None = None


class ListResult(BaseModel):
    success: bool
    documents: list[VectorListing] = Field(default_factory=list)
    error: str | None = None
