"""
Document domain models and schemas.

Uploaded file records, stored documents, and ingestion results.

Dependencies: pydantic
System role: Document API contracts
"""

from enum import Enum

from pydantic import BaseModel, Field

from docchat.models.common import CamelModel


class StorageTier(str, Enum):
    """Where a document lives. Every document is stored in exactly one tier."""

    VECTOR = "vector"
    FALLBACK = "fallback"


class UploadedFile(BaseModel):
    """Raw upload handed to the ingestion service."""

    filename: str
    mime_type: str
    data: bytes = Field(repr=False)

    @property
    def size(self) -> int:
        return len(self.data)


class DocumentMetadata(BaseModel):
    """Metadata carried with every stored document."""

    filename: str
    mimetype: str
    size: int
    timestamp: str = Field(description="Ingestion time, ISO-8601 UTC")


class StoredDocument(BaseModel):
    """Document held in the fallback store."""

    id: str
    session_id: str
    content: str = Field(min_length=1)
    metadata: DocumentMetadata


class IngestionResult(CamelModel):
    """Per-file outcome of a successful ingestion."""

    success: bool = True
    document_id: str
    filename: str
    text_length: int
    storage: StorageTier


class IngestionFailure(CamelModel):
    """Per-file failure captured without aborting the batch."""

    filename: str
    error: str


class BatchIngestionResult(BaseModel):
    """Partial-success report for a multi-file upload."""

    results: list[IngestionResult] = Field(default_factory=list)
    errors: list[IngestionFailure] = Field(default_factory=list)


class UploadResponse(CamelModel):
    """Response schema for POST /upload."""

    success: bool = True
    message: str
    results: list[IngestionResult]
    errors: list[IngestionFailure] | None = None
