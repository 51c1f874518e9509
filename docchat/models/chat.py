"""
Chat domain models and schemas.

Request/response schemas for chat operations.

Dependencies: pydantic
System role: Chat API contracts
"""

from pydantic import BaseModel, Field

from docchat.models.common import CamelModel
from docchat.models.document import StorageTier


class ChatRequest(CamelModel):
    """Request schema for chat messages."""

    session_id: str = Field(min_length=1, description="Caller-chosen session identifier")
    message: str = Field(min_length=1, description="User question or message")


class RetrievedDocument(BaseModel):
    """Document excerpt selected as grounding context."""

    id: str
    filename: str
    content: str
    score: float | None = None


class ChatResult(BaseModel):
    """Outcome of one chat turn."""

    response_text: str
    documents_found: int
    storage: StorageTier
    warning: str | None = None


class ChatResponse(CamelModel):
    """Response schema for POST /chat."""

    success: bool = True
    response: str
    documents_found: int
    storage: StorageTier
    warning: str | None = None
