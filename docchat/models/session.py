"""
Session domain models and schemas.

Conversation records kept per session and the session info response.

Dependencies: pydantic
System role: Session API contracts
"""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field

from docchat.models.common import CamelModel
from docchat.models.document import StorageTier


def utc_now() -> datetime:
    """Timezone-aware current time."""
    return datetime.now(timezone.utc)


class MessageRole(str, Enum):
    """Author of a conversation message."""

    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """Single conversation message."""

    role: MessageRole
    content: str
    timestamp: datetime = Field(default_factory=utc_now)


class Session(BaseModel):
    """
    Caller-scoped conversation.

    The id is supplied by the client and never generated here. Messages are
    append-only and kept in submission order.
    """

    id: str
    created_at: datetime = Field(default_factory=utc_now)
    messages: list[Message] = Field(default_factory=list)

    def add_exchange(self, user_message: str, assistant_message: str) -> None:
        """Append one user turn and the assistant reply."""
        self.messages.append(Message(role=MessageRole.USER, content=user_message))
        self.messages.append(Message(role=MessageRole.ASSISTANT, content=assistant_message))


class SessionInfo(BaseModel):
    """Document count for a session and the tier that reported it."""

    session_id: str
    document_count: int
    storage: StorageTier


class SessionInfoResponse(CamelModel):
    """Response schema for GET /session/{sessionId}."""

    success: bool = True
    session_id: str
    document_count: int
    storage: StorageTier
