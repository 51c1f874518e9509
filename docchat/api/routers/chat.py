"""Chat API endpoints.

Routes:
- POST /chat - Send a message and receive a document-grounded answer

Dependencies: docchat.application.services.chat_service
System role: Chat messaging HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from docchat.api.deps import get_chat_service
from docchat.application.services.chat_service import ChatService
from docchat.models.chat import ChatRequest, ChatResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])


@router.post("/chat", response_model=ChatResponse, response_model_exclude_none=True)
async def chat(
    request: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    """Send chat message to a session.

    Flow:
    1. Retrieve up to three session documents (vector store, then fallback)
    2. Build grounded or general prompt and call Gemini
    3. Map ChatResult to ChatResponse

    Quota exhaustion is returned as a successful response carrying a warning.

    Args:
        request: ChatRequest with sessionId and message
        chat_service: Injected ChatService

    Returns:
        ChatResponse: Answer, documents used, and storage tier
    """
    logger.info(f"{__name__}:chat - START session_id={request.session_id}")

    result = await chat_service.process_chat(
        session_id=request.session_id,
        message=request.message,
    )

    return ChatResponse(
        response=result.response_text,
        documents_found=result.documents_found,
        storage=result.storage,
        warning=result.warning,
    )
