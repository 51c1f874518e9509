"""
Session API endpoints.

Routes: GET /session/{session_id}

Dependencies: docchat.application.services.session_service
System role: Session info HTTP API
"""

from fastapi import APIRouter, Depends

from docchat.api.deps import get_session_service
from docchat.application.services.session_service import SessionService
from docchat.models.session import SessionInfoResponse

router = APIRouter(prefix="/session", tags=["sessions"])


@router.get("/{session_id}", response_model=SessionInfoResponse)
async def get_session(
    session_id: str,
    session_service: SessionService = Depends(get_session_service),
) -> SessionInfoResponse:
    """Document count for a session and the tier that reported it."""
    info = await session_service.get_session_info(session_id)
    return SessionInfoResponse(
        session_id=info.session_id,
        document_count=info.document_count,
        storage=info.storage,
    )
