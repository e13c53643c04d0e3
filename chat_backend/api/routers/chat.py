"""Chat API endpoints.

Routes:
- POST /chat - Send a message, receive the assistant reply
- POST /summarize - Summarize recent history and store the summary
- GET /export - Full session export

Dependencies: chat_backend.application.services.chat_service
System role: Chat HTTP API
"""

import logging

from fastapi import APIRouter, Depends, Query

from chat_backend.api.deps import get_chat_service
from chat_backend.application.services.chat_service import ChatService
from chat_backend.models.chat import (
    ChatRequest,
    ChatResponse,
    SummarizeRequest,
    SummarizeResponse,
)
from chat_backend.models.common import SuccessResponse
from chat_backend.models.session import SessionExport

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])


@router.post("/chat", response_model=SuccessResponse[ChatResponse])
async def chat(
    request: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> SuccessResponse[ChatResponse]:
    """Send chat message to a session.

    Errors are raised as domain exceptions and rendered by the app's
    exception handlers (400 validation, 429 rate limit, 502 model, 500 storage).

    Args:
        request: sessionId, message and optional fileId
        chat_service: Injected ChatService

    Returns:
        SuccessResponse[ChatResponse]: Envelope with the reply
    """
    reply = await chat_service.process_chat(
        session_id=request.session_id,
        message=request.message,
        file_id=request.file_id,
    )
    return SuccessResponse[ChatResponse](data=ChatResponse(reply=reply))


@router.post("/summarize", response_model=SuccessResponse[SummarizeResponse])
async def summarize(
    request: SummarizeRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> SuccessResponse[SummarizeResponse]:
    """Summarize the session's recent history.

    Args:
        request: sessionId
        chat_service: Injected ChatService

    Returns:
        SuccessResponse[SummarizeResponse]: Envelope with the new summary
    """
    summary = await chat_service.summarize(session_id=request.session_id)
    return SuccessResponse[SummarizeResponse](data=SummarizeResponse(summary=summary))


@router.get("/export", response_model=SuccessResponse[SessionExport])
async def export_session(
    session_id: str = Query(default="", alias="sessionId"),
    chat_service: ChatService = Depends(get_chat_service),
) -> SuccessResponse[SessionExport]:
    """Export the full session record.

    Args:
        session_id: sessionId query parameter
        chat_service: Injected ChatService

    Returns:
        SuccessResponse[SessionExport]: Envelope with metadata and all messages
    """
    record = await chat_service.export(session_id=session_id)
    return SuccessResponse[SessionExport](data=record)
