"""Chat Routes: create chat sessions and exchange messages.

Invariants:
    - A rejected send (empty text, or a turn already in flight) returns
      409 with accepted=false and the unchanged transcript
    - Backend failures never produce an error response here: they appear as
      the apology message in the transcript
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from scholar.api.dependencies import get_chat_manager
from scholar.schemas.chat import (
    ChatSessionResponse, SendMessageRequest, SendMessageResponse,
)
from scholar.services.chat_sessions import ChatSessionManager

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/chat/sessions", tags=["chat"])


@router.post(
    "", response_model=ChatSessionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_chat_session(
    manager: ChatSessionManager = Depends(get_chat_manager),
):
    """Open a conversation; the transcript starts with the greeting."""
    return ChatSessionResponse.from_session(manager.create_session())


@router.get("/{session_id}", response_model=ChatSessionResponse)
async def get_chat_session(
    session_id: UUID, manager: ChatSessionManager = Depends(get_chat_manager),
):
    return ChatSessionResponse.from_session(manager.get(session_id))


@router.post("/{session_id}/messages", response_model=SendMessageResponse)
async def send_chat_message(
    session_id: UUID,
    body: SendMessageRequest,
    manager: ChatSessionManager = Depends(get_chat_manager),
):
    """Send one user message and wait for the model's reply."""
    session = manager.get(session_id)
    accepted = await manager.send(session, body.text)
    response = SendMessageResponse(
        accepted=accepted, session=ChatSessionResponse.from_session(session),
    )
    if not accepted:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content=response.model_dump(mode="json"),
        )
    return response


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_chat_session(
    session_id: UUID, manager: ChatSessionManager = Depends(get_chat_manager),
):
    manager.get(session_id)
    manager.discard(session_id)
