"""Chat Schemas: session transcript and message submission."""

from uuid import UUID

from pydantic import BaseModel, Field

from scholar.core.domain_types import ChatRole, ChatStatus
from scholar.services.chat_sessions import ChatSession


class ChatMessageOut(BaseModel):
    role: ChatRole
    text: str


class ChatSessionResponse(BaseModel):
    id: UUID
    status: ChatStatus
    messages: list[ChatMessageOut]

    @classmethod
    def from_session(cls, session: ChatSession) -> "ChatSessionResponse":
        return cls(
            id=session.id,
            status=session.status,
            messages=[
                ChatMessageOut(role=m.role, text=m.text) for m in session.messages
            ],
        )


class SendMessageRequest(BaseModel):
    # Empty/whitespace text is allowed here: the manager treats it as a no-op.
    text: str = Field(max_length=4000)


class SendMessageResponse(BaseModel):
    accepted: bool
    session: ChatSessionResponse
