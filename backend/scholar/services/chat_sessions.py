"""Chat Session Manager: persistent multi-turn conversations with single-flight sends.

Invariants:
    - A new session starts with one synthetic model greeting (never sent to the backend)
    - messages is append-only, in submission/response order; only this module appends
    - send() is a no-op for empty/whitespace text or while the session is PENDING
    - An accepted send appends exactly two messages: the user text immediately,
      then the model reply or the fixed apology
    - Failures are absorbed into the transcript, never raised; status always
      returns to IDLE
    - A turn runs in its own task: cancelling the caller of send() does not
      stop the reply (or apology) from being appended
    - Sessions live in memory for the life of the process (or until discarded)
"""

import asyncio
import logging
from dataclasses import dataclass, field
from uuid import UUID, uuid4

from scholar.core.domain_types import ChatRole, ChatStatus, OperationKind
from scholar.core.errors import ResourceNotFoundError
from scholar.core.operations import ChatTurn, ConversationHandle
from scholar.core.prompt_builder import CHAT_GREETING
from scholar.services.operation_invoker import FAILURE_MESSAGES, OperationInvoker

logger = logging.getLogger(__name__)

CHAT_APOLOGY = FAILURE_MESSAGES[OperationKind.CHAT_TURN]


@dataclass(frozen=True)
class ChatMessage:
    role: ChatRole
    text: str


@dataclass
class ChatSession:
    conversation: ConversationHandle = field(repr=False)
    id: UUID = field(default_factory=uuid4)
    messages: list[ChatMessage] = field(default_factory=list)
    status: ChatStatus = ChatStatus.IDLE

    @property
    def is_pending(self) -> bool:
        return self.status == ChatStatus.PENDING


class ChatSessionManager:
    """Owns chat sessions and runs their turns."""

    def __init__(self, invoker: OperationInvoker) -> None:
        self._invoker = invoker
        self._sessions: dict[UUID, ChatSession] = {}
        self._tasks: set[asyncio.Task] = set()

    def create_session(self) -> ChatSession:
        session = ChatSession(conversation=self._invoker.open_conversation())
        session.messages.append(ChatMessage(ChatRole.MODEL, CHAT_GREETING))
        self._sessions[session.id] = session
        logger.info("Chat session created", extra={"session_id": str(session.id)})
        return session

    def get(self, session_id: UUID) -> ChatSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise ResourceNotFoundError("Chat session", str(session_id))
        return session

    def discard(self, session_id: UUID) -> None:
        self._sessions.pop(session_id, None)

    async def send(self, session: ChatSession, text: str) -> bool:
        """Run one turn. Returns False (and changes nothing) if rejected."""
        text = (text or "").strip()
        if not text or session.is_pending:
            return False

        session.messages.append(ChatMessage(ChatRole.USER, text))
        session.status = ChatStatus.PENDING
        task = asyncio.create_task(self._complete_turn(session, text))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        # A cancelled caller stops waiting; the turn still completes.
        await asyncio.shield(task)
        return True

    async def drain(self) -> None:
        """Wait for every in-flight turn to finish (never cancels)."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def _complete_turn(self, session: ChatSession, text: str) -> None:
        """Append the reply or the apology, then return the session to IDLE."""
        try:
            reply = await self._invoker.invoke(
                ChatTurn(conversation=session.conversation, message=text),
            )
            session.messages.append(ChatMessage(ChatRole.MODEL, reply))
        except Exception as e:
            logger.error(
                "Error sending chat message: %s", e,
                extra={"session_id": str(session.id)}, exc_info=True,
            )
            session.messages.append(ChatMessage(ChatRole.MODEL, CHAT_APOLOGY))
        finally:
            session.status = ChatStatus.IDLE
