"""Anthropic Conversation: a multi-turn chat handle over the stateless Messages API.

Invariants:
    - The system instruction is fixed at construction and sent with every turn
    - history only grows, and only after a successful, non-empty reply
    - A failed turn leaves history unchanged (the error propagates to the caller)
"""

import logging

from scholar.core.errors import ErrorContext
from scholar.infrastructure.anthropic_client import AnthropicBackendClient, response_text

logger = logging.getLogger(__name__)


class AnthropicConversation:
    """Client-side conversation state for one chat session."""

    def __init__(
        self,
        client: AnthropicBackendClient,
        model: str,
        system: str,
        max_tokens: int = 2048,
    ) -> None:
        self.client = client
        self.model = model
        self.system = system
        self.max_tokens = max_tokens
        self.history: list[dict] = []

    async def send(self, message: str, context: ErrorContext | None = None) -> str:
        messages = [*self.history, {"role": "user", "content": message}]
        response = await self.client.create_message(
            model=self.model,
            max_tokens=self.max_tokens,
            system=self.system,
            messages=messages,
            context=context,
        )
        text = response_text(response)
        if text:
            self.history = [*messages, {"role": "assistant", "content": text}]
        else:
            logger.warning("Empty chat reply; turn not recorded in history")
        return text
