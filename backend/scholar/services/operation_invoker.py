"""Operation Invoker: one backend round-trip per operation.

Invariants:
    - Input is validated before any network call (ValidationInputError)
    - Schema-bound kinds send their contract as a forced tool AND are always
      run through the sanitizer; the constraint is not trusted on its own
    - ANALYZE_BOARD_IMAGE and CHAT_TURN return backend text unmodified
    - Backend failures surface as BackendUnavailableError whose user message
      is fixed per operation kind; nothing is retried here
    - Malformed replies never raise: the caller gets the fallback value
"""

import logging
from typing import Any

from scholar.core.domain_types import OperationKind
from scholar.core.errors import ErrorContext
from scholar.core.operations import (
    DEFAULT_LIMITS, AnalyzeBoardImage, ChatTurn, CrossValidate, FindWords,
    GetDefinition, InputLimits, Operation, validate_operation,
)
from scholar.core.prompt_builder import CHAT_SYSTEM_INSTRUCTION, build_prompt
from scholar.core.response_sanitizer import (
    normalize_cross_validation, normalize_word_list, parse_response,
)
from scholar.core.schema_contracts import (
    CrossValidationReport, DefinitionResult, WordSearchResult, contract_for,
)
from scholar.infrastructure.anthropic_client import (
    AnthropicBackendClient, response_text, structured_payload,
)
from scholar.infrastructure.anthropic_conversation import AnthropicConversation

logger = logging.getLogger(__name__)

_DEFAULT = object()

FAILURE_MESSAGES: dict[OperationKind, str] = {
    OperationKind.FIND_WORDS: (
        "Failed to find words. Please check your letters and try again."
    ),
    OperationKind.GET_DEFINITION: (
        "Failed to validate the word. Please try again."
    ),
    OperationKind.CROSS_VALIDATE: (
        "Failed to cross-check the word. Please try again."
    ),
    OperationKind.ANALYZE_BOARD_IMAGE: (
        "Failed to analyze the board image. Please ensure the image is "
        "clear and try again."
    ),
    OperationKind.CHAT_TURN: (
        "Sorry, I encountered an error. Please try again."
    ),
}


def default_fallback(op: Operation) -> Any:
    """Degraded result used when a schema-bound reply cannot be parsed."""
    match op:
        case FindWords():
            return WordSearchResult(words=[])
        case GetDefinition():
            return DefinitionResult(is_valid=False, definition="")
        case CrossValidate():
            return CrossValidationReport(word=op.word, verdicts=[])
    return None


class OperationInvoker:
    """Builds prompts, calls the backend, sanitizes replies."""

    def __init__(
        self,
        client: AnthropicBackendClient,
        model: str,
        max_tokens: int = 2048,
        limits: InputLimits = DEFAULT_LIMITS,
    ) -> None:
        self.client = client
        self.model = model
        self.max_tokens = max_tokens
        self.limits = limits

    @classmethod
    def from_settings(cls, client: AnthropicBackendClient, settings) -> "OperationInvoker":
        return cls(
            client,
            model=settings.backend_model,
            max_tokens=settings.backend_max_tokens,
            limits=InputLimits.from_settings(settings),
        )

    def open_conversation(self) -> AnthropicConversation:
        """New backend conversation carrying the fixed chat system instruction."""
        return AnthropicConversation(
            self.client, self.model, CHAT_SYSTEM_INSTRUCTION, self.max_tokens,
        )

    async def invoke(self, op: Operation, fallback: Any = _DEFAULT) -> Any:
        """Run one operation; returns a typed result, fallback, or raw text.

        Without an explicit fallback, default_fallback(op) is used.
        """
        op = validate_operation(op, self.limits)
        ctx = ErrorContext(
            operation=op.kind.value, user_message=FAILURE_MESSAGES[op.kind],
        )
        if fallback is _DEFAULT:
            fallback = default_fallback(op)

        match op:
            case FindWords():
                return await self._invoke_structured(
                    op, ctx, fallback,
                    postprocess=lambda r: normalize_word_list(r, op.length),
                )
            case GetDefinition():
                return await self._invoke_structured(op, ctx, fallback)
            case CrossValidate():
                return await self._invoke_structured(
                    op, ctx, fallback,
                    postprocess=lambda r: normalize_cross_validation(r, op.word),
                )
            case AnalyzeBoardImage():
                return await self._analyze_board(op, ctx)
            case ChatTurn():
                return await op.conversation.send(op.message, context=ctx)
        raise TypeError(f"Unsupported operation: {op!r}")

    async def _invoke_structured(self, op, ctx, fallback, postprocess=None):
        contract = contract_for(op.kind)
        response = await self.client.create_message(
            model=self.model,
            max_tokens=self.max_tokens,
            messages=[{"role": "user", "content": build_prompt(op)}],
            tools=[contract.as_tool()],
            tool_choice={"type": "tool", "name": contract.tool_name},
            context=ctx,
        )
        raw = structured_payload(response, contract.tool_name)
        return parse_response(raw, fallback, contract.model, postprocess, ctx)

    async def _analyze_board(self, op: AnalyzeBoardImage, ctx: ErrorContext) -> str:
        content = [
            {
                "type": "image",
                "source": {
                    "type": "base64",
                    "media_type": op.mime_type,
                    "data": op.image_base64,
                },
            },
            {"type": "text", "text": build_prompt(op)},
        ]
        response = await self.client.create_message(
            model=self.model,
            max_tokens=self.max_tokens,
            messages=[{"role": "user", "content": content}],
            context=ctx,
        )
        return response_text(response)
