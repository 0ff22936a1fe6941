"""Anthropic Backend Client: wraps AsyncAnthropic with credential check and error mapping.

Invariants:
    - Credential checked once, in the constructor: missing key -> ConfigurationError
    - No automatic retries anywhere (SDK built with max_retries=0); retry is
      the caller's decision
    - Every transport/backend failure is mapped to BackendUnavailableError
      carrying the caller's ErrorContext (operation + user-facing message)
    - CancelledError (BaseException) passes through unmapped
"""

import json
import logging
from typing import Any

import anthropic
from anthropic import (
    APIError,
    APIConnectionError,
    APIStatusError,
    RateLimitError,
    APITimeoutError,
)

from scholar.core.errors import BackendUnavailableError, ConfigurationError, ErrorContext

logger = logging.getLogger(__name__)

# OverloadedError (HTTP 529) is not re-exported by every SDK version;
# detect it by status code instead.
_OVERLOADED_STATUS = 529


class AnthropicBackendClient:
    """Single-attempt Anthropic client with typed error mapping."""

    def __init__(self, api_key: str | None, timeout_seconds: int = 60):
        if not api_key or not api_key.strip():
            raise ConfigurationError(
                "ANTHROPIC_API_KEY environment variable not set",
                "anthropic_api_key",
            )
        self.client = anthropic.AsyncAnthropic(
            api_key=api_key,
            timeout=timeout_seconds,
            max_retries=0,
        )

    @classmethod
    def from_settings(cls, settings) -> "AnthropicBackendClient":
        return cls(
            settings.anthropic_api_key,
            timeout_seconds=settings.anthropic_timeout_seconds,
        )

    async def create_message(
        self,
        *,
        model: str,
        max_tokens: int,
        messages: list,
        system: str | None = None,
        tools: list | None = None,
        tool_choice: dict | None = None,
        context: ErrorContext | None = None,
    ):
        """One Messages API round-trip. Raises BackendUnavailableError on failure."""
        kwargs: dict[str, Any] = {
            "model": model, "max_tokens": max_tokens, "messages": messages,
        }
        if system:
            kwargs["system"] = system
        if tools:
            kwargs["tools"] = tools
        if tool_choice:
            kwargs["tool_choice"] = tool_choice

        try:
            response = await self.client.messages.create(**kwargs)
        except RateLimitError as e:
            raise BackendUnavailableError(
                f"Rate limit or quota exceeded: {e}", "rate_limit", context=context,
            )
        except APITimeoutError:
            raise BackendUnavailableError(
                "API timeout", "timeout", context=context,
            )
        except APIConnectionError as e:
            raise BackendUnavailableError(
                f"Connection error: {e}", "connection_error", context=context,
            )
        except APIStatusError as e:
            kind = "overloaded" if e.status_code == _OVERLOADED_STATUS else "backend_error"
            raise BackendUnavailableError(
                f"HTTP {e.status_code}: {e}", kind, context=context,
            )
        except APIError as e:
            raise BackendUnavailableError(
                str(e), "backend_error", context=context,
            )
        except Exception as e:
            logger.error(
                f"Unexpected Anthropic error: {e}", exc_info=True,
            )
            raise BackendUnavailableError(
                str(e), "unknown", context=context,
            )
        self._log_success(response, context)
        return response

    def _log_success(self, response, context: ErrorContext | None) -> None:
        """Log successful API call with token usage."""
        usage = getattr(response, "usage", None)
        logger.info(
            "Anthropic API success",
            extra={
                "operation": context.operation if context else None,
                "input_tokens": getattr(usage, "input_tokens", None),
                "output_tokens": getattr(usage, "output_tokens", None),
            },
        )


# ─── Response helpers ───────────────────────────────────────────

def response_text(response) -> str:
    """Concatenate the text blocks of a Messages API response."""
    parts = [
        b.text for b in getattr(response, "content", None) or []
        if getattr(b, "type", None) == "text"
    ]
    return "\n".join(parts)


def structured_payload(response, tool_name: str) -> str:
    """Raw text for a schema-bound reply.

    The forced tool's input is serialized back to JSON; if the backend
    answered in prose instead, its text is returned for the sanitizer.
    """
    for block in getattr(response, "content", None) or []:
        if getattr(block, "type", None) == "tool_use" and block.name == tool_name:
            return json.dumps(block.input)
    return response_text(response)
