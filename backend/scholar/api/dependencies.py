"""Service Wiring: builds the process-wide services and exposes them to routes.

Invariants:
    - init_services() runs once per app (lifespan, or directly in tests)
    - Services live on app.state; routes reach them only through the getters
    - The definition registry is process-wide: single-process uvicorn, state
      lost on restart
"""

from fastapi import Request

from scholar.core.preferences import PreferenceState
from scholar.infrastructure.anthropic_client import AnthropicBackendClient
from scholar.infrastructure.preference_store import init_preferences
from scholar.services.chat_sessions import ChatSessionManager
from scholar.services.operation_invoker import OperationInvoker
from scholar.services.request_registry import RequestRegistry


def init_services(app, settings, client=None, preferences: PreferenceState | None = None) -> None:
    """Attach invoker, registry, chat manager and preferences to app.state.

    Building the default client raises ConfigurationError when the API key
    is missing, which aborts startup.
    """
    if client is None:
        client = AnthropicBackendClient.from_settings(settings)
    invoker = OperationInvoker.from_settings(client, settings)
    app.state.settings = settings
    app.state.invoker = invoker
    app.state.definition_registry = RequestRegistry(invoker)
    app.state.chat_manager = ChatSessionManager(invoker)
    app.state.preferences = preferences or init_preferences(
        settings.preferences_path, settings.system_theme,
    )


def get_invoker(request: Request) -> OperationInvoker:
    return request.app.state.invoker


def get_definition_registry(request: Request) -> RequestRegistry:
    return request.app.state.definition_registry


def get_chat_manager(request: Request) -> ChatSessionManager:
    return request.app.state.chat_manager


def get_preferences(request: Request) -> PreferenceState:
    return request.app.state.preferences
