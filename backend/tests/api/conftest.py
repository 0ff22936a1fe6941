"""API test fixtures: a fresh app per test, wired to a mock backend.

Invariants:
    - Each test builds its own app (own fault boundary, registry, sessions)
    - Services are wired directly; the lifespan is not run
    - App exceptions become 500 responses instead of propagating into the test
"""

import pytest
from httpx import ASGITransport, AsyncClient

from scholar.api.dependencies import init_services
from scholar.config import Settings
from scholar.core.domain_types import Theme
from scholar.core.preferences import PreferenceState
from scholar.main import create_app
from tests.services.mock_anthropic import MockAnthropicClient


@pytest.fixture
def mock_client():
    return MockAnthropicClient()


@pytest.fixture
def saved_themes():
    return []


@pytest.fixture
def settings_overrides():
    """Per-test Settings fields; override with @pytest.mark.parametrize."""
    return {}


@pytest.fixture
def app(mock_client, saved_themes, settings_overrides, tmp_path):
    settings = Settings(
        _env_file=None,
        anthropic_api_key="sk-ant-test-fake-key",
        preferences_path=str(tmp_path / "prefs.json"),
        **settings_overrides,
    )
    application = create_app(settings)
    init_services(
        application, settings, client=mock_client,
        preferences=PreferenceState(Theme.LIGHT, persist=saved_themes.append),
    )
    return application


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
