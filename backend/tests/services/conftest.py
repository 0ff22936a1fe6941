"""Service test fixtures: mock backend client and an invoker wired to it.

Invariants:
    - Every test gets a fresh MockAnthropicClient (no shared response queue)
    - The invoker uses default input limits and a fixed model name
"""

import pytest

from scholar.services.operation_invoker import OperationInvoker
from tests.services.mock_anthropic import MockAnthropicClient

TEST_MODEL = "claude-test-model"


@pytest.fixture
def mock_client():
    return MockAnthropicClient()


@pytest.fixture
def invoker(mock_client):
    return OperationInvoker(mock_client, model=TEST_MODEL, max_tokens=512)
