"""Request Registry: independent per-key slots with last-completion-wins.

Tests:
    - start() sets PENDING synchronously; unknown keys report IDLE
    - Distinct keys resolve independently (one success, one failure)
    - Same key, two calls: the later completion decides the terminal state,
      whatever the dispatch order
    - drain() waits for every call and cancels none
"""

import asyncio

import pytest

from scholar.core.domain_types import RequestStatus
from scholar.core.errors import BackendUnavailableError, ErrorContext
from scholar.core.operations import GetDefinition
from scholar.core.schema_contracts import DefinitionResult
from scholar.services.request_registry import RequestRegistry


class _ControlledInvoker:
    """Each invoke() waits on its own future, resolved by the test."""

    def __init__(self):
        self.pending: list[asyncio.Future] = []

    async def invoke(self, op):
        future = asyncio.get_running_loop().create_future()
        self.pending.append(future)
        return await future


def _result(definition):
    return DefinitionResult(is_valid=True, definition=definition)


def _failure():
    ctx = ErrorContext(operation="get_definition", user_message="Failed to validate the word.")
    return BackendUnavailableError("down", "connection_error", context=ctx)


async def _settle():
    for _ in range(5):
        await asyncio.sleep(0)


@pytest.mark.asyncio
async def test_unknown_key_is_idle():
    registry = RequestRegistry(_ControlledInvoker())
    assert registry.state_of("OSPD").status == RequestStatus.IDLE


@pytest.mark.asyncio
async def test_start_sets_pending_immediately():
    invoker = _ControlledInvoker()
    registry = RequestRegistry(invoker)
    registry.start("OSPD", GetDefinition(word="qi", dictionary="OSPD"))

    assert registry.state_of("OSPD").status == RequestStatus.PENDING
    assert registry.in_flight == 1
    await _settle()
    invoker.pending[0].set_result(_result("x"))
    await registry.drain()


@pytest.mark.asyncio
async def test_distinct_keys_resolve_independently():
    invoker = _ControlledInvoker()
    registry = RequestRegistry(invoker)
    registry.start("OSPD", GetDefinition(word="qi", dictionary="OSPD"))
    registry.start("CSW", GetDefinition(word="qi", dictionary="CSW"))
    await _settle()

    invoker.pending[1].set_exception(_failure())
    await _settle()
    assert registry.state_of("CSW").status == RequestStatus.FAILED
    assert registry.state_of("OSPD").status == RequestStatus.PENDING

    invoker.pending[0].set_result(_result("life force"))
    await registry.drain()
    ospd = registry.state_of("OSPD")
    assert ospd.status == RequestStatus.SUCCEEDED
    assert ospd.result.definition == "life force"
    assert registry.state_of("CSW").error_message == "Failed to validate the word."
    assert registry.state_of("NWL").status == RequestStatus.IDLE


@pytest.mark.asyncio
async def test_same_key_last_completion_wins():
    """Second dispatch finishes first; the first dispatch's outcome sticks."""
    invoker = _ControlledInvoker()
    registry = RequestRegistry(invoker)
    registry.start("NWL", GetDefinition(word="qi"))
    registry.start("NWL", GetDefinition(word="qi"))
    await _settle()
    first, second = invoker.pending

    second.set_result(_result("second"))
    await _settle()
    assert registry.state_of("NWL").result.definition == "second"

    first.set_result(_result("first"))
    await registry.drain()
    assert registry.state_of("NWL").result.definition == "first"


@pytest.mark.asyncio
async def test_late_failure_overwrites_success():
    invoker = _ControlledInvoker()
    registry = RequestRegistry(invoker)
    registry.start("NWL", GetDefinition(word="qi"))
    registry.start("NWL", GetDefinition(word="qi"))
    await _settle()

    invoker.pending[0].set_result(_result("ok"))
    await _settle()
    invoker.pending[1].set_exception(_failure())
    await registry.drain()
    assert registry.state_of("NWL").status == RequestStatus.FAILED


@pytest.mark.asyncio
async def test_unexpected_error_recorded_as_failure():
    invoker = _ControlledInvoker()
    registry = RequestRegistry(invoker)
    registry.start("OSPD", GetDefinition(word="qi", dictionary="OSPD"))
    await _settle()
    invoker.pending[0].set_exception(RuntimeError("bug"))
    await registry.drain()

    state = registry.state_of("OSPD")
    assert state.status == RequestStatus.FAILED
    assert state.error_message == "An unexpected error occurred."


@pytest.mark.asyncio
async def test_drain_waits_without_cancelling():
    invoker = _ControlledInvoker()
    registry = RequestRegistry(invoker)
    tasks = [
        registry.start(name, GetDefinition(word="qi", dictionary=name))
        for name in ("OSPD", "NWL", "CSW")
    ]
    await _settle()

    async def resolve_later():
        await asyncio.sleep(0.01)
        for future in invoker.pending:
            future.set_result(_result("x"))

    resolver = asyncio.create_task(resolve_later())
    await registry.drain()
    await resolver
    assert registry.in_flight == 0
    assert not any(t.cancelled() for t in tasks)
    assert {s.status for s in registry.snapshot().values()} == {RequestStatus.SUCCEEDED}
