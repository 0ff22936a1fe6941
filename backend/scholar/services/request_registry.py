"""Concurrent Request Registry: independent pending/success/failure slots per key.

Invariants:
    - start(K) sets K to PENDING immediately, even if K is already PENDING
    - No de-duplication and no cancellation: every started call runs to
      completion and always records its outcome
    - Last-completion-wins: the terminal state of K is written by whichever
      call for K finishes last, regardless of dispatch order
    - Distinct keys never affect each other; unknown keys report IDLE
    - The registry holds a strong reference to every in-flight task
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

from scholar.core.domain_types import RequestStatus
from scholar.core.errors import ScholarError
from scholar.core.operations import Operation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestState:
    status: RequestStatus
    result: Any = None
    error: Exception | None = None

    @property
    def error_message(self) -> str | None:
        if self.error is None:
            return None
        if isinstance(self.error, ScholarError):
            return self.error.user_message
        return "An unexpected error occurred."


IDLE = RequestState(RequestStatus.IDLE)
PENDING = RequestState(RequestStatus.PENDING)


class RequestRegistry:
    """Tracks RequestState per key for fan-out operation calls."""

    def __init__(self, invoker) -> None:
        self._invoker = invoker
        self._states: dict[str, RequestState] = {}
        self._tasks: set[asyncio.Task] = set()

    def start(self, key: str, operation: Operation) -> asyncio.Task:
        """Dispatch `operation` under `key`; returns the running task."""
        self._states[key] = PENDING
        task = asyncio.create_task(self._run(key, operation))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def state_of(self, key: str) -> RequestState:
        return self._states.get(key, IDLE)

    def snapshot(self) -> dict[str, RequestState]:
        return dict(self._states)

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    async def drain(self) -> None:
        """Wait for every in-flight call to finish (never cancels)."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def _run(self, key: str, operation: Operation) -> None:
        try:
            result = await self._invoker.invoke(operation)
        except ScholarError as e:
            logger.warning(
                "Request failed: %s", e.message,
                extra={"request_key": key, "error_code": e.code},
            )
            self._states[key] = RequestState(RequestStatus.FAILED, error=e)
        except Exception as e:
            logger.error(
                "Unexpected error in request: %s", e,
                extra={"request_key": key}, exc_info=True,
            )
            self._states[key] = RequestState(RequestStatus.FAILED, error=e)
        else:
            self._states[key] = RequestState(RequestStatus.SUCCEEDED, result=result)
