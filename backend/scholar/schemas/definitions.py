"""Definition Lookup Schemas: per-dictionary request state as seen by the client."""

from pydantic import BaseModel

from scholar.core.domain_types import RequestStatus
from scholar.core.schema_contracts import DefinitionResult
from scholar.services.request_registry import RequestState


class RequestStateResponse(BaseModel):
    key: str
    status: RequestStatus
    result: DefinitionResult | None = None
    error: str | None = None

    @classmethod
    def from_state(cls, key: str, state: RequestState) -> "RequestStateResponse":
        return cls(
            key=key,
            status=state.status,
            result=state.result,
            error=state.error_message,
        )
