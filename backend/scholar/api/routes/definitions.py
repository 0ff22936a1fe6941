"""Definition Lookup Routes: concurrent per-dictionary lookups via the request registry.

Invariants:
    - POST starts a lookup keyed by dictionary name and returns 202 at once
    - Re-posting while PENDING starts another call; the last call to finish
      decides the slot's terminal state
    - GET never waits: it reports the slot as it is now
"""

import logging

from fastapi import APIRouter, Depends, status

from scholar.api.dependencies import get_definition_registry
from scholar.core.operations import GetDefinition
from scholar.core.schema_contracts import REFERENCE_DICTIONARIES
from scholar.core.errors import ResourceNotFoundError
from scholar.schemas.definitions import RequestStateResponse
from scholar.schemas.words import DefinitionLookupRequest
from scholar.services.request_registry import RequestRegistry

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/definitions", tags=["definitions"])


def _dictionary_or_404(dictionary: str) -> str:
    name = dictionary.upper()
    if name not in REFERENCE_DICTIONARIES:
        raise ResourceNotFoundError("Dictionary", dictionary)
    return name


@router.post(
    "/{dictionary}", response_model=RequestStateResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def start_lookup(
    dictionary: str,
    body: DefinitionLookupRequest,
    registry: RequestRegistry = Depends(get_definition_registry),
):
    """Start (or restart) the lookup for one dictionary."""
    name = _dictionary_or_404(dictionary)
    registry.start(name, GetDefinition(word=body.word, dictionary=name))
    return RequestStateResponse.from_state(name, registry.state_of(name))


@router.get("/{dictionary}", response_model=RequestStateResponse)
async def get_lookup(
    dictionary: str,
    registry: RequestRegistry = Depends(get_definition_registry),
):
    name = _dictionary_or_404(dictionary)
    return RequestStateResponse.from_state(name, registry.state_of(name))


@router.get("", response_model=list[RequestStateResponse])
async def list_lookups(
    registry: RequestRegistry = Depends(get_definition_registry),
):
    """State of every reference dictionary slot (IDLE if never started)."""
    return [
        RequestStateResponse.from_state(name, registry.state_of(name))
        for name in REFERENCE_DICTIONARIES
    ]
