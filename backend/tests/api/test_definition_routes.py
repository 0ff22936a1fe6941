"""Definition Lookup Routes: concurrent per-dictionary lookups.

Tests:
    - POST returns 202 with the slot PENDING; GET reports the outcome later
    - Each dictionary slot resolves independently
    - Unknown dictionaries -> 404
"""

import pytest

from tests.services.mock_anthropic import backend_failure, tool_response


@pytest.mark.asyncio
async def test_lookup_lifecycle(app, client, mock_client):
    mock_client.queue(tool_response("report_definition", {
        "isValid": True, "definition": "life force",
    }))
    response = await client.post("/api/v1/definitions/ospd", json={"word": "qi"})
    assert response.status_code == 202
    assert response.json()["status"] == "pending"

    await app.state.definition_registry.drain()
    response = await client.get("/api/v1/definitions/OSPD")
    assert response.json() == {
        "key": "OSPD",
        "status": "succeeded",
        "result": {"isValid": True, "definition": "life force"},
        "error": None,
    }


@pytest.mark.asyncio
async def test_slots_are_independent(app, client, mock_client):
    mock_client.queue(
        tool_response("report_definition", {"isValid": False, "definition": ""}),
        backend_failure("connection_error"),
    )
    await client.post("/api/v1/definitions/NWL", json={"word": "zzz"})
    await client.post("/api/v1/definitions/CSW", json={"word": "zzz"})
    await app.state.definition_registry.drain()

    states = {s["key"]: s for s in (await client.get("/api/v1/definitions")).json()}
    assert states["OSPD"]["status"] == "idle"
    assert states["NWL"]["status"] == "succeeded"
    assert states["NWL"]["result"]["isValid"] is False
    assert states["CSW"]["status"] == "failed"
    assert states["CSW"]["error"] == "Failed to validate the word. Please try again."


@pytest.mark.asyncio
async def test_unknown_dictionary_is_404(client):
    response = await client.get("/api/v1/definitions/WEBSTER")
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "RESOURCE_NOT_FOUND"
