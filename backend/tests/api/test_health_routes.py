"""Health Probes and Fault Boundary.

Tests:
    - Liveness and readiness report healthy on a fresh app
    - An unhandled exception returns 500 and trips the boundary
    - Once tripped, every non-health route returns the 503 fallback and
      health reports "faulted"
    - Domain errors (ScholarError) never trip the boundary
"""

import pytest

from tests.services.mock_anthropic import backend_failure


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/api/v1/health/")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_ready(client):
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert response.json()["in_flight_requests"] == 0


@pytest.mark.asyncio
async def test_unhandled_exception_trips_boundary(app, client):
    # No queued response: the mock backend raises RuntimeError.
    response = await client.post("/api/v1/words/find", json={"letters": "abc"})
    assert response.status_code == 500
    assert response.json()["error"]["code"] == "INTERNAL_ERROR"
    assert app.state.fault_boundary.tripped

    response = await client.get("/api/v1/preferences")
    assert response.status_code == 503
    assert response.json()["error"]["code"] == "SERVICE_FAULTED"

    response = await client.get("/api/v1/health/")
    assert response.status_code == 503
    assert response.json()["status"] == "faulted"
    assert response.json()["reason"] == "RuntimeError"


@pytest.mark.asyncio
async def test_domain_errors_do_not_trip_boundary(app, client, mock_client):
    mock_client.queue(backend_failure())
    await client.post("/api/v1/words/find", json={"letters": "abc"})
    await client.post("/api/v1/words/find", json={"letters": "123"})
    assert not app.state.fault_boundary.tripped
    assert (await client.get("/api/v1/preferences")).status_code == 200
