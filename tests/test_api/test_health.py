"""
Alert Relay - Health Endpoint Tests
"""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health_check_connected(client: AsyncClient, dispatcher):
    """Test the health check endpoint with a connected channel."""
    await dispatcher.start()
    
    response = await client.get("/health")
    
    assert response.status_code == 200
    data = response.json()
    
    assert data["status"] == "healthy"
    assert "timestamp" in data
    assert data["version"] == "0.1.0"
    assert data["channels"][0]["channel"] == "jabber"
    assert data["channels"][0]["status"] == "connected"
    assert data["channels"][0]["healthy"] is True


@pytest.mark.asyncio
async def test_health_check_degraded(client: AsyncClient, fake_connection, dispatcher):
    """A channel without a session makes the service degraded."""
    fake_connection.connected = False
    fake_connection.fail_connect = True
    await dispatcher.start()
    
    response = await client.get("/health")
    
    data = response.json()
    assert data["status"] == "degraded"
    assert data["channels"][0]["status"] == "degraded"
    assert data["channels"][0]["error"] == "Connection refused"


@pytest.mark.asyncio
async def test_readiness_check(client: AsyncClient):
    """Test the readiness check endpoint."""
    response = await client.get("/ready")
    
    assert response.status_code == 200
    assert response.json()["status"] == "ready"


@pytest.mark.asyncio
async def test_liveness_check(client: AsyncClient):
    """Test the liveness check endpoint."""
    response = await client.get("/live")
    
    assert response.status_code == 200
    assert response.json()["status"] == "alive"
