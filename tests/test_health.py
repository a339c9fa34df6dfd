"""
Tests for health check endpoint.
"""
from fastapi import status


def test_health_endpoint_returns_ok(client):
    """Test that /api/v1/health returns ok."""
    response = client.get("/api/v1/health")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["ok"] is True
    assert "environment" in data


def test_root_endpoint(client):
    response = client.get("/")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["message"] == "Bastion Access Service"


def test_health_endpoint_trace_id_header(client):
    """Test that health endpoint includes trace_id in response headers."""
    response = client.get("/api/v1/health")

    # RequestLoggingMiddleware should add X-Trace-ID header
    assert "X-Trace-ID" in response.headers
    trace_id = response.headers["X-Trace-ID"]
    assert len(trace_id) > 0
