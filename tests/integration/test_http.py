"""Tests for the health and metrics endpoints and CORS policy."""

from chat_relay.settings import app_settings


def test_health_endpoint_without_connections(client):
    """
    Test health endpoint reports zero connections on a fresh app.

    Args:
        client: FastAPI test client fixture.
    """
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "connections": 0}


def test_health_endpoint_counts_connections(client):
    with client.websocket_connect(app_settings.WS_PATH) as ws:
        ws.receive_json()

        response = client.get("/health")

    assert response.json()["connections"] == 1


def test_metrics_endpoint(client):
    """Test Prometheus exposition includes the relay metrics."""
    with client.websocket_connect(app_settings.WS_PATH) as ws:
        ws.receive_json()
        ws.send_json({"event": "chat", "data": "count me"})
        ws.receive_json()

    response = client.get("/metrics")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    body = response.text
    assert "ws_connections_active" in body
    assert "ws_messages_received_total" in body
    assert 'ws_messages_sent_total{event="message"}' in body
    assert "ws_broadcast_duration_seconds_bucket" in body


def test_cors_allows_configured_origin(client):
    origin = app_settings.CORS_ALLOW_ORIGINS[0]

    response = client.options(
        "/health",
        headers={
            "Origin": origin,
            "Access-Control-Request-Method": "GET",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == origin


def test_cors_rejects_unknown_origin(client):
    response = client.options(
        "/health",
        headers={
            "Origin": "http://evil.example.com",
            "Access-Control-Request-Method": "GET",
        },
    )

    assert response.status_code == 400
    assert "access-control-allow-origin" not in response.headers
