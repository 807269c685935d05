"""Tests basiques de l'API FastAPI (endpoints simples)."""


def test_root_endpoint_returns_service_info(client):
    response = client.get("/")
    assert response.status_code == 200

    data = response.json()
    assert data.get("service") == "taskboard-api"
    assert data.get("status") == "operational"


def test_health_check_endpoint_ok(client):
    response = client.get("/health")
    assert response.status_code == 200

    data = response.json()
    assert data.get("status") == "healthy"
    assert data.get("service") == "taskboard-api"
    assert data.get("database") == "sqlite"


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/api/v1/nothing-here")
    assert response.status_code == 404

    body = response.json()
    assert body["success"] is False
    assert body["statusCode"] == 404
    assert body["errors"] == []
