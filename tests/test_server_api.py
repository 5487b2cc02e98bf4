"""HTTP tests for root, health, server info, auth and error handling."""
from __future__ import annotations

from fastapi.testclient import TestClient

from mockserver.core.config import Settings
from mockserver.main import create_app


def test_root_describes_endpoints(client: TestClient) -> None:
    response = client.get("/")

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Hytale Server Mock"
    assert body["status"] == "running"
    assert body["version"] == "0.2.0"
    assert body["endpoints"]["playersJoin"] == "POST /api/players/join"


def test_health_reports_ok_regardless_of_roster(client: TestClient) -> None:
    empty = client.get("/api/health")
    client.post("/api/players/join", json={"username": "player1"})
    busy = client.get("/api/health")

    for response in (empty, busy):
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert isinstance(body["uptime"], int)
        assert body["timestamp"]


def test_server_info_reports_metadata(client: TestClient) -> None:
    client.post("/api/players/join", json={"username": "player1"})

    response = client.get("/api/server/info")

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Hytale Server (Mock)"
    assert body["version"] == "0.2.0"
    assert body["status"] == "running"
    assert body["worldName"] == "Zone 1"
    assert body["playersOnline"] == 1
    assert body["maxPlayers"] == 10
    assert body["uptime"] == 0
    assert "startTime" in body


def test_auth_issues_token(client: TestClient) -> None:
    response = client.post("/api/server/auth", json={"username": " player1 "})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["username"] == "player1"
    assert body["token"].startswith("mock-token-")
    assert body["message"] == "Autenticado no servidor Hytale!"
    assert client.get("/api/players").json()["count"] == 0


def test_auth_rejects_missing_username(client: TestClient) -> None:
    assert client.post("/api/server/auth", json={"username": ""}).status_code == 400
    assert client.post("/api/server/auth", json={}).status_code == 400


def test_unknown_route_returns_404_with_path(client: TestClient) -> None:
    response = client.get("/api/inexistente")

    assert response.status_code == 404
    assert response.json() == {"error": "Rota não encontrada", "path": "/api/inexistente"}


def test_responses_carry_request_id(client: TestClient) -> None:
    echoed = client.get("/api/health", headers={"X-Request-ID": "abc123"})
    generated = client.get("/api/health")

    assert echoed.headers["X-Request-ID"] == "abc123"
    assert generated.headers["X-Request-ID"]


def _app_with_failing_route(settings: Settings):
    app = create_app(settings)

    async def explode() -> dict:
        raise RuntimeError("disk on fire")

    app.add_api_route("/api/explode", explode)
    return app


def test_internal_error_hides_detail_in_production(settings: Settings) -> None:
    app = _app_with_failing_route(settings)

    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/api/explode")

    assert response.status_code == 500
    assert response.json() == {"error": "Erro interno do servidor"}


def test_internal_error_exposes_detail_in_development(settings: Settings) -> None:
    dev_settings = settings.model_copy(update={"environment": "development"})
    app = _app_with_failing_route(dev_settings)

    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/api/explode")

    assert response.status_code == 500
    assert response.json()["message"] == "disk on fire"


def test_metrics_track_requests(client: TestClient) -> None:
    client.get("/api/players")
    client.post("/api/players/leave", json={"username": "ghost"})

    snapshot = client.get("/api/metrics").json()["metrics"]

    assert snapshot["GET /api/players"]["count"] == 1
    assert snapshot["POST /api/players/leave"]["errors"] == 0
    assert snapshot["POST /api/players/leave"]["statuses"] == {"4xx": 1}


def test_unknown_paths_share_one_metrics_bucket(client: TestClient) -> None:
    client.get("/api/inexistente/1")
    client.get("/api/inexistente/2")
    client.get("/api/players/join")

    snapshot = client.get("/api/metrics").json()["metrics"]

    assert snapshot["unmatched"]["count"] == 3
    assert "GET /api/players/join" not in snapshot


def test_wrong_method_returns_404_with_path(client: TestClient) -> None:
    wrong_get = client.get("/api/players/join")
    wrong_post = client.post("/api/health")

    assert wrong_get.status_code == 404
    assert wrong_get.json() == {"error": "Rota não encontrada", "path": "/api/players/join"}
    assert wrong_post.status_code == 404
    assert wrong_post.json() == {"error": "Rota não encontrada", "path": "/api/health"}


def test_internal_error_carries_request_id(settings: Settings) -> None:
    app = _app_with_failing_route(settings)

    with TestClient(app, raise_server_exceptions=False) as client:
        echoed = client.get("/api/explode", headers={"X-Request-ID": "rid-1"})
        generated = client.get("/api/explode")

    assert echoed.status_code == 500
    assert echoed.headers["X-Request-ID"] == "rid-1"
    assert generated.headers["X-Request-ID"]
