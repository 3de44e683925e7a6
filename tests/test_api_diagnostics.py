import httpx
import pytest
from fastapi.testclient import TestClient

from vertexcheck.api.diagnostics import get_probe
from vertexcheck.config.settings import settings
from vertexcheck.main import app
from vertexcheck.services.diagnostic_probe import DiagnosticProbe


BODY = {"project": "my-project", "location": "us-central1", "token": "ya29.test-token"}


def _vertex_handler(request: httpx.Request) -> httpx.Response:
    if request.url.path.endswith(":generateContent"):
        return httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": "VERTEX_OK"}]}}]})
    if request.headers.get("Authorization") != "Bearer ya29.test-token":
        return httpx.Response(401, json={"error": {"code": 401, "message": "Request had invalid authentication credentials."}})
    return httpx.Response(200, json={"models": [{"name": "publishers/google/models/gemini-1.5-flash-001"}]})


@pytest.fixture
def client():
    app.dependency_overrides[get_probe] = lambda: DiagnosticProbe(transport=httpx.MockTransport(_vertex_handler))
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def test_connect_endpoint_serializes_camel_case(client):
    resp = client.post("/diagnostics/connect", json=BODY)

    assert resp.status_code == 200
    assert resp.json() == {
        "success": True,
        "message": "Conexión autorizada correctamente.",
        "data": {"modelsFound": 1, "sample": "publishers/google/models/gemini-1.5-flash-001"},
    }


def test_failed_check_is_still_http_200(client):
    resp = client.post("/diagnostics/connect", json={**BODY, "token": "expired"})

    assert resp.status_code == 200
    assert resp.json()["success"] is False
    assert resp.json()["message"] == "401 - Request had invalid authentication credentials."


def test_generate_endpoint_accepts_model_id(client):
    resp = client.post("/diagnostics/generate", json={**BODY, "modelId": "gemini-1.5-pro-002"})

    assert resp.status_code == 200
    assert resp.json()["data"] == {"output": "VERTEX_OK", "model": "gemini-1.5-pro-002"}


def test_run_endpoint_returns_both_checks(client):
    resp = client.post("/diagnostics/run", json=BODY)

    assert resp.status_code == 200
    payload = resp.json()
    assert payload["connect"]["success"] is True
    assert payload["generate"]["success"] is True


def test_missing_token_without_settings_is_400(client, monkeypatch):
    monkeypatch.setattr(settings, "VERTEX_ACCESS_TOKEN", None)

    resp = client.post("/diagnostics/connect", json={"project": "my-project", "location": "us-central1"})

    assert resp.status_code == 400
    assert "token" in resp.json()["detail"]


def test_values_fall_back_to_settings(client, monkeypatch):
    monkeypatch.setattr(settings, "VERTEX_PROJECT_ID", "my-project")
    monkeypatch.setattr(settings, "VERTEX_LOCATION", "us-central1")
    monkeypatch.setattr(settings, "VERTEX_ACCESS_TOKEN", "ya29.test-token")

    resp = client.post("/diagnostics/connect", json={})

    assert resp.status_code == 200
    assert resp.json()["success"] is True
