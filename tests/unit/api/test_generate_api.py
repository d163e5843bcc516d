from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from mediagen.config import AppConfig
from mediagen.main import create_app
from tests.mocks.http import DummyHTTPResponse, configure_httpx

pytestmark = pytest.mark.unit


@pytest.fixture
def client(app_config: AppConfig) -> TestClient:
    return TestClient(create_app(app_config))


def test_list_platforms(client: TestClient):
    response = client.get("/api/platforms")

    assert response.status_code == 200
    assert response.json() == [
        {"name": "FAL", "value": "fal"},
        {"name": "Genbo", "value": "genbo"},
        {"name": "Replicate", "value": "replicate"},
    ]


def test_list_models_and_unknown_platform(client: TestClient):
    response = client.get("/api/platforms/replicate/models")
    assert response.json() == [{"name": "Z-image-turbo", "value": "zImageTurbo"}]

    missing = client.get("/api/platforms/midjourney/models")
    assert missing.status_code == 404
    assert missing.json()["error"]["code"] == "not_found"


def test_schema_endpoint(client: TestClient):
    response = client.get("/api/platforms/fal/schema")

    assert response.status_code == 200
    width = next(field for field in response.json() if field["name"] == "image_size_width")
    assert width["displayOptions"]["show"] == {"image_size": ["custom"], "model": ["flux1Dev"]}


def test_generate_async(monkeypatch, client: TestClient):
    configure_httpx(
        monkeypatch,
        post_responses=[DummyHTTPResponse(200, {"request_id": "req-1"})],
        get_responses=[DummyHTTPResponse(200, {"status": "COMPLETED", "video": {"url": "https://cdn/v.mp4"}})],
    )

    response = client.post(
        "/api/generate",
        json={
            "platform": "fal",
            "model": "wan26t2v",
            "interface_type": "async",
            "parameters": {"prompt": "ocean"},
        },
    )

    assert response.status_code == 200
    assert response.json() == {
        "json": {"status": "COMPLETED", "video": {"url": "https://cdn/v.mp4"}},
        "capability": "wan26t2v",
        "mode": "async",
        "token": "req-1",
        "polls": 1,
    }


@pytest.mark.parametrize(
    ("body", "status_code", "code"),
    [
        ({"platform": "fal", "model": "flux1Dev", "interface_type": "sync", "parameters": {}}, 400, "validation_error"),
        ({"platform": "fal", "model": "wan26t2v", "interface_type": "sync", "parameters": {"prompt": "x"}}, 400, "unsupported_mode"),
        ({"platform": "genbo", "model": "sdxl", "interface_type": "async", "parameters": {}}, 404, "not_found"),
        ({"platform": "fal", "model": "flux1Dev", "interface_type": "batch", "parameters": {}}, 400, "validation_error"),
    ],
)
def test_generate_client_errors(client: TestClient, body, status_code, code):
    response = client.post("/api/generate", json=body)

    assert response.status_code == status_code
    assert response.json()["error"]["code"] == code


def test_generate_provider_errors(monkeypatch, client: TestClient):
    configure_httpx(
        monkeypatch,
        post_responses=[DummyHTTPResponse(500, {"detail": "upstream down"})],
    )

    response = client.post(
        "/api/generate",
        json={"platform": "fal", "model": "flux1Dev", "interface_type": "sync", "parameters": {"prompt": "x"}},
    )

    assert response.status_code == 502
    assert response.json() == {
        "error": {"code": "provider_error", "message": "API request failed: upstream down"}
    }


def test_job_failure_maps_to_bad_gateway(monkeypatch, client: TestClient):
    configure_httpx(
        monkeypatch,
        post_responses=[DummyHTTPResponse(200, {"task_id": "t-1"})],
        get_responses=[DummyHTTPResponse(200, {"task_status": "FAILED", "fail_reason": "nsfw"})],
    )

    response = client.post(
        "/api/generate",
        json={"platform": "genbo", "model": "zImageTurbo", "parameters": {"prompt": "x"}},
    )

    assert response.status_code == 502
    assert response.json()["error"]["code"] == "job_failed"


def test_job_timeout_maps_to_gateway_timeout(monkeypatch, app_config: AppConfig):
    configure_httpx(
        monkeypatch,
        post_responses=[DummyHTTPResponse(200, {"task_id": "slow"})],
        get_responses=[DummyHTTPResponse(200, {"task_status": "processing"}) for _ in range(50)],
    )
    config = app_config.model_copy(
        update={"poll_interval_seconds": 0.01, "poll_deadline_seconds": 0.05}
    )
    client = TestClient(create_app(config))

    response = client.post(
        "/api/generate",
        json={"platform": "genbo", "model": "zImageTurbo", "parameters": {"prompt": "x"}},
    )

    assert response.status_code == 504
    assert response.json()["error"]["code"] == "job_timeout"


def test_bad_custom_size_is_a_validation_error(monkeypatch, client: TestClient):
    script = configure_httpx(monkeypatch)

    response = client.post(
        "/api/generate",
        json={
            "platform": "fal",
            "model": "flux1Dev",
            "interface_type": "sync",
            "parameters": {"prompt": "x", "image_size": "custom", "image_size_width": "wide"},
        },
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "validation_error"
    assert script.calls == []


def test_missing_credential_maps_to_unauthorized():
    client = TestClient(create_app(AppConfig(poll_interval_seconds=0)))

    response = client.post("/api/platforms/replicate/verify")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "credential_error"


def test_verify_ok(monkeypatch, client: TestClient):
    configure_httpx(monkeypatch, get_responses=[DummyHTTPResponse(200, {"models": []})])

    response = client.post("/api/platforms/fal/verify")

    assert response.status_code == 200
    assert response.json() == {"platform": "fal", "status": "ok", "details": {"models": []}}
