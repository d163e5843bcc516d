from __future__ import annotations

import pytest

from mediagen.config import AppConfig
from mediagen.exceptions import (
    CredentialError,
    JobFailedError,
    NotFoundError,
    UnsupportedModeError,
    ValidationError,
)
from mediagen.jobs.jobs_models import ExecutionMode
from mediagen.services.generation_service import GenerationRequest, GenerationService
from tests.mocks.http import DummyHTTPResponse, configure_httpx

pytestmark = pytest.mark.unit


@pytest.fixture
def service(app_config: AppConfig) -> GenerationService:
    return GenerationService(config=app_config)


@pytest.mark.asyncio
async def test_generate_sync_fal(monkeypatch, service: GenerationService):
    script = configure_httpx(
        monkeypatch,
        post_responses=[DummyHTTPResponse(200, {"images": [{"url": "https://cdn/a.png"}]})],
    )

    result = await service.generate("fal", "flux2Dev", "sync", {"prompt": "a fox"})

    assert script.urls() == ["https://fal.run/fal-ai/flux-2/stream"]
    assert script.calls[0].json["prompt"] == "a fox"
    assert result.mode is ExecutionMode.SYNC
    assert result.as_dict() == {
        "json": {"images": [{"url": "https://cdn/a.png"}]},
        "capability": "flux2Dev",
        "mode": "sync",
        "token": None,
        "polls": 0,
    }


@pytest.mark.asyncio
async def test_generate_async_replicate_normalizes(monkeypatch, service: GenerationService):
    script = configure_httpx(
        monkeypatch,
        post_responses=[DummyHTTPResponse(201, {"id": "p-1", "status": "starting"})],
        get_responses=[
            DummyHTTPResponse(200, {"id": "p-1", "status": "processing"}),
            DummyHTTPResponse(200, {"id": "p-1", "status": "succeeded", "output": ["https://r8/a.jpg"]}),
        ],
    )

    result = await service.generate("replicate", "zImageTurbo", "ASYNC", {"prompt": "a fox"})

    assert script.calls[0].json["input"]["prompt"] == "a fox"
    assert script.calls[0].headers["Authorization"] == "Bearer r8-token"
    assert result.payload == {"prediction_id": "p-1", "status": "succeeded", "output": ["https://r8/a.jpg"]}
    assert result.polls == 2


@pytest.mark.asyncio
async def test_invalid_interface_type(service: GenerationService):
    with pytest.raises(ValidationError, match="Unsupported interface type 'stream'"):
        await service.generate("fal", "flux1Dev", "stream", {"prompt": "x"})


@pytest.mark.asyncio
async def test_sync_on_async_only_model(monkeypatch, service: GenerationService):
    script = configure_httpx(monkeypatch)

    with pytest.raises(UnsupportedModeError):
        await service.generate("genbo", "zImageTurbo", "sync", {"prompt": "x"})
    assert script.calls == []


@pytest.mark.asyncio
async def test_unknown_model(service: GenerationService):
    with pytest.raises(NotFoundError):
        await service.generate("genbo", "sdxl", "async", {"prompt": "x"})


@pytest.mark.asyncio
async def test_missing_credential_surfaces(monkeypatch):
    configure_httpx(monkeypatch)
    service = GenerationService(config=AppConfig(poll_interval_seconds=0))

    with pytest.raises(CredentialError, match="falApi"):
        await service.generate("fal", "flux1Dev", "sync", {"prompt": "x"})


def test_adapter_is_reused_per_platform(service: GenerationService):
    assert service.adapter_for("fal") is service.adapter_for("fal")
    assert service.adapter_for("fal") is not service.adapter_for("genbo")


def test_listing_helpers(service: GenerationService):
    assert service.list_platforms()[0] == {"name": "FAL", "value": "fal"}
    assert {"name": "Wan2.2-14B-T2V", "value": "wan22T2V"} in service.list_models("genbo")
    assert service.input_schema("genbo")[0]["displayOptions"]["show"]["model"] == ["zImageTurbo"]


@pytest.mark.asyncio
async def test_batch_continue_on_fail(monkeypatch, service: GenerationService):
    configure_httpx(
        monkeypatch,
        post_responses=[
            DummyHTTPResponse(200, {"task_id": "t-1"}),
            DummyHTTPResponse(200, {"task_id": "t-2"}),
        ],
        get_responses=[
            DummyHTTPResponse(200, {"task_status": "FAILED", "fail_reason": "nsfw"}),
            DummyHTTPResponse(200, {"task_status": "SUCCESS", "url": "https://cdn/ok.png"}),
        ],
    )
    items = [
        GenerationRequest(platform="genbo", model="zImageTurbo", parameters={"prompt": "one"}),
        GenerationRequest(platform="genbo", model="zImageTurbo", parameters={}),
        GenerationRequest(platform="genbo", model="zImageTurbo", parameters={"prompt": "three"}),
    ]

    outputs = await service.generate_batch(items, continue_on_fail=True)

    assert outputs[0] == {"error": "Async request failed: nsfw", "item": 0}
    assert outputs[1] == {"error": "Prompt is required", "item": 1}
    assert outputs[2]["json"]["url"] == "https://cdn/ok.png"
    assert outputs[2]["token"] == "t-2"


@pytest.mark.asyncio
async def test_batch_aborts_by_default(monkeypatch, service: GenerationService):
    script = configure_httpx(
        monkeypatch,
        post_responses=[DummyHTTPResponse(200, {"task_id": "t-1"})],
        get_responses=[DummyHTTPResponse(200, {"task_status": "ERROR", "message": "gpu lost"})],
    )
    items = [
        GenerationRequest(platform="genbo", model="flux2Dev", parameters={"prompt": "one"}),
        GenerationRequest(platform="genbo", model="flux2Dev", parameters={"prompt": "two"}),
    ]

    with pytest.raises(JobFailedError, match="gpu lost"):
        await service.generate_batch(items)
    assert len(script.urls("POST")) == 1


@pytest.mark.asyncio
async def test_verify_uses_adapter(monkeypatch, service: GenerationService):
    script = configure_httpx(monkeypatch, get_responses=[DummyHTTPResponse(200, {"data": {"list": []}})])

    payload = await service.verify("genbo")

    assert payload == {"list": []}
    assert script.urls() == ["https://api.genbo.ai/v1/images/generations"]
