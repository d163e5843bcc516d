"""HTTP routes for platforms, model catalogues and generation."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request

from ..services.generation_service import GenerationService
from .api_schemas import GenerateRequest, GenerateResponse, OptionModel, VerifyResponse

router = APIRouter(prefix="/api", tags=["generation"])
logger = logging.getLogger(__name__)


def get_generation_service(request: Request) -> GenerationService:
    """Fetch generation service from application state."""
    try:
        return request.app.state.generation_service  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover
        raise RuntimeError("GenerationService is not configured") from exc


@router.get("/platforms")
def list_platforms(
    service: GenerationService = Depends(get_generation_service),
) -> list[OptionModel]:
    return [OptionModel(**option) for option in service.list_platforms()]


@router.get("/platforms/{platform}/models")
def list_models(
    platform: str,
    service: GenerationService = Depends(get_generation_service),
) -> list[OptionModel]:
    return [OptionModel(**option) for option in service.list_models(platform)]


@router.get("/platforms/{platform}/schema")
def input_schema(
    platform: str,
    service: GenerationService = Depends(get_generation_service),
) -> list[dict[str, Any]]:
    return service.input_schema(platform)


@router.post("/platforms/{platform}/verify")
async def verify_platform(
    platform: str,
    service: GenerationService = Depends(get_generation_service),
) -> VerifyResponse:
    details = await service.verify(platform)
    return VerifyResponse(platform=platform, details=details)


@router.post("/generate", response_model=GenerateResponse)
async def generate(
    payload: GenerateRequest,
    service: GenerationService = Depends(get_generation_service),
) -> dict[str, Any]:
    """Run one job and return the normalized result with bookkeeping."""
    logger.info(
        "api.generate.request",
        extra={
            "platform": payload.platform,
            "model": payload.model,
            "interface_type": payload.interface_type,
        },
    )
    result = await service.generate(
        payload.platform,
        payload.model,
        payload.interface_type,
        payload.parameters,
    )
    return result.as_dict()
