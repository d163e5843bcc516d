"""Replicate capability catalogue."""

from __future__ import annotations

from typing import Any, Mapping

from ..jobs.jobs_models import CapabilityDescriptor, MediaType
from .capabilities_base import Capability, InputField

PREDICTIONS_ENDPOINT = "/v1/predictions"


def normalize_prediction(payload: Mapping[str, Any]) -> Mapping[str, Any]:
    """Reduce a prediction object to id, status, output and diagnostics."""

    result: dict[str, Any] = {
        "prediction_id": payload.get("id"),
        "status": payload.get("status"),
        "output": payload.get("output"),
    }
    for key in ("error", "metrics", "urls"):
        if payload.get(key):
            result[key] = payload[key]
    return result


Z_IMAGE_TURBO = Capability(
    descriptor=CapabilityDescriptor(
        id="zImageTurbo",
        display_name="Z-image-turbo",
        endpoint=PREDICTIONS_ENDPOINT,
        supports_sync=True,
        supports_async=True,
        media_type=MediaType.IMAGE,
    ),
    fields=(
        InputField(
            name="prompt",
            display_name="Prompt",
            type_options={"rows": 4},
            required=True,
            description="The prompt to generate an image from",
        ),
        InputField(name="width", display_name="Width", type="number", default=1024),
        InputField(name="height", display_name="Height", type="number", default=768),
        InputField(
            name="output_format",
            display_name="Output Format",
            type="options",
            options=(("JPG", "jpg"), ("PNG", "png"), ("WebP", "webp")),
            default="jpg",
        ),
        InputField(name="guidance_scale", display_name="Guidance Scale", type="number", default=0),
        InputField(name="output_quality", display_name="Output Quality", type="number", default=80),
        InputField(name="num_inference_steps", display_name="Number of Inference Steps", type="number", default=8),
    ),
    static_body={"version": "prunaai/z-image-turbo"},
    input_key="input",
    normalize=normalize_prediction,
)

REPLICATE_CAPABILITIES = (Z_IMAGE_TURBO,)

__all__ = ["REPLICATE_CAPABILITIES", "PREDICTIONS_ENDPOINT", "normalize_prediction"]
