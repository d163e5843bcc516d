"""Genbo capability catalogue. Every Genbo model is asynchronous only."""

from __future__ import annotations

from typing import Any, Mapping

from ..jobs.jobs_models import CapabilityDescriptor, MediaType
from .capabilities_base import Capability, InputField

ASPECT_OPTIONS = (("1:1", "1:1"), ("16:9", "16:9"), ("3:4", "3:4"), ("4:3", "4:3"), ("9:16", "9:16"))

VIDEO_STATUS_PATH = "/v1/videos/generations"

WAN_NEGATIVE_PROMPT = (
    "vivid color tone, overexposed, static, blurry details, subtitles, style, artwork, "
    "painting, frame, still, overall grayish, worst quality, low quality, JPEG compression "
    "artifacts, ugly, deformed, extra fingers"
)


def _prompt(description: str) -> InputField:
    return InputField(
        name="prompt",
        display_name="Prompt",
        type_options={"rows": 4},
        required=True,
        description=description,
    )


def normalize_audio_task(payload: Mapping[str, Any]) -> Mapping[str, Any]:
    """Keep task bookkeeping and lift ``task_result.url`` to ``audio_url``."""

    result: dict[str, Any] = {
        "task_id": payload.get("task_id"),
        "task_status": payload.get("task_status"),
        "created_at": payload.get("created_at"),
        "updated_at": payload.get("updated_at"),
    }
    if payload.get("fail_reason"):
        result["fail_reason"] = payload["fail_reason"]
    task_result = payload.get("task_result")
    if isinstance(task_result, Mapping):
        result["task_result"] = dict(task_result)
        if task_result.get("url"):
            result["audio_url"] = task_result["url"]
    if payload.get("input"):
        result["input"] = payload["input"]
    return result


Z_IMAGE_TURBO = Capability(
    descriptor=CapabilityDescriptor(
        id="zImageTurbo",
        display_name="Z-image-turbo",
        endpoint="/v1/images/generations",
        supports_sync=False,
        supports_async=True,
        media_type=MediaType.IMAGE,
    ),
    fields=(
        _prompt("The prompt to generate an image from"),
        InputField(name="image_size", display_name="Image Size", type="options", options=ASPECT_OPTIONS, default="16:9"),
        InputField(name="num_images", display_name="Number of Images", type="number", default=1),
        InputField(name="num_inference_steps", display_name="Number of Inference Steps", type="number", default=9),
    ),
    static_body={"model": "Z-image-turbo"},
)

FLUX_2_DEV = Capability(
    descriptor=CapabilityDescriptor(
        id="flux2Dev",
        display_name="Flux.2-dev",
        endpoint="/v1/images/generations",
        supports_sync=False,
        supports_async=True,
        media_type=MediaType.IMAGE,
    ),
    fields=(
        _prompt("The prompt to generate an image from"),
        InputField(name="image_size", display_name="Image Size", type="options", options=ASPECT_OPTIONS, default="9:16"),
        InputField(name="num_images", display_name="Number of Images", type="number", default=1),
        InputField(name="guidance_scale", display_name="Guidance Scale", type="number", default=4),
        InputField(name="num_inference_steps", display_name="Number of Inference Steps", type="number", default=20),
    ),
    static_body={"model": "Flux.2-dev"},
)

WAN_22_T2V = Capability(
    descriptor=CapabilityDescriptor(
        id="wan22T2V",
        display_name="Wan2.2-14B-T2V",
        endpoint="/v1/video/generations",
        supports_sync=False,
        supports_async=True,
        media_type=MediaType.VIDEO,
        status_path=VIDEO_STATUS_PATH,
    ),
    fields=(
        _prompt("The prompt describing the video"),
        InputField(name="video_url", display_name="Video URL"),
        InputField(
            name="aspect_ratio",
            display_name="Aspect Ratio",
            type="options",
            options=(("16:9", "16:9"), ("9:16", "9:16"), ("1:1", "1:1")),
            default="16:9",
        ),
        InputField(
            name="resolution",
            display_name="Resolution",
            type="options",
            options=(("480", "480"), ("720", "720"), ("1080", "1080")),
            default="480",
        ),
        InputField(name="num_frames", display_name="Number of Frames", type="number", default=81),
        InputField(name="frames_per_second", display_name="Frames Per Second", type="number", default=16),
        InputField(name="num_inference_steps", display_name="Number of Inference Steps", type="number", default=8),
        InputField(name="guidance_scale", display_name="Guidance Scale", type="number", default=1),
        InputField(name="guidance_scale_2", display_name="Guidance Scale 2", type="number", default=1),
        InputField(name="shift", display_name="Shift", type="number", default=8),
        InputField(name="text_prompt", display_name="Text Prompt"),
        InputField(
            name="negative_prompt",
            display_name="Negative Prompt",
            type_options={"rows": 3},
            default=WAN_NEGATIVE_PROMPT,
        ),
    ),
    static_body={"model": "Wan2.2-14B-T2V"},
)

INDEX_TTS2_SINGLE = Capability(
    descriptor=CapabilityDescriptor(
        id="indexTTS2Single",
        display_name="IndexTTS2 Single",
        endpoint="/v1/audio/generations",
        supports_sync=False,
        supports_async=True,
        media_type=MediaType.AUDIO,
    ),
    fields=(
        _prompt("The text to synthesise"),
        InputField(name="prompt_2", display_name="Prompt 2"),
        InputField(name="audio_url", display_name="Audio URL", description="Reference voice sample"),
        InputField(
            name="emo_alpha",
            display_name="Emotion Alpha",
            type="number",
            default=1,
            type_options={"minValue": 0, "maxValue": 1},
        ),
        InputField(name="max_length", display_name="Max Length", type="number", default=1500),
        InputField(name="use_random", display_name="Use Random", type="boolean", default=False),
        InputField(
            name="temperature",
            display_name="Temperature",
            type="number",
            default=0.8,
            type_options={"minValue": 0, "maxValue": 2},
        ),
        InputField(name="unload_model", display_name="Unload Model", type="boolean", default=False),
        InputField(name="use_emo_text", display_name="Use Emo Text", type="boolean", default=True),
    ),
    static_body={"model": "IndexTTS2 Single"},
    normalize=normalize_audio_task,
)

GENBO_CAPABILITIES = (Z_IMAGE_TURBO, FLUX_2_DEV, WAN_22_T2V, INDEX_TTS2_SINGLE)

__all__ = ["GENBO_CAPABILITIES", "VIDEO_STATUS_PATH", "normalize_audio_task"]
