"""FAL capability catalogue."""

from __future__ import annotations

import math
from typing import Any

from ..exceptions import ValidationError
from ..jobs.jobs_models import CapabilityDescriptor, MediaType
from .capabilities_base import Capability, InputField, ParameterContext, coerce_value, is_empty

IMAGE_SIZE_OPTIONS = (
    ("Custom", "custom"),
    ("Landscape 16:9", "landscape_16_9"),
    ("Landscape 4:3", "landscape_4_3"),
    ("Portrait 16:9", "portrait_16_9"),
    ("Portrait 4:3", "portrait_4_3"),
    ("Square", "square"),
    ("Square HD", "square_hd"),
)

ACCELERATION_OPTIONS = (("None", "none"), ("Regular", "regular"), ("High", "high"))


CUSTOM_WIDTH = InputField(
    name="image_size_width",
    display_name="Custom Width",
    type="number",
    default=1280,
    display_options={"show": {"image_size": ["custom"]}},
    send=False,
)

CUSTOM_HEIGHT = InputField(
    name="image_size_height",
    display_name="Custom Height",
    type="number",
    default=720,
    display_options={"show": {"image_size": ["custom"]}},
    send=False,
)


def _image_size_fields(default: str) -> tuple[InputField, ...]:
    return (
        InputField(
            name="image_size",
            display_name="Image Size",
            type="options",
            options=IMAGE_SIZE_OPTIONS,
            default=default,
            description="The size of the generated image",
        ),
        CUSTOM_WIDTH,
        CUSTOM_HEIGHT,
    )


def _dimension(input_field: InputField, context: ParameterContext) -> int:
    value = context.get_parameter(input_field.name, input_field.default)
    if is_empty(value):
        value = input_field.default
    number = coerce_value(input_field, value)
    if isinstance(number, bool) or not isinstance(number, (int, float)) or not math.isfinite(number):
        raise ValidationError(f"{input_field.display_name} must be a number, got '{value}'")
    if number <= 0:
        raise ValidationError(f"{input_field.display_name} must be positive, got '{value}'")
    return int(number)


def custom_image_size(params: dict[str, Any], context: ParameterContext) -> dict[str, Any]:
    """Replace ``image_size="custom"`` with an explicit width/height object."""

    if params.get("image_size") == "custom":
        params["image_size"] = {
            "width": _dimension(CUSTOM_WIDTH, context),
            "height": _dimension(CUSTOM_HEIGHT, context),
        }
    return params


PROMPT = InputField(
    name="prompt",
    display_name="Prompt",
    type_options={"rows": 4},
    required=True,
    description="The prompt to generate an image from",
)

SEED = InputField(
    name="seed",
    display_name="Seed",
    type="number",
    description="Leave empty for a random seed",
)

FLUX_1_DEV = Capability(
    descriptor=CapabilityDescriptor(
        id="flux1Dev",
        display_name="FLUX.1 [dev]",
        endpoint="/fal-ai/flux/dev",
        supports_sync=True,
        supports_async=True,
        media_type=MediaType.IMAGE,
    ),
    fields=(
        PROMPT,
        *_image_size_fields("landscape_4_3"),
        InputField(name="num_inference_steps", display_name="Number of Inference Steps", type="number", default=28),
        SEED,
        InputField(
            name="guidance_scale",
            display_name="Guidance Scale",
            type="number",
            default=3.5,
            type_options={"numberStepSize": 0.1},
        ),
        InputField(name="num_images", display_name="Number of Images", type="number", default=1),
        InputField(name="enable_safety_checker", display_name="Enable Safety Checker", type="boolean", default=True),
        InputField(
            name="output_format",
            display_name="Output Format",
            type="options",
            options=(("JPEG", "jpeg"), ("PNG", "png")),
            default="jpeg",
        ),
        InputField(
            name="acceleration",
            display_name="Acceleration",
            type="options",
            options=ACCELERATION_OPTIONS,
            default="none",
        ),
        InputField(name="sync_mode", display_name="Sync Mode", type="boolean", default=False),
    ),
    body_hook=custom_image_size,
)

FLUX_2_DEV = Capability(
    descriptor=CapabilityDescriptor(
        id="flux2Dev",
        display_name="FLUX.2 [dev]",
        endpoint="/fal-ai/flux-2",
        sync_endpoint="/fal-ai/flux-2/stream",
        supports_sync=True,
        supports_async=True,
        media_type=MediaType.IMAGE,
    ),
    fields=(
        PROMPT,
        *_image_size_fields("landscape_4_3"),
        InputField(name="guidance_scale", display_name="Guidance Scale", type="number", default=2.5),
        InputField(name="num_inference_steps", display_name="Number of Inference Steps", type="number", default=28),
        SEED,
        InputField(name="num_images", display_name="Number of Images", type="number", default=1),
        InputField(
            name="acceleration",
            display_name="Acceleration",
            type="options",
            options=ACCELERATION_OPTIONS,
            default="regular",
        ),
        InputField(name="enable_prompt_expansion", display_name="Enable Prompt Expansion", type="boolean", default=False),
        InputField(name="enable_safety_checker", display_name="Enable Safety Checker", type="boolean", default=True),
        InputField(
            name="output_format",
            display_name="Output Format",
            type="options",
            options=(("JPEG", "jpeg"), ("PNG", "png"), ("WebP", "webp")),
            default="png",
        ),
        InputField(name="sync_mode", display_name="Sync Mode", type="boolean", default=False),
    ),
    body_hook=custom_image_size,
)

WAN_26_T2V = Capability(
    descriptor=CapabilityDescriptor(
        id="wan26t2v",
        display_name="WAN 2.6 Text-to-Video",
        endpoint="/wan/v2.6/text-to-video",
        supports_sync=False,
        supports_async=True,
        media_type=MediaType.VIDEO,
    ),
    fields=(
        InputField(
            name="prompt",
            display_name="Prompt",
            type_options={"rows": 4},
            required=True,
            description="The text prompt describing the video",
        ),
        InputField(name="audio_url", display_name="Audio URL"),
        InputField(
            name="aspect_ratio",
            display_name="Aspect Ratio",
            type="options",
            options=(("1:1", "1:1"), ("16:9", "16:9"), ("3:4", "3:4"), ("4:3", "4:3"), ("9:16", "9:16")),
            default="16:9",
        ),
        InputField(
            name="resolution",
            display_name="Resolution",
            type="options",
            options=(("720p", "720p"), ("1080p", "1080p")),
            default="1080p",
        ),
        InputField(
            name="duration",
            display_name="Duration",
            type="options",
            options=(("5 Seconds", "5"), ("10 Seconds", "10"), ("15 Seconds", "15")),
            default="5",
        ),
        InputField(name="negative_prompt", display_name="Negative Prompt"),
        InputField(name="enable_prompt_expansion", display_name="Enable Prompt Expansion", type="boolean", default=True),
        InputField(name="multi_shots", display_name="Multi Shots", type="boolean", default=True),
        SEED,
        InputField(name="enable_safety_checker", display_name="Enable Safety Checker", type="boolean", default=True),
    ),
)

ELEVENLABS_TTS_TURBO_V25 = Capability(
    descriptor=CapabilityDescriptor(
        id="elevenlabsTtsTurboV25",
        display_name="ElevenLabs Turbo v2.5",
        endpoint="/fal-ai/elevenlabs/tts/turbo-v2.5",
        sync_endpoint="/fal-ai/elevenlabs/tts/turbo-v2.5/stream",
        supports_sync=True,
        supports_async=True,
        # Speech synthesis gets the long (video) timeout.
        media_type=MediaType.VIDEO,
    ),
    fields=(
        InputField(
            name="text",
            display_name="Text",
            type_options={"rows": 4},
            required=True,
            description="The text to convert to speech",
        ),
        InputField(name="voice", display_name="Voice", default="Rachel"),
        InputField(
            name="stability",
            display_name="Stability",
            type="number",
            default=0.5,
            type_options={"minValue": 0, "maxValue": 1},
        ),
        InputField(
            name="similarity_boost",
            display_name="Similarity Boost",
            type="number",
            default=0.75,
            type_options={"minValue": 0, "maxValue": 1},
        ),
        InputField(
            name="style",
            display_name="Style",
            type="number",
            type_options={"minValue": 0, "maxValue": 1},
        ),
        InputField(
            name="speed",
            display_name="Speed",
            type="number",
            default=1,
            type_options={"minValue": 0.7, "maxValue": 1.2},
        ),
        InputField(name="timestamps", display_name="Timestamps", type="boolean", default=False),
        InputField(name="previous_text", display_name="Previous Text"),
        InputField(name="next_text", display_name="Next Text"),
        InputField(name="language_code", display_name="Language Code"),
    ),
)

FAL_CAPABILITIES = (FLUX_1_DEV, FLUX_2_DEV, WAN_26_T2V, ELEVENLABS_TTS_TURBO_V25)

__all__ = ["FAL_CAPABILITIES", "custom_image_size"]
