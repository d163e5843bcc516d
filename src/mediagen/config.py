"""Application configuration for MediaGen.

Defaults mirror the provider contracts: a 2 second initial poll interval,
queue/sync base URLs of the public provider endpoints and no poll deadline
override (the media-type timeout table applies). Provider secrets are
injected via ``MEDIAGEN_*`` environment variables.
"""

from __future__ import annotations

from typing import Any, cast

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    """Pydantic settings container for the engine and its outer surfaces."""

    model_config = cast(Any, SettingsConfigDict(env_prefix="MEDIAGEN_"))

    fal_api_key: str | None = Field(
        default=None,
        description="FAL API key used for the `Authorization: Key` header.",
    )
    genbo_api_key: str | None = Field(
        default=None,
        description="Genbo API key used for the `Authorization: Bearer` header.",
    )
    replicate_api_token: str | None = Field(
        default=None,
        description="Replicate API token used for the `Authorization: Bearer` header.",
    )
    fal_async_base_url: str = Field(
        default="https://queue.fal.run",
        description="Queue endpoint base for FAL asynchronous jobs.",
    )
    fal_sync_base_url: str = Field(
        default="https://fal.run",
        description="Base URL for FAL synchronous calls.",
    )
    genbo_base_url: str = Field(
        default="https://api.genbo.ai",
        description="Base URL for Genbo (sync and async share it).",
    )
    replicate_base_url: str = Field(
        default="https://api.replicate.com",
        description="Base URL for Replicate predictions.",
    )
    poll_interval_seconds: float = Field(
        default=2.0,
        ge=0.0,
        description="Delay after the first non-terminal status poll in seconds.",
    )
    poll_backoff_factor: float = Field(
        default=1.5,
        ge=1.0,
        description="Multiplier applied to the poll interval after every poll.",
    )
    poll_max_interval_seconds: float = Field(
        default=30.0,
        ge=0.0,
        description="Upper bound for the backed-off poll interval in seconds.",
    )
    poll_deadline_seconds: float | None = Field(
        default=None,
        gt=0.0,
        description=(
            "Overall wait budget for asynchronous jobs. Defaults to the "
            "media-type timeout table when unset."
        ),
    )
    request_timeout_seconds: float = Field(
        default=120.0,
        ge=0.1,
        description="Timeout for submit/status/result calls in seconds.",
    )
    strict_unknown_status_attempts: int | None = Field(
        default=None,
        ge=1,
        description=(
            "Fail a job after this many consecutive unrecognised status values. "
            "Unset keeps polling indefinitely until the deadline."
        ),
    )

    @classmethod
    def build_default(cls) -> "AppConfig":
        """Construct configuration from the environment with defaults."""

        return cls()


__all__ = ["AppConfig"]
