"""Pydantic schemas for the generation API."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class OptionModel(BaseModel):
    name: str
    value: str


class GenerateRequest(BaseModel):
    """Body of ``POST /api/generate``."""

    model_config = ConfigDict(extra="forbid")

    platform: str = Field(..., min_length=1, description="Provider key: fal, genbo or replicate.")
    model: str = Field(..., min_length=1, description="Capability id within the platform.")
    interface_type: str = Field(default="async", description="Execution mode: sync or async.")
    parameters: dict[str, Any] = Field(default_factory=dict)


class GenerateResponse(BaseModel):
    json_payload: dict[str, Any] = Field(alias="json")
    capability: str
    mode: Literal["sync", "async"]
    token: str | None = None
    polls: int = 0

    model_config = ConfigDict(populate_by_name=True)


class VerifyResponse(BaseModel):
    platform: str
    status: Literal["ok"] = "ok"
    details: Any = None
