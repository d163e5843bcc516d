"""Replicate provider adapter (predictions API, ``Authorization: Bearer``)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from ..jobs.jobs_models import CapabilityDescriptor
from ..jobs.jobs_strategies import PollingStrategy, PredictionPollingStrategy
from .providers_base import ProviderAdapter


@dataclass(slots=True)
class ReplicateAdapter(ProviderAdapter):
    """Synchronous calls ask Replicate to hold the response with ``Prefer: wait``."""

    async_base_url: str = "https://api.replicate.com"
    sync_base_url: str = "https://api.replicate.com"

    provider_id: ClassVar[str] = "replicate"
    display_name: ClassVar[str] = "Replicate"
    credential_name: ClassVar[str] = "replicateApi"
    credential_field: ClassVar[str] = "apiToken"
    auth_scheme: ClassVar[str] = "Bearer"
    verify_path: ClassVar[str | None] = "/v1/models"

    def sync_headers(self) -> dict[str, str]:
        return {"Prefer": "wait"}

    def polling_strategy(self, descriptor: CapabilityDescriptor) -> PollingStrategy:
        return PredictionPollingStrategy(base_url=self.async_base_url)
