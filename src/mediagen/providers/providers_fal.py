"""FAL provider adapter (queue based, ``Authorization: Key``)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Mapping

from ..jobs.jobs_models import CapabilityDescriptor
from ..jobs.jobs_strategies import PollingStrategy, QueuePollingStrategy
from .providers_base import ProviderAdapter


@dataclass(slots=True)
class FalAdapter(ProviderAdapter):
    """Submit to ``queue.fal.run`` and call ``fal.run`` synchronously."""

    async_base_url: str = "https://queue.fal.run"
    sync_base_url: str = "https://fal.run"

    provider_id: ClassVar[str] = "fal"
    display_name: ClassVar[str] = "FAL"
    credential_name: ClassVar[str] = "falApi"
    credential_field: ClassVar[str] = "apiKey"
    auth_scheme: ClassVar[str] = "Key"
    verify_base_url: ClassVar[str | None] = "https://api.fal.ai"
    verify_path: ClassVar[str | None] = "/v1/models"
    verify_params: ClassVar[Mapping[str, Any]] = {"limit": 1}

    def polling_strategy(self, descriptor: CapabilityDescriptor) -> PollingStrategy:
        return QueuePollingStrategy(base_url=self.async_base_url)
