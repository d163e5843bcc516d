"""Genbo provider adapter (task-id based, ``Authorization: Bearer``)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Mapping

from ..jobs.jobs_models import CapabilityDescriptor
from ..jobs.jobs_strategies import PollingStrategy, TaskPollingStrategy
from .providers_base import ProviderAdapter


@dataclass(slots=True)
class GenboAdapter(ProviderAdapter):
    """Genbo serves sync and async traffic from the same base URL."""

    async_base_url: str = "https://api.genbo.ai"
    sync_base_url: str = "https://api.genbo.ai"

    provider_id: ClassVar[str] = "genbo"
    display_name: ClassVar[str] = "Genbo"
    credential_name: ClassVar[str] = "genboApi"
    credential_field: ClassVar[str] = "apiKey"
    auth_scheme: ClassVar[str] = "Bearer"
    extra_headers: ClassVar[Mapping[str, str]] = {"Accept": "application/json"}
    verify_path: ClassVar[str | None] = "/v1/images/generations"
    verify_params: ClassVar[Mapping[str, Any]] = {"pageNum": 1, "pageSize": 1}

    def polling_strategy(self, descriptor: CapabilityDescriptor) -> PollingStrategy:
        return TaskPollingStrategy(base_url=self.async_base_url)
