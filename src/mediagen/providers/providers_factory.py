"""Factory for provider adapters."""

from __future__ import annotations

from typing import Any, Mapping

from ..config import AppConfig
from .providers_base import CredentialLoader, ProviderAdapter
from .providers_fal import FalAdapter
from .providers_genbo import GenboAdapter
from .providers_replicate import ReplicateAdapter


def config_credential_loader(name: str, config: AppConfig) -> CredentialLoader:
    """Build a loader that reads the provider secret from ``config``."""

    lower = name.lower()
    if lower == "fal":
        field_name, value = "apiKey", config.fal_api_key
    elif lower == "genbo":
        field_name, value = "apiKey", config.genbo_api_key
    elif lower == "replicate":
        field_name, value = "apiToken", config.replicate_api_token
    else:
        raise ValueError(f"Unsupported provider '{name}'")

    def load() -> Mapping[str, Any] | None:
        if value is None:
            return None
        return {field_name: value}

    return load


def create_adapter(
    name: str,
    *,
    config: AppConfig,
    credential_loader: CredentialLoader | None = None,
) -> ProviderAdapter:
    """Instantiate provider adapter by name."""
    loader = credential_loader or config_credential_loader(name, config)
    timeout = config.request_timeout_seconds
    lower = name.lower()
    if lower == "fal":
        return FalAdapter(
            credential_loader=loader,
            async_base_url=config.fal_async_base_url,
            sync_base_url=config.fal_sync_base_url,
            request_timeout_seconds=timeout,
        )
    if lower == "genbo":
        return GenboAdapter(
            credential_loader=loader,
            async_base_url=config.genbo_base_url,
            sync_base_url=config.genbo_base_url,
            request_timeout_seconds=timeout,
        )
    if lower == "replicate":
        return ReplicateAdapter(
            credential_loader=loader,
            async_base_url=config.replicate_base_url,
            sync_base_url=config.replicate_base_url,
            request_timeout_seconds=timeout,
        )
    raise ValueError(f"Unsupported provider '{name}'")


__all__ = ["create_adapter", "config_credential_loader"]
