"""Smoke-check imports for the package modules.

Guards against refactors that would break the wiring between the job engine,
the provider adapters, the capability catalogue and the HTTP surface.
"""

from __future__ import annotations

from importlib import import_module
from types import ModuleType

import pytest

MODULES_AND_SYMBOLS = [
    ("mediagen.main", "create_app"),
    ("mediagen.config", "AppConfig"),
    ("mediagen.logging", "configure_logging"),
    ("mediagen.dependencies", "include_routers"),
    ("mediagen.exceptions", "MediaGenError"),
    ("mediagen.api.errors", "ApiError"),
    ("mediagen.api.api_schemas", "GenerateRequest"),
    ("mediagen.api.generate_api", "router"),
    ("mediagen.jobs", "JobResult"),
    ("mediagen.jobs.deadlines", "PollSchedule"),
    ("mediagen.jobs.jobs_classifier", "SUCCESS_STATUSES"),
    ("mediagen.jobs.jobs_strategies", "PollingStrategy"),
    ("mediagen.jobs.jobs_runner", "JobRunner"),
    ("mediagen.providers", "ProviderAdapter"),
    ("mediagen.providers", "FalAdapter"),
    ("mediagen.providers", "GenboAdapter"),
    ("mediagen.providers", "ReplicateAdapter"),
    ("mediagen.providers.providers_factory", "create_adapter"),
    ("mediagen.capabilities", "PlatformRegistry"),
    ("mediagen.capabilities.capabilities_fal", "FAL_CAPABILITIES"),
    ("mediagen.capabilities.capabilities_genbo", "GENBO_CAPABILITIES"),
    ("mediagen.capabilities.capabilities_replicate", "REPLICATE_CAPABILITIES"),
    ("mediagen.services", "GenerationService"),
]


@pytest.mark.parametrize(("module_name", "symbol"), MODULES_AND_SYMBOLS)
def test_importable_symbols(module_name: str, symbol: str) -> None:
    """Import modules and verify that public symbols are exposed."""

    module: ModuleType = import_module(module_name)
    assert hasattr(module, symbol), f"{module_name} missing {symbol}"
