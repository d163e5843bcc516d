from __future__ import annotations

import os

import pytest

from mediagen.config import AppConfig

for _name in ("MEDIAGEN_FAL_API_KEY", "MEDIAGEN_GENBO_API_KEY", "MEDIAGEN_REPLICATE_API_TOKEN"):
    os.environ.pop(_name, None)


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig(
        fal_api_key="fal-key",
        genbo_api_key="genbo-key",
        replicate_api_token="r8-token",
        poll_interval_seconds=0,
    )
