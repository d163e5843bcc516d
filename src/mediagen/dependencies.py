"""Dependency wiring helpers."""

from fastapi import FastAPI

from .api.errors import ApiError, api_error_handler, domain_error_handler
from .api.generate_api import router as generate_router
from .config import AppConfig
from .exceptions import MediaGenError
from .services.generation_service import GenerationService


def include_routers(app: FastAPI, config: AppConfig) -> None:
    """Mount module routers, error handlers and attach services."""
    generation_service = GenerationService(config=config)

    app.state.config = config
    app.state.generation_service = generation_service

    app.add_exception_handler(ApiError, api_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(MediaGenError, domain_error_handler)  # type: ignore[arg-type]

    app.include_router(generate_router)
