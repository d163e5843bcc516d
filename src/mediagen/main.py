"""FastAPI application entry point."""

from fastapi import FastAPI

from .config import AppConfig
from .dependencies import include_routers
from .logging import configure_logging


def create_app(config: AppConfig | None = None) -> FastAPI:
    """Build FastAPI instance with configured dependencies."""
    configure_logging()
    cfg = config or AppConfig.build_default()
    app = FastAPI(title="MediaGen")
    include_routers(app, cfg)
    return app


app = create_app()
