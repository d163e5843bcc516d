"""Services exposed to the HTTP API and CLI."""

from .generation_service import GenerationRequest, GenerationService

__all__ = ["GenerationRequest", "GenerationService"]
