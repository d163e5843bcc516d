"""FastAPI surface over :class:`~mediagen.services.generation_service.GenerationService`."""
