"""Job execution engine: models, classification, polling strategies and runner."""

from .jobs_models import (
    CapabilityDescriptor,
    ExecutionMode,
    JobHandle,
    JobRequest,
    JobResult,
    JobState,
    JobStatus,
    MediaType,
    ProviderResponse,
)

__all__ = [
    "CapabilityDescriptor",
    "ExecutionMode",
    "JobHandle",
    "JobRequest",
    "JobResult",
    "JobState",
    "JobStatus",
    "MediaType",
    "ProviderResponse",
]
