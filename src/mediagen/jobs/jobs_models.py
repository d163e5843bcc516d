"""Data structures shared by the job execution engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Mapping


class MediaType(StrEnum):
    """Coarse media kind used to select timeouts."""

    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"


class ExecutionMode(StrEnum):
    """Entry points exposed by :class:`~mediagen.jobs.jobs_runner.JobRunner`."""

    SYNC = "sync"
    ASYNC = "async"


class JobState(StrEnum):
    """Classification of a single status poll."""

    SUBMITTED = "submitted"
    IN_PROGRESS = "in_progress"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    UNKNOWN = "unknown"

    @property
    def is_terminal(self) -> bool:
        return self in (JobState.SUCCEEDED, JobState.FAILED)


@dataclass(frozen=True, slots=True)
class CapabilityDescriptor:
    """Static metadata describing one generation capability."""

    id: str
    display_name: str
    endpoint: str
    supports_sync: bool
    supports_async: bool
    media_type: MediaType = MediaType.IMAGE
    sync_endpoint: str | None = None
    sync_base_url: str | None = None
    status_path: str | None = None


@dataclass(slots=True)
class JobRequest:
    """Fully resolved request ready for transport."""

    method: str
    url: str
    body: Mapping[str, Any] | None = None
    timeout_ms: int | None = None
    headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class ProviderResponse:
    """Decoded provider response with the ``data`` envelope already removed."""

    status_code: int
    payload: Any
    raw: Any

    def payload_mapping(self) -> Mapping[str, Any]:
        return self.payload if isinstance(self.payload, Mapping) else {}


@dataclass(frozen=True, slots=True)
class JobHandle:
    """Provider-issued correlation token plus the URLs derived from it."""

    token: str
    status_url: str
    result_url: str | None = None


@dataclass(slots=True)
class JobStatus:
    """One observed status payload and its classification."""

    raw_payload: Mapping[str, Any]
    state: JobState
    status_value: str | None = None


@dataclass(slots=True)
class JobResult:
    """Normalized outcome handed back to the caller."""

    payload: dict[str, Any]
    capability: str
    mode: ExecutionMode
    token: str | None = None
    polls: int = 0

    def as_dict(self) -> dict[str, Any]:
        return {
            "json": self.payload,
            "capability": self.capability,
            "mode": self.mode.value,
            "token": self.token,
            "polls": self.polls,
        }


__all__ = [
    "MediaType",
    "ExecutionMode",
    "JobState",
    "CapabilityDescriptor",
    "JobRequest",
    "ProviderResponse",
    "JobHandle",
    "JobStatus",
    "JobResult",
]
