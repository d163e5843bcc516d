"""Provider-specific polling strategies driven by the generic poller.

A strategy decides how the correlation token is read from a submission
response, where status (and result) live, how a status payload is
classified, and how the final result payload is obtained once a poll
classifies as succeeded.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, ClassVar, Mapping

from ..exceptions import HttpError
from .jobs_classifier import STATUS_FIELDS, classify_payload
from .jobs_models import CapabilityDescriptor, JobHandle, JobStatus, ProviderResponse

logger = logging.getLogger(__name__)

ResultFetcher = Callable[[str], Awaitable[ProviderResponse]]


def _read_token(container: Any, name: str) -> str | None:
    if not isinstance(container, Mapping):
        return None
    value = container.get(name)
    if value is None or value == "":
        return None
    return str(value)


class PollingStrategy(ABC):
    """Interface of one provider polling protocol."""

    token_field: ClassVar[str]
    use_result_evidence: ClassVar[bool] = False
    status_fields: ClassVar[tuple[str, ...]] = STATUS_FIELDS
    extra_success: ClassVar[frozenset[str]] = frozenset()
    extra_failure: ClassVar[frozenset[str]] = frozenset()
    extra_in_progress: ClassVar[frozenset[str]] = frozenset()

    def extract_token(self, response: ProviderResponse) -> str | None:
        """Read the token from the unwrapped payload, then the raw top level."""

        return _read_token(response.payload, self.token_field) or _read_token(
            response.raw, self.token_field
        )

    @abstractmethod
    def build_handle(self, descriptor: CapabilityDescriptor, token: str) -> JobHandle:
        """Derive status/result URLs for ``token``."""

    def classify(self, payload: Mapping[str, Any]) -> JobStatus:
        return classify_payload(
            payload,
            use_result_evidence=self.use_result_evidence,
            status_fields=self.status_fields,
            extra_success=self.extra_success,
            extra_failure=self.extra_failure,
            extra_in_progress=self.extra_in_progress,
        )

    async def resolve_result(
        self, status: JobStatus, handle: JobHandle, fetch: ResultFetcher
    ) -> Mapping[str, Any]:
        """Return the payload handed to the normalizer."""

        return status.raw_payload


@dataclass(slots=True)
class QueuePollingStrategy(PollingStrategy):
    """Queue protocol: ``request_id`` with separate status and result URLs.

    Only ``status`` is read and result evidence is not consulted, since the
    queue reports completion through that field alone.
    """

    base_url: str
    embedded_result_fields: tuple[str, ...] = ("images", "video", "output")
    log: logging.Logger = field(default_factory=lambda: logger)

    token_field: ClassVar[str] = "request_id"
    status_fields: ClassVar[tuple[str, ...]] = ("status",)
    extra_in_progress: ClassVar[frozenset[str]] = frozenset({"IN_QUEUE"})

    def build_handle(self, descriptor: CapabilityDescriptor, token: str) -> JobHandle:
        request_url = f"{self.base_url}{descriptor.endpoint}/requests/{token}"
        return JobHandle(
            token=token,
            status_url=f"{request_url}/status",
            result_url=request_url,
        )

    async def resolve_result(
        self, status: JobStatus, handle: JobHandle, fetch: ResultFetcher
    ) -> Mapping[str, Any]:
        payload = status.raw_payload
        if any(payload.get(name) for name in self.embedded_result_fields):
            return payload
        if handle.result_url is None:
            return payload
        try:
            response = await fetch(handle.result_url)
        except HttpError as exc:
            if exc.status_code in (404, 422):
                self.log.info(
                    "jobs.result.fallback_to_status",
                    extra={"token": handle.token, "http_status": exc.status_code},
                )
                return payload
            raise
        return response.payload_mapping()


@dataclass(slots=True)
class TaskPollingStrategy(PollingStrategy):
    """Task protocol: ``task_id`` with status and result in one payload."""

    base_url: str

    token_field: ClassVar[str] = "task_id"
    status_fields: ClassVar[tuple[str, ...]] = ("task_status", "status", "state", "taskStatus")
    use_result_evidence: ClassVar[bool] = True

    def build_handle(self, descriptor: CapabilityDescriptor, token: str) -> JobHandle:
        path = descriptor.status_path or descriptor.endpoint
        return JobHandle(token=token, status_url=f"{self.base_url}{path}/{token}")


@dataclass(slots=True)
class PredictionPollingStrategy(PollingStrategy):
    """Prediction protocol: ``id`` polled at ``/v1/predictions/{id}``."""

    base_url: str
    predictions_path: str = "/v1/predictions"

    token_field: ClassVar[str] = "id"
    status_fields: ClassVar[tuple[str, ...]] = ("status",)
    extra_failure: ClassVar[frozenset[str]] = frozenset({"CANCELED"})
    extra_in_progress: ClassVar[frozenset[str]] = frozenset({"STARTING"})

    def build_handle(self, descriptor: CapabilityDescriptor, token: str) -> JobHandle:
        return JobHandle(token=token, status_url=f"{self.base_url}{self.predictions_path}/{token}")


__all__ = [
    "ResultFetcher",
    "PollingStrategy",
    "QueuePollingStrategy",
    "TaskPollingStrategy",
    "PredictionPollingStrategy",
]
