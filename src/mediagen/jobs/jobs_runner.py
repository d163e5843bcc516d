"""Synchronous and asynchronous job execution against one provider adapter."""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Mapping

from ..exceptions import (
    DispatchError,
    JobCancelledError,
    JobFailedError,
    JobTimeoutError,
    UnsupportedModeError,
)
from .deadlines import PollSchedule, resolve_sync_timeout_ms
from .jobs_classifier import extract_fail_reason
from .jobs_models import (
    CapabilityDescriptor,
    ExecutionMode,
    JobHandle,
    JobRequest,
    JobResult,
    JobState,
    ProviderResponse,
)

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from ..config import AppConfig
    from ..providers.providers_base import ProviderAdapter

logger = logging.getLogger(__name__)

Normalizer = Callable[[Mapping[str, Any]], Mapping[str, Any]]


def _identity(payload: Mapping[str, Any]) -> Mapping[str, Any]:
    return payload


@dataclass(slots=True)
class JobRunner:
    """Drive one job to completion through ``adapter``.

    Synchronous execution is a single POST. Asynchronous execution submits,
    then polls the status URL produced by the adapter's polling strategy
    right away and again after every backed-off interval until a terminal
    classification, the poll deadline, or cancellation.
    """

    adapter: "ProviderAdapter"
    poll_interval_seconds: float = 2.0
    poll_backoff_factor: float = 1.5
    poll_max_interval_seconds: float = 30.0
    poll_deadline_seconds: float | None = None
    strict_unknown_status_attempts: int | None = None
    log: logging.Logger = field(default_factory=lambda: logger)

    @classmethod
    def from_config(cls, adapter: "ProviderAdapter", config: "AppConfig") -> "JobRunner":
        return cls(
            adapter=adapter,
            poll_interval_seconds=config.poll_interval_seconds,
            poll_backoff_factor=config.poll_backoff_factor,
            poll_max_interval_seconds=config.poll_max_interval_seconds,
            poll_deadline_seconds=config.poll_deadline_seconds,
            strict_unknown_status_attempts=config.strict_unknown_status_attempts,
        )

    def build_sync_request(
        self, descriptor: CapabilityDescriptor, body: Mapping[str, Any]
    ) -> JobRequest:
        """Resolve URL, timeout and headers for a synchronous call."""

        if not descriptor.supports_sync:
            raise UnsupportedModeError(
                f"Model {descriptor.display_name} does not support synchronous requests"
            )
        base_url = descriptor.sync_base_url or self.adapter.sync_base_url
        path = descriptor.sync_endpoint or descriptor.endpoint
        return JobRequest(
            method="POST",
            url=f"{base_url}{path}",
            body=body,
            timeout_ms=resolve_sync_timeout_ms(descriptor.media_type),
            headers=self.adapter.sync_headers(),
        )

    async def execute_sync(
        self,
        descriptor: CapabilityDescriptor,
        body: Mapping[str, Any],
        normalize: Normalizer = _identity,
    ) -> JobResult:
        job_request = self.build_sync_request(descriptor, body)
        self.log.info(
            "jobs.sync.start",
            extra={
                "provider": self.adapter.provider_id,
                "capability": descriptor.id,
                "url": job_request.url,
                "timeout_ms": job_request.timeout_ms,
            },
        )
        response = await self.adapter.send(job_request)
        payload = normalize(response.payload_mapping())
        self.log.info(
            "jobs.sync.success",
            extra={"provider": self.adapter.provider_id, "capability": descriptor.id},
        )
        return JobResult(
            payload=dict(payload),
            capability=descriptor.id,
            mode=ExecutionMode.SYNC,
        )

    def build_schedule(self, descriptor: CapabilityDescriptor) -> PollSchedule:
        return PollSchedule.for_media(
            descriptor.media_type,
            initial_interval=self.poll_interval_seconds,
            backoff_factor=self.poll_backoff_factor,
            max_interval=self.poll_max_interval_seconds,
            deadline_seconds=self.poll_deadline_seconds,
        )

    async def submit(
        self, descriptor: CapabilityDescriptor, body: Mapping[str, Any]
    ) -> JobHandle:
        """Submit an asynchronous job and return its handle."""

        if not descriptor.supports_async:
            raise UnsupportedModeError(
                f"Model {descriptor.display_name} does not support asynchronous requests"
            )
        strategy = self.adapter.polling_strategy(descriptor)
        url = f"{self.adapter.async_base_url}{descriptor.endpoint}"
        response = await self.adapter.request("POST", url, body)

        token = strategy.extract_token(response)
        if not token:
            raise DispatchError(
                f"Failed to get {strategy.token_field} from async submission. "
                f"Response: {json.dumps(response.raw, default=str)}",
                raw_response=response.raw,
            )
        handle = strategy.build_handle(descriptor, token)
        self.log.info(
            "jobs.async.submitted",
            extra={
                "provider": self.adapter.provider_id,
                "capability": descriptor.id,
                "token": token,
            },
        )
        return handle

    async def execute_async(
        self,
        descriptor: CapabilityDescriptor,
        body: Mapping[str, Any],
        normalize: Normalizer = _identity,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> JobResult:
        strategy = self.adapter.polling_strategy(descriptor)
        handle = await self.submit(descriptor, body)
        schedule = self.build_schedule(descriptor)

        loop = asyncio.get_running_loop()
        deadline = loop.time() + schedule.deadline_seconds
        polls = 0
        unknown_streak = 0

        while True:
            self._raise_if_cancelled(cancel_event, handle)
            response = await self.adapter.request("GET", handle.status_url)
            polls += 1
            status = strategy.classify(response.payload_mapping())
            self.log.debug(
                "jobs.async.polled",
                extra={
                    "token": handle.token,
                    "poll": polls,
                    "status": status.status_value,
                    "state": status.state.value,
                },
            )

            if status.state is JobState.SUCCEEDED:
                result_payload = await strategy.resolve_result(status, handle, self._fetch)
                self.log.info(
                    "jobs.async.succeeded",
                    extra={"capability": descriptor.id, "token": handle.token, "polls": polls},
                )
                return JobResult(
                    payload=dict(normalize(result_payload)),
                    capability=descriptor.id,
                    mode=ExecutionMode.ASYNC,
                    token=handle.token,
                    polls=polls,
                )

            if status.state is JobState.FAILED:
                reason = extract_fail_reason(status.raw_payload)
                self.log.warning(
                    "jobs.async.failed",
                    extra={"capability": descriptor.id, "token": handle.token, "reason": reason},
                )
                raise JobFailedError(reason, payload=status.raw_payload)

            if status.state is JobState.UNKNOWN and status.status_value is not None:
                unknown_streak += 1
                limit = self.strict_unknown_status_attempts
                if limit is not None and unknown_streak >= limit:
                    raise JobFailedError(
                        f"Unrecognised status '{status.status_value}' after {unknown_streak} polls",
                        payload=status.raw_payload,
                    )
            else:
                unknown_streak = 0

            remaining = deadline - loop.time()
            if remaining <= 0:
                self.log.warning(
                    "jobs.async.deadline_exceeded",
                    extra={"capability": descriptor.id, "token": handle.token, "polls": polls},
                )
                raise JobTimeoutError(
                    f"Job {handle.token} did not finish within {schedule.deadline_seconds:g}s",
                    token=handle.token,
                    polls=polls,
                )
            await self._wait(min(schedule.interval_for(polls), remaining), cancel_event, handle)

    async def _fetch(self, url: str) -> ProviderResponse:
        return await self.adapter.request("GET", url)

    @staticmethod
    def _raise_if_cancelled(cancel_event: asyncio.Event | None, handle: JobHandle) -> None:
        if cancel_event is not None and cancel_event.is_set():
            raise JobCancelledError(
                f"Job {handle.token} was cancelled by the caller", token=handle.token
            )

    async def _wait(
        self, delay: float, cancel_event: asyncio.Event | None, handle: JobHandle
    ) -> None:
        self._raise_if_cancelled(cancel_event, handle)
        if cancel_event is None:
            await asyncio.sleep(delay)
            return
        try:
            await asyncio.wait_for(cancel_event.wait(), timeout=delay)
        except asyncio.TimeoutError:
            return
        raise JobCancelledError(
            f"Job {handle.token} was cancelled by the caller", token=handle.token
        )


__all__ = ["JobRunner", "Normalizer"]
