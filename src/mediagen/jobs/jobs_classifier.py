"""Classification of heterogeneous provider status payloads."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from .jobs_models import JobState, JobStatus

SUCCESS_STATUSES = frozenset({"SUCCESS", "COMPLETED", "DONE", "FINISHED", "SUCCEEDED", "OK"})
FAILURE_STATUSES = frozenset({"FAILED", "ERROR", "FAILURE", "CANCELLED", "ABORTED", "REJECTED"})
IN_PROGRESS_STATUSES = frozenset(
    {
        "PENDING",
        "PROCESSING",
        "IN_PROGRESS",
        "IN PROGRESS",
        "RUNNING",
        "QUEUED",
        "QUEUE",
        "WAITING",
        "STARTED",
        "ACTIVE",
    }
)

STATUS_FIELDS = ("status", "task_status", "state", "taskStatus")
FAIL_REASON_FIELDS = ("fail_reason", "error", "message", "reason", "error_message")
RESULT_URL_FIELDS = ("url", "urls", "image_url", "image_urls")
RESULT_LIST_FIELDS = ("images", "urls", "image_urls")


def unwrap_envelope(payload: Any) -> Any:
    """Return ``payload["data"]`` when it is a mapping, else ``payload``."""

    if isinstance(payload, Mapping):
        inner = payload.get("data")
        if isinstance(inner, Mapping):
            return inner
    return payload


def extract_status(payload: Mapping[str, Any], fields: Iterable[str] = STATUS_FIELDS) -> str | None:
    """Return the first populated status value among synonymous fields."""

    for name in fields:
        value = payload.get(name)
        if value:
            return str(value)
    return None


def has_result_evidence(payload: Mapping[str, Any]) -> bool:
    """Check whether a status payload already carries a finished result."""

    task_result = payload.get("task_result")
    if isinstance(task_result, Mapping) and any(task_result.get(key) for key in RESULT_URL_FIELDS):
        return True
    if payload.get("result") or payload.get("url"):
        return True
    for key in RESULT_LIST_FIELDS:
        value = payload.get(key)
        if isinstance(value, list) and value:
            return True
    return False


def classify_value(
    value: str | None,
    *,
    extra_success: frozenset[str] = frozenset(),
    extra_failure: frozenset[str] = frozenset(),
    extra_in_progress: frozenset[str] = frozenset(),
) -> JobState:
    """Map a raw status string onto :class:`JobState`.

    Matching is case-insensitive. Values outside the known vocabulary map to
    ``UNKNOWN``, which the poller treats as still in progress.
    """

    if not value:
        return JobState.UNKNOWN
    upper = str(value).strip().upper()
    if upper in SUCCESS_STATUSES or upper in extra_success:
        return JobState.SUCCEEDED
    if upper in FAILURE_STATUSES or upper in extra_failure:
        return JobState.FAILED
    if upper in IN_PROGRESS_STATUSES or upper in extra_in_progress:
        return JobState.IN_PROGRESS
    return JobState.UNKNOWN


def classify_payload(
    payload: Mapping[str, Any],
    *,
    use_result_evidence: bool = True,
    status_fields: Iterable[str] = STATUS_FIELDS,
    extra_success: frozenset[str] = frozenset(),
    extra_failure: frozenset[str] = frozenset(),
    extra_in_progress: frozenset[str] = frozenset(),
) -> JobStatus:
    """Classify one status payload, honouring the result-evidence short-circuit."""

    status_value = extract_status(payload, status_fields)
    if use_result_evidence and has_result_evidence(payload):
        return JobStatus(raw_payload=payload, state=JobState.SUCCEEDED, status_value=status_value)
    state = classify_value(
        status_value,
        extra_success=extra_success,
        extra_failure=extra_failure,
        extra_in_progress=extra_in_progress,
    )
    return JobStatus(raw_payload=payload, state=state, status_value=status_value)


def extract_fail_reason(payload: Mapping[str, Any]) -> str:
    """Return the best-available failure reason from a status payload."""

    for name in FAIL_REASON_FIELDS:
        value = payload.get(name)
        if not value:
            continue
        if isinstance(value, Mapping):
            nested = value.get("message") or value.get("detail")
            if nested:
                return str(nested)
        return str(value)
    return "Unknown error"


__all__ = [
    "SUCCESS_STATUSES",
    "FAILURE_STATUSES",
    "IN_PROGRESS_STATUSES",
    "STATUS_FIELDS",
    "unwrap_envelope",
    "extract_status",
    "has_result_evidence",
    "classify_value",
    "classify_payload",
    "extract_fail_reason",
]
