"""Domain level exceptions raised by the job execution engine."""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Mapping, TypeVar

__all__ = [
    "MediaGenError",
    "ValidationError",
    "CredentialErrorReason",
    "CredentialError",
    "DispatchError",
    "HttpError",
    "JobFailedError",
    "JobTimeoutError",
    "JobCancelledError",
    "UnsupportedModeError",
    "NotFoundError",
    "ensure_found",
]


T = TypeVar("T")


class MediaGenError(Exception):
    """Base class for engine specific errors."""


class ValidationError(MediaGenError):
    """Raised when a required input is missing, empty or out of range."""


class CredentialErrorReason(StrEnum):
    """Why a provider credential could not be used."""

    NOT_FOUND = "not_found"
    EMPTY = "empty"
    INVALID_SHAPE = "invalid_shape"


class CredentialError(MediaGenError):
    """Raised when a provider credential is absent, empty or malformed."""

    def __init__(self, message: str, *, reason: CredentialErrorReason) -> None:
        super().__init__(message)
        self.reason = reason


class DispatchError(MediaGenError):
    """Raised when a submission response carries no correlation token."""

    def __init__(self, message: str, *, raw_response: Any) -> None:
        super().__init__(message)
        self.raw_response = raw_response


class HttpError(MediaGenError):
    """Raised for transport failures and non-2xx provider responses."""

    def __init__(
        self,
        message: str,
        *,
        method: str,
        url: str,
        status_code: int | None = None,
        provider_message: str | None = None,
        headers: Mapping[str, str] | None = None,
        body: Any = None,
    ) -> None:
        super().__init__(message)
        self.method = method
        self.url = url
        self.status_code = status_code
        self.provider_message = provider_message
        self.headers = dict(headers or {})
        self.body = body

    def describe_request(self) -> str:
        """Render outbound request details for diagnostics."""

        lines = [f"Method: {self.method}", f"URL: {self.url}", f"Headers: {self.headers}"]
        lines.append(f"Body: {self.body}" if self.body is not None else "Body: (empty)")
        if self.status_code is not None:
            lines.append(f"Response Status: {self.status_code}")
        return "\n".join(lines)


class JobFailedError(MediaGenError):
    """Raised when the provider reports a terminal failure state."""

    def __init__(self, reason: str, *, payload: Mapping[str, Any] | None = None) -> None:
        super().__init__(f"Async request failed: {reason}")
        self.reason = reason
        self.payload = dict(payload or {})


class JobTimeoutError(MediaGenError, TimeoutError):
    """Raised when a submitted job does not finish before its deadline."""

    def __init__(self, message: str, *, token: str, polls: int) -> None:
        super().__init__(message)
        self.token = token
        self.polls = polls


class JobCancelledError(MediaGenError):
    """Raised when the caller cancels the wait for a submitted job."""

    def __init__(self, message: str, *, token: str) -> None:
        super().__init__(message)
        self.token = token


class UnsupportedModeError(MediaGenError):
    """Raised when a model or provider does not support the requested operation."""


class NotFoundError(MediaGenError):
    """Raised when a platform or capability could not be located."""


def ensure_found(record: T | None, *, entity: str, identifier: str) -> T:
    """Ensure a record exists, otherwise raise :class:`NotFoundError`."""

    if record is None:
        raise NotFoundError(f"{entity} '{identifier}' not found")
    return record
