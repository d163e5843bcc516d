"""Reusable error primitives for API exception handling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from fastapi import Request, status
from fastapi.responses import JSONResponse

from ..exceptions import (
    CredentialError,
    DispatchError,
    HttpError,
    JobCancelledError,
    JobFailedError,
    JobTimeoutError,
    MediaGenError,
    NotFoundError,
    UnsupportedModeError,
    ValidationError,
)


@dataclass(slots=True)
class ApiError(Exception):
    """Structured application-level error for HTTP handlers."""

    status_code: int
    code: str
    message: str
    headers: Mapping[str, str] | None = None

    def to_response(self) -> JSONResponse:
        """Materialise the error into a ``JSONResponse`` instance."""

        return JSONResponse(
            status_code=self.status_code,
            content={"error": {"code": self.code, "message": self.message}},
            headers=dict(self.headers or {}),
        )


# Ordered: the first matching class wins.
_DOMAIN_ERROR_MAP: tuple[tuple[type[MediaGenError], int, str], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST, "validation_error"),
    (UnsupportedModeError, status.HTTP_400_BAD_REQUEST, "unsupported_mode"),
    (CredentialError, status.HTTP_401_UNAUTHORIZED, "credential_error"),
    (NotFoundError, status.HTTP_404_NOT_FOUND, "not_found"),
    (JobTimeoutError, status.HTTP_504_GATEWAY_TIMEOUT, "job_timeout"),
    (JobCancelledError, status.HTTP_409_CONFLICT, "job_cancelled"),
    (JobFailedError, status.HTTP_502_BAD_GATEWAY, "job_failed"),
    (DispatchError, status.HTTP_502_BAD_GATEWAY, "dispatch_error"),
    (HttpError, status.HTTP_502_BAD_GATEWAY, "provider_error"),
)


def api_error_from_domain(exc: MediaGenError) -> ApiError:
    """Translate a domain exception into an :class:`ApiError`."""

    for error_type, status_code, code in _DOMAIN_ERROR_MAP:
        if isinstance(exc, error_type):
            return ApiError(status_code, code, str(exc))
    return ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, "internal_error", str(exc))


async def api_error_handler(_: Request, exc: ApiError) -> JSONResponse:
    """Convert :class:`ApiError` exceptions into JSON payloads."""

    return exc.to_response()


async def domain_error_handler(_: Request, exc: MediaGenError) -> JSONResponse:
    """Convert engine exceptions into JSON payloads."""

    return api_error_from_domain(exc).to_response()


__all__ = ["ApiError", "api_error_from_domain", "api_error_handler", "domain_error_handler"]
