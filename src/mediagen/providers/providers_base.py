"""Base transport and authentication adapter for provider families."""

from __future__ import annotations

import inspect
import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, ClassVar, Mapping, Union

import httpx

from ..exceptions import CredentialError, CredentialErrorReason, HttpError, UnsupportedModeError
from ..jobs.jobs_classifier import unwrap_envelope
from ..jobs.jobs_models import CapabilityDescriptor, JobRequest, ProviderResponse
from ..jobs.jobs_strategies import PollingStrategy

logger = logging.getLogger(__name__)

CredentialPayload = Union[Mapping[str, Any], None]
CredentialLoader = Callable[[], Union[CredentialPayload, Awaitable[CredentialPayload]]]


@dataclass(slots=True)
class ProviderAdapter(ABC):
    """Transport + auth for one provider family.

    Subclasses declare the provider identity, the credential field, the
    authorization scheme and the base URLs; this class loads the credential
    lazily (once per instance), performs JSON calls via ``httpx`` and turns
    transport or non-2xx failures into :class:`HttpError`.
    """

    credential_loader: CredentialLoader
    async_base_url: str = ""
    sync_base_url: str = ""
    request_timeout_seconds: float = 120.0
    log: logging.Logger = field(default_factory=lambda: logger)
    _credential: str | None = field(default=None, init=False, repr=False)

    provider_id: ClassVar[str]
    display_name: ClassVar[str]
    credential_name: ClassVar[str]
    credential_field: ClassVar[str] = "apiKey"
    auth_scheme: ClassVar[str] = "Bearer"
    extra_headers: ClassVar[Mapping[str, str]] = {}
    verify_base_url: ClassVar[str | None] = None
    verify_path: ClassVar[str | None] = None
    verify_params: ClassVar[Mapping[str, Any]] = {}

    @abstractmethod
    def polling_strategy(self, descriptor: CapabilityDescriptor) -> PollingStrategy:
        """Return the polling protocol used for ``descriptor``."""

    def sync_headers(self) -> dict[str, str]:
        """Extra headers sent with synchronous calls only."""

        return {}

    async def ensure_credential(self) -> str:
        """Fetch, validate and cache the provider credential."""

        if self._credential is not None:
            return self._credential

        loaded = self.credential_loader()
        if inspect.isawaitable(loaded):
            loaded = await loaded

        label = self.display_name
        if loaded is None:
            raise CredentialError(
                f"{label} API credentials not found. Configure the '{self.credential_name}' credential.",
                reason=CredentialErrorReason.NOT_FOUND,
            )
        if not isinstance(loaded, Mapping):
            raise CredentialError(
                f"Invalid {label} API credentials format. Expected mapping, got {type(loaded).__name__}.",
                reason=CredentialErrorReason.INVALID_SHAPE,
            )
        if not loaded:
            raise CredentialError(
                f"{label} API credentials are empty. The credential was selected but contains no data.",
                reason=CredentialErrorReason.EMPTY,
            )

        value = loaded.get(self.credential_field)
        if value is None:
            available = ", ".join(str(key) for key in loaded) or "none"
            raise CredentialError(
                f"{label} API credential field '{self.credential_field}' is required. "
                f"Found keys: {available}.",
                reason=CredentialErrorReason.NOT_FOUND,
            )
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            raise CredentialError(
                f"Invalid {label} API credential type. Expected string or number, "
                f"got {type(value).__name__}.",
                reason=CredentialErrorReason.INVALID_SHAPE,
            )
        token = str(value).strip()
        if not token:
            raise CredentialError(
                f"{label} API credential '{self.credential_field}' is empty.",
                reason=CredentialErrorReason.EMPTY,
            )

        self._credential = token
        return token

    async def send(self, job_request: JobRequest) -> ProviderResponse:
        """Send a fully resolved :class:`JobRequest`."""

        return await self.request(
            job_request.method,
            job_request.url,
            job_request.body,
            timeout_ms=job_request.timeout_ms,
            headers=job_request.headers,
        )

    async def request(
        self,
        method: str,
        url: str,
        body: Mapping[str, Any] | None = None,
        *,
        timeout_ms: int | None = None,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> ProviderResponse:
        """Perform one JSON call and return the envelope-unwrapped payload."""

        token = await self.ensure_credential()
        request_headers = {
            "Content-Type": "application/json",
            **self.extra_headers,
            **dict(headers or {}),
            "Authorization": f"{self.auth_scheme} {token}",
        }
        timeout = timeout_ms / 1000 if timeout_ms else self.request_timeout_seconds

        try:
            async with httpx.AsyncClient(timeout=timeout) as client:
                response = await client.request(
                    method,
                    url,
                    headers=request_headers,
                    json=dict(body) if body is not None else None,
                    params=dict(params) if params else None,
                )
        except httpx.HTTPError as exc:
            message = str(exc) or exc.__class__.__name__
            self.log.error(
                "provider.request.transport_error",
                extra={"provider": self.provider_id, "method": method, "url": url, "error": message},
            )
            raise self._http_error(
                message,
                method=method,
                url=url,
                headers=request_headers,
                body=body,
            ) from exc

        if not 200 <= response.status_code < 300:
            detail = _extract_error(response)
            self.log.error(
                "provider.response.error status=%s detail=%s",
                response.status_code,
                detail,
                extra={
                    "provider": self.provider_id,
                    "method": method,
                    "url": url,
                    "http_status": response.status_code,
                },
            )
            raise self._http_error(
                detail,
                method=method,
                url=url,
                headers=request_headers,
                body=body,
                status_code=response.status_code,
            )

        try:
            raw = response.json()
        except ValueError as exc:
            raise self._http_error(
                "Provider response is not valid JSON",
                method=method,
                url=url,
                headers=request_headers,
                body=body,
                status_code=response.status_code,
            ) from exc

        return ProviderResponse(
            status_code=response.status_code,
            payload=unwrap_envelope(raw),
            raw=raw,
        )

    async def verify_credentials(self) -> Any:
        """Call the provider catalogue endpoint to confirm the credential works."""

        if self.verify_path is None:
            raise UnsupportedModeError(f"{self.display_name} has no credential test endpoint")
        base_url = self.verify_base_url or self.sync_base_url
        response = await self.request("GET", f"{base_url}{self.verify_path}", params=self.verify_params)
        return response.payload

    def _http_error(
        self,
        provider_message: str,
        *,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Any,
        status_code: int | None = None,
    ) -> HttpError:
        return HttpError(
            f"API request failed: {provider_message}",
            method=method,
            url=url,
            status_code=status_code,
            provider_message=provider_message,
            headers=_mask_headers(headers),
            body=json.dumps(body, indent=2, ensure_ascii=False, default=str) if body is not None else None,
        )


def _mask_headers(headers: Mapping[str, str]) -> dict[str, str]:
    masked = dict(headers)
    auth = masked.get("Authorization")
    if auth:
        scheme, _, _ = auth.partition(" ")
        masked["Authorization"] = f"{scheme} ***"
    return masked


def _extract_error(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if not isinstance(data, Mapping):
        return str(data)
    detail = data.get("detail")
    if isinstance(detail, list):
        messages = [
            str(item.get("msg") or item) if isinstance(item, Mapping) else str(item)
            for item in detail
        ]
        return "; ".join(messages)
    if detail:
        return str(detail)
    message = data.get("message")
    if message:
        return str(message)
    error = data.get("error")
    if isinstance(error, Mapping):
        return str(error.get("message") or error)
    if error:
        return str(error)
    return str(data)


__all__ = ["CredentialLoader", "ProviderAdapter"]
