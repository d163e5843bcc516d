"""httpx doubles shared by engine, service and API tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import httpx


class DummyHTTPResponse:
    def __init__(
        self,
        status_code: int,
        json_data: Any = None,
        text: str = "",
        headers: dict[str, str] | None = None,
    ) -> None:
        self.status_code = status_code
        self._json_data = json_data
        self.text = text
        self.headers = headers or {}

    def json(self) -> Any:
        if self._json_data is None:
            raise ValueError("No JSON data")
        return self._json_data


@dataclass
class RecordedCall:
    method: str
    url: str
    headers: dict[str, str]
    json: Any
    params: Any
    timeout: Any


@dataclass
class HttpScript:
    """Queued responses per HTTP method plus a log of every call made."""

    post: list[Any] = field(default_factory=list)
    get: list[Any] = field(default_factory=list)
    calls: list[RecordedCall] = field(default_factory=list)

    def urls(self, method: str | None = None) -> list[str]:
        return [call.url for call in self.calls if method is None or call.method == method]


class DummyAsyncClient:
    def __init__(self, script: HttpScript, timeout: Any = None) -> None:
        self._script = script
        self._timeout = timeout

    async def __aenter__(self) -> "DummyAsyncClient":  # pragma: no cover - helper
        return self

    async def __aexit__(
        self, exc_type, exc_value, traceback
    ) -> None:  # pragma: no cover - helper
        return None

    async def request(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
        json: Any = None,
        params: Any = None,
    ) -> DummyHTTPResponse:
        self._script.calls.append(
            RecordedCall(
                method=method,
                url=url,
                headers=dict(headers or {}),
                json=json,
                params=params,
                timeout=self._timeout,
            )
        )
        queue = self._script.post if method == "POST" else self._script.get
        if not queue:
            raise RuntimeError(f"No {method} responses queued for {url}")
        response = queue.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def configure_httpx(
    monkeypatch,
    post_responses: list[Any] | None = None,
    get_responses: list[Any] | None = None,
) -> HttpScript:
    script = HttpScript(post=list(post_responses or []), get=list(get_responses or []))

    def factory(*args, **kwargs):
        return DummyAsyncClient(script, timeout=kwargs.get("timeout"))

    monkeypatch.setattr("httpx.AsyncClient", factory)
    return script


def transport_error(message: str = "connection refused") -> httpx.ConnectError:
    return httpx.ConnectError(message)
