"""Timeout and poll scheduling helpers.

``resolve_sync_timeout_ms`` is the only place where timeout policy per media
type is decided; the asynchronous poll deadline falls back to the same table
when no explicit budget is configured.
"""

from __future__ import annotations

from dataclasses import dataclass

from .jobs_models import MediaType

VIDEO_TIMEOUT_MS = 3_600_000
DEFAULT_TIMEOUT_MS = 600_000


def resolve_sync_timeout_ms(media_type: MediaType | str | None) -> int:
    """Return the synchronous request timeout for ``media_type``."""

    if media_type is not None and MediaType(media_type) is MediaType.VIDEO:
        return VIDEO_TIMEOUT_MS
    return DEFAULT_TIMEOUT_MS


@dataclass(slots=True)
class PollSchedule:
    """Exponential backoff between polls bounded by an overall deadline."""

    initial_interval: float
    backoff_factor: float
    max_interval: float
    deadline_seconds: float

    def __post_init__(self) -> None:
        if self.initial_interval < 0:
            raise ValueError("initial_interval must not be negative")
        if self.backoff_factor < 1:
            raise ValueError("backoff_factor must be at least 1")
        if self.deadline_seconds <= 0:
            raise ValueError("deadline_seconds must be positive")

    @classmethod
    def for_media(
        cls,
        media_type: MediaType | str | None,
        *,
        initial_interval: float = 2.0,
        backoff_factor: float = 1.5,
        max_interval: float = 30.0,
        deadline_seconds: float | None = None,
    ) -> "PollSchedule":
        """Build a schedule whose deadline defaults to the media timeout."""

        if deadline_seconds is None:
            deadline_seconds = resolve_sync_timeout_ms(media_type) / 1000
        return cls(
            initial_interval=initial_interval,
            backoff_factor=backoff_factor,
            max_interval=max(max_interval, initial_interval),
            deadline_seconds=deadline_seconds,
        )

    def interval_for(self, attempt: int) -> float:
        """Delay after poll number ``attempt`` (1-based)."""

        if attempt < 1:
            raise ValueError("attempt must be positive")
        delay = self.initial_interval * (self.backoff_factor ** (attempt - 1))
        return min(delay, self.max_interval)


__all__ = [
    "VIDEO_TIMEOUT_MS",
    "DEFAULT_TIMEOUT_MS",
    "resolve_sync_timeout_ms",
    "PollSchedule",
]
