from __future__ import annotations

from uuid import uuid4


def new_trace_id() -> str:
    return uuid4().hex


class TrackedError(Exception):
    def __init__(self, message: str, *, error_type: str, trace_id: str | None = None) -> None:
        self.error_type = error_type
        self.trace_id = trace_id or new_trace_id()
        super().__init__(message)

    @property
    def message(self) -> str:
        return str(self.args[0]) if self.args else ""

    def with_trace(self) -> str:
        return f"{self.message} (trace_id={self.trace_id})"


class ConfigError(TrackedError):
    """A required setting (usually the gateway credential) is missing."""

    status_code = 500

    def __init__(self, message: str, *, trace_id: str | None = None) -> None:
        super().__init__(message, error_type="config", trace_id=trace_id)


class GatewayError(TrackedError):
    """Base error for failures of a generation call."""

    status_code = 500
    default_message = "AI gateway request failed"

    def __init__(
        self,
        message: str | None = None,
        *,
        upstream_status: int | None = None,
        error_type: str = "upstream",
        trace_id: str | None = None,
    ) -> None:
        self.upstream_status = upstream_status
        super().__init__(message or self.default_message, error_type=error_type, trace_id=trace_id)


class RateLimitedError(GatewayError):
    status_code = 429
    default_message = "Rate limit exceeded. Please try again in a moment."

    def __init__(self, message: str | None = None, *, trace_id: str | None = None) -> None:
        super().__init__(message, upstream_status=429, error_type="rate_limited", trace_id=trace_id)


class QuotaExhaustedError(GatewayError):
    status_code = 402
    default_message = "AI credits exhausted. Please add credits to continue."

    def __init__(self, message: str | None = None, *, trace_id: str | None = None) -> None:
        super().__init__(message, upstream_status=402, error_type="quota_exhausted", trace_id=trace_id)


class UpstreamError(GatewayError):
    def __init__(
        self,
        message: str | None = None,
        *,
        upstream_status: int | None = None,
        trace_id: str | None = None,
    ) -> None:
        super().__init__(message, upstream_status=upstream_status, error_type="upstream", trace_id=trace_id)


class MalformedResponseError(GatewayError):
    default_message = "Invalid response format from AI"

    def __init__(self, message: str | None = None, *, trace_id: str | None = None) -> None:
        super().__init__(message, error_type="malformed_response", trace_id=trace_id)


__all__ = [
    "new_trace_id",
    "TrackedError",
    "ConfigError",
    "GatewayError",
    "RateLimitedError",
    "QuotaExhaustedError",
    "UpstreamError",
    "MalformedResponseError",
]
