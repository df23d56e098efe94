"""
Farmer Assistant — Upstream Errors
Failures raised by the proxy services; routers map them to HTTP responses.
"""

from typing import Any


class UpstreamError(Exception):
    """Base class for failures talking to a third-party provider."""

    status_code: int = 502


class UpstreamNotConfigured(UpstreamError):
    """No credential configured for the provider."""

    status_code = 500

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(f"{provider} API key not configured")


class UpstreamResponseError(UpstreamError):
    """Provider answered with a non-2xx status; its body is relayed as-is."""

    def __init__(self, status_code: int, payload: Any):
        self.status_code = status_code
        self.payload = payload
        super().__init__(f"Upstream returned HTTP {status_code}")


class InvalidUpstreamResponse(UpstreamError):
    """Provider body could not be decoded as JSON."""

    status_code = 500

    def __init__(self, message: str, body: str):
        self.body = body
        super().__init__(message)


class UpstreamUnavailable(UpstreamError):
    """Transport-level failure: DNS, connect, timeout."""

    status_code = 502
