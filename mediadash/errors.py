"""
Error taxonomy shared by every upstream operation.

Each operation converts its own failures into one of these kinds before
returning, so nothing crosses the gateway boundary unconverted. The API layer
renders them as `{"error": <message>}` with `status_code`.
"""
from __future__ import annotations

from typing import Any


class GatewayError(RuntimeError):
    status_code: int = 500

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_payload(self) -> dict[str, Any]:
        return {"error": self.message}


class ValidationError(GatewayError):
    """A required input is missing or empty."""

    status_code = 400


class ConfigurationError(GatewayError):
    """A base URL or API key needed by the operation is not set."""

    status_code = 500


class UpstreamError(GatewayError):
    """The upstream service answered with a non-2xx status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body_snippet: str | None = None,
    ) -> None:
        # Mirror the upstream status when it is an error status; anything else is a bad gateway.
        mirrored = status_code if status_code is not None and 400 <= status_code < 600 else 502
        super().__init__(message, status_code=mirrored)
        self.upstream_status = status_code
        self.body_snippet = body_snippet

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        if self.body_snippet:
            payload["detail"] = self.body_snippet
        return payload


class TransportError(GatewayError):
    """Network-level failure: unreachable host, timeout, malformed response."""

    status_code = 500
