from __future__ import annotations

"""Centralised error types for the relay.

Each custom error is JSON-serialisable via ``to_dict`` so handlers and logs
can expose machine-readable diagnostics instead of free-form strings.
"""

from typing import Any, Dict, Optional


class RoadAwareError(Exception):
    """Base class for all structured relay exceptions."""

    code: str = "ROADAWARE_ERROR"
    status_code: int = 500

    def __init__(self, message: str, *, data: Optional[Dict[str, Any]] = None) -> None:  # noqa: D401 – simple init
        super().__init__(message)
        self.message = message
        self.data = data or {}

    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:  # noqa: D401 – utility
        return {
            "code": self.code,
            "status_code": self.status_code,
            "message": self.message,
            "data": self.data,
        }

    def __str__(self) -> str:  # noqa: D401 – friendly repr
        return f"{self.code}: {self.message}"


class InvalidInputError(RoadAwareError):
    code = "INVALID_INPUT"
    status_code = 400


class ProviderConfigError(RoadAwareError):
    code = "PROVIDER_CONFIG_ERROR"


class ProviderError(RoadAwareError):
    """Non-success response from the provider.

    ``status_code`` and ``body`` are the provider's own, so callers can pass
    them through untouched.
    """

    code = "PROVIDER_ERROR"

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(
            f"Provider returned HTTP {status_code}",
            data={"status_code": status_code, "body": body},
        )
        self.status_code = status_code
        self.body = body
