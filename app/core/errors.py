"""Exception types shared across clients, services and routes."""

from __future__ import annotations

from typing import Any


class ConfigurationError(RuntimeError):
    """Raised when required configuration is missing."""


class Pike13APIError(Exception):
    """Raised when the Pike13 API fails at the transport or HTTP level."""

    def __init__(self, message: str, *, status_code: int | None = None, payload: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload

    @property
    def detail(self) -> Any:
        """Remote error body when one was returned, otherwise the message."""
        if self.payload not in (None, ""):
            return self.payload
        return str(self)


__all__ = ["ConfigurationError", "Pike13APIError"]
