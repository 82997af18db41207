"""Error types raised while adapting a request or calling the upstream API."""
from __future__ import annotations


class GatewayError(Exception):
    """Base class for failures reported to the caller as ``{"message": ...}``."""

    @property
    def message(self) -> str:
        return str(self)


class InputValidationError(GatewayError):
    """A required prompt or file was not supplied."""


class UpstreamError(GatewayError):
    """The generation service (or its client) failed."""
