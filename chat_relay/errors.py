"""Relay error types."""

from typing import Optional


class RelayError(Exception):
    """Base class for relay errors."""


class ConfigError(RelayError):
    """Required configuration is missing or unusable. Fatal at startup."""


class AuthorizationDenied(RelayError):
    """The acting user may not use the relay."""

    def __init__(self, decision):
        super().__init__(f"authorization denied: {decision.reason.value}")
        self.decision = decision


class BackendUnavailable(RelayError):
    """The backend timed out, was unreachable, or answered with a non-2xx status."""

    def __init__(self, reason: str, status: Optional[int] = None):
        super().__init__(reason)
        self.reason = reason
        self.status = status


class DeliveryFailure(RelayError):
    """A message could not be sent to the chat platform."""
