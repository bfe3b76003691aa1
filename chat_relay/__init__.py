"""Chat Relay: Discord to automation-webhook relay."""

__version__ = "0.1.0"
