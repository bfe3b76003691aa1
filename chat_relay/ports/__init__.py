"""Port interfaces (Hexagonal Architecture)."""

from chat_relay.ports.inbound import (
    Attachment,
    IncomingMessage,
    MessageCreated,
    MessageEdited,
    MessageReference,
    RelayEvent,
    ShutdownRequested,
)
from chat_relay.ports.outbound import (
    BackendFailure,
    BackendPort,
    BackendResult,
    BackendSuccess,
    ChatPlatformPort,
)

__all__ = [
    "Attachment",
    "IncomingMessage",
    "MessageCreated",
    "MessageEdited",
    "MessageReference",
    "RelayEvent",
    "ShutdownRequested",
    "BackendFailure",
    "BackendPort",
    "BackendResult",
    "BackendSuccess",
    "ChatPlatformPort",
]
