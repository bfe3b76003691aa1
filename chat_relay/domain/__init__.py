"""Domain layer: pure Python, no framework dependencies."""

from chat_relay.domain.auth import AuthorizationDecision, AuthorizationGate, AuthReason, has_allowed_role
from chat_relay.domain.chunker import split_into_chunks
from chat_relay.domain.delivery import ReplyDelivery
from chat_relay.domain.heartbeat import TypingHeartbeat
from chat_relay.domain.normalizer import normalize
from chat_relay.domain.payload import OutboundPayload, build_payload
from chat_relay.domain.router import EventRouter, RouteOutcome
from chat_relay.domain.sanitizer import sanitize_content

__all__ = [
    "AuthorizationDecision",
    "AuthorizationGate",
    "AuthReason",
    "has_allowed_role",
    "split_into_chunks",
    "ReplyDelivery",
    "TypingHeartbeat",
    "normalize",
    "OutboundPayload",
    "build_payload",
    "EventRouter",
    "RouteOutcome",
    "sanitize_content",
]
