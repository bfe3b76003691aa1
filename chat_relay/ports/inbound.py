"""Inbound port: platform-agnostic message and event representation."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Union


@dataclass(frozen=True)
class Attachment:
    id: int
    filename: Optional[str] = None
    url: Optional[str] = None
    proxy_url: Optional[str] = None
    size: Optional[int] = None
    content_type: Optional[str] = None


@dataclass(frozen=True)
class MessageReference:
    """Pointer to the message being replied to."""

    channel_id: int
    message_id: int
    # Set when the platform already delivered the referenced message
    resolved_author_id: Optional[int] = None


@dataclass(frozen=True)
class IncomingMessage:
    """Discord-agnostic message representation."""

    message_id: int
    channel_id: int
    author_id: int
    content: str = ""
    author_tag: str = ""
    author_is_bot: bool = False
    channel_name: Optional[str] = None
    guild_id: Optional[int] = None
    guild_name: Optional[str] = None
    attachments: List[Attachment] = field(default_factory=list)
    created_at: Optional[datetime] = None
    edited_at: Optional[datetime] = None
    mentions_relay: bool = False
    reference: Optional[MessageReference] = None
    is_partial: bool = False

    @property
    def is_direct(self) -> bool:
        return self.guild_id is None

    @property
    def is_reply(self) -> bool:
        return self.reference is not None


@dataclass(frozen=True)
class MessageCreated:
    message: IncomingMessage


@dataclass(frozen=True)
class MessageEdited:
    before: Optional[IncomingMessage]
    after: IncomingMessage


@dataclass(frozen=True)
class ShutdownRequested:
    reason: str = "interrupt"


RelayEvent = Union[MessageCreated, MessageEdited, ShutdownRequested]
