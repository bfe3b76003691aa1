"""Build the outbound webhook payload from an incoming message."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from chat_relay.domain.sanitizer import sanitize_content
from chat_relay.ports.inbound import Attachment, IncomingMessage

MESSAGE_LINK = "https://discord.com/channels/{guild_id}/{channel_id}/{message_id}"


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _id(value: Optional[int]) -> Optional[str]:
    return str(value) if value is not None else None


def message_link(message: IncomingMessage) -> Optional[str]:
    """Permalink for guild messages; direct messages have none."""
    if message.guild_id is None:
        return None
    return MESSAGE_LINK.format(
        guild_id=message.guild_id,
        channel_id=message.channel_id,
        message_id=message.message_id,
    )


@dataclass(frozen=True)
class OutboundPayload:
    message_id: int
    channel_id: int
    channel_name: Optional[str]
    guild_id: Optional[int]
    guild_name: Optional[str]
    author_id: int
    author_tag: str
    text: str
    raw: str
    attachments: Tuple[Attachment, ...] = field(default_factory=tuple)
    created_at: Optional[datetime] = None
    edited_at: Optional[datetime] = None
    is_edit: bool = False
    link: Optional[str] = None
    type: str = "chat"

    def to_dict(self) -> Dict[str, Any]:
        """Wire representation posted to the webhook."""
        return {
            "type": self.type,
            "messageId": _id(self.message_id),
            "channelId": _id(self.channel_id),
            "channelName": self.channel_name,
            "guildId": _id(self.guild_id),
            "guildName": self.guild_name,
            "author": {"id": _id(self.author_id), "tag": self.author_tag},
            "content": {"id": _id(self.message_id), "text": self.text, "raw": self.raw},
            "attachments": [_attachment_dict(a) for a in self.attachments],
            "createdAt": _iso(self.created_at),
            "editedAt": _iso(self.edited_at),
            "isEdit": self.is_edit,
            "link": self.link,
        }


def _attachment_dict(att: Attachment) -> Dict[str, Any]:
    return {
        "id": _id(att.id),
        "name": att.filename,
        "url": att.url,
        "proxyUrl": att.proxy_url,
        "size": att.size,
        "contentType": att.content_type,
    }


def build_payload(
    message: IncomingMessage,
    relay_user_id: Optional[int],
    is_edit: bool = False,
) -> OutboundPayload:
    raw = message.content or ""
    return OutboundPayload(
        message_id=message.message_id,
        channel_id=message.channel_id,
        channel_name=message.channel_name,
        guild_id=message.guild_id,
        guild_name=message.guild_name,
        author_id=message.author_id,
        author_tag=message.author_tag,
        text=sanitize_content(raw, relay_user_id),
        raw=raw,
        attachments=tuple(message.attachments or ()),
        created_at=message.created_at,
        edited_at=message.edited_at,
        is_edit=is_edit,
        link=message_link(message),
    )
