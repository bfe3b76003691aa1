"""Discord platform adapter: ChatPlatformPort over discord.Client.

Also converts discord.Message objects into platform-agnostic IncomingMessage.
"""

from typing import Optional, Set

import discord

from chat_relay.errors import DeliveryFailure
from chat_relay.ports.inbound import Attachment, IncomingMessage, MessageReference


def _reference(message: discord.Message) -> Optional[MessageReference]:
    ref = message.reference
    if ref is None or not ref.message_id or not ref.channel_id:
        return None
    resolved = ref.resolved
    resolved_author_id = resolved.author.id if isinstance(resolved, discord.Message) else None
    return MessageReference(
        channel_id=ref.channel_id,
        message_id=ref.message_id,
        resolved_author_id=resolved_author_id,
    )


def to_incoming(message: discord.Message, relay_user: Optional[discord.abc.User]) -> IncomingMessage:
    """Convert a Discord message to platform-agnostic IncomingMessage."""
    guild = message.guild
    return IncomingMessage(
        message_id=message.id,
        channel_id=message.channel.id,
        channel_name=getattr(message.channel, "name", None),
        guild_id=guild.id if guild else None,
        guild_name=guild.name if guild else None,
        author_id=message.author.id,
        author_tag=str(message.author),
        author_is_bot=message.author.bot,
        content=message.content or "",
        attachments=[
            Attachment(
                id=att.id,
                filename=att.filename or None,
                url=att.url or None,
                proxy_url=att.proxy_url or None,
                size=att.size or None,
                content_type=att.content_type,
            )
            for att in message.attachments
        ],
        created_at=message.created_at,
        edited_at=message.edited_at,
        mentions_relay=bool(relay_user and relay_user.mentioned_in(message)),
        reference=_reference(message),
    )


def partial_incoming(payload: discord.RawMessageUpdateEvent) -> IncomingMessage:
    """Placeholder for an edit whose message is not in the cache."""
    return IncomingMessage(
        message_id=payload.message_id,
        channel_id=payload.channel_id,
        guild_id=payload.guild_id,
        author_id=0,
        is_partial=True,
    )


class DiscordPlatform:
    """ChatPlatformPort implementation using discord.Client."""

    def __init__(self, client: discord.Client):
        self._client = client

    @property
    def relay_user_id(self) -> Optional[int]:
        user = self._client.user
        return user.id if user else None

    async def _channel(self, channel_id: int):
        return self._client.get_channel(channel_id) or await self._client.fetch_channel(channel_id)

    async def fetch_member_role_ids(self, guild_id: int, user_id: int) -> Optional[Set[int]]:
        guild = self._client.get_guild(guild_id) or await self._client.fetch_guild(guild_id)
        try:
            member = await guild.fetch_member(user_id)
        except discord.NotFound:
            return None
        return {role.id for role in member.roles}

    async def fetch_message_author_id(self, channel_id: int, message_id: int) -> Optional[int]:
        channel = await self._channel(channel_id)
        try:
            referenced = await channel.fetch_message(message_id)
        except discord.NotFound:
            return None
        return referenced.author.id

    async def refetch(self, message: IncomingMessage) -> Optional[IncomingMessage]:
        channel = await self._channel(message.channel_id)
        try:
            fresh = await channel.fetch_message(message.message_id)
        except discord.NotFound:
            return None
        return to_incoming(fresh, self._client.user)

    async def reply(self, message: IncomingMessage, text: str, mention_author: bool = False) -> None:
        try:
            channel = await self._channel(message.channel_id)
            await channel.get_partial_message(message.message_id).reply(
                content=text, mention_author=mention_author
            )
        except discord.HTTPException as e:
            raise DeliveryFailure(str(e)) from e

    async def send(self, channel_id: int, text: str) -> None:
        try:
            channel = await self._channel(channel_id)
            await channel.send(content=text)
        except discord.HTTPException as e:
            raise DeliveryFailure(str(e)) from e

    async def send_typing(self, channel_id: int) -> None:
        channel = await self._channel(channel_id)
        await channel.typing()

    async def close(self) -> None:
        await self._client.close()
