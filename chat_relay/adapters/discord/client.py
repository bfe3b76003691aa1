"""RelayClient: thin discord.Client that feeds gateway events to EventRouter."""

from typing import Optional

import discord

from chat_relay import log
from chat_relay.adapters.discord.platform import DiscordPlatform, partial_incoming, to_incoming
from chat_relay.adapters.webhook.client import WebhookClient
from chat_relay.config import RelayConfig
from chat_relay.domain.auth import AuthorizationGate
from chat_relay.domain.router import EventRouter, RouteOutcome
from chat_relay.ports.inbound import MessageCreated, MessageEdited, ShutdownRequested
from chat_relay.ports.outbound import BackendPort


def relay_intents() -> discord.Intents:
    intents = discord.Intents.none()
    intents.guilds = True
    intents.guild_messages = True
    intents.dm_messages = True
    intents.message_content = True
    intents.members = True
    return intents


class RelayClient(discord.Client):
    """Converts discord.Message events and delegates them to EventRouter."""

    def __init__(self, config: RelayConfig, backend: Optional[BackendPort] = None, **discord_kwargs):
        super().__init__(intents=relay_intents(), **discord_kwargs)
        self.platform = DiscordPlatform(self)
        gate = AuthorizationGate(self.platform, config.allowed_role_ids, config.dm_guild_id)
        self.router = EventRouter(
            platform=self.platform,
            gate=gate,
            backend=backend or WebhookClient(),
            webhook_url=config.webhook_url,
            timeout_ms=config.timeout_ms,
        )

    async def on_ready(self):
        log.info(f"Bot ready: {self.user}")

    async def on_message(self, message: discord.Message) -> RouteOutcome:
        incoming = to_incoming(message, self.user)
        return await self.router.dispatch(MessageCreated(incoming))

    async def on_message_edit(self, before: discord.Message, after: discord.Message) -> RouteOutcome:
        event = MessageEdited(
            before=to_incoming(before, self.user),
            after=to_incoming(after, self.user),
        )
        return await self.router.dispatch(event)

    async def on_raw_message_edit(self, payload: discord.RawMessageUpdateEvent) -> Optional[RouteOutcome]:
        # Cached messages are handled by on_message_edit
        if payload.cached_message is not None:
            return None
        return await self.router.dispatch(MessageEdited(before=None, after=partial_incoming(payload)))

    async def shutdown(self, reason: str = "SIGINT") -> RouteOutcome:
        return await self.router.dispatch(ShutdownRequested(reason))
