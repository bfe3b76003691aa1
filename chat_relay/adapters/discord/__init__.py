"""Discord adapter package."""

from chat_relay.adapters.discord.client import RelayClient
from chat_relay.adapters.discord.platform import DiscordPlatform, to_incoming

__all__ = ["RelayClient", "DiscordPlatform", "to_incoming"]
