"""Launcher for the relay bot."""

import asyncio
import signal
import sys

import discord

from chat_relay import log
from chat_relay.adapters.discord.client import RelayClient
from chat_relay.config import RelayConfig
from chat_relay.errors import ConfigError


def _log_unhandled(loop: asyncio.AbstractEventLoop, context: dict):
    err = context.get("exception") or context.get("message")
    log.error(f"Unhandled async error: {err!r}")


def _install_signal_handlers(loop: asyncio.AbstractEventLoop, client: RelayClient):
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, lambda s=sig: asyncio.ensure_future(client.shutdown(s.name)))
        except (NotImplementedError, RuntimeError):
            # add_signal_handler is unavailable on Windows event loops
            pass


async def run(config: RelayConfig) -> int:
    """Run the bot until it is closed. Returns the process exit code."""
    loop = asyncio.get_running_loop()
    loop.set_exception_handler(_log_unhandled)

    client = RelayClient(config)
    _install_signal_handlers(loop, client)
    try:
        await client.start(config.discord_token)
    except discord.LoginFailure as e:
        log.error(f"Failed to login: {e}")
        return 1
    finally:
        if not client.is_closed():
            await client.close()
    return 0


def main():
    try:
        config = RelayConfig.from_env()
    except ConfigError as e:
        log.error(str(e))
        sys.exit(1)

    log.set_level(config.log_level)
    try:
        code = asyncio.run(run(config))
    except KeyboardInterrupt:
        code = 0
    sys.exit(code)


if __name__ == "__main__":
    main()
