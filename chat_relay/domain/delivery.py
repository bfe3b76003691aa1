"""Send the backend's reply back to the originating conversation."""

from chat_relay import log
from chat_relay.domain.chunker import DISCORD_MESSAGE_LIMIT, split_into_chunks
from chat_relay.errors import DeliveryFailure
from chat_relay.ports.inbound import IncomingMessage
from chat_relay.ports.outbound import ChatPlatformPort


class ReplyDelivery:
    """First segment as a reply to the origin, the rest as follow-ups."""

    def __init__(self, platform: ChatPlatformPort, max_len: int = DISCORD_MESSAGE_LIMIT):
        self._platform = platform
        self._max_len = max_len

    async def deliver(self, origin: IncomingMessage, text: str) -> int:
        """Returns the number of segments sent. Failures are logged, never retried."""
        chunks = [c for c in split_into_chunks(text, self._max_len) if c]
        if not chunks:
            return 0

        try:
            await self._platform.reply(origin, chunks[0], mention_author=False)
        except DeliveryFailure as e:
            log.error(f"failed to reply to message {origin.message_id}: {e}")
            return 0

        sent = 1
        for index, chunk in enumerate(chunks[1:], start=2):
            try:
                await self._platform.send(origin.channel_id, chunk)
                sent += 1
            except DeliveryFailure as e:
                log.error(f"failed to send segment {index}/{len(chunks)} for message {origin.message_id}: {e}")
        return sent
