"""EventRouter: decides which messages reach the backend and drives the pipeline.

No discord import; the platform and backend arrive as ports so the router
can be exercised with fakes.
"""

from enum import Enum
from typing import Optional

from chat_relay import log
from chat_relay.domain.auth import AuthorizationGate
from chat_relay.domain.delivery import ReplyDelivery
from chat_relay.domain.heartbeat import TYPING_INTERVAL_SECONDS, TypingHeartbeat
from chat_relay.domain.normalizer import normalize
from chat_relay.domain.payload import build_payload
from chat_relay.errors import AuthorizationDenied, BackendUnavailable, DeliveryFailure
from chat_relay.ports.inbound import (
    IncomingMessage,
    MessageCreated,
    MessageEdited,
    RelayEvent,
    ShutdownRequested,
)
from chat_relay.ports.outbound import BackendFailure, BackendPort, ChatPlatformPort

DENIED_TEXT = (
    "Sorry, you don't have permission to use this feature. "
    "If you think this is a mistake, please contact an admin."
)
DM_DENIED_TEXT = "Sorry, you don't have permission to DM the AI."
BACKEND_DOWN_TEXT = "Sorry, the processing service is having trouble right now. Please try again later."


class RouteOutcome(Enum):
    IGNORED = "ignored"
    DENIED = "denied"
    PROCESSED = "processed"
    SHUTDOWN = "shutdown"


class EventRouter:
    """Handles MessageCreated, MessageEdited and ShutdownRequested events.

    Created messages are processed when they are DMs or when they mention
    (or reply to) the relay. Edited messages are processed only when the
    edit turns an untriggered message into a triggered one.
    """

    def __init__(
        self,
        platform: ChatPlatformPort,
        gate: AuthorizationGate,
        backend: BackendPort,
        webhook_url: str,
        timeout_ms: int,
        typing_interval: float = TYPING_INTERVAL_SECONDS,
    ):
        self._platform = platform
        self._gate = gate
        self._backend = backend
        self._webhook_url = webhook_url
        self._timeout_ms = timeout_ms
        self._typing_interval = typing_interval
        self._delivery = ReplyDelivery(platform)

    async def dispatch(self, event: RelayEvent) -> RouteOutcome:
        """Route one event. Never raises; unexpected errors are logged."""
        try:
            if isinstance(event, MessageCreated):
                return await self.on_created(event.message)
            if isinstance(event, MessageEdited):
                return await self.on_edited(event.before, event.after)
            if isinstance(event, ShutdownRequested):
                return await self.on_shutdown(event)
            log.warn(f"unknown event {event!r}")
        except Exception as e:
            log.error(f"{type(event).__name__} error: {e!r}")
        return RouteOutcome.IGNORED

    async def on_created(self, message: IncomingMessage) -> RouteOutcome:
        if message.author_is_bot:
            return RouteOutcome.IGNORED

        if message.is_direct:
            decision = await self._gate.decide(message.author_id, None)
            if not decision.allowed:
                log.info(f"DM from {message.author_id} denied ({decision.reason.value})")
                await self._notify(message, DM_DENIED_TEXT)
                return RouteOutcome.DENIED
            if not self._webhook_configured():
                return RouteOutcome.IGNORED
            return await self._run_pipeline(message, is_edit=False)

        if await self.is_triggered(message):
            return await self.process(message, is_edit=False)
        return RouteOutcome.IGNORED

    async def on_edited(self, before: Optional[IncomingMessage], after: IncomingMessage) -> RouteOutcome:
        if after.is_partial:
            try:
                after = await self._platform.refetch(after)
            except Exception as e:
                log.debug(f"refetch of edited message failed: {e}")
                after = None
            if after is None:
                return RouteOutcome.IGNORED

        if after.author_is_bot:
            return RouteOutcome.IGNORED

        was_triggered = before is not None and await self.is_triggered(before)
        now_triggered = await self.is_triggered(after)
        if was_triggered or not now_triggered:
            return RouteOutcome.IGNORED
        return await self.process(after, is_edit=True)

    async def on_shutdown(self, event: ShutdownRequested) -> RouteOutcome:
        log.info(f"{event.reason}, shutting down...")
        try:
            await self._platform.close()
        except Exception as e:
            log.warn(f"disconnect failed: {e}")
        return RouteOutcome.SHUTDOWN

    async def is_triggered(self, message: IncomingMessage) -> bool:
        """True when the message mentions the relay or replies to one of its messages."""
        return message.mentions_relay or await self.is_reply_to_relay(message)

    async def is_reply_to_relay(self, message: IncomingMessage) -> bool:
        ref = message.reference
        relay_id = self._platform.relay_user_id
        if ref is None or relay_id is None:
            return False
        if ref.resolved_author_id is not None:
            return ref.resolved_author_id == relay_id
        try:
            author_id = await self._platform.fetch_message_author_id(ref.channel_id, ref.message_id)
        except Exception as e:
            log.warn(f"could not fetch referenced message {ref.message_id}: {e}")
            return False
        return author_id == relay_id

    async def process(self, message: IncomingMessage, is_edit: bool = False) -> RouteOutcome:
        """Authorize, then run the backend pipeline."""
        if not self._webhook_configured():
            return RouteOutcome.IGNORED
        try:
            await self._authorize(message)
        except AuthorizationDenied as e:
            log.info(f"message {message.message_id} from {message.author_id}: {e}")
            await self._notify(message, DENIED_TEXT)
            return RouteOutcome.DENIED
        return await self._run_pipeline(message, is_edit)

    async def _authorize(self, message: IncomingMessage):
        decision = await self._gate.decide(message.author_id, message.guild_id)
        if not decision.allowed:
            raise AuthorizationDenied(decision)

    async def _call_backend(self, message: IncomingMessage, is_edit: bool):
        payload = build_payload(message, self._platform.relay_user_id, is_edit)
        heartbeat = TypingHeartbeat(
            lambda: self._platform.send_typing(message.channel_id), interval=self._typing_interval
        )
        async with heartbeat:
            try:
                result = await self._backend.invoke(self._webhook_url, payload.to_dict(), self._timeout_ms)
            except Exception as e:
                raise BackendUnavailable(str(e) or type(e).__name__) from e
        if isinstance(result, BackendFailure):
            raise BackendUnavailable(result.reason, result.status)
        return result

    def _webhook_configured(self) -> bool:
        if not self._webhook_url:
            log.warn("WEBHOOK_CHAT_URL not defined; skipping processing")
            return False
        return True

    async def _run_pipeline(self, message: IncomingMessage, is_edit: bool) -> RouteOutcome:
        try:
            result = await self._call_backend(message, is_edit)
        except BackendUnavailable as e:
            log.warn(f"chat webhook failed or timed out: {e.reason}")
            await self._notify(message, BACKEND_DOWN_TEXT)
            return RouteOutcome.PROCESSED

        text = normalize(result)
        if text is None:
            log.info(f"backend returned no output for message {message.message_id}; no reply sent")
            return RouteOutcome.PROCESSED

        sent = await self._delivery.deliver(message, text)
        log.info(f"sent reply for message {message.message_id} ({sent} segment(s))")
        return RouteOutcome.PROCESSED

    async def _notify(self, message: IncomingMessage, text: str):
        try:
            await self._platform.reply(message, text, mention_author=True)
        except DeliveryFailure as e:
            log.warn(f"failed to notify {message.author_id}: {e}")
