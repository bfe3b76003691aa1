"""Outbound ports: interfaces for external system adapters."""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol, Set, Union, runtime_checkable

from chat_relay.ports.inbound import IncomingMessage


@dataclass(frozen=True)
class BackendSuccess:
    """2xx answer from the backend. ``body`` is None when ``text`` is not JSON."""

    status: int
    body: Any
    text: str

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class BackendFailure:
    """Timeout, transport error, or non-2xx answer."""

    reason: str
    status: Optional[int] = None
    text: str = ""

    @property
    def ok(self) -> bool:
        return False


BackendResult = Union[BackendSuccess, BackendFailure]


@runtime_checkable
class BackendPort(Protocol):
    """Interface for the automation backend."""

    async def invoke(self, url: str, payload: Dict[str, Any], timeout_ms: int) -> BackendResult: ...


@runtime_checkable
class ChatPlatformPort(Protocol):
    """Interface for the chat platform. Lookups may raise; callers degrade."""

    @property
    def relay_user_id(self) -> Optional[int]: ...

    async def fetch_member_role_ids(self, guild_id: int, user_id: int) -> Optional[Set[int]]: ...
    async def fetch_message_author_id(self, channel_id: int, message_id: int) -> Optional[int]: ...
    async def refetch(self, message: IncomingMessage) -> Optional[IncomingMessage]: ...
    async def reply(self, message: IncomingMessage, text: str, mention_author: bool = False) -> None: ...
    async def send(self, channel_id: int, text: str) -> None: ...
    async def send_typing(self, channel_id: int) -> None: ...
    async def close(self) -> None: ...
