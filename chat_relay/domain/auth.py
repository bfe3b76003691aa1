"""Role-based authorization for relay users."""

from dataclasses import dataclass
from enum import Enum
from typing import AbstractSet, Iterable, Optional

from chat_relay import log
from chat_relay.ports.outbound import ChatPlatformPort


class AuthReason(Enum):
    ALLOWED = "allowed"
    NO_ALLOW_LIST = "no_allow_list"
    LOOKUP_FAILED = "lookup_failed"
    ROLE_MISSING = "role_missing"
    NO_VERIFICATION_GUILD = "no_verification_guild"


@dataclass(frozen=True)
class AuthorizationDecision:
    allowed: bool
    reason: AuthReason


def has_allowed_role(role_ids: Iterable[int], allowed_role_ids: AbstractSet[int]) -> bool:
    if not allowed_role_ids:
        return False
    return any(role_id in allowed_role_ids for role_id in role_ids)


class AuthorizationGate:
    """Decides whether a user may use the relay.

    Guild messages are checked against the member's roles in that guild.
    Direct messages have no roles of their own, so the user's membership in
    the verification guild is checked instead. Roles are fetched on every
    call; nothing is cached.
    """

    def __init__(
        self,
        platform: ChatPlatformPort,
        allowed_role_ids: AbstractSet[int],
        verification_guild_id: Optional[int] = None,
    ):
        self._platform = platform
        self._allowed_role_ids = frozenset(allowed_role_ids)
        self._verification_guild_id = verification_guild_id

    async def decide(self, user_id: int, guild_id: Optional[int]) -> AuthorizationDecision:
        if not self._allowed_role_ids:
            return AuthorizationDecision(False, AuthReason.NO_ALLOW_LIST)

        if guild_id is None:
            if self._verification_guild_id is None:
                return AuthorizationDecision(False, AuthReason.NO_VERIFICATION_GUILD)
            guild_id = self._verification_guild_id

        try:
            role_ids = await self._platform.fetch_member_role_ids(guild_id, user_id)
        except Exception as e:
            log.warn(f"role lookup failed for user={user_id} guild={guild_id}: {e}")
            return AuthorizationDecision(False, AuthReason.LOOKUP_FAILED)

        if role_ids is None:
            return AuthorizationDecision(False, AuthReason.LOOKUP_FAILED)
        if has_allowed_role(role_ids, self._allowed_role_ids):
            return AuthorizationDecision(True, AuthReason.ALLOWED)
        return AuthorizationDecision(False, AuthReason.ROLE_MISSING)
