"""Configuration loaded from the environment (and .env)."""

import os
from dataclasses import dataclass, field
from typing import FrozenSet, Mapping, Optional

from dotenv import load_dotenv

from chat_relay import log
from chat_relay.errors import ConfigError

load_dotenv()

DEFAULT_TIMEOUT_MS = 60000
DEFAULT_LOG_LEVEL = "info"


def parse_role_ids(raw: str) -> FrozenSet[int]:
    """Parse a comma-separated role allow-list. Blank and non-numeric entries are dropped."""
    ids = set()
    for part in (raw or "").split(","):
        part = part.strip()
        if not part:
            continue
        if not part.isdigit():
            log.warn(f"ALLOWED_ROLE_IDS: ignoring non-numeric entry {part!r}")
            continue
        ids.add(int(part))
    return frozenset(ids)


def parse_timeout_ms(raw: Optional[str]) -> int:
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        return DEFAULT_TIMEOUT_MS
    return value if value > 0 else DEFAULT_TIMEOUT_MS


def _parse_guild_id(raw: Optional[str]) -> Optional[int]:
    raw = (raw or "").strip()
    if not raw:
        return None
    if not raw.isdigit():
        log.warn(f"DM_CHECK_GUILD_ID={raw!r} is not a guild id, direct messages will be denied")
        return None
    return int(raw)


@dataclass
class RelayConfig:
    """Typed relay configuration."""

    discord_token: str
    allowed_role_ids: FrozenSet[int] = field(default_factory=frozenset)
    webhook_url: str = ""
    dm_guild_id: Optional[int] = None
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "RelayConfig":
        """Create RelayConfig from environment variables.

        Raises:
            ConfigError: DISCORD_TOKEN is not set.
        """
        env = os.environ if env is None else env
        token = env.get("DISCORD_TOKEN", "").strip()
        if not token:
            raise ConfigError("DISCORD_TOKEN is not set")
        return cls(
            discord_token=token,
            allowed_role_ids=parse_role_ids(env.get("ALLOWED_ROLE_IDS", "")),
            webhook_url=env.get("WEBHOOK_CHAT_URL", "").strip(),
            dm_guild_id=_parse_guild_id(env.get("DM_CHECK_GUILD_ID")),
            timeout_ms=parse_timeout_ms(env.get("N8N_TIMEOUT_MS", DEFAULT_TIMEOUT_MS)),
            log_level=env.get("LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().lower() or DEFAULT_LOG_LEVEL,
        )
