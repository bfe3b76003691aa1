"""Webhook client: single timeout-bounded POST to the automation backend."""

import asyncio
import json
from typing import Any, Dict

import aiohttp

from chat_relay import log
from chat_relay.ports.outbound import BackendFailure, BackendResult, BackendSuccess


def parse_body(text: str) -> Any:
    """Best-effort JSON parse; empty or invalid text gives None."""
    try:
        return json.loads(text or "null")
    except ValueError:
        return None


class WebhookClient:
    """BackendPort implementation over aiohttp. Never raises, never retries."""

    async def invoke(self, url: str, payload: Dict[str, Any], timeout_ms: int) -> BackendResult:
        timeout = aiohttp.ClientTimeout(total=timeout_ms / 1000)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(url, json=payload) as resp:
                    text = await resp.text(errors="replace")
                    status = resp.status
        except asyncio.TimeoutError:
            return BackendFailure(reason="timeout")
        except aiohttp.ClientError as e:
            return BackendFailure(reason=str(e) or type(e).__name__)

        log.debug(f"webhook answered {status} ({len(text)} chars)")
        if not 200 <= status < 300:
            return BackendFailure(reason=f"HTTP {status}", status=status, text=text)
        return BackendSuccess(status=status, body=parse_body(text), text=text)
