"""Unit tests for WebhookClient."""

import asyncio
from unittest.mock import patch

import aiohttp
import pytest

from chat_relay.adapters.webhook.client import WebhookClient, parse_body
from chat_relay.ports.outbound import BackendFailure, BackendSuccess

URL = "https://n8n.example/webhook/chat"
PAYLOAD = {"type": "chat", "messageId": "1"}


def _mock_aiohttp_session(status=200, text="", error=None):
    """Return a class that replaces aiohttp.ClientSession.

    The class records constructor kwargs and post() calls on itself.
    """

    class FakeResponse:
        def __init__(self):
            self.status = status

        async def text(self, errors="strict"):
            return text

        async def __aenter__(self):
            return self

        async def __aexit__(self, *args):
            pass

    class FakeSession:
        init_kwargs = {}
        posts = []

        def __init__(self, **kwargs):
            FakeSession.init_kwargs = kwargs

        def post(self, url, **kwargs):
            FakeSession.posts.append((url, kwargs))
            if error is not None:
                raise error
            return FakeResponse()

        async def __aenter__(self):
            return self

        async def __aexit__(self, *args):
            pass

    return FakeSession


class TestParseBody:
    def test_json(self):
        assert parse_body('{"output": "hi"}') == {"output": "hi"}

    def test_plain_text(self):
        assert parse_body("just words") is None

    def test_empty(self):
        assert parse_body("") is None


class TestInvoke:
    @pytest.mark.asyncio
    async def test_success_json(self):
        session = _mock_aiohttp_session(text='{"output": "hello"}')
        with patch("chat_relay.adapters.webhook.client.aiohttp.ClientSession", session):
            result = await WebhookClient().invoke(URL, PAYLOAD, 1500)
        assert isinstance(result, BackendSuccess)
        assert result.ok is True
        assert result.status == 200
        assert result.body == {"output": "hello"}
        assert result.text == '{"output": "hello"}'
        assert session.posts == [(URL, {"json": PAYLOAD})]
        assert session.init_kwargs["timeout"].total == 1.5

    @pytest.mark.asyncio
    async def test_success_plain_text(self):
        session = _mock_aiohttp_session(text="plain answer")
        with patch("chat_relay.adapters.webhook.client.aiohttp.ClientSession", session):
            result = await WebhookClient().invoke(URL, PAYLOAD, 1000)
        assert isinstance(result, BackendSuccess)
        assert result.body is None
        assert result.text == "plain answer"

    @pytest.mark.asyncio
    async def test_non_2xx_is_failure(self):
        session = _mock_aiohttp_session(status=502, text='{"output": "bad gateway"}')
        with patch("chat_relay.adapters.webhook.client.aiohttp.ClientSession", session):
            result = await WebhookClient().invoke(URL, PAYLOAD, 1000)
        assert isinstance(result, BackendFailure)
        assert result.ok is False
        assert result.status == 502
        assert result.reason == "HTTP 502"
        assert result.text == '{"output": "bad gateway"}'

    @pytest.mark.asyncio
    async def test_timeout(self):
        session = _mock_aiohttp_session(error=asyncio.TimeoutError())
        with patch("chat_relay.adapters.webhook.client.aiohttp.ClientSession", session):
            result = await WebhookClient().invoke(URL, PAYLOAD, 10)
        assert result == BackendFailure(reason="timeout")

    @pytest.mark.asyncio
    async def test_connection_error(self):
        session = _mock_aiohttp_session(error=aiohttp.ClientConnectionError("connection refused"))
        with patch("chat_relay.adapters.webhook.client.aiohttp.ClientSession", session):
            result = await WebhookClient().invoke(URL, PAYLOAD, 1000)
        assert isinstance(result, BackendFailure)
        assert result.reason == "connection refused"
        assert result.status is None

    @pytest.mark.asyncio
    async def test_single_attempt(self):
        session = _mock_aiohttp_session(error=aiohttp.ClientConnectionError("down"))
        with patch("chat_relay.adapters.webhook.client.aiohttp.ClientSession", session):
            await WebhookClient().invoke(URL, PAYLOAD, 1000)
        assert len(session.posts) == 1
