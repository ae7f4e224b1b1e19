"""Tests for the Bot API client against a mocked HTTP transport."""

import json
import httpx
import pytest
from platebot.services.telegram_client import TelegramClient, TelegramError, request_contact_keyboard


def make_client(handler):
    client = TelegramClient(base_url="https://api.test/botTOKEN", timeout=5)
    client._client = httpx.AsyncClient(base_url=client.base_url, transport=httpx.MockTransport(handler))
    return client


class TestTelegramClient:
    @pytest.mark.asyncio
    async def test_send_message_payload(self):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"ok": True, "result": {"message_id": 3}})

        client = make_client(handler)
        result = await client.send_message(5, "hi", reply_markup=request_contact_keyboard())
        await client.close()

        assert result == {"message_id": 3}
        assert seen["path"] == "/botTOKEN/sendMessage"
        assert seen["body"]["chat_id"] == 5
        assert seen["body"]["reply_markup"]["keyboard"][0][0]["request_contact"] is True
        assert "reply_to_message_id" not in seen["body"]

    @pytest.mark.asyncio
    async def test_api_error_raises(self):
        client = make_client(lambda request: httpx.Response(
            403, json={"ok": False, "description": "Forbidden: bot was blocked by the user"}))
        with pytest.raises(TelegramError, match="blocked"):
            await client.send_message(5, "hi")
        await client.close()

    @pytest.mark.asyncio
    async def test_network_error_raises(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        client = make_client(handler)
        with pytest.raises(TelegramError):
            await client.get_me()
        await client.close()

    @pytest.mark.asyncio
    async def test_get_updates_parsed(self):
        def handler(request):
            return httpx.Response(200, json={"ok": True, "result": [{
                "update_id": 10,
                "message": {"message_id": 1, "chat": {"id": 9, "type": "private"}, "text": "AA1234"},
            }]})

        client = make_client(handler)
        updates = await client.get_updates(offset=10, timeout=0)
        await client.close()

        assert updates[0].update_id == 10
        assert updates[0].message.text == "AA1234"
