# platebot/services/telegram_client.py
"""
Thin async client for the Telegram Bot API (https://core.telegram.org/bots/api).
Every call is bounded by TELEGRAM_REQUEST_TIMEOUT; getUpdates adds its long-poll time on top.
"""

from typing import Optional

import httpx

from platebot.config import settings
from platebot.schemas.telegram import Update
from platebot.utils.logger import get_logger

logger = get_logger(__name__)

CONTACT_BUTTON_TEXT = "Підтвердити мій номер телефону"


class TelegramError(RuntimeError):
    """The Bot API could not be reached or answered ok=false."""


def request_contact_keyboard() -> dict:
    """One-button keyboard that shares the user's own phone number."""
    return {
        "keyboard": [[{"text": CONTACT_BUTTON_TEXT, "request_contact": True}]],
        "resize_keyboard": True,
        "one_time_keyboard": True,
    }


def remove_keyboard() -> dict:
    return {"remove_keyboard": True}


class TelegramClient:
    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        self.base_url = base_url or settings.TELEGRAM_BOT_URL
        self.timeout = timeout if timeout is not None else settings.TELEGRAM_REQUEST_TIMEOUT
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout)
        return self._client

    async def close(self):
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _call(self, method: str, payload: dict, timeout: Optional[float] = None):
        try:
            response = await self.client.post(
                f"/{method}", json=payload, timeout=timeout or self.timeout
            )
            body = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise TelegramError(f"{method} failed: {e}") from e

        if not body.get("ok"):
            raise TelegramError(
                f"{method} rejected: HTTP {response.status_code} {body.get('description')}"
            )
        return body.get("result")

    async def send_message(self, chat_id: int, text: str, reply_markup: Optional[dict] = None,
                           reply_to_message_id: Optional[int] = None) -> dict:
        payload = {"chat_id": chat_id, "text": text}
        if reply_markup is not None:
            payload["reply_markup"] = reply_markup
        if reply_to_message_id is not None:
            payload["reply_to_message_id"] = reply_to_message_id
        return await self._call("sendMessage", payload)

    async def get_updates(self, offset: Optional[int] = None, timeout: int = 0) -> list[Update]:
        payload = {"timeout": timeout, "allowed_updates": ["message"]}
        if offset is not None:
            payload["offset"] = offset
        result = await self._call("getUpdates", payload, timeout=self.timeout + timeout)
        return [Update.model_validate(item) for item in result]

    async def set_webhook(self, url: str, secret_token: Optional[str] = None) -> bool:
        payload = {"url": url, "allowed_updates": ["message"]}
        if secret_token:
            payload["secret_token"] = secret_token
        return await self._call("setWebhook", payload)

    async def delete_webhook(self) -> bool:
        return await self._call("deleteWebhook", {})

    async def get_me(self) -> dict:
        return await self._call("getMe", {})


bot = TelegramClient()


def get_bot() -> TelegramClient:
    """FastAPI dependency — the shared Bot API client."""
    return bot
