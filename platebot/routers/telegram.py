# platebot/routers/telegram.py
"""
Telegram webhook endpoint.
POST /telegram/webhook — receives every update Telegram delivers for the bot.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, status
from pydantic import ValidationError

from platebot.config import settings
from platebot.schemas.telegram import Update
from platebot.services.kv_store import KeyValueStore, get_store
from platebot.services.session_machine import handle_message
from platebot.services.telegram_client import TelegramClient, get_bot
from platebot.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.post("/telegram/webhook", summary="Telegram webhook — receives all updates")
async def receive_update(
    payload: dict,
    x_telegram_bot_api_secret_token: Optional[str] = Header(default=None),
    store: KeyValueStore = Depends(get_store),
    bot: TelegramClient = Depends(get_bot),
):
    """
    Returns HTTP 200 for everything except a bad secret. Telegram redelivers on
    non-200 and a failed turn must not be replayed.
    """
    if settings.TELEGRAM_WEBHOOK_SECRET and x_telegram_bot_api_secret_token != settings.TELEGRAM_WEBHOOK_SECRET:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid secret token")

    try:
        update = Update.model_validate(payload)
    except ValidationError as e:
        logger.warning(f"Malformed update ignored: {e}")
        return {"status": "ignored", "reason": "malformed update"}

    if update.message is None:
        return {"status": "ignored", "reason": "not a message"}

    try:
        await handle_message(update.message, store, bot)
        return {"status": "ok", "update_id": update.update_id}
    except Exception as e:
        logger.error(f"Update {update.update_id} processing error: {e}", exc_info=True)
        return {"status": "error", "update_id": update.update_id}
