# platebot/services/update_poller.py
"""
Update polling service — pulls messages from Telegram via getUpdates long polling.

Alternative to the webhook for hosts Telegram cannot reach. Telegram refuses
getUpdates while a webhook is registered, so the webhook is removed first.
"""

import asyncio

from platebot.config import settings
from platebot.schemas.telegram import Update
from platebot.services.kv_store import KeyValueStore
from platebot.services.session_machine import handle_message
from platebot.services.telegram_client import TelegramClient, TelegramError
from platebot.utils.logger import get_logger

logger = get_logger(__name__)

# Reconnect delay in seconds (doubles on each failure, max 60s)
_MIN_BACKOFF = 3
_MAX_BACKOFF = 60


async def handle_update(update: Update, store: KeyValueStore, bot: TelegramClient):
    """Process one update. Failures are logged; the chat keeps its last saved state."""
    if update.message is None:
        return
    try:
        await handle_message(update.message, store, bot)
    except Exception as e:
        logger.error(f"Update {update.update_id} failed: {e}", exc_info=True)


async def poll_updates(store: KeyValueStore, bot: TelegramClient):
    """Long-poll forever. Each batch is confirmed by advancing the offset past it."""
    offset = None
    backoff = _MIN_BACKOFF
    webhook_removed = False

    while True:
        try:
            if not webhook_removed:
                await bot.delete_webhook()
                webhook_removed = True
                logger.info("📡 Polling Telegram for updates...")
            updates = await bot.get_updates(offset=offset, timeout=settings.TELEGRAM_POLL_TIMEOUT)
            backoff = _MIN_BACKOFF  # reset on success
        except TelegramError as e:
            logger.warning(f"❌ Bot API call failed: {e}. Retry in {backoff}s")
            await asyncio.sleep(backoff)
            backoff = min(backoff * 2, _MAX_BACKOFF)
            continue
        except Exception as e:
            logger.error(f"❌ Polling — unexpected error: {e}", exc_info=True)
            await asyncio.sleep(backoff)
            backoff = min(backoff * 2, _MAX_BACKOFF)
            continue

        if updates:
            logger.debug(f"Received {len(updates)} update(s)")
        # Different chats run concurrently; turns of one chat are serialized by its lock
        await asyncio.gather(*(handle_update(u, store, bot) for u in updates))
        if updates:
            offset = max(u.update_id for u in updates) + 1


async def start_update_polling(store: KeyValueStore, bot: TelegramClient):
    """Called once at startup when TELEGRAM_USE_POLLING is set."""
    try:
        await poll_updates(store, bot)
    except asyncio.CancelledError:
        logger.info("🛑 Update polling stopped")
        raise


def log_poller_exit(task: asyncio.Task):
    """Done-callback for the poller task. Polling only ends on cancel, anything else is logged."""
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.critical(f"🛑 Update polling died: {exc}", exc_info=exc)
