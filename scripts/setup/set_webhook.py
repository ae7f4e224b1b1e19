# scripts/setup/set_webhook.py
"""
Register the bot's webhook with Telegram (or remove it for polling mode).

Usage:
    python scripts/setup/set_webhook.py                 # uses TELEGRAM_WEBHOOK_URL
    python scripts/setup/set_webhook.py --url https://bot.example.org/api/v1/telegram/webhook
    python scripts/setup/set_webhook.py --delete
"""

import sys
import os
import asyncio
import argparse
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from platebot.config import settings
from platebot.services.telegram_client import TelegramClient, TelegramError


async def main(url: str, delete: bool):
    client = TelegramClient()
    try:
        me = await client.get_me()
        print(f"🤖 Bot: @{me.get('username')}")
        if delete:
            await client.delete_webhook()
            print("🗑  Webhook removed — run with TELEGRAM_USE_POLLING=true")
        else:
            await client.set_webhook(url, settings.TELEGRAM_WEBHOOK_SECRET)
            print(f"✅ Webhook set → {url}")
    except TelegramError as e:
        print(f"❌ {e}")
        sys.exit(1)
    finally:
        await client.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Manage the Telegram webhook")
    parser.add_argument("--url", default=settings.TELEGRAM_WEBHOOK_URL)
    parser.add_argument("--delete", action="store_true")
    args = parser.parse_args()

    if not args.delete and not args.url:
        parser.error("no --url given and TELEGRAM_WEBHOOK_URL is not set")
    asyncio.run(main(args.url, args.delete))
