# platebot/config.py
"""
Application configuration using Pydantic-Settings.
All settings can be overridden via environment variables or .env file.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # ── Key-value store ───────────────────────────────────────────────────
    DATABASE_URL: str = "sqlite:///./platebot.db"

    # ── Network ───────────────────────────────────────────────────────────
    BACKEND_IP: str = "0.0.0.0"
    BACKEND_PORT: int = 8080

    # ── Telegram ──────────────────────────────────────────────────────────
    TELEGRAM_BOT_TOKEN: str = "CHANGE_ME"
    TELEGRAM_API_URL: str = "https://api.telegram.org"
    TELEGRAM_WEBHOOK_URL: Optional[str] = None     # e.g. https://bot.example.org/api/v1/telegram/webhook
    TELEGRAM_WEBHOOK_SECRET: Optional[str] = None  # Set in .env to require the secret header
    TELEGRAM_USE_POLLING: bool = False             # Pull updates instead of receiving the webhook
    TELEGRAM_POLL_TIMEOUT: int = 30                # Server-side long-poll seconds
    TELEGRAM_REQUEST_TIMEOUT: float = 10.0         # Bound on every outbound Bot API call

    # ── Conversation ──────────────────────────────────────────────────────
    PLATE_QUERY_MAX_LENGTH: int = 20   # Shorter texts are plate queries, longer ones record submissions

    # ── Logging ───────────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"

    @property
    def TELEGRAM_BOT_URL(self) -> str:
        return f"{self.TELEGRAM_API_URL.rstrip('/')}/bot{self.TELEGRAM_BOT_TOKEN}"

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
