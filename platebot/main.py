# platebot/main.py
"""
FastAPI application entry point.
Hosts the Telegram webhook and health check; optionally runs the update poller.
"""

import asyncio
import time

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from platebot.config import settings
from platebot.database import create_tables
from platebot.routers import health, telegram
from platebot.services.kv_store import store
from platebot.services.telegram_client import bot
from platebot.services.update_poller import log_poller_exit, start_update_polling
from platebot.utils.logger import get_logger

logger = get_logger(__name__)

app = FastAPI(
    title="Plate Lookup Bot",
    description="Telegram bot for license-plate sighting lookup and admin reporting.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

_poller_task = None


# ── Request Timing Middleware ────────────────────────────────────────────────
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    duration = round((time.time() - start) * 1000, 2)
    logger.debug(f"{request.method} {request.url.path} → {response.status_code} ({duration}ms)")
    return response


# ── Global Exception Handler ─────────────────────────────────────────────────
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# ── Routers ──────────────────────────────────────────────────────────────────
app.include_router(telegram.router, prefix="/api/v1", tags=["🤖 Telegram"])
app.include_router(health.router,   prefix="/api/v1", tags=["💚 Health"])


# ── Startup ───────────────────────────────────────────────────────────────────
@app.on_event("startup")
async def startup():
    global _poller_task
    logger.info("🚀 Plate bot starting up...")
    create_tables()
    logger.info("✅ Key-value table ready")

    if settings.TELEGRAM_USE_POLLING:
        _poller_task = asyncio.create_task(start_update_polling(store, bot), name="telegram-poller")
        _poller_task.add_done_callback(log_poller_exit)
        logger.info("📡 Update polling started (pull mode)")
    else:
        logger.info("🌐 Waiting for webhook calls on /api/v1/telegram/webhook")


@app.on_event("shutdown")
async def shutdown():
    logger.info("🛑 Plate bot shutting down...")
    if _poller_task is not None:
        _poller_task.cancel()
    await bot.close()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("platebot.main:app", host=settings.BACKEND_IP, port=settings.BACKEND_PORT)
