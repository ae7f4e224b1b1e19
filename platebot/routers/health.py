# platebot/routers/health.py
"""
System health check endpoint.
Returns status of backend + key-value store + Telegram Bot API reachability.
"""

import requests
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import text
from platebot.database import get_db
from platebot.config import settings
from datetime import datetime

router = APIRouter()


@router.get("/health", summary="System health check")
def health_check(db: Session = Depends(get_db)):
    result = {
        "status": "ok",
        "timestamp": datetime.utcnow().isoformat(),
        "backend": "ok",
        "database": "unknown",
        "telegram": "unknown",
    }

    try:
        db.execute(text("SELECT 1"))
        result["database"] = "ok"
    except Exception as e:
        result["database"] = f"error: {str(e)}"
        result["status"] = "degraded"

    try:
        resp = requests.get(f"{settings.TELEGRAM_BOT_URL}/getMe", timeout=3)
        result["telegram"] = "ok" if resp.status_code == 200 else f"http_{resp.status_code}"
        if resp.status_code != 200:
            result["status"] = "degraded"
    except requests.exceptions.RequestException as e:
        # Exception text would include the URL and therefore the token
        result["telegram"] = f"unreachable: {type(e).__name__}"
        result["status"] = "degraded"

    return result
