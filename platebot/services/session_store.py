# platebot/services/session_store.py
"""
Per-chat session persistence and per-chat turn serialization.
Sessions live in the key-value store under SESSION:<chat id> so they survive restarts.
"""

import asyncio
import weakref

from platebot.schemas.session import Session
from platebot.services.kv_store import KeyValueStore
from platebot.utils.logger import get_logger

logger = get_logger(__name__)

# One lock per chat: turns of one chat run one at a time, different chats run concurrently.
# An entry lives only while some turn holds or waits on it.
_chat_locks: "weakref.WeakValueDictionary[int, asyncio.Lock]" = weakref.WeakValueDictionary()


def session_key(chat_id: int) -> str:
    return f"SESSION:{chat_id}"


def chat_lock(chat_id: int) -> asyncio.Lock:
    lock = _chat_locks.get(chat_id)
    if lock is None:
        lock = asyncio.Lock()
        _chat_locks[chat_id] = lock
    return lock


async def load_session(store: KeyValueStore, chat_id: int) -> Session:
    """Missing session means the chat has not verified a phone number yet."""
    raw = await store.get(session_key(chat_id))
    if not raw:
        return Session.start()
    return Session.model_validate_json(raw)


async def save_session(store: KeyValueStore, chat_id: int, session: Session) -> None:
    await store.set(session_key(chat_id), session.model_dump_json().encode("utf-8"))
    logger.info(f"[SESSION] chat={chat_id} → {session.state.value}")
