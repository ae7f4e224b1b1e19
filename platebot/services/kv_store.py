# platebot/services/kv_store.py
"""
Opaque key-value store on top of the kv_entries table.

All operations on one KeyValueStore share a single asyncio.Lock, and the
application uses one shared instance, so only one store round-trip is in
flight at any time. Any database failure surfaces as StoreError.
"""

import asyncio
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from platebot.database import SessionLocal
from platebot.models.kv_entry import KVEntry
from platebot.utils.logger import get_logger

logger = get_logger(__name__)


class StoreError(RuntimeError):
    """The key-value store could not complete an operation."""


class KeyValueStore:
    def __init__(self, session_factory: sessionmaker = SessionLocal):
        self._session_factory = session_factory
        self._lock = asyncio.Lock()

    async def get(self, key: str) -> Optional[bytes]:
        """Returns the stored value, or None when the key does not exist."""
        async with self._lock:
            try:
                with self._session_factory() as db:
                    entry = db.get(KVEntry, key)
                    return entry.value if entry else None
            except SQLAlchemyError as e:
                raise StoreError(f"GET {key} failed: {e}") from e

    async def set(self, key: str, value: bytes = b"") -> None:
        """Create or overwrite a key."""
        async with self._lock:
            try:
                with self._session_factory() as db:
                    db.merge(KVEntry(key=key, value=value))
                    db.commit()
            except SQLAlchemyError as e:
                raise StoreError(f"SET {key} failed: {e}") from e
        logger.debug(f"SET {key} ({len(value)} bytes)")

    async def delete(self, key: str) -> None:
        """Remove a key. Deleting a missing key is not an error."""
        async with self._lock:
            try:
                with self._session_factory() as db:
                    db.query(KVEntry).filter(KVEntry.key == key).delete()
                    db.commit()
            except SQLAlchemyError as e:
                raise StoreError(f"DEL {key} failed: {e}") from e
        logger.debug(f"DEL {key}")

    async def exists(self, key: str) -> bool:
        async with self._lock:
            try:
                with self._session_factory() as db:
                    return db.query(KVEntry.key).filter(KVEntry.key == key).first() is not None
            except SQLAlchemyError as e:
                raise StoreError(f"EXISTS {key} failed: {e}") from e


store = KeyValueStore()


def get_store() -> KeyValueStore:
    """FastAPI dependency — the shared store instance."""
    return store
