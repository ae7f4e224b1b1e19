# platebot/services/record_store.py
"""Vehicle record lookup and persistence, keyed by normalized plate."""

from typing import Optional

from platebot.schemas.vehicle import VehicleRecord
from platebot.services.kv_store import KeyValueStore


def record_key(plate: str) -> str:
    return f"CAR:{plate}"


async def lookup_record(store: KeyValueStore, plate: str) -> Optional[VehicleRecord]:
    """Find the record for an already-normalized plate. Returns None if not found."""
    raw = await store.get(record_key(plate))
    if not raw:
        return None
    return VehicleRecord.from_bytes(raw)


async def save_record(store: KeyValueStore, plate: str, record: VehicleRecord) -> None:
    """Create or overwrite the record for an already-normalized plate."""
    await store.set(record_key(plate), record.to_bytes())
