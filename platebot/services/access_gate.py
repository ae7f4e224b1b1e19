# platebot/services/access_gate.py
"""
Allow-list of phone numbers. Membership is the existence of USER:<digits> or
ADMIN:<digits> in the key-value store; the value is always empty.
"""

from enum import Enum

from platebot.services.kv_store import KeyValueStore
from platebot.utils.logger import get_logger

logger = get_logger(__name__)


class AllowList(str, Enum):
    USERS = "USER"
    ADMINS = "ADMIN"


def digits_only(phone_number: str) -> str:
    """'+380 (67) 123-45-67' → '380671234567'"""
    return "".join(ch for ch in phone_number if "0" <= ch <= "9")


def member_key(allow_list: AllowList, phone_number: str) -> str:
    return f"{allow_list.value}:{digits_only(phone_number)}"


async def is_member(store: KeyValueStore, allow_list: AllowList, phone_number: str) -> bool:
    return await store.exists(member_key(allow_list, phone_number))


async def add_member(store: KeyValueStore, allow_list: AllowList, phone_number: str) -> None:
    key = member_key(allow_list, phone_number)
    await store.set(key, b"")
    logger.info(f"[ALLOW-LIST] Added {key}")


async def remove_member(store: KeyValueStore, allow_list: AllowList, phone_number: str) -> None:
    key = member_key(allow_list, phone_number)
    await store.delete(key)
    logger.info(f"[ALLOW-LIST] Removed {key}")
