# scripts/setup/add_admin.py
"""
Bootstrap an administrator. Admin commands can only be sent by an existing
admin, so the first one has to be added from here.
The number is added to both the admins and the users allow-list.

Usage:
    python scripts/setup/add_admin.py "+380 67 123 4567"
    python scripts/setup/add_admin.py 380671234567 --remove
"""

import sys
import os
import asyncio
import argparse
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from platebot.database import create_tables
from platebot.services.access_gate import AllowList, add_member, digits_only, remove_member
from platebot.services.kv_store import store


async def main(phone: str, remove: bool):
    create_tables()
    if remove:
        await remove_member(store, AllowList.ADMINS, phone)
        print(f"🗑  Admin {digits_only(phone)} removed (still a user)")
        return
    await add_member(store, AllowList.ADMINS, phone)
    await add_member(store, AllowList.USERS, phone)
    print(f"✅ Admin {digits_only(phone)} added")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Add or remove a bot administrator")
    parser.add_argument("phone", help="Phone number in any format; only digits are kept")
    parser.add_argument("--remove", action="store_true")
    args = parser.parse_args()

    if not digits_only(args.phone):
        parser.error("phone number contains no digits")
    asyncio.run(main(args.phone, args.remove))
