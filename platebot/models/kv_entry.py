# platebot/models/kv_entry.py
"""
Key-value table backing the whole bot.
Keys are namespaced strings (USER:, ADMIN:, CAR:, SESSION:), values opaque bytes.
"""

from sqlalchemy import Column, String, LargeBinary
from platebot.database import Base


class KVEntry(Base):
    __tablename__ = "kv_entries"

    key = Column(String(255), primary_key=True)
    value = Column(LargeBinary, nullable=False, default=b"")

    def __repr__(self):
        return f"<KVEntry {self.key} ({len(self.value or b'')} bytes)>"
