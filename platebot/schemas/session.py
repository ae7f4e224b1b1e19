# platebot/schemas/session.py
from enum import Enum
from pydantic import BaseModel
from typing import Optional
from platebot.schemas.telegram import Contact


class DialogueState(str, Enum):
    START = "start"
    AWAITING_REQUESTS = "awaiting_requests"


class Session(BaseModel):
    """Per-chat conversation state, persisted under SESSION:<chat id>."""
    state: DialogueState = DialogueState.START
    contact: Optional[Contact] = None   # verified contact, set only in AWAITING_REQUESTS

    @classmethod
    def start(cls) -> "Session":
        return cls()

    @classmethod
    def awaiting_requests(cls, contact: Contact) -> "Session":
        return cls(state=DialogueState.AWAITING_REQUESTS, contact=contact)
