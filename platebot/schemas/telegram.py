# platebot/schemas/telegram.py
"""Subset of Telegram Bot API objects the bot reads. Unknown fields are ignored."""

from pydantic import BaseModel, Field
from typing import Optional


class User(BaseModel):
    id: int
    is_bot: bool = False
    first_name: str = ""
    username: Optional[str] = None


class Chat(BaseModel):
    id: int
    type: str                # private | group | supergroup | channel

    @property
    def is_private(self) -> bool:
        return self.type == "private"


class Contact(BaseModel):
    phone_number: str
    first_name: str = ""
    last_name: Optional[str] = None
    user_id: Optional[int] = None   # set only when the contact is a Telegram user


class Message(BaseModel):
    message_id: int
    date: int = 0
    chat: Chat
    from_user: Optional[User] = Field(default=None, alias="from")
    text: Optional[str] = None
    contact: Optional[Contact] = None

    class Config:
        populate_by_name = True


class Update(BaseModel):
    update_id: int
    message: Optional[Message] = None
