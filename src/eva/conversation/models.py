"""Data models for chats and their messages.

A chat is an ordered, append-only log of messages plus a title that is
derived once from the first message appended to it.
"""

from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_TITLE = "New Chat"
TITLE_MAX_CHARS = 20
TITLE_ELLIPSIS = "..."


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def make_title(text: str) -> str:
    """Derive a chat title from its first message.

    Keeps the first 20 characters and appends "..." only when something
    was cut off.
    """
    if len(text) > TITLE_MAX_CHARS:
        return text[:TITLE_MAX_CHARS] + TITLE_ELLIPSIS
    return text


class Sender(str, Enum):
    """Who authored a message."""

    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """One turn in a chat. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    sender: Sender
    text: str = Field(min_length=1)
    timestamp: datetime = Field(default_factory=_utcnow)


class Chat(BaseModel):
    """An independent conversation thread."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    title: str = Field(default=DEFAULT_TITLE)
    messages: list[Message] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=_utcnow)

    def add_message(self, message: Message) -> None:
        """Append a message, titling the chat if it is the first one.

        Args:
            message: The message to append
        """
        if not self.messages:
            self.title = make_title(message.text)
        self.messages.append(message)

    @property
    def is_empty(self) -> bool:
        return not self.messages
