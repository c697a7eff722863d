"""Conversation module for eva.

Keeps chats in memory and drives user turns through a completion gateway.
"""

from .models import DEFAULT_TITLE, Chat, Message, Sender, make_title
from .session import ChatSession, SessionState
from .store import ConversationStore

__all__ = [
    "DEFAULT_TITLE",
    "Chat",
    "ChatSession",
    "ConversationStore",
    "Message",
    "Sender",
    "SessionState",
    "make_title",
]
