"""
Eva: an emotional-support chat assistant with a thin completion proxy.

Each subpackage hides one design decision: how conversations are kept,
which completion provider answers, and how replies travel to the front-end.
"""

__version__ = "0.1.0"

from .conversation import Chat, ChatSession, ConversationStore, Message, Sender, SessionState
from .errors import (
    ChatNotFoundError,
    ConfigurationError,
    EvaError,
    InvalidInputError,
    ProviderFailureError,
)
from .gateway import CompletionGateway, CompletionResult, create_gateway

__all__ = [
    "Chat",
    "ChatNotFoundError",
    "ChatSession",
    "CompletionGateway",
    "CompletionResult",
    "ConfigurationError",
    "ConversationStore",
    "EvaError",
    "InvalidInputError",
    "Message",
    "ProviderFailureError",
    "Sender",
    "SessionState",
    "create_gateway",
]
