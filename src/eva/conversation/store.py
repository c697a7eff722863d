"""In-memory conversation store.

Owns every chat and which one is active. Data lives for the life of the
process; there is no persistence and no delete operation, so the chat
list only ever grows and is never empty.
"""

import logging
import threading

from ..errors import ChatNotFoundError, InvalidInputError
from .models import Chat, Message, Sender

logger = logging.getLogger(__name__)


class ConversationStore:
    """Chats keyed by id, plus the active chat.

    All mutations go through this class and are serialized by a
    re-entrant lock, so it can be shared by a multi-threaded host.
    Chats returned by the accessors are live objects owned by the store.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._chats: dict[str, Chat] = {}
        self._active_chat_id = self.create_chat()

    @property
    def chats(self) -> list[Chat]:
        """All chats in creation order."""
        with self._lock:
            return list(self._chats.values())

    @property
    def active_chat_id(self) -> str:
        return self._active_chat_id

    def create_chat(self) -> str:
        """Create an empty chat with the default title and make it active.

        Returns:
            The new chat's id
        """
        chat = Chat()
        with self._lock:
            self._chats[chat.id] = chat
            self._active_chat_id = chat.id
        logger.debug("created chat id=%s", chat.id)
        return chat.id

    def get_chat(self, chat_id: str) -> Chat:
        """Look up a chat by id.

        Raises:
            ChatNotFoundError: If no chat has this id
        """
        with self._lock:
            try:
                return self._chats[chat_id]
            except KeyError:
                raise ChatNotFoundError(chat_id) from None

    def select_chat(self, chat_id: str) -> None:
        """Make an existing chat the active one.

        Raises:
            ChatNotFoundError: If no chat has this id; the active chat is unchanged
        """
        with self._lock:
            if chat_id not in self._chats:
                raise ChatNotFoundError(chat_id)
            self._active_chat_id = chat_id

    def append_message(self, chat_id: str, sender: Sender | str, text: str) -> Message:
        """Append a message to a chat's log.

        The first message appended to a chat also sets its title.

        Args:
            chat_id: Target chat
            sender: "user" or "assistant"
            text: Non-empty message text

        Returns:
            The appended message

        Raises:
            InvalidInputError: If text is empty or sender is not a known role
            ChatNotFoundError: If no chat has this id
        """
        if not text:
            raise InvalidInputError("Message text must not be empty")
        try:
            role = Sender(sender)
        except ValueError:
            raise InvalidInputError(f"Unknown sender: {sender!r}") from None
        message = Message(sender=role, text=text)
        with self._lock:
            chat = self.get_chat(chat_id)
            chat.add_message(message)
        return message

    def active_chat(self) -> Chat:
        """Return the active chat (a live reference, not a copy)."""
        with self._lock:
            return self._chats[self._active_chat_id]

    def __len__(self) -> int:
        return len(self._chats)
