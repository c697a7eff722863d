"""Send-action driver tying the conversation store to a completion gateway.

Each send walks Idle -> Sending -> Idle: the user message is recorded, the
gateway is awaited, and its reply (or fallback) is appended to the chat the
send was issued against, even if another chat became active meanwhile.
Sends are not cancelable.
"""

import asyncio
import logging
from collections import defaultdict
from contextlib import asynccontextmanager
from enum import Enum

from ..errors import InvalidInputError
from ..gateway.base import CompletionGateway
from .models import Message, Sender
from .store import ConversationStore

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    """Whether a reply is being awaited (drives the typing indicator)."""

    IDLE = "idle"
    SENDING = "sending"


class ChatSession:
    """Drive user turns through a store and a gateway.

    Concurrent sends are allowed. By default each proceeds independently and
    replies land whenever their own call settles. With serialize_per_chat,
    sends to the same chat are queued so each user message and reply pair is
    appended before the next send begins.
    """

    def __init__(
        self,
        store: ConversationStore,
        gateway: CompletionGateway,
        serialize_per_chat: bool = False,
    ):
        self._store = store
        self._gateway = gateway
        self._serialize = serialize_per_chat
        self._chat_locks: defaultdict[str, asyncio.Lock] = defaultdict(asyncio.Lock)
        self._in_flight = 0

    @property
    def store(self) -> ConversationStore:
        return self._store

    @property
    def in_flight(self) -> int:
        """Number of sends awaiting a reply."""
        return self._in_flight

    @property
    def state(self) -> SessionState:
        return SessionState.SENDING if self._in_flight else SessionState.IDLE

    @property
    def is_typing(self) -> bool:
        return self.state is SessionState.SENDING

    @asynccontextmanager
    async def _turn(self, chat_id: str):
        if not self._serialize:
            yield
            return
        async with self._chat_locks[chat_id]:
            yield

    async def send(self, text: str, chat_id: str | None = None) -> Message:
        """Send one user utterance and record the reply.

        Args:
            text: What the user typed or dictated; surrounding whitespace is dropped
            chat_id: Target chat (default: the chat active when send is called)

        Returns:
            The assistant message that was appended

        Raises:
            InvalidInputError: If the text is blank; nothing is appended
            ChatNotFoundError: If chat_id does not exist
        """
        utterance = (text or "").strip()
        if not utterance:
            raise InvalidInputError("Message text must not be empty")

        target = chat_id or self._store.active_chat_id
        # Fail before queueing if the chat does not exist
        self._store.get_chat(target)

        async with self._turn(target):
            self._store.append_message(target, Sender.USER, utterance)
            self._in_flight += 1
            try:
                reply = await self._gateway.reply(utterance)
            finally:
                self._in_flight -= 1
            message = self._store.append_message(target, Sender.ASSISTANT, reply)

        logger.debug("reply appended chat=%s chars=%d", target, len(reply))
        return message
