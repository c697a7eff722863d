"""Abstract completion gateway.

This module hides where replies come from: a provider called directly on a
trusted server, or the HTTP proxy when running as a front-end. Either way a
gateway is stateless between calls, makes a single attempt per call and
never raises for provider failures.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from ..errors import InvalidInputError
from ..llm.models import ChatMessage
from .models import CompletionResult


class CompletionGateway(ABC):
    """Turn one user utterance into one assistant reply."""

    @abstractmethod
    async def complete(
        self,
        utterance: str,
        prior_turns: Sequence[ChatMessage] | None = None,
    ) -> CompletionResult:
        """Request a reply for a single utterance.

        Args:
            utterance: Non-empty user text
            prior_turns: Turns to send before the utterance (None: the fixed seed)

        Returns:
            CompletionResult carrying either text or the failure cause

        Raises:
            InvalidInputError: If the utterance is blank, or prior_turns are
                given to a gateway that cannot forward them
        """

    async def reply(
        self,
        utterance: str,
        prior_turns: Sequence[ChatMessage] | None = None,
    ) -> str:
        """Like complete(), but with failures and empty answers rendered as fallback text."""
        result = await self.complete(utterance, prior_turns=prior_turns)
        return result.reply

    @abstractmethod
    async def close(self) -> None:
        """Release any underlying clients."""

    @staticmethod
    def _validate(utterance: str) -> str:
        if not utterance or not utterance.strip():
            raise InvalidInputError("Utterance must not be empty")
        return utterance

    async def __aenter__(self) -> "CompletionGateway":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
