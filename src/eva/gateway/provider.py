"""Gateway that calls a completion provider directly.

Only ever run this on a trusted boundary (the proxy server): it holds the
provider credential.
"""

import asyncio
import logging
from collections.abc import Sequence

from ..llm.base import LLMProvider
from ..llm.models import ChatMessage
from ..prompts import SEED_TURNS, get_persona
from .base import CompletionGateway
from .models import CompletionResult

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 30.0
DEFAULT_MAX_OUTPUT_TOKENS = 300


class ProviderGateway(CompletionGateway):
    """Ask a provider for a reply under a fixed persona and output cap.

    Hidden design decisions:
    - Request shape: persona + fixed seed turns + the new utterance
    - Bounded timeout around the single provider call
    - Every provider exception, timeout or non-text answer becomes a failed result
    """

    def __init__(
        self,
        provider: LLMProvider,
        persona: str | None = None,
        prior_turns: Sequence[ChatMessage] = SEED_TURNS,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        max_output_tokens: int = DEFAULT_MAX_OUTPUT_TOKENS,
        model: str | None = None,
    ):
        self._provider = provider
        self._persona = persona if persona is not None else get_persona()
        self._prior_turns = tuple(prior_turns)
        self._timeout_s = timeout_s
        self._max_output_tokens = max_output_tokens
        self._model = model

    def build_messages(
        self,
        utterance: str,
        prior_turns: Sequence[ChatMessage] | None = None,
    ) -> list[ChatMessage]:
        """Assemble the provider request for one utterance."""
        turns = self._prior_turns if prior_turns is None else tuple(prior_turns)
        return [
            ChatMessage(role="system", content=self._persona),
            *turns,
            ChatMessage(role="user", content=utterance),
        ]

    async def complete(
        self,
        utterance: str,
        prior_turns: Sequence[ChatMessage] | None = None,
    ) -> CompletionResult:
        """Request a reply; see CompletionGateway.complete.

        Args:
            utterance: Non-empty user text
            prior_turns: Override for the fixed seed turns
        """
        self._validate(utterance)
        messages = self.build_messages(utterance, prior_turns)

        try:
            response = await asyncio.wait_for(
                self._provider.chat_completion(
                    messages,
                    model=self._model,
                    max_tokens=self._max_output_tokens,
                ),
                timeout=self._timeout_s,
            )
        except asyncio.TimeoutError:
            logger.warning("provider call timed out after %.1fs", self._timeout_s)
            return CompletionResult.failure(f"timed out after {self._timeout_s}s")
        except Exception as e:
            logger.exception("provider call failed err=%s", e)
            return CompletionResult.failure(str(e) or type(e).__name__)

        content = getattr(response, "content", None)
        if not isinstance(content, str):
            logger.error("provider returned malformed response type=%s", type(response).__name__)
            return CompletionResult.failure("malformed provider response")

        if not content:
            logger.info("provider returned empty text")
        return CompletionResult(text=content)

    async def close(self) -> None:
        await self._provider.close()
