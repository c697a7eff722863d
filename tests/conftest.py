"""Pytest configuration and shared fixtures."""
import asyncio
import os
from typing import Any

import pytest

from eva.conversation import ChatSession, ConversationStore
from eva.gateway import CompletionGateway, CompletionResult, ProviderGateway
from eva.llm import ChatMessage, LLMProvider, LLMResponse


class FakeProvider(LLMProvider):
    """Provider double that records requests and answers from a script."""

    def __init__(
        self,
        content: str = "I'm here for you.",
        error: Exception | None = None,
        delay: float = 0.0,
        response: Any = None,
    ):
        self.content = content
        self.error = error
        self.delay = delay
        self.response = response
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        self.calls.append({"messages": messages, "model": model, "max_tokens": max_tokens})
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if self.response is not None:
            return self.response
        return LLMResponse(content=self.content, model=model or "fake-model")

    async def close(self) -> None:
        self.closed = True


class FakeGateway(CompletionGateway):
    """Gateway double returning canned results, optionally held until released."""

    def __init__(self, result: CompletionResult | None = None, hold: bool = False):
        self.result = result or CompletionResult(text="Take a deep breath.")
        self.hold = hold
        self.utterances: list[str] = []
        self._releases: dict[str, asyncio.Event] = {}
        self.closed = False

    def release(self, utterance: str) -> None:
        self._releases.setdefault(utterance, asyncio.Event()).set()

    async def complete(self, utterance: str, prior_turns=None) -> CompletionResult:
        self._validate(utterance)
        self.utterances.append(utterance)
        if self.hold:
            await self._releases.setdefault(utterance, asyncio.Event()).wait()
            return CompletionResult(text=f"reply to {utterance}")
        return self.result

    async def close(self) -> None:
        self.closed = True


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "gemini": os.getenv("GEMINI_API_KEY"),
    }


@pytest.fixture
def store():
    return ConversationStore()


@pytest.fixture
def fake_provider():
    return FakeProvider()


@pytest.fixture
def fake_gateway():
    return FakeGateway()


@pytest.fixture
def provider_gateway(fake_provider):
    return ProviderGateway(fake_provider, timeout_s=1.0)


@pytest.fixture
def session(store, fake_gateway):
    return ChatSession(store, fake_gateway)


@pytest.fixture
def no_dotenv(monkeypatch):
    """Keep a developer's .env file out of configuration tests."""
    monkeypatch.setattr("eva.config.load_dotenv", lambda *args, **kwargs: False)
