"""Gateway that reaches the completion proxy over HTTP.

Front-ends use this so the provider credential never leaves the server.
"""

import logging
from collections.abc import Sequence
from typing import Any

import httpx

from ..errors import InvalidInputError, ProviderFailureError
from ..llm.models import ChatMessage
from .base import CompletionGateway
from .models import CompletionResult

logger = logging.getLogger(__name__)

CHAT_PATH = "/api/chat"


class HttpGateway(CompletionGateway):
    """POST utterances to `<base_url>/api/chat` and read back `{"text": ...}`."""

    def __init__(
        self,
        base_url: str = "http://localhost:3001",
        timeout_s: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout_s = timeout_s
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout_s)

    @property
    def url(self) -> str:
        return f"{self._base_url}{CHAT_PATH}"

    async def _post(self, utterance: str) -> str:
        try:
            resp = await self._client.post(self.url, json={"message": utterance}, timeout=self._timeout_s)
        except httpx.TimeoutException as e:
            raise ProviderFailureError(f"request timed out: {e}") from e
        except httpx.HTTPError as e:
            raise ProviderFailureError(f"request failed: {e}") from e
        except httpx.InvalidURL as e:
            # Not an HTTPError subclass; raised for a malformed base_url
            raise ProviderFailureError(f"invalid proxy url {self.url!r}: {e}") from e

        if resp.is_error:
            raise ProviderFailureError(f"proxy answered {resp.status_code}: {_error_detail(resp)}")

        try:
            data = resp.json()
        except ValueError as e:
            raise ProviderFailureError("proxy answered with invalid JSON") from e

        text = data.get("text") if isinstance(data, dict) else None
        if not isinstance(text, str):
            raise ProviderFailureError("proxy response has no 'text' field")
        return text

    async def complete(
        self,
        utterance: str,
        prior_turns: Sequence[ChatMessage] | None = None,
    ) -> CompletionResult:
        """Request a reply from the proxy.

        The proxy always applies its own fixed seed, so prior_turns cannot
        be forwarded and must be left as None.
        """
        self._validate(utterance)
        if prior_turns is not None:
            raise InvalidInputError("HttpGateway cannot forward prior_turns; the proxy uses its fixed seed")
        try:
            text = await self._post(utterance)
        except ProviderFailureError as e:
            logger.error("error contacting backend url=%s err=%s", self.url, e)
            return CompletionResult.failure(str(e))
        return CompletionResult(text=text)

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()


def _error_detail(resp: httpx.Response) -> Any:
    try:
        data = resp.json()
    except ValueError:
        return resp.text[:200]
    if isinstance(data, dict) and "error" in data:
        return data["error"]
    return data
