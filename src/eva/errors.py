"""Exception hierarchy shared by the store, the gateways and the server."""


class EvaError(Exception):
    """Base class for all Eva errors."""


class InvalidInputError(EvaError, ValueError):
    """Raised when a message is empty or absent."""


class ChatNotFoundError(EvaError, KeyError):
    """Raised when a chat id does not match any existing chat."""

    def __init__(self, chat_id: str):
        super().__init__(chat_id)
        self.chat_id = chat_id

    def __str__(self) -> str:
        return f"Chat not found: {self.chat_id}"


class ProviderFailureError(EvaError):
    """The completion provider errored, timed out or answered garbage.

    Gateways catch this (and anything else the provider raises) and turn it
    into a failed CompletionResult; it never reaches the conversation store.
    """


class ConfigurationError(EvaError):
    """Required configuration is missing or invalid. Fatal at startup."""
