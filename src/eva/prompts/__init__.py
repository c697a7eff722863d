"""Prompt management module.

The persona is kept in a text file for easy customization and can be
overridden by placing `prompts/<name>.txt` in the working directory.
The fixed seed turns and fallback replies live here too, since every
front-end and gateway has to agree on them.
"""

from functools import lru_cache
from pathlib import Path

from ..llm.models import ChatMessage

_PROMPTS_DIR = Path(__file__).parent

# Sent before every new utterance; the gateway never accumulates history
SEED_TURNS: tuple[ChatMessage, ...] = (
    ChatMessage(role="user", content="Hello! You are Eva, an AI-based emotional virtual assistant."),
    ChatMessage(role="assistant", content="Hello! How can I help you today?"),
)

FALLBACK_UNAVAILABLE = "Sorry, I am unable to respond at the moment."
FALLBACK_EMPTY = "Sorry, I didn't get a response."


@lru_cache(maxsize=16)
def load_prompt(name: str) -> str:
    """Load a prompt from file.

    Search order:
    1. Current working directory: ./prompts/{name}.txt
    2. Package prompts directory: eva/prompts/{name}.txt

    Args:
        name: Prompt name (without .txt extension)

    Returns:
        Prompt text content, surrounding whitespace stripped

    Raises:
        FileNotFoundError: If prompt file not found in any location
    """
    filename = f"{name}.txt"

    local_path = Path.cwd() / "prompts" / filename
    if local_path.exists():
        return local_path.read_text(encoding="utf-8").strip()

    package_path = _PROMPTS_DIR / filename
    if package_path.exists():
        return package_path.read_text(encoding="utf-8").strip()

    raise FileNotFoundError(
        f"Prompt '{name}' not found. Searched:\n"
        f"  - {local_path}\n"
        f"  - {package_path}"
    )


def get_persona() -> str:
    """Get the system persona sent with every completion request."""
    return load_prompt("persona")


def clear_cache() -> None:
    """Clear the prompt cache (useful after modifying prompt files)."""
    load_prompt.cache_clear()


__all__ = [
    "FALLBACK_EMPTY",
    "FALLBACK_UNAVAILABLE",
    "SEED_TURNS",
    "clear_cache",
    "get_persona",
    "load_prompt",
]
