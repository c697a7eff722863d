"""Environment-driven configuration.

Values come from the process environment, optionally seeded from a `.env`
file in the working directory. The provider credential is only ever read
here, on the server side.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .errors import ConfigurationError

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3001
DEFAULT_TIMEOUT_S = 30.0
DEFAULT_MAX_OUTPUT_TOKENS = 300
DEFAULT_API_URL = "http://localhost:3001"


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {raw!r}")
    return value


@dataclass(frozen=True)
class Settings:
    """Server-side settings for the completion proxy."""

    api_key: str
    model: str = DEFAULT_MODEL
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    timeout_s: float = DEFAULT_TIMEOUT_S
    max_output_tokens: int = DEFAULT_MAX_OUTPUT_TOKENS
    cors_origins: tuple[str, ...] = ("*",)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "Settings":
        """Build settings from environment variables.

        Environment variables:
            GEMINI_API_KEY: Provider credential (required)
            GEMINI_MODEL: Model name (default: gemini-2.5-flash)
            HOST: Bind address (default: 0.0.0.0)
            PORT: Listen port (default: 3001)
            EVA_TIMEOUT_S: Provider call timeout in seconds (default: 30)
            EVA_MAX_OUTPUT_TOKENS: Output cap per reply (default: 300)
            EVA_CORS_ORIGINS: Comma separated allowed origins (default: *)
            LOG_LEVEL: Logging level (default: INFO)

        Raises:
            ConfigurationError: If the credential is absent or a value is malformed
        """
        if load_env_file:
            load_dotenv()

        api_key = os.getenv("GEMINI_API_KEY", "").strip()
        if not api_key:
            raise ConfigurationError("GEMINI_API_KEY is not set")

        origins = os.getenv("EVA_CORS_ORIGINS", "*")
        cors_origins = tuple(o.strip() for o in origins.split(",") if o.strip()) or ("*",)

        return cls(
            api_key=api_key,
            model=os.getenv("GEMINI_MODEL", DEFAULT_MODEL),
            host=os.getenv("HOST", DEFAULT_HOST),
            port=_int_env("PORT", DEFAULT_PORT),
            timeout_s=_float_env("EVA_TIMEOUT_S", DEFAULT_TIMEOUT_S),
            max_output_tokens=_int_env("EVA_MAX_OUTPUT_TOKENS", DEFAULT_MAX_OUTPUT_TOKENS),
            cors_origins=cors_origins,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )


@dataclass(frozen=True)
class ClientSettings:
    """Settings for terminal front-ends talking to the proxy."""

    api_url: str = DEFAULT_API_URL
    timeout_s: float = DEFAULT_TIMEOUT_S

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "ClientSettings":
        if load_env_file:
            load_dotenv()
        return cls(
            api_url=os.getenv("EVA_API_URL", DEFAULT_API_URL),
            timeout_s=_float_env("EVA_TIMEOUT_S", DEFAULT_TIMEOUT_S),
        )
