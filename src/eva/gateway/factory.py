from typing import Any

from ..llm import create_llm_provider
from .base import CompletionGateway
from .http import HttpGateway
from .provider import ProviderGateway


def create_gateway(kind: str, **config: Any) -> CompletionGateway:
    """Create a completion gateway.

    Args:
        kind: Gateway type ('provider' or 'http')
        **config: Gateway-specific configuration
            For provider:
                - provider: LLMProvider, or
                - provider_name: str (default: 'gemini') plus api_key: str and
                  optional model: str, used to build one
                - timeout_s, max_output_tokens, persona, prior_turns (optional)
            For http:
                - base_url: str (default: 'http://localhost:3001')
                - timeout_s: float
                - client: httpx.AsyncClient (optional)

    Returns:
        Initialized gateway

    Raises:
        ValueError: If gateway type is not supported
        TypeError: If required configuration is missing
    """
    kind_lower = kind.lower()

    if kind_lower == "provider":
        provider = config.pop("provider", None)
        if provider is None:
            if "api_key" not in config:
                raise TypeError("Provider gateway requires 'provider' or 'api_key' in config")
            provider_name = config.pop("provider_name", "gemini")
            provider_config = {"api_key": config.pop("api_key")}
            if config.get("model"):
                provider_config["model"] = config["model"]
            provider = create_llm_provider(provider_name, **provider_config)
        return ProviderGateway(provider, **config)

    if kind_lower == "http":
        return HttpGateway(**config)

    raise ValueError(
        f"Unsupported gateway: {kind}. "
        f"Supported gateways: 'provider', 'http'"
    )
