from .base import CompletionGateway
from .factory import create_gateway
from .http import HttpGateway
from .models import CompletionResult
from .provider import ProviderGateway

__all__ = [
    "CompletionGateway",
    "CompletionResult",
    "HttpGateway",
    "ProviderGateway",
    "create_gateway",
]
