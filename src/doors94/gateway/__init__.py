"""Chat gateway: validation, prompt assembly and the completion API call."""

from doors94.gateway.config import GatewaySettings
from doors94.gateway.models import ChatMessage, ChatRequest, ChatResult
from doors94.gateway.service import ChatGateway

__all__ = [
    "ChatGateway",
    "ChatMessage",
    "ChatRequest",
    "ChatResult",
    "GatewaySettings",
]
