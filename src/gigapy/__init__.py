"""GigaChat API client with LangChain integration."""

from gigapy.client import GigaChatClient
from gigapy.config import Settings, get_settings
from gigapy.errors import APIError, AuthError, DecodeError, GigaChatError, TransportError

__all__ = [
    "APIError",
    "AuthError",
    "DecodeError",
    "GigaChatClient",
    "GigaChatError",
    "Settings",
    "TransportError",
    "get_settings",
]
