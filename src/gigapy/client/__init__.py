"""Authenticated GigaChat HTTP client."""

from gigapy.client.api import GigaChatClient
from gigapy.client.authenticator import Authenticator
from gigapy.client.executor import RequestExecutor
from gigapy.client.token_store import TokenStore

__all__ = ["Authenticator", "GigaChatClient", "RequestExecutor", "TokenStore"]
