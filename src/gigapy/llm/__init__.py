"""LLM abstraction - generic interface and framework adapters."""

from gigapy.llm.base import LLMClient
from gigapy.llm.gigachat import GigaChatLLM
from gigapy.llm.langchain import ChatGigaChat, GigaChatEmbeddings

__all__ = ["ChatGigaChat", "GigaChatEmbeddings", "GigaChatLLM", "LLMClient"]
