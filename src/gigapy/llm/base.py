"""LLM client abstract interface."""

from abc import ABC, abstractmethod


class LLMClient(ABC):
    """Generic chat-completion interface consumed by orchestration code."""

    @abstractmethod
    def chat(
        self,
        messages: list[dict[str, str]],
        *,
        model: str | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> str:
        """
        Send chat completion request and return assistant message content.
        messages: [{"role": "system"|"user"|"assistant", "content": "..."}]
        """
        ...
