"""GigaChat implementation of the generic LLM interface."""

import logging
from collections.abc import Iterable

from gigapy.client import GigaChatClient
from gigapy.errors import GigaChatError
from gigapy.llm.base import LLMClient
from gigapy.models import ChatRequest, ChatResponse, Message, Role

logger = logging.getLogger(__name__)

_ROLE_ALIASES = {
    "ai": Role.ASSISTANT.value,
    "assistant": Role.ASSISTANT.value,
    "human": Role.USER.value,
    "generic": Role.USER.value,
    "user": Role.USER.value,
}


def to_api_role(role: str) -> str:
    """Map framework message types onto API roles; unknown roles pass through."""
    return _ROLE_ALIASES.get(role, role)


class GigaChatLLM(LLMClient):
    """Chat model bound to a GigaChatClient and a model name."""

    def __init__(self, client: GigaChatClient, model: str) -> None:
        self._client = client
        self._model = model

    @property
    def client(self) -> GigaChatClient:
        return self._client

    @property
    def model(self) -> str:
        return self._model

    def build_request(
        self,
        messages: Iterable[tuple[str, str]],
        *,
        model: str | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> ChatRequest:
        # zero means "not set"; the API default applies
        req = ChatRequest(
            model=model or self._model,
            messages=[Message(role=to_api_role(role), content=text) for role, text in messages],
        )
        if temperature and temperature > 0:
            req.temperature = temperature
        if max_tokens and max_tokens > 0:
            req.max_tokens = max_tokens
        return req

    def complete(self, request: ChatRequest) -> ChatResponse:
        """Run request; fails when the API returns no choices."""
        try:
            resp = self._client.chat(request)
        except GigaChatError as e:
            raise GigaChatError(f"failed to call GigaChat: {e}") from e
        if not resp.choices:
            raise GigaChatError("no response from GigaChat")
        return resp

    def chat(
        self,
        messages: list[dict[str, str]],
        *,
        model: str | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> str:
        req = self.build_request(
            [(m["role"], m.get("content", "")) for m in messages],
            model=model,
            max_tokens=max_tokens,
            temperature=temperature,
        )
        return self.complete(req).choices[0].message.content or ""

    def call(
        self,
        prompt: str,
        *,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> str:
        """Single user prompt in, assistant text out."""
        return self.chat(
            [{"role": Role.USER.value, "content": prompt}],
            max_tokens=max_tokens,
            temperature=temperature,
        )

    def generate_content(
        self,
        messages: list[tuple[str, str]],
        *,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> list[str]:
        """
        Multi-turn generation over (role, text) pairs.
        Returns one string per choice; the first is the primary answer.
        """
        req = self.build_request(messages, max_tokens=max_tokens, temperature=temperature)
        resp = self.complete(req)
        logger.debug("GigaChat used %d tokens", resp.usage.total_tokens)
        return [c.message.content or "" for c in resp.choices]
