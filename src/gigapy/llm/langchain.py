"""LangChain integration: chat model and embeddings backed by GigaChatClient."""

import json
import logging
from typing import Any

from langchain_core.callbacks import CallbackManagerForLLMRun
from langchain_core.embeddings import Embeddings
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, ChatMessage
from langchain_core.outputs import ChatGeneration, ChatResult
from pydantic import BaseModel, ConfigDict, Field

from gigapy.client import GigaChatClient
from gigapy.errors import GigaChatError
from gigapy.llm.gigachat import GigaChatLLM
from gigapy.models import ChatChoice, EmbeddingRequest

logger = logging.getLogger(__name__)


def _message_role(message: BaseMessage) -> str:
    if isinstance(message, ChatMessage):
        return message.role
    return message.type


def _message_text(message: BaseMessage) -> str:
    """Plain string content, or the first text part of multimodal content."""
    if isinstance(message.content, str):
        return message.content
    for part in message.content:
        if isinstance(part, str):
            return part
        if isinstance(part, dict) and part.get("type") == "text":
            return part.get("text", "")
    return ""


def _apply_stop(text: str, stop: list[str] | None) -> str:
    for s in stop or []:
        idx = text.find(s)
        if idx != -1:
            text = text[:idx]
    return text


def _to_generation(choice: ChatChoice, stop: list[str] | None) -> ChatGeneration:
    msg = choice.message
    additional: dict[str, Any] = {}
    if msg.function_call is not None:
        additional["function_call"] = {
            "name": msg.function_call.name,
            "arguments": json.dumps(msg.function_call.arguments, ensure_ascii=False),
        }
    return ChatGeneration(
        message=AIMessage(
            content=_apply_stop(msg.content or "", stop),
            additional_kwargs=additional,
        ),
        generation_info={"finish_reason": choice.finish_reason},
    )


class ChatGigaChat(BaseChatModel):
    """GigaChat chat model for LangChain pipelines."""

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        populate_by_name=True,
        protected_namespaces=(),
    )

    client: GigaChatClient
    model_name: str = Field(default="GigaChat:latest", alias="model")
    temperature: float | None = None
    max_tokens: int | None = None

    @property
    def _llm_type(self) -> str:
        return "gigachat"

    @property
    def _identifying_params(self) -> dict[str, Any]:
        return {
            "model_name": self.model_name,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }

    def _generate(
        self,
        messages: list[BaseMessage],
        stop: list[str] | None = None,
        run_manager: CallbackManagerForLLMRun | None = None,
        **kwargs: Any,
    ) -> ChatResult:
        llm = GigaChatLLM(self.client, self.model_name)
        request = llm.build_request(
            [(_message_role(m), _message_text(m)) for m in messages],
            max_tokens=kwargs.get("max_tokens", self.max_tokens),
            temperature=kwargs.get("temperature", self.temperature),
        )
        resp = llm.complete(request)
        return ChatResult(
            generations=[_to_generation(c, stop) for c in resp.choices],
            llm_output={
                "token_usage": resp.usage.model_dump(),
                "model_name": resp.model or self.model_name,
            },
        )


class GigaChatEmbeddings(BaseModel, Embeddings):
    """GigaChat embeddings for LangChain vector stores."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    client: GigaChatClient
    model: str = "Embeddings"

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            return []
        resp = self.client.create_embeddings(EmbeddingRequest(model=self.model, input=list(texts)))
        logger.debug("Embedded %d texts with %s", len(texts), self.model)
        return [e.embedding for e in sorted(resp.data, key=lambda e: e.index)]

    def embed_query(self, text: str) -> list[float]:
        vectors = self.embed_documents([text])
        if not vectors:
            raise GigaChatError("no response from GigaChat")
        return vectors[0]
