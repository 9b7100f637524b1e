"""Embeddings data models."""

from typing import Any

from pydantic import BaseModel, Field

from gigapy.models.chat import Usage


class EmbeddingRequest(BaseModel):
    """POST /embeddings body."""

    model: str
    input: list[str]

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class Embedding(BaseModel):
    object: str = "embedding"
    embedding: list[float]
    index: int = 0


class EmbeddingResponse(BaseModel):
    """POST /embeddings success body."""

    object: str = "list"
    data: list[Embedding] = Field(default_factory=list)
    model: str | None = None
    usage: Usage = Field(default_factory=Usage)
