"""Chat completion data models.

Optional fields are None when absent and are dropped from the wire payload
(see ChatRequest.to_payload); explicit nulls are never sent.
"""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field, JsonValue


class Role(str, Enum):
    """Message roles understood by the chat endpoint."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    FUNCTION = "function"


class Function(BaseModel):
    """Function the model may call."""

    name: str
    description: str | None = None
    parameters: dict[str, JsonValue] | None = Field(
        default=None,
        description="JSON schema of the arguments",
    )


class FunctionCall(BaseModel):
    """Function call produced by the model."""

    name: str
    arguments: dict[str, JsonValue] = Field(default_factory=dict)


class Message(BaseModel):
    """Single chat message, request or response side."""

    role: str
    content: str | None = None
    function_call: FunctionCall | None = None


class ChatRequest(BaseModel):
    """POST /chat/completions body."""

    model: str
    messages: list[Message]
    temperature: float | None = None
    top_p: float | None = None
    n: int | None = None
    stream: bool | None = None
    max_tokens: int | None = None
    functions: list[Function] | None = None
    # "auto", "none" or {"name": "<function>"}
    function_call: Literal["auto", "none"] | dict[str, str] | None = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class Usage(BaseModel):
    """Token accounting."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class ChatChoice(BaseModel):
    index: int = 0
    message: Message
    finish_reason: str | None = None


class ChatResponse(BaseModel):
    """POST /chat/completions success body."""

    id: str | None = None
    object: str = ""
    created: int = 0
    model: str = ""
    choices: list[ChatChoice] = Field(default_factory=list)
    usage: Usage = Field(default_factory=Usage)
