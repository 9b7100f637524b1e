"""Wire data models."""

from gigapy.models.auth import REFRESH_MARGIN, Scope, Token, TokenResponse
from gigapy.models.catalog import Model, ModelsResponse
from gigapy.models.chat import (
    ChatChoice,
    ChatRequest,
    ChatResponse,
    Function,
    FunctionCall,
    Message,
    Role,
    Usage,
)
from gigapy.models.embeddings import Embedding, EmbeddingRequest, EmbeddingResponse
from gigapy.models.files import File, FilesResponse, Purpose

__all__ = [
    "REFRESH_MARGIN",
    "ChatChoice",
    "ChatRequest",
    "ChatResponse",
    "Embedding",
    "EmbeddingRequest",
    "EmbeddingResponse",
    "File",
    "FilesResponse",
    "Function",
    "FunctionCall",
    "Message",
    "Model",
    "ModelsResponse",
    "Purpose",
    "Role",
    "Scope",
    "Token",
    "TokenResponse",
    "Usage",
]
