"""GigaChat API client - typed endpoint wrappers over RequestExecutor."""

import logging
import mimetypes
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import BinaryIO, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from gigapy.client.authenticator import Authenticator
from gigapy.client.executor import RequestExecutor
from gigapy.client.token_store import TokenStore, utcnow
from gigapy.config import get_settings
from gigapy.errors import APIError, DecodeError
from gigapy.models import (
    ChatRequest,
    ChatResponse,
    EmbeddingRequest,
    EmbeddingResponse,
    File,
    FilesResponse,
    ModelsResponse,
    Purpose,
    Scope,
    Token,
)

logger = logging.getLogger(__name__)

ResponseT = TypeVar("ResponseT", bound=BaseModel)

INVALID_UPLOAD_TYPES = ("", "application/octet-stream")


class GigaChatClient:
    """
    Client for the GigaChat REST API.

    Owns its token state; one instance per credential. Arguments not given
    fall back to Settings (GIGACHAT_* environment variables).
    """

    def __init__(
        self,
        auth_key: str | None = None,
        *,
        base_url: str | None = None,
        auth_url: str | None = None,
        scope: Scope | None = None,
        http_client: httpx.Client | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        settings = get_settings()
        self._owns_http = http_client is None
        self._http = http_client or httpx.Client(
            timeout=settings.timeout,
            verify=settings.verify_ssl,
        )
        self._scope = scope or settings.scope
        self._store = TokenStore()
        self._authenticator = Authenticator(
            self._http,
            auth_url or settings.auth_url,
            auth_key if auth_key is not None else settings.auth_key,
            self._store,
        )
        self._executor = RequestExecutor(
            self._http,
            base_url or settings.base_url,
            self._authenticator,
            self._store,
            scope=self._scope,
            clock=clock,
        )

    @property
    def executor(self) -> RequestExecutor:
        return self._executor

    @property
    def token(self) -> Token | None:
        """Currently held token, if any."""
        return self._store.get()

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "GigaChatClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def get_access_token(self, scope: Scope | None = None) -> Token:
        """Authenticate now, regardless of the held token."""
        return self._authenticator.authenticate(scope or self._scope)

    def get_models(self) -> ModelsResponse:
        resp = self._executor.execute("GET", "/models")
        return _decode(resp, ModelsResponse, "get models")

    def chat(self, request: ChatRequest) -> ChatResponse:
        resp = self._executor.execute("POST", "/chat/completions", request.to_payload())
        return _decode(resp, ChatResponse, "chat")

    def create_embeddings(self, request: EmbeddingRequest) -> EmbeddingResponse:
        resp = self._executor.execute("POST", "/embeddings", request.to_payload())
        return _decode(resp, EmbeddingResponse, "create embeddings")

    def upload_file(self, path: str | Path, purpose: Purpose | str = Purpose.GENERAL) -> File:
        """Upload a local file; content type is guessed from the extension."""
        path = Path(path)
        content_type, _ = mimetypes.guess_type(path.name)
        if not content_type:
            raise ValueError(f"failed to determine content type of file: {path}")
        with path.open("rb") as f:
            return self.upload_file_obj(f, path.name, content_type, purpose)

    def upload_file_obj(
        self,
        fileobj: BinaryIO,
        filename: str,
        content_type: str,
        purpose: Purpose | str = Purpose.GENERAL,
    ) -> File:
        """Upload file content as multipart/form-data."""
        if content_type in INVALID_UPLOAD_TYPES:
            raise ValueError(f"invalid content type: {content_type!r}")
        content = fileobj.read()
        purpose_value = purpose.value if isinstance(purpose, Purpose) else purpose
        resp = self._executor.execute(
            "POST",
            "/files",
            files={"file": (filename, content, content_type)},
            data={"purpose": purpose_value},
        )
        return _decode(resp, File, "upload file")

    def get_files(self) -> FilesResponse:
        resp = self._executor.execute("GET", "/files")
        return _decode(resp, FilesResponse, "get files")

    def get_file(self, file_id: str) -> File:
        resp = self._executor.execute("GET", f"/files/{file_id}")
        return _decode(resp, File, "get file")

    def delete_file(self, file_id: str) -> None:
        resp = self._executor.execute("DELETE", f"/files/{file_id}")
        _check_status(resp, "delete file")

    def download_file(self, file_id: str) -> bytes:
        resp = self._executor.execute("GET", f"/files/{file_id}/content")
        _check_status(resp, "download file")
        return resp.content


def _check_status(resp: httpx.Response, operation: str) -> None:
    if resp.status_code != httpx.codes.OK:
        raise APIError(operation, resp.status_code, resp.text)


def _decode(resp: httpx.Response, model: type[ResponseT], operation: str) -> ResponseT:
    """Require HTTP 200, then validate the JSON body into model."""
    _check_status(resp, operation)
    try:
        return model.model_validate(resp.json())
    except (ValueError, ValidationError) as e:
        raise DecodeError(operation, resp.text, e) from e
