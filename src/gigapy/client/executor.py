"""Authenticated JSON-over-HTTPS request pipeline.

Every endpoint wrapper reaches the network through RequestExecutor.execute,
which keeps the bearer token fresh and retries exactly once on HTTP 401
after a forced re-authentication. Status codes other than 401 are left to
the caller.
"""

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

import httpx
from pydantic import BaseModel

from gigapy.client.authenticator import Authenticator
from gigapy.client.token_store import TokenStore, utcnow
from gigapy.errors import TransportError
from gigapy.models.auth import Scope, Token

logger = logging.getLogger(__name__)

# (filename, content, content_type)
FilePart = tuple[str, bytes, str]


class RequestExecutor:
    """Sends authenticated requests against the resource API."""

    def __init__(
        self,
        http: httpx.Client,
        base_url: str,
        authenticator: Authenticator,
        store: TokenStore,
        *,
        scope: Scope = Scope.PERSONAL,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._http = http
        self._base_url = base_url.rstrip("/")
        self._authenticator = authenticator
        self._store = store
        self._scope = scope
        self._clock = clock

    def ensure_token(self, *, timeout: float | None = None) -> Token:
        """Return a token valid beyond the refresh margin, authenticating if needed."""
        with self._store.lock:
            token = self._store.get()
            if token is None or token.needs_refresh(self._clock()):
                logger.debug("Access token missing or near expiry, authenticating")
                token = self._authenticator.authenticate(self._scope, timeout=timeout)
            return token

    def _force_refresh(self, stale: Token, *, timeout: float | None) -> Token:
        with self._store.lock:
            current = self._store.get()
            # another caller already replaced the rejected token
            if current is not None and current != stale:
                return current
            return self._authenticator.authenticate(self._scope, timeout=timeout)

    def execute(
        self,
        method: str,
        path: str,
        body: BaseModel | dict[str, Any] | list[Any] | None = None,
        *,
        files: dict[str, FilePart] | None = None,
        data: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        """
        Send method path with a valid bearer token and return the raw response.

        body is serialized as JSON. files/data produce a multipart form
        instead; both are rebuilt from bytes so the 401 retry can resend them.
        Raises AuthError when no token can be obtained (no request is sent)
        and TransportError when the request itself cannot complete.
        """
        token = self.ensure_token(timeout=timeout)
        payload = body.model_dump(mode="json", exclude_none=True) if isinstance(body, BaseModel) else body

        resp = self._send(method, path, token, payload, files, data, timeout)
        if resp.status_code == httpx.codes.UNAUTHORIZED:
            logger.debug("%s %s returned 401, refreshing token and retrying once", method, path)
            resp.close()
            token = self._force_refresh(token, timeout=timeout)
            resp = self._send(method, path, token, payload, files, data, timeout)
        return resp

    def _send(
        self,
        method: str,
        path: str,
        token: Token,
        payload: Any,
        files: dict[str, FilePart] | None,
        data: dict[str, str] | None,
        timeout: float | None,
    ) -> httpx.Response:
        headers = {
            "Accept": "application/json",
            "Authorization": f"Bearer {token.value}",
        }
        if payload is not None:
            headers["Content-Type"] = "application/json"
        request = self._http.build_request(
            method,
            self._base_url + path,
            headers=headers,
            json=payload,
            files=files,
            data=data,
            timeout=timeout if timeout is not None else httpx.USE_CLIENT_DEFAULT,
        )
        try:
            return self._http.send(request)
        except httpx.HTTPError as e:
            raise TransportError(method, path, e) from e
