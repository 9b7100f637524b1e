"""Exchanges the authorization secret for a short-lived bearer token."""

import logging
import uuid

import httpx
from pydantic import ValidationError

from gigapy.client.token_store import TokenStore
from gigapy.errors import AuthError
from gigapy.models.auth import Scope, Token, TokenResponse

logger = logging.getLogger(__name__)


def basic_authorization(credential: str) -> str:
    """Header value for the auth endpoint. Accepts a bare or 'Basic '-prefixed key."""
    if credential[:6].lower() == "basic ":
        return "Basic " + credential[6:]
    return "Basic " + credential


class Authenticator:
    """Calls the OAuth endpoint and stores the resulting Token."""

    def __init__(
        self,
        http: httpx.Client,
        auth_url: str,
        credential: str,
        store: TokenStore,
    ) -> None:
        self._http = http
        self._auth_url = auth_url
        self._authorization = basic_authorization(credential)
        self._store = store

    def authenticate(
        self,
        scope: Scope,
        *,
        timeout: float | None = None,
    ) -> Token:
        """
        Request a fresh token for scope and write it to the store.
        The store is only touched after a fully decoded success response.
        """
        headers = {
            "Accept": "application/json",
            "RqUID": str(uuid.uuid4()),
            "Authorization": self._authorization,
        }
        logger.debug("Requesting access token for scope %s", scope.value)
        try:
            resp = self._http.post(
                self._auth_url,
                data={"scope": scope.value},
                headers=headers,
                timeout=timeout if timeout is not None else httpx.USE_CLIENT_DEFAULT,
            )
        except httpx.HTTPError as e:
            raise AuthError(f"auth request failed: {e}") from e

        if resp.status_code != httpx.codes.OK:
            raise AuthError(
                f"auth failed with status {resp.status_code}: {resp.text}",
                status_code=resp.status_code,
                body=resp.text,
            )

        try:
            token = Token.from_response(TokenResponse.model_validate(resp.json()))
        except (ValueError, ValidationError, OverflowError, OSError) as e:
            raise AuthError(
                f"failed to decode auth response: {e}",
                status_code=resp.status_code,
                body=resp.text,
            ) from e

        self._store.set(token)
        return token
