"""Per-client bearer token holder."""

import threading
from datetime import datetime, timezone

from gigapy.models.auth import Token


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenStore:
    """
    Holds at most one Token. Owned by a single client instance.

    get/set are plain state access. `lock` serializes the
    check-then-refresh sequence for callers sharing a client across threads.
    """

    def __init__(self) -> None:
        self._token: Token | None = None
        self.lock = threading.RLock()

    def get(self) -> Token | None:
        return self._token

    def set(self, token: Token) -> None:
        self._token = token
