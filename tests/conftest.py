from collections import deque
from datetime import datetime, timedelta, timezone

import httpx
import pytest

from gigapy.client import GigaChatClient
from gigapy.config import get_settings

AUTH_URL = "https://auth.test/api/v2/oauth"
BASE_URL = "https://api.test/api/v1"
NOW = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


def token_body(value: str, expires_in: float = 3600, now: datetime = NOW) -> dict:
    return {"access_token": value, "expires_at": int((now + timedelta(seconds=expires_in)).timestamp())}


class Clock:
    def __init__(self, now: datetime = NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


class StubServer:
    """Records outgoing requests and replays queued responses per endpoint."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.auth_queue: deque = deque()
        self.api_queue: deque = deque()

    def issue_token(self, value: str, expires_in: float = 3600) -> None:
        self.auth_queue.append(httpx.Response(200, json=token_body(value, expires_in)))

    def reply(self, status: int = 200, **kwargs) -> None:
        self.api_queue.append(httpx.Response(status, **kwargs))

    @property
    def auth_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if str(r.url) == AUTH_URL]

    @property
    def api_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if str(r.url) != AUTH_URL]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        queue = self.auth_queue if str(request.url) == AUTH_URL else self.api_queue
        if not queue:
            raise AssertionError(f"unexpected request {request.method} {request.url}")
        item = queue.popleft()
        if isinstance(item, Exception):
            raise item
        if callable(item):
            return item(request)
        return item


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    for name in ("GIGACHAT_AUTH_KEY", "GIGACHAT_BASE_URL", "GIGACHAT_AUTH_URL", "GIGACHAT_SCOPE"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def server() -> StubServer:
    return StubServer()


@pytest.fixture
def clock() -> Clock:
    return Clock()


@pytest.fixture
def http(server) -> httpx.Client:
    with httpx.Client(transport=httpx.MockTransport(server)) as c:
        yield c


@pytest.fixture
def client(http, clock) -> GigaChatClient:
    return GigaChatClient(
        "abc",
        base_url=BASE_URL,
        auth_url=AUTH_URL,
        http_client=http,
        clock=clock,
    )
