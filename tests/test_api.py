import io
import json

import httpx
import pytest

from gigapy.client import GigaChatClient
from gigapy.errors import APIError, DecodeError
from gigapy.models import ChatRequest, EmbeddingRequest, Message, Purpose, Scope

from conftest import AUTH_URL, BASE_URL

CHAT_RESPONSE = {
    "id": "chat-1",
    "object": "chat.completion",
    "created": 1234567890,
    "model": "GigaChat:latest",
    "choices": [
        {"index": 0, "message": {"role": "assistant", "content": "Hello!"}, "finish_reason": "stop"},
    ],
    "usage": {"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15},
}

FILE_BODY = {
    "id": "file-1",
    "object": "file",
    "bytes": 32,
    "created_at": 1700000000,
    "filename": "notes.txt",
    "purpose": "general",
}


@pytest.fixture
def authed(server, client) -> GigaChatClient:
    server.issue_token("tok1")
    return client


def test_client_falls_back_to_settings(monkeypatch, http):
    monkeypatch.setenv("GIGACHAT_AUTH_KEY", "from-env")
    monkeypatch.setenv("GIGACHAT_SCOPE", "GIGACHAT_API_CORP")
    client = GigaChatClient(http_client=http)

    assert client.executor._base_url == "https://gigachat.devices.sberbank.ru/api/v1"
    assert client._authenticator._auth_url == "https://ngw.devices.sberbank.ru:9443/api/v2/oauth"
    assert client._authenticator._authorization == "Basic from-env"
    assert client._scope is Scope.CORPORATE


def test_get_access_token_always_authenticates(server, client):
    server.issue_token("tok1")
    server.issue_token("tok2")

    client.get_access_token()
    token = client.get_access_token()

    assert token.value == "tok2"
    assert client.token == token


def test_get_models(server, authed):
    server.reply(200, json={"data": [{"id": "GigaChat", "object": "model", "owned_by": "salutedevices"}]})

    models = authed.get_models()

    assert [m.id for m in models.data] == ["GigaChat"]
    assert server.api_requests[0].method == "GET"
    assert str(server.api_requests[0].url) == BASE_URL + "/models"


def test_chat(server, authed):
    server.reply(200, json=CHAT_RESPONSE)
    request = ChatRequest(model="GigaChat:latest", messages=[Message(role="user", content="Hi")])

    resp = authed.chat(request)

    assert resp.choices[0].message.content == "Hello!"
    assert resp.usage.total_tokens == 15
    sent = json.loads(server.api_requests[0].content)
    assert sent == {"model": "GigaChat:latest", "messages": [{"role": "user", "content": "Hi"}]}


def test_chat_function_call_response(server, authed):
    body = dict(CHAT_RESPONSE)
    body["choices"] = [
        {
            "index": 0,
            "message": {
                "role": "assistant",
                "function_call": {"name": "get_weather", "arguments": {"city": "Moscow", "days": [1, 2]}},
            },
        }
    ]
    server.reply(200, json=body)

    resp = authed.chat(ChatRequest(model="GigaChat", messages=[Message(role="user", content="?")]))

    call = resp.choices[0].message.function_call
    assert call.name == "get_weather"
    assert call.arguments == {"city": "Moscow", "days": [1, 2]}
    assert resp.choices[0].message.content is None


def test_chat_error_status(server, authed):
    server.reply(400, text='{"message": "bad model"}')

    with pytest.raises(APIError) as exc_info:
        authed.chat(ChatRequest(model="nope", messages=[]))

    assert exc_info.value.status_code == 400
    assert exc_info.value.body == '{"message": "bad model"}'
    assert exc_info.value.operation == "chat"


def test_second_unauthorized_becomes_api_error(server, authed):
    server.reply(401, text="expired")
    server.issue_token("tok2")
    server.reply(401, text="still expired")

    with pytest.raises(APIError) as exc_info:
        authed.get_models()

    assert exc_info.value.status_code == 401


def test_decode_error(server, authed):
    server.reply(200, json={"choices": "not-a-list"})

    with pytest.raises(DecodeError) as exc_info:
        authed.chat(ChatRequest(model="m", messages=[]))

    assert exc_info.value.operation == "chat"
    assert "not-a-list" in exc_info.value.body


def test_create_embeddings(server, authed):
    server.reply(
        200,
        json={
            "object": "list",
            "data": [{"object": "embedding", "embedding": [0.1, 0.2, 0.3], "index": 0}],
            "model": "Embeddings",
            "usage": {"prompt_tokens": 5, "total_tokens": 5},
        },
    )

    resp = authed.create_embeddings(EmbeddingRequest(model="Embeddings", input=["Hello", "World"]))

    assert resp.data[0].embedding == [0.1, 0.2, 0.3]
    assert json.loads(server.api_requests[0].content) == {"model": "Embeddings", "input": ["Hello", "World"]}


def test_upload_file_obj_multipart(server, authed):
    server.reply(200, json=FILE_BODY)

    uploaded = authed.upload_file_obj(io.BytesIO(b"hello"), "notes.txt", "text/plain", Purpose.GENERAL)

    assert uploaded.id == "file-1"
    req = server.api_requests[0]
    assert req.headers["Content-Type"].startswith("multipart/form-data; boundary=")
    assert req.headers["Authorization"] == "Bearer tok1"
    assert b'name="file"; filename="notes.txt"' in req.content
    assert b"Content-Type: text/plain" in req.content
    assert b'name="purpose"\r\n\r\ngeneral' in req.content


def test_upload_retries_with_full_body(server, authed):
    server.reply(401)
    server.issue_token("tok2")
    server.reply(200, json=FILE_BODY)

    authed.upload_file_obj(io.BytesIO(b"hello"), "notes.txt", "text/plain")

    first, second = server.api_requests
    assert b"hello" in first.content
    assert b"hello" in second.content
    assert second.headers["Authorization"] == "Bearer tok2"


@pytest.mark.parametrize("content_type", ["", "application/octet-stream"])
def test_upload_rejects_untyped_content(server, client, content_type):
    with pytest.raises(ValueError):
        client.upload_file_obj(io.BytesIO(b"x"), "blob", content_type)
    assert server.requests == []


def test_upload_file_guesses_type(server, authed, tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("This is a test file")
    server.reply(200, json=FILE_BODY)

    authed.upload_file(path)

    assert b"Content-Type: text/plain" in server.api_requests[0].content


def test_upload_file_unknown_extension(server, client, tmp_path):
    path = tmp_path / "data.unknownext"
    path.write_bytes(b"x")

    with pytest.raises(ValueError):
        client.upload_file(path)
    assert server.requests == []


def test_get_files_and_file(server, authed):
    server.reply(200, json={"data": [FILE_BODY]})
    server.reply(200, json=FILE_BODY)

    files = authed.get_files()
    f = authed.get_file("file-1")

    assert files.data[0].filename == "notes.txt"
    assert f.bytes == 32
    assert str(server.api_requests[1].url) == BASE_URL + "/files/file-1"


def test_delete_file(server, authed):
    server.reply(200, json={"id": "file-1", "deleted": True})

    authed.delete_file("file-1")

    assert server.api_requests[0].method == "DELETE"


def test_delete_file_not_found(server, authed):
    server.reply(404, text="no such file")
    with pytest.raises(APIError):
        authed.delete_file("missing")


def test_download_file(server, authed):
    server.reply(200, content=b"\x89PNG raw")

    data = authed.download_file("file-1")

    assert data == b"\x89PNG raw"
    assert str(server.api_requests[0].url) == BASE_URL + "/files/file-1/content"


def test_close_leaves_injected_http_client_open(http, client):
    client.close()
    assert not http.is_closed


def test_context_manager_closes_own_http_client():
    with GigaChatClient("abc", base_url=BASE_URL, auth_url=AUTH_URL) as client:
        http = client._http
    assert http.is_closed
