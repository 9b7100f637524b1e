"""Run with: python -m gigapy  (needs GIGACHAT_AUTH_KEY)"""

import logging
import sys
import tempfile
from pathlib import Path

from gigapy.client import GigaChatClient
from gigapy.config import get_settings
from gigapy.errors import GigaChatError
from gigapy.llm import ChatGigaChat, GigaChatEmbeddings
from gigapy.models import ChatRequest, EmbeddingRequest, Function, Message, Purpose, Role

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

WEATHER_FUNCTION = Function(
    name="get_weather",
    description="Get the weather in a specified city",
    parameters={
        "type": "object",
        "properties": {"city": {"type": "string", "description": "City name"}},
        "required": ["city"],
    },
)


def run(client: GigaChatClient, model: str, embeddings_model: str) -> None:
    print("1. Available models:")
    try:
        for m in client.get_models().data:
            print(f"  - {m.id} (owned by {m.owned_by})")
    except GigaChatError as e:
        logger.error("Error getting models: %s", e)

    print("\n2. Simple chat:")
    try:
        resp = client.chat(
            ChatRequest(model=model, messages=[Message(role=Role.USER.value, content="Hello, how are you?")])
        )
        if resp.choices:
            print(f"Response: {resp.choices[0].message.content}")
            print(f"Tokens used: {resp.usage.total_tokens}")
    except GigaChatError as e:
        logger.error("Chat error: %s", e)

    print("\n3. Embeddings:")
    try:
        emb = client.create_embeddings(
            EmbeddingRequest(model=embeddings_model, input=["Python", "httpx", "Programming"])
        )
        for i, e in enumerate(emb.data, start=1):
            print(f"  Embedding {i}: {len(e.embedding)} dimensions")
    except GigaChatError as e:
        logger.error("Error creating embeddings: %s", e)

    print("\n4. Chat with functions:")
    try:
        resp = client.chat(
            ChatRequest(
                model=model,
                messages=[Message(role=Role.USER.value, content="What's the weather in Moscow?")],
                functions=[WEATHER_FUNCTION],
                function_call={"name": WEATHER_FUNCTION.name},
            )
        )
        if resp.choices:
            msg = resp.choices[0].message
            if msg.function_call is not None:
                print(f"Function called: {msg.function_call.name}")
                print(f"Args: {msg.function_call.arguments}")
            else:
                print(f"Response: {msg.content}")
    except GigaChatError as e:
        logger.error("Error chat with functions: %s", e)

    print("\n5. Upload file:")
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "temp_example.txt"
        path.write_text("This is a test file for GigaChat")
        try:
            uploaded = client.upload_file(path, Purpose.GENERAL)
            print(f"File uploaded: {uploaded.filename} (ID: {uploaded.id})")
        except GigaChatError as e:
            logger.error("Error uploading file: %s", e)

    print("\n6. List files:")
    try:
        files = client.get_files()
        print(f"Found files: {len(files.data)}")
        for f in files.data:
            print(f"  - {f.filename} (ID: {f.id}, size: {f.bytes} bytes)")
    except GigaChatError as e:
        logger.error("Error getting files: %s", e)

    print("\n7. LangChain:")
    try:
        chat_model = ChatGigaChat(client=client, model_name=model)
        print(f"LangChain response: {chat_model.invoke('Hello! How are you?').content}")
        embedder = GigaChatEmbeddings(client=client, model=embeddings_model)
        for i, vec in enumerate(embedder.embed_documents(["Hello, world!", "GigaChat is awesome!"]), start=1):
            print(f"  Embedding {i}: {len(vec)} dimensions")
    except GigaChatError as e:
        logger.error("LangChain error: %s", e)


def main() -> int:
    settings = get_settings()
    if not settings.auth_key:
        print("Set env var GIGACHAT_AUTH_KEY")
        print('Example: export GIGACHAT_AUTH_KEY="<base64 client_id:client_secret>"')
        return 1
    with GigaChatClient() as client:
        run(client, settings.model, settings.embeddings_model)
    return 0


if __name__ == "__main__":
    sys.exit(main())
