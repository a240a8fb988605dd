"""Tests for the client operations against a mocked HTTP transport."""

import httpx
import orjson
import pytest

from aiopenai import (
    APIStatusError,
    APITimeoutError,
    AuthenticationError,
    ChatCompletionsOptionalParameters,
    ChatMessage,
    ChatModel,
    CompletionsModel,
    CompletionsOptionalParameters,
    ConfigurationError,
    EmbeddingModel,
    ImageModel,
    ImageSize,
    InternalServerError,
    OpenAIClient,
    PayloadError,
    RateLimitError,
    Role,
    SpeechResponseFormat,
    TranscriptionModel,
    TranscriptionResponseFormat,
    TransportError,
    TTSModel,
    Voice,
)
from aiopenai.config import settings
from tests.conftest import BASE_URL, sse

CHAT_CHUNK = (
    b'{"id":"c1","object":"chat.completion.chunk","created":1,"model":"gpt-4o",'
    b'"choices":[{"index":0,"delta":{"content":"%s"},"finish_reason":null}]}'
)
MESSAGES = [
    ChatMessage(role=Role.SYSTEM, content="You are a helpful assistant."),
    ChatMessage(role=Role.USER, content="Who won the world series in 2020?"),
]


def _json_response(payload, status_code=200):
    return httpx.Response(status_code, content=orjson.dumps(payload))


class BrokenBody(httpx.AsyncByteStream):
    """Response body that fails after sending part of its bytes."""

    def __init__(self, partial: bytes, error: Exception):
        self.partial = partial
        self.error = error

    async def __aiter__(self):
        yield self.partial
        raise self.error


def test_missing_api_key_raises(monkeypatch):
    monkeypatch.setattr(settings, "api_key", None)
    with pytest.raises(ConfigurationError):
        OpenAIClient()


@pytest.mark.asyncio
async def test_list_models(make_client):
    seen = {}

    def handler(request: httpx.Request):
        seen["request"] = request
        return _json_response({
            "object": "list",
            "data": [
                {"id": "whisper-1", "object": "model", "created": 1, "owned_by": "openai"},
                {"id": "gpt-4o", "object": "model", "created": 2, "owned_by": "openai"},
                {"id": "gpt-3.5-turbo", "object": "model", "created": 3, "owned_by": "openai"},
            ],
        })

    client = make_client(handler)
    models = await client.list_models()

    request = seen["request"]
    assert request.method == "GET"
    assert str(request.url) == f"{BASE_URL}/models"
    assert request.headers["Authorization"] == "Bearer sk-test"
    assert request.headers["OpenAI-Organization"] == "org-test"
    assert [m.id for m in models.data] == ["whisper-1", "gpt-4o", "gpt-3.5-turbo"]
    assert [m.id for m in models.chat_models()] == ["gpt-3.5-turbo", "gpt-4o"]


@pytest.mark.asyncio
async def test_completions(make_client):
    seen = {}

    def handler(request: httpx.Request):
        seen["body"] = orjson.loads(request.content)
        return _json_response({
            "id": "cmpl-1",
            "object": "text_completion",
            "created": 1,
            "model": "gpt-3.5-turbo-instruct",
            "choices": [{"text": " there lived a king.", "index": 0, "finish_reason": "length"}],
            "usage": {"prompt_tokens": 5, "completion_tokens": 5, "total_tokens": 10},
        })

    client = make_client(handler)
    result = await client.completions(
        CompletionsModel.GPT_3_5_TURBO_INSTRUCT,
        CompletionsOptionalParameters(prompt="Once upon a time", max_tokens=50, temperature=0.7),
    )

    body = seen["body"]
    assert body["model"] == "gpt-3.5-turbo-instruct"
    assert body["prompt"] == "Once upon a time"
    assert body["max_tokens"] == 50
    assert body["stream"] is False
    assert "suffix" not in body
    assert result.choices[0].text == " there lived a king."
    assert result.usage.total_tokens == 10


@pytest.mark.asyncio
async def test_create_chat_completions(make_client):
    seen = {}

    def handler(request: httpx.Request):
        seen["url"] = str(request.url)
        seen["body"] = orjson.loads(request.content)
        return _json_response({
            "id": "chatcmpl-1",
            "object": "chat.completion",
            "created": 1,
            "model": "gpt-4o",
            "choices": [{
                "index": 0,
                "message": {"role": "assistant", "content": "The Los Angeles Dodgers."},
                "finish_reason": "stop",
            }],
        })

    client = make_client(handler)
    result = await client.create_chat_completions(
        ChatModel.GPT_4O, MESSAGES, ChatCompletionsOptionalParameters(temperature=0.2, max_tokens=50)
    )

    body = seen["body"]
    assert seen["url"] == f"{BASE_URL}/chat/completions"
    assert body["model"] == "gpt-4o"
    assert body["messages"][1] == {"role": "user", "content": "Who won the world series in 2020?"}
    assert body["temperature"] == 0.2
    assert body["max_tokens"] == 50
    assert body["stream"] is False
    assert result.choices[0].message.content == "The Los Angeles Dodgers."


@pytest.mark.asyncio
async def test_create_chat_completions_requires_messages(make_client):
    client = make_client(lambda request: _json_response({}))
    with pytest.raises(ValueError):
        await client.create_chat_completions(ChatModel.GPT_4O, [])


@pytest.mark.asyncio
async def test_create_chat_completions_stream(make_client):
    seen = {}

    def handler(request: httpx.Request):
        seen["body"] = orjson.loads(request.content)
        return httpx.Response(
            200,
            headers={"content-type": "text/event-stream"},
            content=sse(CHAT_CHUNK % b"The ", CHAT_CHUNK % b"Dodgers"),
        )

    client = make_client(handler)
    stream = await client.create_chat_completions_stream(
        "gpt-4o", [{"role": "user", "content": "Who won?"}]
    )
    chunks = await stream.collect()

    assert seen["body"]["stream"] is True
    assert "".join(chunk.content for chunk in chunks) == "The Dodgers"
    assert stream.closed


@pytest.mark.asyncio
async def test_create_chat_completions_stream_chunked_body(make_client):
    body = sse(CHAT_CHUNK % b"A", CHAT_CHUNK % b"B")

    async def byte_chunks():
        for i in range(0, len(body), 7):
            yield body[i:i + 7]

    def handler(request: httpx.Request):
        return httpx.Response(200, headers={"content-type": "text/event-stream"}, content=byte_chunks())

    client = make_client(handler)
    stream = await client.create_chat_completions_stream(ChatModel.GPT_4O, MESSAGES)
    assert [chunk.content async for chunk in stream] == ["A", "B"]


@pytest.mark.asyncio
async def test_create_chat_completions_stream_rate_limited(make_client):
    def handler(request: httpx.Request):
        return _json_response(
            {"error": {"message": "Rate limit reached", "type": "requests", "code": "rate_limit_exceeded"}},
            status_code=429,
        )

    client = make_client(handler)
    with pytest.raises(RateLimitError) as exc_info:
        await client.create_chat_completions_stream(ChatModel.GPT_4O, MESSAGES)
    assert exc_info.value.status_code == 429
    assert exc_info.value.code == "rate_limit_exceeded"
    assert str(exc_info.value) == "[429] Rate limit reached"


@pytest.mark.asyncio
async def test_create_images(make_client):
    seen = {}

    def handler(request: httpx.Request):
        seen["body"] = orjson.loads(request.content)
        return _json_response({
            "created": 1,
            "data": [{"url": "https://img.test/1.png"}, {"url": "https://img.test/2.png"}],
        })

    client = make_client(handler)
    result = await client.create_images(
        ImageModel.DALL_E_2, "A beautiful sunset over the ocean.", 2, ImageSize.S512
    )

    assert seen["body"] == {
        "model": "dall-e-2",
        "prompt": "A beautiful sunset over the ocean.",
        "n": 2,
        "size": "512x512",
    }
    assert [image.url for image in result.data] == ["https://img.test/1.png", "https://img.test/2.png"]


@pytest.mark.asyncio
async def test_embeddings(make_client):
    seen = {}

    def handler(request: httpx.Request):
        seen["body"] = orjson.loads(request.content)
        return _json_response({
            "object": "list",
            "model": "text-embedding-ada-002",
            "data": [{"object": "embedding", "index": 0, "embedding": [0.1, -0.2, 0.3]}],
            "usage": {"prompt_tokens": 8, "total_tokens": 8},
        })

    client = make_client(handler)
    result = await client.embeddings(EmbeddingModel.TEXT_EMBEDDING_ADA_002, "Embeddings are numbers.")

    assert seen["body"] == {"model": "text-embedding-ada-002", "input": "Embeddings are numbers."}
    assert result.data[0].embedding == [0.1, -0.2, 0.3]


@pytest.mark.asyncio
async def test_moderations(make_client):
    def handler(request: httpx.Request):
        assert orjson.loads(request.content) == {"input": "some text"}
        return _json_response({
            "id": "modr-1",
            "model": "text-moderation-007",
            "results": [{
                "flagged": False,
                "categories": {"hate": False},
                "category_scores": {"hate": 0.0001},
            }],
        })

    client = make_client(handler)
    result = await client.moderations("some text")
    assert result.results[0].flagged is False
    assert result.results[0].category_scores["hate"] == 0.0001


@pytest.mark.asyncio
async def test_create_speech(make_client):
    seen = {}

    def handler(request: httpx.Request):
        seen["body"] = orjson.loads(request.content)
        return httpx.Response(200, headers={"content-type": "audio/mpeg"}, content=b"ID3audio")

    client = make_client(handler)
    audio = await client.create_speech(
        TTSModel.TTS_1, "The quick brown fox.", Voice.NOVA, SpeechResponseFormat.MP3, 1.25
    )

    assert audio == b"ID3audio"
    assert seen["body"] == {
        "model": "tts-1",
        "input": "The quick brown fox.",
        "voice": "nova",
        "response_format": "mp3",
        "speed": 1.25,
    }


@pytest.mark.asyncio
async def test_create_speech_rejects_out_of_range_speed(make_client):
    client = make_client(lambda request: httpx.Response(200, content=b""))
    with pytest.raises(ValueError):
        await client.create_speech(TTSModel.TTS_1, "Hello", speed=5.0)


@pytest.mark.asyncio
async def test_create_transcription_buffered(make_client):
    seen = {}

    def handler(request: httpx.Request):
        seen["body"] = request.read()
        return _json_response({"text": "Hello world."})

    client = make_client(handler)
    stream = await client.create_transcription(
        TranscriptionModel.WHISPER_1,
        b"RIFFfakeaudio",
        "clip.wav",
        language="en",
        prompt="General transcription",
        response_format=TranscriptionResponseFormat.JSON,
        temperature=0.5,
    )
    events = await stream.collect()

    body = seen["body"]
    assert b'name="model"' in body and b"whisper-1" in body
    assert b'name="language"' in body
    assert b'filename="clip.wav"' in body
    assert b"RIFFfakeaudio" in body
    assert b'name="stream"' not in body
    assert len(events) == 1
    assert events[0].text == "Hello world."
    assert events[0].is_done


@pytest.mark.asyncio
async def test_create_transcription_text_format(make_client):
    def handler(request: httpx.Request):
        return httpx.Response(200, headers={"content-type": "text/plain"}, content=b"Hello world.\n")

    client = make_client(handler)
    stream = await client.create_transcription(
        TranscriptionModel.WHISPER_1, b"audio", "clip.mp3",
        response_format=TranscriptionResponseFormat.TEXT,
    )
    events = await stream.collect()
    assert [e.text for e in events] == ["Hello world.\n"]


@pytest.mark.asyncio
async def test_create_transcription_streamed(make_client):
    seen = {}

    def handler(request: httpx.Request):
        seen["body"] = request.read()
        return httpx.Response(
            200,
            headers={"content-type": "text/event-stream; charset=utf-8"},
            content=(
                b'data: {"type":"transcript.text.delta","delta":"Hello"}\n\n'
                b'data: {"type":"transcript.text.delta","delta":" world."}\n\n'
                b'data: {"type":"transcript.text.done","text":"Hello world."}\n\n'
            ),
        )

    client = make_client(handler)
    stream = await client.create_transcription(
        TranscriptionModel.GPT_4O_MINI_TRANSCRIBE, b"audio", "clip.mp3"
    )
    events = await stream.collect()

    assert b'name="stream"' in seen["body"]
    assert [e.delta for e in events[:2]] == ["Hello", " world."]
    assert events[-1].is_done
    assert events[-1].text == "Hello world."


@pytest.mark.asyncio
async def test_create_transcription_body_read_failure_is_wrapped(make_client):
    def handler(request: httpx.Request):
        return httpx.Response(
            200,
            headers={"content-type": "application/json"},
            stream=BrokenBody(b'{"text": "Hel', httpx.ReadError("reset")),
        )

    client = make_client(handler)
    with pytest.raises(TransportError) as exc_info:
        await client.create_transcription(TranscriptionModel.WHISPER_1, b"audio", "clip.mp3")
    assert isinstance(exc_info.value.__cause__, httpx.ReadError)


@pytest.mark.asyncio
async def test_stream_error_body_timeout_is_wrapped(make_client):
    def handler(request: httpx.Request):
        return httpx.Response(
            500, stream=BrokenBody(b'{"error": ', httpx.ReadTimeout("slow"))
        )

    client = make_client(handler)
    with pytest.raises(APITimeoutError):
        await client.create_chat_completions_stream(ChatModel.GPT_4O, MESSAGES)


@pytest.mark.asyncio
async def test_authentication_error(make_client):
    def handler(request: httpx.Request):
        return _json_response(
            {"error": {"message": "Incorrect API key provided", "type": "invalid_request_error"}},
            status_code=401,
        )

    client = make_client(handler)
    with pytest.raises(AuthenticationError) as exc_info:
        await client.list_models()
    assert exc_info.value.message == "Incorrect API key provided"


@pytest.mark.asyncio
async def test_server_error_with_text_body(make_client):
    client = make_client(lambda request: httpx.Response(503, content=b"upstream unavailable"))
    with pytest.raises(InternalServerError) as exc_info:
        await client.moderations("x")
    assert exc_info.value.status_code == 503
    assert exc_info.value.message == "upstream unavailable"


@pytest.mark.asyncio
async def test_unmapped_status(make_client):
    client = make_client(lambda request: _json_response({}, status_code=418))
    with pytest.raises(APIStatusError) as exc_info:
        await client.list_models()
    assert type(exc_info.value) is APIStatusError
    assert exc_info.value.status_code == 418


@pytest.mark.asyncio
async def test_connection_error(make_client):
    def handler(request: httpx.Request):
        raise httpx.ConnectError("connection refused")

    client = make_client(handler)
    with pytest.raises(TransportError):
        await client.list_models()


@pytest.mark.asyncio
async def test_malformed_response_body(make_client):
    client = make_client(lambda request: httpx.Response(200, content=b"<html>oops</html>"))
    with pytest.raises(PayloadError) as exc_info:
        await client.list_models()
    assert exc_info.value.raw == b"<html>oops</html>"


@pytest.mark.asyncio
async def test_injected_request_callable():
    calls = []

    async def fake_moderations(api, api_key, input):
        calls.append((api_key, input))
        return "stubbed"

    client = OpenAIClient(api_key="sk-fake", moderations_request=fake_moderations)
    assert await client.moderations("hello") == "stubbed"
    assert calls == [("sk-fake", "hello")]
    await client.close()


@pytest.mark.asyncio
async def test_injected_transcription_callable_receives_model_first():
    calls = []

    async def fake_transcription(api, api_key, model, file, file_name, *rest):
        calls.append((model, file, file_name))
        return "stubbed"

    client = OpenAIClient(api_key="sk-fake", create_transcription_request=fake_transcription)
    assert await client.create_transcription(TranscriptionModel.WHISPER_1, b"audio", "clip.mp3") == "stubbed"
    assert calls == [(TranscriptionModel.WHISPER_1, b"audio", "clip.mp3")]
    await client.close()
