"""Wire-level tests for the OpenAI completion client using httpx.MockTransport."""
import json

import httpx
import pytest
from openai import AsyncOpenAI

from task_agent.common.errors import (
    RateLimitExhaustedError,
    ResponseFormatError,
    TransportError,
    UnexpectedStatusError,
)
from task_agent.common.services.llm_service.llm_client import (
    AsyncOpenAICompletionClient,
    CompletionStyle,
    completion_style_for,
)


def chat_response(content: str) -> httpx.Response:
    return httpx.Response(
        200,
        json={
            "id": "chatcmpl-1",
            "object": "chat.completion",
            "created": 0,
            "model": "gpt-3.5-turbo",
            "choices": [
                {"index": 0, "finish_reason": "stop", "message": {"role": "assistant", "content": content}}
            ],
        },
    )


def legacy_response(text: str) -> httpx.Response:
    return httpx.Response(
        200,
        json={
            "id": "cmpl-1",
            "object": "text_completion",
            "created": 0,
            "model": "text-davinci-003",
            "choices": [{"index": 0, "finish_reason": "stop", "text": text, "logprobs": None}],
        },
    )


def embedding_response(data: list) -> httpx.Response:
    return httpx.Response(
        200,
        json={
            "object": "list",
            "data": data,
            "model": "text-embedding-ada-002",
            "usage": {"prompt_tokens": 2, "total_tokens": 2},
        },
    )


def rate_limited() -> httpx.Response:
    return httpx.Response(429, json={"error": {"message": "Rate limit reached", "type": "requests"}})


class RecordingSleep:
    def __init__(self):
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


def make_client(responses, model_name="gpt-3.5-turbo", **kwargs):
    """Client whose transport replays `responses` (Responses or exceptions) and records requests."""
    requests: list[httpx.Request] = []
    queue = list(responses)

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        item = queue.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    sdk = AsyncOpenAI(
        api_key="sk-test",
        max_retries=0,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )
    sleep = RecordingSleep()
    client = AsyncOpenAICompletionClient(model_name=model_name, client=sdk, sleep=sleep, **kwargs)
    return client, requests, sleep


def test_completion_style_from_model_name():
    assert completion_style_for("gpt-4") is CompletionStyle.CHAT
    assert completion_style_for("gpt-3.5-turbo") is CompletionStyle.CHAT
    assert completion_style_for("text-davinci-003") is CompletionStyle.LEGACY


@pytest.mark.asyncio
async def test_rate_limited_twice_then_success_makes_three_requests():
    client, requests, sleep = make_client([rate_limited(), rate_limited(), chat_response("done")])

    result = await client.complete("do the thing")

    assert result == "done"
    assert len(requests) == 3
    assert sleep.calls == [10.0, 10.0]


@pytest.mark.asyncio
async def test_chat_request_shape():
    client, requests, _ = make_client([chat_response("ok")])

    await client.complete("hello")

    request = requests[0]
    assert request.method == "POST"
    assert request.url.path == "/v1/chat/completions"
    assert request.headers["Authorization"] == "Bearer sk-test"
    body = json.loads(request.content)
    assert body["model"] == "gpt-3.5-turbo"
    assert body["messages"] == [{"role": "user", "content": "hello"}]
    assert body["temperature"] == 0.5
    assert body["max_tokens"] == 100
    assert body["n"] == 1


@pytest.mark.asyncio
async def test_legacy_completion_request_shape():
    client, requests, _ = make_client([legacy_response(" a result")], model_name="text-davinci-003")

    result = await client.complete("hello")

    assert result == " a result"
    assert requests[0].url.path == "/v1/completions"
    body = json.loads(requests[0].content)
    assert body["prompt"] == "hello"
    assert body["temperature"] == 0.7
    assert body["max_tokens"] == 2000


@pytest.mark.asyncio
async def test_embed_replaces_newlines_and_returns_first_vector():
    client, requests, _ = make_client(
        [embedding_response([{"object": "embedding", "index": 0, "embedding": [0.25, -0.5, 1.0]}])]
    )

    vector = await client.embed("line one\nline two")

    assert vector == [0.25, -0.5, 1.0]
    assert requests[0].url.path == "/v1/embeddings"
    body = json.loads(requests[0].content)
    assert body["input"] == "line one line two"
    assert body["model"] == "text-embedding-ada-002"


@pytest.mark.asyncio
async def test_embed_is_retried_on_rate_limit():
    client, requests, sleep = make_client(
        [rate_limited(), embedding_response([{"object": "embedding", "index": 0, "embedding": [1.0]}])]
    )

    assert await client.embed("x") == [1.0]
    assert len(requests) == 2
    assert sleep.calls == [10.0]


@pytest.mark.asyncio
async def test_embed_without_data_is_a_format_error():
    client, _, _ = make_client([embedding_response([])])

    with pytest.raises(ResponseFormatError):
        await client.embed("x")


@pytest.mark.asyncio
async def test_server_error_is_not_retried():
    client, requests, sleep = make_client([httpx.Response(500, json={"error": {"message": "boom"}})])

    with pytest.raises(UnexpectedStatusError) as exc_info:
        await client.complete("hello")

    assert exc_info.value.status_code == 500
    assert exc_info.value.service == "openai"
    assert len(requests) == 1
    assert sleep.calls == []


@pytest.mark.asyncio
async def test_connection_failure_is_a_transport_error():
    client, _, _ = make_client([httpx.ConnectError("connection refused")])

    with pytest.raises(TransportError):
        await client.complete("hello")


@pytest.mark.asyncio
async def test_bounded_rate_limit_budget_raises_after_last_attempt():
    client, requests, sleep = make_client(
        [rate_limited(), rate_limited()],
        rate_limit_max_attempts=2,
        rate_limit_wait=3.0,
    )

    with pytest.raises(RateLimitExhaustedError) as exc_info:
        await client.complete("hello")

    assert exc_info.value.attempts == 2
    assert len(requests) == 2
    assert sleep.calls == [3.0]
