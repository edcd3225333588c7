import asyncio
import json
import time

import httpx
import pytest

from app.modules.flashcards.errors import ErrorKind, OpenRouterError, kind_for_status
from app.modules.flashcards.generator import build_generation_request
from app.modules.flashcards.main import FlashcardsGenerator
from tests.fixtures.mock_openrouter import TWO_CARDS, ScriptedTransport, cards_completion


def _send(settings, transport):
    generator = FlashcardsGenerator(settings, http_client=transport.client())
    request = build_generation_request("text", settings.model)
    return asyncio.run(generator._send(request))


@pytest.mark.unit
@pytest.mark.parametrize(
    "status,kind",
    [
        (400, ErrorKind.VALIDATION),
        (401, ErrorKind.AUTHENTICATION),
        (429, ErrorKind.RATE_LIMIT),
        (500, ErrorKind.MODEL),
        (403, ErrorKind.UNKNOWN),
        (503, ErrorKind.UNKNOWN),
    ],
)
def test_kind_for_status(status, kind):
    assert kind_for_status(status) is kind


@pytest.mark.unit
def test_send_posts_to_chat_completions_with_bearer(openrouter_settings):
    transport = ScriptedTransport([(200, cards_completion(TWO_CARDS))])

    response = _send(openrouter_settings, transport)

    assert transport.calls == 1
    sent = transport.requests[0]
    assert sent.method == "POST"
    assert str(sent.url) == "https://openrouter.test/api/v1/chat/completions"
    assert sent.headers["authorization"] == "Bearer sk-test"
    assert sent.headers["content-type"] == "application/json"
    body = json.loads(sent.content)
    assert body["model"] == "test/model"
    assert len(body["messages"]) == 2
    assert response.id == "gen-test-1"
    assert response.usage.total_tokens == 160


@pytest.mark.unit
def test_non_success_status_carries_kind_and_body(openrouter_settings):
    transport = ScriptedTransport([(401, {"error": {"message": "No auth credentials found"}})])

    with pytest.raises(OpenRouterError) as exc:
        _send(openrouter_settings, transport)

    assert exc.value.kind is ErrorKind.AUTHENTICATION
    assert "401" in exc.value.message
    assert "No auth credentials found" in exc.value.message


@pytest.mark.unit
def test_timeout_maps_to_timeout_kind(openrouter_settings):
    transport = ScriptedTransport([httpx.ReadTimeout("timed out")])

    with pytest.raises(OpenRouterError) as exc:
        _send(openrouter_settings, transport)

    assert exc.value.kind is ErrorKind.TIMEOUT
    assert not exc.value.retryable


def _trickling_body(request):
    async def chunks():
        for _ in range(40):
            yield b" "
            await asyncio.sleep(0.05)

    return httpx.Response(200, content=chunks())


async def _stalled(request):
    await asyncio.sleep(5)
    return httpx.Response(200, json=cards_completion(TWO_CARDS))


@pytest.mark.unit
@pytest.mark.parametrize("step", [_trickling_body, _stalled])
def test_overall_deadline_aborts_slow_response(openrouter_settings, fake_sleep, step):
    config = openrouter_settings.model_copy(update={"timeout_ms": 200})
    transport = ScriptedTransport([step])
    generator = FlashcardsGenerator(
        config, http_client=transport.client(), sleep=fake_sleep
    )

    started = time.monotonic()
    with pytest.raises(OpenRouterError) as exc:
        asyncio.run(generator.generate_flashcards("text"))
    elapsed = time.monotonic() - started

    assert exc.value.kind is ErrorKind.TIMEOUT
    assert transport.calls == 1
    assert elapsed < 1.5


@pytest.mark.unit
def test_connection_failure_maps_to_network_kind(openrouter_settings):
    transport = ScriptedTransport([httpx.ConnectError("name resolution failed")])

    with pytest.raises(OpenRouterError) as exc:
        _send(openrouter_settings, transport)

    assert exc.value.kind is ErrorKind.NETWORK
    assert exc.value.retryable
    assert isinstance(exc.value.original_error, httpx.ConnectError)


@pytest.mark.unit
def test_undecodable_body_maps_to_network_kind(openrouter_settings):
    transport = ScriptedTransport([(200, "<html>gateway</html>")])

    with pytest.raises(OpenRouterError) as exc:
        _send(openrouter_settings, transport)

    assert exc.value.kind is ErrorKind.NETWORK


@pytest.mark.unit
def test_missing_api_key_is_rejected(openrouter_settings):
    config = openrouter_settings.model_copy(update={"api_key": None})
    with pytest.raises(RuntimeError):
        FlashcardsGenerator(config)
