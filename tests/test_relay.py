"""
Unit tests for CompletionRelay with a mocked chat-completions API.
"""

import asyncio
import json
import os
import sys

import httpx
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from medical_chat.config import LLMConfig
from medical_chat.errors import (
    AuthError,
    EmptyResponseError,
    RateLimitError,
    UnknownRelayError,
)
from medical_chat.intelligence.relay import CompletionRelay
from medical_chat.intelligence.result import RelayErrorKind, RelayResult
from medical_chat.prompts.templates import MEDICAL_SYSTEM_PROMPT


def run(coro):
    """Helper to run a coroutine synchronously."""
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def completion(content="Try resting.", usage=None):
    return {
        "choices": [{"index": 0, "message": {"role": "assistant", "content": content}}],
        "usage": usage or {"prompt_tokens": 12, "completion_tokens": 3, "total_tokens": 15},
    }


class RecordingHandler:
    """MockTransport handler returning a preset response and keeping requests."""

    def __init__(self, status=200, body=None, exc=None):
        self.status = status
        self.body = completion() if body is None else body
        self.exc = exc
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc(request)
        return httpx.Response(self.status, json=self.body)

    @property
    def payload(self):
        return json.loads(self.requests[-1].content)


def complete(handler, user_text="I have a headache", window=None, api_key="sk-test"):
    async def _test():
        relay = CompletionRelay(
            LLMConfig(api_key=api_key), transport=httpx.MockTransport(handler)
        )
        await relay.initialize()
        try:
            return await relay.complete(user_text, window or [])
        finally:
            await relay.close()

    return run(_test())


class TestCompletionRelay:
    """Tests for request construction and result classification."""

    def test_success_returns_text_and_usage(self):
        handler = RecordingHandler()
        result = complete(handler)
        assert result.ok
        assert result.text == "Try resting."
        assert result.usage["total_tokens"] == 15

    def test_request_shape(self):
        """System prompt first, history in order, new user turn last."""
        handler = RecordingHandler()
        window = [
            {"role": "assistant", "content": "Welcome"},
            {"role": "user", "content": "Earlier question"},
            {"role": "assistant", "content": "Earlier answer"},
        ]
        complete(handler, "I have a headache", window)

        request = handler.requests[0]
        assert request.method == "POST"
        assert request.url.path.endswith("/chat/completions")
        assert request.headers["authorization"] == "Bearer sk-test"

        payload = handler.payload
        assert payload["messages"][0] == {"role": "system", "content": MEDICAL_SYSTEM_PROMPT}
        assert payload["messages"][1:4] == window
        assert payload["messages"][-1] == {"role": "user", "content": "I have a headache"}
        assert len(payload["messages"]) == 5

    def test_fixed_decoding_parameters(self):
        handler = RecordingHandler()
        complete(handler)
        payload = handler.payload
        assert payload["model"] == "gpt-4o"
        assert payload["max_tokens"] == 1000
        assert payload["temperature"] == 0.7
        assert payload["presence_penalty"] == 0.1
        assert payload["frequency_penalty"] == 0.1

    def test_single_attempt_on_failure(self):
        """The relay never retries."""
        handler = RecordingHandler(status=500, body={"error": {"message": "boom"}})
        complete(handler)
        assert len(handler.requests) == 1

    def test_empty_content(self):
        handler = RecordingHandler(body=completion(content=""))
        result = complete(handler)
        assert result.error == RelayErrorKind.EMPTY_RESPONSE

    def test_no_choices(self):
        handler = RecordingHandler(body={"choices": []})
        result = complete(handler)
        assert result.error == RelayErrorKind.UNKNOWN

    def test_unauthorized(self):
        handler = RecordingHandler(
            status=401,
            body={"error": {"message": "Incorrect API key provided", "code": "invalid_api_key"}},
        )
        result = complete(handler)
        assert result.error == RelayErrorKind.UNAUTHORIZED

    def test_rate_limited(self):
        handler = RecordingHandler(status=429, body={"error": {"message": "Rate limit reached"}})
        result = complete(handler)
        assert result.error == RelayErrorKind.RATE_LIMITED

    def test_quota_message_is_rate_limited(self):
        handler = RecordingHandler(
            status=400,
            body={"error": {"message": "You exceeded your current quota", "code": "insufficient_quota"}},
        )
        result = complete(handler)
        assert result.error == RelayErrorKind.RATE_LIMITED

    def test_server_error_is_unknown(self):
        handler = RecordingHandler(status=503, body={"error": {"message": "overloaded"}})
        result = complete(handler)
        assert result.error == RelayErrorKind.UNKNOWN
        assert "503" in result.detail

    def test_transport_error_is_unknown(self):
        handler = RecordingHandler(
            exc=lambda request: httpx.ConnectError("connection refused", request=request)
        )
        result = complete(handler)
        assert result.error == RelayErrorKind.UNKNOWN
        assert "ConnectError" in result.detail

    def test_complete_requires_initialize(self):
        relay = CompletionRelay(LLMConfig(api_key="sk-test"))
        with pytest.raises(RuntimeError):
            run(relay.complete("hi", []))


class TestRelayResult:
    """Tests for the tagged result type."""

    def test_success_has_no_error(self):
        result = RelayResult.success("hi")
        assert result.ok
        with pytest.raises(ValueError):
            result.to_error()

    @pytest.mark.parametrize("kind, error_type, status", [
        (RelayErrorKind.UNAUTHORIZED, AuthError, 401),
        (RelayErrorKind.RATE_LIMITED, RateLimitError, 429),
        (RelayErrorKind.EMPTY_RESPONSE, EmptyResponseError, 500),
        (RelayErrorKind.UNKNOWN, UnknownRelayError, 500),
    ])
    def test_failure_maps_to_error(self, kind, error_type, status):
        error = RelayResult.failure(kind, "detail").to_error()
        assert isinstance(error, error_type)
        assert error.status_code == status
        assert error.detail == "detail"
