"""
Tests for the credential pool and the Gemini HTTP client.
"""

import json
import threading
from collections import Counter

import httpx
import pytest

from generation.credentials import CredentialRotator
from generation.exceptions import ConfigurationError, CredentialsExhaustedError
from generation.gemini_client import GeminiClient

API_URL = "https://generativelanguage.googleapis.com/v1beta/models/gemini-pro:generateContent"


def success_body(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def make_client(handler, keys=("k1", "k2", "k3")):
    rotator = CredentialRotator(keys)
    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    return GeminiClient(rotator, api_url=API_URL, http_client=http_client)


# ============================================================
# CredentialRotator
# ============================================================

class TestCredentialRotator:
    def test_round_robin_order(self):
        rotator = CredentialRotator(["a", "b", "c"])
        assert [rotator.next_key() for _ in range(7)] == ["a", "b", "c", "a", "b", "c", "a"]

    def test_blank_keys_are_dropped_and_whitespace_stripped(self):
        rotator = CredentialRotator([" a ", "", "   ", "b"])
        assert len(rotator) == 2
        assert [rotator.next_key() for _ in range(2)] == ["a", "b"]

    def test_empty_pool_is_a_configuration_error(self):
        with pytest.raises(ConfigurationError):
            CredentialRotator([])
        with pytest.raises(ConfigurationError):
            CredentialRotator(["", "  "])

    def test_concurrent_callers_each_get_a_distinct_turn(self):
        rotator = CredentialRotator(["a", "b", "c", "d"])
        seen = []
        lock = threading.Lock()

        def worker():
            for _ in range(100):
                key = rotator.next_key()
                with lock:
                    seen.append(key)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert Counter(seen) == {"a": 200, "b": 200, "c": 200, "d": 200}


# ============================================================
# GeminiClient
# ============================================================

class TestGeminiClient:
    def test_sends_prompt_and_generation_config(self):
        captured = {}

        def handler(request):
            captured["key"] = request.url.params["key"]
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json=success_body("hello"))

        client = make_client(handler)
        assert client.generate_text("Write a question") == "hello"
        assert captured["key"] == "k1"

        body = captured["body"]
        assert body["contents"] == [{"parts": [{"text": "Write a question"}]}]
        assert body["generationConfig"] == {
            "temperature": 0.9,
            "topK": 40,
            "topP": 0.95,
            "maxOutputTokens": 2048,
        }

    def test_rotates_key_even_on_success(self):
        keys = []

        def handler(request):
            keys.append(request.url.params["key"])
            return httpx.Response(200, json=success_body("ok"))

        client = make_client(handler)
        for _ in range(4):
            client.generate_text("prompt")
        assert keys == ["k1", "k2", "k3", "k1"]

    def test_failed_key_moves_to_next_key(self):
        keys = []

        def handler(request):
            keys.append(request.url.params["key"])
            if request.url.params["key"] == "k1":
                return httpx.Response(429, text="quota exceeded")
            return httpx.Response(200, json=success_body("second key worked"))

        client = make_client(handler)
        assert client.generate_text("prompt") == "second key worked"
        assert keys == ["k1", "k2"]

    def test_gives_up_after_every_key_fails_once(self):
        calls = []

        def handler(request):
            calls.append(request.url.params["key"])
            return httpx.Response(500, text="internal error")

        client = make_client(handler)
        with pytest.raises(CredentialsExhaustedError):
            client.generate_text("prompt")
        assert calls == ["k1", "k2", "k3"]

    def test_transport_errors_count_as_failed_attempts(self):
        calls = []

        def handler(request):
            calls.append(request.url.params["key"])
            if len(calls) < 3:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(200, json=success_body("third time lucky"))

        client = make_client(handler)
        assert client.generate_text("prompt") == "third time lucky"
        assert len(calls) == 3

    def test_success_without_candidates_is_a_failed_attempt(self):
        responses = iter([
            httpx.Response(200, json={"promptFeedback": {"blockReason": "SAFETY"}}),
            httpx.Response(200, text="not json"),
            httpx.Response(200, json=success_body("finally")),
        ])

        client = make_client(lambda request: next(responses))
        assert client.generate_text("prompt") == "finally"

    def test_rotation_continues_after_exhaustion(self):
        keys = []

        def handler(request):
            keys.append(request.url.params["key"])
            return httpx.Response(503)

        client = make_client(handler, keys=("k1", "k2"))
        with pytest.raises(CredentialsExhaustedError):
            client.generate_text("prompt")
        with pytest.raises(CredentialsExhaustedError):
            client.generate_text("prompt")
        assert keys == ["k1", "k2", "k1", "k2"]

    def test_clients_sharing_a_rotator_share_its_position(self):
        rotator = CredentialRotator(["k1", "k2", "k3"])
        keys = []

        def handler(request):
            keys.append(request.url.params["key"])
            return httpx.Response(200, json=success_body("ok"))

        transport = httpx.MockTransport(handler)
        first = GeminiClient(rotator, api_url=API_URL, http_client=httpx.Client(transport=transport))
        second = GeminiClient(rotator, api_url=API_URL, http_client=httpx.Client(transport=transport))

        first.generate_text("a")
        second.generate_text("b")
        first.generate_text("c")
        assert keys == ["k1", "k2", "k3"]
