import json

import httpx
import pytest
from unittest.mock import MagicMock, patch

from shiftengine.services.ai.llm_provider import (
    GeminiProvider,
    LLMProviderError,
    OpenAIProvider,
    extract_json_object,
    get_llm_provider,
)


def _http_response(status_code: int, body: dict) -> httpx.Response:
    request = httpx.Request("POST", "https://example.test")
    return httpx.Response(status_code, json=body, request=request)


def _gemini_body(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def _openai_body(text: str) -> dict:
    return {"choices": [{"message": {"content": text}}]}


class TestExtractJsonObject:
    def test_plain_object(self):
        assert extract_json_object('{"a": 1}') == {"a": 1}

    def test_surrounded_by_prose(self):
        text = 'Here you go:\n```json\n{"a": {"b": [1, 2]}}\n```\nDone.'
        assert extract_json_object(text) == {"a": {"b": [1, 2]}}

    def test_first_of_two_objects(self):
        assert extract_json_object('{"a": 1} and {"b": 2}') == {"a": 1}

    def test_braces_inside_strings(self):
        assert extract_json_object('{"note": "use {curly} \\" braces}"}') == {"note": 'use {curly} " braces}'}

    def test_no_object(self):
        assert extract_json_object("no json here") is None

    def test_empty(self):
        assert extract_json_object("") is None

    def test_unbalanced(self):
        assert extract_json_object('{"a": {"b": 1}') is None

    def test_invalid_json(self):
        assert extract_json_object("{a: 1}") is None


class TestGeminiProvider:
    @patch("shiftengine.services.ai.llm_provider.settings")
    def test_requires_key(self, mock_settings):
        mock_settings.GEMINI_API_KEY = None
        mock_settings.GEMINI_MODEL = "gemini-test"
        mock_settings.LLM_TIMEOUT_SECONDS = 5.0
        with pytest.raises(LLMProviderError):
            GeminiProvider()

    @patch("shiftengine.services.ai.llm_provider.httpx.post")
    def test_success(self, mock_post):
        mock_post.return_value = _http_response(200, _gemini_body('{"parsedRequests": []}'))
        provider = GeminiProvider(model_name="gemini-test", api_key="k", timeout=5.0)

        response = provider.generate_json("system", "user")

        assert response.success is True
        assert response.parsed_json == {"parsedRequests": []}
        assert response.model_used == "gemini/gemini-test"
        _, kwargs = mock_post.call_args
        assert kwargs["params"] == {"key": "k"}
        assert kwargs["timeout"] == 5.0
        assert "system" in kwargs["json"]["contents"][0]["parts"][0]["text"]

    @patch("shiftengine.services.ai.llm_provider.httpx.post")
    def test_http_error(self, mock_post):
        mock_post.return_value = _http_response(503, {"error": "unavailable"})
        provider = GeminiProvider(model_name="gemini-test", api_key="k")

        response = provider.generate_json("system", "user")

        assert response.success is False
        assert "503" in response.error

    @patch("shiftengine.services.ai.llm_provider.httpx.post")
    def test_transport_error(self, mock_post):
        mock_post.side_effect = httpx.ConnectError("connection refused")
        provider = GeminiProvider(model_name="gemini-test", api_key="k")

        response = provider.generate_json("system", "user")

        assert response.success is False
        assert response.parsed_json is None

    @patch("shiftengine.services.ai.llm_provider.httpx.post")
    def test_empty_candidates(self, mock_post):
        mock_post.return_value = _http_response(200, {"candidates": []})
        provider = GeminiProvider(model_name="gemini-test", api_key="k")

        response = provider.generate_json("system", "user")

        assert response.success is False

    @patch("shiftengine.services.ai.llm_provider.httpx.post")
    def test_reply_without_json(self, mock_post):
        mock_post.return_value = _http_response(200, _gemini_body("Sorry, I cannot help."))
        provider = GeminiProvider(model_name="gemini-test", api_key="k")

        response = provider.generate_json("system", "user")

        assert response.success is False
        assert response.raw_text == "Sorry, I cannot help."


class TestOpenAIProvider:
    @patch("shiftengine.services.ai.llm_provider.httpx.post")
    def test_success(self, mock_post):
        reply = json.dumps({"parsedRequests": [{"date": "2025-08-01", "type": "off"}]})
        mock_post.return_value = _http_response(200, _openai_body(reply))
        provider = OpenAIProvider(model_name="gpt-test", api_key="sk-test")

        response = provider.generate_json("system", "user")

        assert response.success is True
        assert response.model_used == "openai/gpt-test"
        _, kwargs = mock_post.call_args
        assert kwargs["headers"]["Authorization"] == "Bearer sk-test"
        assert kwargs["json"]["messages"][0] == {"role": "system", "content": "system"}
        assert kwargs["json"]["response_format"] == {"type": "json_object"}

    @patch("shiftengine.services.ai.llm_provider.httpx.post")
    def test_http_error(self, mock_post):
        mock_post.return_value = _http_response(401, {"error": "bad key"})
        provider = OpenAIProvider(model_name="gpt-test", api_key="sk-test")

        response = provider.generate_json("system", "user")

        assert response.success is False
        assert "401" in response.error


class TestGetLLMProvider:
    def test_unknown_provider(self):
        with pytest.raises(LLMProviderError):
            get_llm_provider("claude")

    @patch.dict("shiftengine.services.ai.llm_provider.PROVIDERS", {"gemini": MagicMock()})
    def test_known_provider(self):
        provider = get_llm_provider("gemini")
        assert provider is not None
