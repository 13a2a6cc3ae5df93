import json

import pytest
from unittest.mock import MagicMock
from fastapi.testclient import TestClient

from shiftengine.main import app
from shiftengine.services.ai.llm_provider import BaseLLMProvider, LLMResponse


TEST_YEAR = 2025


def _llm_response(result_json: dict) -> LLMResponse:
    return LLMResponse(
        raw_text=json.dumps(result_json, ensure_ascii=False),
        parsed_json=result_json,
        model_used="test/mock",
        success=True,
    )


def _failed_llm_response(error: str = "Mock LLM failure") -> LLMResponse:
    return LLMResponse(
        raw_text="",
        parsed_json=None,
        model_used="test/mock",
        success=False,
        error=error,
    )


@pytest.fixture
def llm_response():
    """Factory for a successful mocked LLM response."""
    return _llm_response


@pytest.fixture
def failed_llm_response():
    return _failed_llm_response


@pytest.fixture
def mock_provider() -> MagicMock:
    provider = MagicMock(spec=BaseLLMProvider)
    provider.provider_name.return_value = "test/mock"
    return provider


@pytest.fixture
def ai_reply() -> dict:
    # what a well-behaved model returns for "8/1 13時-17時"
    return {
        "parsedRequests": [
            {
                "date": "2025-08-01",
                "timeSlots": [{"startTime": "13:00", "endTime": "17:00"}],
                "type": "work",
                "priority": "medium",
                "notes": "",
                "confidence": 0.9,
            }
        ],
        "processingNotes": "1 request found",
    }


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
