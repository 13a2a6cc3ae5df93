"""
LLM provider abstraction layer.
Supports Gemini (free tier) and OpenAI over their REST APIs.
"""

import json
import logging
import httpx
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from shiftengine.core.config import settings


logger = logging.getLogger(__name__)


class LLMProviderError(Exception):
    """Provider could not be constructed (missing key, unknown name)."""
    pass


@dataclass
class LLMResponse:
    """Standardised response from any LLM provider."""
    raw_text: str
    parsed_json: Optional[dict]
    model_used: str
    success: bool
    error: Optional[str] = None


def extract_json_object(text: str) -> Optional[dict]:
    """
    Return the first top-level JSON object in text, found by brace
    matching. Braces inside string literals are ignored. None if the
    first object is unbalanced or does not decode.
    """
    start = text.find("{") if text else -1
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                try:
                    parsed = json.loads(text[start:i + 1])
                except json.JSONDecodeError:
                    return None
                return parsed if isinstance(parsed, dict) else None
    return None


class BaseLLMProvider(ABC):
    """Abstract base for LLM providers."""

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout if timeout is not None else settings.LLM_TIMEOUT_SECONDS

    @abstractmethod
    def generate_json(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        """Send prompt and expect a JSON object somewhere in the reply."""
        ...

    @abstractmethod
    def provider_name(self) -> str:
        ...

    def _failure(self, error: str, raw_text: str = "") -> LLMResponse:
        return LLMResponse(
            raw_text=raw_text,
            parsed_json=None,
            model_used=self.provider_name(),
            success=False,
            error=error,
        )

    def _from_reply(self, raw: str) -> LLMResponse:
        if not raw:
            return self._failure("Empty reply from model")

        parsed = extract_json_object(raw)
        if parsed is None:
            logger.error(f"{self.provider_name()} reply contained no JSON object")
            return self._failure("No valid JSON object in model reply", raw_text=raw)

        return LLMResponse(
            raw_text=raw,
            parsed_json=parsed,
            model_used=self.provider_name(),
            success=True,
        )


class GeminiProvider(BaseLLMProvider):
    """Google Gemini provider using REST API (no SDK)."""

    BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"

    def __init__(
        self,
        model_name: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        super().__init__(timeout)
        self.model_name = model_name or settings.GEMINI_MODEL
        self.api_key = api_key or settings.GEMINI_API_KEY
        if not self.api_key:
            raise LLMProviderError("GEMINI_API_KEY not set")

    def provider_name(self) -> str:
        return f"gemini/{self.model_name}"

    def generate_json(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        url = f"{self.BASE_URL}/{self.model_name}:generateContent"

        payload = {
            "contents": [
                {
                    "parts": [{"text": f"{system_prompt}\n\n---\n\n{user_prompt}"}]
                }
            ],
            "generationConfig": {
                "responseMimeType": "application/json",
                "temperature": 0.1,
                "maxOutputTokens": 1000,
            },
        }

        try:
            response = httpx.post(
                url,
                params={"key": self.api_key},
                json=payload,
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
            raw = data["candidates"][0]["content"]["parts"][0]["text"]
        except httpx.HTTPStatusError as e:
            logger.error(f"Gemini API HTTP error: {e.response.status_code}")
            return self._failure(f"Gemini API error: {e.response.status_code}")
        except httpx.HTTPError as e:
            logger.error(f"Gemini API transport error: {e}")
            return self._failure(f"Gemini API unreachable: {e}")
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.error(f"Gemini API returned an unexpected body: {e}")
            return self._failure("Empty reply from Gemini")

        return self._from_reply(raw)


class OpenAIProvider(BaseLLMProvider):
    """OpenAI chat completions provider using REST API."""

    BASE_URL = "https://api.openai.com/v1/chat/completions"

    def __init__(
        self,
        model_name: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        super().__init__(timeout)
        self.model_name = model_name or settings.OPENAI_MODEL
        self.api_key = api_key or settings.OPENAI_API_KEY
        if not self.api_key:
            raise LLMProviderError("OPENAI_API_KEY not set")

    def provider_name(self) -> str:
        return f"openai/{self.model_name}"

    def generate_json(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        payload = {
            "model": self.model_name,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "response_format": {"type": "json_object"},
            "temperature": 0.1,
        }

        try:
            response = httpx.post(
                self.BASE_URL,
                headers={"Authorization": f"Bearer {self.api_key}"},
                json=payload,
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
            raw = data["choices"][0]["message"]["content"]
        except httpx.HTTPStatusError as e:
            logger.error(f"OpenAI API HTTP error: {e.response.status_code}")
            return self._failure(f"OpenAI API error: {e.response.status_code}")
        except httpx.HTTPError as e:
            logger.error(f"OpenAI API transport error: {e}")
            return self._failure(f"OpenAI API unreachable: {e}")
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.error(f"OpenAI API returned an unexpected body: {e}")
            return self._failure("Empty reply from OpenAI")

        return self._from_reply(raw)


PROVIDERS = {
    "gemini": GeminiProvider,
    "openai": OpenAIProvider,
}


def get_llm_provider(provider_name: str) -> BaseLLMProvider:
    """Factory for a provider by name ("gemini" or "openai")."""
    provider_cls = PROVIDERS.get(provider_name)
    if provider_cls is None:
        raise LLMProviderError(f"Unknown LLM provider: {provider_name}")
    return provider_cls()
