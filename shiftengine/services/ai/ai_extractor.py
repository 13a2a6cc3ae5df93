"""
Model-assisted shift request extraction.

extract_with_model calls the LLM and raises ExtractionError on any weakness
in the reply. extract_free prefers the model and falls back to the
rule-based extractor; the two results are never merged.
"""

import logging
from datetime import date
from typing import Optional

from pydantic import ValidationError

from shiftengine.schemas.shift_requests import ExtractionResult, ShiftRequest

from .llm_provider import BaseLLMProvider, LLMProviderError, get_llm_provider
from .prompts import build_system_prompt, build_user_prompt
from .rule_extractor import extract_with_rules


logger = logging.getLogger(__name__)

AI_NOTE_PREFIX = "AI-assisted extraction"


class ExtractionError(Exception):
    """The model path failed; callers may fall back to rule-based extraction."""

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.detail = detail or message


def extract_with_model(
    text: str,
    year: Optional[int] = None,
    provider: Optional[BaseLLMProvider] = None,
    provider_name: str = "gemini",
) -> ExtractionResult:
    """
    Extract requests with an LLM. The reply must contain a JSON object whose
    parsedRequests all validate; there is no partial recovery.
    """
    year = year or date.today().year

    if provider is None:
        try:
            provider = get_llm_provider(provider_name)
        except LLMProviderError as e:
            raise ExtractionError("LLM provider unavailable", str(e)) from e

    llm_response = provider.generate_json(build_system_prompt(year), build_user_prompt(text))

    if not llm_response.success or llm_response.parsed_json is None:
        raise ExtractionError("LLM processing failed", llm_response.error)

    result = llm_response.parsed_json
    raw_requests = result.get("parsedRequests") or []
    if not isinstance(raw_requests, list):
        raise ExtractionError("LLM reply has no parsedRequests list")

    try:
        parsed_requests = [ShiftRequest.model_validate(r) for r in raw_requests]
    except ValidationError as e:
        raise ExtractionError("LLM reply did not match the request schema", str(e)) from e

    notes = result.get("processingNotes")
    processing_notes = f"{AI_NOTE_PREFIX} ({llm_response.model_used})"
    if notes:
        processing_notes = f"{processing_notes}: {notes}"

    return ExtractionResult(
        original_text=text,
        parsed_requests=parsed_requests,
        processing_notes=processing_notes,
    )


def extract_free(
    text: str,
    year: Optional[int] = None,
    provider: Optional[BaseLLMProvider] = None,
    provider_name: str = "gemini",
) -> ExtractionResult:
    """
    Model first, rules otherwise. The model result is used only when it
    yields at least one request.
    """
    year = year or date.today().year

    try:
        result = extract_with_model(text, year, provider, provider_name)
    except ExtractionError as e:
        logger.warning(f"Model extraction failed, using rules: {e} ({e.detail})")
        return extract_with_rules(text, year)

    if not result.parsed_requests:
        logger.warning("Model extraction returned no requests, using rules")
        return extract_with_rules(text, year)

    return result
