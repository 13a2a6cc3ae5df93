from .rule_extractor import extract_with_rules
from .ai_extractor import extract_with_model, extract_free, ExtractionError
from .batch import ShiftRequestExtractor, BatchOutcome
from .llm_provider import get_llm_provider, LLMProviderError

__all__ = [
    "extract_with_rules",
    "extract_with_model",
    "extract_free",
    "ExtractionError",
    "ShiftRequestExtractor",
    "BatchOutcome",
    "get_llm_provider",
    "LLMProviderError",
]
