"""
Batch orchestration for shift request extraction.
Dispatches text to the configured engine once (single) or per line (bulk).
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Union

from shiftengine.core.config import ExtractionEngine
from shiftengine.schemas.shift_requests import ExtractionResult, LineError, ParseMode

from .ai_extractor import ExtractionError, extract_free, extract_with_model
from .llm_provider import BaseLLMProvider
from .rule_extractor import extract_with_rules


logger = logging.getLogger(__name__)


@dataclass
class BatchOutcome:
    data: Union[ExtractionResult, List[ExtractionResult]]
    errors: List[LineError] = field(default_factory=list)

    @property
    def all_failed(self) -> bool:
        return isinstance(self.data, list) and not self.data and bool(self.errors)


class ShiftRequestExtractor:
    """
    Runs one engine with one fallback policy.

    RULES never calls a model. For GEMINI / OPENAI, fallback=True means any
    model weakness yields the rule-based result; fallback=False lets
    ExtractionError reach the caller.
    """

    def __init__(
        self,
        engine: ExtractionEngine = ExtractionEngine.RULES,
        fallback: bool = True,
        provider: Optional[BaseLLMProvider] = None,
    ):
        self.engine = engine
        self.fallback = fallback
        self.provider = provider

    def extract(self, text: str, year: Optional[int] = None) -> ExtractionResult:
        if self.engine == ExtractionEngine.RULES:
            return extract_with_rules(text, year)
        if self.fallback:
            return extract_free(text, year, self.provider, self.engine.value)
        return extract_with_model(text, year, self.provider, self.engine.value)

    def run(
        self,
        text: str,
        mode: ParseMode = ParseMode.SINGLE,
        year: Optional[int] = None,
    ) -> BatchOutcome:
        """
        Single mode raises ExtractionError. Bulk mode processes non-blank
        lines sequentially, in order, and records a failing line instead of
        aborting the batch.
        """
        logger.info(f"Extracting shift requests: engine={self.engine.value} mode={mode.value}")

        if mode == ParseMode.SINGLE:
            return BatchOutcome(data=self.extract(text, year))

        results: List[ExtractionResult] = []
        errors: List[LineError] = []
        for line_number, line in enumerate(text.splitlines(), start=1):
            line = line.strip()
            if not line:
                continue
            try:
                results.append(self.extract(line, year))
            except ExtractionError as e:
                logger.warning(f"Line {line_number} failed: {e} ({e.detail})")
                errors.append(LineError(line_number=line_number, text=line, detail=e.detail))

        return BatchOutcome(data=results, errors=errors)
