from fastapi import Depends

from shiftengine.core.config import Settings, settings
from shiftengine.services.ai import ShiftRequestExtractor


def get_settings() -> Settings:
    return settings


def get_shift_request_extractor(
    app_settings: Settings = Depends(get_settings),
) -> ShiftRequestExtractor:
    """Extractor for the configured engine. The LLM provider is built lazily per call."""
    engine = app_settings.SHIFT_AI_ENGINE
    return ShiftRequestExtractor(
        engine=engine,
        fallback=app_settings.fallback_enabled(engine),
    )
