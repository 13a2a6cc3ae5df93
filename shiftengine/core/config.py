from enum import Enum
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class ExtractionEngine(str, Enum):
    RULES = "rules"
    GEMINI = "gemini"
    OPENAI = "openai"


class Settings(BaseSettings):
    # App
    ENV: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # Shift request extraction
    SHIFT_AI_ENGINE: ExtractionEngine = ExtractionEngine.RULES
    # None = engine default (gemini falls back to rules, openai does not)
    SHIFT_AI_FALLBACK: Optional[bool] = None

    # LLM providers
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-1.5-flash"
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_MODEL: str = "gpt-4o-mini"
    LLM_TIMEOUT_SECONDS: float = 30.0

    # Payroll
    DEFAULT_FALLBACK_RATE: float = 0.0

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def fallback_enabled(self, engine: ExtractionEngine) -> bool:
        if self.SHIFT_AI_FALLBACK is not None:
            return self.SHIFT_AI_FALLBACK
        return engine == ExtractionEngine.GEMINI


settings = Settings()
