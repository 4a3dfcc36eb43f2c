"""Configuration settings loaded from .env file."""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings, loaded from .env file.

    Text intents run through the Claude Agent SDK, which authenticates via
    the Claude Code CLI. Cover art and narration use the Gemini API and need
    GEMINI_API_KEY.
    """

    # LLM Models: one per intent
    llm_model_research: str = "claude-haiku-4-5"    # ResearchAgent
    llm_model_planning: str = "claude-opus-4-6"     # PlannerAgent
    llm_model_writing: str = "claude-opus-4-6"      # WriterAgent
    llm_model_integrity: str = "claude-haiku-4-5"   # IntegrityAgent
    llm_model_humanize: str = "claude-opus-4-6"     # HumanizerAgent
    llm_model_tweak: str = "claude-haiku-4-5"       # TweakAgent
    research_max_turns: int = 3

    # Media
    gemini_api_key: Optional[str] = Field(default=None, validation_alias="GEMINI_API_KEY")
    image_model: str = "gemini-2.5-flash-image"
    tts_model: str = "gemini-2.5-flash-preview-tts"
    tts_voice: str = "Kore"
    cover_aspect_ratio: str = "3:4"

    # Generation
    outline_chapter_count: int = 10
    overview_words: int = 50
    chapter_min_words: int = 1500
    summary_words: int = 100

    # Policy
    integrity_risk_threshold: int = 40
    integrity_max_chars: int = 5000    # Prefix submitted for integrity checks
    narration_preview_chars: int = 1000  # Prefix narrated as a preview
    delegate_timeout_seconds: float = 300.0

    # Logging
    log_dir: Path = Path("./data/logs")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }

    @field_validator("outline_chapter_count", "research_max_turns")
    @classmethod
    def validate_at_least_one(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Count must be >= 1")
        return v

    @field_validator("integrity_risk_threshold")
    @classmethod
    def validate_threshold(cls, v: int) -> int:
        if not 0 <= v <= 100:
            raise ValueError("integrity_risk_threshold must be between 0 and 100")
        return v

    @field_validator(
        "integrity_max_chars",
        "narration_preview_chars",
        "overview_words",
        "chapter_min_words",
        "summary_words",
    )
    @classmethod
    def validate_positive_length(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Length limit must be positive")
        return v

    @field_validator("delegate_timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("delegate_timeout_seconds must be positive")
        return v

    @field_validator("log_dir")
    @classmethod
    def ensure_parent_dirs(cls, v: Path) -> Path:
        v.parent.mkdir(parents=True, exist_ok=True)
        return v


_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get cached settings instance."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
