"""Declared response shapes for the structured intents.

Every schema coerces absent or malformed fields to a safe default instead of
failing, so a sloppy model reply degrades to empty values rather than an
exception in the console.
"""

from __future__ import annotations

import logging
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from config.exceptions import LLMResponseParseError
from tools.llm_client import parse_json_response

logger = logging.getLogger(__name__)

NO_INFORMATION = "No information found."


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


class _LenientModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @classmethod
    def from_payload(cls, payload: Any):
        """Validate ``payload``, falling back to an all-defaults instance."""
        if not isinstance(payload, dict):
            logger.warning("%s payload is %s, using defaults", cls.__name__, type(payload).__name__)
            return cls()
        try:
            return cls.model_validate(payload)
        except ValidationError as e:
            logger.warning("%s payload invalid, using defaults: %s", cls.__name__, e)
            return cls()

    @classmethod
    def from_reply(cls, text: str):
        """Parse a raw model reply; an unparsable reply yields the defaults."""
        try:
            payload = parse_json_response(text)
        except LLMResponseParseError as e:
            logger.warning("%s reply was not JSON, using defaults: %s", cls.__name__, e.message)
            return cls()
        return cls.from_payload(payload)


class ChapterOutline(_LenientModel):
    title: str = ""
    overview: str = ""

    @field_validator("title", "overview", mode="before")
    @classmethod
    def _text(cls, v: Any) -> str:
        return _as_text(v)


class PlanResponse(_LenientModel):
    title: str = ""
    subtitle: str = ""
    target_audience: str = Field(default="", alias="targetAudience")
    chapters: List[ChapterOutline] = Field(default_factory=list)

    @field_validator("title", "subtitle", "target_audience", mode="before")
    @classmethod
    def _text(cls, v: Any) -> str:
        return _as_text(v)

    @field_validator("chapters", mode="before")
    @classmethod
    def _chapters(cls, v: Any) -> list:
        if not isinstance(v, (list, tuple)):
            return []
        return [item for item in v if isinstance(item, (dict, ChapterOutline))]


class DraftResponse(_LenientModel):
    content: str = ""
    summary: str = ""

    @field_validator("content", "summary", mode="before")
    @classmethod
    def _text(cls, v: Any) -> str:
        return _as_text(v)


class IntegrityResponse(_LenientModel):
    score: int = 0
    report: str = ""

    @field_validator("score", mode="before")
    @classmethod
    def _score(cls, v: Any) -> int:
        if isinstance(v, bool):
            return 0
        try:
            score = int(round(float(v)))
        except (TypeError, ValueError):
            return 0
        return max(0, min(100, score))

    @field_validator("report", mode="before")
    @classmethod
    def _text(cls, v: Any) -> str:
        return _as_text(v)


__all__ = [
    "NO_INFORMATION",
    "ChapterOutline",
    "PlanResponse",
    "DraftResponse",
    "IntegrityResponse",
]
