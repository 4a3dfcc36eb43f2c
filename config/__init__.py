"""Configuration package: settings, logging, and exceptions."""

from config.exceptions import (
    StudioError,
    LLMError,
    LLMTimeoutError,
    LLMResponseParseError,
    MediaGenerationError,
    ValidationError,
    MissingInputError,
    InvalidConfigError,
    StateError,
    ChapterNotFoundError,
    ProjectNotPlannedError,
    InvalidTransitionError,
    StaleContentError,
    StaleSelectionError,
    OperationError,
    OperationInProgressError,
    ChapterBusyError,
)
from config.logging_config import setup_logging
from config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
    "setup_logging",
    "StudioError",
    "LLMError",
    "LLMTimeoutError",
    "LLMResponseParseError",
    "MediaGenerationError",
    "ValidationError",
    "MissingInputError",
    "InvalidConfigError",
    "StateError",
    "ChapterNotFoundError",
    "ProjectNotPlannedError",
    "InvalidTransitionError",
    "StaleContentError",
    "StaleSelectionError",
    "OperationError",
    "OperationInProgressError",
    "ChapterBusyError",
]
