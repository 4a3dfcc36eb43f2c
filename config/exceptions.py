"""Custom exception hierarchy for the ebook studio."""

from typing import Optional


class StudioError(Exception):
    """Base exception for all ebook studio errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


# ---- Delegate (LLM / media) Errors ----

class LLMError(StudioError):
    """Base exception for generation service errors."""


class LLMTimeoutError(LLMError):
    """Generation request exceeded the configured timeout."""

    def __init__(self, message: str = "Generation request timed out", timeout: Optional[float] = None):
        details = {"timeout": timeout} if timeout is not None else {}
        super().__init__(message, details)
        self.timeout = timeout


class LLMResponseParseError(LLMError):
    """Failed to parse LLM response."""

    def __init__(self, message: str = "Failed to parse LLM response", raw_response: str = ""):
        details = {"raw_response": raw_response[:200]} if raw_response else {}
        super().__init__(message, details)
        self.raw_response = raw_response


class MediaGenerationError(LLMError):
    """Image or audio generation returned no usable payload."""


# ---- Validation Errors ----

class ValidationError(StudioError):
    """Input validation failed."""


class MissingInputError(ValidationError):
    """A required user input is empty or invalid."""

    def __init__(self, field: str, message: str = ""):
        super().__init__(message or f"{field} is required", {"field": field})
        self.field = field


class InvalidConfigError(ValidationError):
    """Configuration value is invalid."""


# ---- State Errors ----

class StateError(StudioError):
    """Operation is not valid for the current project state."""


class ChapterNotFoundError(StateError):
    """No chapter with the given id exists in the project."""

    def __init__(self, chapter_id: str):
        super().__init__(f"Chapter not found: {chapter_id}", {"chapter_id": chapter_id})
        self.chapter_id = chapter_id


class ProjectNotPlannedError(StateError):
    """The project has no outline yet."""

    def __init__(self, message: str = "Generate a plan before using this operation"):
        super().__init__(message)


class InvalidTransitionError(StateError):
    """Chapter status does not allow the requested transition."""

    def __init__(self, chapter_id: str, current: str, target: str):
        super().__init__(
            f"Chapter cannot move from {current} to {target}",
            {"chapter_id": chapter_id, "current": current, "target": target},
        )


class StaleContentError(StateError):
    """Chapter content changed while a delegated call was outstanding."""

    def __init__(self, chapter_id: str, message: str = ""):
        super().__init__(
            message or "Chapter content changed while the request was in flight",
            {"chapter_id": chapter_id},
        )
        self.chapter_id = chapter_id


class StaleSelectionError(StaleContentError):
    """A recorded text selection no longer matches the chapter content."""

    def __init__(self, chapter_id: str):
        super().__init__(chapter_id, "Selection no longer matches the chapter content")


# ---- Operation Errors ----

class OperationError(StudioError):
    """Base exception for operation scheduling errors."""


class OperationInProgressError(OperationError):
    """The same operation is already running."""

    def __init__(self, kind: str, chapter_id: Optional[str] = None):
        details = {"kind": kind}
        if chapter_id:
            details["chapter_id"] = chapter_id
        super().__init__(f"Operation already running: {kind}", details)


class ChapterBusyError(OperationError):
    """Another mutating operation holds the chapter."""

    def __init__(self, chapter_id: str):
        super().__init__(
            f"Chapter {chapter_id} is busy with another operation",
            {"chapter_id": chapter_id},
        )
        self.chapter_id = chapter_id
