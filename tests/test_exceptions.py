"""Tests for the custom exception hierarchy."""

import pytest
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


class TestExceptionHierarchy:
    def test_all_inherit_from_studio_error(self):
        leaf_classes = [
            LLMError, LLMTimeoutError, LLMResponseParseError, MediaGenerationError,
            ValidationError, MissingInputError, InvalidConfigError,
            StateError, ChapterNotFoundError, ProjectNotPlannedError, InvalidTransitionError,
            StaleContentError, StaleSelectionError,
            OperationError, OperationInProgressError, ChapterBusyError,
        ]
        for cls in leaf_classes:
            assert issubclass(cls, StudioError), f"{cls.__name__} must inherit StudioError"

    def test_llm_subclasses(self):
        assert issubclass(LLMTimeoutError, LLMError)
        assert issubclass(LLMResponseParseError, LLMError)
        assert issubclass(MediaGenerationError, LLMError)

    def test_state_subclasses(self):
        for cls in (ChapterNotFoundError, ProjectNotPlannedError, InvalidTransitionError, StaleContentError):
            assert issubclass(cls, StateError)

    def test_stale_selection_is_stale_content(self):
        assert issubclass(StaleSelectionError, StaleContentError)

    def test_operation_subclasses(self):
        assert issubclass(OperationInProgressError, OperationError)
        assert issubclass(ChapterBusyError, OperationError)


class TestExceptionCreation:
    def test_basic_message(self):
        err = LLMError("API failed")
        assert err.message == "API failed"
        assert err.details == {}

    def test_str_renders_details(self):
        err = ChapterNotFoundError("abc")
        assert str(err) == "Chapter not found: abc (chapter_id=abc)"

    def test_timeout_keeps_value(self):
        err = LLMTimeoutError("Request timed out", timeout=30.0)
        assert err.timeout == 30.0
        assert "timed out" in str(err)

    def test_parse_error_has_raw_response(self):
        err = LLMResponseParseError("Parse failed", raw_response='{"bad": json}')
        assert err.raw_response == '{"bad": json}'

    def test_parse_error_truncates_details(self):
        err = LLMResponseParseError("Parse failed", raw_response="x" * 500)
        assert len(err.details["raw_response"]) == 200
        assert len(err.raw_response) == 500

    def test_missing_input_default_message(self):
        err = MissingInputError("theme")
        assert err.field == "theme"
        assert err.message == "theme is required"

    def test_invalid_transition_details(self):
        err = InvalidTransitionError("c1", "drafting", "final")
        assert err.details == {"chapter_id": "c1", "current": "drafting", "target": "final"}

    def test_in_progress_without_chapter(self):
        err = OperationInProgressError("generate_plan")
        assert err.details == {"kind": "generate_plan"}

    def test_catchable_as_base(self):
        with pytest.raises(StudioError):
            raise ChapterBusyError("c1")
