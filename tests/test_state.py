"""Tests for the application state container."""

import dataclasses

import pytest

from config.exceptions import ChapterNotFoundError, MissingInputError
from models.enums import AppTab, OperationKind, OperationStatus
from models.project import MediaAsset
from workflow.state import AppState, OperationResult, PersonaStore, ProjectStore


class TestPersonaStore:
    def test_set_field_replaces_persona(self):
        store = PersonaStore()
        before = store.persona
        after = store.set_field("name", "Jane")
        assert after.name == "Jane"
        assert before.name == ""
        assert store.persona is after

    def test_unknown_field_rejected(self):
        with pytest.raises(MissingInputError):
            PersonaStore().set_field("favourite_colour", "blue")


class TestProjectStore:
    def test_get_chapter(self, sample_project):
        store = ProjectStore(sample_project)
        assert store.get_chapter("c2").title == "Two"

    def test_get_missing_chapter_raises(self, sample_project):
        with pytest.raises(ChapterNotFoundError):
            ProjectStore(sample_project).get_chapter("nope")

    def test_get_by_number(self, sample_project):
        assert ProjectStore(sample_project).get_chapter_by_number(3).id == "c3"

    def test_replace_chapter_preserves_order(self, sample_project):
        store = ProjectStore(sample_project)
        updated = dataclasses.replace(store.get_chapter("c2"), title="Renamed")
        store.replace_chapter("c2", updated)
        assert [c.id for c in store.chapters] == ["c1", "c2", "c3"]
        assert [c.number for c in store.chapters] == [1, 2, 3]
        assert store.get_chapter("c2").title == "Renamed"
        assert sample_project.chapters[1].title == "Two"

    def test_replace_chapter_id_mismatch(self, sample_project):
        store = ProjectStore(sample_project)
        with pytest.raises(ValueError):
            store.replace_chapter("c1", store.get_chapter("c2"))

    def test_set_cover(self, sample_project):
        store = ProjectStore(sample_project)
        store.set_cover(MediaAsset("image/png", b"x"))
        assert store.project.cover.data == b"x"
        assert store.chapters == sample_project.chapters


class TestAppState:
    def test_defaults(self):
        state = AppState()
        assert state.active_tab is AppTab.AUTHOR
        assert not state.project.is_planned
        assert state.narration is None

    def test_operation_default_idle(self):
        result = AppState().operation(OperationKind.DRAFT_CHAPTER, "c1")
        assert result.status is OperationStatus.IDLE
        assert not result.is_running

    def test_record(self):
        state = AppState()
        state.record(OperationResult(OperationKind.HUMANIZE, "c1", OperationStatus.FAILED, "boom"))
        assert state.operation(OperationKind.HUMANIZE, "c1").message == "boom"
        assert state.operation(OperationKind.HUMANIZE, "c2").status is OperationStatus.IDLE
