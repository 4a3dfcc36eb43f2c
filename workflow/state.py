"""Application state container: persona, project and operation results."""

import logging
from dataclasses import dataclass, field, replace
from typing import Optional

from config.exceptions import ChapterNotFoundError, MissingInputError
from models.chapter import Chapter
from models.enums import AppTab, OperationKind, OperationStatus
from models.persona import PERSONA_FIELDS, AuthorPersona
from models.project import EbookProject, MediaAsset

logger = logging.getLogger(__name__)

OperationKey = tuple[OperationKind, Optional[str]]


@dataclass(frozen=True)
class OperationResult:
    """Outcome of the latest run of one operation, shown next to its control."""
    kind: OperationKind
    chapter_id: Optional[str] = None
    status: OperationStatus = OperationStatus.IDLE
    message: str = ""

    @property
    def key(self) -> OperationKey:
        return (self.kind, self.chapter_id)

    @property
    def is_running(self) -> bool:
        return self.status is OperationStatus.RUNNING


class PersonaStore:
    """Holds the author persona; edits replace the whole value."""

    def __init__(self, persona: Optional[AuthorPersona] = None):
        self._persona = persona or AuthorPersona()

    @property
    def persona(self) -> AuthorPersona:
        return self._persona

    def set_field(self, name: str, value: str) -> AuthorPersona:
        if name not in PERSONA_FIELDS:
            raise MissingInputError(name, f"Unknown persona field: {name}")
        self._persona = replace(self._persona, **{name: value})
        return self._persona


class ProjectStore:
    """Repository over the current project and its ordered chapters.

    Chapters are looked up by id and replaced in place in the sequence, so
    order and numbering are never recomputed at call sites.
    """

    def __init__(self, project: Optional[EbookProject] = None):
        self._project = project or EbookProject()

    @property
    def project(self) -> EbookProject:
        return self._project

    @property
    def chapters(self) -> tuple[Chapter, ...]:
        return self._project.chapters

    def _set(self, project: EbookProject) -> None:
        self._project = project

    def get_chapter(self, chapter_id: str) -> Chapter:
        for chapter in self._project.chapters:
            if chapter.id == chapter_id:
                return chapter
        raise ChapterNotFoundError(chapter_id)

    def get_chapter_by_number(self, number: int) -> Chapter:
        for chapter in self._project.chapters:
            if chapter.number == number:
                return chapter
        raise ChapterNotFoundError(f"#{number}")

    def replace_chapter(self, chapter_id: str, updated: Chapter) -> Chapter:
        if updated.id != chapter_id:
            raise ValueError(f"Chapter id mismatch: {chapter_id} != {updated.id}")
        chapters = list(self._project.chapters)
        for idx, chapter in enumerate(chapters):
            if chapter.id == chapter_id:
                if chapter is updated:
                    return updated
                chapters[idx] = updated
                self._set(replace(self._project, chapters=tuple(chapters)))
                return updated
        raise ChapterNotFoundError(chapter_id)

    def replace_project(self, project: EbookProject) -> None:
        logger.debug("Project replaced: '%s' with %d chapters", project.title, len(project.chapters))
        self._set(project)

    def set_cover(self, cover: Optional[MediaAsset]) -> None:
        self._set(replace(self._project, cover=cover))


@dataclass
class AppState:
    """Top-level state shared by the console views."""
    persona_store: PersonaStore = field(default_factory=PersonaStore)
    project_store: ProjectStore = field(default_factory=ProjectStore)
    operations: dict[OperationKey, OperationResult] = field(default_factory=dict)
    narration: Optional[MediaAsset] = None
    narration_chapter_id: Optional[str] = None
    active_tab: AppTab = AppTab.AUTHOR

    @property
    def persona(self) -> AuthorPersona:
        return self.persona_store.persona

    @property
    def project(self) -> EbookProject:
        return self.project_store.project

    def operation(self, kind: OperationKind, chapter_id: Optional[str] = None) -> OperationResult:
        return self.operations.get((kind, chapter_id), OperationResult(kind, chapter_id))

    def record(self, result: OperationResult) -> None:
        self.operations[result.key] = result
