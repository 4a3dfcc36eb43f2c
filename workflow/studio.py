"""Studio: the operation layer between the console and the generation delegate.

Every delegated operation follows the same path:

1. validate preconditions against current state (nothing is sent otherwise);
2. reserve its operation key and, for chapter work, the chapter lock;
3. run the delegate call as a cancellable task bounded by the timeout;
4. verify the chapter did not change underneath the call, then merge.

Results and failures are recorded in ``AppState.operations``. On failure the
domain state is left exactly as it was before the call.
"""

import asyncio
import logging
import uuid
from typing import Awaitable, Callable, Optional, TypeVar

from agents.delegate import GenerationDelegate
from config.exceptions import (
    ChapterBusyError,
    LLMError,
    LLMTimeoutError,
    MissingInputError,
    OperationInProgressError,
    ProjectNotPlannedError,
    StaleContentError,
    StateError,
)
from config.settings import Settings, get_settings
from models.chapter import Chapter, TextSelection
from models.enums import AppTab, OperationKind, OperationStatus
from models.persona import AuthorPersona
from models.project import EbookProject, MediaAsset
from tools.text_utils import is_valid_range
from workflow import publishing, transitions
from workflow.callbacks import LoggingCallback, OperationCallback
from workflow.state import AppState, OperationKey, OperationResult

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class Studio:
    """Runs persona, outline, chapter and media operations against AppState."""

    def __init__(
        self,
        delegate: GenerationDelegate,
        settings: Optional[Settings] = None,
        state: Optional[AppState] = None,
        callback: Optional[OperationCallback] = None,
    ):
        self.delegate = delegate
        self.settings = settings or get_settings()
        self.state = state or AppState()
        self.callback = callback or LoggingCallback()
        self._chapter_locks: dict[str, asyncio.Lock] = {}
        self._tasks: dict[OperationKey, asyncio.Task] = {}

    # ------------------------------------------------------------------
    # Operation runner
    # ------------------------------------------------------------------

    def is_running(self, kind: OperationKind, chapter_id: Optional[str] = None) -> bool:
        return (kind, chapter_id) in self._tasks

    def is_chapter_busy(self, chapter_id: str) -> bool:
        lock = self._chapter_locks.get(chapter_id)
        return lock is not None and lock.locked()

    def cancel(self, kind: OperationKind, chapter_id: Optional[str] = None) -> bool:
        """Cancel the in-flight call for ``(kind, chapter_id)``.

        Returns False when nothing is running under that key.
        """
        task = self._tasks.get((kind, chapter_id))
        if task is None or task.done():
            return False
        logger.info("Cancelling %s%s", kind.value, f" [{chapter_id}]" if chapter_id else "")
        return task.cancel()

    async def _run(
        self,
        kind: OperationKind,
        request: Callable[[], Awaitable[T]],
        merge: Callable[[T], R],
        describe: Callable[[R], str],
        chapter_id: Optional[str] = None,
    ) -> R:
        key = (kind, chapter_id)
        if key in self._tasks:
            raise OperationInProgressError(kind.value, chapter_id)

        lock = None
        if chapter_id is not None:
            lock = self._chapter_locks.setdefault(chapter_id, asyncio.Lock())
            if lock.locked():
                raise ChapterBusyError(chapter_id)
            await lock.acquire()

        task = asyncio.ensure_future(request())
        self._tasks[key] = task
        self.state.record(OperationResult(kind, chapter_id, OperationStatus.RUNNING))
        self.callback.on_operation_start(kind, chapter_id)

        timeout = self.settings.delegate_timeout_seconds
        try:
            try:
                payload = await asyncio.wait_for(task, timeout=timeout)
            except asyncio.TimeoutError as e:
                raise LLMTimeoutError(f"{kind.value} timed out after {timeout}s", timeout=timeout) from e
            outcome = merge(payload)
        except asyncio.CancelledError:
            self._finish(kind, chapter_id, OperationStatus.CANCELLED, "Cancelled")
            raise
        except Exception as e:
            logger.error("%s failed: %s", kind.value, e)
            self._finish(kind, chapter_id, OperationStatus.FAILED, str(e))
            raise
        else:
            self._finish(kind, chapter_id, OperationStatus.SUCCEEDED, describe(outcome))
            return outcome
        finally:
            self._tasks.pop(key, None)
            if lock is not None:
                lock.release()

    def _finish(self, kind: OperationKind, chapter_id: Optional[str], status: OperationStatus, message: str) -> None:
        result = OperationResult(kind, chapter_id, status, message)
        self.state.record(result)
        if status is OperationStatus.SUCCEEDED:
            self.callback.on_operation_complete(result)
        else:
            self.callback.on_operation_error(result)

    def _current(self, chapter_id: str, snapshot: Chapter) -> Chapter:
        """Re-read a chapter for merging; its content must match ``snapshot``."""
        current = self.state.project_store.get_chapter(chapter_id)
        if current.fingerprint != snapshot.fingerprint:
            raise StaleContentError(chapter_id)
        return current

    def _require_planned(self) -> EbookProject:
        project = self.state.project
        if not project.is_planned:
            raise ProjectNotPlannedError()
        return project

    def _require_content(self, chapter_id: str) -> Chapter:
        chapter = self.state.project_store.get_chapter(chapter_id)
        if not chapter.has_content:
            raise MissingInputError("content", f"Chapter {chapter.number} has no content yet")
        return chapter

    # ------------------------------------------------------------------
    # Persona editor
    # ------------------------------------------------------------------

    def set_persona_field(self, name: str, value: str) -> AuthorPersona:
        return self.state.persona_store.set_field(name, value)

    async def research_identity(self) -> str:
        """Look up the author's public footprint and store it as history."""
        persona = self.state.persona
        if not persona.name.strip():
            raise MissingInputError("name", "Author name is required for identity research")

        def merge(history: str) -> str:
            self.state.persona_store.set_field("professional_history", history)
            return history

        return await self._run(
            OperationKind.RESEARCH_IDENTITY,
            lambda: self.delegate.research_identity(persona.name, persona.social_handles),
            merge,
            lambda history: f"Identity research stored ({len(history)} chars)",
        )

    # ------------------------------------------------------------------
    # Outline generator
    # ------------------------------------------------------------------

    async def generate_plan(self, theme: str) -> EbookProject:
        """Replace the project with a fresh outline for ``theme``."""
        theme = (theme or "").strip()
        if not theme:
            raise MissingInputError("theme", "Book theme is required")
        persona = self.state.persona
        count = self.settings.outline_chapter_count

        def merge(plan) -> EbookProject:
            outline = list(plan.chapters)[:count]
            if not outline:
                raise LLMError("Plan returned no chapters", {"theme": theme})
            project = EbookProject(
                id=uuid.uuid4().hex[:9],
                theme=theme,
                title=plan.title,
                subtitle=plan.subtitle,
                target_audience=plan.target_audience,
                author_persona=persona,
                chapters=transitions.build_chapters(outline),
            )
            self.state.project_store.replace_project(project)
            self.state.narration = None
            self.state.narration_chapter_id = None
            return project

        return await self._run(
            OperationKind.GENERATE_PLAN,
            lambda: self.delegate.generate_plan(theme, persona, count),
            merge,
            lambda project: f"Planned '{project.title}' with {len(project.chapters)} chapters",
        )

    # ------------------------------------------------------------------
    # Chapter drafter, integrity checker, humanizer
    # ------------------------------------------------------------------

    async def draft_chapter(self, chapter_id: str) -> Chapter:
        """Draft one chapter with the summaries of earlier chapters as context."""
        project = self._require_planned()
        chapter = self.state.project_store.get_chapter(chapter_id)
        persona = self.state.persona
        context = transitions.running_summary(project.chapters, chapter.number)

        def merge(draft) -> Chapter:
            if not draft.content.strip():
                raise LLMError("Draft came back empty", {"chapter_id": chapter_id})
            current = self._current(chapter_id, chapter)
            return self.state.project_store.replace_chapter(
                chapter_id, transitions.apply_draft(current, draft.content, draft.summary)
            )

        return await self._run(
            OperationKind.DRAFT_CHAPTER,
            lambda: self.delegate.draft_chapter(chapter, persona, project, context),
            merge,
            lambda ch: f"Chapter {ch.number} drafted",
            chapter_id=chapter_id,
        )

    async def check_integrity(self, chapter_id: str) -> Chapter:
        chapter = self._require_content(chapter_id)
        threshold = self.settings.integrity_risk_threshold

        def merge(result) -> Chapter:
            current = self._current(chapter_id, chapter)
            return self.state.project_store.replace_chapter(
                chapter_id, transitions.apply_integrity(current, result.score, result.report, threshold)
            )

        return await self._run(
            OperationKind.CHECK_INTEGRITY,
            lambda: self.delegate.check_integrity(chapter.content),
            merge,
            lambda ch: f"Chapter {ch.number} scored {ch.integrity_score}% ({ch.status.value})",
            chapter_id=chapter_id,
        )

    async def humanize_chapter(self, chapter_id: str) -> Chapter:
        chapter = self._require_content(chapter_id)

        def merge(content: str) -> Chapter:
            current = self._current(chapter_id, chapter)
            return self.state.project_store.replace_chapter(
                chapter_id, transitions.apply_humanize(current, content or current.content)
            )

        return await self._run(
            OperationKind.HUMANIZE,
            lambda: self.delegate.humanize(chapter.content),
            merge,
            lambda ch: f"Chapter {ch.number} humanized",
            chapter_id=chapter_id,
        )

    # ------------------------------------------------------------------
    # Localized tweak
    # ------------------------------------------------------------------

    def select_text(self, chapter_id: str, start: int, end: int) -> TextSelection:
        """Capture a ``[start, end)`` range of the chapter's current content."""
        chapter = self.state.project_store.get_chapter(chapter_id)
        if not is_valid_range(chapter.content, start, end):
            raise MissingInputError(
                "selection", f"Range [{start}, {end}) outside content of length {len(chapter.content)}"
            )
        if start == end:
            raise MissingInputError("selection", "Select some text to tweak")
        return TextSelection(
            chapter_id=chapter_id,
            start=start,
            end=end,
            text=chapter.content[start:end],
            fingerprint=chapter.fingerprint,
        )

    async def tweak_selection(self, selection: TextSelection, instruction: str) -> Chapter:
        """Rewrite the selected range and splice it back into the chapter."""
        instruction = (instruction or "").strip()
        if not instruction:
            raise MissingInputError("instruction", "Tweak instruction is required")
        if not selection.text:
            raise MissingInputError("selection", "Select some text to tweak")
        chapter_id = selection.chapter_id
        transitions.check_selection(self.state.project_store.get_chapter(chapter_id), selection)

        def merge(replacement: str) -> Chapter:
            current = self.state.project_store.get_chapter(chapter_id)
            return self.state.project_store.replace_chapter(
                chapter_id, transitions.apply_tweak(current, selection, replacement)
            )

        return await self._run(
            OperationKind.TWEAK,
            lambda: self.delegate.tweak(selection.text, instruction),
            merge,
            lambda ch: f"Tweak applied to chapter {ch.number}",
            chapter_id=chapter_id,
        )

    # ------------------------------------------------------------------
    # Cover and narration
    # ------------------------------------------------------------------

    async def generate_cover(self) -> MediaAsset:
        project = self._require_planned()
        prompt = f"{project.title}: {project.theme}"

        def merge(asset: MediaAsset) -> MediaAsset:
            if self.state.project.id != project.id:
                raise StateError("Project was re-planned while the cover was generating")
            self.state.project_store.set_cover(asset)
            return asset

        return await self._run(
            OperationKind.GENERATE_COVER,
            lambda: self.delegate.generate_cover(prompt),
            merge,
            lambda asset: f"Cover generated ({len(asset.data)} bytes)",
        )

    async def narrate_chapter(self, chapter_id: str) -> MediaAsset:
        chapter = self._require_content(chapter_id)

        def merge(asset: MediaAsset) -> MediaAsset:
            # Raises if a re-plan discarded the chapter meanwhile
            self.state.project_store.get_chapter(chapter_id)
            self.state.narration = asset
            self.state.narration_chapter_id = chapter_id
            return asset

        return await self._run(
            OperationKind.NARRATE,
            lambda: self.delegate.narrate(chapter.content),
            merge,
            lambda asset: f"Narration preview ready for chapter {chapter.number}",
            chapter_id=chapter_id,
        )

    # ------------------------------------------------------------------
    # Local edits
    # ------------------------------------------------------------------

    def edit_content(self, chapter_id: str, content: str) -> Chapter:
        chapter = self.state.project_store.get_chapter(chapter_id)
        return self.state.project_store.replace_chapter(
            chapter_id, transitions.apply_content_edit(chapter, content)
        )

    def edit_pointers(self, chapter_id: str, pointers: str) -> Chapter:
        chapter = self.state.project_store.get_chapter(chapter_id)
        return self.state.project_store.replace_chapter(
            chapter_id, transitions.apply_pointers(chapter, pointers)
        )

    def approve_chapter(self, chapter_id: str) -> Chapter:
        if self.is_chapter_busy(chapter_id):
            raise ChapterBusyError(chapter_id)
        chapter = self.state.project_store.get_chapter(chapter_id)
        approved = transitions.approve(chapter)
        logger.info("Chapter %d approved as final", approved.number)
        return self.state.project_store.replace_chapter(chapter_id, approved)

    def set_active_tab(self, tab: AppTab) -> None:
        self.state.active_tab = tab

    def publication_readiness(self) -> float:
        return publishing.publication_readiness(self.state.project)
