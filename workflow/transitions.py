"""Chapter status lifecycle and merge rules.

Each function takes a chapter (or outline) and returns a new value; nothing
here mutates its input or calls the delegate.

    drafting --draft--> review <--integrity--> flagged
                          |  ^                    |
                          |  +------humanize------+
                          +--approve--> final
    any status --hand edit / tweak--> review
"""

import uuid
from dataclasses import replace
from typing import Iterable, Sequence

from agents.schemas import ChapterOutline
from config.exceptions import InvalidTransitionError, StaleSelectionError
from models.chapter import Chapter, TextSelection
from models.enums import ChapterStatus
from tools.text_utils import is_valid_range, splice

DEFAULT_RISK_THRESHOLD = 40


def new_chapter_id() -> str:
    return uuid.uuid4().hex[:9]


def status_after_integrity(score: int, threshold: int = DEFAULT_RISK_THRESHOLD) -> ChapterStatus:
    """Scores strictly above the threshold are flagged."""
    return ChapterStatus.FLAGGED if score > threshold else ChapterStatus.REVIEW


def build_chapters(outline: Iterable[ChapterOutline]) -> tuple[Chapter, ...]:
    """Create fresh chapters numbered 1..N in outline order."""
    return tuple(
        Chapter(
            id=new_chapter_id(),
            number=idx,
            title=item.title,
            overview=item.overview,
            status=ChapterStatus.DRAFTING,
        )
        for idx, item in enumerate(outline, start=1)
    )


def running_summary(chapters: Sequence[Chapter], number: int) -> str:
    """Concatenate summaries of every chapter numbered below ``number``.

    Ordered by chapter number, independent of sequence order.
    """
    previous = sorted((c for c in chapters if c.number < number), key=lambda c: c.number)
    return "\n".join(f"Chapter {c.number}: {c.summary}" for c in previous)


def apply_draft(chapter: Chapter, content: str, summary: str) -> Chapter:
    """New draft: content and summary replaced, previous score discarded."""
    return replace(
        chapter,
        content=content,
        summary=summary,
        status=ChapterStatus.REVIEW,
        integrity_score=None,
        integrity_report=None,
    )


def apply_integrity(
    chapter: Chapter,
    score: int,
    report: str,
    threshold: int = DEFAULT_RISK_THRESHOLD,
) -> Chapter:
    score = max(0, min(100, int(score)))
    return replace(
        chapter,
        integrity_score=score,
        integrity_report=report,
        status=status_after_integrity(score, threshold),
    )


def apply_humanize(chapter: Chapter, content: str) -> Chapter:
    """Rewrite always lands in review with the stale score cleared."""
    return replace(
        chapter,
        content=content,
        status=ChapterStatus.REVIEW,
        integrity_score=None,
        integrity_report=None,
    )


def apply_content_edit(chapter: Chapter, content: str) -> Chapter:
    """Hand edit of the raw content. Unchanged content is a no-op."""
    if content == chapter.content:
        return chapter
    return replace(
        chapter,
        content=content,
        status=ChapterStatus.REVIEW,
        integrity_score=None,
        integrity_report=None,
    )


def check_selection(chapter: Chapter, selection: TextSelection) -> None:
    """Raise StaleSelectionError unless ``selection`` still matches ``chapter``."""
    if (
        selection.chapter_id != chapter.id
        or selection.fingerprint != chapter.fingerprint
        or not is_valid_range(chapter.content, selection.start, selection.end)
        or chapter.content[selection.start:selection.end] != selection.text
    ):
        raise StaleSelectionError(chapter.id)


def apply_tweak(chapter: Chapter, selection: TextSelection, replacement: str) -> Chapter:
    """Splice ``replacement`` into the selected range of the current content."""
    check_selection(chapter, selection)
    content = splice(chapter.content, selection.start, selection.end, replacement)
    return apply_content_edit(chapter, content)


def apply_pointers(chapter: Chapter, pointers: str) -> Chapter:
    return replace(chapter, pointers=pointers)


def approve(chapter: Chapter) -> Chapter:
    """Mark a reviewed chapter final."""
    if chapter.status is not ChapterStatus.REVIEW or not chapter.has_content:
        raise InvalidTransitionError(chapter.id, chapter.status.value, ChapterStatus.FINAL.value)
    return replace(chapter, status=ChapterStatus.FINAL)
