"""Chapter data model."""

import hashlib
from dataclasses import dataclass
from typing import Optional

from models.enums import ChapterStatus


def content_fingerprint(content: str) -> str:
    """Return a stable fingerprint for chapter content."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class Chapter:
    """Represents a single chapter.

    Chapters are replaced, never mutated: every change produces a new
    instance via ``dataclasses.replace``.
    """
    id: str
    number: int
    title: str = ""
    overview: str = ""
    content: str = ""  # Markdown
    summary: str = ""  # Running-summary input for later chapters
    status: ChapterStatus = ChapterStatus.DRAFTING
    pointers: str = ""
    integrity_score: Optional[int] = None  # 0-100, higher = more AI-like
    integrity_report: Optional[str] = None

    @property
    def has_content(self) -> bool:
        return bool(self.content.strip())

    @property
    def fingerprint(self) -> str:
        return content_fingerprint(self.content)


@dataclass(frozen=True)
class TextSelection:
    """A ``[start, end)`` range of a chapter's content picked for a tweak."""
    chapter_id: str
    start: int
    end: int
    text: str
    fingerprint: str  # Content fingerprint at selection time
