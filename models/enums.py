"""Enumerations for chapter lifecycle and operation tracking."""

from enum import Enum


class ChapterStatus(str, Enum):
    DRAFTING = "drafting"
    REVIEW = "review"
    FLAGGED = "flagged"
    FINAL = "final"


class OperationKind(str, Enum):
    RESEARCH_IDENTITY = "research_identity"
    GENERATE_PLAN = "generate_plan"
    DRAFT_CHAPTER = "draft_chapter"
    CHECK_INTEGRITY = "check_integrity"
    HUMANIZE = "humanize"
    TWEAK = "tweak"
    GENERATE_COVER = "generate_cover"
    NARRATE = "narrate"


class OperationStatus(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"


class AppTab(str, Enum):
    AUTHOR = "author"
    RESEARCH = "research"
    CHAPTERS = "chapters"
    PUBLISH = "publish"
