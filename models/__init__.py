"""Models package: domain dataclasses and enums."""

from models.persona import AuthorPersona, PERSONA_FIELDS
from models.chapter import Chapter, TextSelection, content_fingerprint
from models.project import EbookProject, MediaAsset
from models.enums import (
    ChapterStatus,
    OperationKind,
    OperationStatus,
    AppTab,
)

__all__ = [
    "AuthorPersona",
    "PERSONA_FIELDS",
    "Chapter",
    "TextSelection",
    "content_fingerprint",
    "EbookProject",
    "MediaAsset",
    "ChapterStatus",
    "OperationKind",
    "OperationStatus",
    "AppTab",
]
