"""Ebook project data model."""

import base64
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from models.chapter import Chapter
from models.persona import AuthorPersona


@dataclass(frozen=True)
class MediaAsset:
    """Binary output of a media intent (cover image, narration audio)."""
    mime_type: str
    data: bytes

    @property
    def data_uri(self) -> str:
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"

    def save(self, path: str | Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.data)
        return path


@dataclass(frozen=True)
class EbookProject:
    """The book-level aggregate: metadata plus its ordered chapters."""
    id: str = "p1"
    theme: str = ""
    title: str = ""
    subtitle: str = ""
    target_audience: str = ""
    author_persona: AuthorPersona = field(default_factory=AuthorPersona)  # Snapshot at plan time
    chapters: tuple[Chapter, ...] = ()
    cover: Optional[MediaAsset] = None

    @property
    def is_planned(self) -> bool:
        return bool(self.chapters)
