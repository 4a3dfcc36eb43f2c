"""Publish-tab helpers: readiness, per-chapter labels and manuscript preview."""

from models.chapter import Chapter
from models.enums import ChapterStatus
from models.project import EbookProject

LABEL_RISK = "INTEGRITY RISK detected"
LABEL_FINALIZED = "Finalized"
LABEL_PENDING = "Draft pending"


def is_publishable(chapter: Chapter) -> bool:
    return chapter.has_content and chapter.status is not ChapterStatus.FLAGGED


def publication_readiness(project: EbookProject) -> float:
    """Percentage of chapters with content that are not flagged.

    Returns 0.0 for a project without chapters.
    """
    if not project.chapters:
        return 0.0
    ready = sum(1 for c in project.chapters if is_publishable(c))
    return 100.0 * ready / len(project.chapters)


def chapter_label(chapter: Chapter) -> str:
    if chapter.status is ChapterStatus.FLAGGED:
        return LABEL_RISK
    if chapter.has_content:
        return LABEL_FINALIZED
    return LABEL_PENDING


def export_markdown(project: EbookProject) -> str:
    """Render the whole manuscript as a single markdown document."""
    lines = [f"# {project.title or 'Untitled'}"]
    if project.subtitle:
        lines.append(f"## {project.subtitle}")
    if project.author_persona.name:
        lines.append(f"*By {project.author_persona.name}*")
    if project.target_audience:
        lines.append(f"> For: {project.target_audience}")

    for chapter in project.chapters:
        lines.append(f"## Chapter {chapter.number}: {chapter.title}")
        if chapter.has_content:
            lines.append(chapter.content.strip())
        else:
            lines.append(f"_{chapter.overview}_" if chapter.overview else f"_{LABEL_PENDING}_")

    return "\n\n".join(lines) + "\n"
