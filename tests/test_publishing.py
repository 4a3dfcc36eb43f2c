"""Tests for publish-tab helpers."""

import dataclasses

import pytest

from models.chapter import Chapter
from models.enums import ChapterStatus
from models.project import EbookProject
from workflow.publishing import chapter_label, export_markdown, publication_readiness


class TestReadiness:
    def test_no_chapters_is_zero(self):
        assert publication_readiness(EbookProject()) == 0.0

    def test_flagged_and_empty_not_ready(self, sample_project):
        chapters = list(sample_project.chapters)
        chapters[0] = dataclasses.replace(chapters[0], content="Body", status=ChapterStatus.FLAGGED)
        project = dataclasses.replace(sample_project, chapters=tuple(chapters))
        assert publication_readiness(project) == pytest.approx(100 / 3)

    def test_all_ready(self):
        chapters = tuple(Chapter(id=str(n), number=n, content="x", status=ChapterStatus.REVIEW) for n in (1, 2))
        assert publication_readiness(EbookProject(chapters=chapters)) == 100.0


class TestChapterLabel:
    def test_flagged(self):
        assert chapter_label(Chapter(id="a", number=1, content="x", status=ChapterStatus.FLAGGED)) == "INTEGRITY RISK detected"

    def test_with_content(self):
        assert chapter_label(Chapter(id="a", number=1, content="x", status=ChapterStatus.REVIEW)) == "Finalized"

    def test_pending(self):
        assert chapter_label(Chapter(id="a", number=1)) == "Draft pending"


class TestExportMarkdown:
    def test_manuscript_layout(self, sample_project):
        text = export_markdown(sample_project)
        assert text.startswith("# Unplugged\n\n## Recovering from digital burnout")
        assert "*By Jane Doe*" in text
        assert "## Chapter 2: Two\n\nThe quick brown fox jumps over the lazy dog." in text
        assert "## Chapter 1: One\n\n_First_" in text
        assert text.index("Chapter 1") < text.index("Chapter 2") < text.index("Chapter 3")

    def test_untitled(self):
        assert export_markdown(EbookProject()).startswith("# Untitled")
