"""Shared pytest fixtures for the ebookstudio test suite."""

import pytest
from unittest.mock import MagicMock, AsyncMock


# ---------------------------------------------------------------------------
# Settings fixture
# ---------------------------------------------------------------------------

@pytest.fixture
def settings(tmp_path):
    """Return a Settings instance with all paths pointing to tmp_path."""
    from config.settings import Settings
    return Settings(
        _env_file=None,
        log_dir=tmp_path / "logs",
        outline_chapter_count=3,
        delegate_timeout_seconds=5.0,
    )


# ---------------------------------------------------------------------------
# Delegate transport mocks
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_llm():
    """Return a MagicMock replacing AgentSDKClient."""
    llm = MagicMock()
    llm.chat = AsyncMock(return_value="A rewritten passage that sounds human.")
    llm.chat_with_tools = AsyncMock(return_value="Jane Doe is a product leader with 15 years in fintech.")
    llm.total_calls = 0
    return llm


@pytest.fixture
def mock_media():
    """Return a MagicMock replacing MediaClient."""
    from models.project import MediaAsset
    media = MagicMock()
    media.generate_image = AsyncMock(return_value=MediaAsset("image/png", b"\x89PNG..."))
    media.synthesize_speech = AsyncMock(return_value=MediaAsset("audio/pcm", b"\x00\x01" * 8))
    media.total_calls = 0
    return media


@pytest.fixture
def plan_response():
    from agents.schemas import ChapterOutline, PlanResponse
    return PlanResponse(
        title="Unplugged",
        subtitle="Recovering from digital burnout",
        target_audience="Remote workers",
        chapters=[
            ChapterOutline(title="The Always-On Trap", overview="How we got here."),
            ChapterOutline(title="Signals of Burnout", overview="Recognizing the symptoms."),
            ChapterOutline(title="Designing Boundaries", overview="Practical guardrails."),
        ],
    )


@pytest.fixture
def mock_delegate(plan_response):
    """Return an AsyncMock satisfying the GenerationDelegate protocol."""
    from agents.schemas import DraftResponse, IntegrityResponse
    from models.project import MediaAsset

    delegate = MagicMock()
    delegate.research_identity = AsyncMock(return_value="Fifteen years building fintech products.")
    delegate.generate_plan = AsyncMock(return_value=plan_response)

    async def _draft(chapter, persona, project, running_summary):
        return DraftResponse(
            content=f"# {chapter.title}\n\nBody of chapter {chapter.number}.",
            summary=f"Summary {chapter.number}",
        )

    delegate.draft_chapter = AsyncMock(side_effect=_draft)
    delegate.check_integrity = AsyncMock(return_value=IntegrityResponse(score=25, report="Mostly original."))
    delegate.humanize = AsyncMock(return_value="A warmer, more personal rewrite.")
    delegate.tweak = AsyncMock(return_value="PUNCHY")
    delegate.generate_cover = AsyncMock(return_value=MediaAsset("image/png", b"png-bytes"))
    delegate.narrate = AsyncMock(return_value=MediaAsset("audio/pcm", b"pcm-bytes"))
    delegate.get_usage_summary.return_value = {"text_calls": 1, "media_calls": 0}
    return delegate


# ---------------------------------------------------------------------------
# Sample data fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def sample_persona():
    from models.persona import AuthorPersona
    return AuthorPersona(
        name="Jane Doe",
        professional_history="Product leader in fintech.",
        writing_style="Punchy, data-driven",
        core_why="Help remote teams stay healthy",
        personal_stories="Burned out in 2019 and rebuilt.",
        social_handles="@janedoe",
    )


@pytest.fixture
def sample_project(sample_persona):
    """A planned three-chapter project; chapter 2 has a draft."""
    from models.chapter import Chapter
    from models.enums import ChapterStatus
    from models.project import EbookProject
    chapters = (
        Chapter(id="c1", number=1, title="One", overview="First"),
        Chapter(id="c2", number=2, title="Two", overview="Second",
                content="The quick brown fox jumps over the lazy dog.",
                summary="Fox and dog.", status=ChapterStatus.REVIEW),
        Chapter(id="c3", number=3, title="Three", overview="Third"),
    )
    return EbookProject(
        id="p1",
        theme="digital burnout",
        title="Unplugged",
        subtitle="Recovering from digital burnout",
        target_audience="Remote workers",
        author_persona=sample_persona,
        chapters=chapters,
    )


@pytest.fixture
def studio(mock_delegate, settings, sample_project, sample_persona):
    """A Studio over the sample project with the mock delegate."""
    from workflow.state import AppState, PersonaStore, ProjectStore
    from workflow.studio import Studio
    state = AppState(
        persona_store=PersonaStore(sample_persona),
        project_store=ProjectStore(sample_project),
    )
    return Studio(mock_delegate, settings=settings, state=state)
