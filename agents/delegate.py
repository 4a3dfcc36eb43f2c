"""The generation delegate: one method per intent.

``GenerationDelegate`` is the only boundary between the studio and the
external generation services. ``StudioDelegate`` is the production
implementation built from the per-intent agents; tests and alternative
providers only need to satisfy the protocol.
"""

import logging
from typing import Optional, Protocol, runtime_checkable

from agents.editor_agent import HumanizerAgent, TweakAgent
from agents.integrity_agent import IntegrityAgent
from agents.media_agent import CoverAgent, NarrationAgent
from agents.planner_agent import PlannerAgent
from agents.research_agent import ResearchAgent
from agents.schemas import DraftResponse, IntegrityResponse, PlanResponse
from agents.writer_agent import WriterAgent
from config.settings import Settings
from models.chapter import Chapter
from models.persona import AuthorPersona
from models.project import EbookProject, MediaAsset
from tools.agent_sdk_client import AgentSDKClient
from tools.media_client import MediaClient

logger = logging.getLogger(__name__)


@runtime_checkable
class GenerationDelegate(Protocol):
    """Narrow interface to the external generation service."""

    async def research_identity(self, name: str, handles: str) -> str:
        ...

    async def generate_plan(self, theme: str, persona: AuthorPersona, chapter_count: int) -> PlanResponse:
        ...

    async def draft_chapter(
        self,
        chapter: Chapter,
        persona: AuthorPersona,
        project: EbookProject,
        running_summary: str,
    ) -> DraftResponse:
        ...

    async def check_integrity(self, content: str) -> IntegrityResponse:
        ...

    async def humanize(self, content: str) -> str:
        ...

    async def tweak(self, text: str, instruction: str) -> str:
        ...

    async def generate_cover(self, prompt: str) -> MediaAsset:
        ...

    async def narrate(self, text: str) -> MediaAsset:
        ...


class StudioDelegate:
    """Claude Agent SDK for text intents, Gemini for image and speech."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        llm_client: Optional[AgentSDKClient] = None,
        media_client: Optional[MediaClient] = None,
    ):
        self.settings = settings or Settings()
        self.llm = llm_client or AgentSDKClient(self.settings)
        self.media = media_client or MediaClient(self.settings)

        self._research = ResearchAgent(self.llm, self.settings)
        self._planner = PlannerAgent(self.llm, self.settings)
        self._writer = WriterAgent(self.llm, self.settings)
        self._integrity = IntegrityAgent(self.llm, self.settings)
        self._humanizer = HumanizerAgent(self.llm, self.settings)
        self._tweaker = TweakAgent(self.llm, self.settings)
        self._cover = CoverAgent(self.media, self.settings, self.llm)
        self._narrator = NarrationAgent(self.media, self.settings, self.llm)

    async def research_identity(self, name: str, handles: str) -> str:
        return await self._research.research(name, handles)

    async def generate_plan(self, theme: str, persona: AuthorPersona, chapter_count: int) -> PlanResponse:
        return await self._planner.generate_plan(theme, persona, chapter_count)

    async def draft_chapter(
        self,
        chapter: Chapter,
        persona: AuthorPersona,
        project: EbookProject,
        running_summary: str,
    ) -> DraftResponse:
        return await self._writer.draft_chapter(chapter, persona, project, running_summary)

    async def check_integrity(self, content: str) -> IntegrityResponse:
        return await self._integrity.check(content)

    async def humanize(self, content: str) -> str:
        return await self._humanizer.humanize(content)

    async def tweak(self, text: str, instruction: str) -> str:
        return await self._tweaker.tweak(text, instruction)

    async def generate_cover(self, prompt: str) -> MediaAsset:
        return await self._cover.generate_cover(prompt)

    async def narrate(self, text: str) -> MediaAsset:
        return await self._narrator.narrate(text)

    def get_usage_summary(self) -> dict:
        return {
            "text_calls": self.llm.total_calls,
            "media_calls": self.media.total_calls,
        }
