"""Writer Agent: drafts a chapter in the author's voice."""

import logging
from typing import Optional

from agents.base_agent import BaseAgent
from agents.schemas import DraftResponse
from config.settings import Settings
from models.chapter import Chapter
from models.persona import AuthorPersona
from models.project import EbookProject
from tools.agent_sdk_client import AgentSDKClient
from tools.text_utils import count_words

logger = logging.getLogger(__name__)


class WriterAgent(BaseAgent):
    """Generates full chapter content plus a short continuity summary."""

    template_name = "writer"

    def __init__(
        self,
        llm_client: Optional[AgentSDKClient] = None,
        settings: Optional[Settings] = None,
    ):
        super().__init__(llm_client, settings)

    async def draft_chapter(
        self,
        chapter: Chapter,
        persona: AuthorPersona,
        project: EbookProject,
        running_summary: str = "",
    ) -> DraftResponse:
        """Draft a single chapter.

        Args:
            chapter: Chapter descriptor (number, title, overview, pointers).
            persona: Author persona.
            project: Book-level metadata.
            running_summary: Summaries of the chapters numbered before this one.

        Returns:
            DraftResponse with ``content`` (markdown) and ``summary``. Fields
            are empty when the reply could not be parsed.
        """
        user_prompt = self._user_prompt(
            number=chapter.number,
            chapter_title=chapter.title,
            book_title=project.title or project.theme,
            writing_style=persona.writing_style or "clear and conversational",
            professional_history=persona.professional_history or "not provided",
            personal_stories=persona.personal_stories or "none",
            theme=project.theme,
            target_audience=project.target_audience or "general readers",
            overview=chapter.overview,
            pointers=chapter.pointers or "none",
            running_summary=running_summary or "(This is the first chapter.)",
            min_words=self.settings.chapter_min_words,
            summary_words=self.settings.summary_words,
        )

        logger.info("Drafting chapter %d: '%s'", chapter.number, chapter.title)

        reply = await self.llm.chat(
            system_prompt=self._system_prompt(),
            user_prompt=user_prompt,
            model=self.settings.llm_model_writing,
        )
        draft = DraftResponse.from_reply(reply)
        logger.info(
            "Chapter %d drafted: %d words, summary %d words",
            chapter.number, count_words(draft.content), count_words(draft.summary),
        )
        return draft
