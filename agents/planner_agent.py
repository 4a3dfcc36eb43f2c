"""Planner Agent: turns a theme and persona into a book outline."""

import logging
from typing import Optional

from agents.base_agent import BaseAgent
from agents.schemas import PlanResponse
from config.settings import Settings
from models.persona import AuthorPersona
from tools.agent_sdk_client import AgentSDKClient

logger = logging.getLogger(__name__)


class PlannerAgent(BaseAgent):
    """Generates the master plan: title, subtitle, audience and chapter list."""

    template_name = "planner"

    def __init__(
        self,
        llm_client: Optional[AgentSDKClient] = None,
        settings: Optional[Settings] = None,
    ):
        super().__init__(llm_client, settings)

    async def generate_plan(
        self,
        theme: str,
        persona: AuthorPersona,
        chapter_count: Optional[int] = None,
    ) -> PlanResponse:
        """Generate a book outline.

        Args:
            theme: Core theme of the book.
            persona: Author persona used as voice and background context.
            chapter_count: Number of chapters to request. Defaults to
                ``settings.outline_chapter_count``.

        Returns:
            PlanResponse with at most ``chapter_count`` chapters, in the order
            the model returned them. An unparsable reply yields an empty plan.
        """
        chapter_count = chapter_count or self.settings.outline_chapter_count

        user_prompt = self._user_prompt(
            theme=theme,
            writing_style=persona.writing_style or "clear and conversational",
            professional_history=persona.professional_history or "not provided",
            core_why=persona.core_why or "not provided",
            chapter_count=chapter_count,
            overview_words=self.settings.overview_words,
        )

        logger.info("Generating plan for theme '%s' (%d chapters)", theme[:50], chapter_count)

        reply = await self.llm.chat(
            system_prompt=self._system_prompt(),
            user_prompt=user_prompt,
            model=self.settings.llm_model_planning,
        )
        plan = PlanResponse.from_reply(reply)

        if len(plan.chapters) != chapter_count:
            logger.warning(
                "Plan returned %d chapters, requested %d",
                len(plan.chapters), chapter_count,
            )
        if len(plan.chapters) > chapter_count:
            plan = plan.model_copy(update={"chapters": plan.chapters[:chapter_count]})

        logger.info("Plan generated: '%s' with %d chapters", plan.title, len(plan.chapters))
        return plan
