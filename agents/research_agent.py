"""Research Agent: looks up the author's public professional identity."""

import logging
from typing import Optional

from agents.base_agent import BaseAgent
from agents.schemas import NO_INFORMATION
from config.settings import Settings
from tools.agent_sdk_client import AgentSDKClient
from tools.text_utils import clean_free_text

logger = logging.getLogger(__name__)

# Built-in Agent SDK tool used as search grounding
_RESEARCH_TOOLS = ["WebSearch"]


class ResearchAgent(BaseAgent):
    """Summarizes an author's professional history from public sources."""

    template_name = "research"

    def __init__(
        self,
        llm_client: Optional[AgentSDKClient] = None,
        settings: Optional[Settings] = None,
    ):
        super().__init__(llm_client, settings)

    async def research(self, name: str, handles: str = "") -> str:
        """Return a free-text professional profile for ``name``.

        Falls back to ``NO_INFORMATION`` when the model returns nothing.
        """
        user_prompt = self._user_prompt(name=name, handles=handles or "none provided")

        logger.info("Researching identity for '%s'", name)
        raw_text = await self.llm.chat_with_tools(
            system_prompt=self._system_prompt(),
            user_prompt=user_prompt,
            model=self.settings.llm_model_research,
            max_turns=self.settings.research_max_turns,
            allowed_tools=_RESEARCH_TOOLS,
        )

        profile = clean_free_text(raw_text)
        if not profile:
            logger.warning("Identity research for '%s' returned no text", name)
            return NO_INFORMATION
        return profile
