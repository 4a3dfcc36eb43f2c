"""Editor agents: full-chapter humanize pass and targeted selection tweaks."""

import logging
from typing import Optional

from agents.base_agent import BaseAgent
from config.settings import Settings
from tools.agent_sdk_client import AgentSDKClient
from tools.text_utils import clean_free_text

logger = logging.getLogger(__name__)


class HumanizerAgent(BaseAgent):
    """Rewrites a chapter so it reads as human-written."""

    template_name = "humanizer"

    def __init__(
        self,
        llm_client: Optional[AgentSDKClient] = None,
        settings: Optional[Settings] = None,
    ):
        super().__init__(llm_client, settings)

    async def humanize(self, content: str) -> str:
        """Return the rewritten chapter, or ``content`` unchanged on an empty reply."""
        logger.info("Humanizing chapter (%d chars)", len(content))
        raw_text = await self.llm.chat(
            system_prompt=self._system_prompt(),
            user_prompt=self._user_prompt(content=content),
            model=self.settings.llm_model_humanize,
        )
        rewritten = clean_free_text(raw_text)
        if not rewritten:
            logger.warning("Humanize pass returned no text, keeping original")
            return content
        return rewritten


class TweakAgent(BaseAgent):
    """Applies an instruction to a selected passage only."""

    template_name = "tweak"

    def __init__(
        self,
        llm_client: Optional[AgentSDKClient] = None,
        settings: Optional[Settings] = None,
    ):
        super().__init__(llm_client, settings)

    async def tweak(self, text: str, instruction: str) -> str:
        """Return the replacement for ``text``; ``text`` itself on an empty reply."""
        logger.info("Tweaking %d chars: %s", len(text), instruction[:60])
        raw_text = await self.llm.chat(
            system_prompt=self._system_prompt(),
            user_prompt=self._user_prompt(text=text, instruction=instruction),
            model=self.settings.llm_model_tweak,
        )
        replacement = clean_free_text(raw_text)
        return replacement or text
