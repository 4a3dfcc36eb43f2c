"""Integrity Agent: scores plagiarism and AI-likeness risk."""

import logging
from typing import Optional

from agents.base_agent import BaseAgent
from agents.schemas import IntegrityResponse
from config.settings import Settings
from tools.agent_sdk_client import AgentSDKClient
from tools.text_utils import truncate_prefix

logger = logging.getLogger(__name__)


class IntegrityAgent(BaseAgent):
    """Estimates a 0-100 risk that content reads as derivative or machine-written.

    Only the first ``settings.integrity_max_chars`` characters are submitted.
    """

    template_name = "integrity"

    def __init__(
        self,
        llm_client: Optional[AgentSDKClient] = None,
        settings: Optional[Settings] = None,
    ):
        super().__init__(llm_client, settings)

    async def check(self, content: str) -> IntegrityResponse:
        sample = truncate_prefix(content, self.settings.integrity_max_chars)
        if len(sample) < len(content):
            logger.debug("Integrity check truncated %d -> %d chars", len(content), len(sample))

        reply = await self.llm.chat(
            system_prompt=self._system_prompt(),
            user_prompt=self._user_prompt(content=sample),
            model=self.settings.llm_model_integrity,
        )
        result = IntegrityResponse.from_reply(reply)
        logger.info("Integrity check: score=%d", result.score)
        return result
