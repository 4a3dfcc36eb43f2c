"""Media agents: cover art and narration previews."""

import logging
from typing import Optional

from agents.base_agent import BaseAgent
from config.settings import Settings
from models.project import MediaAsset
from tools.agent_sdk_client import AgentSDKClient
from tools.media_client import MediaClient
from tools.text_utils import truncate_prefix

logger = logging.getLogger(__name__)


class _MediaAgent(BaseAgent):
    def __init__(
        self,
        media_client: Optional[MediaClient] = None,
        settings: Optional[Settings] = None,
        llm_client: Optional[AgentSDKClient] = None,
    ):
        super().__init__(llm_client, settings)
        self.media = media_client or MediaClient(self.settings)


class CoverAgent(_MediaAgent):
    """Generates cover art from the book title and theme."""

    template_name = "cover"

    async def generate_cover(self, subject: str) -> MediaAsset:
        prompt = self._user_prompt(subject=subject)
        logger.info("Generating cover for '%s'", subject[:60])
        return await self.media.generate_image(prompt)


class NarrationAgent(_MediaAgent):
    """Narrates a preview of a chapter.

    Only the first ``settings.narration_preview_chars`` characters are
    narrated; this is a preview, not a full audiobook.
    """

    template_name = "narration"

    async def narrate(self, text: str) -> MediaAsset:
        preview = truncate_prefix(text, self.settings.narration_preview_chars)
        logger.info("Narrating preview: %d of %d chars", len(preview), len(text))
        return await self.media.synthesize_speech(self._user_prompt(text=preview))
