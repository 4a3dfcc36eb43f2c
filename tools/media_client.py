"""Gemini client for the media intents: cover art and narration audio."""

import logging
from typing import Optional

from google import genai
from google.genai import types

from config.exceptions import InvalidConfigError, LLMError, MediaGenerationError
from config.settings import Settings
from models.project import MediaAsset

logger = logging.getLogger(__name__)

_DEFAULT_IMAGE_MIME = "image/png"
_DEFAULT_AUDIO_MIME = "audio/pcm"


def _first_inline_part(response):
    """Return the first inline-data part of a generate_content response."""
    for candidate in getattr(response, "candidates", None) or []:
        content = getattr(candidate, "content", None)
        for part in getattr(content, "parts", None) or []:
            inline = getattr(part, "inline_data", None)
            if inline is not None and getattr(inline, "data", None):
                return inline
    return None


class MediaClient:
    """Wraps ``google.genai`` image and speech generation."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self._client = None
        self.total_calls = 0

    def _get_client(self) -> genai.Client:
        """Lazily create the Gemini client."""
        if self._client is None:
            if not self.settings.gemini_api_key:
                raise InvalidConfigError("GEMINI_API_KEY is not set; media generation is unavailable")
            self._client = genai.Client(api_key=self.settings.gemini_api_key)
        return self._client

    async def _generate(self, model: str, contents, config: types.GenerateContentConfig):
        client = self._get_client()
        self.total_calls += 1
        logger.debug("Gemini media call: model=%s", model)
        try:
            return await client.aio.models.generate_content(model=model, contents=contents, config=config)
        except Exception as e:
            raise LLMError(f"Gemini media call failed: {e}") from e

    async def generate_image(self, prompt: str) -> MediaAsset:
        """Generate a single image for ``prompt``.

        Raises:
            MediaGenerationError: If the response carries no image part.
        """
        config = types.GenerateContentConfig(
            response_modalities=["IMAGE"],
            image_config=types.ImageConfig(aspect_ratio=self.settings.cover_aspect_ratio),
        )
        response = await self._generate(self.settings.image_model, prompt, config)
        inline = _first_inline_part(response)
        if inline is None:
            raise MediaGenerationError("Image model returned no image data", {"model": self.settings.image_model})
        asset = MediaAsset(mime_type=inline.mime_type or _DEFAULT_IMAGE_MIME, data=inline.data)
        logger.info("Generated image: %s, %d bytes", asset.mime_type, len(asset.data))
        return asset

    async def synthesize_speech(self, text: str) -> MediaAsset:
        """Narrate ``text`` with the configured prebuilt voice.

        Raises:
            MediaGenerationError: If the response carries no audio part.
        """
        config = types.GenerateContentConfig(
            response_modalities=["AUDIO"],
            speech_config=types.SpeechConfig(
                voice_config=types.VoiceConfig(
                    prebuilt_voice_config=types.PrebuiltVoiceConfig(voice_name=self.settings.tts_voice),
                ),
            ),
        )
        response = await self._generate(self.settings.tts_model, text, config)
        inline = _first_inline_part(response)
        if inline is None:
            raise MediaGenerationError("Speech model returned no audio data", {"model": self.settings.tts_model})
        asset = MediaAsset(mime_type=inline.mime_type or _DEFAULT_AUDIO_MIME, data=inline.data)
        logger.info("Synthesized narration: %s, %d bytes", asset.mime_type, len(asset.data))
        return asset
