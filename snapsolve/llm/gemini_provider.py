"""
Vision provider using Google Gemini (google-genai SDK).

Request shape: one user turn whose parts are the prompt text followed by
one inline-data part per screenshot, each tagged image/png.
"""

import logging
from typing import Optional, Sequence

from google import genai
from google.genai import types

from snapsolve.vision.base import CapturedImage
from .base import BaseVisionLLM, VisionProviderError

logger = logging.getLogger(__name__)


class GeminiVisionProvider(BaseVisionLLM):
    """
    Client for Gemini vision models.

    The async surface of the SDK lives under client.aio.
    """

    name = "gemini"

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-pro-vision",
        client: Optional[genai.Client] = None,
    ):
        self.model = model
        self._client = client or genai.Client(api_key=api_key)

    def _build_contents(self, prompt: str, images: Sequence[CapturedImage]) -> list[types.Content]:
        parts = [types.Part.from_text(text=prompt)]
        for img in images:
            parts.append(types.Part.from_bytes(data=img.image_data, mime_type=img.mime_type))
        return [types.Content(role="user", parts=parts)]

    async def answer(self, prompt: str, images: Sequence[CapturedImage]) -> str:
        logger.info(f"📤 Sending {len(images)} image(s) to Gemini ({self.model})...")
        try:
            response = await self._client.aio.models.generate_content(
                model=self.model,
                contents=self._build_contents(prompt, images),
            )
            text = response.text
        except Exception as e:
            raise VisionProviderError(f"Gemini request failed: {e}") from e

        if not text:
            raise VisionProviderError("Gemini returned an empty answer")
        return text
