"""
Vision provider using the OpenAI Chat Completions API.

The prompt and all screenshots go out as ONE user message:
    [{"type": "text", ...}, {"type": "image_url", ...}, ...]
"""

import logging
from typing import Optional, Sequence

from openai import AsyncOpenAI

from snapsolve.vision.base import CapturedImage
from .base import BaseVisionLLM, VisionProviderError

logger = logging.getLogger(__name__)


class OpenAIVisionProvider(BaseVisionLLM):
    """
    Client for OpenAI vision models (gpt-4o-mini by default).

    Attributes:
        model: Model name (e.g., "gpt-4o-mini")
        max_tokens: Completion limit for the answer
    """

    name = "openai"

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        max_tokens: int = 5000,
        client: Optional[AsyncOpenAI] = None,
    ):
        self.model = model
        self.max_tokens = max_tokens
        # No timeout of our own: the request runs to completion or failure
        self._client = client or AsyncOpenAI(api_key=api_key)

    def _build_content(self, prompt: str, images: Sequence[CapturedImage]) -> list[dict]:
        content = [{"type": "text", "text": prompt}]
        for img in images:
            content.append({
                "type": "image_url",
                "image_url": {"url": img.to_data_url()}
            })
        return content

    async def answer(self, prompt: str, images: Sequence[CapturedImage]) -> str:
        logger.info(f"📤 Sending {len(images)} image(s) to OpenAI ({self.model})...")
        try:
            response = await self._client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": self._build_content(prompt, images)}],
                max_tokens=self.max_tokens,
            )
        except Exception as e:
            raise VisionProviderError(f"OpenAI request failed: {e}") from e

        if not response.choices:
            raise VisionProviderError("OpenAI returned no choices")

        text = response.choices[0].message.content
        if not text:
            raise VisionProviderError("OpenAI returned an empty answer")
        return text
