"""
Base module for vision LLMs.

This file defines the INTERFACE that every vision provider must implement.
Any class that inherits from BaseVisionLLM MUST implement answer().

Why is this useful?
- The controller only knows BaseVisionLLM, never OpenAI or Gemini directly
- The provider is picked once at startup by create_provider()
"""

from abc import ABC, abstractmethod
from typing import Sequence

from snapsolve.vision.base import CapturedImage


class VisionProviderError(RuntimeError):
    """Raised when a provider request fails or comes back without text."""


class BaseVisionLLM(ABC):
    """
    Abstract base class for cloud vision-language models.

    Attributes:
        name: Provider name for logging ("openai", "gemini")
        model: Model identifier sent with every request

    Example:
        class OpenAIVisionProvider(BaseVisionLLM):
            async def answer(self, prompt, images):
                # OpenAI-specific implementation
                ...
    """

    name: str = "base"
    model: str = ""

    @abstractmethod
    async def answer(self, prompt: str, images: Sequence[CapturedImage]) -> str:
        """
        Ask the model about a set of screenshots.

        Args:
            prompt: Instruction text, sent first
            images: Every screenshot of the session, in capture order

        Returns:
            The model's answer as plain text

        Raises:
            VisionProviderError: on network, auth or model errors
        """
        pass
