# LLM Module - cloud vision-language providers
from snapsolve.config import Provider, ProviderConfig

from .base import BaseVisionLLM, VisionProviderError
from .openai_provider import OpenAIVisionProvider
from .gemini_provider import GeminiVisionProvider


def create_provider(config: ProviderConfig) -> BaseVisionLLM:
    """
    Create the provider selected at startup.

    Args:
        config: Resolved provider config (see snapsolve.config.resolve_provider)

    Returns:
        Provider instance, fixed for the rest of the run
    """
    if config.provider is Provider.OPENAI:
        return OpenAIVisionProvider(
            api_key=config.api_key,
            model=config.model,
            max_tokens=config.max_tokens,
        )
    if config.provider is Provider.GEMINI:
        return GeminiVisionProvider(api_key=config.api_key, model=config.model)
    raise ValueError(f"Unknown provider: {config.provider}")


__all__ = [
    "BaseVisionLLM",
    "VisionProviderError",
    "OpenAIVisionProvider",
    "GeminiVisionProvider",
    "create_provider",
]
