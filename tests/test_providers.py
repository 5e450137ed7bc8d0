"""
Tests for the OpenAI and Gemini vision providers.

SDK clients are replaced by mocks; no network access.

Run with:  pytest tests/test_providers.py -v
"""

import asyncio
import base64
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from snapsolve.config import Provider, ProviderConfig
from snapsolve.llm import (
    GeminiVisionProvider,
    OpenAIVisionProvider,
    VisionProviderError,
    create_provider,
)

from conftest import make_image


def openai_response(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


@pytest.fixture
def openai_client():
    client = MagicMock()
    client.chat.completions.create = AsyncMock(return_value=openai_response("x = 3"))
    return client


@pytest.fixture
def gemini_client():
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(return_value=SimpleNamespace(text="x = 3"))
    return client


class TestOpenAIVisionProvider:

    def test_request_shape(self, openai_client):
        provider = OpenAIVisionProvider("sk-test", model="gpt-4o-mini", client=openai_client)
        images = [make_image(1), make_image(2)]

        answer = asyncio.run(provider.answer("Solve it", images))

        assert answer == "x = 3"
        kwargs = openai_client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["max_tokens"] == 5000

        messages = kwargs["messages"]
        assert len(messages) == 1
        assert messages[0]["role"] == "user"

        content = messages[0]["content"]
        assert content[0] == {"type": "text", "text": "Solve it"}
        urls = [part["image_url"]["url"] for part in content[1:]]
        assert urls == [
            "data:image/png;base64," + base64.b64encode(b"png-1").decode(),
            "data:image/png;base64," + base64.b64encode(b"png-2").decode(),
        ]

    def test_sdk_error_is_wrapped(self, openai_client):
        openai_client.chat.completions.create.side_effect = RuntimeError("401 invalid key")
        provider = OpenAIVisionProvider("sk-test", client=openai_client)

        with pytest.raises(VisionProviderError, match="401 invalid key"):
            asyncio.run(provider.answer("Solve it", [make_image(1)]))

    def test_empty_answer_is_an_error(self, openai_client):
        openai_client.chat.completions.create.return_value = openai_response(None)
        provider = OpenAIVisionProvider("sk-test", client=openai_client)

        with pytest.raises(VisionProviderError, match="empty"):
            asyncio.run(provider.answer("Solve it", [make_image(1)]))


class TestGeminiVisionProvider:

    def test_request_shape(self, gemini_client):
        provider = GeminiVisionProvider("g-key", model="gemini-pro-vision", client=gemini_client)
        images = [make_image(1), make_image(2), make_image(3)]

        answer = asyncio.run(provider.answer("Solve it", images))

        assert answer == "x = 3"
        kwargs = gemini_client.aio.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-pro-vision"

        contents = kwargs["contents"]
        assert len(contents) == 1
        assert contents[0].role == "user"

        parts = contents[0].parts
        assert parts[0].text == "Solve it"
        assert [p.inline_data.mime_type for p in parts[1:]] == ["image/png"] * 3
        assert [p.inline_data.data for p in parts[1:]] == [b"png-1", b"png-2", b"png-3"]

    def test_sdk_error_is_wrapped(self, gemini_client):
        gemini_client.aio.models.generate_content.side_effect = RuntimeError("model not found")
        provider = GeminiVisionProvider("g-key", client=gemini_client)

        with pytest.raises(VisionProviderError, match="model not found"):
            asyncio.run(provider.answer("Solve it", [make_image(1)]))

    def test_blocked_response_without_text(self, gemini_client):
        gemini_client.aio.models.generate_content.return_value = SimpleNamespace(text=None)
        provider = GeminiVisionProvider("g-key", client=gemini_client)

        with pytest.raises(VisionProviderError, match="empty"):
            asyncio.run(provider.answer("Solve it", [make_image(1)]))


class TestCreateProvider:

    def test_openai(self):
        provider = create_provider(ProviderConfig(Provider.OPENAI, "sk-test", "gpt-4o", max_tokens=1000))
        assert isinstance(provider, OpenAIVisionProvider)
        assert provider.model == "gpt-4o"
        assert provider.max_tokens == 1000

    def test_gemini(self):
        provider = create_provider(ProviderConfig(Provider.GEMINI, "g-key", "gemini-pro-vision"))
        assert isinstance(provider, GeminiVisionProvider)
        assert provider.model == "gemini-pro-vision"
