"""
Shared pytest fixtures for the SnapSolve test suite.

Provides in-memory doubles for the capture service, the vision provider
and the overlay window so controller tests run without a display,
network access or files in ~/Pictures.
"""

import sys
from pathlib import Path
from typing import Any, Optional, Sequence

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from snapsolve.desktop.surface import PresentationSurface
from snapsolve.llm.base import BaseVisionLLM
from snapsolve.session import SessionState
from snapsolve.vision.base import CaptureService, CapturedImage


def make_image(index: int, directory: Path = Path("/tmp")) -> CapturedImage:
    data = f"png-{index}".encode()
    return CapturedImage(
        image_data=data,
        path=directory / f"screenshot_{1000 + index}.png",
        timestamp=1000 + index,
    )


class FakeSurface(PresentationSurface):
    """Records every call in order, as (event, payload) tuples."""

    def __init__(self):
        self.events: list[tuple[str, Any]] = []
        self.visible = True

    def show(self):
        self.visible = True
        self.events.append(("show", None))

    def hide(self):
        self.visible = False
        self.events.append(("hide", None))

    def send(self, channel: str, payload: Optional[Any] = None):
        self.events.append((channel, payload))

    def messages(self, channel: str) -> list:
        return [payload for event, payload in self.events if event == channel]


class FakeCaptureService(CaptureService):
    """Returns numbered images. Set `fail` to make the next capture raise."""

    def __init__(self, surface: Optional[FakeSurface] = None):
        self.surface = surface
        self.calls = 0
        self.fail: Optional[Exception] = None
        self.visible_during_capture: list[bool] = []

    @property
    def name(self) -> str:
        return "Fake"

    def capture(self) -> CapturedImage:
        self.calls += 1
        if self.surface is not None:
            self.visible_during_capture.append(self.surface.visible)
        if self.fail is not None:
            error, self.fail = self.fail, None
            raise error
        return make_image(self.calls)


class FakeProvider(BaseVisionLLM):
    """Records each request; answers with `reply` or raises `fail`."""

    name = "fake"
    model = "fake-vision"

    def __init__(self, reply: str = "42"):
        self.reply = reply
        self.fail: Optional[Exception] = None
        self.requests: list[tuple[str, tuple]] = []

    async def answer(self, prompt: str, images: Sequence[CapturedImage]) -> str:
        self.requests.append((prompt, tuple(images)))
        if self.fail is not None:
            raise self.fail
        return self.reply


@pytest.fixture
def surface():
    return FakeSurface()


@pytest.fixture
def capture_service(surface):
    return FakeCaptureService(surface)


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def session():
    return SessionState()


@pytest.fixture
def controller(session, capture_service, provider, surface):
    from snapsolve.controller import CaptureController
    return CaptureController(
        session=session,
        capture_service=capture_service,
        provider=provider,
        surface=surface,
        prompt="Solve it",
        settle_delay=0,
    )


@pytest.fixture
def write_config(tmp_path):
    """Write a config file and return its path."""
    import json

    def _write(data, name="config.json"):
        path = tmp_path / name
        if isinstance(data, str):
            path.write_text(data, encoding="utf-8")
        else:
            path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
