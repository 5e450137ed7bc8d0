"""
Capture/Dispatch Controller - what the four hotkeys actually do.

    Mod+Shift+S  capture_and_solve()  capture, then send ALL session images
    Mod+Shift+A  add_to_session()     capture only (multi-capture mode)
    Mod+Shift+R  reset()              forget everything
    Mod+Shift+Q  quit()               unregister hotkeys and exit

Every coroutine here runs on the app's single asyncio loop. The only
suspension points are the settle delay, the capture call (run in the
default executor) and the provider request.

While one operation is in flight, further hotkey presses are ignored
(quit excepted).
"""

import asyncio
import logging
from typing import Callable, Optional

from snapsolve.config import DEFAULT_PROMPT
from snapsolve.desktop.surface import PresentationSurface
from snapsolve.llm.base import BaseVisionLLM
from snapsolve.session import SessionState
from snapsolve.vision.base import CaptureService, CapturedImage

logger = logging.getLogger(__name__)

DEFAULT_SETTLE_DELAY = 0.2


def default_instruction(modifier: str = "Ctrl") -> str:
    return f"{modifier}+Shift+S: Screenshot | {modifier}+Shift+A: Multi-mode"


def multi_instruction(modifier: str = "Ctrl") -> str:
    return f"Multi-mode: {modifier}+Shift+A to add, {modifier}+Shift+S to finalize"


class CaptureController:
    """
    Owns the session and drives capture service, provider and surface.

    Args:
        session: Session state (created at startup, one per app)
        capture_service: Takes the screenshots
        provider: Vision provider chosen at startup
        surface: Overlay window
        prompt: Instruction text sent before the images
        settle_delay: Seconds to wait after hiding the window before capturing
        on_quit: Shutdown hook (unregister hotkeys, close window)
        modifier: "Ctrl" or "Cmd", used in instruction texts
    """

    def __init__(
        self,
        session: SessionState,
        capture_service: CaptureService,
        provider: BaseVisionLLM,
        surface: PresentationSurface,
        prompt: str = DEFAULT_PROMPT,
        settle_delay: float = DEFAULT_SETTLE_DELAY,
        on_quit: Optional[Callable[[], None]] = None,
        modifier: str = "Ctrl",
    ):
        self.session = session
        self.capture_service = capture_service
        self.provider = provider
        self.surface = surface
        self.prompt = prompt
        self.settle_delay = settle_delay
        self.on_quit = on_quit
        self.default_instruction = default_instruction(modifier)
        self.multi_instruction = multi_instruction(modifier)
        self._busy = False

    @property
    def busy(self) -> bool:
        return self._busy

    def _begin(self, operation: str) -> bool:
        if self._busy:
            logger.info(f"⏳ {operation} ignored: another operation is still running")
            return False
        self._busy = True
        return True

    def _end(self):
        self._busy = False

    # ==================== Operations ====================

    async def capture_and_solve(self) -> Optional[str]:
        """
        Take one screenshot, then ask the provider about every image
        collected so far.

        Returns:
            The answer, or None if capture or dispatch failed (or busy)
        """
        if not self._begin("capture_and_solve"):
            return None
        try:
            image = await self._capture()
            if image is None:
                return None
            self.session.add(image)
            return await self._dispatch()
        finally:
            self._end()

    async def add_to_session(self) -> bool:
        """
        Enter multi-capture mode (first time only) and add one screenshot.

        Returns:
            True if a screenshot was added
        """
        if not self._begin("add_to_session"):
            return False
        try:
            if not self.session.multi_capture:
                self.session.multi_capture = True
                self.surface.update_instruction(self.multi_instruction)

            image = await self._capture()
            if image is None:
                return False
            self.session.add(image)
            logger.info(f"➕ Added screenshot {self.session.count} to session")

            self.surface.update_instruction(self.multi_instruction)
            return True
        finally:
            self._end()

    async def reset(self) -> bool:
        """Clear the session and the displayed answer."""
        if not self._begin("reset"):
            return False
        try:
            self.session.reset()
            self.surface.clear_result()
            self.surface.update_instruction(self.default_instruction)
            logger.info("🔄 Session reset")
            return True
        finally:
            self._end()

    async def quit(self):
        """Run the shutdown hook. Honored even while busy."""
        logger.info("👋 Quitting application...")
        if self.on_quit:
            self.on_quit()

    # ==================== Sub-protocols ====================

    async def _capture(self) -> Optional[CapturedImage]:
        """
        Hide the overlay, wait for the compositor, capture, show again.

        The window is shown again before any error is reported. On
        failure nothing is returned and the session is left untouched.
        """
        loop = asyncio.get_running_loop()
        image = None
        failure = None
        try:
            self.surface.hide_instruction()
            self.surface.hide()
            await asyncio.sleep(self.settle_delay)
            image = await loop.run_in_executor(None, self.capture_service.capture)
        except Exception as e:
            failure = e
        finally:
            self.surface.show()

        if failure is not None:
            logger.error(f"Capture error: {failure}")
            self.surface.show_error(str(failure))
            return None
        return image

    async def _dispatch(self) -> Optional[str]:
        images = self.session.snapshot()
        logger.info(f"🧠 Asking {self.provider.name} ({self.provider.model}) about {len(images)} screenshot(s)")
        try:
            text = await self.provider.answer(self.prompt, images)
        except Exception as e:
            logger.error(f"Error dispatching to {self.provider.name}: {e}", exc_info=True)
            self.surface.show_error(str(e))
            return None

        logger.info(f"✅ Answer received ({len(text)} chars)")
        self.surface.show_result(text)
        return text
