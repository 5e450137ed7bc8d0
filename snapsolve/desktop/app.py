"""
Desktop Solver Application

An always-on-top overlay window that stays out of the way until a hotkey
is pressed:
- Mod+Shift+S: screenshot and solve
- Mod+Shift+A: add screenshot (multi-capture)
- Mod+Shift+R: reset
- Mod+Shift+Q: quit

Threads:
- main thread: pywebview GUI loop (webview.start blocks)
- background thread: asyncio loop running every controller operation
- pynput thread: hotkey callbacks, which only schedule work on the loop
"""

import asyncio
import logging
import threading
from concurrent.futures import Future
from pathlib import Path
from typing import Callable, Optional

from snapsolve.config import AppConfig
from snapsolve.controller import CaptureController
from snapsolve.llm import BaseVisionLLM, create_provider
from snapsolve.session import SessionState
from snapsolve.vision import CaptureService, ScreenCaptureService

from .hotkeys import HotkeyManager, modifier_label
from .surface import WebviewSurface

logger = logging.getLogger(__name__)

try:
    import webview
    WEBVIEW_AVAILABLE = True
except ImportError:
    WEBVIEW_AVAILABLE = False
    logger.warning("pywebview not installed. Install with: pip install pywebview")

HTML_PATH = Path(__file__).parent.parent / "frontend" / "index.html"


class DesktopSolver:
    """
    Main desktop application.

    Owns the session, the overlay window, the hotkeys and the asyncio
    loop the controller runs on. Everything is created once here and
    torn down in stop().
    """

    def __init__(
        self,
        config: AppConfig,
        provider: Optional[BaseVisionLLM] = None,
        capture_service: Optional[CaptureService] = None,
        debug: bool = False,
    ):
        self.config = config
        self.debug = debug

        self.session = SessionState()
        self.capture_service = capture_service or ScreenCaptureService(
            directory=config.capture.directory,
            monitor=config.capture.monitor,
        )
        self.provider = provider or create_provider(config.provider)
        self.surface = WebviewSurface()

        self.controller = CaptureController(
            session=self.session,
            capture_service=self.capture_service,
            provider=self.provider,
            surface=self.surface,
            prompt=config.prompt,
            settle_delay=config.capture.settle_delay,
            on_quit=self.stop,
            modifier=modifier_label(),
        )

        self.hotkeys = HotkeyManager({
            "capture_and_solve": lambda: self.schedule(self.controller.capture_and_solve),
            "add_to_session": lambda: self.schedule(self.controller.add_to_session),
            "reset": lambda: self.schedule(self.controller.reset),
            "quit": lambda: self.schedule(self.controller.quit),
        })

        self.window = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._loop_thread: Optional[threading.Thread] = None
        self._stopped = threading.Event()

        logger.info("DesktopSolver initialized")

    # ==================== Event loop ====================

    def start_loop(self):
        """Run the asyncio event loop in a background thread."""
        if self._loop:
            return
        self._loop = asyncio.new_event_loop()

        def run_loop():
            asyncio.set_event_loop(self._loop)
            self._loop.run_forever()

        self._loop_thread = threading.Thread(target=run_loop, daemon=True)
        self._loop_thread.start()
        logger.info("✅ Event loop started in background thread")

    def schedule(self, operation: Callable) -> Optional[Future]:
        """Run a controller coroutine on the loop from any thread."""
        if not self._loop or self._stopped.is_set():
            logger.warning(f"Ignoring {operation.__name__}: app is not running")
            return None

        future = asyncio.run_coroutine_threadsafe(operation(), self._loop)

        def on_done(f):
            try:
                f.result()
            except Exception as e:
                logger.error(f"❌ {operation.__name__} failed: {e}", exc_info=True)

        future.add_done_callback(on_done)
        return future

    # ==================== Window ====================

    def _create_window(self):
        """Create the overlay window."""
        window_config = self.config.window
        return webview.create_window(
            title="SnapSolve",
            url=f"file://{HTML_PATH}",
            width=window_config.width,
            height=window_config.height,
            frameless=window_config.frameless,
            easy_drag=True,
            on_top=window_config.on_top,
            transparent=window_config.transparent,
        )

    def _on_window_closed(self):
        logger.info("Window closed")
        self.stop()

    # ==================== Lifecycle ====================

    def start(self):
        """Start the app. Blocks until the window is closed or quit is pressed."""
        if not WEBVIEW_AVAILABLE:
            logger.error("pywebview is required! Install with: pip install pywebview")
            return

        self.start_loop()

        self.window = self._create_window()
        self.surface.attach(self.window)
        self.window.events.closed += self._on_window_closed
        self.surface.update_instruction(self.controller.default_instruction)

        self.hotkeys.register()

        # Start webview (blocks until closed)
        webview.start(debug=self.debug)
        self.stop()

    def stop(self):
        """Unregister hotkeys, close the window and stop the loop. Idempotent."""
        if self._stopped.is_set():
            return
        self._stopped.set()

        self.hotkeys.unregister_all()

        if self.window:
            try:
                self.window.destroy()
            except Exception as e:
                logger.debug(f"Window destroy error: {e}")

        if self._loop and self._loop.is_running():
            self._loop.call_soon_threadsafe(self._loop.stop)

        logger.info("👋 Goodbye!")
