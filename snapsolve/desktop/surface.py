"""
Presentation Surface - the overlay window the controller talks to.

Messages flow one way, controller -> window:

    update-instruction(text)   banner text
    hide-instruction()         hide banner before a capture
    analysis-result(text)      model answer
    clear-result()             drop the displayed answer
    error(message)             capture or provider failure
"""

import json
import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Optional

logger = logging.getLogger(__name__)

UPDATE_INSTRUCTION = "update-instruction"
HIDE_INSTRUCTION = "hide-instruction"
ANALYSIS_RESULT = "analysis-result"
CLEAR_RESULT = "clear-result"
ERROR = "error"

CHANNELS = (UPDATE_INSTRUCTION, HIDE_INSTRUCTION, ANALYSIS_RESULT, CLEAR_RESULT, ERROR)


class PresentationSurface(ABC):
    """Window abstraction used by the controller."""

    @abstractmethod
    def show(self):
        pass

    @abstractmethod
    def hide(self):
        pass

    @abstractmethod
    def send(self, channel: str, payload: Optional[Any] = None):
        """Deliver one message to the page."""
        pass

    def update_instruction(self, text: str):
        self.send(UPDATE_INSTRUCTION, text)

    def hide_instruction(self):
        self.send(HIDE_INSTRUCTION)

    def show_result(self, text: str):
        self.send(ANALYSIS_RESULT, text)

    def clear_result(self):
        self.send(CLEAR_RESULT)

    def show_error(self, message: str):
        self.send(ERROR, message)


class WebviewSurface(PresentationSurface):
    """
    Surface backed by a pywebview window.

    Messages become window.snapsolve.receive(channel, payload) calls.
    Anything sent before the page finished loading is queued and flushed
    from on_loaded().
    """

    def __init__(self, window=None):
        self.window = window
        self._loaded = False
        self._pending: list[str] = []
        self._lock = threading.Lock()

    def attach(self, window):
        """Bind the window and hook its loaded event."""
        self.window = window
        window.events.loaded += self.on_loaded

    def on_loaded(self):
        # Flush under the lock so later sends cannot overtake queued ones
        with self._lock:
            pending, self._pending = self._pending, []
            logger.info(f"🖼️ Window loaded, flushing {len(pending)} queued message(s)")
            for script in pending:
                self._eval_js(script)
            self._loaded = True

    @staticmethod
    def build_script(channel: str, payload: Optional[Any] = None) -> str:
        # json.dumps gives a valid, escaped JS literal
        return f"window.snapsolve && window.snapsolve.receive({json.dumps(channel)}, {json.dumps(payload)})"

    def send(self, channel: str, payload: Optional[Any] = None):
        if channel not in CHANNELS:
            raise ValueError(f"Unknown surface channel: {channel}")
        script = self.build_script(channel, payload)
        with self._lock:
            if not self._loaded:
                self._pending.append(script)
                return
            self._eval_js(script)

    def _eval_js(self, script: str):
        """Safely evaluate JavaScript in the window."""
        if not self.window:
            return
        try:
            self.window.evaluate_js(script)
        except Exception as e:
            logger.error(f"JS eval error: {e}")

    def show(self):
        if self.window:
            self.window.show()

    def hide(self):
        if self.window:
            self.window.hide()
