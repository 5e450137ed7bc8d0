"""
Global hotkeys via pynput.

Cmd is used on macOS, Ctrl everywhere else.
"""

import logging
import sys
from typing import Callable, Optional

logger = logging.getLogger(__name__)

try:
    from pynput import keyboard
    PYNPUT_AVAILABLE = True
except ImportError:
    keyboard = None
    PYNPUT_AVAILABLE = False
    logger.warning("pynput not installed. Hotkeys disabled. Install with: pip install pynput")


def modifier_key(platform: Optional[str] = None) -> str:
    """pynput token for the platform's primary modifier."""
    platform = platform or sys.platform
    return "<cmd>" if platform == "darwin" else "<ctrl>"


def modifier_label(platform: Optional[str] = None) -> str:
    """Human-readable modifier name for instruction texts."""
    platform = platform or sys.platform
    return "Cmd" if platform == "darwin" else "Ctrl"


def build_hotkeys(platform: Optional[str] = None) -> dict[str, str]:
    """Action name -> pynput combination."""
    mod = modifier_key(platform)
    return {
        "capture_and_solve": f"{mod}+<shift>+s",
        "add_to_session": f"{mod}+<shift>+a",
        "reset": f"{mod}+<shift>+r",
        "quit": f"{mod}+<shift>+q",
    }


class HotkeyManager:
    """
    Registers the four global shortcuts.

    Args:
        handlers: Action name -> zero-arg callable, run on pynput's thread
        platform: Override sys.platform (tests)
    """

    def __init__(self, handlers: dict[str, Callable[[], None]], platform: Optional[str] = None):
        hotkeys = build_hotkeys(platform)
        unknown = set(handlers) - set(hotkeys)
        if unknown:
            raise ValueError(f"Unknown hotkey actions: {sorted(unknown)}")

        self.bindings = {hotkeys[action]: self._guard(action, fn) for action, fn in handlers.items()}
        self._listener = None

    @staticmethod
    def _guard(action: str, fn: Callable[[], None]) -> Callable[[], None]:
        def run():
            try:
                fn()
            except Exception as e:
                logger.error(f"Hotkey error ({action}): {e}")
        return run

    @property
    def registered(self) -> bool:
        return self._listener is not None

    def register(self) -> bool:
        """Start listening. Returns False when pynput is unavailable."""
        if not PYNPUT_AVAILABLE:
            logger.warning("pynput not available, hotkeys disabled")
            return False
        if self._listener:
            return True

        self._listener = keyboard.GlobalHotKeys(self.bindings)
        self._listener.daemon = True
        self._listener.start()
        logger.info(f"⌨️ Hotkeys enabled: {', '.join(self.bindings)}")
        return True

    def unregister_all(self):
        if self._listener:
            self._listener.stop()
            self._listener = None
            logger.info("⌨️ Hotkeys unregistered")
