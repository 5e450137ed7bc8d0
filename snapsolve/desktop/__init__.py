"""
Desktop Module

Provides the overlay side of the app:
- PresentationSurface / WebviewSurface (always-on-top pywebview window)
- Global hotkeys (pynput)

DesktopSolver, which wires them to the controller, lives in
snapsolve.desktop.app (it imports the controller, which imports this package).
"""

from .surface import PresentationSurface, WebviewSurface
from .hotkeys import HotkeyManager, build_hotkeys

__all__ = [
    "PresentationSurface",
    "WebviewSurface",
    "HotkeyManager",
    "build_hotkeys",
]
