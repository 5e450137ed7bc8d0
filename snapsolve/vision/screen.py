"""
Screen Capture Service - full-screen screenshots written to disk.

Uses:
- mss (cross-platform screen capture, fast)
- PIL for PNG encoding

Each capture is saved as screenshot_<unix-millis>.png in the pictures
directory and read back, so what gets sent to the model is exactly
what is on disk. Files are never deleted.
"""

import os
import time
from pathlib import Path
from typing import Optional
import logging

from .base import CaptureService, CapturedImage, CaptureError

logger = logging.getLogger(__name__)


def default_pictures_dir() -> Path:
    """
    Platform pictures directory.

    $XDG_PICTURES_DIR wins when set, otherwise ~/Pictures.
    """
    xdg = os.environ.get("XDG_PICTURES_DIR")
    if xdg:
        return Path(xdg).expanduser()
    return Path.home() / "Pictures"


def screenshot_filename(timestamp_ms: int) -> str:
    return f"screenshot_{timestamp_ms}.png"


class ScreenCaptureService(CaptureService):
    """
    Screen capture backend using mss (cross-platform).

    A new mss handle is opened per capture: captures run on an executor
    thread and mss handles must not cross threads.

    Example:
        service = ScreenCaptureService(directory=Path("~/Pictures").expanduser())
        image = service.capture()
        print(image.path)
    """

    def __init__(
        self,
        directory: Optional[Path] = None,
        monitor: int = 0,
    ):
        """
        Initialize screen capture service.

        Args:
            directory: Where screenshots are written (default: pictures dir)
            monitor: Monitor index (0 = all monitors, 1+ = specific)
        """
        self.directory = Path(directory).expanduser() if directory else default_pictures_dir()
        self.monitor = monitor

        # Lazy imports
        self._mss = None
        self._Image = None

    def _ensure_imports(self):
        """Lazy load heavy dependencies."""
        if self._mss is None:
            import mss
            self._mss = mss

        if self._Image is None:
            from PIL import Image
            self._Image = Image

    @property
    def name(self) -> str:
        return "ScreenCapture"

    def _grab(self):
        with self._mss.mss() as sct:
            monitors = sct.monitors
            if 0 < self.monitor < len(monitors):
                return sct.grab(monitors[self.monitor])
            return sct.grab(monitors[0])

    def _next_path(self, timestamp: int):
        """First unused screenshot path at or after timestamp."""
        path = self.directory / screenshot_filename(timestamp)
        while path.exists():
            timestamp += 1
            path = self.directory / screenshot_filename(timestamp)
        return timestamp, path

    def capture(self) -> CapturedImage:
        """
        Capture the screen, save it as PNG and read it back.

        Returns:
            CapturedImage with the file bytes and path
        """
        try:
            self._ensure_imports()
            shot = self._grab()
            img = self._Image.frombytes("RGB", shot.size, shot.bgra, "raw", "BGRX")

            self.directory.mkdir(parents=True, exist_ok=True)
            timestamp, path = self._next_path(int(time.time() * 1000))
            img.save(path, format="PNG")

            image_data = path.read_bytes()
        except Exception as e:
            logger.error(f"Screen capture failed: {e}")
            raise CaptureError(f"Failed to capture screen: {e}") from e

        logger.info(f"📸 Screenshot saved: {path}")
        return CapturedImage(
            image_data=image_data,
            path=path,
            width=img.width,
            height=img.height,
            timestamp=timestamp,
        )
