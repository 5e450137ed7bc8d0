"""
Vision Module - Screen capture.

Architecture follows the Strategy pattern with abstract base class.
"""

from .base import CaptureService, CapturedImage, CaptureError
from .screen import ScreenCaptureService, default_pictures_dir

__all__ = [
    "CaptureService",
    "CapturedImage",
    "CaptureError",
    "ScreenCaptureService",
    "default_pictures_dir",
]
