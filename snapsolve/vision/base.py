"""
Capture Base Classes - Abstract interface for screen capture.

Following the project's architecture patterns:
- Abstract Base Class (ABC) for the capture interface
- Dataclass for the captured image
- Type hints throughout
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
import base64


class CaptureError(RuntimeError):
    """Raised when the screen could not be captured or the file could not be read back."""


@dataclass(frozen=True)
class CapturedImage:
    """
    One screenshot held in memory plus the file it was written to.

    Attributes:
        image_data: Raw PNG bytes as read back from disk
        path: File the screenshot was persisted to
        width: Image width in pixels
        height: Image height in pixels
        timestamp: Unix timestamp (milliseconds) used to name the file
        base64_data: Base64 encoded image for LLM APIs
        mime_type: MIME type sent to providers
    """
    image_data: bytes
    path: Path
    width: int = 0
    height: int = 0
    timestamp: int = 0
    base64_data: str = ""
    mime_type: str = "image/png"

    def __post_init__(self):
        """Generate base64 data if not provided."""
        object.__setattr__(self, "path", Path(self.path))
        if not self.base64_data and self.image_data:
            object.__setattr__(self, "base64_data", base64.b64encode(self.image_data).decode("utf-8"))

    def to_data_url(self) -> str:
        """Convert to data URL for HTML/API use."""
        return f"data:{self.mime_type};base64,{self.base64_data}"


class CaptureService(ABC):
    """
    Abstract base class for capture backends.

    Implementations take one full-screen picture, persist it to a
    timestamped PNG and return it as a CapturedImage.

    Example usage:
        service = ScreenCaptureService()
        image = service.capture()
    """

    @abstractmethod
    def capture(self) -> CapturedImage:
        """
        Capture the screen once.

        Returns:
            CapturedImage with the PNG payload and its file path

        Raises:
            CaptureError: if grabbing, saving or reading back fails
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend name for logging."""
        pass
