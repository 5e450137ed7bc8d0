"""
Session state - the screenshots collected since the last reset.
"""

from dataclasses import dataclass, field

from snapsolve.vision.base import CapturedImage


@dataclass
class SessionState:
    """
    Screenshots of the current session plus the multi-capture flag.

    Insertion order is capture order. Only the controller mutates it.
    Dispatch does not clear it; only reset() does.
    """
    images: list[CapturedImage] = field(default_factory=list)
    multi_capture: bool = False

    @property
    def count(self) -> int:
        return len(self.images)

    def add(self, image: CapturedImage):
        self.images.append(image)

    def snapshot(self) -> tuple[CapturedImage, ...]:
        """Immutable copy of the images, in capture order."""
        return tuple(self.images)

    def reset(self):
        self.images.clear()
        self.multi_capture = False
