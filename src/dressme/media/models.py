"""Frame data structures."""

from dataclasses import dataclass, field
import time

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True, slots=True)
class CapturedFrame:
    """Immutable decoded camera frame."""

    image: NDArray[np.uint8]  # BGR image data
    frame_number: int  # Sequential frame number
    captured_at: float = field(default_factory=time.monotonic)

    @property
    def size(self) -> tuple[int, int]:
        """Frame size as (width, height)."""
        height, width = self.image.shape[:2]
        return width, height
