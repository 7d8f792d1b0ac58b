"""Frame sources.

Hidden design decisions:
- Camera access through OpenCV on a dedicated producer thread
- Single-slot latest-value hand-off (no queue, unread frames are overwritten)
- Still images as a camera-free frame source
"""

import logging
import threading
import time
from pathlib import Path

import cv2
import numpy as np
from numpy.typing import NDArray

from .base import FrameSource
from .models import CapturedFrame

logger = logging.getLogger(__name__)


class LatestFrame:
    """Single-slot channel holding the most recent frame.

    The producer overwrites the slot on every capture and never blocks on
    the consumer; readers get whatever was delivered last.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._frame: CapturedFrame | None = None
        self._count = 0

    def publish(self, image: NDArray[np.uint8]) -> CapturedFrame:
        """Store a new frame, replacing the previous one."""
        with self._lock:
            self._count += 1
            frame = CapturedFrame(image=image, frame_number=self._count)
            self._frame = frame
        return frame

    def get(self) -> CapturedFrame | None:
        with self._lock:
            return self._frame

    def clear(self) -> None:
        with self._lock:
            self._frame = None

    @property
    def frames_published(self) -> int:
        with self._lock:
            return self._count


class CameraFrameSource(FrameSource):
    """Continuously captures frames from a local camera.

    Example:
        source = CameraFrameSource(camera_index=0)
        source.start()
        frame = source.latest()
        source.stop()
    """

    def __init__(self, camera_index: int = 0, retry_delay: float = 0.01) -> None:
        self._camera_index = camera_index
        self._retry_delay = retry_delay
        self._slot = LatestFrame()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def latest(self) -> CapturedFrame | None:
        return self._slot.get()

    def start(self) -> None:
        """Start the capture thread (no-op if already running)."""
        if self.is_running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._capture_loop,
            name=f"camera-{self._camera_index}",
            daemon=True,
        )
        self._thread.start()

    def stop(self) -> None:
        """Stop the capture thread and release the camera."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=2.0)
            self._thread = None

    def wait_for_frame(self, timeout: float) -> CapturedFrame | None:
        """Block until a first frame arrives or the timeout expires."""
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            frame = self._slot.get()
            if frame is not None:
                return frame
            if not self.is_running:
                break
            time.sleep(0.05)
        return self._slot.get()

    def _capture_loop(self) -> None:
        capture = cv2.VideoCapture(self._camera_index)
        try:
            if not capture.isOpened():
                logger.error("Camera %d could not be opened", self._camera_index)
                return

            logger.debug("Camera %d opened", self._camera_index)
            while not self._stop_event.is_set():
                ok, image = capture.read()
                if ok and image is not None:
                    self._slot.publish(image)
                else:
                    time.sleep(self._retry_delay)
        finally:
            capture.release()
            logger.debug("Camera %d released", self._camera_index)


class StillImageFrameSource(FrameSource):
    """Serves a single image file as the latest frame."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._slot = LatestFrame()

    def start(self) -> None:
        image = cv2.imread(str(self._path), cv2.IMREAD_COLOR)
        if image is None:
            logger.warning("Could not decode image %s", self._path)
            self._slot.clear()
            return
        self._slot.publish(image)

    def latest(self) -> CapturedFrame | None:
        return self._slot.get()
