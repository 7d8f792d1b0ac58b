"""Abstract interfaces for the OS media services.

The orchestrators only see these interfaces. The abstraction hides:
- Which camera API produces frames and on which thread
- How audio bytes are decoded and sent to the output device
- Which local speech engine is used
"""

from abc import ABC, abstractmethod

from .models import CapturedFrame


class AudioPlaybackError(Exception):
    """Audio bytes could not be decoded or played."""


class FrameSource(ABC):
    """Pull accessor for the most recent camera frame."""

    @abstractmethod
    def latest(self) -> CapturedFrame | None:
        """Return the most recently delivered frame, or None if none yet."""

    def start(self) -> None:
        """Start producing frames."""

    def stop(self) -> None:
        """Stop producing frames."""


class AudioPlayer(ABC):
    """Plays opaque compressed audio buffers."""

    @abstractmethod
    def play(self, data: bytes) -> None:
        """Start playing an audio buffer, replacing anything playing.

        Raises:
            AudioPlaybackError: If the buffer cannot be decoded or played
        """

    @abstractmethod
    def stop(self) -> None:
        """Stop playback immediately."""

    @abstractmethod
    def wait(self) -> None:
        """Block until the current buffer has finished playing."""


class SpeechFallback(ABC):
    """Network-independent local speech synthesis."""

    @abstractmethod
    def speak(self, text: str) -> None:
        """Speak a text without blocking the caller."""

    @abstractmethod
    def stop(self) -> None:
        """Stop speaking immediately and drop pending text."""

    @abstractmethod
    def wait(self) -> None:
        """Block until queued text has been spoken."""
