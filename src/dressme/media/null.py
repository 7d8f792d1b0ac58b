"""Silent output backends.

Used when no audio device should be touched (``--mute``). Text handed to
them is only logged.
"""

import logging

from .base import AudioPlayer, SpeechFallback

logger = logging.getLogger(__name__)


class NullAudioPlayer(AudioPlayer):
    """Accepts audio buffers and discards them."""

    def play(self, data: bytes) -> None:
        logger.info("Muted: discarding %d bytes of audio", len(data))

    def stop(self) -> None:
        pass

    def wait(self) -> None:
        pass


class NullSpeechFallback(SpeechFallback):
    """Accepts text and discards it."""

    def speak(self, text: str) -> None:
        logger.info("Muted: not speaking %r", text[:50])

    def stop(self) -> None:
        pass

    def wait(self) -> None:
        pass
