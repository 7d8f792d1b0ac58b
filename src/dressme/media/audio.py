"""Audio playback through PortAudio.

Hidden design decisions:
- Compressed buffers are decoded in memory with soundfile (libsndfile)
- Playback is non-blocking via sounddevice; a new buffer replaces the old one
"""

import io
import logging

import sounddevice as sd
import soundfile as sf

from .base import AudioPlaybackError, AudioPlayer

logger = logging.getLogger(__name__)


class SoundDeviceAudioPlayer(AudioPlayer):
    """Plays audio bytes on the default output device."""

    def __init__(self, device: int | str | None = None) -> None:
        self._device = device

    def play(self, data: bytes) -> None:
        if not data:
            raise AudioPlaybackError("Empty audio buffer")

        try:
            samples, samplerate = sf.read(io.BytesIO(data), dtype="float32")
        except (sf.LibsndfileError, RuntimeError, TypeError) as e:
            raise AudioPlaybackError(f"Unable to decode audio: {e}") from e

        try:
            sd.stop()
            sd.play(samples, samplerate, device=self._device)
        except sd.PortAudioError as e:
            raise AudioPlaybackError(f"Unable to play audio: {e}") from e

        logger.debug("Playing %.1fs of audio", len(samples) / samplerate)

    def stop(self) -> None:
        sd.stop()

    def wait(self) -> None:
        sd.wait()
