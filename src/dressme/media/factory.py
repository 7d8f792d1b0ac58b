"""Factories for media backends.

Backends are imported lazily so that a missing camera stack or audio
library only matters when that backend is actually requested.
"""

from pathlib import Path
from typing import Any

from .base import AudioPlayer, FrameSource, SpeechFallback


def create_frame_source(
    backend: str = "camera",
    **kwargs: Any
) -> FrameSource:
    """Create a frame source.

    Args:
        backend: Source type ("camera" or "image")
        **kwargs: Backend-specific configuration
            For camera:
                - camera_index: int (default: 0)
            For image:
                - path: str | Path (required)

    Returns:
        FrameSource instance

    Raises:
        ValueError: If backend type is not supported
        TypeError: If required configuration is missing
    """
    if backend == "camera":
        from .frames import CameraFrameSource
        return CameraFrameSource(**kwargs)

    elif backend == "image":
        if "path" not in kwargs:
            raise TypeError("Image frame source requires 'path'")
        from .frames import StillImageFrameSource
        return StillImageFrameSource(Path(kwargs.pop("path")), **kwargs)

    raise ValueError(
        f"Unsupported frame source: {backend}. "
        f"Supported sources: camera, image"
    )


def create_audio_player(backend: str = "sounddevice", **kwargs: Any) -> AudioPlayer:
    """Create an audio player ("sounddevice" or "none")."""
    if backend == "sounddevice":
        from .audio import SoundDeviceAudioPlayer
        return SoundDeviceAudioPlayer(**kwargs)

    elif backend == "none":
        from .null import NullAudioPlayer
        return NullAudioPlayer()

    raise ValueError(
        f"Unsupported audio player: {backend}. "
        f"Supported players: sounddevice, none"
    )


def create_speech_fallback(backend: str = "pyttsx3", **kwargs: Any) -> SpeechFallback:
    """Create a local speech fallback ("pyttsx3" or "none")."""
    if backend == "pyttsx3":
        from .speech import Pyttsx3SpeechFallback
        return Pyttsx3SpeechFallback(**kwargs)

    elif backend == "none":
        from .null import NullSpeechFallback
        return NullSpeechFallback()

    raise ValueError(
        f"Unsupported speech fallback: {backend}. "
        f"Supported fallbacks: pyttsx3, none"
    )
