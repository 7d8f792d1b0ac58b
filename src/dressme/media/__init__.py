"""Media module for dressme.

Wraps the camera, the audio output device and the local speech engine
behind small interfaces. Concrete backends are created through the
factories so their native libraries load only on demand.
"""

from .base import AudioPlaybackError, AudioPlayer, FrameSource, SpeechFallback
from .factory import create_audio_player, create_frame_source, create_speech_fallback
from .models import CapturedFrame

__all__ = [
    "AudioPlaybackError",
    "AudioPlayer",
    "CapturedFrame",
    "FrameSource",
    "SpeechFallback",
    "create_audio_player",
    "create_frame_source",
    "create_speech_fallback",
]
