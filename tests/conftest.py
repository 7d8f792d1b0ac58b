"""Pytest configuration and shared fixtures."""
import asyncio
import os

import numpy as np
import pytest

from dressme.assistant import AssistantClient, ChatMessage
from dressme.media import AudioPlayer, CapturedFrame, FrameSource, SpeechFallback


class FakeAssistantClient(AssistantClient):
    """Scripted assistant that records every call.

    Set ``gate`` to an asyncio.Event to hold calls until the test releases it.
    """

    def __init__(
        self,
        advice: str = "Pair it with dark denim and white sneakers.",
        audio: bytes = b"ID3fake-audio",
        reply: str = "Pair it with dark denim and white sneakers.",
        analyze_error: Exception | None = None,
        speech_error: Exception | None = None,
        chat_error: Exception | None = None,
    ) -> None:
        self.advice = advice
        self.audio = audio
        self.reply = reply
        self.analyze_error = analyze_error
        self.speech_error = speech_error
        self.chat_error = chat_error
        self.gate: asyncio.Event | None = None
        self.analyze_calls: list[np.ndarray] = []
        self.speech_calls: list[tuple[str, str, str]] = []
        self.chat_calls: list[list[ChatMessage]] = []
        self.closed = False

    async def _hold(self) -> None:
        if self.gate is not None:
            await self.gate.wait()

    async def analyze_image(self, image):
        self.analyze_calls.append(image)
        await self._hold()
        if self.analyze_error is not None:
            raise self.analyze_error
        return self.advice

    async def synthesize_speech(self, text, voice="alloy", audio_format="mp3"):
        self.speech_calls.append((text, voice, audio_format))
        if self.speech_error is not None:
            raise self.speech_error
        return self.audio

    async def chat(self, transcript, model=None, temperature=0.7):
        self.chat_calls.append(list(transcript))
        await self._hold()
        if self.chat_error is not None:
            raise self.chat_error
        return self.reply

    async def close(self) -> None:
        self.closed = True


class StaticFrameSource(FrameSource):
    """Frame source holding a fixed frame (or none)."""

    def __init__(self, frame: CapturedFrame | None) -> None:
        self.frame = frame

    def latest(self) -> CapturedFrame | None:
        return self.frame


class RecordingAudioPlayer(AudioPlayer):
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.played: list[bytes] = []
        self.stop_count = 0

    def play(self, data: bytes) -> None:
        if self.error is not None:
            raise self.error
        self.played.append(data)

    def stop(self) -> None:
        self.stop_count += 1

    def wait(self) -> None:
        pass


class RecordingSpeech(SpeechFallback):
    def __init__(self) -> None:
        self.spoken: list[str] = []
        self.stop_count = 0

    def speak(self, text: str) -> None:
        self.spoken.append(text)

    def stop(self) -> None:
        self.stop_count += 1

    def wait(self) -> None:
        pass


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {"openai": os.getenv("OPENAI_API_KEY")}


@pytest.fixture
def sample_image():
    """A small BGR image with some structure."""
    image = np.zeros((48, 64, 3), dtype=np.uint8)
    image[:, :32] = (200, 80, 20)
    image[16:32, 40:56] = (255, 255, 255)
    return image


@pytest.fixture
def sample_frame(sample_image):
    return CapturedFrame(image=sample_image, frame_number=1)


@pytest.fixture
def fake_client():
    return FakeAssistantClient()


@pytest.fixture
def make_client():
    """Factory for scripted assistant clients."""
    return FakeAssistantClient


@pytest.fixture
def frame_source(sample_frame):
    return StaticFrameSource(sample_frame)


@pytest.fixture
def empty_frame_source():
    return StaticFrameSource(None)


@pytest.fixture
def player():
    return RecordingAudioPlayer()


@pytest.fixture
def failing_player():
    from dressme.media import AudioPlaybackError
    return RecordingAudioPlayer(error=AudioPlaybackError("no output device"))


@pytest.fixture
def speech():
    return RecordingSpeech()
