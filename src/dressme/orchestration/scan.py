"""Capture, analyze, speak.

Hidden design decisions:
- A scan cycle is an explicit state machine; the in-flight guard is the state
- Remote speech is preferred and local speech is the only fallback
- Failures become advice text, never exceptions
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from ..assistant import AssistantClient, SpeechOptions
from ..media import AudioPlayer, FrameSource, SpeechFallback
from ..media.models import CapturedFrame
from .messages import NO_API_KEY_MESSAGE, NO_FRAME_MESSAGE, analysis_error

logger = logging.getLogger(__name__)


class ScanState(str, Enum):
    """Phase of the scan cycle."""

    IDLE = "idle"
    ANALYZING = "analyzing"
    SPEAKING_REMOTE = "speaking_remote"
    SPEAKING_LOCAL = "speaking_local"
    DONE = "done"
    FAILED = "failed"


# States in which a remote call is outstanding
IN_FLIGHT_STATES = frozenset({ScanState.ANALYZING, ScanState.SPEAKING_REMOTE})


@dataclass(frozen=True)
class ScanSnapshot:
    """What the presentation layer observes after each change."""

    state: ScanState
    advice: str

    @property
    def is_analyzing(self) -> bool:
        return self.state is ScanState.ANALYZING


class ScanOrchestrator:
    """Runs one scan cycle at a time.

    All state changes happen on the event loop that called request_scan(),
    so observers never see a partial update.

    Example:
        scanner = ScanOrchestrator(client, frames, player, speech)
        task = scanner.request_scan()
        if task is not None:
            await task
        print(scanner.advice)
    """

    def __init__(
        self,
        client: AssistantClient | None,
        frames: FrameSource,
        player: AudioPlayer,
        speech: SpeechFallback,
        speech_options: SpeechOptions | None = None,
        on_update: Callable[[ScanSnapshot], None] | None = None,
    ) -> None:
        self._client = client
        self._frames = frames
        self._player = player
        self._speech = speech
        self._speech_options = speech_options or SpeechOptions()
        self._on_update = on_update
        self._state = ScanState.IDLE
        self._advice = ""

    @property
    def state(self) -> ScanState:
        return self._state

    @property
    def advice(self) -> str:
        return self._advice

    @property
    def is_analyzing(self) -> bool:
        return self._state is ScanState.ANALYZING

    @property
    def is_busy(self) -> bool:
        """True while a remote call is outstanding."""
        return self._state in IN_FLIGHT_STATES

    def snapshot(self) -> ScanSnapshot:
        return ScanSnapshot(state=self._state, advice=self._advice)

    def _notify(self) -> None:
        if self._on_update is not None:
            self._on_update(self.snapshot())

    def _transition(self, state: ScanState, advice: str | None = None) -> None:
        logger.debug("Scan %s -> %s", self._state.value, state.value)
        self._state = state
        if advice is not None:
            self._advice = advice
        self._notify()

    def _show(self, advice: str) -> None:
        """Replace the advice banner without starting a cycle."""
        self._advice = advice
        self._notify()

    def request_scan(self) -> "asyncio.Task[None] | None":
        """Start a scan of the latest frame.

        Must be called from a running event loop. Returns the task running
        the cycle, or None when the request was dropped or rejected.
        """
        loop = asyncio.get_running_loop()

        if self.is_busy:
            logger.debug("Scan already in flight, request dropped")
            return None

        if self._client is None:
            self._show(NO_API_KEY_MESSAGE)
            return None

        frame = self._frames.latest()
        if frame is None:
            self._show(NO_FRAME_MESSAGE)
            return None

        self._transition(ScanState.ANALYZING)
        return loop.create_task(self._run(self._client, frame))

    async def scan(self) -> ScanSnapshot:
        """Request a scan and wait for its cycle to finish."""
        task = self.request_scan()
        if task is not None:
            await task
        return self.snapshot()

    def stop_speaking(self) -> None:
        """Silence both remote audio and local speech."""
        self._player.stop()
        self._speech.stop()

    async def _run(self, client: AssistantClient, frame: CapturedFrame) -> None:
        try:
            advice = await client.analyze_image(frame.image)
        except Exception as e:
            logger.warning("Image analysis failed: %s", e)
            self._transition(ScanState.FAILED, analysis_error(e))
            return

        self._transition(ScanState.SPEAKING_REMOTE, advice)
        try:
            audio = await client.synthesize_speech(
                advice,
                voice=self._speech_options.voice,
                audio_format=self._speech_options.audio_format,
            )
            self._player.play(audio)
        except Exception as e:
            logger.warning("Remote speech failed, using local voice: %s", e)
            self._transition(ScanState.SPEAKING_LOCAL)
            try:
                self._speech.speak(advice)
            except Exception as e:
                logger.error("Local speech failed: %s", e)

        self._transition(ScanState.DONE)
