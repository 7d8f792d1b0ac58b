"""On-device speech synthesis used when remote TTS is unavailable.

Hidden design decisions:
- pyttsx3 drives the platform engine (NSSpeechSynthesizer, SAPI5, eSpeak)
- The engine is owned by one worker thread; speak() only enqueues text
- An en-US voice is preferred when the platform offers one
"""

import logging
import queue
import threading

import pyttsx3

from .base import SpeechFallback

logger = logging.getLogger(__name__)

_STOP = object()


class Pyttsx3SpeechFallback(SpeechFallback):
    """Local speech synthesizer backed by pyttsx3."""

    def __init__(self, language: str = "en-us", rate: int | None = None) -> None:
        self._language = language.lower()
        self._rate = rate
        self._queue: queue.Queue[object] = queue.Queue()
        self._engine = None
        self._thread = threading.Thread(target=self._worker, name="local-speech", daemon=True)
        self._thread.start()

    def speak(self, text: str) -> None:
        spoken = " ".join(text.split())
        if not spoken:
            return
        self._queue.put(spoken)

    def stop(self) -> None:
        self._drain()
        if self._engine is not None:
            self._engine.stop()

    def wait(self) -> None:
        self._queue.join()

    def close(self) -> None:
        """Stop the worker thread."""
        self.stop()
        self._queue.put(_STOP)
        self._thread.join(timeout=2.0)

    def _drain(self) -> None:
        while True:
            try:
                self._queue.get_nowait()
            except queue.Empty:
                return
            self._queue.task_done()

    def _configure(self, engine: "pyttsx3.Engine") -> None:
        if self._rate is not None:
            engine.setProperty("rate", self._rate)

        for voice in engine.getProperty("voices"):
            languages = [
                lang.decode(errors="ignore") if isinstance(lang, bytes) else str(lang)
                for lang in (getattr(voice, "languages", None) or [])
            ]
            haystack = " ".join([voice.id, voice.name or "", *languages]).lower().replace("_", "-")
            if self._language in haystack:
                engine.setProperty("voice", voice.id)
                logger.debug("Local speech voice: %s", voice.name)
                return
        logger.debug("No %s voice found, using engine default", self._language)

    def _worker(self) -> None:
        try:
            engine = pyttsx3.init()
            self._configure(engine)
        except Exception as e:
            logger.error("Local speech engine unavailable: %s", e)
            engine = None
        self._engine = engine

        while True:
            item = self._queue.get()
            try:
                if item is _STOP:
                    return
                if engine is None:
                    logger.warning("Dropping local speech, engine unavailable")
                    continue
                engine.say(item)
                engine.runAndWait()
            except Exception as e:
                logger.warning("Local speech failed: %s", e)
            finally:
                self._queue.task_done()
