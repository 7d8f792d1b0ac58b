from abc import ABC, abstractmethod
from typing import Any

import numpy as np
from numpy.typing import NDArray

from .models import ChatMessage


class AssistantClient(ABC):
    """Abstract base class for the remote assistant.

    This module hides the design decision of which remote API serves the
    three operations the application needs. Implementations must handle:
    - API client setup and authentication
    - Request/response format conversion
    - Mapping transport and status failures onto AssistantError subclasses
    - The fixed timeout policy

    Supports async context manager protocol for proper resource cleanup:
        async with client:
            advice = await client.analyze_image(frame)
    """

    @abstractmethod
    async def analyze_image(self, image: NDArray[np.uint8]) -> str:
        """Ask for a short styling tip about the garment in an image.

        Args:
            image: Decoded frame in OpenCV layout

        Returns:
            Trimmed text of the first completion

        Raises:
            EncodingError: If the image cannot be encoded
            RemoteError: On a non-success status or transport failure
            DecodingError: If the response does not have the expected shape
        """

    @abstractmethod
    async def synthesize_speech(
        self,
        text: str,
        voice: str = "alloy",
        audio_format: str = "mp3",
    ) -> bytes:
        """Synthesize speech audio for a text.

        Args:
            text: Text to speak
            voice: Voice preset
            audio_format: Audio container (mp3, wav, ...)

        Returns:
            Raw audio bytes

        Raises:
            RemoteError: On a non-success status or transport failure
        """

    @abstractmethod
    async def chat(
        self,
        transcript: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
    ) -> str:
        """Generate the next assistant turn for a transcript.

        Args:
            transcript: Ordered conversation so far
            model: Model to use (None uses the client's default)
            temperature: Sampling temperature

        Returns:
            Trimmed text of the first completion

        Raises:
            RemoteError: On a non-success status or transport failure
            DecodingError: If the response does not have the expected shape
        """

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""

    async def __aenter__(self) -> "AssistantClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Suppresses "Event loop is closed" errors from httpx/anyio cleanup:
        https://github.com/encode/httpx/issues/914
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
