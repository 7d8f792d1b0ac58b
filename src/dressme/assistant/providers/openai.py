import asyncio
import logging
from collections.abc import Awaitable
from typing import Any, TypeVar

import httpx
import numpy as np
import openai
from numpy.typing import NDArray
from openai import AsyncOpenAI

from ...prompts import get_vision_system_prompt, get_vision_user_prompt
from ..base import AssistantClient
from ..encoding import to_data_url
from ..errors import DecodingError, RemoteError
from ..models import ChatMessage

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_REQUEST_TIMEOUT = 30.0
DEFAULT_RESOURCE_TIMEOUT = 60.0


def _first_choice_text(completion: Any) -> str:
    """Extract the trimmed content of the first choice.

    Raises:
        DecodingError: If the completion has no choices or no text content
    """
    choices = getattr(completion, "choices", None)
    if not choices:
        raise DecodingError("Response contained no choices")

    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    if not isinstance(content, str):
        raise DecodingError("First choice has no text content")
    return content.strip()


class OpenAIAssistantClient(AssistantClient):
    """OpenAI implementation of the remote assistant.

    Hidden design decisions:
    - OpenAI API client initialization and bearer authentication
    - Vision request layout (system prompt + text/image content array)
    - Timeout policy: a per-request timeout on the HTTP client and a
      total budget per operation
    - Translation of SDK exceptions into AssistantError subclasses
    - No retries: a failed call is reported as-is
    """

    def __init__(
        self,
        api_key: str,
        vision_model: str = "gpt-4o-mini",
        chat_model: str = "gpt-4o-mini",
        speech_model: str = "gpt-4o-mini-tts",
        temperature: float = 0.7,
        base_url: str | None = None,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        resource_timeout: float = DEFAULT_RESOURCE_TIMEOUT,
        **client_kwargs: Any
    ):
        """Initialize the OpenAI assistant client.

        Args:
            api_key: OpenAI API key
            vision_model: Vision-capable model used by analyze_image
            chat_model: Default model used by chat
            speech_model: Text-to-speech model
            temperature: Sampling temperature for image analysis
            base_url: Optional custom API base URL
            request_timeout: Seconds allowed for a single HTTP request
            resource_timeout: Seconds allowed for a whole operation
            **client_kwargs: Additional kwargs for AsyncOpenAI client
        """
        self._vision_model = vision_model
        self._chat_model = chat_model
        self._speech_model = speech_model
        self._temperature = temperature
        self._resource_timeout = resource_timeout
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url or DEFAULT_BASE_URL,
            timeout=httpx.Timeout(request_timeout),
            max_retries=0,
            **client_kwargs
        )

    @property
    def model(self) -> str:
        """Get the default chat model name."""
        return self._chat_model

    async def _call(self, operation: str, request: Awaitable[T]) -> T:
        """Await an SDK request under the total budget, translating failures."""
        try:
            return await asyncio.wait_for(request, timeout=self._resource_timeout)
        except openai.APIStatusError as e:
            logger.debug("%s failed with status %s", operation, e.status_code)
            raise RemoteError(e.status_code, e.response.text) from e
        except openai.APIResponseValidationError as e:
            raise DecodingError(f"Malformed {operation} response: {e}") from e
        except openai.APIConnectionError as e:
            # Also covers APITimeoutError (per-request timeout)
            raise RemoteError(None, str(e)) from e
        except asyncio.TimeoutError as e:
            raise RemoteError(
                None, f"{operation} exceeded {self._resource_timeout:g}s"
            ) from e
        except ValueError as e:
            # Success status with a body that is not JSON
            raise DecodingError(f"Malformed {operation} response: {e}") from e

    async def analyze_image(self, image: NDArray[np.uint8]) -> str:
        """Analyze a garment image with the vision model."""
        data_url = to_data_url(image)

        messages = [
            {
                "role": "system",
                "content": [{"type": "text", "text": get_vision_system_prompt()}],
            },
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": get_vision_user_prompt()},
                    {"type": "image_url", "image_url": {"url": data_url}},
                ],
            },
        ]

        completion = await self._call(
            "image analysis",
            self._client.chat.completions.create(
                model=self._vision_model,
                messages=messages,
                temperature=self._temperature,
            ),
        )
        return _first_choice_text(completion)

    async def synthesize_speech(
        self,
        text: str,
        voice: str = "alloy",
        audio_format: str = "mp3",
    ) -> bytes:
        """Synthesize speech with the OpenAI TTS endpoint."""
        response = await self._call(
            "speech synthesis",
            self._client.audio.speech.create(
                model=self._speech_model,
                input=text,
                voice=voice,
                response_format=audio_format,
            ),
        )
        return response.content

    async def chat(
        self,
        transcript: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
    ) -> str:
        """Generate the next assistant turn with Chat Completions."""
        completion = await self._call(
            "chat",
            self._client.chat.completions.create(
                model=model or self._chat_model,
                messages=[msg.to_api() for msg in transcript],
                temperature=temperature,
            ),
        )
        return _first_choice_text(completion)

    async def close(self) -> None:
        """Close the OpenAI client."""
        await self._client.close()
