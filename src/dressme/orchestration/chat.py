"""Text chat against the remote assistant.

Hidden design decisions:
- Transcript representation (append-only list of ChatMessage)
- One exchange at a time, guarded by an explicit state
- Failures become an assistant turn, never exceptions
"""

import logging
from collections.abc import Callable
from enum import Enum

from ..assistant import AssistantClient, ChatMessage, Role
from ..prompts import get_chat_system_prompt
from .messages import NO_API_KEY_MESSAGE, chat_error

logger = logging.getLogger(__name__)


class ChatState(str, Enum):
    """Whether an exchange is outstanding."""

    READY = "ready"
    SENDING = "sending"


class ChatOrchestrator:
    """Append-request-append cycle over a session transcript.

    Every accepted send appends exactly one user turn and exactly one
    assistant turn (the reply or an error text).
    """

    def __init__(
        self,
        client: AssistantClient | None,
        system_prompt: str | None = None,
        model: str | None = None,
        temperature: float = 0.7,
        on_update: Callable[["ChatOrchestrator"], None] | None = None,
    ) -> None:
        self._client = client
        self._system_prompt = system_prompt if system_prompt is not None else get_chat_system_prompt()
        self._model = model
        self._temperature = temperature
        self._on_update = on_update
        self._state = ChatState.READY
        self._transcript: list[ChatMessage] = []
        self.notice: str | None = None
        self.reset()

    @property
    def state(self) -> ChatState:
        return self._state

    @property
    def is_sending(self) -> bool:
        return self._state is ChatState.SENDING

    @property
    def transcript(self) -> list[ChatMessage]:
        """Copy of the full transcript, system turn included."""
        return list(self._transcript)

    def visible_messages(self) -> list[ChatMessage]:
        """Transcript without system turns."""
        return [msg for msg in self._transcript if msg.role is not Role.SYSTEM]

    def reset(self) -> None:
        """Discard the conversation and start over."""
        if self.is_sending:
            raise RuntimeError("Cannot reset chat while a message is being sent")
        self._transcript = []
        if self._system_prompt:
            self._transcript.append(ChatMessage(role=Role.SYSTEM, content=self._system_prompt))
        self.notice = None
        self._notify()

    def can_send(self, text: str) -> bool:
        """Whether send() would issue a request for this text."""
        return bool(text.strip()) and self._client is not None and not self.is_sending

    def _notify(self) -> None:
        if self._on_update is not None:
            self._on_update(self)

    def _append(self, role: Role, content: str) -> ChatMessage:
        message = ChatMessage(role=role, content=content)
        self._transcript.append(message)
        self._notify()
        return message

    async def send(self, text: str) -> ChatMessage | None:
        """Send a user turn and append the assistant's answer.

        Args:
            text: Raw user input

        Returns:
            The appended assistant turn, or None if the input was rejected
            (blank, no API key, or an exchange already outstanding)
        """
        user_text = text.strip()
        if not user_text:
            return None

        if self._client is None:
            self.notice = NO_API_KEY_MESSAGE
            self._notify()
            return None

        if self.is_sending:
            logger.debug("Chat exchange outstanding, send rejected")
            return None

        self._state = ChatState.SENDING
        self.notice = None
        self._append(Role.USER, user_text)

        try:
            content = await self._client.chat(
                list(self._transcript),
                model=self._model,
                temperature=self._temperature,
            )
        except Exception as e:
            logger.warning("Chat request failed: %s", e)
            content = chat_error(e)
        finally:
            self._state = ChatState.READY

        return self._append(Role.ASSISTANT, content)
