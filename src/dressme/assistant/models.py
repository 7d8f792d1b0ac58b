from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Role of a conversation turn."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    """Represents a chat message in a conversation."""

    model_config = ConfigDict(frozen=True)

    role: Role = Field(description="Role of the message sender: 'user', 'assistant', or 'system'")
    content: str = Field(description="Content of the message")

    def to_api(self) -> dict[str, str]:
        """Convert to the chat-completions wire format."""
        return {"role": self.role.value, "content": self.content}


class SpeechOptions(BaseModel):
    """Voice and container selection for speech synthesis."""

    model_config = ConfigDict(frozen=True)

    voice: str = Field(default="alloy", description="Voice preset name")
    audio_format: str = Field(default="mp3", description="Audio container format")
