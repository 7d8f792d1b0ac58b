"""Remote assistant module.

Hides which remote API answers image questions, chat turns and speech
synthesis requests.
"""

from .base import AssistantClient
from .encoding import encode_jpeg, to_data_url
from .errors import AssistantError, DecodingError, EncodingError, RemoteError
from .factory import create_assistant_client
from .models import ChatMessage, Role, SpeechOptions
from .providers import OpenAIAssistantClient

__all__ = [
    "AssistantClient",
    "AssistantError",
    "ChatMessage",
    "DecodingError",
    "EncodingError",
    "OpenAIAssistantClient",
    "RemoteError",
    "Role",
    "SpeechOptions",
    "create_assistant_client",
    "encode_jpeg",
    "to_data_url",
]
