"""
DressMe: point a camera at a garment, get a spoken styling tip.

This package follows Parnas's information hiding principles,
where each module hides a specific design decision.
"""

__version__ = "0.1.0"

from .assistant import (
    AssistantClient,
    AssistantError,
    ChatMessage,
    DecodingError,
    EncodingError,
    RemoteError,
    Role,
    create_assistant_client,
)
from .orchestration import ChatOrchestrator, ScanOrchestrator, ScanState

__all__ = [
    "AssistantClient",
    "AssistantError",
    "ChatMessage",
    "ChatOrchestrator",
    "DecodingError",
    "EncodingError",
    "RemoteError",
    "Role",
    "ScanOrchestrator",
    "ScanState",
    "create_assistant_client",
]
