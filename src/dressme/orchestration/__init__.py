"""Orchestration module for dressme.

The only control logic in the application:
- scan.py: capture -> analyze -> speak, with local speech fallback
- chat.py: append -> request -> append chat cycle
- messages.py: user-facing texts that replace errors
"""

from .chat import ChatOrchestrator, ChatState
from .messages import NO_API_KEY_MESSAGE, NO_FRAME_MESSAGE
from .scan import ScanOrchestrator, ScanSnapshot, ScanState

__all__ = [
    "ChatOrchestrator",
    "ChatState",
    "NO_API_KEY_MESSAGE",
    "NO_FRAME_MESSAGE",
    "ScanOrchestrator",
    "ScanSnapshot",
    "ScanState",
]
