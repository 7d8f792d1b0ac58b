"""User-facing texts produced by the orchestrators.

Centralizes every string the presentation layer shows in place of an error.
"""

NO_API_KEY_MESSAGE = "Set the OPENAI_API_KEY environment variable and relaunch."
NO_FRAME_MESSAGE = "No camera frame available. Grant camera permission and try again."


def analysis_error(error: BaseException) -> str:
    """Advice banner shown when image analysis fails."""
    return f"Analysis error: {error}"


def chat_error(error: BaseException) -> str:
    """Assistant bubble shown when a chat turn fails."""
    return f"Error: {error}"
