"""Error taxonomy for the remote assistant.

Every failure of an assistant operation is raised as an AssistantError
subclass, so callers can catch one type at their boundary.
"""


class AssistantError(Exception):
    """Base class for assistant failures."""


class EncodingError(AssistantError):
    """The image or request payload could not be serialized."""


class RemoteError(AssistantError):
    """The remote API answered with a non-success status.

    Transport failures and timeouts carry ``status_code=None``.
    """

    def __init__(self, status_code: int | None, body: str) -> None:
        self.status_code = status_code
        self.body = body
        if status_code is None:
            message = f"Request failed: {body}"
        else:
            message = f"Remote API error {status_code}: {body}"
        super().__init__(message)


class DecodingError(AssistantError):
    """A success response did not have the expected shape."""
