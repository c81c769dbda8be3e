"""Error taxonomy for the chat session.

Every failure raised by a collaborator is one of these types, so the
session can catch them at the boundary of the action that triggered them.
"""


class ChatError(Exception):
    """Base class for chat errors."""


class ValidationError(ChatError):
    """Input rejected before any work was done (e.g. empty text)."""


class CompletionError(ChatError):
    """Base class for completion call failures."""


class NetworkError(CompletionError):
    """Transport, DNS, connection or timeout failure."""

    def __init__(self, message: str):
        super().__init__(f"Network error: {message}")


class UpstreamError(CompletionError):
    """Non-2xx response, or a body missing the reply text."""

    def __init__(self, message: str, status_code: int | None = None):
        msg = f"Upstream error: {message}"
        if status_code is not None:
            msg += f" (status: {status_code})"
        super().__init__(msg)
        self.status_code = status_code


class SpeechServiceError(ChatError):
    """Speech recognizer or synthesizer failure."""

    def __init__(self, message: str, operation: str | None = None):
        msg = f"Speech service error: {message}"
        if operation:
            msg += f" (during: {operation})"
        super().__init__(msg)
        self.operation = operation
