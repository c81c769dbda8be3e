"""
Appliance Chat: a voice-enabled appliance repair assistant.

Max the Appliance Pro answers repair questions through an OpenAI-compatible
chat completion service. Each module hides one design decision: the
conversation state, the prompt framing, the completion transport, the speech
services, and the terminal UI.
"""

__version__ = "0.1.0"

from .config import ChatSettings
from .conversation import GREETING, Message, Transcript, compose
from .errors import (
    ChatError,
    CompletionError,
    NetworkError,
    SpeechServiceError,
    UpstreamError,
    ValidationError,
)
from .session import ChatSession

__all__ = [
    "GREETING",
    "ChatError",
    "ChatSession",
    "ChatSettings",
    "CompletionError",
    "Message",
    "NetworkError",
    "SpeechServiceError",
    "Transcript",
    "UpstreamError",
    "ValidationError",
    "compose",
]
