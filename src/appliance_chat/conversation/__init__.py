"""Conversation state: messages, transcript store and prompt composer."""

from .composer import HISTORY_WINDOW, compose, system_messages
from .models import Message, Role
from .transcript import GREETING, Transcript, TranscriptListener

__all__ = [
    "GREETING",
    "HISTORY_WINDOW",
    "Message",
    "Role",
    "Transcript",
    "TranscriptListener",
    "compose",
    "system_messages",
]
