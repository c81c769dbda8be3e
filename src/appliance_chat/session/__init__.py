"""Session controller and its input capture / playback components."""

from .chat_session import ChatSession
from .dictation import DictationController, DictationState
from .playback import PlaybackToggle

__all__ = [
    "ChatSession",
    "DictationController",
    "DictationState",
    "PlaybackToggle",
]
