"""Speech collaborators: dictation (speech-to-text) and playback (text-to-speech)."""

from .base import SpeechRecognizer, SpeechSynthesizer
from .factory import create_speech_recognizer, create_speech_synthesizer

__all__ = [
    "SpeechRecognizer",
    "SpeechSynthesizer",
    "create_speech_recognizer",
    "create_speech_synthesizer",
]
