"""Factories for creating speech collaborators."""

from typing import Any

from .base import SpeechRecognizer, SpeechSynthesizer


def create_speech_recognizer(backend: str = "openai", **config: Any) -> SpeechRecognizer:
    """Create a speech-to-text collaborator.

    Args:
        backend: Backend type ("openai")
        **config: Backend-specific configuration
            For OpenAI:
                - api_key: str (required)
                - model: str (default: 'whisper-1')
                - max_seconds: float (default: 30.0)

    Returns:
        SpeechRecognizer instance

    Raises:
        ValueError: If backend type is not supported
        TypeError: If required configuration is missing
    """
    if backend.lower() == "openai":
        if "api_key" not in config:
            raise TypeError("OpenAI speech recognizer requires 'api_key' in config")
        from .openai import OpenAISpeechRecognizer
        return OpenAISpeechRecognizer(**config)

    raise ValueError(
        f"Unsupported speech backend: {backend}. "
        f"Supported backends: openai"
    )


def create_speech_synthesizer(backend: str = "openai", **config: Any) -> SpeechSynthesizer:
    """Create a text-to-speech collaborator.

    Args:
        backend: Backend type ("openai")
        **config: Backend-specific configuration
            For OpenAI:
                - api_key: str (required)
                - model: str (default: 'tts-1')
                - voice: str (default: 'alloy')

    Returns:
        SpeechSynthesizer instance

    Raises:
        ValueError: If backend type is not supported
        TypeError: If required configuration is missing
    """
    if backend.lower() == "openai":
        if "api_key" not in config:
            raise TypeError("OpenAI speech synthesizer requires 'api_key' in config")
        from .openai import OpenAISpeechSynthesizer
        return OpenAISpeechSynthesizer(**config)

    raise ValueError(
        f"Unsupported speech backend: {backend}. "
        f"Supported backends: openai"
    )
