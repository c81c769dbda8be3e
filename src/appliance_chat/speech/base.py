"""Abstract speech collaborators.

This module defines the two speech interfaces the session depends on.
The abstraction hides:
- Which speech service transcribes and synthesizes
- How audio hardware is opened and driven
- Whether results arrive through callbacks, threads or network calls
"""

from abc import ABC, abstractmethod


class SpeechRecognizer(ABC):
    """Speech-to-text service.

    Results are delivered through :meth:`results` rather than a callback,
    so the consumer owns the waiting task and can cancel it.
    """

    @abstractmethod
    async def start(self, locale: str) -> None:
        """Begin listening. Returns once listening has started.

        Raises:
            SpeechServiceError: If listening could not start
        """

    @abstractmethod
    async def stop(self) -> None:
        """Stop listening.

        Raises:
            SpeechServiceError: If the service failed to stop cleanly
        """

    @abstractmethod
    async def results(self) -> list[str]:
        """Wait for the next finalized result.

        Returns:
            Transcription candidates, best first. An empty list means
            listening ended on its own without recognizing anything

        Raises:
            SpeechServiceError: If recognition failed after listening ended
        """

    async def close(self) -> None:
        """Release any held resources."""


class SpeechSynthesizer(ABC):
    """Text-to-speech service."""

    @abstractmethod
    async def speak(self, text: str) -> None:
        """Start speaking ``text``.

        Raises:
            SpeechServiceError: If synthesis or playback failed
        """

    @abstractmethod
    async def stop(self) -> None:
        """Stop any ongoing speech."""

    @property
    @abstractmethod
    def is_speaking(self) -> bool:
        """Whether audio is currently being synthesized or played."""

    async def close(self) -> None:
        """Release any held resources."""
