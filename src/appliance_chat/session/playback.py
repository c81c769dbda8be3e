"""Playback toggle for the current input text."""

from ..speech import SpeechSynthesizer


class PlaybackToggle:
    """Single speak/stop toggle around a speech synthesizer.

    Only one stream at a time: pressing while speaking always stops.
    """

    def __init__(self, synthesizer: SpeechSynthesizer) -> None:
        self._synthesizer = synthesizer

    @property
    def is_playing(self) -> bool:
        return self._synthesizer.is_speaking

    async def toggle(self, text: str) -> bool:
        """Stop if speaking, otherwise speak ``text``.

        Returns:
            Whether audio is playing afterwards

        Raises:
            SpeechServiceError: If the synthesizer failed
        """
        if self._synthesizer.is_speaking:
            await self._synthesizer.stop()
            return False
        if not text:
            return False
        await self._synthesizer.speak(text)
        return self._synthesizer.is_speaking

    async def stop(self) -> None:
        if self._synthesizer.is_speaking:
            await self._synthesizer.stop()
