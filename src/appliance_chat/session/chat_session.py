"""Chat session controller.

Owns the transcript, the current input text and the injected
collaborators. Every user action enters through one of the public
coroutines here, and every failure is caught at that boundary.
"""

import contextlib
from collections.abc import Callable
from typing import Any

from ..config import ChatSettings
from ..conversation import Transcript, compose
from ..errors import ChatError, CompletionError, SpeechServiceError, ValidationError
from ..llm import LLMProvider
from ..speech import SpeechRecognizer, SpeechSynthesizer
from .dictation import DictationController, DictationState
from .playback import PlaybackToggle


def _require_text(text: str) -> None:
    if not text:
        raise ValidationError("Input is empty")


class ChatSession:
    """One conversation with the completion service.

    Example:
        session = ChatSession(provider, settings=settings)
        session.set_input("My dryer will not heat")
        reply = await session.submit()
    """

    def __init__(
        self,
        provider: LLMProvider,
        recognizer: SpeechRecognizer | None = None,
        synthesizer: SpeechSynthesizer | None = None,
        settings: ChatSettings | None = None,
        transcript: Transcript | None = None,
    ) -> None:
        self._settings = settings or ChatSettings()
        self._provider = provider
        self._recognizer = recognizer
        self._synthesizer = synthesizer
        self.transcript = transcript or Transcript()

        self._input_text = ""
        self._busy = False
        # Bumped on restart so a reply to a discarded conversation is dropped
        self._generation = 0
        self.last_error: ChatError | None = None

        self._input_callback: Callable[[str], None] | None = None
        self._busy_callback: Callable[[bool], None] | None = None
        self._error_callback: Callable[[ChatError], None] | None = None
        self._debug_callback: Any = None

        self._dictation: DictationController | None = None
        if recognizer is not None:
            self._dictation = DictationController(
                recognizer,
                set_input=self.set_input,
                locale=self._settings.speech_locale,
            )
            self._dictation.set_error_callback(self._report)

        self._playback = PlaybackToggle(synthesizer) if synthesizer is not None else None

    # -------------------------
    # State
    # -------------------------
    @property
    def settings(self) -> ChatSettings:
        return self._settings

    @property
    def input_text(self) -> str:
        return self._input_text

    @property
    def busy(self) -> bool:
        """Whether a completion call is outstanding."""
        return self._busy

    @property
    def dictation(self) -> DictationController | None:
        return self._dictation

    @property
    def dictation_available(self) -> bool:
        return self._dictation is not None

    @property
    def playback_available(self) -> bool:
        return self._playback is not None

    @property
    def is_listening(self) -> bool:
        return self._dictation is not None and self._dictation.is_listening

    @property
    def is_playing(self) -> bool:
        return self._playback is not None and self._playback.is_playing

    # -------------------------
    # Callbacks
    # -------------------------
    def set_input_callback(self, callback: Callable[[str], None] | None) -> None:
        """Set the callback invoked when the input text changes."""
        self._input_callback = callback

    def set_busy_callback(self, callback: Callable[[bool], None] | None) -> None:
        """Set the callback invoked when a completion call starts or ends."""
        self._busy_callback = callback

    def set_error_callback(self, callback: Callable[[ChatError], None] | None) -> None:
        """Set the callback invoked for every failure caught by the session."""
        self._error_callback = callback

    def set_dictation_callback(self, callback: Callable[[DictationState], None] | None) -> None:
        """Set the callback invoked on dictation state transitions."""
        if self._dictation is not None:
            self._dictation.set_state_callback(callback)

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback for detailed logging.

        Args:
            callback: Callable(level: str, component: str, message: str)
                      level: 'debug', 'info', 'warning', 'error'
                      component: Source component name
                      message: Log message
        """
        self._debug_callback = callback
        if self._dictation is not None:
            self._dictation.set_debug_callback(callback)

    def _debug(self, level: str, message: str, component: str = "Session") -> None:
        if self._debug_callback:
            self._debug_callback(level, component, message)

    def _report(self, error: ChatError) -> None:
        self.last_error = error
        self._debug("error", str(error))
        if self._error_callback:
            self._error_callback(error)

    def _set_busy(self, busy: bool) -> None:
        self._busy = busy
        if self._busy_callback:
            self._busy_callback(busy)

    # -------------------------
    # Input capture
    # -------------------------
    def set_input(self, text: str) -> None:
        """Replace the current input text (keyboard edit or dictation result)."""
        if text == self._input_text:
            return
        self._input_text = text
        if self._input_callback:
            self._input_callback(text)

    def clear_input(self) -> None:
        self.set_input("")

    # -------------------------
    # Conversation
    # -------------------------
    async def submit(self) -> str | None:
        """Send the current input and append the reply.

        Returns:
            The reply text, or None if nothing was sent or the call failed
        """
        text = self._input_text
        try:
            _require_text(text)
        except ValidationError as e:
            self._debug("debug", f"Submission ignored: {e}")
            return None

        if self._busy:
            self._debug("warning", "Submission ignored: a reply is still pending")
            return None

        # Compose from the history as it stood before this message
        history = self.transcript.messages
        self.transcript.append_user(text)
        messages = compose(history, text)
        generation = self._generation

        self._debug("info", f"Sending {len(messages)} messages to {self._provider.model}", "LLM")
        self._set_busy(True)
        try:
            response = await self._provider.chat_completion(messages)
        except CompletionError as e:
            self._report(e)
            return None
        finally:
            self._set_busy(False)

        if generation != self._generation:
            self._debug("info", "Conversation restarted while waiting; reply dropped")
            return None

        self.transcript.append_assistant(response.content)
        self.last_error = None
        if response.usage:
            self._debug("debug", f"Usage: {response.usage}", "LLM")
        if self._input_text == text:
            self.clear_input()
        return response.content

    def restart(self) -> None:
        """Start a new conversation."""
        self._generation += 1
        self.transcript.reset()
        self.last_error = None
        self._debug("info", "Conversation restarted")

    # -------------------------
    # Speech
    # -------------------------
    async def toggle_dictation(self) -> None:
        if self._dictation is None:
            self._debug("warning", "Dictation is not configured", "Dictation")
            return
        try:
            await self._dictation.toggle()
        except SpeechServiceError as e:
            self._report(e)

    async def toggle_playback(self) -> None:
        if self._playback is None:
            self._debug("warning", "Playback is not configured", "Playback")
            return
        try:
            playing = await self._playback.toggle(self._input_text)
        except SpeechServiceError as e:
            self._report(e)
            return
        self._debug("info", "Speaking" if playing else "Not speaking", "Playback")

    # -------------------------
    # Teardown
    # -------------------------
    async def close(self) -> None:
        """Cancel outstanding speech work and release every collaborator."""
        if self._dictation is not None:
            await self._dictation.close()
        if self._playback is not None:
            try:
                await self._playback.stop()
            except SpeechServiceError as e:
                self._debug("warning", f"Stop during close failed: {e}", "Playback")
        for resource in (self._recognizer, self._synthesizer):
            if resource is not None:
                with contextlib.suppress(SpeechServiceError):
                    await resource.close()
        await self._provider.close()
