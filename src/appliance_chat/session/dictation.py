"""Dictation state machine.

Drives a :class:`~appliance_chat.speech.SpeechRecognizer` through
``IDLE -> LISTENING -> IDLE`` and feeds finalized results into the
session's input text.
"""

import asyncio
import contextlib
from collections.abc import Callable
from enum import Enum
from typing import Any

from ..errors import SpeechServiceError
from ..speech import SpeechRecognizer


class DictationState(str, Enum):
    """Dictation states."""

    IDLE = "idle"
    LISTENING = "listening"


class DictationController:
    """Start/stop toggle around a speech recognizer.

    Results are consumed by a single background task that lives until
    :meth:`close`. A finalized result replaces the input text with its
    first candidate and returns the controller to IDLE.
    """

    def __init__(
        self,
        recognizer: SpeechRecognizer,
        set_input: Callable[[str], None],
        locale: str = "en-US",
    ) -> None:
        self._recognizer = recognizer
        self._set_input = set_input
        self._locale = locale
        self._state = DictationState.IDLE
        self._listener: asyncio.Task | None = None
        self._state_callback: Callable[[DictationState], None] | None = None
        self._error_callback: Callable[[SpeechServiceError], None] | None = None
        self._debug_callback: Any = None

    @property
    def state(self) -> DictationState:
        return self._state

    @property
    def is_listening(self) -> bool:
        return self._state is DictationState.LISTENING

    @property
    def locale(self) -> str:
        return self._locale

    def set_state_callback(self, callback: Callable[[DictationState], None] | None) -> None:
        """Set the callback invoked on every state transition."""
        self._state_callback = callback

    def set_error_callback(self, callback: Callable[[SpeechServiceError], None] | None) -> None:
        """Set the callback for recognition failures reported after listening ended."""
        self._error_callback = callback

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Dictation", message)

    def _set_state(self, state: DictationState) -> None:
        if state is self._state:
            return
        self._state = state
        self._debug("debug", f"State -> {state.value}")
        if self._state_callback:
            self._state_callback(state)

    async def start(self) -> None:
        """Begin listening. No-op while already listening.

        Raises:
            SpeechServiceError: If the recognizer failed to start; the
                controller is back in IDLE
        """
        if self.is_listening:
            return
        self._set_state(DictationState.LISTENING)
        self._set_input("")
        try:
            await self._recognizer.start(self._locale)
        except SpeechServiceError:
            self._set_state(DictationState.IDLE)
            raise
        self._ensure_listener()
        self._debug("info", f"Listening ({self._locale})")

    async def stop(self) -> None:
        """Stop listening. No-op while idle.

        Raises:
            SpeechServiceError: If the recognizer failed to stop; the
                controller is IDLE regardless
        """
        if not self.is_listening:
            return
        self._set_state(DictationState.IDLE)
        await self._recognizer.stop()
        self._debug("info", "Stopped listening")

    async def toggle(self) -> DictationState:
        """Start when idle, stop when listening. Returns the new state."""
        if self.is_listening:
            await self.stop()
        else:
            await self.start()
        return self._state

    def _ensure_listener(self) -> None:
        if self._listener is None or self._listener.done():
            self._listener = asyncio.create_task(self._listen())
            self._listener.add_done_callback(self._listener_done)

    def _listener_done(self, task: asyncio.Task) -> None:
        if task.cancelled() or task.exception() is None:
            return
        self._debug("error", f"Result listener failed: {task.exception()!r}")
        self._set_state(DictationState.IDLE)

    async def _listen(self) -> None:
        while True:
            try:
                candidates = await self._recognizer.results()
            except SpeechServiceError as e:
                self._debug("error", str(e))
                self._set_state(DictationState.IDLE)
                if self._error_callback:
                    self._error_callback(e)
                continue

            if not candidates:
                # Listening ended without a transcript
                self._set_state(DictationState.IDLE)
                self._debug("info", "No speech recognized")
                continue
            self._set_input(candidates[0])
            self._set_state(DictationState.IDLE)
            self._debug("info", f"Result: '{candidates[0][:50]}'")

    async def close(self) -> None:
        """Cancel the result listener and stop listening."""
        if self._listener is not None:
            listener, self._listener = self._listener, None
            # A listener that already failed was reported by _listener_done
            if not listener.done():
                listener.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await listener
        try:
            await self.stop()
        except SpeechServiceError as e:
            self._debug("warning", f"Stop during close failed: {e}")
