"""Main Textual TUI application.

Wires a :class:`~appliance_chat.session.ChatSession` to the widgets. The
session owns all state; the app renders it and forwards user actions.
"""

import asyncio
from collections.abc import Callable

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, Static

from ..conversation import Message
from ..errors import ChatError
from ..session import ChatSession, DictationState
from .config import BOT_NAME, NOTIFY_MAX_LENGTH, PLAYBACK_POLL_INTERVAL, LogLevel
from .styles import APP_CSS
from .themes import APPLIANCE_LATTE, THEME_NAME
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, StatusBar, VoiceControls


class ApplianceChatApp(App):
    """Textual TUI for the appliance repair assistant."""

    CSS = APP_CSS
    TITLE = f"{BOT_NAME} the Appliance Pro"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", priority=True),
        Binding("ctrl+n", "restart", "New Chat"),
        Binding("ctrl+j", "send", "Send"),
        Binding("ctrl+t", "toggle_dictation", "Dictate"),
        Binding("ctrl+s", "toggle_playback", "Speak"),
        Binding("ctrl+u", "clear_input", "Clear", priority=True),
        Binding("ctrl+r", "copy_last_response", "Copy Response"),
        Binding("ctrl+d", "toggle_debug", "Log", priority=True),
    ]

    def __init__(self, session: ChatSession, log_level: str | None = None) -> None:
        super().__init__()
        self._session = session
        self._log_level = log_level
        self._unsubscribe: Callable[[], None] | None = None

    @property
    def session(self) -> ChatSession:
        return self._session

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield Static(f"{BOT_NAME} the Appliance Pro", id="banner")
        yield ChatHistoryWidget(id="chat-history")
        yield StatusBar(id="status-bar", model=self._session.settings.model)
        yield ChatInputBar(id="chat-input-bar")
        yield VoiceControls(id="voice-controls")
        yield DebugPanel(id="debug-panel")
        yield Footer()

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.register_theme(APPLIANCE_LATTE)
        self.theme = THEME_NAME

        log_panel = self.query_one("#debug-panel", DebugPanel)
        if self._log_level is not None:
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
            log_panel.route("info", "TUI", f"Log panel enabled with level: {self._log_level.upper()}")

        settings = self._session.settings
        self.sub_title = f"{settings.provider} | {settings.model} | {settings.speech_locale}"

        session = self._session
        session.set_debug_callback(log_panel.route)
        session.set_input_callback(self._on_input_changed)
        session.set_busy_callback(self._on_busy_changed)
        session.set_error_callback(self._on_error)
        session.set_dictation_callback(self._on_dictation_changed)
        self._unsubscribe = session.transcript.subscribe(self._on_transcript_changed)

        voice = self.query_one("#voice-controls", VoiceControls)
        voice.configure(dictation=session.dictation_available, playback=session.playback_available)
        if session.playback_available:
            self.set_interval(PLAYBACK_POLL_INTERVAL, self._refresh_playback)

        self._on_transcript_changed(session.transcript.messages)
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    def on_unmount(self) -> None:
        """Detach from the session; it is closed by :func:`run_chat_tui`."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        session = self._session
        session.set_debug_callback(None)
        session.set_input_callback(None)
        session.set_busy_callback(None)
        session.set_error_callback(None)
        session.set_dictation_callback(None)

    # -------------------------
    # Session -> widgets
    # -------------------------
    def _on_transcript_changed(self, messages: tuple[Message, ...]) -> None:
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        chat.show_transcript(messages)
        chat.border_subtitle = f"{len(messages)} messages"

    def _on_input_changed(self, text: str) -> None:
        self.query_one("#chat-input-bar", ChatInputBar).set_text(text)

    def _on_busy_changed(self, busy: bool) -> None:
        self.query_one("#chat-input-bar", ChatInputBar).set_busy(busy)
        self.query_one("#status-bar", StatusBar).set_busy(busy)

    def _on_error(self, error: ChatError) -> None:
        self.query_one("#status-bar", StatusBar).show_error(error)
        message = str(error)
        if len(message) > NOTIFY_MAX_LENGTH:
            message = message[:NOTIFY_MAX_LENGTH] + "..."
        self.notify(message, title=type(error).__name__, severity="error", timeout=5)

    def _on_dictation_changed(self, state: DictationState) -> None:
        self.query_one("#voice-controls", VoiceControls).set_listening(state is DictationState.LISTENING)

    def _refresh_playback(self) -> None:
        self.query_one("#voice-controls", VoiceControls).set_speaking(self._session.is_playing)

    # -------------------------
    # Widgets -> session
    # -------------------------
    def on_chat_input_bar_changed(self, event: ChatInputBar.Changed) -> None:
        self._session.set_input(event.value)

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle user input submission."""
        self._session.set_input(event.value)
        self.query_one("#chat-input-bar", ChatInputBar).remember(event.value)
        self._send()

    def on_chat_input_bar_restart_requested(self, event: ChatInputBar.RestartRequested) -> None:
        self.action_restart()

    def on_voice_controls_dictation_pressed(self, event: VoiceControls.DictationPressed) -> None:
        self.action_toggle_dictation()

    def on_voice_controls_speak_pressed(self, event: VoiceControls.SpeakPressed) -> None:
        self.action_toggle_playback()

    def on_voice_controls_clear_pressed(self, event: VoiceControls.ClearPressed) -> None:
        self.action_clear_input()

    @work(group="completion")
    async def _send(self) -> None:
        """Run one completion call as a background async worker."""
        reply = await self._session.submit()
        if reply is not None:
            self.query_one("#status-bar", StatusBar).clear_error()

    @work(group="speech")
    async def _dictation_worker(self) -> None:
        await self._session.toggle_dictation()

    @work(group="speech")
    async def _playback_worker(self) -> None:
        await self._session.toggle_playback()
        self._refresh_playback()

    # -------------------------
    # Actions
    # -------------------------
    def action_send(self) -> None:
        self.query_one("#chat-input-bar", ChatInputBar).submit()

    def action_restart(self) -> None:
        """Discard the conversation and show the greeting again."""
        self._session.restart()
        self.query_one("#status-bar", StatusBar).clear_error()
        self.notify("New conversation", timeout=2)

    def action_toggle_dictation(self) -> None:
        if not self._session.dictation_available:
            self.notify("Dictation is not configured", severity="warning", timeout=3)
            return
        self._dictation_worker()

    def action_toggle_playback(self) -> None:
        if not self._session.playback_available:
            self.notify("Playback is not configured", severity="warning", timeout=3)
            return
        self._playback_worker()

    def action_clear_input(self) -> None:
        self._session.clear_input()
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)

    def action_copy_last_response(self) -> None:
        """Copy last assistant response to clipboard."""
        response = self._session.transcript.last_response()
        if response:
            self.copy_to_clipboard(response)
            self.notify("Response copied")
        else:
            self.notify("No response to copy", severity="warning")


async def run_chat_tui(session: ChatSession, log_level: str | None = None) -> None:
    """Run the Textual TUI and close the session when it exits.

    Args:
        session: Session to drive
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    app = ApplianceChatApp(session, log_level=log_level)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    finally:
        await session.close()
