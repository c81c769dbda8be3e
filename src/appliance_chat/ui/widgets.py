"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Transcript rendering and scrolling
- Input history management
- Busy/error status formatting
- Log rendering and level filtering
"""

from collections.abc import Sequence
from datetime import datetime

from rich.text import Text
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.events import Click
from textual.message import Message as TextualMessage
from textual.widgets import Button, RichLog, Static, TextArea

from ..conversation import Message
from ..errors import ChatError
from .config import BOT_NAME, INPUT_HISTORY_MAX_SIZE, LOG_MAX_MESSAGE_LENGTH, LOG_TIMESTAMP_FORMAT, LogLevel


class ChatHistoryWidget(VerticalScroll):
    """Scrollable transcript view.

    Rows alternate styling by position: even rows are drawn as the bot,
    odd rows as the user. Every change re-renders the whole transcript and
    scrolls to the newest row.
    """

    BORDER_TITLE = "Chat"

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._messages: tuple[Message, ...] = ()

    @property
    def messages(self) -> tuple[Message, ...]:
        return self._messages

    def show_transcript(self, messages: Sequence[Message]) -> None:
        """Replace the rendered rows with ``messages``."""
        self._messages = tuple(messages)
        self.remove_children()
        self.mount_all(self._render_row(index, msg) for index, msg in enumerate(self._messages))
        self.call_after_refresh(self.scroll_end, animate=False)

    def _render_row(self, index: int, msg: Message) -> Horizontal:
        is_bot_row = index % 2 == 0
        name = BOT_NAME if is_bot_row else "You"
        bubble = Static(
            Text.assemble((f"{name}\n", "bold"), msg.content),
            classes=f"chat-message {'bot-message' if is_bot_row else 'user-message'}",
        )
        row = Horizontal(classes="message-row" if is_bot_row else "message-row -user")
        row.compose_add_child(bubble)
        return row


class ChatInputBar(Vertical):
    """Multi-line input with Send and New Conversation buttons.

    The text area grows once it holds text. Up/Down at the edges of the
    text walk through previously sent entries.
    """

    class Submitted(TextualMessage):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    class Changed(TextualMessage):
        """Message sent when the input text was edited."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    class RestartRequested(TextualMessage):
        """Message sent when the user asks for a new conversation."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._history: list[str] = []
        self._history_index: int = -1

    def compose(self):
        text_area = TextArea(id="chat-input", show_line_numbers=False)
        text_area.cursor_blink = False
        yield text_area
        with Horizontal(id="input-buttons"):
            yield Button("Send", id="send-btn").with_tooltip("Send message (Ctrl+J)")
            yield Button("Start New Conversation", id="restart-btn").with_tooltip(
                "Discard the conversation (Ctrl+N)"
            )

    def on_mount(self) -> None:
        text_area = self.query_one("#chat-input", TextArea)
        text_area.highlight_cursor_line = False
        text_area.focus()

    @property
    def text(self) -> str:
        return self.query_one("#chat-input", TextArea).text

    def set_text(self, value: str) -> None:
        """Show ``value`` in the text area (dictation result or cleared input)."""
        text_area = self.query_one("#chat-input", TextArea)
        if text_area.text != value:
            text_area.text = value
            text_area.move_cursor(text_area.document.end)
        text_area.set_class(bool(value), "-filled")

    def set_busy(self, busy: bool) -> None:
        """Disable sending while a reply is pending."""
        self.query_one("#send-btn", Button).disabled = busy

    def remember(self, value: str) -> None:
        """Add a sent entry to the navigation history."""
        if value and (not self._history or self._history[-1] != value):
            self._history.append(value)
            del self._history[:-INPUT_HISTORY_MAX_SIZE]
        self._history_index = -1

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", TextArea).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            event.stop()
            self.submit()
        elif event.button.id == "restart-btn":
            event.stop()
            self.post_message(self.RestartRequested())

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        event.stop()
        value = event.text_area.text
        event.text_area.set_class(bool(value), "-filled")
        self.post_message(self.Changed(value))

    def on_key(self, event) -> None:
        """Handle keyboard shortcuts.

        Note: ctrl+enter cannot work in terminals (terminal doesn't pass
        ctrl/shift modifiers with Enter). Use ctrl+j as the submit shortcut.
        """
        if event.key == "ctrl+j":
            self.submit()
            event.prevent_default()
            event.stop()
        elif event.key == "up" and self._is_cursor_at_start():
            self._navigate_history(-1)
            event.prevent_default()
            event.stop()
        elif event.key == "down" and self._is_cursor_at_end():
            self._navigate_history(1)
            event.prevent_default()
            event.stop()

    def _is_cursor_at_start(self) -> bool:
        text_area = self.query_one("#chat-input", TextArea)
        return text_area.cursor_location == (0, 0)

    def _is_cursor_at_end(self) -> bool:
        text_area = self.query_one("#chat-input", TextArea)
        return text_area.cursor_location == text_area.document.end

    def _navigate_history(self, direction: int) -> None:
        if not self._history:
            return
        text_area = self.query_one("#chat-input", TextArea)
        if direction < 0:  # Up
            if self._history_index == -1:
                self._history_index = len(self._history) - 1
            elif self._history_index > 0:
                self._history_index -= 1
        else:  # Down
            if self._history_index < len(self._history) - 1:
                self._history_index += 1
            else:
                self._history_index = -1
                text_area.text = ""
                return
        text_area.text = self._history[self._history_index]

    def submit(self) -> None:
        """Post the current text for sending unless sending is disabled."""
        if self.query_one("#send-btn", Button).disabled:
            return
        # The session decides whether the text is sendable and clears it on success
        self.post_message(self.Submitted(self.text))


class VoiceControls(Horizontal):
    """Dictation, playback and clear buttons."""

    class DictationPressed(TextualMessage):
        """Start/Stop dictation was pressed."""

    class SpeakPressed(TextualMessage):
        """Speak/Stop playback was pressed."""

    class ClearPressed(TextualMessage):
        """Clear input was pressed."""

    def compose(self):
        yield Button("Start", id="dictation-btn").with_tooltip("Dictate into the input (Ctrl+T)")
        yield Button("Speak", id="speak-btn").with_tooltip("Read the input aloud (Ctrl+S)")
        yield Button("Clear", id="clear-btn").with_tooltip("Clear the input (Ctrl+U)")

    def configure(self, dictation: bool, playback: bool) -> None:
        """Disable the buttons whose speech service is not configured."""
        self.query_one("#dictation-btn", Button).disabled = not dictation
        self.query_one("#speak-btn", Button).disabled = not playback

    def set_listening(self, listening: bool) -> None:
        button = self.query_one("#dictation-btn", Button)
        button.label = "Stop" if listening else "Start"
        button.set_class(listening, "-active")

    def set_speaking(self, speaking: bool) -> None:
        button = self.query_one("#speak-btn", Button)
        button.label = "Stop" if speaking else "Speak"
        button.set_class(speaking, "-active")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        messages = {
            "dictation-btn": self.DictationPressed,
            "speak-btn": self.SpeakPressed,
            "clear-btn": self.ClearPressed,
        }
        message_type = messages.get(event.button.id or "")
        if message_type is not None:
            event.stop()
            self.post_message(message_type())


class StatusBar(Static):
    """One-line status: model name, pending reply, or the last failure."""

    def __init__(self, *args, model: str = "", **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._model = model
        self._busy = False
        self._error: ChatError | None = None

    def on_mount(self) -> None:
        self._update_display()

    @property
    def error(self) -> ChatError | None:
        return self._error

    def set_busy(self, busy: bool) -> None:
        self._busy = busy
        if busy:
            self._error = None
        self._update_display()

    def show_error(self, error: ChatError) -> None:
        self._error = error
        self._update_display()

    def clear_error(self) -> None:
        self._error = None
        self._update_display()

    def _update_display(self) -> None:
        self.set_class(self._busy, "-busy")
        self.set_class(self._error is not None and not self._busy, "-error")
        if self._busy:
            self.update(f"{BOT_NAME} is typing...")
        elif self._error is not None:
            self.update(Text(f"! {self._error}"))
        else:
            self.update(Text(f"Model: {self._model}"))


class DebugPanel(RichLog):
    """Log panel for real-time tracing with level filtering.

    Shows timestamped log messages from all components.
    Supports standard log levels: DEBUG < INFO < WARNING < ERROR.
    Hidden by default, shown with --log-level flag or toggled with Ctrl+D.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Trace log"

    def __init__(self, *args, log_level: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=True,
            **kwargs
        )
        self._log_level = log_level

    @property
    def log_level(self) -> int:
        """Current log level threshold."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._log_level = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def on_mount(self) -> None:
        """Hide by default."""
        self.display = False

    def log(
        self,
        component: str,
        message: str,
        level: int = LogLevel.DEBUG
    ) -> None:
        """Add a log entry if it meets the current level threshold.

        Args:
            component: Component name (TUI, Session, LLM, Dictation, Playback)
            message: Log message
            level: Log level (LogLevel.DEBUG, INFO, WARNING, ERROR)
        """
        if level < self._log_level:
            return

        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)

        level_colors = {
            LogLevel.DEBUG: "dim",
            LogLevel.INFO: "blue",
            LogLevel.WARNING: "dark_orange",
            LogLevel.ERROR: "red",
        }
        level_color = level_colors.get(level, "default")

        component_colors = {
            "TUI": "dark_cyan",
            "Session": "green",
            "LLM": "magenta",
            "Dictation": "blue",
            "Playback": "dark_green",
        }
        comp_color = component_colors.get(component, "default")

        if len(message) > LOG_MAX_MESSAGE_LENGTH:
            message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."

        line = Text.assemble(
            (f"{timestamp} ", "dim"),
            (f"{LogLevel.name(level):<7} ", level_color),
            (f"[{component}] ", comp_color),
            message,
        )
        self.write(line)

    def route(self, level: str, component: str, message: str) -> None:
        """Debug callback target: ``(level, component, message)``."""
        self.log(component, message, LogLevel.from_string(level))

    def show(self) -> None:
        """Show the log panel."""
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        """Hide the log panel."""
        self.display = False
        self.border_subtitle = "Hidden"

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
            return False
        self.show()
        return True

    def get_plain_text(self) -> str:
        """Get plain text content of the log for copying."""
        return "\n".join(line.text for line in self.lines)

    def on_click(self, event: Click) -> None:
        """Copy log content to clipboard when clicked."""
        event.stop()
        text = self.get_plain_text()
        if not text.strip():
            self.app.notify("Log is empty", timeout=2)
            return
        self.app.copy_to_clipboard(text)
        self.app.notify("Log copied", timeout=2)
