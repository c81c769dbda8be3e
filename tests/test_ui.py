"""Tests for the Textual TUI driven through the pilot."""
import pytest
from textual.widgets import Button, TextArea

from appliance_chat.conversation import GREETING
from appliance_chat.errors import UpstreamError
from appliance_chat.session import ChatSession
from appliance_chat.ui import ApplianceChatApp, ChatHistoryWidget, DebugPanel, LogLevel, StatusBar


async def settle(app, pilot) -> None:
    """Let message chains and the workers they start run to completion."""
    await pilot.pause()
    await pilot.pause()
    await app.workers.wait_for_complete()
    await pilot.pause()


async def type_and_send(app, pilot, text: str) -> None:
    app.query_one("#chat-input", TextArea).text = text
    await pilot.pause()
    await pilot.click("#send-btn")
    await settle(app, pilot)


class TestLogLevel:
    """Tests for LogLevel helpers."""

    def test_from_string(self):
        """Test names map to levels, unknown names fall back to DEBUG."""
        assert LogLevel.from_string("WARNING") == LogLevel.WARNING
        assert LogLevel.from_string("verbose") == LogLevel.DEBUG
        assert LogLevel.name(LogLevel.ERROR) == "ERROR"


class TestApplianceChatApp:
    """Tests for the chat screen."""

    @pytest.mark.asyncio
    async def test_greeting_shown_on_start(self, provider):
        """Test the transcript view starts with the greeting."""
        app = ApplianceChatApp(ChatSession(provider))
        async with app.run_test():
            chat = app.query_one("#chat-history", ChatHistoryWidget)
            assert [m.content for m in chat.messages] == [GREETING]

    @pytest.mark.asyncio
    async def test_send_renders_reply_and_clears_input(self, make_provider):
        """Test sending shows both entries and empties the input."""
        session = ChatSession(make_provider("Replace the door switch."))
        app = ApplianceChatApp(session)
        async with app.run_test() as pilot:
            await type_and_send(app, pilot, "Microwave runs with door open")

            chat = app.query_one("#chat-history", ChatHistoryWidget)
            assert [m.role for m in chat.messages] == ["assistant", "user", "assistant"]
            assert chat.messages[-1].content == "Replace the door switch."
            assert app.query_one("#chat-input", TextArea).text == ""
            assert not app.query_one("#send-btn", Button).disabled

    @pytest.mark.asyncio
    async def test_failure_shows_error_and_keeps_input(self, make_provider):
        """Test a failed call marks the status line and keeps the text."""
        session = ChatSession(make_provider(UpstreamError("boom", status_code=500)))
        app = ApplianceChatApp(session)
        async with app.run_test() as pilot:
            await type_and_send(app, pilot, "Freezer frosting up")

            status = app.query_one("#status-bar", StatusBar)
            assert status.has_class("-error")
            assert isinstance(status.error, UpstreamError)
            assert app.query_one("#chat-input", TextArea).text == "Freezer frosting up"
            assert len(app.query_one("#chat-history", ChatHistoryWidget).messages) == 2

    @pytest.mark.asyncio
    async def test_new_conversation_binding(self, make_provider):
        """Test Ctrl+N resets the view to the greeting."""
        session = ChatSession(make_provider("answer"))
        app = ApplianceChatApp(session)
        async with app.run_test() as pilot:
            await type_and_send(app, pilot, "question")
            await pilot.press("ctrl+n")
            await settle(app, pilot)

            chat = app.query_one("#chat-history", ChatHistoryWidget)
            assert [m.content for m in chat.messages] == [GREETING]

    @pytest.mark.asyncio
    async def test_voice_buttons_disabled_without_speech(self, provider):
        """Test dictation and playback buttons are disabled when not configured."""
        app = ApplianceChatApp(ChatSession(provider))
        async with app.run_test():
            assert app.query_one("#dictation-btn", Button).disabled
            assert app.query_one("#speak-btn", Button).disabled
            assert not app.query_one("#clear-btn", Button).disabled

    @pytest.mark.asyncio
    async def test_dictation_button_fills_input(self, provider, recognizer, wait_until):
        """Test a dictation result appears in the text area."""
        session = ChatSession(provider, recognizer=recognizer)
        app = ApplianceChatApp(session)
        async with app.run_test() as pilot:
            await pilot.click("#dictation-btn")
            await settle(app, pilot)
            assert str(app.query_one("#dictation-btn", Button).label) == "Stop"

            recognizer.push(["stove igniter clicks"])
            await wait_until(lambda: not session.is_listening)
            await pilot.pause()

            assert app.query_one("#chat-input", TextArea).text == "stove igniter clicks"
            assert str(app.query_one("#dictation-btn", Button).label) == "Start"
        await session.close()

    @pytest.mark.asyncio
    async def test_log_panel_shown_with_level(self, provider):
        """Test --log-level makes the log panel visible with that threshold."""
        app = ApplianceChatApp(ChatSession(provider), log_level="warning")
        async with app.run_test():
            panel = app.query_one("#debug-panel", DebugPanel)
            assert panel.display
            assert panel.log_level == LogLevel.WARNING

    @pytest.mark.asyncio
    async def test_log_panel_routes_by_level(self, provider, monkeypatch):
        """Test debug callback entries below the panel threshold are dropped."""
        app = ApplianceChatApp(ChatSession(provider), log_level="warning")
        async with app.run_test():
            panel = app.query_one("#debug-panel", DebugPanel)
            written = []
            monkeypatch.setattr(panel, "write", written.append)

            panel.route("debug", "Dictation", "State -> listening")
            panel.route("info", "Session", "Submitting")
            panel.route("error", "LLM", "HTTP 500")

            assert len(written) == 1
            assert "[LLM] HTTP 500" in written[0].plain
            assert "ERROR" in written[0].plain
