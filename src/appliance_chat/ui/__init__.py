"""Terminal UI module for appliance_chat.

Provides a Textual-based TUI around a ChatSession.

Module structure (each module hides a design decision):
- config.py: Constants and log levels
- widgets.py: Custom widgets (transcript view, input bar, voice controls, status, log)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palette
- app.py: Application orchestration (user interaction flow)
"""

from .app import ApplianceChatApp, run_chat_tui
from .config import LogLevel
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, StatusBar, VoiceControls

__all__ = [
    "ApplianceChatApp",
    "ChatHistoryWidget",
    "ChatInputBar",
    "DebugPanel",
    "LogLevel",
    "StatusBar",
    "VoiceControls",
    "run_chat_tui",
]
