"""CSS styling for the TUI.

Single column, top to bottom: header banner, chat history, status line,
input bar, voice controls, log panel, footer.
"""

APP_CSS = """
/* ============================================
   Screen Layout
   ============================================ */
Screen {
    layout: vertical;
    background: $background;
}

/* ============================================
   Banner - Bot name under the header
   ============================================ */
#banner {
    height: 3;
    content-align: center middle;
    background: $surface;
    color: $success;
    text-style: bold;
    border-bottom: solid $border;
}

/* ============================================
   Chat History - Conversation Display
   ============================================ */
#chat-history {
    height: 1fr;
    padding: 1 2;
    background: $background;
    scrollbar-gutter: stable;
}

.chat-message {
    width: auto;
    max-width: 80%;
    height: auto;
    margin: 0 0 1 0;
    padding: 0 1;
    color: $background;
}

/* Even rows (the greeting, then every reply): left aligned, green */
.bot-message {
    background: $success;
    border: round $success;
}

/* Odd rows: right aligned, blue */
.user-message {
    background: $primary;
    border: round $primary;
}

.message-row {
    width: 100%;
    height: auto;
}

.message-row.-user {
    align-horizontal: right;
}

.message-header {
    height: auto;
    text-style: bold;
}

.message-content {
    height: auto;
}

/* ============================================
   Status Line - Busy / Error indicator
   ============================================ */
#status-bar {
    height: 1;
    padding: 0 2;
    background: $surface;
    color: $text-muted;

    &.-busy {
        color: $primary;
        text-style: italic;
    }

    &.-error {
        color: $error;
        text-style: bold;
    }
}

/* ============================================
   Chat Input Bar - Text Entry + Buttons
   ============================================ */
ChatInputBar {
    height: auto;
    padding: 0 1;
    background: $surface;
}

#chat-input {
    height: 3;
    border: round $border;
    padding: 0 1;
    background: $background;

    &:focus {
        border: round $primary;
    }

    &.-filled {
        height: 6;
    }
}

#input-buttons {
    height: 3;
    margin-top: 1;
}

#send-btn {
    width: 1fr;
    background: $secondary;
    border: tall $secondary;
    color: $background;
    text-style: bold;

    &:disabled {
        background: $secondary 40%;
        border: tall $secondary 40%;
    }
}

#restart-btn {
    width: 1fr;
    margin-left: 1;
    background: $accent;
    border: tall $accent;
    color: $background;
}

/* ============================================
   Voice Controls - Dictation, Playback, Clear
   ============================================ */
VoiceControls {
    height: 3;
    align-horizontal: center;
    background: $surface;
    margin-bottom: 1;
}

VoiceControls Button {
    width: 12;
    margin: 0 1;
    color: $background;
}

#dictation-btn {
    background: $primary;
    border: tall $primary;

    &.-active {
        background: $warning;
        border: tall $warning;
    }
}

#speak-btn {
    background: $success;
    border: tall $success;

    &.-active {
        background: $warning;
        border: tall $warning;
    }
}

#clear-btn {
    background: $error;
    border: tall $error;
}

VoiceControls Button:disabled {
    background: $panel;
    border: tall $panel;
    color: $text-muted;
}

/* ============================================
   Debug/Log Panel
   ============================================ */
#debug-panel {
    height: auto;
    min-height: 6;
    max-height: 12;
    background: $panel;
    border: round $warning 60%;
    border-title-color: $warning;
    border-title-style: bold;
    border-title-align: left;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    overflow-y: scroll;
    scrollbar-gutter: stable;

    &:focus {
        border: round $warning;
    }
}

/* ============================================
   Notification Toasts
   ============================================ */
Toast {
    background: $surface;
    border: tall $border;
    padding: 0 1;

    &.-information {
        border: tall $primary;
    }

    &.-error {
        border: tall $error;
        background: $error 12%;
    }

    &.-warning {
        border: tall $warning;
        background: $warning 12%;
    }
}

/* ============================================
   Header / Footer
   ============================================ */
Header {
    background: $panel;
    color: $foreground;
    dock: top;
    height: 1;
}

Footer {
    background: $panel;
    height: auto;
}
"""
