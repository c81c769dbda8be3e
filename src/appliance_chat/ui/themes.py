"""Theme definitions for the TUI.

Light Catppuccin (Latte) palette: the chat is read on a white page with
green bot bubbles and blue user bubbles.
"""

from textual.theme import Theme

THEME_NAME = "appliance-latte"

APPLIANCE_LATTE = Theme(
    name=THEME_NAME,
    primary="#1e66f5",      # Blue - user messages, focus
    secondary="#8839ef",    # Mauve - send button
    accent="#179299",       # Teal - new conversation
    foreground="#4c4f69",   # Text
    background="#eff1f5",   # Base
    success="#40a02b",      # Green - bot messages, speak
    warning="#fe640b",      # Peach
    error="#d20f39",        # Red - clear, error line
    surface="#e6e9ef",      # Mantle
    panel="#dce0e8",        # Crust
    dark=False,
    variables={
        "block-cursor-foreground": "#eff1f5",
        "block-cursor-background": "#dc8a78",
        "block-cursor-text-style": "bold",
        "block-hover-background": "#ccd0da 40%",

        "input-cursor-background": "#4c4f69",
        "input-cursor-foreground": "#eff1f5",
        "input-selection-background": "#1e66f5 25%",

        "border": "#9ca0b0",
        "border-blurred": "#bcc0cc",

        "scrollbar": "#ccd0da",
        "scrollbar-hover": "#bcc0cc",
        "scrollbar-active": "#1e66f5",
        "scrollbar-background": "#e6e9ef",

        "footer-foreground": "#5c5f77",
        "footer-background": "#dce0e8",
        "footer-key-foreground": "#1e66f5",
        "footer-key-background": "#ccd0da",
        "footer-description-foreground": "#6c6f85",

        "text-muted": "#6c6f85",
        "button-color-foreground": "#eff1f5",
    },
)
