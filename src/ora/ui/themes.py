"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, etc.)

To add a new theme, define it here and register in the app.
"""

from textual.theme import Theme

# Navy and brass palette for the ORA panel
ORA_NIGHT = Theme(
    name="ora-night",
    primary="#5fa8d3",      # Steel blue - main accent
    secondary="#c9a227",    # Brass - assistant messages
    accent="#e07a5f",       # Terracotta - highlights
    foreground="#e0e6ed",
    background="#0b132b",
    success="#81b29a",
    warning="#f2cc8f",
    error="#e63946",
    surface="#1c2541",
    panel="#141c36",
    dark=True,
    variables={
        "block-cursor-foreground": "#0b132b",
        "block-cursor-background": "#c9a227",
        "block-cursor-text-style": "bold",
        "block-hover-background": "#3a506b 20%",

        "input-cursor-background": "#e0e6ed",
        "input-cursor-foreground": "#0b132b",
        "input-selection-background": "#5fa8d3 30%",

        "border": "#3a506b",
        "border-blurred": "#1c2541",

        "scrollbar": "#1c2541",
        "scrollbar-hover": "#3a506b",
        "scrollbar-active": "#5fa8d3",
        "scrollbar-background": "#141c36",
        "scrollbar-corner-color": "#141c36",

        "footer-foreground": "#c5cfdb",
        "footer-background": "#0b132b",
        "footer-key-foreground": "#c9a227",
        "footer-key-background": "#1c2541",
        "footer-description-foreground": "#9aa8b8",

        "text-muted": "#6b7a90",
        "text-disabled": "#3a506b",

        "button-foreground": "#e0e6ed",
        "button-color-foreground": "#0b132b",
        "button-focus-text-style": "bold reverse",
    },
)
