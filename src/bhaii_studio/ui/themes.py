"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, etc.)

To add a new theme, define it here and register in the app.
"""

from textual.theme import Theme

# Blue/indigo palette matching the studio's header gradient
BHAII_INDIGO = Theme(
    name="bhaii-indigo",
    primary="#2563eb",      # Blue 600 - navigation and send
    secondary="#4338ca",    # Indigo 700 - header
    accent="#f59e0b",       # Amber - HD generator highlights
    foreground="#e5e7eb",   # Gray 200 - text
    background="#111827",   # Gray 900 - sidebar
    success="#14b8a6",      # Teal - image editor
    warning="#f97316",      # Orange - notices
    error="#dc2626",        # Red 600 - errors
    surface="#1f2937",      # Gray 800 - cards
    panel="#374151",        # Gray 700 - assistant bubbles
    dark=True,
    variables={
        "border": "#4b5563",
        "border-blurred": "#374151",
        "scrollbar": "#374151",
        "scrollbar-hover": "#4b5563",
        "scrollbar-active": "#2563eb",
        "footer-key-foreground": "#f59e0b",
    },
)
