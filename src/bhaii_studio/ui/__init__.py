"""Terminal UI module for bhaii_studio.

Provides a Textual-based TUI over the chat session and feature views.

Module structure (each module hides a design decision):
- widgets.py: Views and custom widgets (chat bubbles, forms, slide display)
- images.py: Saving generated images and showing them in the terminal
- screens.py: Modal dialogs (API key selection)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palette
- app.py: Application orchestration (navigation, lifecycle)
"""

from .app import BhaiiStudioApp, run_textual_tui
from .screens import ApiKeyScreen, TUIReselector
from .widgets import ChatHistoryWidget, ChatView, HDImagePane, HomeView, ImageEditorPane, SlideshowPane

__all__ = [
    "ApiKeyScreen",
    "BhaiiStudioApp",
    "ChatHistoryWidget",
    "ChatView",
    "HDImagePane",
    "HomeView",
    "ImageEditorPane",
    "SlideshowPane",
    "TUIReselector",
    "run_textual_tui",
]
