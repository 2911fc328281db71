"""
Bhaii Studio: a persona chat assistant, image editor, text slideshow and
HD image generator over the Google Gemini API.

The core is the chat session, the AI gateway and the preference store;
the Textual TUI and the Typer CLI are thin front ends over them.
"""

__version__ = "0.1.0"

from .gateway import AIGateway, CredentialSource, create_gateway
from .models import (
    AspectRatio,
    ChatMessage,
    ChatResult,
    ImagePayload,
    ImageResult,
    Sender,
    UserPreferences,
)
from .preferences import PreferenceStore
from .session import SessionController, SessionState

__all__ = [
    "AIGateway",
    "AspectRatio",
    "ChatMessage",
    "ChatResult",
    "CredentialSource",
    "ImagePayload",
    "ImageResult",
    "PreferenceStore",
    "Sender",
    "SessionController",
    "SessionState",
    "UserPreferences",
    "create_gateway",
]
