"""Navigation shell: which view is active, plus the home screen's feature cards."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum


class View(str, Enum):
    HOME = "home"
    CHAT = "chat"
    IMAGE_EDITOR = "image-editor"
    SLIDESHOW = "slideshow-generator"
    HD_IMAGE = "hd-image-generator"


@dataclass(frozen=True)
class FeatureCard:
    """A feature listed on the home view."""

    title: str
    description: str
    target: View


FEATURE_CARDS = (
    FeatureCard(
        title="Bhaii Chat",
        description=(
            "Chat with your supportive AI brother, Bhaii! Get quick, friendly advice "
            "and encouraging words with a local touch. Kya haal hai?"
        ),
        target=View.CHAT,
    ),
    FeatureCard(
        title="Gemini Image Editor",
        description=(
            "Upload an image and use text prompts to edit it with Gemini. "
            "Add a filter, remove objects, and more!"
        ),
        target=View.IMAGE_EDITOR,
    ),
    FeatureCard(
        title="Animated Slideshow",
        description=(
            "Create a short, fun animated slideshow from your text! "
            "Perfect for quick demos, no API key needed!"
        ),
        target=View.SLIDESHOW,
    ),
    FeatureCard(
        title="HD Image Generator",
        description=(
            "Generate high-quality, clear, and detailed images from text prompts. "
            "Ideal for school projects, posters, and presentations!"
        ),
        target=View.HD_IMAGE,
    ),
)


class NavigationShell:
    """Holds the active view and notifies listeners when it changes."""

    def __init__(self, initial: View = View.HOME) -> None:
        self._active = initial
        self._listeners: list[Callable[[View], None]] = []

    @property
    def active(self) -> View:
        return self._active

    def add_listener(self, listener: Callable[[View], None]) -> None:
        self._listeners.append(listener)

    def navigate(self, view: View | str) -> View:
        """Switch to a view; unknown names fall back to home."""
        try:
            target = View(view)
        except ValueError:
            target = View.HOME
        if target != self._active:
            self._active = target
            for listener in self._listeners:
                listener(target)
        return self._active
