"""Feature views.

Each view owns its own state and, where it needs the AI service, calls the
gateway directly. Views share no state with the chat session.
"""

from .hd_generator import HDImageGeneratorView
from .image_editor import ImageEditorView
from .slideshow import MAX_SLIDES, SLIDE_DURATION_SECONDS, SlideshowPlayer, SlideshowState, build_slides

__all__ = [
    "HDImageGeneratorView",
    "ImageEditorView",
    "MAX_SLIDES",
    "SLIDE_DURATION_SECONDS",
    "SlideshowPlayer",
    "SlideshowState",
    "build_slides",
]
