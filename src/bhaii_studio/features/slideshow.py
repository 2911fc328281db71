"""Client-only text slideshow.

Each non-blank line of the input becomes one slide. Playback advances on
a fixed timer and stops after the last slide. No network calls.
"""

import asyncio
from collections.abc import Callable
from enum import Enum

SLIDE_DURATION_SECONDS = 2.5
MAX_SLIDES = 6  # Keeps playback around 10-15 seconds

STATUS_READY = "Enter text to create your animated slideshow!"
STATUS_PLAYING = "Slideshow playing..."
STATUS_STOPPED = "Slideshow stopped. Ready for new input!"
STATUS_FINISHED = "Slideshow finished! You can generate another one."
EMPTY_TEXT_ERROR = "Please enter some text for your slideshow."
PLACEHOLDER_TEXT = "Your awesome slideshow will appear here!"


class SlideshowState(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"


def build_slides(text: str, max_slides: int = MAX_SLIDES) -> list[str]:
    """Split text into trimmed, non-blank lines, keeping the first ``max_slides``."""
    lines = [line.strip() for line in text.split("\n")]
    return [line for line in lines if line][:max_slides]


class SlideshowPlayer:
    """Slideshow playback state machine.

    Holds at most one pending timer callback; scheduling a new one or
    stopping always cancels the previous one first.
    """

    def __init__(
        self,
        slide_duration: float = SLIDE_DURATION_SECONDS,
        max_slides: int = MAX_SLIDES,
        auto_advance: bool = True,
        on_change: Callable[["SlideshowPlayer"], None] | None = None,
    ) -> None:
        self._slide_duration = slide_duration
        self._max_slides = max_slides
        self._auto_advance = auto_advance
        self._on_change = on_change
        self._slides: list[str] = []
        self._index = 0
        self._state = SlideshowState.IDLE
        self._status = STATUS_READY
        self._error: str | None = None
        self._timer: asyncio.TimerHandle | None = None

    @property
    def slides(self) -> list[str]:
        return list(self._slides)

    @property
    def index(self) -> int:
        return self._index

    @property
    def state(self) -> SlideshowState:
        return self._state

    @property
    def playing(self) -> bool:
        return self._state == SlideshowState.PLAYING

    @property
    def status(self) -> str:
        return self._status

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def has_pending_timer(self) -> bool:
        return self._timer is not None

    @property
    def current_text(self) -> str:
        if self._slides:
            return self._slides[self._index]
        return PLACEHOLDER_TEXT

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change(self)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _schedule_next(self) -> None:
        self._cancel_timer()
        if self._auto_advance:
            loop = asyncio.get_running_loop()
            self._timer = loop.call_later(self._slide_duration, self._on_timer)

    def _on_timer(self) -> None:
        self._timer = None
        self.advance()

    def generate(self, text: str) -> bool:
        """Build slides from text and start playback.

        Returns:
            True if playback started, False if the text had no slides.
        """
        self.stop()
        self._error = None

        slides = build_slides(text, self._max_slides)
        if not slides:
            self._error = EMPTY_TEXT_ERROR
            self._notify()
            return False

        self._slides = slides
        self._index = 0
        self._state = SlideshowState.PLAYING
        self._status = STATUS_PLAYING
        self._schedule_next()
        self._notify()
        return True

    def advance(self) -> None:
        """Show the next slide, or finish after the last one."""
        if not self.playing:
            return
        if self._index < len(self._slides) - 1:
            self._index += 1
            self._schedule_next()
        else:
            self.stop()
            self._status = STATUS_FINISHED
            self._index = 0
        self._notify()

    def stop(self) -> None:
        """Stop playback and cancel the pending timer.

        The status only changes when a slideshow was actually playing.
        """
        self._cancel_timer()
        if self.playing:
            self._status = STATUS_STOPPED
        self._state = SlideshowState.IDLE

    def clear(self) -> None:
        """Stop playback and discard slides."""
        self.stop()
        self._slides = []
        self._index = 0
        self._error = None
        self._status = STATUS_READY
        self._notify()
