"""Main Textual TUI application.

Orchestrates the navigation sidebar and the feature views.
"""

import asyncio
import logging
from pathlib import Path

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, ContentSwitcher, Footer, Header

from ..context import AppContext
from ..features import HDImageGeneratorView, ImageEditorView
from ..navigation import View
from .images import DEFAULT_OUTPUT_DIR
from .screens import TUIReselector
from .styles import APP_CSS
from .themes import BHAII_INDIGO
from .widgets import ChatView, HDImagePane, HomeView, ImageEditorPane, SlideshowPane

logger = logging.getLogger(__name__)

NAV_ITEMS = [
    (View.HOME, "Home"),
    (View.CHAT, "Bhaii Chat"),
    (View.IMAGE_EDITOR, "Image Editor"),
    (View.SLIDESHOW, "Animated Slideshow"),
    (View.HD_IMAGE, "HD Image Generator"),
]


class BhaiiStudioApp(App):
    """Textual TUI for Bhaii AI Studio."""

    CSS = APP_CSS
    TITLE = "Bhaii AI Studio"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("f1", "navigate('home')", "Home"),
        Binding("f2", "navigate('chat')", "Chat"),
        Binding("f3", "navigate('image-editor')", "Editor"),
        Binding("f4", "navigate('slideshow-generator')", "Slideshow"),
        Binding("f5", "navigate('hd-image-generator')", "HD Image"),
    ]

    def __init__(self, context: AppContext, output_dir: Path = DEFAULT_OUTPUT_DIR) -> None:
        super().__init__()
        self._context = context
        self._output_dir = output_dir
        self._image_editor = ImageEditorView(context.gateway)
        self._hd_generator = HDImageGeneratorView(context.gateway, context.credentials)
        context.navigation.add_listener(self._show_view)

    @property
    def context(self) -> AppContext:
        return self._context

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Horizontal(id="body"):
            with Vertical(id="sidebar"):
                for view, label in NAV_ITEMS:
                    yield Button(label, id=f"nav-{view.value}")
            with ContentSwitcher(id="content", initial=View.HOME.value):
                yield HomeView(id=View.HOME.value)
                yield ChatView(self._context.session, id=View.CHAT.value)
                yield ImageEditorPane(self._image_editor, self._output_dir, id=View.IMAGE_EDITOR.value)
                yield SlideshowPane(id=View.SLIDESHOW.value)
                yield HDImagePane(self._hd_generator, self._output_dir, id=View.HD_IMAGE.value)
        yield Footer()

    async def on_mount(self) -> None:
        self.register_theme(BHAII_INDIGO)
        self.theme = "bhaii-indigo"
        await self._context.open()
        self.sub_title = f"{self._context.settings.chat_model} | {self._context.storage.backend_type}"
        self._highlight_nav(self._context.navigation.active)

    async def on_unmount(self) -> None:
        await self._context.close()

    def _show_view(self, view: View) -> None:
        self.query_one("#content", ContentSwitcher).current = view.value
        self._highlight_nav(view)
        if view == View.CHAT:
            self.query_one(ChatView).focus_input()

    def _highlight_nav(self, active: View) -> None:
        for view, _label in NAV_ITEMS:
            self.query_one(f"#nav-{view.value}", Button).set_class(view == active, "-active")

    def action_navigate(self, view: str) -> None:
        self._context.navigation.navigate(view)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id and event.button.id.startswith("nav-"):
            self._context.navigation.navigate(event.button.id.removeprefix("nav-"))

    def on_home_view_launch(self, event: HomeView.Launch) -> None:
        self._context.navigation.navigate(event.view)


async def run_textual_tui(context: AppContext | None = None, output_dir: Path = DEFAULT_OUTPUT_DIR) -> None:
    """Run the Textual TUI.

    Args:
        context: Prebuilt application context; a default one is built
            with a TUI-backed API key reselector when omitted
        output_dir: Where edited and generated images are saved
    """
    reselector = None
    if context is None:
        from ..gateway import CredentialSource

        credentials = CredentialSource()
        reselector = TUIReselector(credentials)
        context = AppContext.build(credentials=credentials, reselector=reselector)

    app = BhaiiStudioApp(context, output_dir=output_dir)
    if reselector is not None:
        reselector.attach(app)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
