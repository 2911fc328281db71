"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Feature card layout on the home view
- Chat bubble rendering and the typing indicator
- Form layout of the image editor, slideshow and HD generator views
"""

from pathlib import Path

from textual import work
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.message import Message
from textual.widgets import Button, Input, Label, Select, Static, Switch, TextArea

from ..config import HD_STATUS_GENERATING
from ..features import HDImageGeneratorView, ImageEditorView, SlideshowPlayer
from ..features.slideshow import MAX_SLIDES
from ..models import AspectRatio, ChatMessage, Sender
from ..navigation import FEATURE_CARDS, View
from ..session import SessionController
from .images import ImagePanel, save_data_uri
from .screens import ApiKeyScreen

ASPECT_RATIO_LABELS = {
    AspectRatio.SQUARE: "1:1 (Square)",
    AspectRatio.PORTRAIT: "3:4 (Portrait)",
    AspectRatio.LANDSCAPE: "4:3 (Landscape)",
    AspectRatio.TALL: "9:16 (Tall)",
    AspectRatio.WIDE: "16:9 (Widescreen)",
}


class HomeView(VerticalScroll):
    """Feature cards with launch buttons."""

    class Launch(Message):
        """Posted when a card's launch button is pressed."""

        def __init__(self, view: View) -> None:
            super().__init__()
            self.view = view

    def compose(self) -> ComposeResult:
        yield Static("Welcome to Bhaii AI Studio", classes="view-title")
        yield Static(
            "Your personal space for creative AI interactions. "
            "Choose a feature below to get started!",
            classes="view-description",
        )
        for card in FEATURE_CARDS:
            with Vertical(classes="feature-card"):
                yield Static(card.title, classes="card-title")
                yield Static(card.description)
                yield Button("Launch", id=f"launch-{card.target.value}", variant="default")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id and event.button.id.startswith("launch-"):
            self.post_message(self.Launch(View(event.button.id.removeprefix("launch-"))))


class ChatHistoryWidget(VerticalScroll):
    """Scrollable, append-only chat transcript."""

    BORDER_TITLE = "Bhaii Chat"

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._rendered = 0

    def compose(self) -> ComposeResult:
        yield Static("Bhaii is typing...", id="typing-indicator")

    def sync(self, transcript: tuple[ChatMessage, ...], busy: bool) -> None:
        """Render messages not yet shown and toggle the typing indicator."""
        indicator = self.query_one("#typing-indicator", Static)
        for message in transcript[self._rendered:]:
            self.mount(self._render_message(message), before=indicator)
        self._rendered = len(transcript)
        indicator.set_class(busy, "-visible")
        self.border_subtitle = f"{len(transcript)} messages"
        self.scroll_end(animate=False)

    def _render_message(self, message: ChatMessage) -> Vertical:
        is_user = message.sender == Sender.USER
        timestamp = message.timestamp.astimezone().strftime("%H:%M")
        header = f"{'You' if is_user else 'Bhaii'} [{timestamp}]"
        container = Vertical(
            classes=f"chat-message {'user-message' if is_user else 'assistant-message'}"
        )
        container.compose_add_child(Static(header, classes="message-header", markup=False))
        container.compose_add_child(Static(message.text, classes="message-content", markup=False))
        return container


class ChatView(Vertical):
    """Name and remember-me settings, transcript and message input."""

    def __init__(self, session: SessionController, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._session = session

    def compose(self) -> ComposeResult:
        with Horizontal(id="chat-preferences", classes="row"):
            yield Label("Aapka naam:")
            yield Input(value=self._session.user_name, placeholder="Enter your name", id="user-name")
            yield Label("Mujhe yaad rakho (Remember me)")
            yield Switch(value=self._session.remember_me, id="remember-me")
        yield ChatHistoryWidget(id="chat-history")
        with Horizontal(id="chat-input-row", classes="row"):
            yield Input(placeholder="Type your message, mere bhai/behen...", id="chat-input")
            yield Button("Send", id="send-btn", variant="primary")

    def on_mount(self) -> None:
        self._session.add_listener(lambda _session: self.refresh_transcript())
        self.refresh_transcript()

    def refresh_transcript(self) -> None:
        self.query_one("#chat-history", ChatHistoryWidget).sync(
            self._session.transcript, self._session.busy
        )
        busy = self._session.busy
        self.query_one("#chat-input", Input).disabled = busy
        self.query_one("#send-btn", Button).disabled = busy

    def focus_input(self) -> None:
        self.query_one("#chat-input", Input).focus()

    async def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "user-name":
            event.stop()
            await self._session.set_user_name(event.value)

    async def on_switch_changed(self, event: Switch.Changed) -> None:
        event.stop()
        await self._session.set_remember_me(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "chat-input":
            event.stop()
            self._send()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            event.stop()
            self._send()

    def _send(self) -> None:
        chat_input = self.query_one("#chat-input", Input)
        text = chat_input.value
        if not text.strip() or self._session.busy:
            return
        chat_input.value = ""
        self._submit(text)

    @work(exclusive=True, group="chat")
    async def _submit(self, text: str) -> None:
        await self._session.submit(text)
        self.focus_input()


class ImageEditorPane(VerticalScroll):
    """Load an image from disk, describe the edit, show the result."""

    def __init__(self, editor: ImageEditorView, output_dir: Path, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._editor = editor
        self._output_dir = output_dir

    def compose(self) -> ComposeResult:
        yield Static("Gemini Image Editor", classes="view-title")
        yield Static(
            "Load an image and tell Gemini how to edit it.",
            classes="view-description",
        )
        with Horizontal(classes="row"):
            yield Input(placeholder="Path to an image file", id="image-path")
            yield Button("Load", id="image-load")
        yield Static("No image selected.", id="image-selected")
        yield Input(
            placeholder='Editing prompt (e.g. "Add a retro filter", "Remove the person")',
            id="image-prompt",
        )
        yield Static("", id="image-error", classes="error-text")
        with Horizontal(classes="actions"):
            yield Button("Clear", id="image-clear")
            yield Button("Edit Image", id="image-edit", variant="primary")
        yield ImagePanel("Edited Image", id="image-result")

    def on_mount(self) -> None:
        self._refresh()

    def _refresh(self) -> None:
        editor = self._editor
        selected = editor.selected_name or ("Image selected." if editor.selected else "No image selected.")
        self.query_one("#image-selected", Static).update(selected)
        self.query_one("#image-error", Static).update(editor.error or "")
        self.query_one("#image-prompt", Input).disabled = editor.busy or editor.selected is None
        edit_button = self.query_one("#image-edit", Button)
        edit_button.disabled = not editor.can_edit
        edit_button.label = "Editing..." if editor.busy else "Edit Image"
        self.query_one("#image-clear", Button).disabled = editor.busy or editor.selected is None

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "image-prompt":
            event.stop()
            self._editor.prompt = event.value
            self._refresh()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        if event.input.id == "image-path":
            self._load()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id == "image-load":
            self._load()
        elif event.button.id == "image-edit":
            self._edit()
        elif event.button.id == "image-clear":
            self._editor.clear()
            self.query_one("#image-path", Input).value = ""
            self.query_one("#image-prompt", Input).value = ""
            self.query_one("#image-result", ImagePanel).clear()
            self._refresh()

    def _load(self) -> None:
        path = self.query_one("#image-path", Input).value.strip()
        if path and self._editor.select_file(path):
            self.query_one("#image-result", ImagePanel).clear()
        self._refresh()

    @work(exclusive=True, group="image-editor")
    async def _edit(self) -> None:
        self.query_one("#image-result", ImagePanel).clear()
        edit_button = self.query_one("#image-edit", Button)
        edit_button.label = "Editing..."
        edit_button.disabled = True
        await self._editor.edit()
        if self._editor.edited_image_url:
            path = save_data_uri(self._editor.edited_image_url, self._output_dir, stem="edited")
            self.query_one("#image-result", ImagePanel).show_image(path)
        self._refresh()


class SlideshowPane(VerticalScroll):
    """Text input and the animated slide display."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._player = SlideshowPlayer(on_change=lambda _player: self._refresh())

    @property
    def player(self) -> SlideshowPlayer:
        return self._player

    def compose(self) -> ComposeResult:
        yield Static("Animated Slideshow Generator", classes="view-title")
        yield Static(
            "Turn your text into a short animated slideshow! Each line of text becomes a slide "
            f"(max {MAX_SLIDES} slides). No API key needed.",
            classes="view-description",
        )
        yield TextArea(id="slideshow-text")
        yield Static("", id="slideshow-status")
        with Horizontal(classes="actions"):
            yield Button("Clear", id="slideshow-clear")
            yield Button("Generate Slideshow", id="slideshow-generate", variant="primary")
        yield Static("", id="slide-display")

    def on_mount(self) -> None:
        self._refresh()

    def on_unmount(self) -> None:
        self._player.stop()

    def _refresh(self) -> None:
        player = self._player
        status = self.query_one("#slideshow-status", Static)
        if player.error:
            status.update(player.error)
            status.set_classes("error-text")
        else:
            status.update(player.status)
            status.set_classes("status-text" if player.playing else "")
        display = self.query_one("#slide-display", Static)
        display.update(player.current_text if player.playing else "Your awesome slideshow will appear here!")
        display.set_class(not player.playing, "-idle")
        self.query_one("#slideshow-text", TextArea).disabled = player.playing
        self.query_one("#slideshow-generate", Button).disabled = player.playing

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id == "slideshow-generate":
            self._player.generate(self.query_one("#slideshow-text", TextArea).text)
        elif event.button.id == "slideshow-clear":
            self._player.clear()
            self.query_one("#slideshow-text", TextArea).text = ""


class HDImagePane(VerticalScroll):
    """Prompt, aspect ratio and the generated HD image."""

    def __init__(self, generator: HDImageGeneratorView, output_dir: Path, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._generator = generator
        self._output_dir = output_dir

    def compose(self) -> ComposeResult:
        yield Static("HD Image Generator", classes="view-title")
        yield Static(
            "Generate high-quality, detailed images from text prompts. "
            "Requires an API key with billing enabled.",
            classes="view-description",
        )
        yield Button("Select API Key", id="hd-select-key", variant="warning")
        yield Input(placeholder="Describe the image you want to generate...", id="hd-prompt")
        yield Select(
            [(label, ratio.value) for ratio, label in ASPECT_RATIO_LABELS.items()],
            value=AspectRatio.SQUARE.value,
            allow_blank=False,
            id="hd-aspect-ratio",
        )
        yield Static("", id="hd-status", classes="status-text")
        yield Static("", id="hd-error", classes="error-text")
        with Horizontal(classes="actions"):
            yield Button("Clear", id="hd-clear")
            yield Button("Generate Image", id="hd-generate", variant="primary")
        yield ImagePanel("Generated Image", id="hd-result")

    def on_mount(self) -> None:
        self._refresh()

    def _refresh(self) -> None:
        generator = self._generator
        locked = generator.busy or not generator.api_key_selected
        self.query_one("#hd-select-key", Button).display = not generator.api_key_selected
        self.query_one("#hd-prompt", Input).disabled = locked
        self.query_one("#hd-aspect-ratio", Select).disabled = locked
        generate_button = self.query_one("#hd-generate", Button)
        generate_button.disabled = locked or not generator.prompt.strip()
        generate_button.label = "Generating..." if generator.busy else "Generate Image"
        self.query_one("#hd-clear", Button).disabled = generator.busy
        self.query_one("#hd-status", Static).update(generator.status)
        self.query_one("#hd-error", Static).update(generator.error or "")

    def on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        self._generator.prompt = event.value
        self._refresh()

    def on_select_changed(self, event: Select.Changed) -> None:
        event.stop()
        self._generator.aspect_ratio = AspectRatio(event.value)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id == "hd-select-key":
            self.app.push_screen(ApiKeyScreen(), self._on_key_selected)
        elif event.button.id == "hd-generate":
            self._generate()
        elif event.button.id == "hd-clear":
            self._generator.clear()
            self.query_one("#hd-prompt", Input).value = ""
            self.query_one("#hd-aspect-ratio", Select).value = AspectRatio.SQUARE.value
            self.query_one("#hd-result", ImagePanel).clear()
            self._refresh()

    def _on_key_selected(self, api_key: str | None) -> None:
        if api_key:
            self._generator.select_api_key(api_key)
        self._refresh()

    @work(exclusive=True, group="hd-image")
    async def _generate(self) -> None:
        self.query_one("#hd-result", ImagePanel).clear()
        generate_button = self.query_one("#hd-generate", Button)
        generate_button.label = "Generating..."
        generate_button.disabled = True
        self.query_one("#hd-clear", Button).disabled = True
        self.query_one("#hd-status", Static).update(HD_STATUS_GENERATING)
        await self._generator.generate()
        if self._generator.generated_image_url:
            path = save_data_uri(self._generator.generated_image_url, self._output_dir, stem="hd")
            self.query_one("#hd-result", ImagePanel).show_image(path)
        self._refresh()
