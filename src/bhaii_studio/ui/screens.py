"""Modal screens for the TUI.

This module hides the design decisions about:
- How the user is asked for a new API key
- How the gateway's reselection request reaches the running app
"""

import logging

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Static

from ..gateway import CredentialReselector, CredentialSource

logger = logging.getLogger(__name__)


class ApiKeyScreen(ModalScreen[str | None]):
    """Dialog asking for a Gemini API key.

    Dismisses with the entered key, or None when cancelled.
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    def __init__(self, message: str = "Enter your Gemini API key") -> None:
        super().__init__()
        self._message = message

    def compose(self) -> ComposeResult:
        with Vertical(id="api-key-dialog"):
            yield Static("Select API Key", classes="view-title")
            yield Static(self._message, classes="view-description")
            yield Input(placeholder="API key", password=True, id="api-key-input")
            with Horizontal(id="api-key-buttons"):
                yield Button("Cancel", id="api-key-cancel", variant="default")
                yield Button("Use key", id="api-key-ok", variant="primary")

    def on_mount(self) -> None:
        self.query_one("#api-key-input", Input).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id == "api-key-ok":
            self._submit()
        else:
            self.dismiss(None)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self._submit()

    def _submit(self) -> None:
        value = self.query_one("#api-key-input", Input).value.strip()
        self.dismiss(value or None)

    def action_cancel(self) -> None:
        self.dismiss(None)


class TUIReselector(CredentialReselector):
    """Opens the API key dialog when the gateway reports a rejected key.

    The dialog is pushed without waiting for it; the gateway returns its
    error message immediately and the chosen key applies to the next call.
    """

    def __init__(self, credentials: CredentialSource) -> None:
        self._credentials = credentials
        self._app: App | None = None

    def attach(self, app: App) -> None:
        self._app = app

    async def request_reselection(self) -> None:
        if self._app is None:
            logger.warning("API key rejected but no TUI is attached")
            return
        self._app.push_screen(
            ApiKeyScreen("Your API key was rejected. Please select it again."),
            self._on_selected,
        )

    def _on_selected(self, api_key: str | None) -> None:
        if api_key:
            self._credentials.select(api_key)
            logger.info("API key reselected")
