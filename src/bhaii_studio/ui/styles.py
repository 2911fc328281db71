"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
"""

APP_CSS = """
Screen {
    layout: vertical;
    background: $background;
}

#body {
    height: 1fr;
}

/* Sidebar navigation */
#sidebar {
    width: 28;
    height: 100%;
    background: $background;
    border-right: tall $border;
    padding: 1;
}

#sidebar Button {
    width: 100%;
    margin-bottom: 1;
}

#sidebar Button.-active {
    background: $primary;
    text-style: bold;
}

/* Main content */
#content {
    width: 1fr;
    height: 100%;
    background: $surface;
    padding: 1 2;
}

.view-title {
    text-style: bold;
    color: $primary;
    padding-bottom: 1;
}

.view-description {
    color: $text-muted;
    padding-bottom: 1;
}

.error-text {
    color: $error;
}

.status-text {
    color: $primary;
}

.row {
    height: auto;
    margin-bottom: 1;
}

.row Input {
    width: 1fr;
}

.actions {
    height: auto;
    align-horizontal: right;
    margin-bottom: 1;
}

.actions Button {
    margin-left: 1;
}

/* Home cards */
.feature-card {
    height: auto;
    border: round $border;
    background: $panel;
    padding: 0 1;
    margin-bottom: 1;
}

.feature-card .card-title {
    text-style: bold;
}

/* Chat */
#chat-preferences {
    height: auto;
    padding: 0 1;
    background: $panel;
    margin-bottom: 1;
}

#chat-preferences Label {
    padding: 1 1 0 0;
}

#user-name {
    width: 30;
}

#chat-history {
    height: 1fr;
    border: round $primary 60%;
    padding: 0 1;
}

.chat-message {
    height: auto;
    width: 100%;
    padding: 0 1;
    margin-bottom: 1;
}

.user-message {
    background: $primary 40%;
    margin-left: 10;
}

.assistant-message {
    background: $panel;
    margin-right: 10;
}

.message-header {
    color: $text-muted;
    text-style: italic;
}

#typing-indicator {
    color: $text-muted;
    text-style: italic;
    display: none;
}

#typing-indicator.-visible {
    display: block;
}

#chat-input-row {
    height: auto;
}

#chat-input {
    width: 1fr;
}

/* Slideshow */
#slideshow-text {
    height: 8;
    margin-bottom: 1;
}

#slide-display {
    height: 9;
    content-align: center middle;
    text-align: center;
    text-style: bold;
    background: $secondary;
    border: round $accent;
}

#slide-display.-idle {
    text-style: none;
    color: $text-muted;
}

/* Images */
ImagePanel {
    height: auto;
    min-height: 12;
    border: round $border;
    display: none;
}

ImagePanel.has-image {
    display: block;
}

/* API key dialog */
ApiKeyScreen {
    align: center middle;
    background: $background 70%;
}

#api-key-dialog {
    width: 64;
    height: auto;
    border: tall $accent;
    background: $surface;
    padding: 1 2;
}

#api-key-buttons {
    height: 3;
    align: center middle;
}

#api-key-buttons Button {
    margin: 0 1;
}
"""
