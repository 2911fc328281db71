"""Image display and saving for the TUI.

Hidden design decisions:
- Image rendering approach (textual-image picks Sixel, TGP or halfcells)
- Where generated images are written on disk
"""

from datetime import datetime
from pathlib import Path

from textual.app import ComposeResult
from textual.widget import Widget
from textual.widgets import Static
from textual_image.widget import Image as TextualImageWidget

from ..models import decode_data_uri, extension_for

DEFAULT_OUTPUT_DIR = Path.home() / ".bhaii_studio" / "images"


def save_data_uri(uri: str, directory: str | Path = DEFAULT_OUTPUT_DIR, stem: str = "image") -> Path:
    """Write a base64 data URI to a timestamped file.

    Args:
        uri: ``data:<mime>;base64,<payload>`` string
        directory: Output directory, created if missing
        stem: File name prefix

    Returns:
        Path of the written file

    Raises:
        ValueError: If the URI is not a base64 data URI
    """
    mime_type, data = decode_data_uri(uri)
    directory = Path(directory).expanduser()
    directory.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S-%f")
    path = directory / f"{stem}-{timestamp}{extension_for(mime_type)}"
    path.write_bytes(data)
    return path


class ImagePanel(Widget):
    """Panel showing one image file with its path underneath.

    Hidden until an image is shown.
    """

    def __init__(
        self,
        title: str = "Image",
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(name=name, id=id, classes=classes)
        self.border_title = title
        self._image_path: Path | None = None

    def compose(self) -> ComposeResult:
        yield TextualImageWidget(None, classes="panel-image")
        yield Static("", classes="image-path")

    def show_image(self, image_path: str | Path) -> bool:
        """Display an image file.

        Returns:
            True if the file exists and was handed to the renderer
        """
        path = Path(image_path)
        if not path.exists():
            return False
        self._image_path = path
        self.query_one(TextualImageWidget).image = str(path)
        self.query_one(".image-path", Static).update(f"Saved: {path}")
        self.add_class("has-image")
        return True

    def clear(self) -> None:
        self._image_path = None
        self.query_one(TextualImageWidget).image = None
        self.query_one(".image-path", Static).update("")
        self.remove_class("has-image")

    @property
    def image_path(self) -> Path | None:
        return self._image_path
