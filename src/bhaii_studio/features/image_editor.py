"""Image editor view state."""

import logging
from pathlib import Path

from ..config import EDIT_FAILED_ERROR, EDIT_MISSING_INPUT_ERROR, INVALID_IMAGE_FILE_ERROR
from ..gateway import AIGateway
from ..models import ImagePayload, ImageResult

logger = logging.getLogger(__name__)


class ImageEditorView:
    """Selected image, editing prompt and the edited result."""

    def __init__(self, gateway: AIGateway) -> None:
        self._gateway = gateway
        self.selected: ImagePayload | None = None
        self.selected_name: str | None = None
        self.prompt = ""
        self.edited_image_url: str | None = None
        self.error: str | None = None
        self.busy = False

    def select_image(self, image: ImagePayload, name: str | None = None) -> bool:
        """Accept an image payload; rejects anything that is not ``image/*``."""
        if not image.is_image:
            self.selected = None
            self.selected_name = None
            self.error = INVALID_IMAGE_FILE_ERROR
            return False
        self.selected = image
        self.selected_name = name
        self.edited_image_url = None
        self.error = None
        return True

    def select_file(self, path: str | Path) -> bool:
        """Load an image from disk and select it."""
        path = Path(path)
        try:
            image = ImagePayload.from_path(path)
        except OSError as e:
            logger.error("Could not read image %s: %s", path, e)
            self.selected = None
            self.selected_name = None
            self.error = INVALID_IMAGE_FILE_ERROR
            return False
        return self.select_image(image, name=path.name)

    @property
    def can_edit(self) -> bool:
        return not self.busy and self.selected is not None and bool(self.prompt.strip())

    async def edit(self) -> ImageResult | None:
        """Submit the selected image and prompt to the gateway.

        Returns:
            The gateway result, or None when validation failed or an edit
            is already running.
        """
        if self.busy:
            return None
        if self.selected is None or not self.prompt.strip():
            self.error = EDIT_MISSING_INPUT_ERROR
            return None

        self.busy = True
        self.error = None
        self.edited_image_url = None
        try:
            result = await self._gateway.edit_image(self.selected, self.prompt)
        finally:
            self.busy = False

        if result.image_url:
            self.edited_image_url = result.image_url
        else:
            self.error = result.error or EDIT_FAILED_ERROR
        return result

    def clear(self) -> None:
        self.selected = None
        self.selected_name = None
        self.prompt = ""
        self.edited_image_url = None
        self.error = None
