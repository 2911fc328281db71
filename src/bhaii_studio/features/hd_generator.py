"""HD image generator view state.

Generation needs an API key with billing enabled, so the view tracks
whether a key has been selected and drops that flag when the service
rejects the key.
"""

from ..config import (
    API_KEY_ISSUE_MARKER,
    HD_API_KEY_ERROR,
    HD_GENERIC_FAILURE_ERROR,
    HD_MISSING_PROMPT_ERROR,
    HD_SELECT_KEY_FIRST_ERROR,
    HD_STATUS_DONE,
    HD_STATUS_GENERATING,
    HD_STATUS_KEY_SELECTED,
    HD_STATUS_NEEDS_KEY,
    HD_STATUS_READY,
)
from ..gateway import AIGateway, CredentialSource
from ..models import AspectRatio, ImageResult


class HDImageGeneratorView:
    """Prompt, aspect ratio, key selection state and the generated image."""

    def __init__(self, gateway: AIGateway, credentials: CredentialSource) -> None:
        self._gateway = gateway
        self._credentials = credentials
        self.api_key_selected = credentials.has_key
        self.prompt = ""
        self.aspect_ratio = AspectRatio.SQUARE
        self.generated_image_url: str | None = None
        self.error: str | None = None
        self.busy = False
        self.status = self._idle_status()

    def _idle_status(self) -> str:
        return HD_STATUS_READY if self.api_key_selected else HD_STATUS_NEEDS_KEY

    def select_api_key(self, api_key: str | None = None) -> None:
        """Record a key choice.

        Selection is assumed to succeed; a bad key surfaces on the next call.
        """
        if api_key:
            self._credentials.select(api_key)
        self.api_key_selected = True
        self.status = HD_STATUS_KEY_SELECTED

    async def generate(self) -> ImageResult | None:
        """Generate an image for the current prompt and aspect ratio.

        Returns:
            The gateway result, or None when validation failed or a
            generation is already running.
        """
        if self.busy:
            return None
        if not self.api_key_selected:
            self.error = HD_SELECT_KEY_FIRST_ERROR
            return None
        if not self.prompt.strip():
            self.error = HD_MISSING_PROMPT_ERROR
            return None

        self.busy = True
        self.error = None
        self.generated_image_url = None
        self.status = HD_STATUS_GENERATING
        try:
            result = await self._gateway.generate_image(self.prompt.strip(), self.aspect_ratio)
        finally:
            self.busy = False

        if result.image_url:
            self.generated_image_url = result.image_url
            self.status = HD_STATUS_DONE
        elif result.error:
            self.error = result.error
            if API_KEY_ISSUE_MARKER in result.error:
                self.api_key_selected = False
                self.status = HD_API_KEY_ERROR
            else:
                self.status = ""
        else:
            self.error = HD_GENERIC_FAILURE_ERROR
            self.status = ""
        return result

    def clear(self) -> None:
        self.prompt = ""
        self.aspect_ratio = AspectRatio.SQUARE
        self.generated_image_url = None
        self.error = None
        if not self.busy:
            self.status = self._idle_status()
