"""Google Gemini gateway implementation.

Uses the official Google GenAI SDK for async chat, image editing and
image generation.
Reference: https://github.com/googleapis/python-genai

Note: one client is kept per resolved API key. When a different key is
selected after startup, the next request closes the old client and builds
a new one.
"""

import logging
from collections.abc import Callable, Sequence
from typing import Any

from google import genai
from google.genai import types

from ...config import (
    API_KEY_RESELECT_ERROR,
    BHAI_SYSTEM_INSTRUCTION,
    CHAT_FALLBACK_ERROR,
    CHAT_MODEL_NAME,
    EDIT_FAILED_ERROR,
    EDIT_NO_IMAGE_ERROR,
    ENTITY_NOT_FOUND_MARKER,
    HD_API_KEY_ERROR,
    HD_BAD_ASPECT_RATIO_ERROR,
    HD_EMPTY_PROMPT_ERROR,
    HD_FAILED_ERROR,
    HD_IMAGE_GEN_MODEL_NAME,
    HD_IMAGE_OUTPUT_MIME_TYPE,
    HD_NO_IMAGE_ERROR,
    IMAGE_EDIT_MODEL_NAME,
    IMAGE_RESPONSE_MODALITIES,
)
from ...models import (
    AspectRatio,
    ChatMessage,
    ChatResult,
    ImagePayload,
    ImageResult,
    Sender,
    to_data_uri,
)
from ..base import AIGateway
from ..credentials import CredentialReselector, CredentialSource, NullReselector

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str], Any]


class GeminiGateway(AIGateway):
    """Google Gemini gateway implementation.

    Hidden design decisions:
    - Google GenAI client reuse per resolved API key
    - Transcript conversion to Gemini content format
    - Stream draining for chat replies
    - Detection of the "entity not found" authorization failure
    """

    def __init__(
        self,
        credentials: CredentialSource | None = None,
        reselector: CredentialReselector | None = None,
        chat_model: str = CHAT_MODEL_NAME,
        image_edit_model: str = IMAGE_EDIT_MODEL_NAME,
        hd_image_model: str = HD_IMAGE_GEN_MODEL_NAME,
        client_factory: ClientFactory | None = None,
        **client_kwargs: Any
    ):
        """Initialize Gemini gateway.

        Args:
            credentials: API key source (default reads the environment)
            reselector: Capability invoked when the key is rejected
            chat_model: Model for chat turns
            image_edit_model: Model for image editing
            hd_image_model: Model for image generation
            client_factory: Builds a client from an API key (for tests)
            **client_kwargs: Additional kwargs for genai.Client
        """
        self._credentials = credentials or CredentialSource()
        self._reselector = reselector or NullReselector()
        self._chat_model = chat_model
        self._image_edit_model = image_edit_model
        self._hd_image_model = hd_image_model
        self._client_factory = client_factory or (
            lambda api_key: genai.Client(api_key=api_key, **client_kwargs)
        )
        self._client_key: str | None = None
        self._cached_client: Any = None

    @property
    def model(self) -> str:
        """Get the chat model name."""
        return self._chat_model

    @property
    def credentials(self) -> CredentialSource:
        return self._credentials

    async def _client(self) -> Any:
        api_key = self._credentials.resolve()
        if self._cached_client is None or api_key != self._client_key:
            await self._close_client()
            self._cached_client = self._client_factory(api_key)
            self._client_key = api_key
        return self._cached_client

    async def _close_client(self) -> None:
        client = self._cached_client
        self._cached_client = None
        self._client_key = None
        if client is None:
            return
        try:
            await client.aio.aclose()
            client.close()
        except Exception:
            logger.warning("Failed to close Gemini client", exc_info=True)

    async def close(self) -> None:
        """Close the cached client and its HTTP connections."""
        await self._close_client()

    def _convert_messages(self, messages: Sequence[ChatMessage]) -> list[types.Content]:
        """Convert transcript turns to Gemini content, oldest first."""
        contents = []
        for msg in messages:
            role = "user" if msg.sender == Sender.USER else "model"
            contents.append(types.Content(role=role, parts=[types.Part(text=msg.text)]))
        return contents

    def _extract_text(self, chunk: Any) -> str:
        """Extract text from a response chunk, handling empty chunks."""
        if chunk.candidates:
            candidate = chunk.candidates[0]
            if candidate.content and candidate.content.parts:
                return "".join(part.text for part in candidate.content.parts if part.text)
            return ""
        try:
            return chunk.text or ""
        except (ValueError, AttributeError):
            return ""

    def _first_inline_image(self, response: Any) -> types.Blob | None:
        if not response.candidates:
            return None
        content = response.candidates[0].content
        if content is None or not content.parts:
            return None
        for part in content.parts:
            if part.inline_data is not None and part.inline_data.data:
                return part.inline_data
        return None

    @staticmethod
    def _is_entity_not_found(error: Exception) -> bool:
        return ENTITY_NOT_FOUND_MARKER in str(error)

    async def _request_reselection(self) -> None:
        try:
            await self._reselector.request_reselection()
        except Exception:
            logger.warning("API key reselection failed", exc_info=True)

    async def send_chat_turn(
        self,
        message: str,
        prior_turns: Sequence[ChatMessage],
        display_name: str = "",
    ) -> ChatResult:
        """Send one chat turn to Gemini and drain the streamed reply."""
        try:
            client = await self._client()
            contents = self._convert_messages(prior_turns)
            personalized = f"{display_name} says: {message}" if display_name else message
            contents.append(types.Content(role="user", parts=[types.Part(text=personalized)]))
            config = types.GenerateContentConfig(system_instruction=BHAI_SYSTEM_INSTRUCTION)

            stream = await client.aio.models.generate_content_stream(
                model=self._chat_model, contents=contents, config=config
            )
            fragments = []
            async for chunk in stream:
                text = self._extract_text(chunk)
                if text:
                    fragments.append(text)

            return ChatResult(text="".join(fragments).strip())
        except Exception as e:
            logger.exception("Error chatting with Bhaii")
            if self._is_entity_not_found(e):
                await self._request_reselection()
                return ChatResult(text="", error=API_KEY_RESELECT_ERROR)
            return ChatResult(text="", error=CHAT_FALLBACK_ERROR)

    async def edit_image(self, image: ImagePayload, prompt: str) -> ImageResult:
        """Edit an image with the Gemini image model."""
        try:
            client = await self._client()
            contents = [
                types.Part.from_bytes(data=image.data, mime_type=image.mime_type),
                types.Part(text=prompt),
            ]
            config = types.GenerateContentConfig(response_modalities=IMAGE_RESPONSE_MODALITIES)

            response = await client.aio.models.generate_content(
                model=self._image_edit_model, contents=contents, config=config
            )

            edited = self._first_inline_image(response)
            if edited is None:
                logger.error("No image data received from Gemini: %r", response)
                return ImageResult(error=EDIT_NO_IMAGE_ERROR)

            return ImageResult(image_url=to_data_uri(edited.mime_type or image.mime_type, edited.data))
        except Exception as e:
            logger.exception("Error editing image with Gemini")
            if self._is_entity_not_found(e):
                await self._request_reselection()
                return ImageResult(error=API_KEY_RESELECT_ERROR)
            return ImageResult(error=EDIT_FAILED_ERROR)

    async def generate_image(
        self,
        prompt: str,
        aspect_ratio: AspectRatio | str = AspectRatio.SQUARE,
    ) -> ImageResult:
        """Generate one image with the Imagen model."""
        prompt = prompt.strip()
        if not prompt:
            return ImageResult(error=HD_EMPTY_PROMPT_ERROR)
        try:
            ratio = AspectRatio(aspect_ratio)
        except ValueError:
            return ImageResult(error=HD_BAD_ASPECT_RATIO_ERROR.format(ratio=aspect_ratio))

        try:
            client = await self._client()
            config = types.GenerateImagesConfig(
                number_of_images=1,
                output_mime_type=HD_IMAGE_OUTPUT_MIME_TYPE,
                aspect_ratio=ratio.value,
            )

            response = await client.aio.models.generate_images(
                model=self._hd_image_model, prompt=prompt, config=config
            )

            generated = response.generated_images[0].image if response.generated_images else None
            if generated is None or not generated.image_bytes:
                logger.error("No image data received from HD image generator: %r", response)
                return ImageResult(error=HD_NO_IMAGE_ERROR)

            mime_type = generated.mime_type or HD_IMAGE_OUTPUT_MIME_TYPE
            return ImageResult(image_url=to_data_uri(mime_type, generated.image_bytes))
        except Exception as e:
            logger.exception("Error generating HD image with Gemini")
            if self._is_entity_not_found(e):
                await self._request_reselection()
                return ImageResult(error=HD_API_KEY_ERROR)
            return ImageResult(error=HD_FAILED_ERROR)
