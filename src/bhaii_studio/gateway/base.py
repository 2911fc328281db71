from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from ..models import AspectRatio, ChatMessage, ChatResult, ImagePayload, ImageResult


class AIGateway(ABC):
    """Abstract facade over a generative-AI service.

    This module hides the design decision of which AI service backs the
    application. Implementations must handle:
    - Credential resolution at call time
    - Request shaping and response unwrapping
    - Mapping every remote failure to a result value

    None of the operations raise on remote failure; each returns a result
    carrying either a payload or a user-readable error string.

    Supports async context manager protocol for resource cleanup:
        async with gateway:
            result = await gateway.send_chat_turn("hi", [], "")
    """

    @abstractmethod
    async def send_chat_turn(
        self,
        message: str,
        prior_turns: Sequence[ChatMessage],
        display_name: str = "",
    ) -> ChatResult:
        """Send one chat turn and collect the streamed reply.

        Args:
            message: The user's message text
            prior_turns: Conversation so far, oldest first
            display_name: User's name, used as a hint to the model when non-empty

        Returns:
            ChatResult with the reply text, or empty text and an error
        """
        pass

    @abstractmethod
    async def edit_image(self, image: ImagePayload, prompt: str) -> ImageResult:
        """Edit an image according to a text prompt.

        Args:
            image: Source image bytes and MIME type
            prompt: Editing instruction

        Returns:
            ImageResult with a data URI, or an error
        """
        pass

    @abstractmethod
    async def generate_image(
        self,
        prompt: str,
        aspect_ratio: AspectRatio | str = AspectRatio.SQUARE,
    ) -> ImageResult:
        """Generate one image from a text prompt.

        Args:
            prompt: Non-empty description of the image
            aspect_ratio: One of the supported aspect ratios

        Returns:
            ImageResult with a data URI, or an error
        """
        pass

    async def close(self) -> None:
        """Close any open connections or resources."""
        pass

    async def __aenter__(self) -> "AIGateway":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
