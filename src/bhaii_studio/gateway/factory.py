from typing import Any

from .base import AIGateway
from .providers import GeminiGateway


def create_gateway(provider: str = "gemini", **config: Any) -> AIGateway:
    """Create an AI gateway instance.

    Args:
        provider: Gateway type ('gemini')
        **config: Provider-specific configuration
            For Gemini:
                - credentials: CredentialSource | None
                - reselector: CredentialReselector | None
                - chat_model: str (default: 'gemini-flash-latest')
                - image_edit_model: str (default: 'gemini-2.5-flash-image')
                - hd_image_model: str (default: 'imagen-4.0-generate-001')
                - client_factory: Callable[[str], genai.Client] | None

    Returns:
        Initialized gateway instance

    Raises:
        ValueError: If provider type is not supported

    Examples:
        >>> gateway = create_gateway(
        ...     "gemini",
        ...     credentials=CredentialSource(api_key="..."),
        ... )
    """
    provider_lower = provider.lower()

    if provider_lower in ("gemini", "google"):
        return GeminiGateway(**config)

    raise ValueError(
        f"Unsupported provider: {provider}. "
        f"Supported providers: 'gemini'"
    )
