from .gemini import GeminiGateway

__all__ = ["GeminiGateway"]
