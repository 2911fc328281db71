from .base import AIGateway
from .credentials import CredentialReselector, CredentialSource, NullReselector
from .factory import create_gateway
from .providers import GeminiGateway

__all__ = [
    "AIGateway",
    "CredentialReselector",
    "CredentialSource",
    "GeminiGateway",
    "NullReselector",
    "create_gateway",
]
