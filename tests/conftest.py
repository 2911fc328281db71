"""Pytest configuration and shared fixtures."""
from types import SimpleNamespace

import pytest
from google.genai import types

from bhaii_studio.gateway import AIGateway, CredentialReselector, CredentialSource, GeminiGateway
from bhaii_studio.models import ChatResult, ImageResult
from bhaii_studio.preferences import PreferenceStore
from bhaii_studio.storage import create_local_storage


class FakeModels:
    """Stands in for ``client.aio.models`` and records every call."""

    def __init__(self, chunks=None, content_response=None, images_response=None, error=None):
        self.chunks = chunks or []
        self.content_response = content_response
        self.images_response = images_response
        self.error = error
        self.calls: list[tuple[str, dict]] = []

    async def generate_content_stream(self, **kwargs):
        self.calls.append(("generate_content_stream", kwargs))
        if self.error is not None:
            raise self.error

        async def _stream():
            for chunk in self.chunks:
                yield chunk

        return _stream()

    async def generate_content(self, **kwargs):
        self.calls.append(("generate_content", kwargs))
        if self.error is not None:
            raise self.error
        return self.content_response

    async def generate_images(self, **kwargs):
        self.calls.append(("generate_images", kwargs))
        if self.error is not None:
            raise self.error
        return self.images_response


class FakeClient:
    """Minimal stand-in for ``genai.Client`` that records closing."""

    def __init__(self, models: FakeModels):
        self.closed = False
        self.aio = SimpleNamespace(models=models, aclose=self._aclose)

    async def _aclose(self):
        self.closed = True

    def close(self):
        self.closed = True


class FakeClientFactory:
    """Builds fake clients around one FakeModels and records the keys used."""

    def __init__(self, models: FakeModels):
        self.models = models
        self.api_keys: list[str] = []
        self.clients: list[FakeClient] = []

    def __call__(self, api_key: str):
        self.api_keys.append(api_key)
        client = FakeClient(self.models)
        self.clients.append(client)
        return client


class RecordingReselector(CredentialReselector):
    def __init__(self, fail: bool = False):
        self.calls = 0
        self.fail = fail

    async def request_reselection(self) -> None:
        self.calls += 1
        if self.fail:
            raise RuntimeError("dialog unavailable")


class ScriptedGateway(AIGateway):
    """Gateway returning queued results; an Exception in the queue is raised."""

    def __init__(self, chat_replies=None, image_results=None):
        self.chat_replies = list(chat_replies or [])
        self.image_results = list(image_results or [])
        self.chat_calls: list[tuple] = []
        self.edit_calls: list[tuple] = []
        self.generate_calls: list[tuple] = []

    def _next(self, queue, default):
        reply = queue.pop(0) if queue else default
        if isinstance(reply, Exception):
            raise reply
        return reply

    async def send_chat_turn(self, message, prior_turns, display_name=""):
        self.chat_calls.append((message, tuple(prior_turns), display_name))
        return self._next(self.chat_replies, ChatResult(text="Theek hai!"))

    async def edit_image(self, image, prompt):
        self.edit_calls.append((image, prompt))
        return self._next(self.image_results, ImageResult(image_url="data:image/png;base64,AA=="))

    async def generate_image(self, prompt, aspect_ratio="1:1"):
        self.generate_calls.append((prompt, aspect_ratio))
        return self._next(self.image_results, ImageResult(image_url="data:image/jpeg;base64,AA=="))


def text_chunk(text: str) -> types.GenerateContentResponse:
    return types.GenerateContentResponse(candidates=[
        types.Candidate(content=types.Content(role="model", parts=[types.Part(text=text)]))
    ])


def image_response(data: bytes, mime_type: str = "image/png") -> types.GenerateContentResponse:
    return types.GenerateContentResponse(candidates=[
        types.Candidate(content=types.Content(role="model", parts=[
            types.Part(text="Here you go"),
            types.Part(inline_data=types.Blob(data=data, mime_type=mime_type)),
        ]))
    ])


def images_response(data: bytes | None, mime_type: str = "image/jpeg") -> types.GenerateImagesResponse:
    if data is None:
        return types.GenerateImagesResponse(generated_images=[])
    return types.GenerateImagesResponse(generated_images=[
        types.GeneratedImage(image=types.Image(image_bytes=data, mime_type=mime_type))
    ])


@pytest.fixture
def credentials():
    """Credential source with an explicit key, independent of the environment."""
    return CredentialSource(api_key="test-key", env_vars=())


@pytest.fixture
def reselector():
    return RecordingReselector()


@pytest.fixture
def make_gateway(credentials, reselector):
    """Build a GeminiGateway around a FakeModels instance."""
    def _make(models: FakeModels) -> tuple[GeminiGateway, FakeClientFactory]:
        factory = FakeClientFactory(models)
        gateway = GeminiGateway(
            credentials=credentials,
            reselector=reselector,
            client_factory=factory,
        )
        return gateway, factory
    return _make


@pytest.fixture
def memory_storage():
    return create_local_storage("memory")


@pytest.fixture
def preference_store(memory_storage):
    return PreferenceStore(memory_storage)
