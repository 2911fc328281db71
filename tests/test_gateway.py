"""Unit tests for the AI gateway."""
import base64

import pytest
from conftest import (
    FakeClientFactory,
    FakeModels,
    RecordingReselector,
    image_response,
    images_response,
    text_chunk,
)

from bhaii_studio.config import (
    API_KEY_RESELECT_ERROR,
    CHAT_FALLBACK_ERROR,
    EDIT_FAILED_ERROR,
    EDIT_NO_IMAGE_ERROR,
    HD_API_KEY_ERROR,
    HD_EMPTY_PROMPT_ERROR,
    HD_FAILED_ERROR,
    HD_NO_IMAGE_ERROR,
)
from bhaii_studio.errors import MissingCredentialError
from bhaii_studio.gateway import AIGateway, CredentialSource, GeminiGateway, create_gateway
from bhaii_studio.models import AspectRatio, ChatMessage, ImagePayload, Sender

ENTITY_NOT_FOUND = RuntimeError("404 NOT_FOUND. Requested entity was not found.")


class TestGatewayInterface:
    """Tests for the abstract AIGateway interface."""

    def test_gateway_is_abstract(self):
        """Test that AIGateway cannot be instantiated directly."""
        with pytest.raises(TypeError):
            AIGateway()  # type: ignore


class TestGatewayFactory:
    def test_create_gemini_gateway(self, credentials):
        gateway = create_gateway("gemini", credentials=credentials)
        assert isinstance(gateway, GeminiGateway)

    def test_provider_name_is_case_insensitive(self, credentials):
        assert isinstance(create_gateway("Gemini", credentials=credentials), GeminiGateway)

    def test_unknown_provider_raises(self):
        with pytest.raises(ValueError, match="Unsupported provider"):
            create_gateway("openai")


class TestCredentialSource:
    def test_explicit_key_wins(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "from-env")
        source = CredentialSource(api_key="explicit")
        assert source.resolve() == "explicit"

    def test_reads_environment_in_order(self, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        monkeypatch.setenv("API_KEY", "fallback")
        assert CredentialSource().resolve() == "fallback"

        monkeypatch.setenv("GEMINI_API_KEY", "primary")
        assert CredentialSource().resolve() == "primary"

    def test_missing_key_raises(self):
        source = CredentialSource(env_vars=())
        assert not source.has_key
        with pytest.raises(MissingCredentialError):
            source.resolve()

    def test_select_overrides_and_resets(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "from-env")
        source = CredentialSource()
        source.select("  chosen  ")
        assert source.resolve() == "chosen"
        source.select("")
        assert source.resolve() == "from-env"


class TestSendChatTurn:
    @pytest.mark.asyncio
    async def test_concatenates_stream(self, make_gateway):
        models = FakeModels(chunks=[text_chunk("Namaste! "), text_chunk("Kya haal hai?  ")])
        gateway, _ = make_gateway(models)

        result = await gateway.send_chat_turn("hi", [], "")

        assert result.ok
        assert result.text == "Namaste! Kya haal hai?"

    @pytest.mark.asyncio
    async def test_empty_stream_yields_empty_text(self, make_gateway):
        gateway, _ = make_gateway(FakeModels(chunks=[]))

        result = await gateway.send_chat_turn("hi", [], "")

        assert result.text == ""
        assert result.error is None

    @pytest.mark.asyncio
    async def test_builds_role_tagged_history(self, make_gateway):
        models = FakeModels(chunks=[text_chunk("ok")])
        gateway, factory = make_gateway(models)
        history = [
            ChatMessage(sender=Sender.ASSISTANT, text="Namaste!"),
            ChatMessage(sender=Sender.USER, text="hello"),
        ]

        await gateway.send_chat_turn("hello", history, "Asha")

        name, kwargs = models.calls[0]
        assert name == "generate_content_stream"
        contents = kwargs["contents"]
        assert [c.role for c in contents] == ["model", "user", "user"]
        assert [c.parts[0].text for c in contents] == ["Namaste!", "hello", "Asha says: hello"]
        assert "bhaii" in kwargs["config"].system_instruction
        assert factory.api_keys == ["test-key"]

    @pytest.mark.asyncio
    async def test_no_prefix_without_display_name(self, make_gateway):
        models = FakeModels(chunks=[text_chunk("ok")])
        gateway, _ = make_gateway(models)

        await gateway.send_chat_turn("hello", [], "")

        contents = models.calls[0][1]["contents"]
        assert contents[-1].parts[0].text == "hello"

    @pytest.mark.asyncio
    async def test_failure_returns_fallback(self, make_gateway, reselector):
        gateway, _ = make_gateway(FakeModels(error=ConnectionError("boom")))

        result = await gateway.send_chat_turn("hi", [], "")

        assert result.text == ""
        assert result.error == CHAT_FALLBACK_ERROR
        assert reselector.calls == 0

    @pytest.mark.asyncio
    async def test_entity_not_found_requests_reselection(self, make_gateway, reselector):
        gateway, _ = make_gateway(FakeModels(error=ENTITY_NOT_FOUND))

        result = await gateway.send_chat_turn("hi", [], "")

        assert result.error == API_KEY_RESELECT_ERROR
        assert "API key" in result.error
        assert result.error != CHAT_FALLBACK_ERROR
        assert reselector.calls == 1

    @pytest.mark.asyncio
    async def test_failing_reselection_still_returns_error(self, credentials):
        reselector = RecordingReselector(fail=True)
        models = FakeModels(error=ENTITY_NOT_FOUND)
        gateway = GeminiGateway(
            credentials=credentials,
            reselector=reselector,
            client_factory=FakeClientFactory(models),
        )

        result = await gateway.send_chat_turn("hi", [], "")

        assert result.error == API_KEY_RESELECT_ERROR
        assert reselector.calls == 1

    @pytest.mark.asyncio
    async def test_missing_credential_is_generic_failure(self, reselector):
        models = FakeModels(chunks=[text_chunk("never")])
        gateway = GeminiGateway(
            credentials=CredentialSource(env_vars=()),
            reselector=reselector,
            client_factory=FakeClientFactory(models),
        )

        result = await gateway.send_chat_turn("hi", [], "")

        assert result.error == CHAT_FALLBACK_ERROR
        assert models.calls == []


class TestEditImage:
    @pytest.mark.asyncio
    async def test_returns_data_uri(self, make_gateway):
        models = FakeModels(content_response=image_response(b"edited-bytes", "image/png"))
        gateway, _ = make_gateway(models)
        image = ImagePayload(data=b"source", mime_type="image/jpeg")

        result = await gateway.edit_image(image, "Add a retro filter")

        expected = base64.b64encode(b"edited-bytes").decode()
        assert result.ok
        assert result.image_url == f"data:image/png;base64,{expected}"

        kwargs = models.calls[0][1]
        assert kwargs["config"].response_modalities == ["IMAGE"]
        parts = kwargs["contents"]
        assert parts[0].inline_data.data == b"source"
        assert parts[0].inline_data.mime_type == "image/jpeg"
        assert parts[1].text == "Add a retro filter"

    @pytest.mark.asyncio
    async def test_missing_image_part_is_reported(self, make_gateway):
        models = FakeModels(content_response=text_chunk("I can't do that"))
        gateway, _ = make_gateway(models)

        result = await gateway.edit_image(ImagePayload(data=b"x", mime_type="image/png"), "edit")

        assert result.image_url is None
        assert result.error == EDIT_NO_IMAGE_ERROR

    @pytest.mark.asyncio
    async def test_failure_returns_generic_error(self, make_gateway):
        gateway, _ = make_gateway(FakeModels(error=TimeoutError("slow")))

        result = await gateway.edit_image(ImagePayload(data=b"x", mime_type="image/png"), "edit")

        assert result.error == EDIT_FAILED_ERROR

    @pytest.mark.asyncio
    async def test_entity_not_found(self, make_gateway, reselector):
        gateway, _ = make_gateway(FakeModels(error=ENTITY_NOT_FOUND))

        result = await gateway.edit_image(ImagePayload(data=b"x", mime_type="image/png"), "edit")

        assert result.error == API_KEY_RESELECT_ERROR
        assert reselector.calls == 1


class TestGenerateImage:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("prompt", ["", "   ", "\n\t"])
    async def test_blank_prompt_makes_no_remote_call(self, make_gateway, prompt):
        models = FakeModels(images_response=images_response(b"jpeg"))
        gateway, factory = make_gateway(models)

        result = await gateway.generate_image(prompt, AspectRatio.SQUARE)

        assert result.error == HD_EMPTY_PROMPT_ERROR
        assert models.calls == []
        assert factory.api_keys == []

    @pytest.mark.asyncio
    async def test_unsupported_aspect_ratio_makes_no_remote_call(self, make_gateway):
        models = FakeModels(images_response=images_response(b"jpeg"))
        gateway, _ = make_gateway(models)

        result = await gateway.generate_image("a cat", "2:1")

        assert result.image_url is None
        assert "2:1" in result.error
        assert models.calls == []

    @pytest.mark.asyncio
    async def test_requests_one_jpeg_for_trimmed_prompt(self, make_gateway):
        models = FakeModels(images_response=images_response(b"jpeg-bytes"))
        gateway, _ = make_gateway(models)

        result = await gateway.generate_image("  a treehouse  ", "16:9")

        assert result.ok
        assert result.image_url.startswith("data:image/jpeg;base64,")
        kwargs = models.calls[0][1]
        assert kwargs["prompt"] == "a treehouse"
        assert kwargs["config"].number_of_images == 1
        assert kwargs["config"].output_mime_type == "image/jpeg"
        assert kwargs["config"].aspect_ratio == "16:9"

    @pytest.mark.asyncio
    async def test_missing_image_bytes_is_reported(self, make_gateway):
        gateway, _ = make_gateway(FakeModels(images_response=images_response(None)))

        result = await gateway.generate_image("a cat", AspectRatio.PORTRAIT)

        assert result.error == HD_NO_IMAGE_ERROR

    @pytest.mark.asyncio
    async def test_failure_hides_detail(self, make_gateway):
        gateway, _ = make_gateway(FakeModels(error=RuntimeError("internal stack detail")))

        result = await gateway.generate_image("a cat", AspectRatio.SQUARE)

        assert result.error == HD_FAILED_ERROR
        assert "internal stack detail" not in result.error

    @pytest.mark.asyncio
    async def test_entity_not_found_is_distinguishable(self, make_gateway, reselector):
        gateway, _ = make_gateway(FakeModels(error=ENTITY_NOT_FOUND))

        result = await gateway.generate_image("a cat", AspectRatio.SQUARE)

        assert result.error == HD_API_KEY_ERROR
        assert result.error.startswith("API key issue")
        assert result.error != HD_FAILED_ERROR
        assert reselector.calls == 1


class TestClientLifecycle:
    @pytest.mark.asyncio
    async def test_client_reused_for_same_key(self, make_gateway):
        gateway, factory = make_gateway(FakeModels(chunks=[text_chunk("ok")]))

        await gateway.send_chat_turn("one", [], "")
        await gateway.send_chat_turn("two", [], "")

        assert factory.api_keys == ["test-key"]
        assert not factory.clients[0].closed

    @pytest.mark.asyncio
    async def test_new_key_closes_previous_client(self, make_gateway, credentials):
        gateway, factory = make_gateway(FakeModels(chunks=[text_chunk("ok")]))
        await gateway.send_chat_turn("one", [], "")

        credentials.select("other-key")
        await gateway.send_chat_turn("two", [], "")

        assert factory.api_keys == ["test-key", "other-key"]
        assert factory.clients[0].closed
        assert not factory.clients[1].closed

    @pytest.mark.asyncio
    async def test_close_releases_client(self, make_gateway):
        models = FakeModels(images_response=images_response(b"jpeg"))
        gateway, factory = make_gateway(models)

        async with gateway:
            await gateway.generate_image("a cat", AspectRatio.SQUARE)

        assert factory.clients[0].closed
