"""Tests for the image editor, HD generator and navigation shell."""
import asyncio

import pytest
from conftest import ScriptedGateway

from bhaii_studio.config import (
    EDIT_FAILED_ERROR,
    EDIT_MISSING_INPUT_ERROR,
    HD_API_KEY_ERROR,
    HD_GENERIC_FAILURE_ERROR,
    HD_MISSING_PROMPT_ERROR,
    HD_SELECT_KEY_FIRST_ERROR,
    HD_STATUS_DONE,
    HD_STATUS_KEY_SELECTED,
    HD_STATUS_NEEDS_KEY,
    HD_STATUS_READY,
    INVALID_IMAGE_FILE_ERROR,
)
from bhaii_studio.features import HDImageGeneratorView, ImageEditorView
from bhaii_studio.gateway import CredentialSource
from bhaii_studio.models import AspectRatio, ImagePayload, ImageResult
from bhaii_studio.navigation import FEATURE_CARDS, NavigationShell, View

PNG = ImagePayload(data=b"\x89PNG", mime_type="image/png")


class BlockingImageGateway(ScriptedGateway):
    """Gateway whose image generation waits until released."""

    def __init__(self):
        super().__init__()
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def generate_image(self, prompt, aspect_ratio="1:1"):
        self.generate_calls.append((prompt, aspect_ratio))
        self.started.set()
        await self.release.wait()
        return ImageResult(image_url="data:image/jpeg;base64,AA==")


class TestImageEditorView:
    def test_rejects_non_image(self):
        editor = ImageEditorView(ScriptedGateway())

        assert editor.select_image(ImagePayload(data=b"%PDF", mime_type="application/pdf")) is False
        assert editor.selected is None
        assert editor.error == INVALID_IMAGE_FILE_ERROR

    def test_select_file_guesses_mime_type(self, tmp_path):
        path = tmp_path / "photo.png"
        path.write_bytes(b"\x89PNG")
        editor = ImageEditorView(ScriptedGateway())

        assert editor.select_file(path)
        assert editor.selected.mime_type == "image/png"
        assert editor.selected_name == "photo.png"

    def test_select_missing_file(self, tmp_path):
        editor = ImageEditorView(ScriptedGateway())

        assert editor.select_file(tmp_path / "missing.png") is False
        assert editor.error == INVALID_IMAGE_FILE_ERROR

    def test_can_edit_needs_image_and_prompt(self):
        editor = ImageEditorView(ScriptedGateway())
        assert not editor.can_edit

        editor.select_image(PNG)
        assert not editor.can_edit

        editor.prompt = "Add a retro filter"
        assert editor.can_edit

    @pytest.mark.asyncio
    async def test_edit_without_input_makes_no_call(self):
        gateway = ScriptedGateway()
        editor = ImageEditorView(gateway)
        editor.prompt = "something"

        assert await editor.edit() is None
        assert editor.error == EDIT_MISSING_INPUT_ERROR
        assert gateway.edit_calls == []

    @pytest.mark.asyncio
    async def test_successful_edit(self):
        gateway = ScriptedGateway()
        editor = ImageEditorView(gateway)
        editor.select_image(PNG)
        editor.prompt = "Remove the person in the background"

        result = await editor.edit()

        assert result.ok
        assert editor.edited_image_url == "data:image/png;base64,AA=="
        assert editor.error is None
        assert not editor.busy
        assert gateway.edit_calls == [(PNG, "Remove the person in the background")]

    @pytest.mark.asyncio
    async def test_failed_edit_shows_error(self):
        gateway = ScriptedGateway(image_results=[ImageResult(error="No edited image received.")])
        editor = ImageEditorView(gateway)
        editor.select_image(PNG)
        editor.prompt = "edit"

        await editor.edit()

        assert editor.edited_image_url is None
        assert editor.error == "No edited image received."

    @pytest.mark.asyncio
    async def test_empty_result_uses_generic_error(self):
        editor = ImageEditorView(ScriptedGateway(image_results=[ImageResult()]))
        editor.select_image(PNG)
        editor.prompt = "edit"

        await editor.edit()

        assert editor.error == EDIT_FAILED_ERROR

    def test_clear(self):
        editor = ImageEditorView(ScriptedGateway())
        editor.select_image(PNG, name="a.png")
        editor.prompt = "edit"

        editor.clear()

        assert editor.selected is None
        assert editor.prompt == ""
        assert editor.error is None


class TestHDImageGeneratorView:
    def test_initial_status_without_key(self):
        view = HDImageGeneratorView(ScriptedGateway(), CredentialSource(env_vars=()))

        assert view.api_key_selected is False
        assert view.status == HD_STATUS_NEEDS_KEY

    def test_initial_status_with_key(self, credentials):
        view = HDImageGeneratorView(ScriptedGateway(), credentials)

        assert view.api_key_selected is True
        assert view.status == HD_STATUS_READY

    def test_select_api_key(self):
        source = CredentialSource(env_vars=())
        view = HDImageGeneratorView(ScriptedGateway(), source)

        view.select_api_key("new-key")

        assert view.api_key_selected
        assert view.status == HD_STATUS_KEY_SELECTED
        assert source.resolve() == "new-key"

    @pytest.mark.asyncio
    async def test_requires_key_first(self):
        gateway = ScriptedGateway()
        view = HDImageGeneratorView(gateway, CredentialSource(env_vars=()))
        view.prompt = "a cat"

        assert await view.generate() is None
        assert view.error == HD_SELECT_KEY_FIRST_ERROR
        assert gateway.generate_calls == []

    @pytest.mark.asyncio
    async def test_requires_prompt(self, credentials):
        gateway = ScriptedGateway()
        view = HDImageGeneratorView(gateway, credentials)
        view.prompt = "   "

        assert await view.generate() is None
        assert view.error == HD_MISSING_PROMPT_ERROR
        assert gateway.generate_calls == []

    @pytest.mark.asyncio
    async def test_successful_generation(self, credentials):
        gateway = ScriptedGateway()
        view = HDImageGeneratorView(gateway, credentials)
        view.prompt = "  a treehouse  "
        view.aspect_ratio = AspectRatio.WIDE

        await view.generate()

        assert gateway.generate_calls == [("a treehouse", AspectRatio.WIDE)]
        assert view.generated_image_url == "data:image/jpeg;base64,AA=="
        assert view.status == HD_STATUS_DONE

    @pytest.mark.asyncio
    async def test_api_key_issue_resets_selection(self, credentials):
        gateway = ScriptedGateway(image_results=[ImageResult(error=HD_API_KEY_ERROR)])
        view = HDImageGeneratorView(gateway, credentials)
        view.prompt = "a cat"

        await view.generate()

        assert view.api_key_selected is False
        assert view.error == HD_API_KEY_ERROR
        assert view.status == HD_API_KEY_ERROR

    @pytest.mark.asyncio
    async def test_other_errors_keep_selection(self, credentials):
        gateway = ScriptedGateway(image_results=[ImageResult(error="Failed to generate HD image.")])
        view = HDImageGeneratorView(gateway, credentials)
        view.prompt = "a cat"

        await view.generate()

        assert view.api_key_selected is True
        assert view.error == "Failed to generate HD image."

    @pytest.mark.asyncio
    async def test_empty_result_uses_generic_error(self, credentials):
        view = HDImageGeneratorView(ScriptedGateway(image_results=[ImageResult()]), credentials)
        view.prompt = "a cat"

        await view.generate()

        assert view.error == HD_GENERIC_FAILURE_ERROR

    @pytest.mark.asyncio
    async def test_clear_during_generation_keeps_busy(self, credentials):
        gateway = BlockingImageGateway()
        view = HDImageGeneratorView(gateway, credentials)
        view.prompt = "a cat"

        first = asyncio.create_task(view.generate())
        await gateway.started.wait()
        view.clear()
        view.prompt = "a dog"

        assert view.busy
        assert await view.generate() is None

        gateway.release.set()
        await first

        assert len(gateway.generate_calls) == 1
        assert not view.busy

    def test_clear_restores_defaults(self, credentials):
        view = HDImageGeneratorView(ScriptedGateway(), credentials)
        view.prompt = "x"
        view.aspect_ratio = AspectRatio.TALL

        view.clear()

        assert view.prompt == ""
        assert view.aspect_ratio == AspectRatio.SQUARE
        assert view.status == HD_STATUS_READY


class TestNavigationShell:
    def test_starts_at_home(self):
        assert NavigationShell().active == View.HOME

    def test_navigate_by_name(self):
        shell = NavigationShell()
        assert shell.navigate("hd-image-generator") == View.HD_IMAGE

    def test_unknown_view_falls_back_to_home(self):
        shell = NavigationShell(View.CHAT)
        assert shell.navigate("settings") == View.HOME

    def test_listeners_fire_on_change_only(self):
        shell = NavigationShell()
        seen = []
        shell.add_listener(seen.append)

        shell.navigate(View.CHAT)
        shell.navigate(View.CHAT)
        shell.navigate(View.HOME)

        assert seen == [View.CHAT, View.HOME]

    def test_every_feature_card_targets_a_feature(self):
        targets = [card.target for card in FEATURE_CARDS]
        assert len(set(targets)) == len(targets)
        assert View.HOME not in targets
