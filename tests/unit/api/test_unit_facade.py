# tests/unit/api/test_unit_facade.py — v1
"""Tests for api/facade.py — applying outcomes to the state store."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from tokencount.api.facade import add_image_from_file, add_image_from_url, estimate
from tokencount.core.errors import ApiError
from tokencount.core.models import TokenCountResult
from tokencount.state.app_state import (
    AppStore,
    select_model,
    select_provider,
    update_image_url,
    update_input_text,
)


def _store(provider: str | None = "openai", model: str | None = "gpt-4", text: str = "") -> AppStore:
    store = AppStore()
    if provider:
        store.dispatch(select_provider, provider)
    if model:
        store.dispatch(select_model, model)
    store.dispatch(update_input_text, text)
    return store


class TestEstimate:
    @pytest.mark.asyncio
    async def test_success(self, settings, fake_tiktoken):
        store = _store(text="hello there")
        loading_seen: list[bool] = []
        store.subscribe(lambda s: loading_seen.append(s.is_loading))

        state = await estimate(store, settings)

        assert state.token_count == TokenCountResult(input_tokens=2, total_tokens=2)
        assert state.error is None
        assert state.is_loading is False
        assert True in loading_seen

    @pytest.mark.asyncio
    async def test_error_message_applied(self, settings):
        store = _store(text="")
        state = await estimate(store, settings)
        assert state.error == "Please enter text or add an image"
        assert state.token_count is None
        assert state.is_loading is False

    @pytest.mark.asyncio
    async def test_no_provider(self, settings):
        state = await estimate(_store(provider=None, model=None, text="x"), settings)
        assert state.error == "Please select a provider"

    @pytest.mark.asyncio
    async def test_no_model(self, settings):
        state = await estimate(_store(model=None, text="x"), settings)
        assert state.error == "Please select a model"

    @pytest.mark.asyncio
    async def test_vendor_error_is_surfaced(self, settings):
        failing = AsyncMock(side_effect=ApiError("Token counting failed: boom", status=500))
        with patch("tokencount.api.facade.count_tokens", failing):
            state = await estimate(_store("anthropic", "claude-3-haiku-20240307", "x"), settings)
        assert state.error == "Token counting failed: boom"
        assert state.is_loading is False

    @pytest.mark.asyncio
    async def test_unexpected_exception_clears_busy_flag(self, settings):
        exploding = AsyncMock(side_effect=RuntimeError("boom"))
        store = _store(text="x")
        with patch("tokencount.api.facade.count_tokens", exploding):
            with pytest.raises(RuntimeError, match="boom"):
                await estimate(store, settings)
        assert store.state.is_loading is False

    @pytest.mark.asyncio
    async def test_malformed_vendor_count_is_recorded(
        self, settings, vendor_server, make_vendor,
    ):
        vendor = make_vendor(body={"input_tokens": -3})
        store = _store("anthropic", "claude-3-haiku-20240307", "x")
        async with vendor_server(vendor.handle) as base_url:
            local = settings.model_copy(update={"anthropic_base_url": base_url})
            state = await estimate(store, local)
        assert "input_tokens" in (state.error or "")
        assert state.token_count is None
        assert state.is_loading is False

    @pytest.mark.asyncio
    async def test_unknown_provider(self, settings):
        state = await estimate(_store("cohere", "command", "x"), settings)
        assert state.error == "Unsupported provider: cohere"


class TestAddImages:
    @pytest.mark.asyncio
    async def test_from_url(self, settings, vendor_server, make_vendor):
        vendor = make_vendor(raw=b"GIF89a", content_type="image/gif")
        store = _store()
        async with vendor_server(vendor.handle) as base_url:
            store.dispatch(update_image_url, f"{base_url}/a.gif")
            state = await add_image_from_url(store, settings)
        assert len(state.input_images) == 1
        assert state.input_images[0].media_type == "image/gif"
        assert state.image_url == ""
        assert state.is_loading is False

    @pytest.mark.asyncio
    async def test_from_url_timeout_uses_settings_budget(
        self, settings, vendor_server, make_vendor,
    ):
        vendor = make_vendor(raw=b"GIF89a", content_type="image/gif", delay=0.5)
        store = _store()
        fast = settings.model_copy(update={"request_timeout_s": 0.05})
        async with vendor_server(vendor.handle) as base_url:
            store.dispatch(update_image_url, f"{base_url}/slow.gif")
            state = await add_image_from_url(store, fast)
        assert state.input_images == ()
        assert "timed out" in (state.error or "")
        assert state.is_loading is False

    @pytest.mark.asyncio
    async def test_from_file_unexpected_exception_clears_busy_flag(
        self, settings, tmp_path: Path,
    ):
        exploding = AsyncMock(side_effect=RuntimeError("disk on fire"))
        store = _store()
        with patch("tokencount.api.facade.convert_file_to_base64", exploding):
            with pytest.raises(RuntimeError):
                await add_image_from_file(store, tmp_path / "a.png", settings=settings)
        assert store.state.is_loading is False

    @pytest.mark.asyncio
    async def test_from_url_requires_url(self, settings):
        state = await add_image_from_url(_store(), settings)
        assert state.error == "Please enter an image URL"

    @pytest.mark.asyncio
    async def test_from_file(self, settings, tmp_path: Path):
        path = tmp_path / "a.png"
        path.write_bytes(b"\x89PNG")
        state = await add_image_from_file(_store(), path, settings=settings)
        assert len(state.input_images) == 1
        assert state.error is None

    @pytest.mark.asyncio
    async def test_from_file_rejects_type(self, settings, tmp_path: Path):
        path = tmp_path / "a.txt"
        path.write_text("nope")
        state = await add_image_from_file(_store(), path, settings=settings)
        assert state.input_images == ()
        assert "Unsupported file type" in (state.error or "")
        assert state.is_loading is False
