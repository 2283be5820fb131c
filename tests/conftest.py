# tests/conftest.py — v1
"""Shared test fixtures.

Vendor endpoints are simulated by an aiohttp TestServer on localhost and
tiktoken is replaced by a recording fake, so no test touches the network.
"""

from __future__ import annotations

import asyncio
import base64
from contextlib import asynccontextmanager
from typing import Any

import pytest
import tiktoken
from aiohttp import web
from aiohttp.test_utils import TestServer

from tokencount.config.settings import Settings
from tokencount.core.models import ImageData


# === FIXTURES: Settings ===


@pytest.fixture
def settings() -> Settings:
    """Settings with test credentials and no .env lookup."""
    return Settings(
        _env_file=None,
        anthropic_api_key="test-anthropic-key",
        gemini_api_key="test-gemini-key",
        openai_api_key="",
        request_timeout_s=5.0,
        locale="en",
    )


# === FIXTURES: Sample data ===


@pytest.fixture
def small_image() -> ImageData:
    """Tiny PNG-ish payload."""
    return ImageData(
        data=base64.b64encode(b"\x89PNG\r\n\x1a\nFAKE").decode("ascii"),
        media_type="image/png",
    )


@pytest.fixture
def large_image() -> ImageData:
    """Roughly 2 MB image payload."""
    return ImageData(
        data=base64.b64encode(b"\x00" * (2 * 1024 * 1024)).decode("ascii"),
        media_type="image/jpeg",
    )


# === FIXTURES: Fake vendor server ===


class RecordingVendor:
    """Request recorder returning a canned JSON response."""

    def __init__(
        self,
        body: Any = None,
        status: int = 200,
        delay: float = 0.0,
        content_type: str = "application/json",
        raw: bytes | None = None,
    ) -> None:
        self.body = body if body is not None else {}
        self.status = status
        self.delay = delay
        self.content_type = content_type
        self.raw = raw
        self.requests: list[dict[str, Any]] = []

    async def handle(self, request: web.Request) -> web.StreamResponse:
        payload = await request.json() if request.body_exists else None
        self.requests.append(
            {
                "method": request.method,
                "path": request.path,
                "query": dict(request.query),
                "headers": request.headers.copy(),
                "json": payload,
            }
        )
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.raw is not None:
            return web.Response(
                body=self.raw, status=self.status, content_type=self.content_type,
            )
        return web.json_response(self.body, status=self.status)


@pytest.fixture
def make_vendor() -> type[RecordingVendor]:
    """RecordingVendor class, for building per-test handlers."""
    return RecordingVendor


@pytest.fixture
def vendor_server():
    """Factory: ``async with vendor_server(handler) as base_url``."""

    @asynccontextmanager
    async def _serve(handler):
        app = web.Application(client_max_size=64 * 1024 * 1024)
        app.router.add_route("*", "/{tail:.*}", handler)
        server = TestServer(app)
        await server.start_server()
        try:
            yield f"http://{server.host}:{server.port}"
        finally:
            await server.close()

    return _serve


# === FIXTURES: Fake tokenizer ===


class FakeEncoding:
    """Whitespace tokenizer standing in for a tiktoken Encoding."""

    def __init__(self, name: str, fail: bool = False) -> None:
        self.name = name
        self.fail = fail

    def encode(self, text: str) -> list[int]:
        if self.fail:
            raise RuntimeError("encoder exploded")
        return list(range(len(text.split())))


@pytest.fixture
def fake_tiktoken(monkeypatch) -> list[str]:
    """Patch tiktoken.get_encoding; returns the list of requested profiles."""
    requested: list[str] = []

    def _get_encoding(name: str) -> FakeEncoding:
        requested.append(name)
        return FakeEncoding(name)

    monkeypatch.setattr(tiktoken, "get_encoding", _get_encoding)
    return requested


@pytest.fixture
def failing_tiktoken(monkeypatch) -> None:
    """Patch tiktoken.get_encoding with an encoder that always raises."""
    monkeypatch.setattr(tiktoken, "get_encoding", lambda name: FakeEncoding(name, fail=True))
