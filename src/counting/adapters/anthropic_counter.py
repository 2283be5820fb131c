# src/counting/adapters/anthropic_counter.py — v1
"""Anthropic token counter using the Messages count_tokens endpoint.

Sends all content as a single user message and reports the vendor's
``input_tokens`` as both input and total (no output tokens are requested).
The image acquisition companions live in ``tokencount.images.loader`` and
are re-exported here.
"""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from tokencount.core.errors import ConfigurationError, MissingContentError
from tokencount.core.messages import message
from tokencount.core.models import TokenCountRequest, TokenCountResult
from tokencount.counting.base_counter import BaseTokenCounter
from tokencount.counting.http import post_json, read_token_count
from tokencount.images.loader import convert_file_to_base64, fetch_image_as_base64

__all__ = ["AnthropicTokenCounter", "convert_file_to_base64", "fetch_image_as_base64"]

logger = logging.getLogger(__name__)

COUNT_TOKENS_PATH = "/v1/messages/count_tokens"


class AnthropicTokenCounter(BaseTokenCounter):
    """Counter for Anthropic Claude models."""

    def __init__(
        self,
        api_key: str = "",
        base_url: str = "https://api.anthropic.com",
        api_version: str = "2023-06-01",
        timeout_s: float = 30.0,
        locale: str = "en",
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._api_version = api_version
        self._timeout_s = timeout_s
        self._locale = locale
        self._session = session

    async def count(self, request: TokenCountRequest) -> TokenCountResult:
        content = self.build_content(request)
        if not content:
            raise MissingContentError(
                message("missing_content", self._locale), provider=self.provider_name,
            )
        if not self._api_key:
            logger.error("Anthropic API key is not configured")
            raise ConfigurationError(
                message("missing_api_key", self._locale, provider="Anthropic"),
                provider=self.provider_name,
            )

        logger.info(
            "Counting tokens: %d content blocks, model=%s", len(content), request.model,
        )
        data = await post_json(
            f"{self._base_url}{COUNT_TOKENS_PATH}",
            {
                "model": request.model,
                "messages": [{"role": "user", "content": content}],
            },
            provider=self.provider_name,
            timeout_s=self._timeout_s,
            headers=self._headers(),
            session=self._session,
            locale=self._locale,
        )
        tokens = read_token_count(
            data, "input_tokens", provider=self.provider_name, locale=self._locale,
        )
        return TokenCountResult(input_tokens=tokens, total_tokens=tokens)

    def supports_vision(self, model: str) -> bool:
        return True

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    @property
    def provider_name(self) -> str:
        return "anthropic"

    # --- Internal helpers ---

    @staticmethod
    def build_content(request: TokenCountRequest) -> list[dict[str, Any]]:
        """Build ordered content blocks: text first, then one block per image."""
        content: list[dict[str, Any]] = []
        if request.has_text:
            content.append({"type": "text", "text": request.text})
        for i, image in enumerate(request.images, start=1):
            logger.debug(
                "Image %d: type=%s, data length=%d", i, image.media_type, len(image.data),
            )
            content.append(
                {
                    "type": "image",
                    "source": {
                        "type": "base64",
                        "media_type": image.media_type,
                        "data": image.data,
                    },
                }
            )
        return content

    def _headers(self) -> dict[str, str]:
        return {
            "content-type": "application/json",
            "x-api-key": self._api_key,
            "anthropic-version": self._api_version,
            "anthropic-dangerous-direct-browser-access": "true",
        }
