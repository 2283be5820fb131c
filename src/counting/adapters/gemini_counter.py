# src/counting/adapters/gemini_counter.py — v1
"""Google Gemini token counter using the per-model countTokens endpoint.

The credential travels as the ``key`` query parameter (vendor convention).
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

logger = logging.getLogger(__name__)


class GeminiTokenCounter(BaseTokenCounter):
    """Counter for Google Gemini models."""

    def __init__(
        self,
        api_key: str = "",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout_s: float = 30.0,
        locale: str = "en",
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout_s = timeout_s
        self._locale = locale
        self._session = session

    async def count(self, request: TokenCountRequest) -> TokenCountResult:
        parts = self.build_parts(request)
        if not parts:
            raise MissingContentError(
                message("missing_content", self._locale), provider=self.provider_name,
            )
        if not self._api_key:
            logger.error("Gemini API key is not configured")
            raise ConfigurationError(
                message("missing_api_key", self._locale, provider="Gemini"),
                provider=self.provider_name,
            )

        logger.info("Counting tokens: %d parts, model=%s", len(parts), request.model)
        data = await post_json(
            f"{self._base_url}/models/{request.model}:countTokens",
            {"contents": [{"parts": parts}]},
            provider=self.provider_name,
            timeout_s=self._timeout_s,
            headers={"content-type": "application/json"},
            params={"key": self._api_key},
            session=self._session,
            locale=self._locale,
        )
        tokens = read_token_count(
            data, "totalTokens", provider=self.provider_name, locale=self._locale,
        )
        return TokenCountResult(input_tokens=tokens, total_tokens=tokens)

    def supports_vision(self, model: str) -> bool:
        return True

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    @property
    def provider_name(self) -> str:
        return "gemini"

    @staticmethod
    def build_parts(request: TokenCountRequest) -> list[dict[str, Any]]:
        """Build ordered parts: text first, then one inline-data part per image."""
        parts: list[dict[str, Any]] = []
        if request.has_text:
            parts.append({"text": request.text})
        for image in request.images:
            parts.append(
                {"inlineData": {"mimeType": image.media_type, "data": image.data}}
            )
        return parts
