# src/counting/adapters/openai_counter.py — v1
"""OpenAI token counter computed locally.

Text is encoded with tiktoken; images are priced with a size-tiered
estimate because the vendor's image formula is not published. No network
call is made and no credential is required.
"""

from __future__ import annotations

import logging
from typing import Any

from tokencount.core.errors import (
    MissingContentError,
    TokenizerError,
    UnsupportedContentError,
)
from tokencount.core.messages import message
from tokencount.core.models import ImageData, TokenCountRequest, TokenCountResult
from tokencount.counting.base_counter import BaseTokenCounter
from tokencount.counting.tokenizer import count_text_tokens

logger = logging.getLogger(__name__)

# Models accepting image input, matched by substring
_VISION_MARKERS = ("gpt-4o", "gpt-4")

IMAGE_BASE_TOKENS = 85
BASE64_DECODE_RATIO = 0.75

# (estimated decoded bytes strictly above, addend), largest first
_IMAGE_SIZE_TIERS: tuple[tuple[int, int], ...] = (
    (1024 * 1024, 255),
    (512 * 1024, 170),
)
_IMAGE_SMALLEST_ADDEND = 85


def estimate_image_tokens(image: ImageData) -> int:
    """Approximate token cost of one image from its base64 payload size."""
    estimated_size = len(image.data) * BASE64_DECODE_RATIO
    addend = _IMAGE_SMALLEST_ADDEND
    for threshold, tier_addend in _IMAGE_SIZE_TIERS:
        if estimated_size > threshold:
            addend = tier_addend
            break
    return IMAGE_BASE_TOKENS + addend


class OpenAITokenCounter(BaseTokenCounter):
    """Local counter for OpenAI GPT models."""

    def __init__(self, locale: str = "en", **kwargs: Any) -> None:
        self._locale = locale

    async def count(self, request: TokenCountRequest) -> TokenCountResult:
        if not request.has_text and not request.has_images:
            raise MissingContentError(
                message("missing_content", self._locale), provider=self.provider_name,
            )

        if request.has_images and not self.supports_vision(request.model):
            raise UnsupportedContentError(
                message("vision_unsupported", self._locale),
                provider=self.provider_name,
            )

        total = 0
        if request.has_text:
            total += self._count_text(request.text or "", request.model)

        if request.has_images:
            image_tokens = 0
            for i, image in enumerate(request.images, start=1):
                tokens = estimate_image_tokens(image)
                logger.debug("Image %d: %d tokens (estimated)", i, tokens)
                image_tokens += tokens
            total += image_tokens

        logger.info("Total tokens for model %s: %d", request.model, total)
        return TokenCountResult(input_tokens=total, total_tokens=total)

    def supports_vision(self, model: str) -> bool:
        return any(marker in model for marker in _VISION_MARKERS)

    @property
    def is_configured(self) -> bool:
        return True

    @property
    def provider_name(self) -> str:
        return "openai"

    def _count_text(self, text: str, model: str) -> int:
        try:
            tokens, encoding_name = count_text_tokens(text, model)
        except Exception as e:
            logger.error("Error encoding text: %s", e)
            raise TokenizerError(
                message("text_count_failed", self._locale, detail=str(e)),
                provider=self.provider_name,
            ) from e
        logger.debug("Text tokens: %d (encoding: %s)", tokens, encoding_name)
        return tokens
