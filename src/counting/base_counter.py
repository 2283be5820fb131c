# src/counting/base_counter.py — v1
"""Abstract token counter interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from tokencount.core.models import TokenCountRequest, TokenCountResult


class BaseTokenCounter(ABC):
    """Unified interface for all per-provider counters."""

    @abstractmethod
    async def count(self, request: TokenCountRequest) -> TokenCountResult:
        """Count the input tokens of ``request`` for this provider.

        Raises:
            MissingContentError: If the request has no text and no images.
            TokenCountError: Any other adapter-specific failure.
        """

    @abstractmethod
    def supports_vision(self, model: str) -> bool:
        """Whether ``model`` accepts image content."""

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """Whether the credentials this counter needs are present."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier (anthropic, openai, gemini)."""
